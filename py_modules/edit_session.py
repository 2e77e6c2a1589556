"""
Edit Session
Holds the single in-progress draft of a custom profile
"""
from typing import Optional

from notifications import StateNotifier
from plugin_logging import logger
from power_core import TccProfile, same_content
from profile_catalog import index_of
from state_mirror import StateMirror


class EditSession:
    """
    Idle (no draft) or editing (draft copied from a custom profile).

    The saved counterpart of the draft is looked up by the name it was copied
    from every time it is needed, so a refreshed or reordered custom list
    never points the session at the wrong profile.
    """

    def __init__(self, mirror: StateMirror, notifier: StateNotifier):
        self.mirror = mirror
        self.notifier = notifier
        self._draft: Optional[TccProfile] = None
        self._origin_name: Optional[str] = None
        self._origin_index: int = -1

    @property
    def is_editing(self) -> bool:
        return self._draft is not None

    @property
    def origin_name(self) -> Optional[str]:
        return self._origin_name

    @property
    def origin_index(self) -> int:
        """Index the draft was copied from when the session began"""
        return self._origin_index

    def _clear(self) -> None:
        self._draft = None
        self._origin_name = None
        self._origin_index = -1
        self.notifier.editing_profile.publish(None)

    def begin(self, custom_profile_name: Optional[str]) -> bool:
        """
        Set the profile to edit, overwriting any current changes.

        Args:
            custom_profile_name: custom profile to copy, None ends editing

        Returns:
            False if the name is not a custom profile, True otherwise
        """
        if custom_profile_name is None:
            self._clear()
            return True

        custom_profiles = self.mirror.custom_profiles()
        index = index_of(custom_profiles, custom_profile_name)
        if index == -1:
            logger.warning(f"Cannot edit unknown custom profile: {custom_profile_name}")
            self._clear()
            return False

        self._origin_index = index
        self._origin_name = custom_profile_name
        self._draft = custom_profiles[index]
        self.notifier.editing_profile.publish(self._draft)
        return True

    def current_draft(self) -> Optional[TccProfile]:
        """The draft itself, not a copy"""
        return self._draft

    def update_draft(self, profile: TccProfile) -> bool:
        """Replace the draft's content (for callers that cannot mutate it in place)"""
        if self._draft is None:
            return False
        self._draft = profile.copy()
        self.notifier.editing_profile.publish(self._draft)
        return True

    def saved_profile(self) -> Optional[TccProfile]:
        if self._origin_name is None:
            return None
        custom_profiles = self.mirror.custom_profiles()
        index = index_of(custom_profiles, self._origin_name)
        return custom_profiles[index] if index != -1 else None

    def has_changes(self) -> bool:
        """
        Checks if the draft differs from the currently saved profile

        Returns:
            True if there are changes (or the saved profile has vanished),
            False if there are none or nothing is being edited
        """
        if self._draft is None:
            return False
        return not same_content(self._draft, self.saved_profile())

    def rebind(self, committed_name: str) -> None:
        """Follow the draft to the name it was committed under"""
        self._origin_name = committed_name
        self._origin_index = index_of(self.mirror.custom_profiles(), committed_name)
