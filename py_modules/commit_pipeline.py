"""
Change Staging and Commit Pipeline
Turns user intents into staged payloads, escalates, and refreshes the mirror
"""
import asyncio
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from edit_session import EditSession
from escalation import EscalationExecutor, EscalationOutcome
from plugin_enums import CommitStatus
from plugin_logging import logger
from power_core import TccProfile, TccSettings
from profile_catalog import ProfileCatalog, index_of
from state_mirror import StateMirror


@dataclass
class CommitResult:
    """Tagged outcome of a commit; truthy only when the change was applied"""
    status: CommitStatus
    message: str = ""

    def __bool__(self) -> bool:
        return self.status is CommitStatus.APPLIED

    def to_dict(self):
        return {"success": bool(self), "status": self.status.value, "message": self.message}


def _applied() -> CommitResult:
    return CommitResult(CommitStatus.APPLIED)


def _from_outcome(outcome: EscalationOutcome) -> CommitResult:
    if outcome:
        return _applied()
    return CommitResult(CommitStatus.ESCALATION_FAILED, outcome.error)


class CommitPipeline:
    """Commit intents; none of them raise past this boundary"""

    def __init__(self, mirror: StateMirror, catalog: ProfileCatalog,
                 session: EditSession, executor: EscalationExecutor):
        self.mirror = mirror
        self.catalog = catalog
        self.session = session
        self.executor = executor
        self._pending: Set[asyncio.Task] = set()

    # Escalation flavors

    def _escalate_blocking(self, settings: Optional[TccSettings] = None,
                           profiles: Optional[List[TccProfile]] = None) -> CommitResult:
        outcome = self.executor.execute_blocking(settings=settings, profiles=profiles)
        if outcome:
            self.mirror.refresh()
        return _from_outcome(outcome)

    async def _escalate_and_refresh(self, settings, profiles) -> CommitResult:
        outcome = await self.executor.execute_async(settings=settings, profiles=profiles)
        if outcome:
            self.mirror.refresh()
        return _from_outcome(outcome)

    async def _escalate_async(self, settings: Optional[TccSettings] = None,
                              profiles: Optional[List[TccProfile]] = None) -> CommitResult:
        # The helper and its refresh run to completion even if the caller stops awaiting
        task = asyncio.ensure_future(self._escalate_and_refresh(settings, profiles))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return await asyncio.shield(task)

    # Intents

    def assign_profile(self, profile_name: str, state_id: str) -> CommitResult:
        """Activate profile_name for state_id (blocking); the mirror is refreshed regardless of outcome"""
        try:
            settings = self.mirror.current_settings()
            if settings is None:
                return CommitResult(CommitStatus.UNAVAILABLE, "no settings received from the daemon yet")
            if self.catalog.find_by_name(profile_name) is None:
                return CommitResult(CommitStatus.NOT_FOUND, f"profile '{profile_name}' does not exist")

            settings.state_map[state_id] = profile_name
            outcome = self.executor.execute_blocking(settings=settings)
            self.mirror.refresh()
            return _from_outcome(outcome)
        except Exception as e:
            logger.error(f"Failed to assign profile {profile_name} to {state_id}: {e}")
            self.mirror.refresh()
            return CommitResult(CommitStatus.ESCALATION_FAILED, str(e))

    async def copy_profile(self, profile_name: str, new_profile_name: str) -> CommitResult:
        """Clone any profile into a new custom profile"""
        try:
            profile_to_copy = self.catalog.find_by_name(profile_name)
            if profile_to_copy is None:
                return CommitResult(CommitStatus.NOT_FOUND, f"profile '{profile_name}' does not exist")
            if self.catalog.find_by_name(new_profile_name) is not None:
                return CommitResult(CommitStatus.NAME_COLLISION, f"profile '{new_profile_name}' already exists")

            profile_to_copy.name = new_profile_name
            new_profile_list = self.mirror.custom_profiles() + [profile_to_copy]
            return await self._escalate_async(profiles=new_profile_list)
        except Exception as e:
            logger.error(f"Failed to copy profile {profile_name}: {e}")
            return CommitResult(CommitStatus.ESCALATION_FAILED, str(e))

    async def delete_custom_profile(self, profile_name: str) -> CommitResult:
        try:
            custom_profiles = self.mirror.custom_profiles()
            new_profile_list = [p for p in custom_profiles if p.name != profile_name]
            if len(new_profile_list) == len(custom_profiles):
                return CommitResult(CommitStatus.NOT_FOUND, f"custom profile '{profile_name}' does not exist")
            return await self._escalate_async(profiles=new_profile_list)
        except Exception as e:
            logger.error(f"Failed to delete profile {profile_name}: {e}")
            return CommitResult(CommitStatus.ESCALATION_FAILED, str(e))

    async def write_profile(self, current_profile_name: str, profile: TccProfile,
                            states: Optional[Iterable[str]] = None) -> CommitResult:
        """
        Overwrite a custom profile and optionally assign it to states.

        The overwrite is refused (and nothing is escalated) if current_profile_name
        is not a custom profile or if the new name belongs to a built-in or to
        another custom profile. Keeping the same name is allowed.
        """
        try:
            custom_profiles = self.mirror.custom_profiles()
            profile_index = index_of(custom_profiles, current_profile_name)
            if profile_index == -1:
                return CommitResult(CommitStatus.NOT_FOUND,
                                    f"custom profile '{current_profile_name}' does not exist")
            if self.catalog.name_in_use(profile.name, exclude_custom_index=profile_index):
                return CommitResult(CommitStatus.NAME_COLLISION, f"profile '{profile.name}' already exists")

            settings = self.mirror.current_settings()
            if settings is None:
                return CommitResult(CommitStatus.UNAVAILABLE, "no settings received from the daemon yet")

            custom_profiles[profile_index] = profile.copy()
            for state_id in states or []:
                settings.state_map[state_id] = profile.name

            return await self._escalate_async(settings=settings, profiles=custom_profiles)
        except Exception as e:
            logger.error(f"Failed to write profile {current_profile_name}: {e}")
            return CommitResult(CommitStatus.ESCALATION_FAILED, str(e))

    async def save_settings(self) -> CommitResult:
        """Resubmit the current settings together with the unchanged custom profiles"""
        try:
            settings = self.mirror.current_settings()
            if settings is None:
                return CommitResult(CommitStatus.UNAVAILABLE, "no settings received from the daemon yet")
            return await self._escalate_async(settings=settings, profiles=self.mirror.custom_profiles())
        except Exception as e:
            logger.error(f"Failed to save settings: {e}")
            return CommitResult(CommitStatus.ESCALATION_FAILED, str(e))

    def commit_editing_profile(self) -> CommitResult:
        """Write the edit session's draft (blocking)"""
        try:
            if not self.session.has_changes():
                return CommitResult(CommitStatus.NO_CHANGES)

            draft = self.session.current_draft()
            custom_profiles = self.mirror.custom_profiles()
            index = index_of(custom_profiles, self.session.origin_name)
            if index == -1:
                return CommitResult(CommitStatus.STALE_DRAFT,
                                    f"profile '{self.session.origin_name}' no longer exists")
            if self.catalog.name_in_use(draft.name, exclude_custom_index=index):
                return CommitResult(CommitStatus.NAME_COLLISION, f"profile '{draft.name}' already exists")

            custom_profiles[index] = draft.copy()
            result = self._escalate_blocking(profiles=custom_profiles)
            if result:
                self.session.rebind(draft.name)
            return result
        except Exception as e:
            logger.error(f"Failed to commit edited profile: {e}")
            return CommitResult(CommitStatus.ESCALATION_FAILED, str(e))
