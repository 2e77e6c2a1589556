"""
State Mirror
Client-local cache of the daemon-authoritative settings and profile lists
"""
from typing import List, Optional

from notifications import StateNotifier, Subscriptions
from plugin_logging import logger
from power_core import TccProfile, TccSettings, copy_profiles
from push_channel import PushChannel


class StateMirror:
    """
    Last known settings, custom profiles and default profiles.

    Stored objects are only ever replaced, never mutated, and every accessor
    hands out a deep copy.
    """

    def __init__(self, channel: PushChannel, notifier: StateNotifier):
        self.channel = channel
        self.notifier = notifier
        self._settings: Optional[TccSettings] = None
        self._custom_profiles: List[TccProfile] = []
        self._default_profiles: List[TccProfile] = []

        self._subscriptions = Subscriptions()
        self.refresh()
        self._subscriptions.add(channel.custom_profiles.subscribe(self._on_custom_profiles, replay=False))
        self._subscriptions.add(channel.default_profiles.subscribe(self._on_default_profiles, replay=False))

    def _on_custom_profiles(self, profiles: Optional[List[TccProfile]]) -> None:
        self._custom_profiles = copy_profiles(profiles)

    def _on_default_profiles(self, profiles: Optional[List[TccProfile]]) -> None:
        self._default_profiles = copy_profiles(profiles)

    def refresh(self) -> None:
        """Pull the channel's latest values and republish settings"""
        try:
            settings = self.channel.settings.value
            self._settings = settings.copy() if settings is not None else None
            self._custom_profiles = copy_profiles(self.channel.custom_profiles.value)
            self._default_profiles = copy_profiles(self.channel.default_profiles.value)
        except Exception as e:
            logger.error(f"Failed to refresh state mirror: {e}")
        self.notifier.settings.publish(self.current_settings())

    def current_settings(self) -> Optional[TccSettings]:
        return self._settings.copy() if self._settings is not None else None

    def custom_profiles(self) -> List[TccProfile]:
        return copy_profiles(self._custom_profiles)

    def default_profiles(self) -> List[TccProfile]:
        return copy_profiles(self._default_profiles)

    def all_profiles(self) -> List[TccProfile]:
        return self.default_profiles() + self.custom_profiles()

    def close(self) -> None:
        self._subscriptions.dispose()
