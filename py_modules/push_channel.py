"""
Daemon Push Channel
Latest-value view of daemon-side state, fed by whatever transport delivers it
"""
from typing import List, Optional

from notifications import ObservableValue
from plugin_logging import debug_log
from power_core import TccProfile, TccSettings, copy_profiles


class PushChannel:
    """
    Holds the most recent settings and profile lists pushed by the daemon.

    The transport (D-Bus client, test double, ...) calls the publish methods;
    consumers only read the latest values or subscribe to them.
    """

    def __init__(self):
        self.settings: ObservableValue[TccSettings] = ObservableValue(name="push.settings")
        self.custom_profiles: ObservableValue[List[TccProfile]] = ObservableValue([], name="push.custom_profiles")
        self.default_profiles: ObservableValue[List[TccProfile]] = ObservableValue([], name="push.default_profiles")

    def publish_settings(self, settings: Optional[TccSettings]) -> None:
        debug_log(f"Push channel received settings: {settings}")
        self.settings.publish(settings.copy() if settings is not None else None)

    def publish_custom_profiles(self, profiles: Optional[List[TccProfile]]) -> None:
        debug_log(f"Push channel received {len(profiles or [])} custom profiles")
        self.custom_profiles.publish(copy_profiles(profiles))

    def publish_default_profiles(self, profiles: Optional[List[TccProfile]]) -> None:
        debug_log(f"Push channel received {len(profiles or [])} default profiles")
        self.default_profiles.publish(copy_profiles(profiles))
