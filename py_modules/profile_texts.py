"""
Built-in profile texts
Display names and descriptions for the daemon's built-in profile descriptors
"""
import gettext
from typing import Callable, Dict, NamedTuple, Optional, Union

from plugin_enums import DefaultProfileNames

Translator = Callable[[str], str]


class ProfileText(NamedTuple):
    name: str
    description: str


_DEFAULT_PROFILE_TEXTS = {
    DefaultProfileNames.MAX_ENERGY_SAVE: ProfileText(
        'Powersave extreme',
        'Lowest possible power consumption and silent fans at the cost of extremely low performance.'),
    DefaultProfileNames.QUIET: ProfileText(
        'Quiet',
        'Low performance for light office tasks for very quiet fans and low power consumption.'),
    DefaultProfileNames.OFFICE: ProfileText(
        'Office and Multimedia',
        'Mid-tier performance for more demanding office tasks or multimedia usage and quiet fans.'),
    DefaultProfileNames.HIGH_PERFORMANCE: ProfileText(
        'High Performance',
        'High performance for gaming and demanding computing tasks at the cost of moderate to high '
        'fan noise and higher temperatures.'),
    DefaultProfileNames.MAXIMUM_PERFORMANCE: ProfileText(
        'Max Performance',
        'Maximum performance at the cost of very loud fan noise levels and very high temperatures.'),
}

CPU_SETTINGS_DISABLED = 'CPU settings deactivated in Tools→Global\u00a0Settings'
FAN_CONTROL_DISABLED = 'Fan control deactivated in Tools→Global\u00a0Settings'


class ProfileTexts:
    """Looks up localized texts; translator defaults to the gettext catalog"""

    def __init__(self, translator: Optional[Translator] = None):
        self._ = translator or gettext.translation('powersync', fallback=True).gettext
        self._texts: Dict[str, ProfileText] = {
            descriptor.value: ProfileText(self._(text.name), self._(text.description))
            for descriptor, text in _DEFAULT_PROFILE_TEXTS.items()
        }

    def _lookup(self, descriptor: Union[str, DefaultProfileNames]) -> Optional[ProfileText]:
        if isinstance(descriptor, DefaultProfileNames):
            descriptor = descriptor.value
        return self._texts.get(descriptor)

    def get_default_profile_name(self, descriptor) -> Optional[str]:
        info = self._lookup(descriptor)
        return info.name if info is not None else None

    def get_default_profile_description(self, descriptor) -> Optional[str]:
        info = self._lookup(descriptor)
        return info.description if info is not None else None

    @property
    def cpu_settings_disabled_message(self) -> str:
        return self._(CPU_SETTINGS_DISABLED)

    @property
    def fan_control_disabled_message(self) -> str:
        return self._(FAN_CONTROL_DISABLED)
