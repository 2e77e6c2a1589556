import asyncio
import json
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Dict, List, Optional

# Add py_modules directory to Python path for dynamic imports
py_modules_path = os.path.join(os.path.dirname(__file__), 'py_modules')
if py_modules_path not in sys.path:
    sys.path.insert(0, py_modules_path)

from config_service import ConfigService, create_config_service
from plugin_logging import logger, setup_logging
from plugin_settings import ClientSettings
from power_core import TccProfile, TccSettings
from push_channel import PushChannel


# Version management
def get_plugin_version() -> str:
    """Installed package version"""
    try:
        return version("powersync")
    except PackageNotFoundError:
        return "unknown"


def _profile_list(profiles: List[TccProfile]) -> List[Dict[str, Any]]:
    return [profile.to_dict() for profile in profiles]


class Plugin:
    """Frontend-facing API; every method returns JSON-friendly values"""

    def __init__(self, client_settings: Optional[ClientSettings] = None,
                 channel: Optional[PushChannel] = None):
        self.client_settings = client_settings
        self.channel = channel or PushChannel()
        self.service: Optional[ConfigService] = None

    async def _main(self):
        if self.client_settings is None:
            self.client_settings = ClientSettings()
        setup_logging(self.client_settings.get("log_level", "info"), self.client_settings.get("log_file"))
        logger.info(f"PowerSync {get_plugin_version()} initializing...")

        self.service = create_config_service(self.client_settings, self.channel)
        logger.info(f"PowerSync initialized with {len(self.service.get_custom_profiles())} custom profiles")

    async def _unload(self):
        logger.info("PowerSync unloading...")
        if self.service:
            self.service.close()
            self.service = None

    # Transport entry points (daemon -> client)

    async def on_daemon_settings(self, settings_data: Optional[Dict[str, Any]]) -> None:
        self.channel.publish_settings(TccSettings.from_dict(settings_data) if settings_data else None)

    async def on_daemon_profiles(self, custom_profiles: List[Dict[str, Any]],
                                 default_profiles: Optional[List[Dict[str, Any]]] = None) -> None:
        self.channel.publish_custom_profiles([TccProfile.from_dict(p) for p in custom_profiles])
        if default_profiles is not None:
            self.channel.publish_default_profiles([TccProfile.from_dict(p) for p in default_profiles])

    # Reads

    async def get_settings(self) -> Optional[Dict[str, Any]]:
        settings = self.service.get_settings()
        return settings.to_dict() if settings is not None else None

    async def get_profiles(self) -> Dict[str, Any]:
        return {
            "defaultProfiles": _profile_list(self.service.get_default_profiles()),
            "customProfiles": _profile_list(self.service.get_custom_profiles()),
        }

    async def get_profile_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        profile = self.service.get_profile_by_name(name)
        return profile.to_dict() if profile is not None else None

    async def get_active_profile(self, state_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        try:
            profile = self.service.get_active_profile(state_id)
            return profile.to_dict() if profile is not None else None
        except Exception as e:
            logger.error(f"Failed to determine active profile: {e}")
            return None

    async def get_fan_profiles(self) -> List[Dict[str, Any]]:
        return [fan_profile.to_dict() for fan_profile in self.service.get_fan_profiles()]

    async def get_default_profile_info(self, descriptor: str) -> Dict[str, Optional[str]]:
        return {
            "name": self.service.get_default_profile_name(descriptor),
            "description": self.service.get_default_profile_description(descriptor),
        }

    async def get_disabled_messages(self) -> Dict[str, str]:
        return {
            "cpu": self.service.cpu_settings_disabled_message,
            "fan": self.service.fan_control_disabled_message,
        }

    # Edit session

    async def set_editing_profile(self, custom_profile_name: Optional[str]) -> bool:
        return self.service.set_current_editing_profile(custom_profile_name)

    async def get_editing_profile(self) -> Optional[Dict[str, Any]]:
        draft = self.service.get_current_editing_profile()
        return draft.to_dict() if draft is not None else None

    async def update_editing_profile(self, profile_data: Dict[str, Any]) -> bool:
        try:
            return self.service.session.update_draft(TccProfile.from_dict(profile_data))
        except Exception as e:
            logger.error(f"Failed to update editing profile: {e}")
            return False

    async def has_editing_changes(self) -> bool:
        return self.service.edit_profile_changes()

    # Commits (client -> daemon)

    async def commit_editing_profile(self) -> Dict[str, Any]:
        result = await asyncio.to_thread(self.service.write_current_editing_profile)
        return result.to_dict()

    async def set_active_profile(self, profile_name: str, state_id: str) -> Dict[str, Any]:
        result = await asyncio.to_thread(self.service.set_active_profile, profile_name, state_id)
        return result.to_dict()

    async def copy_profile(self, profile_name: str, new_profile_name: str) -> Dict[str, Any]:
        return (await self.service.copy_profile(profile_name, new_profile_name)).to_dict()

    async def delete_custom_profile(self, profile_name: str) -> Dict[str, Any]:
        return (await self.service.delete_custom_profile(profile_name)).to_dict()

    async def write_profile(self, current_profile_name: str, profile_data: Dict[str, Any],
                            states: Optional[List[str]] = None) -> Dict[str, Any]:
        profile = TccProfile.from_dict(profile_data)
        return (await self.service.write_profile(current_profile_name, profile, states)).to_dict()

    async def save_settings(self) -> Dict[str, Any]:
        return (await self.service.save_settings()).to_dict()


if __name__ == "__main__":
    async def _run():
        plugin = Plugin()
        await plugin._main()
        print(json.dumps(await plugin.get_profiles(), indent=2))
        await plugin._unload()

    asyncio.run(_run())
