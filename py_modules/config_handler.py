"""
Configuration File Handling
Reads local configuration and writes the JSON payloads handed to the daemon
"""
import json
import os
from typing import Any, Dict, List, Optional

from plugin_enums import ConfigurationError
from plugin_logging import logger
from plugin_utils import write_file_safe
from power_core import FanProfile, TccProfile, TccSettings


class ConfigHandler:
    """Serializes settings and profiles in the format the daemon reads"""

    def __init__(self, settings_file: str, fan_tables_file: str):
        self.settings_file = settings_file
        self.fan_tables_file = fan_tables_file

    @staticmethod
    def copy_config(data: Any) -> Any:
        """Deep copy through the serialized representation"""
        return json.loads(json.dumps(data))

    def _write_json(self, data: Any, file_path: str) -> None:
        if not write_file_safe(file_path, json.dumps(data, indent=2)):
            raise ConfigurationError(f"Could not write {file_path}")

    def _read_json(self, file_path: str) -> Any:
        with open(file_path, 'r') as f:
            return json.load(f)

    def write_settings(self, settings: TccSettings, file_path: Optional[str] = None) -> None:
        """Write settings JSON, raises ConfigurationError on failure"""
        self._write_json(settings.to_dict(), file_path or self.settings_file)

    def write_profiles(self, profiles: List[TccProfile], file_path: str) -> None:
        """Write a profile collection JSON, raises ConfigurationError on failure"""
        self._write_json([profile.to_dict() for profile in profiles], file_path)

    def read_settings(self, file_path: Optional[str] = None) -> TccSettings:
        data = self._read_json(file_path or self.settings_file)
        if not isinstance(data, dict):
            raise ConfigurationError("Settings file does not contain an object")
        return TccSettings.from_dict(data)

    def read_settings_no_throw(self, file_path: Optional[str] = None) -> Optional[TccSettings]:
        try:
            return self.read_settings(file_path)
        except Exception as e:
            logger.error(f"Failed to read settings: {e}")
            return None

    def read_profiles(self, file_path: str) -> List[TccProfile]:
        data = self._read_json(file_path)
        if not isinstance(data, list):
            raise ConfigurationError("Profiles file does not contain a list")
        return [TccProfile.from_dict(entry) for entry in data]

    def get_default_fan_profiles(self) -> List[FanProfile]:
        """Default fan tables from local configuration, empty when unavailable"""
        try:
            if not os.path.exists(self.fan_tables_file):
                logger.warning(f"Fan tables file not found: {self.fan_tables_file}")
                return []
            data: List[Dict[str, Any]] = self._read_json(self.fan_tables_file)
            return [FanProfile.from_dict(entry) for entry in data]
        except Exception as e:
            logger.error(f"Failed to load fan tables: {e}")
            return []
