"""
PowerSync Client Settings
Local (unprivileged) client configuration with validation and persistence
"""
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from plugin_logging import logger

DEFAULT_CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "powersync")

# Installed daemon entry point and its development build location
TCCD_EXEC_FILE = "/opt/tuxedo-control-center/resources/dist/tuxedo-control-center/data/service/tccd"
TCCD_DEV_EXEC_SUFFIX = "dist/tuxedo-control-center/data/service/tccd"


class ClientSettings:
    """Centralized settings management for the PowerSync client"""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize settings manager"""
        config_dir = config_dir or os.environ.get("POWERSYNC_CONFIG_DIR") or DEFAULT_CONFIG_DIR
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "client_settings.json"
        self.settings_cache = {}

        # Ensure config directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

        # Load existing settings
        self._load_settings()

    def _load_settings(self) -> None:
        """Load settings from file"""
        try:
            if self.config_file.exists():
                with open(self.config_file, 'r') as f:
                    loaded = json.load(f)
                self.settings_cache = self._get_default_settings()
                self.settings_cache.update(loaded)
                logger.info(f"Loaded client settings from {self.config_file}")
            else:
                # Initialize with default settings
                self.settings_cache = self._get_default_settings()
                self._save_settings()
                logger.info("Initialized client settings with defaults")
        except Exception as e:
            logger.error(f"Failed to load client settings: {e}")
            self.settings_cache = self._get_default_settings()

    def _save_settings(self) -> bool:
        """Save settings to file"""
        try:
            with open(self.config_file, 'w') as f:
                json.dump(self.settings_cache, f, indent=2)
            return True
        except Exception as e:
            logger.error(f"Failed to save client settings: {e}")
            return False

    def _get_default_settings(self) -> Dict[str, Any]:
        """Get default settings configuration"""
        return {
            # Escalation
            "privilege_elevator": "pkexec",
            "daemon_executable": TCCD_EXEC_FILE,
            "development_mode": False,
            "development_daemon_executable": "",
            "escalation_timeout": 300.0,

            # Staging files handed to the daemon
            "staging_settings_path": "/tmp/tmptccsettings",
            "staging_profiles_path": "/tmp/tmptccprofiles",

            # Read-only local configuration
            "settings_file": "/etc/tcc/settings",
            "fan_tables_file": "/opt/tuxedo-control-center/resources/dist/tuxedo-control-center/data/service/fantables.json",

            # Logging and debug
            "log_level": "info",
            "log_file": str(self.config_dir / "powersync.log"),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value"""
        return self.settings_cache.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """Set a setting value"""
        if not self.validate_setting(key, value):
            logger.error(f"Rejected invalid setting: {key}={value}")
            return False
        try:
            self.settings_cache[key] = value
            return self._save_settings()
        except Exception as e:
            logger.error(f"Failed to set setting {key}: {e}")
            return False

    def reset_to_defaults(self) -> bool:
        """Reset all settings to defaults"""
        try:
            self.settings_cache = self._get_default_settings()
            return self._save_settings()
        except Exception as e:
            logger.error(f"Failed to reset settings: {e}")
            return False

    def validate_setting(self, key: str, value: Any) -> bool:
        """Validate a setting value"""
        non_empty = lambda v: isinstance(v, str) and v.strip() != ""
        validators = {
            "privilege_elevator": non_empty,
            "daemon_executable": non_empty,
            "staging_settings_path": non_empty,
            "staging_profiles_path": non_empty,
            "development_mode": lambda v: isinstance(v, bool),
            "escalation_timeout": lambda v: v is None or (isinstance(v, (int, float)) and v > 0),
            "log_level": lambda v: v in ["debug", "info", "warning", "error", "critical"],
        }

        if key in validators:
            return validators[key](value)

        return True  # No validation for unknown settings

    def resolve_daemon_executable(self) -> str:
        """Daemon path for the current mode (installed or development build)"""
        development = self.get("development_mode") or \
            os.environ.get("POWERSYNC_DEVELOPMENT", "false").lower() == "true"
        if development:
            return self.get("development_daemon_executable") or os.path.join(os.getcwd(), TCCD_DEV_EXEC_SUFFIX)
        return self.get("daemon_executable", TCCD_EXEC_FILE)
