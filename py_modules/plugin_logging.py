"""
PowerSync Logging
Shared logger for the PowerSync client modules
"""
import logging
import os
from pathlib import Path
from typing import Optional

# Debug configuration
DEBUG_ENABLED = os.environ.get('POWERSYNC_DEBUG', 'false').lower() == 'true'
DISK_LOGGING_ENABLED = os.environ.get('POWERSYNC_DISK_LOGGING', 'false').lower() == 'true'

LOGGER_NAME = "PowerSync"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: str = "info", log_file: Optional[str] = None) -> logging.Logger:
    """Attach handlers to the shared logger (safe to call more than once)"""
    logger.setLevel(logging.DEBUG if DEBUG_ENABLED else getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(handler)

        if DISK_LOGGING_ENABLED and log_file:
            try:
                Path(log_file).parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_file, encoding="utf-8")
                file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
                logger.addHandler(file_handler)
            except OSError as e:
                logger.error(f"Failed to open log file {log_file}: {e}")

    return logger


def debug_log(message: str, *args, **kwargs):
    """Log debug messages only when debug mode is enabled"""
    if DEBUG_ENABLED:
        logger.info(f"[DEBUG] {message}", *args, **kwargs)
