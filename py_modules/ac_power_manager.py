"""
Power supply state detection
Maps the machine's current power source to a daemon state identifier
"""
import glob
import os
from typing import List, Optional

import psutil

from plugin_enums import StateId
from plugin_logging import logger

POWER_SUPPLY_ROOT = '/sys/class/power_supply'


def find_ac_power_paths(root: str = POWER_SUPPLY_ROOT) -> List[str]:
    """AC adapter 'online' files (AC*, ADP*, ACAD)"""
    paths = []
    for pattern in ('AC*/online', 'ADP*/online', 'ACAD/online'):
        paths.extend(glob.glob(os.path.join(root, pattern)))
    return sorted(set(paths))


def get_hardware_ac_status(root: str = POWER_SUPPLY_ROOT) -> Optional[bool]:
    """AC status from sysfs, None when it cannot be read"""
    for ac_path in find_ac_power_paths(root):
        try:
            with open(ac_path, 'r') as f:
                ac_status = f.read().strip()
            logger.debug(f"AC power reading {ac_path}: {ac_status}")
            if ac_status == "1":
                return True
            if ac_status == "0":
                return False
        except OSError as e:
            logger.warning(f"Could not read {ac_path}: {e}")
    return None


def get_ac_power_status(root: str = POWER_SUPPLY_ROOT) -> bool:
    """AC status from sysfs, falling back to psutil; machines without a battery count as AC"""
    hardware_status = get_hardware_ac_status(root)
    if hardware_status is not None:
        return hardware_status

    try:
        battery = psutil.sensors_battery()
    except Exception as e:
        logger.error(f"psutil battery detection failed: {e}")
        battery = None

    if battery is None or battery.power_plugged is None:
        logger.debug("No battery information available, assuming AC power")
        return True
    return bool(battery.power_plugged)


def determine_state(root: str = POWER_SUPPLY_ROOT) -> StateId:
    return StateId.POWER_AC if get_ac_power_status(root) else StateId.POWER_BAT
