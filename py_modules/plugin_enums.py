"""
PowerSync Enumerations
Core enums and exceptions for the PowerSync client
"""
from enum import Enum


class StateId(Enum):
    """Operating conditions the daemon maps to profiles"""
    POWER_AC = "power_ac"
    POWER_BAT = "power_bat"


class DefaultProfileNames(Enum):
    """Descriptor keys of the built-in profiles shipped by the daemon"""
    MAX_ENERGY_SAVE = "powersave_extreme"
    QUIET = "quiet"
    OFFICE = "office"
    HIGH_PERFORMANCE = "high_performance"
    MAXIMUM_PERFORMANCE = "max_performance"


class CommitStatus(Enum):
    """Outcome tags for commit operations"""
    APPLIED = "applied"
    NOT_FOUND = "not_found"
    NAME_COLLISION = "name_collision"
    NO_CHANGES = "no_changes"
    UNAVAILABLE = "unavailable"
    STALE_DRAFT = "stale_draft"
    ESCALATION_FAILED = "escalation_failed"


class PowerSyncError(Exception):
    """Base exception for PowerSync-specific errors"""
    pass


class ConfigurationError(PowerSyncError):
    """Configuration-related errors"""
    pass

