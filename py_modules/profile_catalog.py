"""
Profile Catalog
Name-keyed lookups across built-in and custom profiles
"""
from typing import List, Optional

from power_core import TccProfile
from state_mirror import StateMirror


def _find(profiles: List[TccProfile], name: str) -> Optional[TccProfile]:
    return next((profile for profile in profiles if profile.name == name), None)


def index_of(profiles: List[TccProfile], name: str) -> int:
    """Position of the profile called name, -1 when absent"""
    return next((i for i, profile in enumerate(profiles) if profile.name == name), -1)


class ProfileCatalog:
    """Read-only view over the mirror; every hit is an independent copy"""

    def __init__(self, mirror: StateMirror):
        self.mirror = mirror

    def find_by_name(self, name: str) -> Optional[TccProfile]:
        """Get a profile by name, built-in or custom"""
        # mirror accessors already return copies
        return _find(self.mirror.all_profiles(), name)

    def find_custom_by_name(self, name: str) -> Optional[TccProfile]:
        return _find(self.mirror.custom_profiles(), name)

    def name_in_use(self, name: str, exclude_custom_index: Optional[int] = None) -> bool:
        """True if any built-in, or any custom profile other than the excluded index, is called name"""
        if index_of(self.mirror.default_profiles(), name) != -1:
            return True
        return any(
            profile.name == name
            for i, profile in enumerate(self.mirror.custom_profiles())
            if i != exclude_custom_index
        )
