"""
Power Configuration Data Model
Settings, profiles and fan tables exchanged with the daemon
"""
import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


def _wire_name(f) -> str:
    """camelCase key used in the daemon's JSON files"""
    if "wire" in f.metadata:
        return f.metadata["wire"]
    head, *rest = f.name.split("_")
    return head + "".join(part.title() for part in rest)


def _section_to_dict(section) -> Dict[str, Any]:
    data = dict(section.extra)
    data.update({_wire_name(f): getattr(section, f.name) for f in fields(section) if f.name != "extra"})
    return data


def _section_from_dict(cls, data: Optional[Dict[str, Any]]):
    """Build a flat section; keys the client does not know go to extra"""
    data = data or {}
    kwargs = {}
    for f in fields(cls):
        key = _wire_name(f)
        if f.name != "extra" and key in data:
            kwargs[f.name] = data[key]
    kwargs["extra"] = _extra_keys(data, cls)
    return cls(**kwargs)


def _extra_keys(data: Dict[str, Any], cls) -> Dict[str, Any]:
    known = {_wire_name(f) for f in fields(cls) if f.name != "extra"}
    return {k: v for k, v in data.items() if k not in known}


@dataclass
class DisplayProfile:
    """Display section of a profile"""
    brightness: int = 100
    use_brightness: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CPUProfile:
    """CPU-specific profile settings"""
    online_cores: Optional[int] = None
    use_max_perf_gov: bool = False
    scaling_min_frequency: Optional[int] = None
    scaling_max_frequency: Optional[int] = None
    governor: str = "powersave"
    energy_performance_preference: str = "balance_performance"
    no_turbo: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class WebcamProfile:
    status: bool = True
    use_status: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FanControlProfile:
    """Fan section of a profile"""
    use_control: bool = True
    fan_profile: str = "Balanced"
    minimum_fanspeed: int = 0
    offset_fanspeed: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ODMProfile:
    name: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TccProfile:
    """Complete power profile as stored by the daemon"""
    name: str
    description: str = ""
    display: DisplayProfile = field(default_factory=DisplayProfile)
    cpu: CPUProfile = field(default_factory=CPUProfile)
    webcam: WebcamProfile = field(default_factory=WebcamProfile)
    fan: FanControlProfile = field(default_factory=FanControlProfile)
    odm_profile: ODMProfile = field(default_factory=ODMProfile)
    extra: Dict[str, Any] = field(default_factory=dict)  # keys written by a newer daemon

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        data = dict(self.extra)
        data.update({
            'name': self.name,
            'description': self.description,
            'display': _section_to_dict(self.display),
            'cpu': _section_to_dict(self.cpu),
            'webcam': _section_to_dict(self.webcam),
            'fan': _section_to_dict(self.fan),
            'odmProfile': _section_to_dict(self.odm_profile),
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TccProfile':
        """Create from dictionary (JSON deserialization)"""
        data = json.loads(json.dumps(data))
        return cls(
            name=data.get('name', ''),
            description=data.get('description', ''),
            display=_section_from_dict(DisplayProfile, data.get('display')),
            cpu=_section_from_dict(CPUProfile, data.get('cpu')),
            webcam=_section_from_dict(WebcamProfile, data.get('webcam')),
            fan=_section_from_dict(FanControlProfile, data.get('fan')),
            odm_profile=_section_from_dict(ODMProfile, data.get('odmProfile')),
            extra=_extra_keys(data, cls),
        )

    def copy(self) -> 'TccProfile':
        """Detached deep copy"""
        return TccProfile.from_dict(json.loads(json.dumps(self.to_dict())))


@dataclass
class TccSettings:
    """Global settings record; stateMap assigns a profile name to each state"""
    state_map: Dict[str, str] = field(default_factory=dict)
    cpu_settings_enabled: bool = True
    fan_control_enabled: bool = True
    keyboard_backlight_control_enabled: bool = True
    ycbcr420_workaround: List[Dict[str, Any]] = field(default_factory=list)
    charging_profile: Optional[str] = None
    shutdown_time: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return _section_to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TccSettings':
        data = json.loads(json.dumps(data))
        settings = _section_from_dict(cls, data)
        settings.state_map = dict(settings.state_map or {})
        return settings

    def copy(self) -> 'TccSettings':
        return TccSettings.from_dict(self.to_dict())


@dataclass
class FanTableEntry:
    temp: int
    speed: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FanTableEntry':
        return cls(temp=data['temp'], speed=data['speed'])


@dataclass
class FanProfile:
    """Default fan curve table (read-only)"""
    name: str
    table_cpu: List[FanTableEntry] = field(default_factory=list, metadata={"wire": "tableCPU"})
    table_gpu: List[FanTableEntry] = field(default_factory=list, metadata={"wire": "tableGPU"})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FanProfile':
        return cls(
            name=data.get('name', ''),
            table_cpu=[FanTableEntry.from_dict(entry) for entry in data.get('tableCPU', [])],
            table_gpu=[FanTableEntry.from_dict(entry) for entry in data.get('tableGPU', [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'tableCPU': [{'temp': e.temp, 'speed': e.speed} for e in self.table_cpu],
            'tableGPU': [{'temp': e.temp, 'speed': e.speed} for e in self.table_gpu],
        }


def same_content(a, b) -> bool:
    """Structural equality of two serializable records (None-aware)"""
    if a is None or b is None:
        return a is b
    return a.to_dict() == b.to_dict()


def copy_profiles(profiles: Optional[List[TccProfile]]) -> List[TccProfile]:
    return [profile.copy() for profile in profiles or []]
