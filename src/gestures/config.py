"""
Detector configuration dataclasses.

Angles are in degrees, times in seconds. Enum fields also accept their string
values so the dataclasses can be filled straight from YAML.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Tuple

from .gates import ALL_EXTENDED, FingerState, clamp_off_angle, parse_finger_states
from .pose import REFERENCE_DIRECTIONS


class MotionMode(Enum):
    """Which direction a wave or swipe watches."""
    WRIST = "wrist"     # Middle finger distal bone
    ARM = "arm"         # Forearm


class WaveVariant(Enum):
    SINGLE = "single"
    DOUBLE = "double"


class SwipeDirection(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


def _coerce_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"invalid {enum_cls.__name__} {value!r} (choose from {choices})") from None


def _check_reference(name: str) -> str:
    name = str(name).lower()
    if name not in REFERENCE_DIRECTIONS:
        choices = ", ".join(REFERENCE_DIRECTIONS)
        raise ValueError(f"invalid pointing reference {name!r} (choose from {choices})")
    return name


@dataclass
class PalmFlipConfig:
    name: str = "palm_flip"
    period: float = 0.1                 # Sampling interval
    maximum_flip_time: float = 0.1      # Max time from leaving palm-down to palm-up
    on_angle_down: float = 45.0
    off_angle_down: float = 65.0
    on_angle_up: float = 45.0
    off_angle_up: float = 65.0

    def __post_init__(self):
        self.off_angle_down = clamp_off_angle(self.on_angle_down, self.off_angle_down, f"{self.name} down")
        self.off_angle_up = clamp_off_angle(self.on_angle_up, self.off_angle_up, f"{self.name} up")


@dataclass
class WaveConfig:
    name: str = "wave"
    period: float = 0.1
    mode: MotionMode = MotionMode.WRIST
    variant: WaveVariant = WaveVariant.SINGLE
    # Finger pointing gate (begin-wave pose)
    hand_on_angle: float = 15.0
    hand_off_angle: float = 25.0
    pointing_reference: str = "up"
    # Angle from up the watched direction must reach to complete a half-wave
    wrist_angle: float = 60.0           # WRIST mode
    wave_angle: float = 45.0            # ARM mode
    maximum_wave_time: float = 0.5
    fingers: Tuple[FingerState, ...] = field(default_factory=lambda: ALL_EXTENDED)

    def __post_init__(self):
        self.mode = _coerce_enum(MotionMode, self.mode)
        self.variant = _coerce_enum(WaveVariant, self.variant)
        self.pointing_reference = _check_reference(self.pointing_reference)
        self.fingers = parse_finger_states(self.fingers)
        self.hand_off_angle = clamp_off_angle(self.hand_on_angle, self.hand_off_angle, f"{self.name} hand")

    @property
    def motion_angle(self) -> float:
        return self.wrist_angle if self.mode is MotionMode.WRIST else self.wave_angle

    @property
    def maximum_time(self) -> float:
        return self.maximum_wave_time


@dataclass
class SwipeConfig:
    name: str = "swipe"
    period: float = 0.1
    mode: MotionMode = MotionMode.WRIST
    # Accepted but not checked; any direction confirms
    direction: SwipeDirection = SwipeDirection.RIGHT
    hand_on_angle: float = 30.0
    hand_off_angle: float = 45.0
    pointing_reference: str = "forward"
    swipe_angle: float = 60.0
    maximum_swipe_time: float = 0.5
    fingers: Tuple[FingerState, ...] = field(default_factory=lambda: ALL_EXTENDED)
    variant: WaveVariant = WaveVariant.SINGLE

    def __post_init__(self):
        self.mode = _coerce_enum(MotionMode, self.mode)
        self.direction = _coerce_enum(SwipeDirection, self.direction)
        self.variant = _coerce_enum(WaveVariant, self.variant)
        if self.variant is not WaveVariant.SINGLE:
            raise ValueError(f"{self.name}: swipes have no double variant")
        self.pointing_reference = _check_reference(self.pointing_reference)
        self.fingers = parse_finger_states(self.fingers)
        self.hand_off_angle = clamp_off_angle(self.hand_on_angle, self.hand_off_angle, f"{self.name} hand")

    @property
    def motion_angle(self) -> float:
        return self.swipe_angle

    @property
    def maximum_time(self) -> float:
        return self.maximum_swipe_time


DETECTOR_TYPES = {
    "palm_flip": PalmFlipConfig,
    "wave": WaveConfig,
    "swipe": SwipeConfig,
}


def detector_config_from_dict(data: dict):
    """
    Build a detector config from a mapping with a 'type' key.

    Unknown keys are ignored, as in the other config sections.
    """
    data = dict(data or {})
    kind = str(data.pop("type", "")).lower()
    if kind not in DETECTOR_TYPES:
        choices = ", ".join(DETECTOR_TYPES)
        raise ValueError(f"unknown detector type {kind!r} (choose from {choices})")
    cls = DETECTOR_TYPES[kind]
    field_names = {f.name for f in fields(cls)}
    filtered = {k: v for k, v in data.items() if k in field_names}
    filtered.setdefault("name", kind)
    return cls(**filtered)
