"""
Building blocks shared by the gesture detectors: the hysteresis angle gate,
the finger extension matcher and the bounded time window.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple
import logging

from .pose import Vector3, angle_between

logger = logging.getLogger(__name__)

# Slack for float drift in accumulated clock deltas (seconds)
TIME_EPSILON = 1e-9


def clamp_off_angle(on_angle: float, off_angle: float, label: str = "angle") -> float:
    """Return an off angle that is never below the on angle."""
    if off_angle < on_angle:
        logger.warning(
            "%s: off angle %.1f below on angle %.1f, clamping to %.1f",
            label, off_angle, on_angle, on_angle,
        )
        return on_angle
    return off_angle


class HysteresisAngleGate:
    """
    Boolean gate on the angle between a direction and a fixed reference.

    Engages when the angle drops to the on angle or below, disengages once it
    rises above the off angle. Angles in between keep the current state.
    """

    def __init__(
        self,
        on_angle: float,
        off_angle: float,
        reference: Vector3,
        label: str = "gate",
    ):
        self._label = label
        self._reference = tuple(float(c) for c in reference)
        self._engaged = False
        self.configure(on_angle, off_angle)

    def configure(self, on_angle: float, off_angle: float) -> None:
        """Replace thresholds; the engaged flag is kept."""
        self.on_angle = float(on_angle)
        self.off_angle = float(clamp_off_angle(on_angle, off_angle, self._label))

    @property
    def engaged(self) -> bool:
        return self._engaged

    @property
    def reference(self) -> Vector3:
        return self._reference

    def evaluate(self, direction: Vector3) -> bool:
        angle = angle_between(direction, self._reference)
        if not self._engaged and angle <= self.on_angle:
            self._engaged = True
        elif self._engaged and angle > self.off_angle:
            self._engaged = False
        return self._engaged

    def reset(self) -> None:
        self._engaged = False


class FingerState(Enum):
    """Required extension state of one finger."""
    EXTENDED = "extended"
    NOT_EXTENDED = "not_extended"
    EITHER = "either"


ALL_EXTENDED: Tuple[FingerState, ...] = (FingerState.EXTENDED,) * 5


def parse_finger_states(states: Sequence) -> Tuple[FingerState, ...]:
    """Coerce five names or FingerState values into a requirement tuple."""
    parsed = tuple(FingerState(s) if not isinstance(s, FingerState) else s for s in states)
    if len(parsed) != 5:
        raise ValueError(f"expected 5 finger states (thumb..pinky), got {len(parsed)}")
    return parsed


class FingerExtensionMatcher:
    """Matches five extension flags against per-finger requirements."""

    def __init__(self, requirements: Sequence = ALL_EXTENDED):
        self._requirements = parse_finger_states(requirements)

    @property
    def requirements(self) -> Tuple[FingerState, ...]:
        return self._requirements

    def matches(self, extended: Sequence[bool]) -> bool:
        if len(extended) != 5:
            return False
        return all(
            _finger_matches(flag, required)
            for flag, required in zip(extended, self._requirements)
        )


def _finger_matches(is_extended: bool, required: FingerState) -> bool:
    return (
        required is FingerState.EITHER
        or (required is FingerState.EXTENDED and is_extended)
        or (required is FingerState.NOT_EXTENDED and not is_extended)
    )


@dataclass
class TimedSwitch:
    """Time window that accumulates elapsed seconds while armed."""
    limit: float
    elapsed: float = 0.0
    armed: bool = False

    def arm(self) -> None:
        self.armed = True

    def advance(self, dt: float) -> None:
        if self.armed:
            self.elapsed += max(0.0, dt)

    @property
    def within_limit(self) -> bool:
        return self.elapsed <= self.limit + TIME_EPSILON

    @property
    def expired(self) -> bool:
        return self.armed and self.elapsed > self.limit + TIME_EPSILON

    def reset(self) -> None:
        self.elapsed = 0.0
        self.armed = False
