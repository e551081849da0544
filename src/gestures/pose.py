"""
Hand pose samples and the sensor they come from.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Optional, Tuple
import math

import numpy as np

Vector3 = Tuple[float, float, float]

# y-up, right-handed; +z points toward the sensor
UP: Vector3 = (0.0, 1.0, 0.0)
DOWN: Vector3 = (0.0, -1.0, 0.0)
FORWARD: Vector3 = (0.0, 0.0, 1.0)

REFERENCE_DIRECTIONS = {
    "up": UP,
    "down": DOWN,
    "forward": FORWARD,
}


@dataclass(frozen=True)
class HandPose:
    """
    One tick's snapshot of hand geometry.

    Attributes:
        palm_normal: Unit vector out of the palm
        finger_direction: Distal bone direction of the middle finger
        arm_direction: Forearm direction
        fingers_extended: Extension flags, thumb..pinky
        tracked: Whether the sensor is currently tracking the hand
    """
    palm_normal: Vector3
    finger_direction: Vector3
    arm_direction: Vector3
    fingers_extended: Tuple[bool, bool, bool, bool, bool] = (True,) * 5
    tracked: bool = True


def is_live(pose: Optional[HandPose]) -> bool:
    """True if the pose exists and the hand is tracked."""
    return pose is not None and pose.tracked


def angle_between(a: Vector3, b: Vector3) -> float:
    """Angle in degrees (0-180) between two 3D directions."""
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom < 1e-15:
        # degenerate vectors measure as aligned
        return 0.0
    cos_theta = float(np.clip(np.dot(va, vb) / denom, -1.0, 1.0))
    return math.degrees(math.acos(cos_theta))


class HandSensor(ABC):
    """
    Interface of the tracking sensor.

    Implementations return the latest pose (or None when there is no hand)
    and report whether the hand is currently tracked.
    """

    @abstractmethod
    def get_current_pose(self) -> Optional[HandPose]:
        pass

    @abstractmethod
    def is_tracked(self) -> bool:
        pass


class PoseSampler:
    """Pure read of the current pose from an injected sensor."""

    def __init__(self, sensor: HandSensor):
        self._sensor = sensor

    @property
    def sensor(self) -> HandSensor:
        return self._sensor

    def read(self) -> Optional[HandPose]:
        """
        Read the current pose.

        Returns:
            The pose with its tracked flag taken from the sensor, or None
            if the sensor has no pose.
        """
        pose = self._sensor.get_current_pose()
        if pose is None:
            return None
        tracked = bool(self._sensor.is_tracked())
        if pose.tracked != tracked:
            pose = replace(pose, tracked=tracked)
        return pose
