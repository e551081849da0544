"""
Pose sensor backed by webcam hand landmarks.

Turns MediaPipe landmarks into HandPose samples (palm normal, finger and arm
directions, extension flags) in the detectors' y-up frame.
"""
from typing import Dict, Optional
import logging
import time

import numpy as np

from gestures.pose import HandPose, HandSensor

from .config import SensorConfig
from .landmarks import HandLandmarks
from .one_euro_filter import OneEuroFilter

logger = logging.getLogger(__name__)

# Frames are mirrored before detection, which flips the winding of the palm
_PALM_NORMAL_SIGN = {"Right": -1.0, "Left": 1.0}

# (tip, joint) pairs for index..pinky; extended when the tip is farther
# from the wrist than the joint
_FINGER_JOINTS = [
    (HandLandmarks.INDEX_TIP, HandLandmarks.INDEX_PIP),
    (HandLandmarks.MIDDLE_TIP, HandLandmarks.MIDDLE_PIP),
    (HandLandmarks.RING_TIP, HandLandmarks.RING_PIP),
    (HandLandmarks.PINKY_TIP, HandLandmarks.PINKY_PIP),
]


def _to_y_up(points) -> np.ndarray:
    """MediaPipe (x right, y down, z away) -> (x right, y up, z toward sensor)."""
    pts = np.asarray(points, dtype=float)
    return pts * np.array([1.0, -1.0, -1.0])


def _unit(v: np.ndarray) -> np.ndarray:
    n = float(np.linalg.norm(v))
    if n < 1e-9:
        return np.zeros(3)
    return v / n


def _as_tuple(v: np.ndarray):
    return (float(v[0]), float(v[1]), float(v[2]))


def pose_from_landmarks(landmarks: HandLandmarks, extension_ratio: float = 1.0) -> HandPose:
    """
    Derive a HandPose from 21 hand landmarks.

    MediaPipe has no forearm, so the arm direction is approximated by the
    wrist to middle knuckle direction.
    """
    pts = _to_y_up(landmarks.points)
    wrist = pts[HandLandmarks.WRIST]

    across = pts[HandLandmarks.INDEX_MCP] - wrist
    along = pts[HandLandmarks.PINKY_MCP] - wrist
    sign = _PALM_NORMAL_SIGN.get(landmarks.handedness, -1.0)
    palm_normal = _unit(np.cross(across, along) * sign)

    finger_direction = _unit(pts[HandLandmarks.MIDDLE_TIP] - pts[HandLandmarks.MIDDLE_DIP])
    arm_direction = _unit(pts[HandLandmarks.MIDDLE_MCP] - wrist)

    pinky_mcp = pts[HandLandmarks.PINKY_MCP]
    thumb_extended = (
        np.linalg.norm(pts[HandLandmarks.THUMB_TIP] - pinky_mcp)
        > np.linalg.norm(pts[HandLandmarks.THUMB_IP] - pinky_mcp) * extension_ratio
    )
    extended = [bool(thumb_extended)]
    for tip, joint in _FINGER_JOINTS:
        extended.append(bool(
            np.linalg.norm(pts[tip] - wrist) > np.linalg.norm(pts[joint] - wrist) * extension_ratio
        ))

    return HandPose(
        palm_normal=_as_tuple(palm_normal),
        finger_direction=_as_tuple(finger_direction),
        arm_direction=_as_tuple(arm_direction),
        fingers_extended=tuple(extended),
        tracked=True,
    )


class WebcamHandSensor(HandSensor):
    """
    HandSensor fed with landmarks from the capture loop.

    The last pose is held (and still reported as tracked) for
    lost_grace_frames empty updates before the hand is dropped.
    """

    def __init__(self, config: Optional[SensorConfig] = None, clock=time.perf_counter):
        self._config = config or SensorConfig()
        self._clock = clock
        self._pose: Optional[HandPose] = None
        self._lost_counter = 0
        self._filters: Dict[str, OneEuroFilter] = {}

    def update(self, landmarks: Optional[HandLandmarks], timestamp: Optional[float] = None) -> None:
        """Feed the latest detection (None when no hand was found)."""
        if landmarks is None:
            if self._pose is None:
                return
            self._lost_counter += 1
            if self._lost_counter > self._config.lost_grace_frames:
                logger.debug("Hand lost after %d empty frames", self._lost_counter)
                self._pose = None
                self._filters.clear()
            return

        self._lost_counter = 0
        pose = pose_from_landmarks(landmarks, self._config.extension_ratio)
        if self._config.smoothing:
            t = self._clock() if timestamp is None else timestamp
            pose = self._smooth(pose, t)
        self._pose = pose

    def _smooth(self, pose: HandPose, t: float) -> HandPose:
        smoothed = {}
        for name in ("palm_normal", "finger_direction", "arm_direction"):
            value = getattr(pose, name)
            f = self._filters.get(name)
            if f is None:
                self._filters[name] = OneEuroFilter(
                    t, value, min_cutoff=self._config.min_cutoff, beta=self._config.beta
                )
                smoothed[name] = value
            else:
                smoothed[name] = _as_tuple(_unit(f(t, value)))
        return HandPose(
            fingers_extended=pose.fingers_extended,
            tracked=pose.tracked,
            **smoothed,
        )

    def get_current_pose(self) -> Optional[HandPose]:
        return self._pose

    def is_tracked(self) -> bool:
        return self._pose is not None

    def reset(self) -> None:
        self._pose = None
        self._lost_counter = 0
        self._filters.clear()
