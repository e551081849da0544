import numpy as np
import pytest

from gestures import PoseSampler, angle_between, UP
from webcam import HandLandmarks, WebcamHandSensor, pose_from_landmarks
from webcam.config import SensorConfig

# Mirrored right hand, palm toward the camera, fingers up.
# MediaPipe world coordinates: x right, y down, z away from the camera.
OPEN_HAND = [
    (0.0, 0.0, 0.0),         # wrist
    (-0.02, -0.02, 0.0),     # thumb
    (-0.04, -0.04, 0.0),
    (-0.06, -0.055, 0.0),
    (-0.08, -0.065, 0.0),
    (-0.03, -0.08, 0.0),     # index
    (-0.03, -0.11, 0.0),
    (-0.03, -0.13, 0.0),
    (-0.03, -0.15, 0.0),
    (0.0, -0.085, 0.0),      # middle
    (0.0, -0.12, 0.0),
    (0.0, -0.14, 0.0),
    (0.0, -0.16, 0.0),
    (0.02, -0.08, 0.0),      # ring
    (0.02, -0.11, 0.0),
    (0.02, -0.13, 0.0),
    (0.02, -0.145, 0.0),
    (0.04, -0.07, 0.0),      # pinky
    (0.04, -0.095, 0.0),
    (0.04, -0.11, 0.0),
    (0.04, -0.125, 0.0),
]


def make_landmarks(points=None, handedness="Right"):
    points = list(points or OPEN_HAND)
    return HandLandmarks(
        landmarks=[(0.5 + x, 0.5 + y, z) for x, y, z in points],
        handedness=handedness,
        confidence=0.9,
        world_landmarks=points,
    )


def test_open_hand_pose():
    pose = pose_from_landmarks(make_landmarks())
    assert pose.tracked
    assert pose.fingers_extended == (True,) * 5
    assert angle_between(pose.finger_direction, UP) == pytest.approx(0.0, abs=1e-6)
    assert angle_between(pose.arm_direction, UP) == pytest.approx(0.0, abs=1e-6)
    # Palm faces the camera (+z)
    assert pose.palm_normal == pytest.approx((0.0, 0.0, 1.0))


def test_left_hand_flips_palm_normal():
    mirrored = [(-x, y, z) for x, y, z in OPEN_HAND]
    pose = pose_from_landmarks(make_landmarks(mirrored, handedness="Left"))
    assert pose.palm_normal == pytest.approx((0.0, 0.0, 1.0))


def test_curled_finger_is_not_extended():
    points = list(OPEN_HAND)
    # Ring tip folded back toward the wrist
    points[HandLandmarks.RING_TIP] = (0.02, -0.09, -0.02)
    pose = pose_from_landmarks(make_landmarks(points))
    assert pose.fingers_extended == (True, True, True, False, True)


def test_falls_back_to_image_landmarks():
    lm = make_landmarks()
    lm.world_landmarks = None
    pose = pose_from_landmarks(lm)
    assert angle_between(pose.finger_direction, UP) == pytest.approx(0.0, abs=1e-6)


def test_sensor_holds_pose_for_grace_frames():
    sensor = WebcamHandSensor(SensorConfig(smoothing=False, lost_grace_frames=2))
    assert sensor.get_current_pose() is None
    assert not sensor.is_tracked()

    sensor.update(make_landmarks())
    assert sensor.is_tracked()
    pose = sensor.get_current_pose()

    sensor.update(None)
    sensor.update(None)
    assert sensor.is_tracked()
    assert sensor.get_current_pose() is pose

    sensor.update(None)
    assert not sensor.is_tracked()
    assert PoseSampler(sensor).read() is None


def test_sensor_smoothing_keeps_unit_vectors():
    sensor = WebcamHandSensor(SensorConfig(smoothing=True, min_cutoff=1.0))
    sensor.update(make_landmarks(), timestamp=0.0)
    first = sensor.get_current_pose()
    assert first.finger_direction == pytest.approx((0.0, 1.0, 0.0))

    # Fingers bent forward 90 degrees in one frame
    points = list(OPEN_HAND)
    points[HandLandmarks.MIDDLE_TIP] = (0.0, -0.14, -0.02)
    sensor.update(make_landmarks(points), timestamp=0.01)
    smoothed = sensor.get_current_pose().finger_direction

    assert np.linalg.norm(smoothed) == pytest.approx(1.0)
    # Lags behind the raw 90 degree jump
    assert 0.0 < angle_between(smoothed, UP) < 90.0
