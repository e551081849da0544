"""
Gesture detectors

Hysteresis-gated, time-bounded state machines that turn hand pose samples
into palm flip, wave and swipe activations.
"""
from .pose import HandPose, HandSensor, PoseSampler, angle_between, UP, DOWN, FORWARD
from .gates import FingerExtensionMatcher, FingerState, HysteresisAngleGate, TimedSwitch
from .detector import Detector, EventKind, GestureEvent
from .config import (
    MotionMode,
    PalmFlipConfig,
    SwipeConfig,
    SwipeDirection,
    WaveConfig,
    WaveVariant,
    detector_config_from_dict,
    DETECTOR_TYPES,
)
from .palm_flip import PalmFlipDetector, PalmFlipState
from .motion import MotionDetector, MotionState, SwipeDetector, WaveDetector
from .factory import build_detector, build_detectors
from .runner import DetectorRunner

__all__ = [
    'HandPose',
    'HandSensor',
    'PoseSampler',
    'angle_between',
    'UP',
    'DOWN',
    'FORWARD',
    'FingerExtensionMatcher',
    'FingerState',
    'HysteresisAngleGate',
    'TimedSwitch',
    'Detector',
    'EventKind',
    'GestureEvent',
    'MotionMode',
    'PalmFlipConfig',
    'SwipeConfig',
    'SwipeDirection',
    'WaveConfig',
    'WaveVariant',
    'DETECTOR_TYPES',
    'detector_config_from_dict',
    'PalmFlipDetector',
    'PalmFlipState',
    'MotionDetector',
    'MotionState',
    'SwipeDetector',
    'WaveDetector',
    'build_detector',
    'build_detectors',
    'DetectorRunner',
]
