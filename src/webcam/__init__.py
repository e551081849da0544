"""
Webcam Module

Hand pose sensor fed by MediaPipe hand tracking. HandTracker and
GestureWorker live in their own modules since they pull in MediaPipe and
PyQt5.
"""
from .config import Config, load_config
from .landmarks import HandLandmarks
from .one_euro_filter import OneEuroFilter
from .sensor import WebcamHandSensor, pose_from_landmarks

__all__ = [
    'Config',
    'load_config',
    'HandLandmarks',
    'OneEuroFilter',
    'WebcamHandSensor',
    'pose_from_landmarks',
]
