"""
Build detectors from their config dataclasses.
"""
from typing import Iterable, List

from .config import PalmFlipConfig, SwipeConfig, WaveConfig
from .detector import Detector
from .motion import SwipeDetector, WaveDetector
from .palm_flip import PalmFlipDetector


def build_detector(config) -> Detector:
    if isinstance(config, PalmFlipConfig):
        return PalmFlipDetector(config)
    if isinstance(config, WaveConfig):
        return WaveDetector(config)
    if isinstance(config, SwipeConfig):
        return SwipeDetector(config)
    raise ValueError(f"no detector for config {type(config).__name__}")


def build_detectors(configs: Iterable) -> List[Detector]:
    return [build_detector(c) for c in configs]
