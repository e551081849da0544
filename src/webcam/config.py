"""
Config loader.
Loads YAML configuration into dataclasses.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml

from gestures.config import (
    PalmFlipConfig,
    SwipeConfig,
    WaveConfig,
    detector_config_from_dict,
)


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    model_path: Optional[str] = None   # Defaults to models/hand_landmarker.task
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class SensorConfig:
    smoothing: bool = True          # One Euro filter on pose directions
    min_cutoff: float = 1.0
    beta: float = 0.0
    lost_grace_frames: int = 5      # Empty frames before the hand counts as lost
    extension_ratio: float = 1.0    # Tip must be this much farther from the wrist than the PIP


@dataclass
class WorkerConfig:
    frame_rate: int = 120           # Frame-task rate of the polling loop


@dataclass
class LoggingConfig:
    level: str = "INFO"


def _default_detectors() -> List:
    return [PalmFlipConfig(), WaveConfig(), SwipeConfig()]


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    sensor: SensorConfig = field(default_factory=SensorConfig)
    worker: WorkerConfig = field(default_factory=WorkerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    detectors: List = field(default_factory=_default_detectors)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, uses config.yaml in the
                    project root.

    Returns:
        Config dataclass with all settings. A missing file gives defaults;
        a file without a 'detectors' list gets the default detectors.

    Raises:
        ValueError: if a detector entry is invalid.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    detectors_data = data.get('detectors')
    if detectors_data is None:
        detectors = _default_detectors()
    else:
        detectors = [detector_config_from_dict(d) for d in detectors_data]

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        sensor=_dict_to_dataclass(SensorConfig, data.get('sensor')),
        worker=_dict_to_dataclass(WorkerConfig, data.get('worker')),
        logging=_dict_to_dataclass(LoggingConfig, data.get('logging')),
        detectors=detectors,
    )
