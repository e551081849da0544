import pytest

from gestures import (
    FingerState,
    MotionMode,
    PalmFlipConfig,
    PalmFlipDetector,
    SwipeConfig,
    SwipeDetector,
    SwipeDirection,
    WaveConfig,
    WaveDetector,
    WaveVariant,
    build_detectors,
    detector_config_from_dict,
)
from webcam.config import Config, load_config


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "nope.yaml")
    assert isinstance(config, Config)
    assert [type(d) for d in config.detectors] == [PalmFlipConfig, WaveConfig, SwipeConfig]


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        """
camera:
  device_id: 2
  unknown_key: 1
sensor:
  lost_grace_frames: 3
logging:
  level: DEBUG
detectors:
  - type: palm_flip
    maximum_flip_time: 0.2
    off_angle_up: 30
  - type: wave
    name: double_wave
    mode: arm
    variant: double
    fingers: [either, extended, extended, extended, not_extended]
  - type: swipe
    direction: Up
    colour: red
"""
    )
    config = load_config(path)

    assert config.camera.device_id == 2
    assert config.sensor.lost_grace_frames == 3
    assert config.logging.level == "DEBUG"

    flip, wave, swipe = config.detectors
    assert flip.name == "palm_flip"
    assert flip.maximum_flip_time == 0.2
    # Clamped up to the on angle
    assert flip.off_angle_up == flip.on_angle_up == 45

    assert wave.name == "double_wave"
    assert wave.mode is MotionMode.ARM
    assert wave.variant is WaveVariant.DOUBLE
    assert wave.fingers[0] is FingerState.EITHER
    assert wave.fingers[4] is FingerState.NOT_EXTENDED
    assert wave.motion_angle == wave.wave_angle

    assert swipe.direction is SwipeDirection.UP
    assert swipe.pointing_reference == "forward"


def test_empty_detector_list(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("detectors: []\n")
    assert load_config(path).detectors == []


def test_unknown_detector_type():
    with pytest.raises(ValueError, match="unknown detector type"):
        detector_config_from_dict({"type": "pinch"})


def test_invalid_enum_value():
    with pytest.raises(ValueError, match="MotionMode"):
        WaveConfig(mode="leg")
    with pytest.raises(ValueError, match="pointing reference"):
        WaveConfig(pointing_reference="sideways")


def test_motion_angle_follows_mode():
    assert WaveConfig(mode="wrist", wrist_angle=50).motion_angle == 50
    assert WaveConfig(mode="arm", wave_angle=30).motion_angle == 30
    assert SwipeConfig(swipe_angle=70).motion_angle == 70


def test_build_detectors():
    detectors = build_detectors([PalmFlipConfig(), WaveConfig(), SwipeConfig()])
    assert [type(d) for d in detectors] == [PalmFlipDetector, WaveDetector, SwipeDetector]
    assert [d.name for d in detectors] == ["palm_flip", "wave", "swipe"]
    assert all(not d.is_running for d in detectors)


def test_shipped_config_loads():
    config = load_config()
    assert len(config.detectors) == 3
    assert config.detectors[1].variant is WaveVariant.DOUBLE


def test_palm_flip_defaults():
    config = PalmFlipConfig()
    assert config.period == 0.1
    assert config.maximum_flip_time == 0.1
    assert (config.on_angle_down, config.off_angle_down) == (45, 65)
    assert (config.on_angle_up, config.off_angle_up) == (45, 65)
