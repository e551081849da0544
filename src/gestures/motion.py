"""
Wave and swipe detection.

Both gestures use the same machine: hold the hand in a start pose (fingers
matching the extension requirement, middle finger pointing along a reference
direction), leave the start pose, then sweep the wrist or arm past a
threshold angle from up within a time limit. A double wave needs two
completed half-waves inside one time limit.
"""
from enum import Enum, auto
from typing import Optional, Union
import logging

from .config import MotionMode, SwipeConfig, WaveConfig, WaveVariant
from .detector import Detector
from .gates import FingerExtensionMatcher, HysteresisAngleGate, TimedSwitch
from .pose import REFERENCE_DIRECTIONS, UP, HandPose, Vector3, angle_between, is_live

logger = logging.getLogger(__name__)

MotionConfig = Union[WaveConfig, SwipeConfig]


class MotionState(Enum):
    IDLE = auto()
    POINTING_UP = auto()    # Start pose latched
    WAVING = auto()         # Motion under way, timer running


class MotionDetector(Detector):
    """
    Start-pose-then-sweep state machine.

    sample() refreshes the extension and pointing gates at the configured
    period; tick() runs every frame and accumulates the motion time.
    """

    uses_frame_ticks = True

    def __init__(self, config: MotionConfig):
        super().__init__(config.name, config.period)
        self._config = config
        self._matcher = FingerExtensionMatcher(config.fingers)
        self._pointing_gate = HysteresisAngleGate(
            config.hand_on_angle,
            config.hand_off_angle,
            REFERENCE_DIRECTIONS[config.pointing_reference],
            label=f"{config.name} hand",
        )
        self._timer = TimedSwitch(config.maximum_time)
        self._state = MotionState.IDLE
        self._fingers_extended = False
        self._completed_first_half = False

    @property
    def config(self) -> MotionConfig:
        return self._config

    @property
    def mode(self) -> MotionMode:
        return self._config.mode

    @property
    def variant(self) -> WaveVariant:
        return self._config.variant

    @property
    def state(self) -> MotionState:
        return self._state

    @property
    def fingers_extended(self) -> bool:
        return self._fingers_extended

    @property
    def pointing_up(self) -> bool:
        return self._pointing_gate.engaged

    @property
    def completed_first_half(self) -> bool:
        return self._completed_first_half

    @property
    def motion_time(self) -> float:
        return self._timer.elapsed

    def _watched_direction(self, pose: HandPose) -> Vector3:
        if self._config.mode is MotionMode.ARM:
            return pose.arm_direction
        return pose.finger_direction

    def _matches_direction(self, pose: HandPose) -> bool:
        """Hook for direction discrimination; every motion is accepted."""
        return True

    def sample(self, pose: Optional[HandPose], dt: float) -> None:
        if not self.is_running:
            return
        if not is_live(pose):
            self._fingers_extended = False
            self.deactivate(reason="tracking lost")
            self._reset_motion(abandon_reason="tracking lost")
            return
        self._fingers_extended = self._matcher.matches(pose.fingers_extended)
        self._pointing_gate.evaluate(pose.finger_direction)

    def tick(self, pose: Optional[HandPose], dt: float) -> None:
        if not self.is_running or not is_live(pose):
            return

        angle = angle_between(self._watched_direction(pose), UP)
        pointing = self._pointing_gate.engaged

        if self._state is MotionState.IDLE and self._fingers_extended and pointing:
            if self._completed_first_half:
                self._complete()
                return
            self._state = MotionState.POINTING_UP
            logger.debug("%s: start pose", self.name)

        if self._state is MotionState.POINTING_UP and not pointing:
            # dt covers time spent in the start pose, so the motion starts at zero
            self._state = MotionState.WAVING
            self._timer.arm()
            logger.debug("%s: motion started", self.name)
        elif self._timer.armed:
            self._timer.advance(dt)
            if self._timer.expired:
                self._reset_motion(abandon_reason="too slow")
                return

        if (
            self._state is MotionState.WAVING
            and angle >= self._config.motion_angle
            and self._timer.within_limit
            and self._matches_direction(pose)
        ):
            if self._config.variant is WaveVariant.DOUBLE and not self._completed_first_half:
                self._completed_first_half = True
                self._state = MotionState.IDLE
                logger.debug("%s: first half done at %.3fs", self.name, self._timer.elapsed)
            else:
                self._complete()

    def _complete(self) -> None:
        elapsed = self._timer.elapsed
        self._reset_motion()
        self.activate(elapsed=elapsed, reason="completed")

    def _reset_motion(self, abandon_reason: str = "") -> None:
        in_progress = self._state is MotionState.WAVING or self._completed_first_half
        elapsed = self._timer.elapsed
        self._timer.reset()
        self._state = MotionState.IDLE
        self._completed_first_half = False
        if abandon_reason and in_progress:
            self._abandon(elapsed, abandon_reason)

    def reset(self) -> None:
        self._pointing_gate.reset()
        self._fingers_extended = False
        self._timer.reset()
        self._state = MotionState.IDLE
        self._completed_first_half = False

    def reconfigure(self, config: MotionConfig) -> None:
        """Apply new thresholds; gate flags and the running timer are kept."""
        if config.variant is not self._config.variant:
            # The latch has no meaning across variants
            self._reset_motion()
        self._config = config
        self.period = config.period
        self._matcher = FingerExtensionMatcher(config.fingers)
        reference = REFERENCE_DIRECTIONS[config.pointing_reference]
        if reference != self._pointing_gate.reference:
            self._pointing_gate = HysteresisAngleGate(
                config.hand_on_angle, config.hand_off_angle, reference, label=f"{config.name} hand"
            )
        else:
            self._pointing_gate.configure(config.hand_on_angle, config.hand_off_angle)
        self._timer.limit = config.maximum_time

    def describe(self) -> str:
        half = " half" if self._completed_first_half else ""
        return (
            f"{super().describe()} [{self._state.name}{half}] "
            f"ext={int(self._fingers_extended)} up={int(self.pointing_up)} "
            f"t={self._timer.elapsed:.2f}s"
        )


class WaveDetector(MotionDetector):
    """Single or double wave, done with the wrist or the whole arm."""

    def __init__(self, config: Optional[WaveConfig] = None):
        super().__init__(config or WaveConfig())


class SwipeDetector(MotionDetector):
    """
    Wrist or arm swipe.

    The configured direction is kept for callers but not checked: any sweep
    past swipe_angle completes the swipe.
    """

    def __init__(self, config: Optional[SwipeConfig] = None):
        super().__init__(config or SwipeConfig())

    @property
    def direction(self):
        return self._config.direction
