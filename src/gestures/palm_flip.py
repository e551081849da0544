"""
Palm flip detection.

Activates when the palm turns from facing down to facing up within
maximum_flip_time, and deactivates once the palm leaves the up position.
"""
from enum import Enum, auto
from typing import Optional
import logging

from .config import PalmFlipConfig
from .detector import Detector
from .gates import HysteresisAngleGate, TimedSwitch
from .pose import DOWN, UP, HandPose, is_live

logger = logging.getLogger(__name__)


class PalmFlipState(Enum):
    IDLE = auto()
    PALM_DOWN = auto()
    FLIPPING = auto()
    PALM_UP = auto()


class PalmFlipDetector(Detector):
    """
    Palm flip state machine.

    Two hysteresis gates watch the palm normal against down and up. Leaving
    the down gate starts the flip timer; reaching the up gate before it runs
    out activates the detector.
    """

    def __init__(self, config: Optional[PalmFlipConfig] = None):
        config = config or PalmFlipConfig()
        super().__init__(config.name, config.period)
        self._config = config
        self._down_gate = HysteresisAngleGate(
            config.on_angle_down, config.off_angle_down, DOWN, label=f"{config.name} down"
        )
        self._up_gate = HysteresisAngleGate(
            config.on_angle_up, config.off_angle_up, UP, label=f"{config.name} up"
        )
        self._flip_timer = TimedSwitch(config.maximum_flip_time)
        self._state = PalmFlipState.IDLE

    @property
    def config(self) -> PalmFlipConfig:
        return self._config

    @property
    def state(self) -> PalmFlipState:
        return self._state

    @property
    def is_palm_down(self) -> bool:
        return self._down_gate.engaged

    @property
    def is_palm_up(self) -> bool:
        return self._up_gate.engaged

    @property
    def flip_time(self) -> float:
        return self._flip_timer.elapsed

    def sample(self, pose: Optional[HandPose], dt: float) -> None:
        if not self.is_running:
            return
        if not is_live(pose):
            self._handle_tracking_lost()
            return

        is_down = self._down_gate.evaluate(pose.palm_normal)
        is_up = self._up_gate.evaluate(pose.palm_normal)

        if self._state is PalmFlipState.PALM_UP and not is_up:
            self._state = PalmFlipState.IDLE
            self.deactivate(reason="palm left up position")

        if is_down and self._state in (PalmFlipState.IDLE, PalmFlipState.PALM_UP):
            self._state = PalmFlipState.PALM_DOWN
        elif self._state is PalmFlipState.PALM_DOWN and not is_down:
            # dt covers time spent palm down, so the flip starts at zero
            self._state = PalmFlipState.FLIPPING
            self._flip_timer.arm()
            logger.debug("%s: flip started", self.name)
        elif self._state is PalmFlipState.FLIPPING:
            self._flip_timer.advance(dt)

        if self._state is PalmFlipState.FLIPPING:
            elapsed = self._flip_timer.elapsed
            if is_up and self._flip_timer.within_limit:
                self._flip_timer.reset()
                self._state = PalmFlipState.PALM_UP
                self.activate(elapsed=elapsed, reason="palm flipped")
            elif self._flip_timer.expired:
                self._flip_timer.reset()
                self._state = PalmFlipState.IDLE
                self._abandon(elapsed, "flip too slow")

    def _handle_tracking_lost(self) -> None:
        if self._state is PalmFlipState.FLIPPING:
            self._abandon(self._flip_timer.elapsed, "tracking lost")
        self.deactivate(reason="tracking lost")
        self._flip_timer.reset()
        self._state = PalmFlipState.IDLE

    def reset(self) -> None:
        self._down_gate.reset()
        self._up_gate.reset()
        self._flip_timer.reset()
        self._state = PalmFlipState.IDLE

    def reconfigure(self, config: PalmFlipConfig) -> None:
        """Apply new thresholds without losing the current state."""
        self._config = config
        self.period = config.period
        self._down_gate.configure(config.on_angle_down, config.off_angle_down)
        self._up_gate.configure(config.on_angle_up, config.off_angle_up)
        self._flip_timer.limit = config.maximum_flip_time

    def describe(self) -> str:
        return f"{super().describe()} [{self._state.name}] flip={self._flip_timer.elapsed:.2f}s"
