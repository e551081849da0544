"""
Base class for gesture detectors: activation state, event delivery and the
start/stop lifecycle.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional
import logging

from .pose import HandPose

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Kinds of events a detector delivers to its callbacks."""
    ACTIVATED = "activated"
    DEACTIVATED = "deactivated"
    # Observability only; does not change is_active
    ABANDONED = "abandoned"


@dataclass(frozen=True)
class GestureEvent:
    """A detector transition."""
    kind: EventKind
    gesture: str
    elapsed: float = 0.0    # Time window value at the transition (seconds)
    reason: str = ""

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "gesture": self.gesture,
            "elapsed": self.elapsed,
            "reason": self.reason,
        }


class Detector:
    """
    A gesture recognizer driven by pose samples.

    Subclasses implement sample() (periodic task) and, when
    uses_frame_ticks is True, tick() (per-frame task), plus reset().
    Samples and ticks are ignored while the detector is stopped.
    """

    uses_frame_ticks = False

    def __init__(self, name: str, period: float):
        self.name = name
        self.period = period
        self._is_active = False
        self._is_running = False
        self._callbacks: List[Callable[[GestureEvent], None]] = []

    # -- events ---------------------------------------------------------

    def register_callback(self, callback: Callable[[GestureEvent], None]) -> None:
        self._callbacks.append(callback)

    def unregister_callback(self, callback: Callable[[GestureEvent], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _emit(self, kind: EventKind, elapsed: float = 0.0, reason: str = "") -> None:
        event = GestureEvent(kind=kind, gesture=self.name, elapsed=elapsed, reason=reason)
        logger.debug("%s: %s %s", self.name, kind.value, reason)
        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception:
                logger.exception("%s: callback failed for %s", self.name, kind.value)

    @property
    def is_active(self) -> bool:
        return self._is_active

    def activate(self, elapsed: float = 0.0, reason: str = "") -> None:
        """Turn the detector on. Fires ACTIVATED only on a real transition."""
        if self._is_active:
            return
        self._is_active = True
        self._emit(EventKind.ACTIVATED, elapsed, reason)

    def deactivate(self, reason: str = "") -> None:
        """Turn the detector off. Fires DEACTIVATED only on a real transition."""
        if not self._is_active:
            return
        self._is_active = False
        self._emit(EventKind.DEACTIVATED, reason=reason)

    def _abandon(self, elapsed: float, reason: str) -> None:
        self._emit(EventKind.ABANDONED, elapsed, reason)

    # -- lifecycle ------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start(self) -> None:
        """Begin from a clean idle state."""
        self.reset()
        self._is_running = True

    def stop(self) -> None:
        """Stop processing, force deactivation and drop all state."""
        self._is_running = False
        self.deactivate(reason="stopped")
        self.reset()

    # -- tasks ----------------------------------------------------------

    def sample(self, pose: Optional[HandPose], dt: float) -> None:
        raise NotImplementedError

    def tick(self, pose: Optional[HandPose], dt: float) -> None:
        pass

    def reset(self) -> None:
        raise NotImplementedError

    def reconfigure(self, config) -> None:
        raise NotImplementedError

    def describe(self) -> str:
        return f"{self.name}: {'ACTIVE' if self._is_active else 'inactive'}"
