"""
Cooperative scheduling of one detector's two tasks.
"""
from typing import Callable, Optional
import time

from .detector import Detector
from .gates import TIME_EPSILON
from .pose import PoseSampler


class DetectorRunner:
    """
    Drives a detector from a pose sampler.

    The periodic task runs every detector.period seconds; the frame task
    runs on every poll for detectors that use frame ticks. Each task
    measures its own elapsed time.
    """

    def __init__(
        self,
        detector: Detector,
        sampler: PoseSampler,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._detector = detector
        self._sampler = sampler
        self._clock = clock
        self._is_running = False
        self._last_sample: Optional[float] = None
        self._last_frame: Optional[float] = None

    @property
    def detector(self) -> Detector:
        return self._detector

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start(self) -> None:
        """Start both tasks from a clean detector state."""
        if self._is_running:
            return
        now = self._clock()
        self._last_sample = now
        self._last_frame = now
        self._detector.start()
        self._is_running = True

    def stop(self) -> None:
        """Cancel both tasks; an active detector is deactivated."""
        self._is_running = False
        self._last_sample = None
        self._last_frame = None
        self._detector.stop()

    def sample_due(self, now: Optional[float] = None) -> bool:
        if not self._is_running:
            return False
        now = self._clock() if now is None else now
        return now - self._last_sample >= self._detector.period - TIME_EPSILON

    def run_sample(self) -> None:
        if not self._is_running:
            return
        now = self._clock()
        dt = now - self._last_sample
        self._last_sample = now
        self._detector.sample(self._sampler.read(), dt)

    def run_frame(self) -> None:
        if not self._is_running or not self._detector.uses_frame_ticks:
            return
        now = self._clock()
        dt = now - self._last_frame
        self._last_frame = now
        self._detector.tick(self._sampler.read(), dt)

    def poll(self) -> None:
        """One scheduler tick: the periodic task when due, then the frame task."""
        if self.sample_due():
            self.run_sample()
        self.run_frame()
