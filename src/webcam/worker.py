"""
Background worker for hand tracking and gesture detection.
Runs in a separate QThread to avoid blocking the UI.
"""
from typing import List, Optional
import logging
import time
import threading
from PyQt5.QtCore import QObject, pyqtSignal

from gestures import DetectorRunner, PoseSampler, build_detectors

from .landmarks import HandLandmarks
from .sensor import WebcamHandSensor

logger = logging.getLogger(__name__)


class GestureWorker(QObject):
    """
    Polls the hand tracker and drives every configured detector.

    A capture thread pulls landmarks as fast as the camera allows; the
    processing loop feeds the latest detection to the pose sensor and polls
    each detector runner at worker.frame_rate.
    """
    # Signals
    gesture_event = pyqtSignal(object)  # Emits GestureEvent
    hand_lost = pyqtSignal()
    error = pyqtSignal(str)

    def __init__(self, config, tracker=None, parent=None):
        super().__init__(parent)
        self._config = config
        self._tracker = tracker
        self._sensor = WebcamHandSensor(config.sensor)
        self._runners: List[DetectorRunner] = []
        self._is_running = False
        self._had_hand = False

        self._latest_landmarks: Optional[HandLandmarks] = None
        self._has_new_landmarks = False
        self._landmarks_lock = threading.Lock()
        self._capture_thread: Optional[threading.Thread] = None

    @property
    def runners(self) -> List[DetectorRunner]:
        return self._runners

    @property
    def detectors(self):
        return [r.detector for r in self._runners]

    def submit_landmarks(self, landmarks: Optional[HandLandmarks]) -> None:
        """Hand over the latest detection (None when no hand was found)."""
        with self._landmarks_lock:
            self._latest_landmarks = landmarks
            self._has_new_landmarks = True

    def _capture_loop(self):
        """Background thread to pull camera frames as fast as possible."""
        while self._is_running:
            try:
                self.submit_landmarks(self._tracker.get_landmarks())
            except Exception:
                logger.exception("Capture thread error")
                time.sleep(0.1)  # Cool down on error

    def _setup(self) -> bool:
        if self._tracker is None:
            from .hand_tracker import HandTracker
            self._tracker = HandTracker(self._config)

        if not self._tracker.start():
            self.error.emit("Could not open camera")
            return False

        sampler = PoseSampler(self._sensor)
        self._runners = []
        for detector in build_detectors(self._config.detectors):
            detector.register_callback(self.gesture_event.emit)
            runner = DetectorRunner(detector, sampler)
            runner.start()
            self._runners.append(runner)
            logger.info("Detector %s started (period %.3fs)", detector.name, detector.period)

        self._is_running = True
        return True

    def _step(self) -> None:
        """One loop iteration: consume the latest detection, poll all detectors."""
        with self._landmarks_lock:
            fresh = self._has_new_landmarks
            landmarks = self._latest_landmarks
            self._has_new_landmarks = False
            self._latest_landmarks = None

        if fresh:
            self._sensor.update(landmarks)

        has_hand = self._sensor.is_tracked()
        if self._had_hand and not has_hand:
            self.hand_lost.emit()
        self._had_hand = has_hand

        for runner in self._runners:
            runner.poll()

    def _teardown(self) -> None:
        self._is_running = False
        if self._capture_thread:
            self._capture_thread.join(timeout=1.0)
            self._capture_thread = None
        # Stopping a runner deactivates its detector synchronously
        for runner in self._runners:
            runner.stop()
        self._sensor.reset()
        if self._tracker:
            self._tracker.stop()

    def start_process(self):
        """Main processing loop. Runs in the worker thread."""
        if not self._setup():
            return

        self._capture_thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._capture_thread.start()

        min_interval = 1.0 / max(1, self._config.worker.frame_rate)

        try:
            while self._is_running:
                loop_start = time.perf_counter()
                self._step()

                elapsed = time.perf_counter() - loop_start
                sleep_time = min_interval - elapsed
                if sleep_time > 0:
                    time.sleep(sleep_time)

        except Exception as e:
            logger.exception("Worker loop failed")
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._teardown()

    def stop_process(self):
        """Signal the loop to stop; detectors are stopped in the worker thread."""
        self._is_running = False
