"""
Hand gesture detectors - webcam runner

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

logger = logging.getLogger("gestures.main")


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Palm flip, wave and swipe detection from a webcam",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--detector",
        action="append",
        choices=["palm_flip", "wave", "swipe"],
        default=None,
        help="Only run detectors of this type (repeatable)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show camera feed with landmarks and detector states",
    )

    return parser.parse_args()


def describe_event(event):
    text = f"{event.gesture}: {event.kind.value}"
    if event.reason:
        text += f" ({event.reason})"
    return text


def run_webcam_debug(config):
    """
    Run in debug mode - camera feed with landmarks and detector states.
    Detectors are polled from the display loop.
    """
    import cv2
    from gestures import DetectorRunner, PoseSampler, build_detectors
    from webcam import WebcamHandSensor
    from webcam.hand_tracker import HandTracker

    tracker = HandTracker(config)
    sensor = WebcamHandSensor(config.sensor)
    sampler = PoseSampler(sensor)

    runners = []
    for detector in build_detectors(config.detectors):
        detector.register_callback(lambda event: logger.info(describe_event(event)))
        runners.append(DetectorRunner(detector, sampler))

    logger.info("Starting webcam debug mode, press 'q' to quit")

    if not tracker.start():
        logger.error("Could not open camera")
        return 1

    for runner in runners:
        runner.start()

    try:
        while True:
            landmarks = tracker.get_landmarks()
            sensor.update(landmarks)
            for runner in runners:
                runner.poll()

            frame = tracker.get_frame_with_landmarks(landmarks)
            if frame is not None:
                cv2.putText(
                    frame, "Tracked" if sensor.is_tracked() else "No hand", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2
                )
                for i, runner in enumerate(runners):
                    color = (0, 255, 0) if runner.detector.is_active else (255, 255, 255)
                    cv2.putText(
                        frame, runner.detector.describe(), (10, 60 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 1
                    )
                cv2.imshow("Gesture Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        for runner in runners:
            runner.stop()
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_webcam_mode(config):
    """Run the detectors in a background Qt worker and log their events."""
    import signal
    import atexit
    from PyQt5.QtCore import QCoreApplication, QThread, Qt
    from webcam.worker import GestureWorker

    app = QCoreApplication(sys.argv)

    thread = QThread()
    worker = GestureWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        logger.info("Cleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        logger.info("Received signal %d, shutting down...", signum)
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Use QueuedConnection so handlers run in the main thread
    thread.started.connect(worker.start_process)
    worker.gesture_event.connect(lambda event: logger.info(describe_event(event)), Qt.QueuedConnection)
    worker.hand_lost.connect(lambda: logger.info("Hand lost"), Qt.QueuedConnection)
    worker.error.connect(lambda msg: logger.error("WORKER ERROR: %s", msg), Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main():
    """Main entry point."""
    args = parse_args()

    from webcam import load_config
    config = load_config(args.config)

    level = "DEBUG" if args.debug else config.logging.level
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.detector:
        from gestures import DETECTOR_TYPES
        wanted = tuple(DETECTOR_TYPES[name] for name in args.detector)
        config.detectors = [d for d in config.detectors if isinstance(d, wanted)]

    logger.info("Detectors: %s", ", ".join(d.name for d in config.detectors) or "none")

    if args.debug:
        return run_webcam_debug(config)
    return run_webcam_mode(config)


if __name__ == "__main__":
    sys.exit(main())
