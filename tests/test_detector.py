import logging

from gestures import EventKind, GestureEvent, PalmFlipDetector, WaveDetector


def test_activate_and_deactivate_fire_on_transitions_only(events):
    detector = WaveDetector()
    detector.register_callback(events)

    detector.deactivate()
    detector.activate(elapsed=0.2, reason="completed")
    detector.activate()
    detector.deactivate(reason="tracking lost")
    detector.deactivate()

    assert events.kinds() == [EventKind.ACTIVATED, EventKind.DEACTIVATED]
    assert events.events[0] == GestureEvent(EventKind.ACTIVATED, "wave", 0.2, "completed")
    assert events.events[1].reason == "tracking lost"


def test_failing_callback_does_not_block_others(events, caplog):
    def broken(event):
        raise RuntimeError("boom")

    detector = PalmFlipDetector()
    detector.register_callback(broken)
    detector.register_callback(events)

    with caplog.at_level(logging.ERROR, logger="gestures.detector"):
        detector.activate()

    assert events.activations == 1
    assert detector.is_active
    assert "callback failed" in caplog.text


def test_unregister_callback(events):
    detector = PalmFlipDetector()
    detector.register_callback(events)
    detector.unregister_callback(events)
    detector.unregister_callback(events)
    detector.activate()
    assert events.events == []


def test_event_to_dict():
    event = GestureEvent(EventKind.ABANDONED, "swipe", 0.6, "too slow")
    assert event.to_dict() == {
        "kind": "abandoned",
        "gesture": "swipe",
        "elapsed": 0.6,
        "reason": "too slow",
    }


def test_describe_reports_state():
    detector = PalmFlipDetector()
    assert detector.describe().startswith("palm_flip: inactive [IDLE]")
    detector.activate()
    assert "ACTIVE" in detector.describe()

    wave = WaveDetector()
    assert "[IDLE]" in wave.describe()
    assert "ext=0 up=0" in wave.describe()


def test_start_and_stop_are_repeatable(events):
    detector = WaveDetector()
    detector.register_callback(events)
    detector.stop()
    assert events.events == []

    detector.start()
    detector.start()
    assert detector.is_running
    detector.activate()
    detector.stop()
    detector.stop()
    assert not detector.is_running
    assert events.kinds() == [EventKind.ACTIVATED, EventKind.DEACTIVATED]
