import pytest

from gestures import (
    DOWN,
    FORWARD,
    UP,
    FingerExtensionMatcher,
    FingerState,
    HysteresisAngleGate,
    TimedSwitch,
    angle_between,
)
from conftest import from_down


def test_angle_between_reference_directions():
    assert angle_between(UP, DOWN) == pytest.approx(180.0)
    assert angle_between(UP, FORWARD) == pytest.approx(90.0)
    assert angle_between(UP, (0.0, 5.0, 0.0)) == pytest.approx(0.0)


def test_angle_between_degenerate_vector():
    assert angle_between((0.0, 0.0, 0.0), UP) == 0.0


@pytest.fixture
def gate():
    return HysteresisAngleGate(on_angle=45, off_angle=65, reference=DOWN)


def test_gate_engages_at_on_angle(gate):
    assert gate.evaluate(from_down(50)) is False
    assert gate.evaluate(from_down(45)) is True


def test_gate_holds_inside_band(gate):
    gate.evaluate(from_down(10))
    # Above on angle but not past off angle
    assert gate.evaluate(from_down(55)) is True
    assert gate.evaluate(from_down(65)) is True
    assert gate.evaluate(from_down(66)) is False
    # Back in the band without reaching on angle: stays off
    assert gate.evaluate(from_down(55)) is False


def test_gate_is_idempotent(gate):
    results = [gate.evaluate(from_down(55)) for _ in range(5)]
    assert results == [False] * 5
    gate.evaluate(from_down(30))
    results = [gate.evaluate(from_down(55)) for _ in range(5)]
    assert results == [True] * 5


def test_gate_clamps_off_angle_below_on_angle():
    gate = HysteresisAngleGate(on_angle=40, off_angle=20, reference=UP)
    assert gate.off_angle == 40
    gate.configure(30, 10)
    assert gate.on_angle == 30
    assert gate.off_angle == 30


def test_gate_configure_keeps_flag(gate):
    gate.evaluate(from_down(0))
    gate.configure(10, 20)
    assert gate.engaged is True
    gate.reset()
    assert gate.engaged is False


def test_matcher_all_extended():
    matcher = FingerExtensionMatcher()
    assert matcher.matches([True] * 5)
    assert not matcher.matches([True, True, False, True, True])


def test_matcher_mixed_requirements():
    matcher = FingerExtensionMatcher([
        "either",
        FingerState.EXTENDED,
        FingerState.NOT_EXTENDED,
        "not_extended",
        FingerState.EITHER,
    ])
    assert matcher.matches([False, True, False, False, True])
    assert matcher.matches([True, True, False, False, False])
    assert not matcher.matches([True, False, False, False, False])
    assert not matcher.matches([True, True, True, False, False])


def test_matcher_rejects_bad_requirements():
    with pytest.raises(ValueError):
        FingerExtensionMatcher([FingerState.EXTENDED] * 4)
    with pytest.raises(ValueError):
        FingerExtensionMatcher(["bent"] * 5)


def test_matcher_rejects_wrong_flag_count():
    assert not FingerExtensionMatcher().matches([True] * 4)


def test_timed_switch_accumulates_only_when_armed():
    timer = TimedSwitch(limit=0.1)
    timer.advance(0.5)
    assert timer.elapsed == 0.0
    assert not timer.expired

    timer.arm()
    timer.advance(0.06)
    assert timer.within_limit
    timer.advance(0.04)
    assert timer.within_limit
    assert not timer.expired
    timer.advance(0.01)
    assert timer.expired

    timer.reset()
    assert timer.elapsed == 0.0
    assert timer.armed is False


def test_timed_switch_tolerates_clock_drift():
    timer = TimedSwitch(limit=0.1)
    timer.arm()
    # 0.4 - 0.3 in floating point
    timer.advance(0.10000000000000003)
    assert timer.within_limit
    assert not timer.expired
