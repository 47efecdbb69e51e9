# tests/domain/test_speed.py
import pytest

from claim_sim.domain.speed import (
    ReportedSpeed,
    SpeedGuard,
    SpeedState,
    SpeedVerdictKind,
)


@pytest.fixture
def primed(fix_at):
    """Guard + state that already accepted a fix at the origin, t=0."""
    guard, state = SpeedGuard(), SpeedState()
    guard.evaluate(fix_at(0, 0, 0.0), state)
    return guard, state


def test_first_fix_is_always_normal(fix_at):
    state = SpeedState()
    v = SpeedGuard().evaluate(fix_at(0, 0, 0.0), state)
    assert v.kind is SpeedVerdictKind.NORMAL
    assert v.speed_kmh is None
    assert state.last_fix is not None


def test_72_kmh_aborts_and_keeps_previous_state(primed, fix_at):
    guard, state = primed
    before = state.last_fix
    v = guard.evaluate(fix_at(0, 100, 5.0), state)
    assert v.kind is SpeedVerdictKind.ABORT
    assert v.speed_kmh == pytest.approx(72.0, rel=1e-6)
    assert state.last_fix is before
    assert "claim stopped" in v.message


def test_24_kmh_warns_and_moves_state_forward(primed, fix_at):
    guard, state = primed
    new = fix_at(0, 100, 15.0)
    v = guard.evaluate(new, state)
    assert v.kind is SpeedVerdictKind.WARN
    assert v.speed_kmh == pytest.approx(24.0, rel=1e-6)
    assert state.last_fix is new


def test_12_kmh_is_normal(primed, fix_at):
    guard, state = primed
    v = guard.evaluate(fix_at(0, 100, 30.0), state)
    assert v.is_normal
    assert v.speed_kmh == pytest.approx(12.0, rel=1e-6)
    assert v.message is None


@pytest.mark.parametrize("t", [0.0, -3.0])
def test_non_positive_elapsed_is_normal(primed, fix_at, t):
    guard, state = primed
    assert guard.evaluate(fix_at(0, 500, t), state).is_normal


def test_thresholds_are_inclusive_upper_bounds():
    g = SpeedGuard(warn_kmh=15, abort_kmh=30)
    assert g.classify(15.0).kind is SpeedVerdictKind.NORMAL
    assert g.classify(15.01).kind is SpeedVerdictKind.WARN
    assert g.classify(30.0).kind is SpeedVerdictKind.WARN
    assert g.classify(30.01).kind is SpeedVerdictKind.ABORT
    assert g.classify(None).kind is SpeedVerdictKind.NORMAL


def test_reported_speed_uses_sensor_value(fix_at):
    guard, state = SpeedGuard(estimator=ReportedSpeed()), SpeedState()
    guard.evaluate(fix_at(0, 0, 0.0), state)
    # displacement says walking, sensor says 36 km/h
    assert guard.evaluate(fix_at(0, 5, 10.0, speed_mps=10.0), state).kind is SpeedVerdictKind.ABORT
    assert guard.evaluate(fix_at(0, 5, 20.0, speed_mps=-1.0), state).is_normal
    assert guard.evaluate(fix_at(0, 5, 30.0), state).is_normal
