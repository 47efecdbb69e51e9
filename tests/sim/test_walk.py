# tests/sim/test_walk.py
import pytest

from claim_sim.config.models import WalkModel
from claim_sim.domain.geo import distance
from claim_sim.sim.rng import RNGRegistry
from claim_sim.sim.walk import WalkSynthesizer


def test_default_square_walk(origin):
    walk = WalkSynthesizer(WalkModel())
    assert walk.length_m == pytest.approx(600.0)

    fixes = walk.fixes()
    # one fix every 13.9 m plus the final corner
    assert len(fixes) == 45
    assert fixes[0].point == origin and fixes[0].timestamp == 0.0
    assert fixes[-1].timestamp == pytest.approx(432.0)
    assert distance(fixes[-1].point, origin) == pytest.approx(0.0, abs=1e-6)
    assert all(f.accuracy_m is None for f in fixes)
    assert fixes[1].speed_mps == pytest.approx(5.0 / 3.6)
    assert distance(fixes[0].point, fixes[1].point) == pytest.approx(13.889, rel=1e-3)


def test_start_offset_shifts_timestamps():
    fixes = WalkSynthesizer(WalkModel(start_t=100.0)).fixes()
    assert fixes[0].timestamp == 100.0
    assert fixes[1].timestamp == pytest.approx(110.0)


def test_jitter_is_reproducible_per_seed():
    cfg = WalkModel(jitter_m=2.0)
    a = WalkSynthesizer(cfg, rng_registry=RNGRegistry(7, scenario="s")).fixes()
    b = WalkSynthesizer(cfg, rng_registry=RNGRegistry(7, scenario="s")).fixes()
    c = WalkSynthesizer(cfg, rng_registry=RNGRegistry(8, scenario="s")).fixes()
    assert a == b
    assert [f.point for f in a] != [f.point for f in c]
    assert a[0].accuracy_m == 4.0


def test_dropout_keeps_first_fix_and_time_order(origin):
    fixes = WalkSynthesizer(WalkModel(dropout=0.5), rng_registry=RNGRegistry(3)).fixes()
    assert fixes[0].point == origin
    assert 1 < len(fixes) < 45
    ts = [f.timestamp for f in fixes]
    assert ts == sorted(ts) and len(set(ts)) == len(ts)


def test_zero_length_legs_are_tolerated():
    walk = WalkSynthesizer(WalkModel(waypoints=[(0, 0), (0, 0), (30, 0)]))
    assert walk.length_m == pytest.approx(30.0)
    assert len(walk.fixes()) == 4  # s = 0, 13.9, 27.8, 30
