# tests/domain/test_validation.py
import math

import pytest

from claim_sim.domain.path import TrackedPath
from claim_sim.domain.validation import (
    InsufficientArea,
    InsufficientDistance,
    SelfIntersecting,
    TerritoryValidator,
    TooFewPoints,
    ValidationFailure,
)


@pytest.fixture
def path_of(local):
    def _make(*offsets) -> TrackedPath:
        path = TrackedPath()
        for p in local(*offsets):
            path.append(p)
        return path

    return _make


def test_sixty_meter_square_is_valid(path_of):
    path = path_of(
        (0, 0), (20, 0), (40, 0), (60, 0), (60, 30), (60, 60),
        (40, 60), (20, 60), (0, 60), (0, 40), (0, 20), (0, 5),
    )  # fmt: skip
    verdict = TerritoryValidator().validate(path)
    assert verdict.valid
    assert verdict.reason is None
    assert verdict.area_m2 == pytest.approx(3600, rel=0.01)


def test_too_few_points(path_of):
    path = path_of(*[(i * 20, 0) for i in range(9)])
    verdict = TerritoryValidator().validate(path)
    assert not verdict.valid
    assert verdict.reason == TooFewPoints(9, 10)
    assert verdict.area_m2 == 0.0
    assert "9" in verdict.reason.message


def test_tiny_circle_is_too_short(path_of):
    ring = [(2 * math.cos(k * math.pi / 5), 2 * math.sin(k * math.pi / 5)) for k in range(10)]
    verdict = TerritoryValidator().validate(path_of(*ring))
    assert isinstance(verdict.reason, InsufficientDistance)
    assert verdict.reason.actual < 50
    assert verdict.area_m2 == 0.0


def test_figure_eight_is_rejected(path_of):
    path = path_of(
        (0, 0), (0, 30), (0, 60), (20, 40), (40, 20), (60, 0),
        (60, 30), (60, 60), (45, 45), (15, 15), (0, 0),
    )  # fmt: skip
    verdict = TerritoryValidator().validate(path)
    assert verdict.reason == SelfIntersecting()
    assert "figure eight" in verdict.reason.message


def test_thin_strip_has_too_little_area(path_of):
    path = path_of(
        (0, 0), (10, 0), (20, 0), (30, 0), (30, 2),
        (20, 2), (10, 2), (0, 2), (0, 1), (0, 0),
    )  # fmt: skip
    verdict = TerritoryValidator().validate(path)
    assert isinstance(verdict.reason, InsufficientArea)
    assert verdict.reason.actual == pytest.approx(60, rel=0.02)
    assert verdict.area_m2 == verdict.reason.actual


def test_checks_run_in_order(path_of):
    # figure eight at a tenth of the size: short and crossing
    path = path_of(
        (0, 0), (0, 3), (0, 6), (2, 4), (4, 2), (6, 0),
        (6, 3), (6, 6), (4.5, 4.5), (1.5, 1.5), (0, 0),
    )  # fmt: skip
    assert isinstance(TerritoryValidator().validate(path).reason, InsufficientDistance)
    # same shape passes the distance gate once the minimum is lowered
    relaxed = TerritoryValidator(min_total_distance_m=5)
    assert relaxed.validate(path).reason == SelfIntersecting()


def test_failure_base_needs_a_message():
    with pytest.raises(TypeError):
        ValidationFailure()
    assert all(isinstance(f, ValidationFailure) for f in (SelfIntersecting(), TooFewPoints(1, 10)))
