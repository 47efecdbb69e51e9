# tests/domain/test_path.py
import pytest

from claim_sim.domain.path import PathRecorder, TrackedPath


def test_first_fix_is_always_recorded(fix_at):
    rec = PathRecorder()
    assert rec.try_record(fix_at(0, 0, 0.0))
    assert len(rec.path) == 1
    assert rec.path.version == 1


def test_only_moves_over_ten_meters_are_recorded(fix_at):
    rec = PathRecorder()
    rec.try_record(fix_at(0, 0, 0.0))
    assert not rec.try_record(fix_at(0, 9.9, 5.0))
    assert rec.try_record(fix_at(0, 10.1, 10.0))
    # measured from the last recorded point, not the last fix
    assert not rec.try_record(fix_at(0, 19.0, 15.0))
    assert rec.try_record(fix_at(0, 21.0, 20.0))
    assert len(rec.path) == 3


def test_closed_path_is_frozen(fix_at):
    path = TrackedPath()
    rec = PathRecorder(path, min_distance_m=10.0)
    rec.try_record(fix_at(0, 0, 0.0))
    path.mark_closed()
    version = path.version

    assert not rec.try_record(fix_at(0, 50, 10.0))
    assert len(path) == 1 and path.version == version
    with pytest.raises(RuntimeError):
        path.append(fix_at(0, 60, 20.0).point)


def test_clear_reopens_path(fix_at):
    path = TrackedPath()
    path.append(fix_at(0, 0, 0.0).point)
    path.mark_closed()
    path.clear()
    assert not path.closed and len(path) == 0 and path.version == 0
    assert path.first is None and path.last is None
