import pytest

from pendelview.trail import TrailBuffer


def _fill(trail, n):
    for i in range(n):
        trail.append(float(i), float(-i))


@pytest.mark.parametrize("n, bound", [(3, 10), (10, 10), (27, 10), (1, 1)])
def test_sliding_window_keeps_most_recent(n, bound):
    trail = TrailBuffer(bound)
    _fill(trail, n)
    assert len(trail) == min(n, bound)
    expected = [(float(i), float(-i)) for i in range(max(0, n - bound), n)]
    assert trail.points() == expected


def test_persistent_trail_is_unbounded():
    trail = TrailBuffer(None)
    _fill(trail, 5000)
    assert len(trail) == 5000
    assert trail.max_len is None


def test_leaving_persistent_mode_keeps_newest_points():
    trail = TrailBuffer(None)
    _fill(trail, 50)
    trail.set_max_len(4)
    assert trail.points() == [(46.0, -46.0), (47.0, -47.0), (48.0, -48.0), (49.0, -49.0)]


def test_growing_bound_keeps_points():
    trail = TrailBuffer(3)
    _fill(trail, 3)
    trail.set_max_len(10)
    _fill(trail, 2)
    assert len(trail) == 5


def test_clear():
    trail = TrailBuffer(5)
    _fill(trail, 5)
    trail.clear()
    assert len(trail) == 0
    assert list(trail) == []


@pytest.mark.parametrize("bad", [0, -1])
def test_rejects_non_positive_bound(bad):
    with pytest.raises(ValueError):
        TrailBuffer(bad)
    with pytest.raises(ValueError):
        TrailBuffer(5).set_max_len(bad)
