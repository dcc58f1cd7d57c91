import pytest

from motion import Ease, Decelerate


@pytest.mark.parametrize("x0,x1,v0,t0,t1", [
    (0.0, 100.0, 0.0, 0.0, 50.0),
    (10.0, -30.0, 2.5, 1000.0, 1050.0),
    (-5.0, -5.0, -1.0, 3.0, 4.0),
    (0.0, 1e6, 100.0, 0.0, 1.0),
    (42.0, 7.0, 0.0, 12345.6, 12400.1),
])
def test_ease_arrives_exactly_and_at_rest(x0, x1, v0, t0, t1):
    e = Ease(x0, x1, v0, t0, t1)
    assert e.x(t1) == x1
    assert e.v(t1) == 0
    assert e.x(t1 + 500) == x1
    assert e.v(t1 + 500) == 0
    assert e.end == t1


def test_ease_starts_at_origin_with_given_velocity():
    e = Ease(10.0, 30.0, 1.5, 100.0, 150.0)
    assert e.x(100.0) == pytest.approx(10.0)
    assert e.v(100.0) == pytest.approx(1.5)


def test_ease_is_continuous_at_midpoint():
    e = Ease(0.0, 100.0, 0.0, 0.0, 50.0)
    eps = 1e-7
    assert e.x(25.0 - eps) == pytest.approx(e.x(25.0 + eps), abs=1e-4)
    assert e.v(25.0 - eps) == pytest.approx(e.v(25.0 + eps), abs=1e-4)
    # From rest, the midpoint carries twice the average velocity
    assert e.v(25.0) == pytest.approx(4.0)


def test_ease_approaches_target_smoothly():
    e = Ease(0.0, 100.0, 0.0, 0.0, 50.0)
    assert e.x(49.999) == pytest.approx(100.0, abs=1e-3)
    assert e.v(49.999) == pytest.approx(0.0, abs=1e-3)


def test_ease_rejects_empty_interval():
    with pytest.raises(ValueError):
        Ease(0.0, 1.0, 0.0, 5.0, 5.0)


def test_decelerate_stops_at_end():
    d = Decelerate(0.0, 2.0, 0.0, 100.0)
    assert d.v(0.0) == pytest.approx(2.0)
    assert d.v(50.0) == pytest.approx(1.0)
    assert d.v(100.0) == 0
    # Area under a linear ramp from 2 to 0 over 100 ms
    assert d.x(100.0) == pytest.approx(100.0)
    assert d.x(250.0) == pytest.approx(100.0)
    assert d.v(250.0) == 0


def test_decelerate_backwards():
    d = Decelerate(50.0, -1.0, 10.0, 30.0)
    assert d.x(30.0) == pytest.approx(40.0)
    assert d.x(20.0) == pytest.approx(42.5)


def test_replacing_ease_keeps_velocity():
    first = Ease(0.0, 100.0, 0.0, 0.0, 50.0)
    now = 20.0
    second = Ease(first.x(now), 300.0, first.v(now), now, now + 50.0)
    assert second.x(now) == pytest.approx(first.x(now))
    assert second.v(now) == pytest.approx(first.v(now))
