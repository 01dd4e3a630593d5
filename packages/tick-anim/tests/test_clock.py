"""Tests for time sources and tick period conversion."""

import pytest
from tick_anim.clock import ManualClock, MonotonicClock, tick_period_ms


def test_manual_clock_starts_at_zero():
    assert ManualClock().now() == 0.0


def test_manual_clock_custom_start():
    assert ManualClock(250.0).now() == 250.0


def test_manual_clock_advance():
    clock = ManualClock()
    assert clock.advance(16.5) == 16.5
    assert clock.advance(3.5) == 20.0
    assert clock.now() == 20.0


def test_manual_clock_rejects_negative_advance():
    clock = ManualClock()
    with pytest.raises(ValueError):
        clock.advance(-1.0)


def test_manual_clock_set_forward_only():
    clock = ManualClock(100.0)
    clock.set(150.0)
    assert clock.now() == 150.0
    with pytest.raises(ValueError, match="backwards"):
        clock.set(149.0)


def test_monotonic_clock_never_goes_back():
    clock = MonotonicClock()
    readings = [clock.now() for _ in range(100)]
    assert readings == sorted(readings)


def test_tick_period_conversion():
    assert tick_period_ms(10) == 100.0
    assert tick_period_ms(20) == 50.0
    assert abs(tick_period_ms(60) - 1000.0 / 60) < 1e-9


def test_tick_period_rejects_non_positive():
    with pytest.raises(ValueError, match="frequency must be positive"):
        tick_period_ms(0)
    with pytest.raises(ValueError, match="frequency must be positive"):
        tick_period_ms(-5)
