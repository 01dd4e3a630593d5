"""Tests for label-based mutual exclusion between engines."""

import threading

import pytest
from tick_anim import (
    EmptyAnimatorError,
    LabelRegistry,
    ManualClock,
    PlaybackEngine,
    PlayMode,
    Scheduler,
    StopMode,
)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


@pytest.fixture
def registry():
    return LabelRegistry()


def make_engine(scheduler, registry, label="door"):
    engine = PlaybackEngine(1.0, 10, scheduler=scheduler, label=label, registry=registry)
    engine.add_property("linear", 0.0, 1.0, lambda v: None)
    return engine


def tick(clock, scheduler, n=1):
    for _ in range(n):
        clock.advance(100.0)
        scheduler.step()


# --- Engine contention ---

def test_second_engine_blocked(scheduler, registry):
    a = make_engine(scheduler, registry)
    b = make_engine(scheduler, registry)

    assert a.play() is True
    assert b.play() is False
    assert a.is_playing()
    assert not b.is_playing()
    assert len(scheduler) == 1
    assert registry.holder("door") is a


def test_blocked_play_has_no_side_effects(clock, scheduler, registry):
    a = make_engine(scheduler, registry)
    b = make_engine(scheduler, registry)
    b_done = []
    a.play(PlayMode.LOOP_FORWARD)

    assert b.play(on_complete=lambda: b_done.append(True)) is False
    tick(clock, scheduler, 30)
    assert b_done == []
    assert registry.holder("door") is a


def test_label_freed_on_completion(clock, scheduler, registry):
    a = make_engine(scheduler, registry)
    b = make_engine(scheduler, registry)
    a.play()
    tick(clock, scheduler, 11)

    assert not registry.is_active("door")
    assert b.play() is True


def test_label_freed_on_immediate_stop(scheduler, registry):
    a = make_engine(scheduler, registry)
    b = make_engine(scheduler, registry)
    a.play(PlayMode.LOOP_FORWARD)

    a.stop(StopMode.IMMEDIATE)
    assert b.play() is True


def test_label_kept_while_finishing(clock, scheduler, registry):
    a = make_engine(scheduler, registry)
    b = make_engine(scheduler, registry)
    a.play(PlayMode.LOOP_FORWARD)
    tick(clock, scheduler, 2)

    a.stop(StopMode.FINISH_CYCLE)
    assert b.play() is False
    tick(clock, scheduler, 9)
    assert b.play() is True


def test_same_engine_can_retrigger(scheduler, registry):
    a = make_engine(scheduler, registry)
    assert a.play() is True
    assert a.play(PlayMode.REVERSE) is True
    assert len(scheduler) == 1
    assert registry.holder("door") is a


def test_different_labels_independent(scheduler, registry):
    a = make_engine(scheduler, registry, label="door")
    b = make_engine(scheduler, registry, label="window")
    assert a.play() is True
    assert b.play() is True


def test_separate_registries_independent(scheduler):
    a = make_engine(scheduler, LabelRegistry())
    b = make_engine(scheduler, LabelRegistry())
    assert a.play() is True
    assert b.play() is True


def test_empty_engine_does_not_take_label(scheduler, registry):
    engine = PlaybackEngine(1.0, 10, scheduler=scheduler, label="door", registry=registry)
    with pytest.raises(EmptyAnimatorError):
        engine.play()
    assert not registry.is_active("door")


def test_sink_error_releases_label(clock, scheduler, registry):
    engine = PlaybackEngine(1.0, 10, scheduler=scheduler, label="door", registry=registry)

    def broken(v):
        raise RuntimeError("sink failed")

    engine.add_property("linear", 0.0, 1.0, broken)
    engine.play()
    with pytest.raises(RuntimeError, match="sink failed"):
        tick(clock, scheduler)

    assert not engine.is_playing()
    assert not registry.is_active("door")
    assert len(scheduler) == 0


# --- Construction ---

def test_label_requires_registry(scheduler):
    with pytest.raises(ValueError, match="LabelRegistry"):
        PlaybackEngine(1.0, 10, scheduler=scheduler, label="door")


def test_empty_label_rejected(scheduler, registry):
    with pytest.raises(ValueError, match="non-empty"):
        PlaybackEngine(1.0, 10, scheduler=scheduler, label="", registry=registry)


# --- Registry ---

def test_registry_get_or_create():
    registry = LabelRegistry()
    assert registry.labels() == frozenset()
    assert not registry.is_active("lamp")

    owner = object()
    assert registry.acquire("lamp", owner) is True
    assert registry.labels() == frozenset({"lamp"})
    assert registry.is_active("lamp")


def test_registry_release_by_non_owner_ignored():
    registry = LabelRegistry()
    owner = object()
    registry.acquire("lamp", owner)

    assert registry.release("lamp", object()) is False
    assert registry.holder("lamp") is owner
    assert registry.release("lamp", owner) is True
    assert registry.holder("lamp") is None
    assert "lamp" in registry.labels()


def test_registry_acquire_is_atomic():
    registry = LabelRegistry()
    barrier = threading.Barrier(16)
    wins = []

    def contend():
        owner = object()
        barrier.wait()
        if registry.acquire("lamp", owner):
            wins.append(owner)

    threads = [threading.Thread(target=contend) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(wins) == 1
    assert registry.holder("lamp") is wins[0]
