"""PlaybackEngine - plays a set of properties over a fixed duration."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from tick_anim.clock import tick_period_ms
from tick_anim.properties import Property, PropertySet
from tick_anim.registry import LabelRegistry
from tick_anim.scheduler import Routine, Scheduler, Task
from tick_anim.types import (
    Callback,
    Curve,
    EmptyAnimatorError,
    PlaybackActiveError,
    PlayMode,
    Sink,
    StopMode,
)

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _Run:
    mode: PlayMode
    forward: bool
    start_time: float
    properties: tuple[Property, ...] = ()
    on_complete: Callback | None = None
    on_cycle_end: Callback | None = None
    # Cleared by a backtrack stop: the next cycle end is final.
    looping: bool = True
    cancelled: bool = False
    task: Task | None = None
    _pending: StopMode = StopMode.NONE
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def pending_stop(self) -> StopMode:
        with self._lock:
            return self._pending

    def request_stop(self, mode: StopMode) -> None:
        with self._lock:
            self._pending = mode

    def take_backtrack(self) -> bool:
        with self._lock:
            if self._pending is StopMode.FINISH_CYCLE_REVERSE:
                self._pending = StopMode.NONE
                return True
            return False


class PlaybackEngine:
    """Interpolates registered properties over ``duration`` seconds.

    Values are pushed to each property's sink ``frequency`` times per second
    by a routine running on ``scheduler``. A new ``play()`` replaces any run
    in flight. Engines built with the same ``label`` and ``registry`` never
    play at the same time.
    """

    def __init__(
        self,
        duration: float,
        frequency: float,
        *,
        scheduler: Scheduler,
        label: str | None = None,
        registry: LabelRegistry | None = None,
    ) -> None:
        if duration <= 0:
            raise ValueError("duration must be positive")
        if label is not None:
            if not label:
                raise ValueError("label must be a non-empty string")
            if registry is None:
                raise ValueError("a labelled engine needs a LabelRegistry")
        self._duration_ms = duration * 1000.0
        self._frequency = frequency
        self._period = tick_period_ms(frequency)
        self._scheduler = scheduler
        self._label = label
        self._registry = registry
        self._properties = PropertySet()
        self._run: _Run | None = None
        self._lock = threading.RLock()

    @property
    def duration(self) -> float:
        return self._duration_ms / 1000.0

    @property
    def frequency(self) -> float:
        return self._frequency

    @property
    def tick_period(self) -> float:
        """Milliseconds between two ticks."""
        return self._period

    @property
    def label(self) -> str | None:
        return self._label

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def properties(self) -> tuple[Property, ...]:
        return tuple(self._properties)

    @property
    def mode(self) -> PlayMode | None:
        run = self._run
        return run.mode if run is not None else None

    def add_property(self, curve: Curve | str, start: float, end: float, sink: Sink) -> Property:
        if self._run is not None:
            raise PlaybackActiveError("Cannot add properties while playing")
        return self._properties.add(curve, start, end, sink)

    def is_playing(self) -> bool:
        return self._run is not None

    def play(
        self,
        mode: PlayMode = PlayMode.FORWARD,
        on_complete: Callback | None = None,
        on_cycle_end: Callback | None = None,
    ) -> bool:
        """Start a run, replacing any run in flight.

        Returns False, doing nothing else, if another engine holds the label.
        """
        if not self._properties:
            raise EmptyAnimatorError("Attempting to play an empty animator")
        with self._lock:
            if self._label is not None and not self._registry.acquire(self._label, self):
                logger.debug("label %r held elsewhere, not playing", self._label)
                return False
            if self._run is not None:
                self._cancel(self._run)
            run = _Run(
                mode=mode,
                forward=mode is not PlayMode.REVERSE,
                start_time=self._scheduler.clock.now(),
                properties=tuple(self._properties),
                on_complete=on_complete,
                on_cycle_end=on_cycle_end,
            )
            self._run = run
            run.task = self._scheduler.spawn(
                self._tick_loop(run), name=f"playback:{self._label or hex(id(self))}"
            )
        logger.debug(
            "playing %s, %d properties over %.1f ms", mode.name, len(self._properties), self._duration_ms
        )
        return True

    def stop(self, mode: StopMode = StopMode.FINISH_CYCLE) -> None:
        """Request the active run to end.

        IMMEDIATE cancels on the spot and skips the completion callback. The
        other modes take effect on the next tick. FINISH_CYCLE in
        LOOP_FORWARD_REVERSE always comes to rest on the end value: a request
        made during a reverse leg finishes that leg and one more forward leg.
        """
        if mode is StopMode.NONE:
            raise ValueError("StopMode.NONE is not a stop request")
        with self._lock:
            run = self._run
            if run is None:
                return
            if mode is StopMode.IMMEDIATE:
                self._cancel(run)
                self._release_label()
                return
            run.request_stop(mode)
        logger.debug("stop requested: %s", mode.name)

    def _cancel(self, run: _Run) -> None:
        run.cancelled = True
        if self._run is run:
            self._run = None
        if run.task is not None:
            self._scheduler.cancel(run.task)
        logger.debug("cancelled %s run", run.mode.name)

    def _release_label(self) -> None:
        if self._label is not None:
            self._registry.release(self._label, self)

    def _finish(self, run: _Run) -> bool:
        """Clear running state if ``run`` is still current. True if it was."""
        with self._lock:
            if self._run is not run:
                return False
            self._run = None
            self._release_label()
            return True

    # -- Tick loop --

    def _tick_loop(self, run: _Run) -> Routine:
        try:
            while True:
                yield self._period
                if not self._tick(run):
                    break
        except BaseException:
            self._finish(run)
            raise
        if self._finish(run):
            logger.debug("%s run complete", run.mode.name)
            if run.on_complete is not None:
                run.on_complete()

    def _tick(self, run: _Run) -> bool:
        """Advance one tick. Returns False when the run should end."""
        now = self._scheduler.clock.now()
        duration = self._duration_ms

        if run.take_backtrack():
            run.looping = False
            if run.forward:
                # Mirror progress so the reverse leg starts where we are.
                elapsed = min(now - run.start_time, duration)
                run.forward = False
                run.start_time = now - (duration - elapsed)
                logger.debug("backtracking from %.3f", elapsed / duration)

        normalized = (now - run.start_time) / duration
        finished = normalized > 1.0
        eval_t = normalized if run.forward else 1.0 - normalized
        eval_t = min(max(eval_t, 0.0), 1.0)

        for prop in run.properties:
            if run.cancelled:
                return False
            if finished:
                prop.sink(prop.terminal(run.forward))
            else:
                prop.sink(prop.value_at(eval_t))
        if run.cancelled:
            return False

        if not finished:
            return True
        return self._end_cycle(run, now)

    def _end_cycle(self, run: _Run, now: float) -> bool:
        if not run.looping:
            return False

        mode = run.mode
        pending = run.pending_stop
        if run.cancelled:
            return False
        notify = False
        if mode is PlayMode.FORWARD_REVERSE:
            if pending is not StopMode.NONE or not run.forward:
                return False
            run.forward = False
        elif mode is PlayMode.LOOP_FORWARD:
            if pending is not StopMode.NONE:
                return False
            notify = True
        elif mode is PlayMode.LOOP_FORWARD_REVERSE:
            # A finish request only lands at the end of a forward leg.
            if pending is StopMode.FINISH_CYCLE and run.forward:
                return False
            run.forward = not run.forward
            notify = run.forward
        else:
            return False

        run.start_time = now
        logger.debug("%s cycle ended, now %s", mode.name, "forward" if run.forward else "reverse")
        if notify and run.on_cycle_end is not None and not run.cancelled:
            run.on_cycle_end()
        return True
