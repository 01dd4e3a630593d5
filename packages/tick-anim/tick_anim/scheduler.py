"""Scheduler - resumes cooperative routines after fixed waits.

A routine is a generator that yields the number of milliseconds it wants to
sleep before it is resumed again. The scheduler primes it on ``spawn`` and
resumes it from ``step`` once its deadline has passed.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Generator

from tick_anim.clock import MonotonicClock, TimeSource

logger = logging.getLogger(__name__)

Routine = Generator[float, None, None]


@dataclass(eq=False)
class Task:
    task_id: int
    name: str
    routine: Routine
    deadline: float
    cancelled: bool = False
    done: bool = False

    @property
    def alive(self) -> bool:
        return not (self.cancelled or self.done)


class Scheduler:
    def __init__(self, clock: TimeSource | None = None) -> None:
        self._clock = clock if clock is not None else MonotonicClock()
        self._tasks: dict[int, Task] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._current: Task | None = None
        self._wake = threading.Event()
        self._stop_requested = False

    @property
    def clock(self) -> TimeSource:
        return self._clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task: object) -> bool:
        if not isinstance(task, Task):
            return False
        with self._lock:
            return self._tasks.get(task.task_id) is task

    def spawn(self, routine: Routine, name: str = "") -> Task:
        task_id = next(self._ids)
        task = Task(task_id, name or f"task-{task_id}", routine, self._clock.now())
        try:
            wait = next(routine)
        except StopIteration:
            task.done = True
            return task
        task.deadline = self._clock.now() + wait
        with self._lock:
            self._tasks[task_id] = task
        logger.debug("spawned %s, first resume at %.3f", task.name, task.deadline)
        self._wake.set()
        return task

    def cancel(self, task: Task) -> bool:
        """Remove a task. Returns False if it already finished or was cancelled.

        A task cancelled from inside its own resume is closed when it next
        yields or returns.
        """
        with self._lock:
            if self._tasks.pop(task.task_id, None) is None:
                return False
            task.cancelled = True
            executing = task is self._current
        if not executing:
            task.routine.close()
        logger.debug("cancelled %s", task.name)
        return True

    def next_deadline(self) -> float | None:
        with self._lock:
            if not self._tasks:
                return None
            return min(task.deadline for task in self._tasks.values())

    def step(self) -> int:
        """Resume every task whose deadline has passed. Returns how many ran."""
        now = self._clock.now()
        with self._lock:
            due = [task for task in self._tasks.values() if task.deadline <= now]
        due.sort(key=lambda task: (task.deadline, task.task_id))

        resumed = 0
        for task in due:
            with self._lock:
                if task.cancelled:
                    continue
                self._current = task
            try:
                wait = next(task.routine)
            except StopIteration:
                self._retire(task)
            except BaseException:
                self._retire(task)
                raise
            else:
                if task.cancelled:
                    task.routine.close()
                else:
                    task.deadline = self._clock.now() + wait
            finally:
                with self._lock:
                    self._current = None
            resumed += 1
        return resumed

    def _retire(self, task: Task) -> None:
        task.done = True
        with self._lock:
            self._tasks.pop(task.task_id, None)

    def request_stop(self) -> None:
        self._stop_requested = True
        self._wake.set()

    def run(self, timeout: float | None = None) -> None:
        """Drive tasks in real time until idle, stopped, or ``timeout`` seconds.

        Only meaningful with a clock that moves on its own.
        """
        limit = None if timeout is None else time.monotonic() + timeout
        try:
            while not self._stop_requested:
                self._wake.clear()
                deadline = self.next_deadline()
                if deadline is None:
                    break
                delay = (deadline - self._clock.now()) / 1000
                if limit is not None:
                    remaining = limit - time.monotonic()
                    if remaining <= 0:
                        break
                    delay = min(delay, remaining)
                if delay > 0:
                    self._wake.wait(delay)
                    continue
                self.step()
        finally:
            self._stop_requested = False
