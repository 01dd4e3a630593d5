"""Shared enums, type aliases and errors for tick-anim."""

from __future__ import annotations

from enum import Enum
from typing import Callable

# Maps normalized time in [0, 1] to a shaping coefficient.
Curve = Callable[[float], float]

# Receives the interpolated value on every tick.
Sink = Callable[[float], None]

# Completion and cycle-boundary notifications.
Callback = Callable[[], None]


class PlayMode(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"
    FORWARD_REVERSE = "forward_reverse"
    LOOP_FORWARD = "loop_forward"
    LOOP_FORWARD_REVERSE = "loop_forward_reverse"


class StopMode(Enum):
    NONE = "none"
    IMMEDIATE = "immediate"
    FINISH_CYCLE = "finish_cycle"
    FINISH_CYCLE_REVERSE = "finish_cycle_reverse"


class EmptyAnimatorError(RuntimeError):
    """Raised when playback is requested with no registered properties."""


class PlaybackActiveError(RuntimeError):
    """Raised when properties are registered while a run is active."""
