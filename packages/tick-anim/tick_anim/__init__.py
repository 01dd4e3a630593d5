"""tick-anim - Fixed-rate property playback with looping and deferred stops."""
from __future__ import annotations

from tick_anim.clock import ManualClock, MonotonicClock, TimeSource
from tick_anim.easing import EASINGS, resolve_curve
from tick_anim.engine import PlaybackEngine
from tick_anim.keyframes import Keyframe, KeyframeCurve
from tick_anim.properties import Property, PropertySet
from tick_anim.registry import LabelRegistry
from tick_anim.scheduler import Scheduler, Task
from tick_anim.types import EmptyAnimatorError, PlaybackActiveError, PlayMode, StopMode

__all__ = [
    "EASINGS",
    "EmptyAnimatorError",
    "Keyframe",
    "KeyframeCurve",
    "LabelRegistry",
    "ManualClock",
    "MonotonicClock",
    "PlayMode",
    "PlaybackActiveError",
    "PlaybackEngine",
    "Property",
    "PropertySet",
    "Scheduler",
    "StopMode",
    "Task",
    "TimeSource",
    "resolve_curve",
]
