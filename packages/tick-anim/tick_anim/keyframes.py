"""Keyframe curves: piecewise interpolation through (time, value) points.

A ``KeyframeCurve`` is an ordinary curve callable, so it can be registered
like any easing. Paired with a degenerate range (start == end) the keyframes
carry the property's actual values instead of a blend factor.
"""
from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable

from tick_anim.easing import smooth_step


@dataclass(frozen=True, slots=True)
class Keyframe:
    time: float
    value: float


class KeyframeCurve:
    """Curve through sorted keyframes; flat before the first and after the last."""

    __slots__ = ("_keys", "_times", "_smooth")

    def __init__(self, keyframes: Iterable[Keyframe | tuple[float, float]], smooth: bool = False) -> None:
        keys = sorted(
            (k if isinstance(k, Keyframe) else Keyframe(*k) for k in keyframes),
            key=lambda k: k.time,
        )
        if not keys:
            raise ValueError("KeyframeCurve requires at least one keyframe")
        for prev, nxt in zip(keys, keys[1:]):
            if prev.time == nxt.time:
                raise ValueError(f"Duplicate keyframe time {nxt.time}")
        self._keys = tuple(keys)
        self._times = tuple(k.time for k in keys)
        self._smooth = smooth

    @property
    def keyframes(self) -> tuple[Keyframe, ...]:
        return self._keys

    def __call__(self, t: float) -> float:
        keys = self._keys
        if t <= keys[0].time:
            return keys[0].value
        if t >= keys[-1].time:
            return keys[-1].value
        i = bisect_right(self._times, t)
        a, b = keys[i - 1], keys[i]
        u = (t - a.time) / (b.time - a.time)
        if self._smooth:
            u = smooth_step(u)
        return a.value + (b.value - a.value) * u

    def __repr__(self) -> str:
        points = ", ".join(f"({k.time}, {k.value})" for k in self._keys)
        return f"KeyframeCurve([{points}], smooth={self._smooth})"
