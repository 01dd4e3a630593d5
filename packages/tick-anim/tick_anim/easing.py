"""Named easing curves for property interpolation."""
from __future__ import annotations

from typing import Callable

from tick_anim.types import Curve


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t


def ease_out(t: float) -> float:
    return t * (2 - t)


def ease_in_out(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return 1 - (-2 * t + 2) ** 2 / 2


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def smooth_step(t: float) -> float:
    """Hermite interpolation, flat at both ends."""
    return t * t * (3 - 2 * t)


def ease_out_bounce(t: float) -> float:
    if t < 1 / 2.75:
        return 7.5625 * t * t
    if t < 2 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    t -= 2.625 / 2.75
    return 7.5625 * t * t + 0.984375


EASINGS: dict[str, Callable[[float], float]] = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out": ease_in_out,
    "ease_in_cubic": ease_in_cubic,
    "ease_out_cubic": ease_out_cubic,
    "ease_in_out_cubic": ease_in_out_cubic,
    "smooth_step": smooth_step,
    "ease_out_bounce": ease_out_bounce,
}


def resolve_curve(curve: Curve | str) -> Curve:
    """Look up an easing by name, or pass a callable through unchanged."""
    if isinstance(curve, str):
        if curve not in EASINGS:
            raise KeyError(f"Unknown easing {curve!r}")
        return EASINGS[curve]
    if not callable(curve):
        raise TypeError(f"curve must be an easing name or callable, got {type(curve).__name__}")
    return curve
