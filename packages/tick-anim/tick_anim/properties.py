"""Property descriptors and the ordered set an engine plays back."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from tick_anim.easing import resolve_curve
from tick_anim.types import Curve, Sink


@dataclass(frozen=True)
class Property:
    """One animated value: a curve shaping a start->end blend, fed to a sink.

    When ``start == end`` the range is degenerate and the curve output is
    used as the value itself.
    """

    curve: Curve
    start: float
    end: float
    sink: Sink

    @property
    def degenerate(self) -> bool:
        return self.start == self.end

    def value_at(self, t: float) -> float:
        shaped = self.curve(t)
        if self.degenerate:
            return shaped
        return self.start + (self.end - self.start) * shaped

    def terminal(self, forward: bool) -> float:
        if self.degenerate:
            return self.curve(1.0 if forward else 0.0)
        return self.end if forward else self.start


class PropertySet:
    def __init__(self) -> None:
        self._properties: list[Property] = []

    def add(self, curve: Curve | str, start: float, end: float, sink: Sink) -> Property:
        prop = Property(resolve_curve(curve), start, end, sink)
        self._properties.append(prop)
        return prop

    def clear(self) -> None:
        self._properties.clear()

    def __len__(self) -> int:
        return len(self._properties)

    def __bool__(self) -> bool:
        return bool(self._properties)

    def __iter__(self) -> Iterator[Property]:
        return iter(self._properties)
