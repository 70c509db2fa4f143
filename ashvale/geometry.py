"""Small geometry and timing primitives shared by the game and the editor."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Iterator


class Clock:
    """Measures seconds elapsed since creation or the last restart."""

    def __init__(self, time_source: Callable[[], float] = time.monotonic) -> None:
        self._now = time_source
        self._start = self._now()

    def restart(self) -> float:
        """Reset the clock and return the time that had elapsed before."""
        now = self._now()
        elapsed = now - self._start
        self._start = now
        return elapsed

    def elapsed(self) -> float:
        """Seconds elapsed since the clock was started or restarted."""
        return self._now() - self._start


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec2:
        return Vec2(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; the zero vector stays zero."""
        size = self.length()
        if size == 0:
            return self
        return self / size


@dataclass(frozen=True)
class IntRect:
    """An integer rectangle, used for regions of a tilesheet."""

    left: int
    top: int
    width: int
    height: int


@dataclass(frozen=True)
class FloatRect:
    """An axis-aligned rectangle in world coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Vec2:
        return Vec2(self.left + self.width / 2, self.top + self.height / 2)

    def intersects(self, other: FloatRect) -> bool:
        """True when the rectangles overlap; shared edges do not count."""
        return (
            self.left < other.right
            and self.right > other.left
            and self.top < other.bottom
            and self.bottom > other.top
        )