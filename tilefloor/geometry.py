"""Integer points and axis-aligned rectangles."""

from __future__ import annotations

import math
from dataclasses import dataclass


def _half(value: int) -> int:
    """Halve an integer, truncating toward zero."""
    return value // 2 if value >= 0 else -((-value) // 2)


@dataclass(frozen=True)
class Point:
    """A point on the integer grid."""

    x: int = 0
    y: int = 0


@dataclass
class Rect:
    """An axis-aligned rectangle given by its lower-left and upper-right corners."""

    ll: Point
    ur: Point

    def width(self) -> int:
        return self.ur.x - self.ll.x

    def height(self) -> int:
        return self.ur.y - self.ll.y

    def area(self) -> int:
        return self.width() * self.height()

    def mid(self) -> Point:
        """Centre of the rectangle, each coordinate truncated toward zero."""
        return Point(_half(self.ll.x + self.ur.x), _half(self.ll.y + self.ur.y))

    def aspect_ratio(self) -> float:
        """Ratio of the longer side to the shorter one."""
        height, width = self.height(), self.width()
        if height > width:
            return height / width if width else math.inf
        if height == 0:
            return math.nan if width == 0 else math.inf
        return width / height