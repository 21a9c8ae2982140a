"""Free rectangles that can be grown from a corner point through space tiles."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .geometry import Point, Rect
from .tiles import Tile

_MAX_RATIO = 2


def _accepts(area: Rect, candidate: Rect, target: int) -> bool:
    if area.area() < target or area.aspect_ratio() > _MAX_RATIO:
        return True
    return candidate.area() > area.area() and candidate.aspect_ratio() <= _MAX_RATIO


def _grow(
    area: Rect,
    rows: list[Rect],
    target: int,
    reaches: Callable[[Rect, Rect], bool],
    extend: Callable[[Rect, Rect], Rect],
) -> Rect:
    # The first row is the one the start point lies in, so it is skipped.
    for row in rows[1:]:
        if not reaches(row, area):
            break
        candidate = extend(row, area)
        if _accepts(area, candidate, target):
            area = candidate
    return area


def can_use_area1(white: Sequence[Tile], start: Point, target: int) -> Rect:
    """Free rectangle with ``start`` as its lower-left corner, grown upward."""
    corner = start
    for tile in white:
        if tile.ll.x <= start.x < tile.ur.x and tile.ll.y <= start.y < tile.ur.y:
            corner = tile.ur
    area = Rect(start, corner)

    rows = sorted(
        (
            Rect(Point(start.x, t.bottom()), Point(t.tr.left(), t.rt.bottom()))
            for t in white
            if t.left() <= start.x <= t.tr.left() and t.bottom() >= start.y
        ),
        key=lambda r: r.ll.y,
    )
    return _grow(
        area,
        rows,
        target,
        lambda row, a: row.ll.y == a.ur.y,
        lambda row, a: Rect(a.ll, Point(min(row.ur.x, a.ur.x), row.ur.y)),
    )


def can_use_area2(white: Sequence[Tile], start: Point, target: int) -> Rect:
    """Free rectangle with ``start`` as its lower-right corner, grown upward."""
    low, high = start, start
    for tile in white:
        if tile.ll.x < start.x <= tile.ur.x and tile.ll.y <= start.y < tile.ur.y:
            low = Point(tile.ll.x, start.y)
            high = Point(start.x, tile.ur.y)
    area = Rect(low, high)

    rows = sorted(
        (
            Rect(t.ll, Point(start.x, t.ur.y))
            for t in white
            if t.left() <= start.x <= t.right() and t.bottom() >= start.y
        ),
        key=lambda r: r.ll.y,
    )
    return _grow(
        area,
        rows,
        target,
        lambda row, a: row.ll.y == a.ur.y,
        lambda row, a: Rect(Point(max(row.ll.x, a.ll.x), a.ll.y), row.ur),
    )


def can_use_area3(white: Sequence[Tile], start: Point, target: int) -> Rect:
    """Free rectangle with ``start`` as its upper-left corner, grown downward."""
    low, high = start, start
    for tile in white:
        if tile.ll.x <= start.x < tile.ur.x and tile.ll.y < start.y <= tile.ur.y:
            low = Point(start.x, tile.ll.y)
            high = Point(tile.ur.x, start.y)
    area = Rect(low, high)

    rows = sorted(
        (
            Rect(Point(start.x, t.bottom()), Point(t.tr.left(), t.rt.bottom()))
            for t in white
            if t.left() <= start.x <= t.tr.left() and t.bottom() <= start.y
        ),
        key=lambda r: r.ll.y,
        reverse=True,
    )
    return _grow(
        area,
        rows,
        target,
        lambda row, a: row.ur.y == a.ll.y,
        lambda row, a: Rect(row.ll, Point(min(row.ur.x, a.ur.x), a.ur.y)),
    )


def can_use_area4(white: Sequence[Tile], start: Point, target: int) -> Rect:
    """Free rectangle with ``start`` as its upper-right corner, grown downward."""
    corner = start
    for tile in white:
        if tile.ll.x < start.x <= tile.ur.x and tile.ll.y < start.y <= tile.ur.y:
            corner = tile.ll
    area = Rect(corner, start)

    rows = sorted(
        (
            Rect(t.ll, Point(start.x, t.rt.bottom()))
            for t in white
            if t.left() <= start.x <= t.tr.left() and t.bottom() <= start.y
        ),
        key=lambda r: r.ll.y,
        reverse=True,
    )
    return _grow(
        area,
        rows,
        target,
        lambda row, a: row.ur.y == a.ll.y,
        lambda row, a: Rect(Point(max(row.ll.x, a.ll.x), row.ll.y), a.ur),
    )


_BY_DIRECTION = {
    1: can_use_area1,
    2: can_use_area2,
    3: can_use_area3,
    4: can_use_area4,
}


def can_use_area(white: Sequence[Tile], start: Point, target: int, direction: int) -> Rect:
    """Free rectangle grown from ``start`` in the given direction (1 to 4)."""
    try:
        finder = _BY_DIRECTION[direction]
    except KeyError:
        raise ValueError(f"unknown direction {direction!r}") from None
    return finder(white, start, target)