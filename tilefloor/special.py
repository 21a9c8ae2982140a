"""Interlocking two equally sized neighbouring modules along their shared edge."""

from __future__ import annotations

from collections.abc import Sequence

from .cost import module_cost
from .geometry import Point, Rect
from .stitching import insert_tile, remove_tile
from .tiles import Plane, ShapedModule, Tile

_MIN_FILL = 0.8
_MIN_RATIO = 0.5
_MAX_RATIO = 2.0


def _span(tile: Tile, axis: str) -> int:
    """Extent of ``tile`` along the axis the modules are lined up on."""
    return tile.width() if axis == "x" else tile.height()


def _thickness(tile: Tile, axis: str) -> int:
    """Extent of ``tile`` across the axis the modules are lined up on."""
    return tile.height() if axis == "x" else tile.width()


def _shift(point: Point, axis: str, delta: int) -> Point:
    if axis == "x":
        return Point(point.x + delta, point.y)
    return Point(point.x, point.y + delta)


def _search(
    modules: Sequence[ShapedModule],
    i: int,
    j: int,
    fixed_tiles: Sequence[Tile],
    axis: str,
    sign: int,
) -> tuple[int, int, int, int]:
    """Find how far the two frames may move into each other.

    Module ``i``'s frame moves by ``sign`` per step and module ``j``'s the
    other way.  Returns the best step count, the step at which the search
    stopped, and the two halves of module ``i``'s thickness.
    """
    first, second = modules[i], modules[j]
    start_first, start_second = first.frame_mid, second.frame_mid
    before = module_cost(modules, i, fixed_tiles, start_first, 1) + module_cost(
        modules, j, fixed_tiles, start_second, 1
    )

    thick_first = _thickness(first.t1, axis)
    thick_second = _thickness(second.t1, axis)
    upper_half = (thick_first + 1) // 2
    lower_half = thick_first // 2

    best = 0
    count = 1
    while True:
        first.frame_mid = _shift(start_first, axis, sign * count)
        second.frame_mid = _shift(start_second, axis, -sign * count)

        grown_first = _span(first.t1, axis) + 2 * count
        grown_second = _span(second.t1, axis) + 2 * count

        frame_a = grown_first * thick_first
        if (frame_a - 4 * count * lower_half) / frame_a < _MIN_FILL:
            break
        frame_b = grown_second * thick_second
        real_b = frame_b - 4 * count * upper_half
        if real_b / frame_b < _MIN_FILL or real_b < second.miniarea:
            break

        ratio_a = grown_first / thick_first
        ratio_b = grown_second / thick_second
        if not _MIN_RATIO <= ratio_a <= _MAX_RATIO:
            break
        if not _MIN_RATIO <= ratio_b <= _MAX_RATIO:
            break

        cost = module_cost(modules, i, fixed_tiles, first.frame_mid, 1) + module_cost(
            modules, j, fixed_tiles, second.frame_mid, 1
        )
        if cost < before:
            best = count
        count += 1

    first.frame_mid = _shift(start_first, axis, sign * best)
    second.frame_mid = _shift(start_second, axis, -sign * best)
    return best, count, upper_half, lower_half


def _reshape(
    first: Tile, second: Tile, axis: str, sign: int, count: int, upper_half: int, lower_half: int
) -> tuple[Rect, Rect, Rect, Rect]:
    """Main and extra pieces of both modules after interlocking.

    Both main pieces draw back from the shared edge; the extra pieces
    straddle it, one over each half of the shared side.
    """
    reach = 2 * count
    if axis == "x":
        edge = first.left() if sign < 0 else first.right()
        if sign < 0:
            main_first = Rect(Point(first.ll.x + reach, first.ll.y), first.ur)
            main_second = Rect(second.ll, Point(second.ur.x - reach, second.ur.y))
        else:
            main_first = Rect(first.ll, Point(first.ur.x - reach, first.ur.y))
            main_second = Rect(Point(second.ll.x + reach, second.ll.y), second.ur)
        extra_first = Rect(
            Point(edge - reach, first.ll.y), Point(edge + reach, first.ll.y + upper_half)
        )
        extra_second = Rect(
            Point(edge - reach, first.ur.y - lower_half), Point(edge + reach, first.ur.y)
        )
    else:
        edge = first.bottom() if sign < 0 else first.top()
        if sign < 0:
            main_first = Rect(Point(first.ll.x, first.ll.y + reach), first.ur)
            main_second = Rect(second.ll, Point(second.ur.x, second.ur.y - reach))
        else:
            main_first = Rect(first.ll, Point(first.ur.x, first.ur.y - reach))
            main_second = Rect(Point(second.ll.x, second.ll.y + reach), second.ur)
        extra_first = Rect(
            Point(first.ll.x, edge - reach), Point(first.ll.x + upper_half, edge + reach)
        )
        extra_second = Rect(
            Point(first.ur.x - lower_half, edge - reach), Point(first.ur.x, edge + reach)
        )
    return main_first, extra_first, main_second, extra_second


def _interlock(
    plane: Plane,
    modules: Sequence[ShapedModule],
    i: int,
    j: int,
    fixed_tiles: Sequence[Tile],
    axis: str,
    sign: int,
    directions: tuple[int, int],
) -> None:
    best, count, upper_half, lower_half = _search(modules, i, j, fixed_tiles, axis, sign)
    if best == 0:
        return

    first, second = modules[i], modules[j]
    first.direction, second.direction = directions
    main_first, extra_first, main_second, extra_second = _reshape(
        first.t1, second.t1, axis, sign, count, upper_half, lower_half
    )

    remove_tile(first.t1, plane)
    remove_tile(second.t1, plane)

    first.t1 = insert_tile(main_first, plane)
    first.t2 = insert_tile(extra_first, plane)
    second.t1 = insert_tile(main_second, plane)
    second.t2 = insert_tile(extra_second, plane)


def special_transform(
    plane: Plane, modules: Sequence[ShapedModule], fixed_tiles: Sequence[Tile]
) -> None:
    """Interlock pairs of single-tile modules that share a whole side.

    Two modules that abut with the same height (or width) move their frames
    into each other step by step while the fill and aspect limits hold; if
    that lowers their joint cost, each is split into a main piece and an
    extra piece reaching across the shared edge.
    """
    for i, first in enumerate(modules):
        if first.t2 is not None:
            continue
        for j in range(i + 1, len(modules)):
            second = modules[j]
            if second.t2 is not None:
                continue
            a, b = first.t1, second.t1
            if a.bottom() == b.bottom() and a.top() == b.top():
                if a.left() == b.right():
                    _interlock(plane, modules, i, j, fixed_tiles, "x", -1, (6, 2))
                elif a.right() == b.left():
                    _interlock(plane, modules, i, j, fixed_tiles, "x", 1, (3, 7))
            elif a.left() == b.left() and a.right() == b.right():
                if a.bottom() == b.top():
                    _interlock(plane, modules, i, j, fixed_tiles, "y", -1, (5, 1))
                elif a.top() == b.bottom():
                    _interlock(plane, modules, i, j, fixed_tiles, "y", 1, (8, 4))