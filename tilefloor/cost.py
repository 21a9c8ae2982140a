"""Wire-length costs and the orderings used when placing soft modules."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .geometry import Point
from .tiles import Body, ShapedModule, Tile


def _distance(a: Point, b: Point) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def point_cost(tile: Tile, mid: Point) -> float:
    """Weighted distance from ``mid`` to the tiles ``tile`` is linked with.

    Links to fixed tiles count twice, links to soft tiles once and any
    other link not at all.
    """
    cost = 0
    for other, weight in tile.links:
        if other.body == Body.FIXED:
            cost += 2 * weight * _distance(other.mid, mid)
        elif other.body == Body.SOFT:
            cost += weight * _distance(other.mid, mid)
    return float(cost)


def module_cost(
    modules: Sequence[ShapedModule],
    index: int,
    fixed_tiles: Sequence[Tile],
    mid: Point,
    mode: int,
) -> float:
    """Weighted distance from ``mid`` to the modules linked with ``modules[index]``.

    In mode 1 links to fixed tiles count twice.
    """
    cost = 0
    for to_fixed, other, weight in modules[index].links:
        if to_fixed:
            target = fixed_tiles[other].mid
            factor = 2 if mode == 1 else 1
        else:
            target = modules[other].frame_mid
            factor = 1
        cost += factor * weight * _distance(mid, target)
    return float(cost)


def length(tile: Tile, x: int, y: int) -> int:
    """Weighted wire length of ``tile``'s links if its centre were at ``(x, y)``."""
    return sum(
        (abs(other.mid.x - x) + abs(other.mid.y - y)) * weight
        for other, weight in tile.links
    )


def wire_length(soft_tile: Tile, white_tile: Tile) -> int:
    """Shorter wire length of ``soft_tile`` placed in either corner of ``white_tile``."""
    x1 = soft_tile.mid.x - soft_tile.ll.x + white_tile.ll.x
    y1 = soft_tile.mid.y - soft_tile.ll.y + white_tile.ll.y
    x2 = white_tile.ur.x - soft_tile.ur.x + soft_tile.mid.x
    y2 = white_tile.ur.y - soft_tile.ur.y + soft_tile.mid.y
    return min(length(soft_tile, x1, y1), length(soft_tile, x2, y2))


def manhattan(soft_tile: Tile, white_tile: Tile) -> int:
    """Distance from ``soft_tile``'s centre to the nearer corner of ``white_tile``."""
    return min(
        _distance(soft_tile.mid, white_tile.ll),
        _distance(soft_tile.mid, white_tile.ur),
    )


def mini_dis(tile: Tile) -> int:
    """Sum of the centre's coordinates, a distance from the chip's origin."""
    return tile.mid.x + tile.mid.y


def sort_white_tiles(white_tiles: list[Tile], soft_tile: Tile) -> None:
    """Order space tiles in place by wire length for ``soft_tile``.

    An entry whose wire length ties with the one before it moves ahead of
    it when it lies closer to ``soft_tile``.
    """
    wires = {id(t): wire_length(soft_tile, t) for t in white_tiles}
    dists = {id(t): manhattan(soft_tile, t) for t in white_tiles}

    for i in range(1, len(white_tiles)):
        key = white_tiles[i]
        j = i - 1
        while j >= 0 and wires[id(white_tiles[j])] > wires[id(key)]:
            white_tiles[j + 1] = white_tiles[j]
            j -= 1
        if (
            j >= 0
            and wires[id(white_tiles[j])] == wires[id(key)]
            and dists[id(white_tiles[j])] > dists[id(key)]
        ):
            white_tiles[j + 1] = white_tiles[j]
            white_tiles[j] = key
        else:
            white_tiles[j + 1] = key


def sort_by_area(tiles: list[Tile], start: int, end: int) -> None:
    """Sort ``tiles[start..end]`` (inclusive) in place, largest area first, stably."""
    if end < start:
        return
    tiles[start:end + 1] = sorted(tiles[start:end + 1], key=lambda t: -t.area())


def sort_by_x(tiles: list[Tile], start: int, end: int) -> None:
    """Sort ``tiles[start..end]`` (inclusive) in place by left edge, stably."""
    if end < start:
        return
    tiles[start:end + 1] = sorted(tiles[start:end + 1], key=lambda t: t.ll.x)


def _log10(value: int) -> float:
    return math.log10(value) if value > 0 else -math.inf


def insert_order(tiles: list[Tile]) -> int:
    """Arrange ``tiles`` for placement and return where the small ones begin.

    The tiles are sorted by area, largest first.  Those within the order of
    magnitude of the largest form the leading group, which is then sorted by
    left edge; the index of the first tile after that group is returned.
    """
    if not tiles:
        raise ValueError("no tiles to order")
    sort_by_area(tiles, 0, len(tiles) - 1)

    magnitude = _log10(tiles[0].area())
    whole = math.trunc(magnitude)
    bound = 0.7 + whole if magnitude - whole > 0.7 else float(whole)

    for index, tile in enumerate(tiles):
        if _log10(tile.area()) < bound:
            sort_by_x(tiles, 0, index - 1)
            return index
    sort_by_x(tiles, 0, len(tiles) - 1)
    return len(tiles)