"""Greedy placement of soft modules into the free space of a plane."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from functools import partial

from .areas import can_use_area
from .cost import insert_order, mini_dis, point_cost
from .geometry import Point, Rect
from .stitching import enumerate_white, insert_tile
from .tiles import Body, Plane, Tile

# The cost every candidate starts from; a candidate still at this cost
# found no shape that fits its free area.
_UNREACHED = float(2**31)


@dataclass
class _Candidate:
    """A corner point from which a module may be grown in one direction."""

    point: Point
    direction: int
    usable: Rect | None = None
    cost: float = _UNREACHED
    area: Rect | None = None


def shape_models(target: int, count: int = 20, step: float = 0.05) -> list[Rect]:
    """Rectangles anchored at the origin whose area covers ``target``.

    For each of ``count`` aspect ratios, starting at 1 and growing by
    ``step``, an upright and a lying rectangle are produced.
    """
    models: list[Rect] = []
    ratio = 1.0
    origin = Point(0, 0)
    for _ in range(count):
        shorter = math.ceil(math.sqrt(target / ratio))
        longer = math.ceil(ratio * shorter)
        models.append(Rect(origin, Point(shorter, longer)))
        models.append(Rect(origin, Point(longer, shorter)))
        ratio += step
    return models


def _model_centre(point: Point, direction: int, model: Rect) -> Point:
    offset = model.mid()
    dx = offset.x if direction in (1, 3) else -offset.x
    dy = offset.y if direction in (1, 2) else -offset.y
    return Point(point.x + dx, point.y + dy)


def _footprint(point: Point, direction: int, model: Rect) -> Rect:
    w, h = model.ur.x, model.ur.y
    if direction == 1:
        return Rect(point, Point(point.x + w, point.y + h))
    if direction == 2:
        return Rect(Point(point.x - w, point.y), Point(point.x, point.y + h))
    if direction == 3:
        return Rect(Point(point.x, point.y - h), Point(point.x + w, point.y))
    return Rect(Point(point.x - w, point.y - h), point)


def _fit(candidate: _Candidate, models: Sequence[Rect], cost_of: Callable[[Point], float]) -> None:
    """Give ``candidate`` the cheapest model that fits its usable area."""
    usable = candidate.usable
    for model in models:
        if usable.height() < model.height() or usable.width() < model.width():
            continue
        cost = cost_of(_model_centre(candidate.point, candidate.direction, model))
        if cost < candidate.cost:
            candidate.cost = cost
            candidate.area = _footprint(candidate.point, candidate.direction, model)


def _corner_candidates(white: Sequence[Tile], target: int) -> Iterator[_Candidate]:
    for tile in white:
        centre = Rect(tile.ll, tile.ur).mid()
        spots = (
            (tile.ll, 1),
            (Point(tile.ur.x, tile.ll.y), 2),
            (Point(tile.ll.x, tile.ur.y), 3),
            (tile.ur, 4),
            (centre, 1),
            (centre, 2),
            (centre, 3),
            (centre, 4),
        )
        for point, direction in spots:
            usable = can_use_area(white, point, target, direction)
            if target <= usable.area():
                yield _Candidate(point, direction, usable)


def _relink(plane: Plane, placed: Tile) -> None:
    """Point every link naming ``placed`` at the placed tile itself."""
    for owner in (*plane.fixed_tiles, *plane.soft_tiles):
        owner.links[:] = [
            (placed if other.name == placed.name else other, weight)
            for other, weight in owner.links
        ]


def insert_soft_tiles(plane: Plane, soft_tiles: list[Tile], initial_order: bool = False) -> float:
    """Place each soft tile, in list order, where its wire cost is lowest.

    With ``initial_order`` the list is first arranged: large tiles by left
    edge, then the rest by distance from the origin.  Placed tiles replace
    their entries in ``soft_tiles``.  When a tile finds no room the plane is
    marked illegal and placement stops.  Returns the plane's new HPWL.
    """
    if initial_order:
        start = insert_order(soft_tiles)
        soft_tiles[start:] = sorted(soft_tiles[start:], key=mini_dis)

    for index, tile in enumerate(soft_tiles):
        white = enumerate_white(plane)
        target = tile.area()
        models = shape_models(target)
        candidates = list(_corner_candidates(white, target))
        cost_of = partial(point_cost, tile)
        for candidate in candidates:
            _fit(candidate, models, cost_of)

        best = min(candidates, key=lambda c: c.cost, default=None)
        if best is None or best.area is None:
            plane.legal = False
            break

        placed = insert_tile(best.area, plane)
        placed.name = tile.name
        placed.links = list(tile.links)
        placed.body = Body.SOFT
        placed.miniarea = tile.miniarea
        soft_tiles[index] = placed
        _relink(plane, placed)

    plane.hpwl = compute_hpwl(plane, soft_tiles)
    return plane.hpwl


def compute_hpwl(plane: Plane, soft_tiles: Sequence[Tile]) -> float:
    """Half the weighted centre-to-centre distance over all links.

    Links of the soft tiles and of the plane's fixed tiles are summed; each
    net appears from both ends, hence the halving.
    """
    total = 0.0
    for owner in (*soft_tiles, *plane.fixed_tiles):
        here = Rect(owner.ll, owner.ur).mid()
        for other, weight in owner.links:
            there = Rect(other.ll, other.ur).mid()
            total += weight * float(abs(there.x - here.x) + abs(there.y - here.y))
    return total / 2