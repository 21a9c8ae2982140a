"""Sliding or reshaping single-tile modules into the space around them."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import partial

from .areas import can_use_area
from .cost import module_cost
from .geometry import Point, Rect
from .stitching import enumerate_white, insert_tile, remove_tile
from .tiles import Plane, ShapedModule, Tile

# The cost every move starts from; a move still at this cost found no shape.
_UNREACHED = float(2**31)
_MIN_FILL = 0.8
_MIN_RATIO = 0.5
_MAX_RATIO = 2.0

# Which free-area search each move type uses.
_FINDER = {1: 2, 6: 2, 2: 3, 5: 3, 3: 1, 8: 1, 4: 4, 7: 4}
_UP = (1, 8)
_DOWN = (4, 5)
_RIGHT = (2, 3)
_LEFT = (6, 7)


@dataclass
class _Move:
    """One way of moving a module: a corner, a direction and its result."""

    kind: int
    check: Point
    cost: float = _UNREACHED
    frame_mid: Point | None = None
    area1: Rect | None = None
    area2: Rect = field(default_factory=lambda: Rect(Point(), Point()))
    split: bool = False

    def is_degenerate(self) -> bool:
        if self.area1 is None:
            return True
        return (
            self.area2.height() == 0
            or self.area2.width() == 0
            or self.area1.height() == 0
            or self.area1.width() == 0
        )


def _moves(tile: Tile) -> list[_Move]:
    lower_right = Point(tile.ur.x, tile.ll.y)
    upper_left = Point(tile.ll.x, tile.ur.y)
    return [
        _Move(5, tile.ll),
        _Move(6, tile.ll),
        _Move(1, tile.ur),
        _Move(2, tile.ur),
        _Move(7, upper_left),
        _Move(8, upper_left),
        _Move(3, lower_right),
        _Move(4, lower_right),
    ]


def _offer(move: _Move, mid: Point, cost_of) -> bool:
    cost = cost_of(mid)
    if cost < move.cost:
        move.cost = cost
        move.frame_mid = mid
        return True
    return False


def _grow_vertical(move: _Move, tile: Tile, cost_of, sign: int) -> None:
    """Slide ``tile`` up (sign 1) or down (sign -1), or grow it a foot there."""
    usable = move.area2
    if usable.width() >= tile.width():
        move.split = False
        mid = tile.mid
        for _ in range(usable.height()):
            mid = Point(mid.x, mid.y + sign)
            _offer(move, mid, cost_of)
        shift = (move.frame_mid or tile.mid).y - tile.mid.y
        move.area1 = Rect(
            Point(tile.ll.x, tile.ll.y + shift), Point(tile.ur.x, tile.ur.y + shift)
        )
        return

    move.split = True
    width = tile.width()
    step = math.ceil(width / usable.width())
    body, foot = tile.height(), 0
    best_body, best_foot = body, 0
    while foot <= usable.height() and body >= 2:
        real = body * width + foot * usable.width()
        frame = (body + foot) * width
        if real / frame < _MIN_FILL:
            break
        ratio = (body + foot) / width
        if ratio > _MAX_RATIO or ratio < _MIN_RATIO:
            break
        if sign > 0:
            y = move.check.y - body // 2 + foot // 2
        else:
            y = move.check.y + body // 2 - foot // 2
        if _offer(move, Point(tile.mid.x, y), cost_of):
            best_body, best_foot = body, foot
        body -= 1
        foot += step

    if sign > 0:
        move.area1 = Rect(Point(tile.ll.x, move.check.y - best_body), tile.ur)
        move.area2 = Rect(usable.ll, Point(usable.ur.x, usable.ll.y + best_foot))
    else:
        move.area1 = Rect(tile.ll, Point(tile.ur.x, tile.ll.y + best_body))
        move.area2 = Rect(Point(usable.ll.x, usable.ur.y - best_foot), usable.ur)


def _grow_horizontal(move: _Move, tile: Tile, cost_of, sign: int) -> None:
    """Slide ``tile`` right (sign 1) or left (sign -1), or grow it a foot there."""
    usable = move.area2
    if usable.height() >= tile.height():
        move.split = False
        mid = tile.mid
        for _ in range(usable.width()):
            mid = Point(mid.x + sign, mid.y)
            _offer(move, mid, cost_of)
        shift = (move.frame_mid or tile.mid).x - tile.mid.x
        move.area1 = Rect(
            Point(tile.ll.x + shift, tile.ll.y), Point(tile.ur.x + shift, tile.ur.y)
        )
        return

    move.split = True
    height = tile.height()
    step = math.ceil(height / usable.height())
    body, foot = tile.width(), 0
    best_body, best_foot = body, 0
    while foot <= usable.width() and body >= 2:
        real = foot * height + body * usable.height()
        frame = (body + foot) * height
        if real / frame < _MIN_FILL:
            break
        ratio = (body + foot) / height
        if ratio > _MAX_RATIO or ratio < _MIN_RATIO:
            break
        if sign > 0:
            x = move.check.x - body // 2 + foot // 2
        else:
            x = move.check.x + body // 2 - foot // 2
        if _offer(move, Point(x, tile.mid.y), cost_of):
            best_body, best_foot = body, foot
        body -= 1
        foot += step

    if sign > 0:
        move.area1 = Rect(Point(move.check.x - best_body, tile.ll.y), tile.ur)
        move.area2 = Rect(usable.ll, Point(usable.ll.x + best_foot, usable.ur.y))
    else:
        move.area1 = Rect(tile.ll, Point(tile.ll.x + best_body, tile.ur.y))
        move.area2 = Rect(Point(usable.ur.x - best_foot, usable.ll.y), usable.ur)


def _evaluate(move: _Move, tile: Tile, white: Sequence[Tile], cost_of) -> None:
    move.area2 = can_use_area(white, move.check, int(_UNREACHED), _FINDER[move.kind])
    if move.area2.area() == 0:
        return
    if move.kind in _UP:
        _grow_vertical(move, tile, cost_of, 1)
    elif move.kind in _DOWN:
        _grow_vertical(move, tile, cost_of, -1)
    elif move.kind in _RIGHT:
        _grow_horizontal(move, tile, cost_of, 1)
    else:
        _grow_horizontal(move, tile, cost_of, -1)


def transform(plane: Plane, modules: Sequence[ShapedModule], fixed_tiles: Sequence[Tile]) -> None:
    """Move each single-tile module into adjacent space where that lowers its cost.

    From each corner the module may slide into the free area next to it or,
    when that area is too narrow, shrink and grow a second tile into it.
    The cheapest such move is taken if it beats the module's current cost.
    """
    for index, module in enumerate(modules):
        if module.t2 is not None:
            continue

        cost_of = partial(module_cost, modules, index, fixed_tiles, mode=0)
        current = cost_of(module.frame_mid)
        tile = module.t1
        white = enumerate_white(plane)

        moves = _moves(tile)
        for move in moves:
            _evaluate(move, tile, white, cost_of)
        for move in moves:
            if move.is_degenerate():
                move.cost = _UNREACHED

        best = min(moves, key=lambda m: m.cost)
        if best.cost >= current:
            continue

        module.frame_mid = best.frame_mid
        module.direction = best.kind
        remove_tile(module.t1, plane)
        module.t1 = insert_tile(best.area1, plane)
        if best.split:
            module.t2 = insert_tile(best.area2, plane)