"""Moving placed modules, one at a time, to cheaper spots."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from functools import partial

from .areas import can_use_area
from .cost import module_cost
from .geometry import Point, Rect
from .placement import _Candidate, _fit, shape_models
from .stitching import enumerate_white, insert_tile, remove_tile
from .tiles import Plane, ShapedModule, Tile


def _grid_candidates(white: Sequence[Tile], target: int) -> Iterator[_Candidate]:
    """Points on a 5 by 5 grid over each space tile, for every direction."""
    for tile in white:
        step_x = tile.width() // 4
        step_y = tile.height() // 4
        for direction in range(1, 5):
            for row in range(5):
                for column in range(5):
                    point = Point(tile.ll.x + column * step_x, tile.ll.y + row * step_y)
                    usable = can_use_area(white, point, target, direction)
                    if target <= usable.area():
                        yield _Candidate(point, direction, usable)


def replace(plane: Plane, modules: Sequence[ShapedModule], fixed_tiles: Sequence[Tile]) -> None:
    """Lift each module out of the plane and put it back where it costs least.

    The module's current spot competes with every new one and wins ties.
    New spots are shaped to the module's minimum area.
    """
    for index, module in enumerate(modules):
        original = Rect(module.t1.ll, module.t1.ur)
        remove_tile(module.t1, plane)
        white = enumerate_white(plane)

        cost_of = partial(module_cost, modules, index, fixed_tiles, mode=1)
        keep = _Candidate(original.ll, 1, cost=cost_of(module.frame_mid), area=original)

        target = module.miniarea
        models = shape_models(target, 40, 0.025)
        candidates = list(_grid_candidates(white, target))
        for candidate in candidates:
            _fit(candidate, models, cost_of)

        best = min(
            (c for c in (keep, *candidates) if c.area is not None),
            key=lambda c: c.cost,
        )
        module.t1 = insert_tile(best.area, plane)
        module.frame_mid = module.t1.mid