"""Command line entry: read a design, place its soft modules and refine them."""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Sequence
from pathlib import Path

from .cost import module_cost
from .geometry import Rect
from .placement import insert_soft_tiles
from .reader import Design, build_modules, read_design
from .replace import replace
from .report import _number, matlab_script, write_result
from .stitching import enumerate_white, insert_tile
from .tiles import Plane, ShapedModule, Tile
from .transform import transform

_REPLACE_ROUNDS = 10


def _fresh_plane(width: int, height: int, fixed: Sequence[Tile], soft: Sequence[Tile]) -> Plane:
    plane = Plane(width, height)
    for tile in fixed:
        insert_tile(Rect(tile.ll, tile.ur), plane)
    plane.soft_tiles = list(soft)
    plane.fixed_tiles = list(fixed)
    return plane


def _shuffle(order: list[Tile], rng: random.Random, avg_weight: float) -> None:
    """Reorder tiles so that strongly connected ones tend to follow each other."""
    count = len(order)
    first = rng.randrange(count)
    order[first], order[0] = order[0], order[first]
    for j in range(1, count):
        previous = order[j - 1]
        priority = [other.name for other, weight in previous.links if weight > avg_weight]
        chosen = -1
        if priority:
            wanted = priority[rng.randrange(len(priority))]
            chosen = max((k for k in range(j, count) if order[k].name == wanted), default=-1)
        if chosen == -1:
            chosen = j + rng.randrange(count - j)
        order[chosen], order[j] = order[j], order[chosen]


def optimize(
    design: Design, iterations: int, rng: random.Random
) -> tuple[Plane, list[tuple[int, float, int]]]:
    """Place the soft modules, then retry with shuffled orders to lower HPWL.

    Returns the best plane and, for every improvement, the iteration, the new
    HPWL and the minimum area of the first module placed.
    """
    plane = design.plane
    plane.soft_tiles = list(design.soft_tiles)
    plane.fixed_tiles = list(design.fixed_tiles)
    insert_soft_tiles(plane, plane.soft_tiles, True)
    best = plane
    improvements: list[tuple[int, float, int]] = []

    for iteration in range(iterations):
        plane = _fresh_plane(best.width, best.height, design.fixed_tiles, design.soft_tiles)
        _shuffle(plane.soft_tiles, rng, design.avg_weight)
        insert_soft_tiles(plane, plane.soft_tiles, False)
        if plane.legal and plane.hpwl < best.hpwl:
            best = plane
            improvements.append((iteration, best.hpwl, best.soft_tiles[0].miniarea))
    return best, improvements


def total_module_hpwl(modules: Sequence[ShapedModule], fixed_tiles: Sequence[Tile]) -> float:
    """Half the summed cost of all modules, links to fixed tiles counted twice."""
    total = sum(
        module_cost(modules, index, fixed_tiles, module.frame_mid, 1)
        for index, module in enumerate(modules)
    )
    return total / 2


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilefloor", description="Place soft modules around fixed ones on a chip."
    )
    parser.add_argument("placement", nargs="?", default="out3.pl")
    parser.add_argument("nodes", nargs="?", default="circuit3.nodes")
    parser.add_argument("modules", nargs="?", default="case03-input.txt")
    parser.add_argument("--iterations", type=int, default=50000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--progress", default="output.txt")
    parser.add_argument("--replace-script", default="case5r.m")
    parser.add_argument("--transform-script", default="case5t.m")
    parser.add_argument("--result", default="case05-output.txt")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    seed = args.seed if args.seed is not None else int(time.time())
    print(f"seed {seed}")

    design = read_design(args.placement, args.nodes, args.modules)
    for tile in design.soft_tiles:
        print(f"{tile.name}\t{tile.miniarea}\t{tile.area()}")

    best, improvements = optimize(design, args.iterations, random.Random(seed))
    Path(args.progress).write_text("".join(f"{_number(h)}\n" for _, h, _ in improvements))
    for iteration, hpwl, miniarea in improvements:
        print(f"{iteration}\t{_number(hpwl)} {miniarea}")
    print(f"best HPWL : {_number(best.hpwl)}")

    fixed = design.fixed_tiles
    modules = build_modules(best.soft_tiles, fixed)

    print("---------Replace----------")
    hpwl = 0.0
    previous = best.hpwl
    for round_number in range(_REPLACE_ROUNDS):
        replace(best, modules, fixed)
        hpwl = total_module_hpwl(modules, fixed)
        print(f"{round_number}\t{_number(hpwl)}")
        if hpwl == previous:
            break
        previous = hpwl

    white = enumerate_white(best)
    Path(args.replace_script).write_text(matlab_script(best, white, fixed, modules))

    print("---------Transform----------")
    previous = hpwl
    round_number = 0
    while True:
        transform(best, modules, fixed)
        hpwl = total_module_hpwl(modules, fixed)
        print(f"{round_number}\t{_number(hpwl)}")
        if hpwl == previous:
            break
        previous = hpwl
        round_number += 1

    white = enumerate_white(best)
    Path(args.transform_script).write_text(matlab_script(best, white, fixed, modules))
    write_result(args.result, hpwl, modules)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())