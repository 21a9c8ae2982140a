"""Reading a design from its placement, node and module description files."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from .geometry import Point, Rect
from .stitching import insert_tile
from .tiles import Body, Plane, ShapedModule, Tile


class _Tokens:
    """Whitespace-separated words of a file, read one at a time."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self._path = str(path)
        self._words = iter(Path(path).read_text().split())

    def __iter__(self) -> _Tokens:
        return self

    def __next__(self) -> str:
        return next(self._words)

    def word(self) -> str:
        try:
            return next(self._words)
        except StopIteration:
            raise ValueError(f"{self._path}: unexpected end of file") from None

    def skip(self, count: int) -> None:
        for _ in range(count):
            self.word()

    def integer(self) -> int:
        return int(self.word())

    def number(self) -> float:
        return float(self.word())


@dataclass
class Design:
    """A chip outline with its soft and fixed modules and their nets."""

    width: int
    height: int
    plane: Plane
    soft_tiles: list[Tile]
    fixed_tiles: list[Tile]
    avg_weight: float


def read_design(
    placement_path: str | PathLike[str],
    nodes_path: str | PathLike[str],
    input_path: str | PathLike[str],
) -> Design:
    """Read a design and carve its fixed modules out of a fresh plane.

    The placement file gives every module's lower-left corner, soft modules
    first; the nodes file gives the chip size and module sizes; the input
    file gives the soft modules' minimum areas and the weighted connections.
    """
    placement = _Tokens(placement_path)
    nodes = _Tokens(nodes_path)
    modules = _Tokens(input_path)

    placement.skip(3)
    nodes.skip(3)
    nodes.skip(1)
    width, height = nodes.integer(), nodes.integer()
    nodes.skip(2)
    total = nodes.integer()
    nodes.skip(2)
    fixed_count = nodes.integer()
    soft_count = total - fixed_count
    modules.skip(5)

    plane = Plane(width, height)
    soft_tiles: list[Tile] = []
    fixed_tiles: list[Tile] = []

    for count, name in enumerate(placement, start=1):
        x, y = int(placement.number()), int(placement.number())
        nodes.skip(1)
        w, h = nodes.integer(), nodes.integer()
        ll, ur = Point(x, y), Point(x + w, y + h)
        if count <= soft_count:
            tile = Tile(Body.FIXED, ll, ur, name)
            modules.skip(1)
            tile.miniarea = modules.integer()
            soft_tiles.append(tile)
        else:
            nodes.skip(1)
            tile = insert_tile(Rect(ll, ur), plane)
            tile.ll, tile.ur = ll, ur
            tile.name = name
            fixed_tiles.append(tile)
        placement.skip(2)

    modules.skip(2)
    modules.skip(5 * fixed_count)
    modules.skip(1)
    connections = modules.integer()

    by_name = {tile.name: tile for tile in (*fixed_tiles, *soft_tiles)}
    total_weight = 0
    for _ in range(connections):
        first_name, second_name = modules.word(), modules.word()
        weight = modules.integer()
        first = by_name.get(first_name, plane.hint)
        second = by_name.get(second_name, plane.hint)
        total_weight += weight
        first.links.append((second, weight))
        second.links.append((first, weight))

    avg_weight = total_weight / connections if connections else math.nan

    plane.soft_tiles = soft_tiles
    plane.fixed_tiles = fixed_tiles
    return Design(width, height, plane, soft_tiles, fixed_tiles, avg_weight)


def build_modules(soft_tiles: Sequence[Tile], fixed_tiles: Sequence[Tile]) -> list[ShapedModule]:
    """Wrap placed soft tiles as modules whose links refer to list positions."""
    modules: list[ShapedModule] = []
    for tile in soft_tiles:
        links: list[tuple[bool, int, int]] = []
        for other, weight in tile.links:
            links.extend(
                (True, k, weight) for k, fixed in enumerate(fixed_tiles) if fixed.name == other.name
            )
            links.extend(
                (False, k, weight) for k, soft in enumerate(soft_tiles) if soft.name == other.name
            )
        modules.append(
            ShapedModule(
                t1=tile,
                name=tile.name,
                frame_mid=tile.mid,
                miniarea=tile.miniarea,
                total_weight=sum(weight for _, weight in tile.links),
                links=links,
            )
        )
    return modules