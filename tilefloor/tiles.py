"""Corner-stitched tiles, the plane that holds them, and point search."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .geometry import Point, Rect


class Body(IntEnum):
    """What a tile holds."""

    WHITE = 0
    FIXED = 1
    SOFT = 2
    BOUNDARY = 3


@dataclass(eq=False)
class Tile:
    """A rectangle of the plane with its four corner stitches.

    ``lb`` and ``bl`` point to the neighbours at the lower-left corner (below
    and to the left), ``tr`` and ``rt`` to the neighbours at the upper-right
    corner (to the right and above).  ``links`` holds ``(tile, weight)``
    pairs for the nets the tile takes part in.
    """

    body: Body
    ll: Point
    ur: Point
    name: str = ""
    miniarea: int = 0
    lb: Tile | None = field(default=None, repr=False)
    bl: Tile | None = field(default=None, repr=False)
    tr: Tile | None = field(default=None, repr=False)
    rt: Tile | None = field(default=None, repr=False)
    links: list[tuple[Tile, int]] = field(default_factory=list, repr=False)
    mid: Point = field(init=False)

    def __post_init__(self) -> None:
        self.update_mid()

    def left(self) -> int:
        return self.ll.x

    def right(self) -> int:
        return self.ur.x

    def bottom(self) -> int:
        return self.ll.y

    def top(self) -> int:
        return self.ur.y

    def width(self) -> int:
        return self.ur.x - self.ll.x

    def height(self) -> int:
        return self.ur.y - self.ll.y

    def area(self) -> int:
        return self.width() * self.height()

    def update_mid(self) -> None:
        """Recompute the centre from the corners."""
        self.mid = Rect(self.ll, self.ur).mid()


@dataclass(eq=False)
class ShapedModule:
    """A soft module that may be made of one or two tiles.

    ``direction`` tells where ``t2`` sits against ``t1``; ``links`` holds
    ``(to_fixed, index, weight)`` triples, where ``index`` refers to the
    fixed tile list when ``to_fixed`` is true and to the module list otherwise.
    """

    t1: Tile
    name: str
    frame_mid: Point
    miniarea: int = 0
    t2: Tile | None = None
    direction: int = 0
    total_weight: int = 0
    links: list[tuple[bool, int, int]] = field(default_factory=list)


class Plane:
    """A chip area surrounded by four boundary tiles and filled with space."""

    def __init__(self, width: int, height: int) -> None:
        self.left = Tile(Body.BOUNDARY, Point(-1, 0), Point(0, height), "LEFT")
        self.right = Tile(Body.BOUNDARY, Point(width, 0), Point(width + 1, height), "RIGHT")
        self.top = Tile(Body.BOUNDARY, Point(0, height), Point(width, height + 1), "TOP")
        self.bottom = Tile(Body.BOUNDARY, Point(0, -1), Point(width, 0), "BOTTOM")
        space = Tile(Body.WHITE, Point(0, 0), Point(width, height), "white")

        space.bl, space.lb, space.tr, space.rt = self.left, self.bottom, self.right, self.top

        self.left.lb, self.left.rt, self.left.tr = self.bottom, self.top, space
        self.top.bl, self.top.lb, self.top.tr = self.left, space, self.right
        self.right.bl, self.right.lb, self.right.rt = space, self.bottom, self.top
        self.bottom.bl, self.bottom.rt, self.bottom.tr = self.left, space, self.right

        self.width = width
        self.height = height
        self.hint = space
        self.hpwl = 0.0
        self.soft_tiles: list[Tile] = []
        self.fixed_tiles: list[Tile] = []
        self.legal = True


def go_to_point(tile: Tile, point: Point) -> Tile:
    """Walk the stitches from ``tile`` to the tile containing ``point``."""
    tp = tile
    if point.y < tp.bottom():
        tp = tp.lb
        while point.y < tp.bottom():
            tp = tp.lb
    else:
        while point.y >= tp.top():
            tp = tp.rt

    if point.x < tp.left():
        while True:
            tp = tp.bl
            while point.x < tp.left():
                tp = tp.bl
            if point.y < tp.top():
                break
            tp = tp.rt
            while point.y >= tp.top():
                tp = tp.rt
            if point.x >= tp.left():
                break
    else:
        while point.x >= tp.right():
            tp = tp.tr
            while point.x >= tp.right():
                tp = tp.tr
            if point.y >= tp.bottom():
                break
            tp = tp.lb
            while point.y < tp.bottom():
                tp = tp.lb
    return tp


def find_tile(plane: Plane, point: Point, hint: Tile | None = None) -> Tile:
    """Find the tile containing ``point`` and remember it as the plane's hint."""
    start = plane.hint if hint is None else hint
    found = go_to_point(start, point)
    plane.hint = found
    return found