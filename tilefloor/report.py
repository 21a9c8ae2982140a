"""Writing placements out as plotting scripts and result files."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike
from pathlib import Path

from .geometry import Point
from .tiles import Plane, ShapedModule, Tile


def _number(value: float) -> str:
    """Format a number with six significant digits, as stream output does."""
    return format(value, ".6g")


def _edges(tile: Tile) -> tuple[int, int, int, int]:
    return tile.left(), tile.right(), tile.bottom(), tile.top()


def outline(module: ShapedModule) -> list[Point]:
    """Corner points of a module's outline, in the order the result file lists them."""
    l1, r1, b1, t1 = _edges(module.t1)
    if module.t2 is None:
        return [Point(l1, b1), Point(l1, t1), Point(r1, t1), Point(r1, b1)]

    l2, r2, b2, t2 = _edges(module.t2)
    corners = {
        1: [(l1, b1), (l1, t1), (l2, b2), (l2, t2), (r2, t2), (r1, b1)],
        2: [(l1, b1), (l1, t1), (r2, t2), (r2, b2), (l2, b2), (r1, b1)],
        3: [(l1, b1), (l1, t1), (r1, t1), (l2, t2), (r2, t2), (r2, b2)],
        4: [(l1, b1), (l1, t1), (r1, t1), (r2, b2), (l2, b2), (l2, t2)],
        5: [(l2, b2), (l1, t1), (r1, t1), (r1, b1), (r2, t2), (r2, b2)],
        6: [(l2, b2), (l2, t2), (r2, t2), (l1, t1), (r1, t1), (r1, b1)],
        7: [(l1, b1), (r2, b2), (l2, b2), (l2, t2), (r1, t1), (r1, b1)],
        8: [(l1, b1), (l2, t2), (r2, t2), (r2, b2), (r1, t1), (r1, b1)],
    }
    try:
        chosen = corners[module.direction]
    except KeyError:
        raise ValueError(
            f"module {module.name!r} has two tiles but unknown direction {module.direction!r}"
        ) from None
    return [Point(x, y) for x, y in chosen]


def _rect_polygon(left: int, right: int, bottom: int, top: int) -> tuple[list[int], list[int]]:
    return [left, left, right, right, left], [bottom, top, top, bottom, bottom]


def _module_polygon(module: ShapedModule) -> tuple[list[int], list[int]]:
    l1, r1, b1, t1 = _edges(module.t1)
    if module.t2 is None:
        return _rect_polygon(l1, r1, b1, t1)

    l2, r2, b2, t2 = _edges(module.t2)
    polygons = {
        1: ([l1, l1, l2, l2, r1, r1, l1], [b1, t1, b2, t2, t2, b1, b1]),
        2: ([l1, l1, r2, r2, r1, r1, l1], [b1, t1, t2, b2, b2, b1, b1]),
        3: ([l1, l1, r1, r1, r2, r2, l1], [b1, t1, t1, t2, t2, b1, b1]),
        4: ([l1, l1, r1, r1, l2, l2, l1], [b1, t1, t1, b2, b2, b1, b1]),
        5: ([l1, l1, r1, r1, r2, r2, l1], [b2, t1, t1, b1, b1, b2, b2]),
        6: ([l2, l2, l1, l1, r1, r1, l2], [b2, t2, t2, t1, t1, b1, b2]),
        7: ([l2, l2, r1, r1, l1, l1, l2], [b2, t2, t1, b1, b1, b2, b2]),
        8: ([l1, l1, r2, r2, r1, r1, l1], [b1, t2, t2, b2, t1, b1, b1]),
    }
    try:
        return polygons[module.direction]
    except KeyError:
        raise ValueError(
            f"module {module.name!r} has two tiles but unknown direction {module.direction!r}"
        ) from None


def _block(xs: Sequence[int], ys: Sequence[int]) -> list[str]:
    return [
        f"block_x=[{' '.join(str(x) for x in xs)}];",
        f"block_y=[{' '.join(str(y) for y in ys)}];",
    ]


def _fill(colour: str) -> str:
    return f"fill(block_x, block_y, '{colour}');"


def matlab_script(
    plane: Plane,
    white_tiles: Sequence[Tile],
    fixed_tiles: Sequence[Tile],
    modules: Sequence[ShapedModule],
) -> str:
    """A plotting script drawing the chip, its space, fixed tiles and modules.

    Modules are drawn only when the plane's placement is legal.
    """
    lines = ["axis equal;", "hold on;", "grid on;"]
    lines += _block(*_rect_polygon(0, plane.width, 0, plane.height))
    lines.append(_fill("c"))

    for tile in white_tiles:
        lines += _block(*_rect_polygon(*_edges(tile)))
        lines.append(_fill("w"))

    for tile in fixed_tiles:
        lines += _block(*_rect_polygon(*_edges(tile)))
        lines.append(_fill("y"))

    if plane.legal:
        for module in modules:
            lines += _block(*_module_polygon(module))
            lines.append(_fill("g"))
            lines.append(f"text({module.t1.ll.x},{module.frame_mid.y},'{module.name}')")

    return "\n".join(lines) + "\n"


def write_result(path: str | PathLike[str], hpwl: float, modules: Sequence[ShapedModule]) -> None:
    """Write the final wire length and every module's outline to ``path``."""
    lines = [f"HPWL {_number(hpwl)}", f"SOFTMODULE {len(modules)}"]
    for module in modules:
        points = outline(module)
        lines.append(f"{module.name} {len(points)}")
        lines.extend(f"{p.x} {p.y}" for p in points)
    Path(path).write_text("\n".join(lines) + "\n")