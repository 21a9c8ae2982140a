"""Splitting, joining, inserting and removing tiles in a corner-stitched plane."""

from __future__ import annotations

from collections import deque

from .geometry import Point, Rect
from .tiles import Body, Plane, Tile, find_tile, go_to_point


def split_x(tile: Tile, x: int) -> Tile:
    """Cut ``tile`` at column ``x``; return the new right-hand part."""
    new = Tile(Body.WHITE, Point(x, tile.bottom()), tile.ur)
    new.bl = tile
    new.tr = tile.tr
    new.rt = tile.rt
    tile.ur = Point(x, tile.ur.y)
    tile.update_mid()

    tp = tile.tr
    while tp.bl is tile:
        tp.bl = new
        tp = tp.lb
    tile.tr = new

    tp = tile.rt
    while tp.left() >= x:
        tp.lb = new
        tp = tp.bl
    tile.rt = tp

    tp = tile.lb
    while tp.right() <= x and tp.body != Body.BOUNDARY:
        tp = tp.tr
    new.lb = tp

    while tp.rt is tile:
        tp.rt = new
        tp = tp.tr
    return new


def split_y(tile: Tile, y: int) -> Tile:
    """Cut ``tile`` at row ``y``; return the new upper part."""
    new = Tile(Body.WHITE, Point(tile.left(), y), tile.ur)
    new.lb = tile
    new.rt = tile.rt
    new.tr = tile.tr
    tile.ur = Point(tile.ur.x, y)
    tile.update_mid()

    tp = tile.rt
    while tp.lb is tile:
        tp.lb = new
        tp = tp.bl
    tile.rt = new

    tp = tile.tr
    while tp.bottom() >= y:
        tp.bl = new
        tp = tp.lb
    tile.tr = tp

    tp = tile.bl
    while tp.top() <= y and tp.body != Body.BOUNDARY:
        tp = tp.rt
    new.bl = tp

    while tp.tr is tile:
        tp.tr = new
        tp = tp.rt
    return new


def join_x(tile1: Tile, tile2: Tile, plane: Plane) -> None:
    """Absorb the horizontally adjacent ``tile2`` into ``tile1``."""
    tp = tile2.rt
    while tp.lb is tile2:
        tp.lb = tile1
        tp = tp.bl

    tp = tile2.lb
    while tp.rt is tile2:
        tp.rt = tile1
        tp = tp.tr

    if tile1.left() < tile2.left():
        tp = tile2.tr
        while tp.bl is tile2:
            tp.bl = tile1
            tp = tp.lb
        tile1.tr = tile2.tr
        tile1.rt = tile2.rt
        tile1.ur = tile2.ur
    else:
        tp = tile2.bl
        while tp.tr is tile2:
            tp.tr = tile1
            tp = tp.rt
        tile1.bl = tile2.bl
        tile1.lb = tile2.lb
        tile1.ll = Point(tile2.left(), tile1.bottom())
    tile1.update_mid()

    if plane.hint is tile2:
        plane.hint = tile1


def join_y(tile1: Tile, tile2: Tile, plane: Plane) -> None:
    """Absorb the vertically adjacent ``tile2`` into ``tile1``."""
    tp = tile2.tr
    while tp.bl is tile2:
        tp.bl = tile1
        tp = tp.lb

    tp = tile2.bl
    while tp.tr is tile2:
        tp.tr = tile1
        tp = tp.rt

    if tile1.bottom() < tile2.bottom():
        tp = tile2.rt
        while tp.lb is tile2:
            tp.lb = tile1
            tp = tp.bl
        tile1.rt = tile2.rt
        tile1.tr = tile2.tr
        tile1.ur = tile2.ur
    else:
        tp = tile2.lb
        while tp.rt is tile2:
            tp.rt = tile1
            tp = tp.tr
        tile1.lb = tile2.lb
        tile1.bl = tile2.bl
        tile1.ll = Point(tile1.left(), tile2.bottom())
    tile1.update_mid()

    if plane.hint is tile2:
        plane.hint = tile1


def can_merge_vertical(tile1: Tile, tile2: Tile) -> bool:
    """Whether two space tiles share the same left and right edges."""
    if tile1.body != Body.WHITE or tile2.body != Body.WHITE:
        return False
    return tile1.left() == tile2.left() and tile1.right() == tile2.right()


def can_merge_horizontal(tile1: Tile, tile2: Tile) -> bool:
    """Whether two space tiles share the same top and bottom edges."""
    if tile1.body != Body.WHITE or tile2.body != Body.WHITE:
        return False
    return tile1.top() == tile2.top() and tile1.bottom() == tile2.bottom()


def down_merge(tile: Tile, plane: Plane) -> bool:
    """Join ``tile`` with the tile below it when possible; report whether it did."""
    below = tile.lb
    if can_merge_vertical(tile, below):
        join_y(tile, below, plane)
        return True
    return False


def split_and_merge(tile: Tile, target: Tile | None, plane: Plane, rect: Rect) -> Tile:
    """Trim ``tile`` to the columns of ``rect`` and stack it onto ``target``."""
    if tile.left() < rect.ll.x:
        old = tile
        tile = split_x(tile, rect.ll.x)
        down_merge(old, plane)

    if tile.right() > rect.ur.x:
        right_part = split_x(tile, rect.ur.x)
        down_merge(right_part, plane)

    if target is not None:
        join_y(tile, target, plane)
    return tile


def _normalize(plane: Plane) -> None:
    """Merge space tiles that have become vertically mergeable."""
    white = enumerate_white(plane)
    i = 0
    while i < len(white):
        if down_merge(white[i], plane):
            white = enumerate_white(plane)
            i = 0
            if not white:
                break
        if can_merge_horizontal(white[i], white[i].bl):
            white = enumerate_white(plane)
            i = 0
            if not white:
                break
        i += 1


def insert_tile(rect: Rect, plane: Plane) -> Tile:
    """Carve ``rect`` out of space and return the resulting fixed tile."""
    tp = find_tile(plane, rect.ll, plane.hint)
    if tp.bottom() < rect.ll.y:
        tp = split_y(tp, rect.ll.y)

    target: Tile | None = None
    while tp.top() <= rect.ur.y:
        target = split_and_merge(tp, target, plane, rect)
        tp = target.rt

    if tp.bottom() < rect.ur.y < tp.top():
        split_y(tp, rect.ur.y)
        target = split_and_merge(tp, target, plane, rect)

    if target is None:
        raise ValueError(f"cannot insert empty rectangle {rect}")
    target.body = Body.FIXED
    _normalize(plane)
    return target


def enumerate_white(plane: Plane) -> list[Tile]:
    """List the space tiles of the plane, scanning rows from the top down."""
    white: list[Tile] = []
    pending = deque([go_to_point(plane.hint, Point(1, plane.height - 1))])
    while pending:
        unvisited = True
        tp = pending[0]
        while tp.body != Body.BOUNDARY:
            if any(tp.ll == seen.ll for seen in white):
                unvisited = False
            if unvisited and tp.body == Body.WHITE:
                white.append(tp)
            if tp.bl.body == Body.BOUNDARY or tp.lb.bottom() >= tp.bl.bottom():
                pending.append(tp.lb)
            tp = tp.tr
        pending.popleft()
    return white


def remove_tile(tile: Tile, plane: Plane) -> None:
    """Turn the tile at ``tile``'s corner back into space and merge it away."""
    tile = find_tile(plane, tile.ll)
    del_ytop = tile.top()
    del_ybot = tile.bottom()
    tile.body = Body.WHITE

    right_start = tile.tr
    left_start = tile.bl

    if right_start.body == Body.WHITE and right_start.top() > del_ytop:
        split_y(right_start, del_ytop)

    tp = right_start
    while tp.bottom() >= del_ybot:
        nxt = tp.lb
        piece = tile
        if tp.bottom() > del_ybot:
            piece = split_y(tile, tp.bottom())
        if tp.body == Body.WHITE:
            join_x(tp, piece, plane)
        tp = nxt

    if tp.body == Body.WHITE and tp.top() > del_ybot:
        tp = split_y(tp, del_ybot)
        join_x(tp, tile, plane)

    if tp.rt.bl.body != Body.WHITE and can_merge_vertical(tp, tp.rt):
        join_y(tp, tp.rt, plane)

    if left_start.body == Body.WHITE and left_start.bottom() < del_ybot:
        left_start = split_y(left_start, del_ybot)

    tp = left_start
    while tp.top() <= del_ytop:
        nxt = tp.rt
        neighbour = tp.tr
        if tp.top() < neighbour.top():
            split_y(neighbour, tp.top())

        if tp.body != Body.WHITE:
            tp = nxt
            continue

        neighbour = tp.tr
        while tp.bottom() < neighbour.bottom():
            split_y(tp, neighbour.bottom())
            neighbour = neighbour.lb
        nxt = tp.rt
        join_x(tp, neighbour, plane)
        if can_merge_vertical(tp, tp.lb):
            join_y(tp, tp.lb, plane)
        tp = nxt

    if tp.body == Body.WHITE and tp.bottom() < del_ytop:
        upper = split_y(tp, del_ytop)
        while tp.tr.bottom() > tp.bottom():
            piece = split_y(tp, tp.tr.bottom())
            if can_merge_horizontal(piece, piece.tr):
                join_x(piece, piece.tr, plane)
        if can_merge_horizontal(tp, tp.tr):
            join_x(tp, tp.tr, plane)
        tp = upper

    if can_merge_vertical(tp, tp.lb):
        join_y(tp, tp.lb, plane)

    _normalize(plane)
    plane.hint = find_tile(plane, plane.hint.ll, tp)