import pytest

from tilefloor.geometry import Point, Rect
from tilefloor.tiles import Body, Plane, find_tile
from tilefloor.stitching import (
    can_merge_horizontal,
    can_merge_vertical,
    down_merge,
    enumerate_white,
    insert_tile,
    join_x,
    join_y,
    remove_tile,
    split_and_merge,
    split_x,
    split_y,
)


def _white_area(plane):
    return sum(t.area() for t in enumerate_white(plane))


def test_enumerate_empty_plane():
    plane = Plane(10, 10)
    white = enumerate_white(plane)
    assert white == [plane.hint]


def test_split_x_geometry_and_stitches():
    plane = Plane(10, 10)
    space = plane.hint
    right = split_x(space, 4)
    assert space.right() == 4
    assert right.left() == 4
    assert right.right() == 10
    assert right.top() == 10
    assert space.tr is right
    assert right.bl is space
    assert plane.right.bl is right
    assert plane.bottom.rt is right
    assert space.width() + right.width() == 10


def test_split_then_join_x_restores():
    plane = Plane(10, 10)
    space = plane.hint
    right = split_x(space, 4)
    plane.hint = right
    join_x(space, right, plane)
    assert space.ll == Point(0, 0)
    assert space.ur == Point(10, 10)
    assert plane.right.bl is space
    assert plane.bottom.rt is space
    assert space.tr is plane.right
    assert plane.hint is space


def test_split_y_geometry_and_stitches():
    plane = Plane(10, 10)
    space = plane.hint
    upper = split_y(space, 3)
    assert space.top() == 3
    assert upper.bottom() == 3
    assert upper.top() == 10
    assert space.rt is upper
    assert upper.lb is space
    assert plane.top.lb is upper
    assert plane.left.tr is upper


def test_split_then_join_y_restores():
    plane = Plane(10, 10)
    space = plane.hint
    upper = split_y(space, 3)
    join_y(space, upper, plane)
    assert space.ur == Point(10, 10)
    assert plane.top.lb is space
    assert plane.left.tr is space
    assert space.rt is plane.top


def test_merge_predicates():
    plane = Plane(10, 10)
    space = plane.hint
    right = split_x(space, 4)
    assert can_merge_horizontal(space, right)
    assert not can_merge_vertical(space, right)
    right.body = Body.FIXED
    assert not can_merge_horizontal(space, right)


def test_down_merge_joins_upper_half():
    plane = Plane(10, 10)
    space = plane.hint
    upper = split_y(space, 3)
    assert down_merge(upper, plane)
    assert upper.ll == Point(0, 0)
    assert upper.ur == Point(10, 10)
    assert plane.bottom.rt is upper
    assert not down_merge(upper, plane)


def test_split_and_merge_trims_to_columns():
    plane = Plane(10, 10)
    middle = split_y(plane.hint, 2)
    split_y(middle, 5)
    rect = Rect(Point(2, 2), Point(5, 5))
    result = split_and_merge(middle, None, plane, rect)
    assert result.ll == rect.ll
    assert result.ur == rect.ur


def test_insert_tile_carves_rectangle():
    plane = Plane(10, 10)
    rect = Rect(Point(2, 2), Point(5, 5))
    block = insert_tile(rect, plane)
    assert block.body == Body.FIXED
    assert block.ll == rect.ll
    assert block.ur == rect.ur
    assert _white_area(plane) == plane.width * plane.height - rect.area()
    white = enumerate_white(plane)
    assert block not in white
    assert all(t.body == Body.WHITE for t in white)


def test_insert_empty_rect_raises():
    plane = Plane(10, 10)
    with pytest.raises(ValueError):
        insert_tile(Rect(Point(3, 3), Point(3, 3)), plane)


def test_remove_tile_restores_empty_plane():
    plane = Plane(10, 10)
    block = insert_tile(Rect(Point(2, 2), Point(5, 5)), plane)
    remove_tile(block, plane)
    white = enumerate_white(plane)
    assert len(white) == 1
    assert white[0].ll == Point(0, 0)
    assert white[0].ur == Point(plane.width, plane.height)
    assert plane.hint is white[0]
    assert find_tile(plane, Point(3, 3)) is white[0]


def test_insert_after_remove_matches_first_insert():
    plane = Plane(10, 10)
    rect = Rect(Point(2, 2), Point(5, 5))
    remove_tile(insert_tile(rect, plane), plane)
    block = insert_tile(rect, plane)
    assert block.ll == rect.ll
    assert block.ur == rect.ur
    assert _white_area(plane) == plane.width * plane.height - rect.area()