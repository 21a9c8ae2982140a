import pytest

from tilefloor.areas import (
    can_use_area,
    can_use_area1,
    can_use_area2,
    can_use_area3,
    can_use_area4,
)
from tilefloor.geometry import Point, Rect
from tilefloor.stitching import enumerate_white, insert_tile
from tilefloor.tiles import Plane

WIDTH = 10
HEIGHT = 10
BIG_TARGET = 2**31 - 1


def _layout(*blocks):
    plane = Plane(WIDTH, HEIGHT)
    rects = [Rect(Point(*ll), Point(*ur)) for ll, ur in blocks]
    for rect in rects:
        insert_tile(rect, plane)
    return rects, enumerate_white(plane)


def _overlap(a, b):
    w = min(a.ur.x, b.ur.x) - max(a.ll.x, b.ll.x)
    h = min(a.ur.y, b.ur.y) - max(a.ll.y, b.ll.y)
    return max(w, 0) * max(h, 0)


def _starts(white):
    points = []
    for t in white:
        points += [
            t.ll,
            t.ur,
            Point(t.ll.x, t.ur.y),
            Point(t.ur.x, t.ll.y),
            t.mid,
        ]
    return points


@pytest.mark.parametrize(
    "finder, corner",
    [
        (can_use_area1, Point(0, 0)),
        (can_use_area2, Point(WIDTH, 0)),
        (can_use_area3, Point(0, HEIGHT)),
        (can_use_area4, Point(WIDTH, HEIGHT)),
    ],
)
def test_empty_plane_gives_whole_chip_from_each_corner(finder, corner):
    _, white = _layout()
    assert finder(white, corner, 1) == Rect(Point(0, 0), Point(WIDTH, HEIGHT))


@pytest.mark.parametrize("direction", [1, 2, 3, 4])
def test_no_space_gives_degenerate_rect(direction):
    start = Point(3, 4)
    assert can_use_area([], start, 1, direction) == Rect(start, start)


def test_grows_past_fixed_block():
    _, white = _layout(((5, 0), (10, 5)))
    area = can_use_area1(white, Point(0, 0), 1)
    assert area == Rect(Point(0, 0), Point(5, 10))
    assert area.aspect_ratio() <= 2


def test_downward_left_from_top_right():
    blocks, white = _layout(((5, 0), (10, 5)))
    area = can_use_area4(white, Point(WIDTH, HEIGHT), 1)
    assert area.ur == Point(WIDTH, HEIGHT)
    assert _overlap(area, blocks[0]) == 0
    assert area.area() > 0


@pytest.mark.parametrize("target", [1, 20, BIG_TARGET])
@pytest.mark.parametrize("direction", [1, 2, 3, 4])
def test_areas_stay_in_space_and_keep_anchor(direction, target):
    blocks, white = _layout(((3, 3), (6, 6)))
    for start in _starts(white):
        area = can_use_area(white, start, target, direction)
        assert 0 <= area.ll.x <= area.ur.x <= WIDTH
        assert 0 <= area.ll.y <= area.ur.y <= HEIGHT
        assert _overlap(area, blocks[0]) == 0
        if direction == 1:
            assert area.ll == start
        elif direction == 2:
            assert (area.ur.x, area.ll.y) == (start.x, start.y)
        elif direction == 3:
            assert (area.ll.x, area.ur.y) == (start.x, start.y)
        else:
            assert area.ur == start


@pytest.mark.parametrize(
    "direction, finder",
    [(1, can_use_area1), (2, can_use_area2), (3, can_use_area3), (4, can_use_area4)],
)
def test_dispatch_matches_direct_call(direction, finder):
    _, white = _layout(((2, 2), (4, 7)), ((6, 1), (9, 3)))
    for start in _starts(white):
        assert can_use_area(white, start, 5, direction) == finder(white, start, 5)


def test_unknown_direction_is_rejected():
    _, white = _layout()
    with pytest.raises(ValueError):
        can_use_area(white, Point(0, 0), 1, 5)