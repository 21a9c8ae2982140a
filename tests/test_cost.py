from tilefloor.cost import (
    insert_order,
    length,
    manhattan,
    mini_dis,
    module_cost,
    point_cost,
    sort_by_area,
    sort_by_x,
    sort_white_tiles,
    wire_length,
)
from tilefloor.geometry import Point
from tilefloor.tiles import Body, ShapedModule, Tile

import pytest


def _tile(body, x0, y0, x1, y1, name=""):
    return Tile(body, Point(x0, y0), Point(x1, y1), name)


def test_point_cost_counts_fixed_links_twice():
    fixed = _tile(Body.FIXED, 6, 6, 8, 8)
    soft = _tile(Body.SOFT, 6, 6, 8, 8)
    a = _tile(Body.SOFT, 0, 0, 2, 2)
    a.links = [(fixed, 3)]
    b = _tile(Body.SOFT, 0, 0, 2, 2)
    b.links = [(soft, 3)]
    assert point_cost(b, Point(1, 1)) > 0
    assert point_cost(a, Point(1, 1)) == 2 * point_cost(b, Point(1, 1))


def test_point_cost_is_zero_at_linked_centre():
    other = _tile(Body.SOFT, 6, 6, 8, 8)
    a = _tile(Body.SOFT, 0, 0, 2, 2)
    a.links = [(other, 4)]
    assert point_cost(a, other.mid) == 0.0


def test_point_cost_ignores_space_and_boundary_links():
    a = _tile(Body.SOFT, 0, 0, 2, 2)
    a.links = [(_tile(Body.WHITE, 5, 5, 9, 9), 7), (_tile(Body.BOUNDARY, 0, -1, 10, 0), 2)]
    assert point_cost(a, Point(1, 1)) == 0.0


def test_length_matches_point_cost_for_soft_links():
    a = _tile(Body.SOFT, 0, 0, 2, 2)
    a.links = [(_tile(Body.SOFT, 6, 6, 8, 8), 3), (_tile(Body.SOFT, 10, 0, 14, 2), 2)]
    assert length(a, 3, 4) == point_cost(a, Point(3, 4))


def _modules(links):
    first = ShapedModule(_tile(Body.SOFT, 0, 0, 2, 2), "a", Point(1, 1), links=links)
    second = ShapedModule(_tile(Body.SOFT, 8, 8, 10, 10), "b", Point(9, 9))
    return [first, second]


def test_module_cost_mode_one_doubles_fixed_links():
    fixed = [_tile(Body.FIXED, 4, 4, 6, 8)]
    modules = _modules([(True, 0, 2)])
    base = module_cost(modules, 0, fixed, Point(1, 1), 0)
    assert base > 0
    assert module_cost(modules, 0, fixed, Point(1, 1), 1) == 2 * base


def test_module_cost_soft_links_ignore_mode():
    modules = _modules([(False, 1, 3)])
    zero = module_cost(modules, 0, [], Point(1, 1), 0)
    one = module_cost(modules, 0, [], Point(1, 1), 1)
    assert zero == one
    assert module_cost(modules, 0, [], modules[1].frame_mid, 1) == 0.0


def test_module_cost_agrees_with_point_cost():
    modules = _modules([(False, 1, 3)])
    tile = _tile(Body.SOFT, 0, 0, 2, 2)
    tile.links = [(_tile(Body.SOFT, 8, 8, 10, 10), 3)]
    assert module_cost(modules, 0, [], Point(2, 5), 0) == point_cost(tile, Point(2, 5))


def test_wire_length_in_same_spot_is_current_length():
    soft = _tile(Body.SOFT, 0, 0, 4, 4)
    soft.links = [(_tile(Body.SOFT, 10, 12, 14, 16), 2)]
    white = _tile(Body.WHITE, 0, 0, 4, 4)
    assert wire_length(soft, white) == length(soft, soft.mid.x, soft.mid.y)


def test_manhattan_zero_at_corner():
    soft = _tile(Body.SOFT, 0, 0, 2, 2)
    white = _tile(Body.WHITE, 1, 1, 5, 5)
    assert manhattan(soft, white) == 0


def test_manhattan_takes_nearer_corner():
    soft = _tile(Body.SOFT, 0, 0, 2, 2)
    white = _tile(Body.WHITE, 3, 3, 5, 5)
    assert manhattan(soft, white) == 4


def test_mini_dis_value_and_order():
    assert mini_dis(_tile(Body.SOFT, 0, 0, 4, 6)) == 5
    near = _tile(Body.SOFT, 0, 0, 2, 2)
    far = _tile(Body.SOFT, 10, 10, 12, 12)
    assert mini_dis(near) < mini_dis(far)


def test_sort_white_tiles_orders_by_wire_length():
    soft = _tile(Body.SOFT, 0, 0, 2, 2)
    soft.links = [(_tile(Body.FIXED, 50, 50, 52, 52), 1)]
    whites = [
        _tile(Body.WHITE, 0, 0, 4, 4),
        _tile(Body.WHITE, 40, 40, 60, 60),
        _tile(Body.WHITE, 20, 0, 30, 10),
        _tile(Body.WHITE, 0, 20, 10, 30),
    ]
    original = list(whites)
    sort_white_tiles(whites, soft)
    wires = [wire_length(soft, w) for w in whites]
    assert wires == sorted(wires)
    assert {id(w) for w in whites} == {id(w) for w in original}


def test_sort_white_tiles_breaks_ties_by_distance():
    soft = _tile(Body.SOFT, 0, 0, 2, 2)
    far = _tile(Body.WHITE, 30, 30, 40, 40)
    near = _tile(Body.WHITE, 3, 3, 6, 6)
    whites = [far, near]
    sort_white_tiles(whites, soft)
    assert whites == [near, far]


def test_sort_by_area_range_only():
    tiles = [
        _tile(Body.SOFT, 0, 0, 1, 1),
        _tile(Body.SOFT, 0, 0, 2, 2),
        _tile(Body.SOFT, 0, 0, 3, 3),
        _tile(Body.SOFT, 0, 0, 5, 5),
    ]
    first, last = tiles[0], tiles[3]
    sort_by_area(tiles, 1, 2)
    assert tiles[0] is first and tiles[3] is last
    assert tiles[1].area() >= tiles[2].area()
    sort_by_area(tiles, 0, len(tiles) - 1)
    areas = [t.area() for t in tiles]
    assert areas == sorted(areas, reverse=True)


def test_sort_by_x_is_stable():
    a = _tile(Body.SOFT, 5, 0, 6, 1)
    b = _tile(Body.SOFT, 1, 0, 2, 1)
    c = _tile(Body.SOFT, 5, 3, 6, 4)
    tiles = [a, b, c]
    sort_by_x(tiles, 0, 2)
    assert tiles == [b, a, c]


def test_sort_with_empty_range_leaves_list():
    a = _tile(Body.SOFT, 5, 0, 6, 1)
    b = _tile(Body.SOFT, 1, 0, 2, 1)
    tiles = [a, b]
    sort_by_x(tiles, 0, -1)
    assert tiles == [a, b]


def test_insert_order_groups_large_tiles_by_x():
    big = _tile(Body.SOFT, 100, 0, 120, 30)
    close = _tile(Body.SOFT, 0, 0, 11, 50)
    small = _tile(Body.SOFT, 200, 0, 220, 20)
    tiles = [small, big, close]
    index = insert_order(tiles)
    assert tiles == [close, big, small]
    assert tiles[index] is small


def test_insert_order_whole_magnitude():
    big = _tile(Body.SOFT, 50, 0, 100, 20)
    smaller = _tile(Body.SOFT, 0, 0, 40, 20)
    tiles = [smaller, big]
    index = insert_order(tiles)
    assert tiles == [big, smaller]
    assert tiles[index] is smaller


def test_insert_order_rejects_empty():
    with pytest.raises(ValueError):
        insert_order([])