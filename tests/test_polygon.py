import math

import pytest

from insulplan.polygon import (
    Corner,
    Polygon,
    PolygonPointsOnSides,
    corners_on_polygon,
    flatten_points,
    hole_extrusion,
    merge_polygons,
)
from insulplan.vector import Point


def _square(size=1.0, x=0.0, y=0.0, z=0.0):
    return Polygon(
        [
            Point(x, y, z),
            Point(x + size, y, z),
            Point(x + size, y + size, z),
            Point(x, y + size, z),
        ]
    )


def test_to_rings_drops_points_on_sides_and_duplicates():
    sides = PolygonPointsOnSides(
        [
            Point(0, 0, 0),
            Point(1, 0, 0),
            Point(2, 0, 0),
            Point(2, 0, 0),
            Point(2, 2, 0),
            Point(0, 2, 0),
        ]
    )
    rim, holes = sides.to_rings()
    assert rim == [Point(0, 0, 0), Point(2, 0, 0), Point(2, 2, 0), Point(0, 2, 0)]
    assert holes == []


def test_closing_repeat_of_first_point_is_removed():
    poly = Polygon(
        [Point(0, 0, 0), Point(3, 0, 0), Point(3, 3, 0), Point(0, 3, 0), Point(0, 0, 0)]
    )
    assert poly.rim == [Point(0, 0, 0), Point(3, 0, 0), Point(3, 3, 0), Point(0, 3, 0)]


def test_points_on_sides_translate_round_trip():
    sides = PolygonPointsOnSides(
        [Point(0, 0, 0), Point(1, 0, 0), Point(1, 1, 0)],
        [[Point(0.2, 0.1, 0), Point(0.5, 0.1, 0), Point(0.5, 0.3, 0)]],
    )
    inc = Point(1.5, -2.0, 3.0)
    back = sides.translate(inc).translate(inc * -1.0)
    for a, b in zip(back.rim + back.holes[0], sides.rim + sides.holes[0]):
        assert a.is_similar(b)


def test_points_on_sides_to_polygon_matches_constructor():
    pts = [Point(0, 0, 0), Point(1, 0, 0), Point(2, 0, 0), Point(2, 1, 0), Point(0, 1, 0)]
    assert PolygonPointsOnSides(pts).to_polygon() == Polygon(pts)


def test_colinear_rim_is_rejected():
    with pytest.raises(ValueError):
        Polygon([Point(0, 0, 0), Point(1, 0, 0), Point(2, 0, 0)])


def test_rim_of_identical_points_is_rejected():
    with pytest.raises(ValueError):
        Polygon([Point(1, 1, 1), Point(1, 1, 1), Point(1, 1, 1)])


def test_from_triplets_matches_points():
    triplets = [(0.0, 0.0, 0.0), (4.0, 0.0, 0.0), (4.0, 4.0, 0.0), (0.0, 4.0, 0.0)]
    hole = [(1.0, 1.0, 0.0), (2.0, 1.0, 0.0), (2.0, 2.0, 0.0)]
    poly = Polygon.from_triplets(triplets, [hole])
    assert poly.rim == [Point(*t) for t in triplets]
    assert poly.holes == [[Point(*t) for t in hole]]


def test_from_increments_with_tuples_and_points_agree():
    start = (0.0, 0.0)
    steps = [(1.0, 0.0), (0.0, 1.0), (-1.0, 0.0), (0.0, -1.0)]
    from_tuples = Polygon.from_increments(start, steps)
    from_points = Polygon.from_increments(start, [Point(dx, dy, 5.0) for dx, dy in steps])
    assert from_tuples == from_points
    assert from_tuples == Polygon.from_triplets(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)], []
    )


def test_translate_moves_every_point():
    poly = _square(2.0)
    inc = Point(1.0, 2.0, 3.0)
    moved = poly.translate(inc)
    for before, after in zip(poly.rim, moved.rim):
        assert (after - before).is_similar(inc)


def test_wireframe_closes_every_ring():
    poly = Polygon.from_triplets(
        [(0, 0, 0), (4, 0, 0), (4, 4, 0), (0, 4, 0)],
        [[(1, 1, 0), (2, 1, 0), (2, 2, 0), (1, 2, 0)]],
    )
    wire = poly.wireframe()
    assert len(wire) == 2
    assert wire[0] == poly.rim + [poly.rim[0]]
    assert wire[1] == poly.holes[0] + [poly.holes[0][0]]


def test_rim_extrusion_builds_one_wall_per_edge():
    poly = _square(2.0)
    inc = Point(0.0, 0.0, 3.0)
    walls = poly.rim_extrusion(inc)
    assert len(walls) == len(poly.rim)
    for index, wall in enumerate(walls):
        a = poly.rim[index]
        b = poly.rim[(index + 1) % len(poly.rim)]
        assert wall.rim == [a, b, b + inc, a + inc]


def test_holes_extrusion_matches_hole_extrusion():
    hole = [Point(1, 1, 0), Point(2, 1, 0), Point(2, 2, 0), Point(1, 2, 0)]
    poly = Polygon([Point(0, 0, 0), Point(4, 0, 0), Point(4, 4, 0), Point(0, 4, 0)], [hole])
    inc = Point(0.0, 0.0, 1.0)
    assert poly.holes_extrusion(inc) == hole_extrusion(hole, inc)
    assert len(hole_extrusion(hole, inc)) == len(hole)


def test_normal_points_along_z_for_counterclockwise_square():
    normal = _square().normal()
    up = Point(0.0, 0.0, 1.0)
    assert normal.is_colinear_with(up)
    assert normal.same_octant(up)


def test_distance_from_origin_of_raised_square():
    poly = _square(2.0, z=5.0)
    assert poly.distance_from_origin().is_similar(Point(0.0, 0.0, 5.0))


def test_coordinate_system_is_orthonormal_with_normal_as_z():
    poly = Polygon([Point(0, 0, 0), Point(2, 0, 0), Point(2, 0, 2), Point(0, 0, 2)])
    system = poly.coordinate_system()
    assert system.z.is_similar(poly.normal().normalize())
    for axis in (system.x, system.y, system.z):
        assert math.isclose(axis.modulo(), 1.0, abs_tol=1e-9)
    assert math.isclose(system.x.dot(system.y), 0.0, abs_tol=1e-9)
    assert math.isclose(system.x.dot(system.z), 0.0, abs_tol=1e-9)


def test_flatten_points_preserves_distances():
    poly = Polygon([Point(0, 0, 0), Point(2, 0, 0), Point(2, 0, 3), Point(0, 0, 3)])
    flat = flatten_points(poly.rim, poly.coordinate_system())
    assert len(flat) == 2 * len(poly.rim)
    pairs = list(zip(flat[::2], flat[1::2]))
    for i in range(len(pairs)):
        j = (i + 1) % len(pairs)
        d2 = math.hypot(pairs[i][0] - pairs[j][0], pairs[i][1] - pairs[j][1])
        d3 = (poly.rim[i] - poly.rim[j]).modulo()
        assert math.isclose(d2, d3, abs_tol=1e-9)


def test_flatten_points_needs_three_points():
    system = _square().coordinate_system()
    with pytest.raises(ValueError):
        flatten_points([Point(0, 0, 0), Point(1, 0, 0)], system)


def test_convexity():
    assert _square().is_convex_without_holes()
    l_shape = Polygon.from_triplets(
        [(0, 0, 0), (2, 0, 0), (2, 1, 0), (1, 1, 0), (1, 2, 0), (0, 2, 0)], []
    )
    assert not l_shape.is_convex_without_holes()
    with_hole = Polygon.from_triplets(
        [(0, 0, 0), (4, 0, 0), (4, 4, 0), (0, 4, 0)],
        [[(1, 1, 0), (2, 1, 0), (2, 2, 0)]],
    )
    assert not with_hole.is_convex_without_holes()


def test_to_points_on_sides_round_trip():
    poly = Polygon.from_triplets(
        [(0, 0, 0), (4, 0, 0), (4, 4, 0), (0, 4, 0)],
        [[(1, 1, 0), (2, 1, 0), (2, 2, 0)]],
    )
    assert poly.to_points_on_sides().to_polygon() == poly
    assert Polygon.from_sides(poly.to_points_on_sides()) == poly


def test_to_dict_layout():
    poly = Polygon.from_triplets([(0, 0, 0), (1, 0, 0), (1, 1, 0)], [])
    data = poly.to_dict()
    assert data["holes"] == []
    assert data["rim"][1] == {"x": 1.0, "y": 0.0, "z": 0.0}
    assert [Point.from_dict(p) for p in data["rim"]] == poly.rim


def test_merge_adjacent_squares():
    left = _square()
    right = _square(x=1.0)
    merged = merge_polygons([left, right])
    assert len(merged) == 1
    assert merged[0].rim == [Point(0, 0, 0), Point(2, 0, 0), Point(2, 1, 0), Point(0, 1, 0)]


def test_merge_keeps_separate_polygons_apart():
    first = _square()
    second = _square(x=5.0)
    merged = merge_polygons([first, second])
    assert len(merged) == 2
    assert first in merged
    assert second in merged


def test_merge_ignores_opposite_orientation():
    left = _square()
    flipped = Polygon(list(reversed(_square(x=1.0).rim)))
    merged = merge_polygons([left, flipped])
    assert len(merged) == 2


def test_merge_of_nothing_is_empty():
    assert merge_polygons([]) == []


def test_corners_between_perpendicular_walls():
    front = Polygon([Point(0, 0, 0), Point(1, 0, 0), Point(1, 0, 1), Point(0, 0, 1)])
    side = Polygon([Point(1, 0, 0), Point(1, 1, 0), Point(1, 1, 1), Point(1, 0, 1)])
    corners = corners_on_polygon(0, [front, side])
    assert corners == [
        Corner(Point(1, 0, 0), 1, 1),
        Corner(Point(1, 0, 1), 1, 1),
    ]
    other_way = corners_on_polygon(1, [front, side])
    assert {c.point for c in other_way} == {Point(1, 0, 0), Point(1, 0, 1)}
    assert all(c.bordering_index == 0 for c in other_way)


def test_no_corners_for_distant_walls():
    walls = [_square(), _square(x=10.0)]
    assert corners_on_polygon(0, walls) == []