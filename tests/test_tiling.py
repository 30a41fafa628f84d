import math

import pytest

from insulplan.polygon import PolygonPointsOnSides
from insulplan.tiling import (
    Tile,
    TileWithAdhesive,
    TriangulatedTiles,
    TriangulatedTilesWithAdhesive,
    UnitTile,
    handle_corner,
    split_into_tiles,
    tile_to_triangulated,
    tile_unit_dimensions,
)
from insulplan.vector import Angle, Point, PositiveFloat


def square_tile():
    base = PolygonPointsOnSides(
        [Point(0, 0, 0), Point(2, 0, 0), Point(2, 2, 0), Point(0, 2, 0)]
    )
    return Tile.from_base_and_width(base, Point(0, 0, 0.5))


def wall_tile():
    base = PolygonPointsOnSides(
        [Point(0, 0, 0), Point(2, 0, 0), Point(2, 0, 2), Point(0, 0, 2)]
    )
    return Tile.from_base_and_width(base, Point(0, -0.5, 0))


def test_width_matches_translation():
    assert math.isclose(square_tile().width(), 0.5, abs_tol=1e-9)


def test_width_vector_equals_offset():
    assert square_tile().width_vector().is_similar(Point(0, 0, 0.5))


def test_duplicate_pairs_removed():
    p0, p1, p2 = Point(0, 0, 0), Point(1, 0, 0), Point(0, 1, 0)
    inc = Point(0, 0, 1)
    tile = Tile(
        PolygonPointsOnSides([p0, p0, p1, p2]),
        PolygonPointsOnSides([p0 + inc, p0 + inc, p1 + inc, p2 + inc]),
    )
    assert tile.base_polygon.rim == [p0, p1, p2]
    assert tile.surface_polygon.rim == [p0 + inc, p1 + inc, p2 + inc]


def test_mismatched_rims_rejected():
    with pytest.raises(ValueError):
        Tile(PolygonPointsOnSides([Point(0, 0, 0)]), PolygonPointsOnSides([]))


def test_split_surface_ends():
    tile = square_tile()
    assert tile.split_surface(0.0).rim == tile.base_polygon.rim
    top = tile.split_surface(1.0).rim
    assert all(a.is_similar(b) for a, b in zip(top, tile.surface_polygon.rim))


def test_split_surface_lies_between():
    tile = square_tile()
    middle = tile.split_surface(0.1).rim
    for base, mid, surf in zip(tile.base_polygon.rim, middle, tile.surface_polygon.rim):
        assert base.z < mid.z < surf.z


def test_translate_moves_average_point():
    tile = square_tile()
    inc = Point(3, -1, 2)
    assert tile.translate(inc).average_point().is_similar(tile.average_point() + inc)


def test_average_point_is_surface_center():
    assert square_tile().average_point().is_similar(Point(1, 1, 0.5))


def test_side_polygons_are_perpendicular_to_width():
    tile = square_tile()
    sides = tile.side_polygons()
    assert len(sides) == 6
    width = tile.width_vector()
    for side in sides[:-2]:
        assert math.isclose(side.normal().normalize().dot(width), 0.0, abs_tol=1e-9)


def test_tile_to_triangulated_counts():
    tile = square_tile()
    mesh, wireframe = tile_to_triangulated(tile)
    sides = tile.side_polygons()
    assert len(wireframe) == len(sides)
    assert len(mesh.triangles) == sum(len(s.rim) - 2 for s in sides)


def test_triangulated_tiles_from_tiles():
    tiles = [square_tile(), wall_tile()]
    result = TriangulatedTiles.from_tiles(tiles)
    assert len(result.tiles) == 2
    expected_lines = sum(len(tile_to_triangulated(t)[1]) for t in tiles)
    assert len(result.wireframe) == expected_lines
    data = result.to_dict()
    assert set(data) == {"tiles", "wireframe"}
    assert len(data["tiles"]) == 2


def test_unit_tile_rejects_negative_and_zero():
    with pytest.raises(ValueError):
        UnitTile(Point(-1, 1, 1))
    with pytest.raises(ValueError):
        UnitTile(Point(0, 0, 0))
    assert UnitTile(Point(1, 2, 0.5)).dimensions == Point(1, 2, 0.5)


def test_tile_unit_dimensions():
    tile = wall_tile()
    assert tile_unit_dimensions(tile, UnitTile(Point(1, 1, 0.5))) == (1, 1)
    assert tile_unit_dimensions(tile, UnitTile(Point(1, 1, 0.3))) is None


def test_split_into_tiles_incompatible():
    with pytest.raises(ValueError):
        split_into_tiles(wall_tile(), UnitTile(Point(1, 1, 0.3)))


def test_split_into_tiles_pieces():
    pieces = split_into_tiles(wall_tile(), UnitTile(Point(1, 1, 0.5)))
    assert len(pieces) == 4
    for piece in pieces:
        assert math.isclose(piece.width(), 0.5, abs_tol=1e-6)
        for p in piece.base_polygon.rim:
            assert math.isclose(p.y, 0.0, abs_tol=1e-6)
            assert -1e-6 <= p.x <= 2 + 1e-6 and -1e-6 <= p.z <= 2 + 1e-6
        for p in piece.surface_polygon.rim:
            assert math.isclose(p.y, -0.5, abs_tol=1e-6)
    centers = {(round(p.average_point().x, 6), round(p.average_point().z, 6)) for p in pieces}
    assert len(centers) == len(pieces)


def test_handle_corner_right_angle():
    result = handle_corner(Angle(math.pi / 2), PositiveFloat(2.0), PositiveFloat(3.0))
    assert result.base_line_near_line == Point.ZERO
    assert result.other_near_line == Point.ZERO
    assert result.base_line_away_from_line == Point(0, 2.0, 0)
    assert result.other_away_from_line.is_similar(Point(3.0, 0, 0))


def make_with_adhesive(tile):
    split = tile.split_surface(0.1)
    adhesive = Tile(tile.base_polygon, split)
    styro = Tile(split, tile.surface_polygon)
    return TileWithAdhesive(styro, adhesive)


def test_tile_with_adhesive_rims():
    tile = square_tile()
    combined = make_with_adhesive(tile)
    assert combined.surface_rim() == tile.surface_polygon.rim
    assert combined.base_rim() == tile.base_polygon.rim
    assert combined.average_point().is_similar(tile.average_point())


def test_tile_with_adhesive_translate():
    combined = make_with_adhesive(square_tile())
    inc = Point(1, 2, 3)
    moved = combined.translate(inc)
    assert moved.average_point().is_similar(combined.average_point() + inc)
    assert moved.base_rim()[0].is_similar(combined.base_rim()[0] + inc)


def test_triangulated_tiles_with_adhesive():
    tiles = [make_with_adhesive(square_tile()), make_with_adhesive(wall_tile())]
    result = TriangulatedTilesWithAdhesive.from_tiles(tiles)
    assert len(result.triangulated_tiles.tiles) == len(tiles)
    assert len(result.triangulated_adhesive.tiles) == len(tiles)
    data = result.to_dict()
    assert set(data) == {"triangulized_tiles", "triangulized_adhesive"}