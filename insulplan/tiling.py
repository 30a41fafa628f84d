"""Insulation tiles: prisms between a base and a surface polygon, and their meshes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .plane import align_parallel_planes
from .polygon import Polygon, PolygonPointsOnSides
from .polygon2d import Polygon2D, Rectangle, bounding_box_of
from .triangulation import triangulate_convex, triangulate_polygon
from .vector import Angle, Point, Point2D, PositiveFloat, Triangle, similar

_UNIT_EPSILON = 1e-4
_GRID_EPSILON = 1e-3


def _without_duplicate_pairs(
    base: Sequence[Point], surface: Sequence[Point]
) -> tuple[list[Point], list[Point]]:
    """Drop index positions where both rings repeat their following point."""
    if len(base) != len(surface):
        raise ValueError("base and surface rims must have the same number of points")
    pairs = list(zip(base, surface))
    following = pairs[1:] + pairs[:1]
    kept = [
        (b, s)
        for (b, s), (nb, ns) in zip(pairs, following)
        if not b.is_similar(nb) or not s.is_similar(ns)
    ]
    return [b for b, _ in kept], [s for _, s in kept]


def _interpolate(base: Sequence[Point], surface: Sequence[Point], fraction: float) -> list[Point]:
    return [b + (s - b) * fraction for b, s in zip(base, surface)]


def _side_polygon(b0: Point, b1: Point, s0: Point, s1: Point) -> Polygon:
    if b0.is_similar(b1):
        return Polygon([b0, s1, s0])
    if s0.is_similar(s1):
        return Polygon([b0, b1, s1])
    return Polygon([b0, b1, s1, s0])


def _ring_sides(base: Sequence[Point], surface: Sequence[Point]) -> list[Polygon]:
    base, surface = list(base), list(surface)
    return [
        _side_polygon(b0, b1, s0, s1)
        for b0, b1, s0, s1 in zip(base, base[1:] + base[:1], surface, surface[1:] + surface[:1])
    ]


def _mean(points: Sequence[Point]) -> Point:
    total = Point.ZERO
    for p in points:
        total = total + p
    return total / len(points)


@dataclass(init=False)
class Tile:
    """A solid between a base polygon and a matching surface polygon.

    Points of the two rims correspond by position; holes are not kept.
    """

    base_polygon: PolygonPointsOnSides
    surface_polygon: PolygonPointsOnSides

    def __init__(
        self, base_polygon: PolygonPointsOnSides, surface_polygon: PolygonPointsOnSides
    ) -> None:
        base, surface = _without_duplicate_pairs(base_polygon.rim, surface_polygon.rim)
        self.base_polygon = PolygonPointsOnSides(base, [])
        self.surface_polygon = PolygonPointsOnSides(surface, [])

    @classmethod
    def from_base_and_width(cls, base: PolygonPointsOnSides, width: Point) -> Tile:
        return cls(base, base.translate(width))

    def split_surface(self, fraction: float) -> PolygonPointsOnSides:
        """The polygon lying ``fraction`` of the way from the base to the surface."""
        rim = _interpolate(self.base_polygon.rim, self.surface_polygon.rim, fraction)
        holes = [
            _interpolate(b, s, fraction)
            for b, s in zip(self.base_polygon.holes, self.surface_polygon.holes)
        ]
        return PolygonPointsOnSides(rim, holes)

    def width(self) -> float:
        """Distance between the base and the surface planes."""
        base_plane = self.base_polygon.to_polygon().plane()
        surface_plane = self.surface_polygon.to_polygon().plane()
        p1, p2 = align_parallel_planes(base_plane, surface_plane)
        return abs(p1.d - p2.d) / p1.normal_vector().modulo()

    def width_vector(self) -> Point:
        return self.base_polygon.to_polygon().normal().normalize() * self.width()

    def translate(self, inc: Point) -> Tile:
        return Tile(self.base_polygon.translate(inc), self.surface_polygon.translate(inc))

    def average_point(self) -> Point:
        """The mean of the surface rim points."""
        return _mean(self.surface_polygon.rim)

    def side_polygons(self) -> list[Polygon]:
        """The side walls, followed by the base and the surface polygons."""
        sides = _ring_sides(self.base_polygon.rim, self.surface_polygon.rim)
        for base_hole, surface_hole in zip(self.base_polygon.holes, self.surface_polygon.holes):
            sides.extend(_ring_sides(base_hole, surface_hole))
        sides.append(Polygon.from_sides(self.base_polygon))
        sides.append(Polygon.from_sides(self.surface_polygon))
        return sides


@dataclass
class TriangulatedTile:
    triangles: list[Triangle] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"triangles": [t.to_dict() for t in self.triangles]}


@dataclass
class TriangulatedTiles:
    tiles: list[TriangulatedTile]
    wireframe: list[list[Point]]

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile]) -> TriangulatedTiles:
        meshes: list[TriangulatedTile] = []
        wireframe: list[list[Point]] = []
        for tile in tiles:
            mesh, lines = tile_to_triangulated(tile)
            meshes.append(mesh)
            wireframe.extend(lines)
        return cls(meshes, wireframe)

    def to_dict(self) -> dict:
        return {
            "tiles": [t.to_dict() for t in self.tiles],
            "wireframe": [[p.to_dict() for p in line] for line in self.wireframe],
        }


def tile_to_triangulated(tile: Tile) -> tuple[TriangulatedTile, list[list[Point]]]:
    """Triangles covering every face of the tile, and the faces' outlines."""
    triangles: list[Triangle] = []
    wireframe: list[list[Point]] = []
    for side in tile.side_polygons():
        if side.is_convex_without_holes():
            triangles.extend(triangulate_convex(side))
        else:
            triangles.extend(triangulate_polygon(side))
        wireframe.extend(side.wireframe())
    return TriangulatedTile(triangles), wireframe


@dataclass(init=False)
class UnitTile:
    """The size of one insulation board: length, height and thickness."""

    dimensions: Point

    def __init__(self, dimensions: Point) -> None:
        if not dimensions.same_octant(Point(1.0, 1.0, 1.0)) or dimensions.close_to_zero():
            raise ValueError(f"unit tile dimensions must be positive, got {dimensions}")
        self.dimensions = dimensions


def tile_unit_dimensions(tile: Tile, unit_tile: UnitTile) -> Optional[tuple[float, float]]:
    """The unit tile's length and height when its thickness matches the tile's width."""
    d = unit_tile.dimensions
    if similar(d.z, tile.width(), _UNIT_EPSILON):
        return d.x, d.y
    return None


def _grid(box: Rectangle, step_x: float, step_y: float) -> list[Rectangle]:
    if step_x <= 0 or step_y <= 0:
        raise ValueError("unit tile length and height must be positive")
    start, end = box.low_left, box.up_right
    cells = []
    x = start.x
    while not similar(x, end.x, _GRID_EPSILON) and x < end.x:
        y = start.y
        while not similar(y, end.y, _GRID_EPSILON) and y < end.y:
            cells.append(
                Rectangle(Point2D(x, y), Point2D(min(x + step_x, end.x), min(y + step_y, end.y)))
            )
            y += step_y
        x += step_x
    return cells


def split_into_tiles(tile: Tile, unit_tile: UnitTile) -> list[Tile]:
    """Cut the tile into pieces no larger than the unit tile.

    Raises ValueError when the unit tile's thickness differs from the tile's width.
    An empty list is returned when base and surface split into different counts.
    """
    dims = tile_unit_dimensions(tile, unit_tile)
    if dims is None:
        raise ValueError("unit tile thickness does not match the tile width")
    step_x, step_y = dims

    base = tile.base_polygon.to_polygon()
    surface = tile.surface_polygon.to_polygon()
    system = base.coordinate_system()
    base_2d = Polygon2D.from_polygon(base, system)
    surface_2d = Polygon2D.from_polygon(surface, system)

    cells = [c.to_polygon() for c in _grid(bounding_box_of([base_2d, surface_2d]), step_x, step_y)]
    base_parts = [parts for parts in (c.intersection(base_2d) for c in cells) if parts]
    surface_parts = [parts for parts in (c.intersection(surface_2d) for c in cells) if parts]

    base_offset = base.distance_from_origin()
    surface_offset = surface.distance_from_origin()
    base_3d = [parts[0].to_3d(system, base_offset) for parts in base_parts]
    surface_3d = [parts[0].to_3d(system, surface_offset) for parts in surface_parts]

    if len(base_3d) != len(surface_3d):
        return []
    return [
        Tile(PolygonPointsOnSides(b.rim, b.holes), PolygonPointsOnSides(s.rim, s.holes))
        for b, s in zip(base_3d, surface_3d)
    ]


@dataclass(frozen=True)
class CornerHandlingResult:
    base_line_near_line: Point
    base_line_away_from_line: Point
    other_near_line: Point
    other_away_from_line: Point


def handle_corner(
    angle: Angle, width_base_line: PositiveFloat, width_other: PositiveFloat
) -> CornerHandlingResult:
    """Offsets of two boards meeting at ``angle`` (measured from the base line)."""
    other = Angle(angle.value - math.pi / 2.0)
    return CornerHandlingResult(
        base_line_near_line=Point(0.0, 0.0, 0.0),
        base_line_away_from_line=Point(0.0, width_base_line.value, 0.0),
        other_near_line=Point(0.0, 0.0, 0.0),
        other_away_from_line=Point(
            width_other.value * math.cos(other.value),
            width_other.value * math.sin(other.value),
            0.0,
        ),
    )


@dataclass
class TileWithAdhesive:
    """An insulation board together with the adhesive layer beneath it."""

    styro_tile: Tile
    adhesive_tile: Tile

    def surface_rim(self) -> list[Point]:
        return self.styro_tile.surface_polygon.rim

    def base_rim(self) -> list[Point]:
        return self.adhesive_tile.base_polygon.rim

    def average_point(self) -> Point:
        return _mean(self.surface_rim())

    def translate(self, inc: Point) -> TileWithAdhesive:
        return TileWithAdhesive(self.styro_tile.translate(inc), self.adhesive_tile.translate(inc))


@dataclass
class TriangulatedTilesWithAdhesive:
    triangulated_tiles: TriangulatedTiles
    triangulated_adhesive: TriangulatedTiles

    @classmethod
    def from_tiles(cls, tiles: Iterable[TileWithAdhesive]) -> TriangulatedTilesWithAdhesive:
        tiles = list(tiles)
        return cls(
            TriangulatedTiles.from_tiles(t.styro_tile for t in tiles),
            TriangulatedTiles.from_tiles(t.adhesive_tile for t in tiles),
        )

    def to_dict(self) -> dict:
        return {
            "triangulized_tiles": self.triangulated_tiles.to_dict(),
            "triangulized_adhesive": self.triangulated_adhesive.to_dict(),
        }