"""Turning an insulation request into a plan: tiles, meshes and a placement timeline."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from .building import PolygonWalls, TriangulatedWalls, polygon_walls_to_triangulated
from .execution import PlanExecution, PlanExecutionCreator
from .lines import Line3D, LineSegment, intersection
from .plane import Plane
from .polygon import Corner, Polygon, PolygonPointsOnSides, corners_on_polygon
from .request import Request, WallWithIsolation
from .tiling import Tile, TileWithAdhesive, TriangulatedTilesWithAdhesive, split_into_tiles
from .vector import Point

logger = logging.getLogger(__name__)

_MAX_HOOK_DISTANCE = 50.0
_NUMBER_OF_SYSTEMS = 1
_ADHESIVE_FRACTION = 0.1


@dataclass
class Plan:
    """The building mesh, the tile meshes and the timeline for placing the tiles."""

    building: TriangulatedWalls
    tiles: TriangulatedTilesWithAdhesive
    plan_execution: PlanExecution

    def to_dict(self) -> dict:
        return {
            "building": self.building.to_dict(),
            "tiles": self.tiles.to_dict(),
            "planExecution": self.plan_execution.to_dict(),
        }


@dataclass(frozen=True)
class _Border:
    """A stretch of a wall side, bordering another wall or nothing."""

    a: Point
    b: Point
    wall_index: Optional[int]


@contextmanager
def _timed(label: str) -> Iterator[None]:
    start = time.perf_counter()
    yield
    logger.info("%s: %.5fs", label, time.perf_counter() - start)


def generate_plan(request: Request) -> Plan:
    """Tile every insulated wall of the request and schedule the tiles' placement."""
    building = PolygonWalls(wall.polygon for wall in request.data)

    with _timed("For getting tiles"):
        tiles = _tiling(request)

    with _timed("For plan execution"):
        execution = PlanExecutionCreator(request.velocity).create_plan(
            building, tiles, request.hooks, _MAX_HOOK_DISTANCE, _NUMBER_OF_SYSTEMS
        )

    with _timed("For triangulation"):
        triangulated = TriangulatedTilesWithAdhesive.from_tiles(tiles)

    return Plan(polygon_walls_to_triangulated(building), triangulated, execution)


def order_planes(p1: Plane, p2: Plane) -> int:
    """1 or -1 by a fixed ordering of the planes' unit normals.

    Raises ValueError for planes with the same orientation.
    """
    n1 = p1.normal_vector().normalize()
    n2 = p2.normal_vector().normalize()
    key1 = n1.x * 100.0 + n1.y * 10.0 + n1.z
    key2 = n2.x * 100.0 + n2.y * 10.0 + n2.z
    if key1 > key2:
        return 1
    if key1 < key2:
        return -1
    raise ValueError(f"cannot order parallel planes: {p1!r} {p2!r}")


def _tiling(request: Request) -> list[TileWithAdhesive]:
    wall_tiles = [
        _wall_tile(index, request, wall.isolation.width)
        for index, wall in enumerate(request.data)
        if wall.isolation is not None
    ]
    pieces = [piece for tile in wall_tiles for piece in split_into_tiles(tile, request.unit_tile)]
    return [_with_adhesive(piece) for piece in pieces]


def _with_adhesive(tile: Tile) -> TileWithAdhesive:
    """Split a tile into a thin adhesive layer at the base and the board above it."""
    middle = tile.split_surface(_ADHESIVE_FRACTION)
    adhesive = Tile(tile.base_polygon, middle)
    styro = Tile(middle, tile.surface_polygon)
    return TileWithAdhesive(styro, adhesive)


def _wall_tile(index: int, request: Request, isolation_width: float) -> Tile:
    walls = request.data
    wall = walls[index].polygon
    height = wall.normal().normalize() * isolation_width

    base_sides: list[list[Point]] = []
    surface_sides: list[list[Point]] = []
    for side in _borders_for_wall(index, request):
        base: list[Point] = []
        surface: list[Point] = []
        for border in side:
            if border.wall_index is None:
                base.extend((border.a, border.b))
                surface.extend((border.a + height, border.b + height))
            else:
                b1, b2, s1, s2 = _solve_corner(
                    LineSegment(border.a, border.b), walls[index], walls[border.wall_index]
                )
                base.extend((b1, b2))
                surface.extend((s1, s2))
        base_sides.append(base)
        surface_sides.append(surface)

    surface_rim = [p for side in _join_sides(surface_sides) for p in side]
    base_rim = [p for side in _join_sides(base_sides) for p in side]

    base_holes = [list(hole) for hole in wall.holes]
    surface_holes = [[p + height for p in hole] for hole in wall.holes]

    return Tile(
        PolygonPointsOnSides(base_rim, base_holes),
        PolygonPointsOnSides(surface_rim, surface_holes),
    )


def _intersection_point(l1: Line3D, l2: Line3D) -> Point:
    result = intersection(l1, l2)
    if not isinstance(result, Point):
        raise ValueError(f"expected the lines to meet in a single point, got {result!r}")
    return result


def _join_sides(sides: Sequence[Sequence[Point]]) -> list[list[Point]]:
    """Replace each side's end points by where its end lines meet the neighbours'."""
    count = len(sides)
    result = []
    for i, side in enumerate(sides):
        prev_side = sides[i - 1]
        next_side = sides[(i + 1) % count]
        prev_last = Line3D.from_points(prev_side[-2], prev_side[-1])
        first = Line3D.from_points(side[0], side[1])
        last = Line3D.from_points(side[-1], side[-2])
        next_first = Line3D.from_points(next_side[0], next_side[1])
        result.append(
            [
                _intersection_point(prev_last, first),
                *side[1:-1],
                _intersection_point(last, next_first),
            ]
        )
    return result


def _isolation_width(wall: WallWithIsolation) -> float:
    if wall.isolation is None:
        raise ValueError("the observed wall has no insulation")
    return wall.isolation.width


def _solve_corner(
    segment: LineSegment, observing: WallWithIsolation, bordering: WallWithIsolation
) -> tuple[Point, Point, Point, Point]:
    """Base and surface points where the observed wall's insulation meets a neighbour."""
    if bordering.isolation is None:
        return _next_to_bare_wall(segment, observing)

    bor_vec = bordering.polygon.normal().normalize() * bordering.isolation.width
    obs_vec = observing.polygon.normal().normalize() * _isolation_width(observing)
    seg_vec = segment.vector()

    obs_surface = Line3D(seg_vec.cross(obs_vec), segment.p1 + obs_vec)
    bor_surface = Line3D(seg_vec.cross(bor_vec), segment.p1 + bor_vec)
    corner = _intersection_point(obs_surface, bor_surface)

    if order_planes(observing.polygon.plane(), bordering.polygon.plane()) > 0:
        base_line = Line3D(seg_vec.cross(bor_vec), segment.p1)
        meet = _intersection_point(base_line, obs_surface)
        return segment.p1, segment.p2, meet, meet + seg_vec

    base_line = Line3D(seg_vec.cross(obs_vec), segment.p1)
    meet = _intersection_point(base_line, bor_surface)
    return meet, meet + seg_vec, corner, corner + seg_vec


def _next_to_bare_wall(
    segment: LineSegment, observing: WallWithIsolation
) -> tuple[Point, Point, Point, Point]:
    offset = observing.polygon.normal().normalize() * _isolation_width(observing)
    return segment.p1, segment.p2, segment.p1 + offset, segment.p2 + offset


def _borders_for_wall(index: int, request: Request) -> list[list[_Border]]:
    polygons = [wall.polygon for wall in request.data]
    corners = corners_on_polygon(index, polygons)
    return _corners_to_borders(corners, polygons[index])


def _corners_to_borders(corners: Sequence[Corner], wall: Polygon) -> list[list[_Border]]:
    rim = wall.rim
    count = len(rim)
    return [
        _side_borders([c for c in corners if c.side_index == i], start, rim[(i + 1) % count])
        for i, start in enumerate(rim)
    ]


def _side_borders(corners: Sequence[Corner], start: Point, end: Point) -> list[_Border]:
    if not corners:
        return [_Border(start, end, None)]
    if len(corners) % 2:
        raise ValueError("corners on a side must come in pairs")

    ordered = sorted(corners, key=lambda c: (c.point - start).modulo())
    borders = []
    prev = start
    for first, second in zip(ordered[0::2], ordered[1::2]):
        if not first.point.is_similar(prev):
            borders.append(_Border(prev, first.point, None))
        borders.append(_Border(first.point, second.point, first.bordering_index))
        prev = second.point
    return borders