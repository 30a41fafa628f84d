"""Sample buildings and the insulation requests built from them."""

from __future__ import annotations

from .building import (
    Level,
    PolygonWalls,
    TriangulatedWalls,
    levels_to_polygon_walls,
    polygon_walls_to_triangulated,
)
from .polygon import Polygon
from .request import HookSystem, Request
from .tiling import UnitTile
from .vector import Point

_HOUSE = 25.0


def building1_walls() -> PolygonWalls:
    """A cube-shaped house with a door, a window and a small porch."""
    h = _HOUSE
    walls = [
        Polygon.from_triplets(
            [
                (0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (10.0, 0.0, 10.0), (15.0, 0.0, 10.0),
                (15.0, 0.0, 0.0), (h, 0.0, 0.0), (h, 0.0, h), (0.0, 0.0, h),
            ],
            [[(5.0, 0.0, 15.0), (10.0, 0.0, 15.0), (10.0, 0.0, 19.0), (5.0, 0.0, 19.0)]],
        ),
        Polygon.from_triplets([(h, 0.0, 0.0), (h, h, 0.0), (h, h, h), (h, 0.0, h)]),
        Polygon.from_triplets([(0.0, 0.0, 0.0), (0.0, 0.0, h), (0.0, h, h), (0.0, h, 0.0)]),
        Polygon.from_triplets([(0.0, h, 0.0), (0.0, h, h), (h, h, h), (h, h, 0.0)]),
        Polygon.from_triplets([(0.0, 0.0, 0.0), (0.0, h, 0.0), (h, h, 0.0), (h, 0.0, 0.0)]),
        Polygon.from_triplets([(0.0, 0.0, h), (h, 0.0, h), (h, h, h), (0.0, h, h)]),
        Polygon.from_triplets(
            [(5.0, -2.0, 15.0), (10.0, -2.0, 15.0), (10.0, -2.0, 17.0), (5.0, -2.0, 17.0)]
        ),
        Polygon.from_triplets(
            [(5.0, -2.0, 15.0), (5.0, -2.0, 17.0), (5.0, 0.0, 17.0), (5.0, 0.0, 15.0)]
        ),
        Polygon.from_triplets(
            [(10.0, -2.0, 15.0), (10.0, 0.0, 15.0), (10.0, 0.0, 17.0), (10.0, -2.0, 17.0)]
        ),
        Polygon.from_triplets(
            [(5.0, -2.0, 15.0), (10.0, -2.0, 15.0), (10.0, 0.0, 15.0), (5.0, 0.0, 15.0)]
        ),
    ]
    return PolygonWalls(walls)


def building1_hooks() -> list[HookSystem]:
    return [
        HookSystem(
            Point(0.0, -1.0, 10.0),
            Point(1.0, -1.0, 10.0),
            Point(0.0, -1.0, 0.0),
            Point(1.0, -1.0, 0.0),
        )
    ]


def _building2_levels() -> list[Level]:
    right = (5.0, 0.0)
    up = (0.0, 5.0)
    down = (0.0, -5.0)
    left = (-5.0, 0.0)
    left_down = (-5.0, -5.0)
    ground_floor = Polygon.from_increments(
        (-10.0, -10.0),
        [
            right, up, right, down, right, up, right, down, right, up, up, up, up,
            left, down, left, up, left, down, left, up, left, left_down, down,
        ],
    )
    return [
        Level(7.0, ground_floor),
        Level(
            5.0,
            Polygon.from_triplets(
                [(0.0, 0.0, 0.0), (10.0, 0.0, 0.0), (10.0, 10.0, 0.0), (0.0, 10.0, 0.0)]
            ),
        ),
        Level(
            8.0,
            Polygon.from_triplets(
                [(5.0, 0.0, 0.0), (10.0, 5.0, 0.0), (5.0, 10.0, 0.0), (0.0, 5.0, 0.0)]
            ),
        ),
        Level(
            3.0,
            Polygon.from_triplets(
                [(-5.0, -5.0, 0.0), (15.0, -5.0, 0.0), (15.0, 15.0, 0.0), (-5.0, 15.0, 0.0)]
            ),
        ),
    ]


def building2_walls() -> PolygonWalls:
    """A four-storey building with an irregular ground floor."""
    return levels_to_polygon_walls(_building2_levels())


def building2_triangulated() -> TriangulatedWalls:
    return polygon_walls_to_triangulated(building2_walls())


def building2_hooks() -> list[HookSystem]:
    return [
        HookSystem(
            Point(-9.0, -11.0, 10.0),
            Point(-10.0, -11.0, 10.0),
            Point(-9.0, -11.0, 0.0),
            Point(-10.0, -11.0, 0.0),
        )
    ]


def _building3_levels() -> list[Level]:
    r = Point(1.0, 0.0, 0.0)
    u = Point(0.0, 1.0, 0.0)
    l = Point(-1.0, 0.0, 0.0)
    d = Point(0.0, -1.0, 0.0)
    num_levels = 10
    base = 2.0 * num_levels
    levels = []
    for e in map(float, range(num_levels)):
        size = base - 2.0 * e
        outline = Polygon.from_increments(
            (-(10.0 - e), -(10.0 - e)), [r * size, u * size, l * size, d * size]
        )
        levels.append(Level(1.0, outline))
    return levels


def building3_walls() -> PolygonWalls:
    """A stepped pyramid of ten one-unit storeys."""
    return levels_to_polygon_walls(_building3_levels())


def building3_hooks() -> list[HookSystem]:
    return []


_BUILDINGS = {
    1: (building1_walls, building1_hooks),
    2: (building2_walls, building2_hooks),
    3: (building3_walls, building3_hooks),
}


def create_request(
    request_id: int, length: float, height: float, width: float, velocity: float
) -> Request:
    """The insulation request for sample building ``request_id`` (1, 2 or 3)."""
    unit_tile = UnitTile(Point(length, height, width))
    try:
        walls, hooks = _BUILDINGS[request_id]
    except KeyError:
        raise ValueError(f"unsupported request id: {request_id!r}") from None
    return Request.from_building(walls(), width, unit_tile, hooks(), velocity)