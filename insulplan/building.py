"""Building representations: levels, polygon walls and triangulated walls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .plane import Plane
from .polygon import Polygon, merge_polygons
from .triangulation import triangulate_polygon
from .vector import Point, Triangle


@dataclass
class Level:
    """One storey: its floor outline and its height."""

    height: float
    rim: Polygon


@dataclass
class TriangulatedWall:
    triangles: list[Triangle] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"triangles": [t.to_dict() for t in self.triangles]}


@dataclass
class TriangulatedWalls:
    walls: list[TriangulatedWall]
    wireframe: list[list[Point]]

    def to_dict(self) -> dict:
        return {
            "walls": [w.to_dict() for w in self.walls],
            "wireframe": [[p.to_dict() for p in line] for line in self.wireframe],
        }


class PolygonWalls:
    """The walls of a building; touching coplanar walls are merged."""

    def __init__(self, walls: Iterable[Polygon]) -> None:
        self.walls: list[Polygon] = merge_polygons(walls)

    def __repr__(self) -> str:
        return f"PolygonWalls({self.walls!r})"

    def triangulation(self) -> list[TriangulatedWall]:
        return [TriangulatedWall(triangulate_polygon(wall)) for wall in self.walls]

    def wireframe(self) -> list[list[Point]]:
        return [line for wall in self.walls for line in wall.wireframe()]

    def horizontal_walls(self) -> list[Polygon]:
        return [wall for wall in self.walls if wall.plane().parallel_to(Plane.XY)]


def levels_to_polygon_walls(levels: Iterable[Level]) -> PolygonWalls:
    """Stack the levels: vertical walls along each outline plus a roof on each."""
    walls: list[Polygon] = []
    base = 0.0
    for level in levels:
        top = base + level.height
        rim = level.rim.rim
        for a, b in zip(rim, rim[1:] + rim[:1]):
            walls.append(
                Polygon(
                    [
                        Point(a.x, a.y, base),
                        Point(b.x, b.y, base),
                        Point(b.x, b.y, top),
                        Point(a.x, a.y, top),
                    ]
                )
            )
        walls.append(Polygon([Point(p.x, p.y, top) for p in rim]))
        base = top
    return PolygonWalls(walls)


def polygon_walls_to_triangulated(walls: PolygonWalls) -> TriangulatedWalls:
    return TriangulatedWalls(walls.triangulation(), walls.wireframe())