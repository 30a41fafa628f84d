"""Polygons and rectangles in a plane, with clipping and lifting back to 3D."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from shapely.geometry import Polygon as _ShapelyPolygon

from .polygon import Polygon, flatten_points
from .vector import CoordinateSystem3D, Point, Point2D

_DIGITS = 10


def _pairs(values: Sequence[float]) -> list[Point2D]:
    return [Point2D(x, y) for x, y in zip(values[0::2], values[1::2])]


def _from_coords(coords: Iterable[tuple[float, float]]) -> list[Point2D]:
    return [Point2D(round(x, _DIGITS), round(y, _DIGITS)) for x, y in coords]


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle given by its lower-left and upper-right corners."""

    low_left: Point2D
    up_right: Point2D

    @classmethod
    def union(cls, rects: Iterable[Rectangle]) -> Rectangle:
        """The smallest rectangle holding all ``rects``."""
        rects = list(rects)
        if not rects:
            raise ValueError("at least one rectangle is needed")
        return cls(
            Point2D(min(r.low_left.x for r in rects), min(r.low_left.y for r in rects)),
            Point2D(max(r.up_right.x for r in rects), max(r.up_right.y for r in rects)),
        )

    def to_polygon(self) -> Polygon2D:
        return Polygon2D([self.low_left, self.low_right(), self.up_right, self.up_left()])

    def low_right(self) -> Point2D:
        return Point2D(self.up_right.x, self.low_left.y)

    def up_left(self) -> Point2D:
        return Point2D(self.low_left.x, self.up_right.y)

    def width(self) -> float:
        return abs(self.low_left.x - self.low_right().x)

    def height(self) -> float:
        return abs(self.low_left.y - self.up_right.y)


@dataclass
class Polygon2D:
    """A polygon with holes in a plane."""

    rim: list[Point2D]
    holes: list[list[Point2D]] = field(default_factory=list)

    @classmethod
    def from_polygon(cls, polygon: Polygon, system: CoordinateSystem3D) -> Polygon2D:
        """Flatten a 3D polygon using a system whose XY plane is parallel to it."""
        return cls(
            _pairs(flatten_points(polygon.rim, system)),
            [_pairs(flatten_points(hole, system)) for hole in polygon.holes],
        )

    def bounding_box(self) -> Rectangle:
        if not self.rim:
            raise ValueError("polygon has no points")
        xs = [p.x for p in self.rim]
        ys = [p.y for p in self.rim]
        return Rectangle(Point2D(min(xs), min(ys)), Point2D(max(xs), max(ys)))

    def _to_shapely(self) -> _ShapelyPolygon:
        return _ShapelyPolygon(
            [(p.x, p.y) for p in self.rim],
            [[(p.x, p.y) for p in hole] for hole in self.holes],
        )

    def intersection(self, other: Polygon2D) -> list[Polygon2D]:
        """The polygons making up the common area of both polygons."""
        result = self._to_shapely().intersection(other._to_shapely())
        if result.is_empty:
            return []
        parts = getattr(result, "geoms", [result])
        return [
            Polygon2D(
                _from_coords(part.exterior.coords),
                [_from_coords(ring.coords) for ring in part.interiors],
            )
            for part in parts
            if part.geom_type == "Polygon" and not part.is_empty
        ]

    def to_3d(self, system: CoordinateSystem3D, offset: Point) -> Polygon:
        """Lift the rim back into 3D; ``offset`` moves it off the origin plane."""
        inverse = system.inverse()
        rim = [Point(p.x, p.y, 0.0).in_system(inverse) + offset for p in self.rim]
        return Polygon(rim, [])


def bounding_box_of(polygons: Iterable[Polygon2D]) -> Rectangle:
    """The rectangle holding every given polygon."""
    return Rectangle.union(p.bounding_box() for p in polygons)