"""Planes given by the equation a*x + b*y + c*z + d = 0."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional

from .lines import Line3D
from .vector import CoordinateSystem3D, Point, points_colinear


def _three_noncolinear(points: list[Point]) -> Optional[tuple[Point, Point, Point]]:
    if len(points) < 3:
        return None
    first, second = points[0], points[1]
    for candidate in points[2:]:
        if not points_colinear(first, second, candidate):
            return first, second, candidate
    return None


@dataclass(frozen=True)
class Plane:
    """A plane a*x + b*y + c*z + d = 0."""

    a: float
    b: float
    c: float
    d: float

    XY: ClassVar[Plane]
    XZ: ClassVar[Plane]
    YZ: ClassVar[Plane]

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Optional[Plane]:
        """The plane through the points, or None if they do not span one."""
        trio = _three_noncolinear(list(points))
        if trio is None:
            return None
        t1, t2, t3 = trio
        normal = (t2 - t1).cross(t3 - t2)
        return cls(normal.x, normal.y, normal.z, -normal.dot(t1))

    @classmethod
    def from_points_through_origin(cls, points: Iterable[Point]) -> Optional[Plane]:
        """A plane oriented like the points but passing through the origin."""
        trio = _three_noncolinear(list(points))
        if trio is None:
            return None
        t1, t2, t3 = trio
        normal = (t2 - t1).cross(t3 - t2)
        return cls(normal.x, normal.y, normal.z, 0.0)

    def above_origin(self) -> bool:
        return self.d <= 0.0

    def normal_vector(self) -> Point:
        return Point(self.a, self.b, self.c)

    def coordinate_system(self) -> CoordinateSystem3D:
        """An orthonormal system at the origin whose z axis is the plane normal."""
        z = self.normal_vector().normalize()
        if self.parallel_to(Plane.XY):
            skew = Point(z.x + 10.56782, z.y + 20.345454, z.z - 30.4563)
            x = z.cross(z + skew).normalize()
        else:
            x = self.intersection_direction_line(Plane.XY).direction.normalize()
        y = z.cross(x).normalize()
        return CoordinateSystem3D(Point.ZERO, x, y, z)

    def distance_from_origin(self) -> Point:
        """The vector from the origin to the nearest point of the plane."""
        normal = self.normal_vector()
        vector = normal.normalize() * (abs(self.d) / normal.modulo())
        return vector if self.above_origin() else vector * -1.0

    def parallel_to(self, other: Plane) -> bool:
        return self.normal_vector().is_colinear_with(other.normal_vector())

    def intersection_direction_line(self, other: Plane) -> Line3D:
        """A line through the origin parallel to the planes' intersection."""
        direction = self.normal_vector().cross(other.normal_vector())
        return Line3D(direction, Point.ZERO)


Plane.XY = Plane(0.0, 0.0, 1.0, 0.0)
Plane.XZ = Plane(0.0, 1.0, 0.0, 0.0)
Plane.YZ = Plane(1.0, 0.0, 1.0, 0.0)


def align_parallel_planes(p1: Plane, p2: Plane) -> tuple[Plane, Plane]:
    """Rescale ``p1`` so that its normal equals that of the parallel ``p2``."""
    coef = p1.normal_vector().ratio_to_parallel(p2.normal_vector())
    return Plane(p1.a / coef, p1.b / coef, p1.c / coef, p1.d / coef), p2