"""Points, vectors and small geometric value types with tolerant comparison."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Sequence

POINT_EPSILON = 1e-4


def similar(a: float, b: float, epsilon: float) -> bool:
    """Return True when ``a`` and ``b`` differ by less than ``epsilon``."""
    return abs(a - b) < epsilon


def _div(a: float, b: float) -> float:
    """Divide with IEEE semantics instead of raising on a zero divisor."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _sign(value: float) -> float:
    if math.isnan(value):
        return math.nan
    if value == 0:
        return 1.0
    return math.copysign(1.0, value)


class Angle:
    """An angle in radians, reduced modulo a full turn (keeping its sign)."""

    __slots__ = ("value",)

    def __init__(self, value: float) -> None:
        self.value = math.fmod(value, 2.0 * math.pi)

    def __repr__(self) -> str:
        return f"Angle({self.value!r})"


class PositiveFloat:
    """A float that is known to be non-negative."""

    __slots__ = ("value",)

    def __init__(self, value: float) -> None:
        if not value >= 0.0:
            raise ValueError(f"value must be non-negative, got {value!r}")
        self.value = value

    def __repr__(self) -> str:
        return f"PositiveFloat({self.value!r})"


@dataclass(frozen=True)
class Point:
    """A point or vector in 3D space."""

    x: float
    y: float
    z: float

    ZERO: ClassVar[Point]

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Point:
        return Point(_div(self.x, scalar), _div(self.y, scalar), _div(self.z, scalar))

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y, -self.z)

    def cross(self, other: Point) -> Point:
        return Point(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def modulo(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Point:
        return self / self.modulo()

    def in_system(self, system: CoordinateSystem3D) -> Point:
        """Coordinates of this point along the axes of ``system``."""
        if not system.origin_at_zero():
            raise ValueError(f"system must have its origin at zero, got {system.o}")
        return Point(system.x.dot(self), system.y.dot(self), system.z.dot(self))

    def is_similar(self, other: Point) -> bool:
        return (
            similar(self.x, other.x, POINT_EPSILON)
            and similar(self.y, other.y, POINT_EPSILON)
            and similar(self.z, other.z, POINT_EPSILON)
        )

    def is_colinear_with(self, other: Point) -> bool:
        """True when both vectors lie on one line through the origin."""
        eps = POINT_EPSILON
        if similar(self.modulo(), 0.0, eps) or similar(other.modulo(), 0.0, eps):
            return True

        if not similar(self.x, 0.0, eps):
            ratio = other.x / self.x
        elif not similar(self.y, 0.0, eps):
            ratio = other.y / self.y
        else:
            ratio = _div(other.z, self.z)

        for mine, theirs in ((self.x, other.x), (self.y, other.y), (self.z, other.z)):
            if similar(mine, 0.0, eps) and not similar(theirs, 0.0, eps):
                return False

        fine = 1e-7
        return all(
            similar(mine, 0.0, fine) or similar(theirs / mine, ratio, fine)
            for mine, theirs in ((self.x, other.x), (self.y, other.y), (self.z, other.z))
        )

    def same_octant(self, other: Point) -> bool:
        if similar(self.modulo(), 0.0, POINT_EPSILON) or similar(
            other.modulo(), 0.0, POINT_EPSILON
        ):
            return True
        return (
            _sign(self.x) == _sign(other.x)
            and _sign(self.y) == _sign(other.y)
            and _sign(self.z) == _sign(other.z)
        )

    def ratio_to_parallel(self, other: Point) -> float:
        """The factor by which ``other`` must be scaled to give this vector."""
        if not self.is_colinear_with(other):
            raise ValueError(f"vectors are not parallel: {self} {other}")
        eps = 1e-5
        if not similar(other.x, 0.0, eps):
            return self.x / other.x
        if not similar(other.y, 0.0, eps):
            return self.y / other.y
        return _div(self.z, other.z)

    def angle_to(self, other: Point) -> Angle:
        cosine = _div(self.dot(other), self.modulo() * other.modulo())
        if math.isnan(cosine) or abs(cosine) > 1.0:
            return Angle(math.nan)
        return Angle(math.acos(cosine))

    def close_to_zero(self) -> bool:
        return self.is_similar(Point.ZERO)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_dict(cls, data: dict) -> Point:
        return cls(float(data["x"]), float(data["y"]), float(data["z"]))


Point.ZERO = Point(0.0, 0.0, 0.0)


def points_colinear(t1: Point, t2: Point, t3: Point) -> bool:
    """True when the three points lie on one line."""
    return (t2 - t1).is_colinear_with(t3 - t1)


def inverse_matrix(rows: Sequence[Point]) -> list[Point]:
    """Invert a 3x3 matrix given as three row vectors; returns the rows."""
    (a, b, c), (d, e, f), (g, h, i) = ((r.x, r.y, r.z) for r in rows)
    det = a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)
    if det == 0:
        raise ValueError("matrix is not invertible")
    return [
        Point((e * i - f * h) / det, (c * h - b * i) / det, (b * f - c * e) / det),
        Point((f * g - d * i) / det, (a * i - c * g) / det, (c * d - a * f) / det),
        Point((d * h - e * g) / det, (b * g - a * h) / det, (a * e - b * d) / det),
    ]


@dataclass(frozen=True)
class Point2D:
    """A point in a plane."""

    x: float
    y: float


@dataclass(frozen=True)
class Triangle:
    """Three corner points of a triangle."""

    t1: Point
    t2: Point
    t3: Point

    def to_dict(self) -> dict:
        return {"t1": self.t1.to_dict(), "t2": self.t2.to_dict(), "t3": self.t3.to_dict()}


@dataclass(frozen=True)
class CoordinateSystem3D:
    """An origin with three axis vectors."""

    o: Point
    x: Point
    y: Point
    z: Point

    def translate(self, vector: Point) -> CoordinateSystem3D:
        return CoordinateSystem3D(self.o + vector, self.x, self.y, self.z)

    def origin_at_zero(self) -> bool:
        return self.o.is_similar(Point.ZERO)

    def inverse(self) -> CoordinateSystem3D:
        """The system that maps coordinates in this system back to the base."""
        if not self.origin_at_zero():
            raise ValueError(f"origin should be at zero, was {self.o}")
        x, y, z = inverse_matrix([self.x, self.y, self.z])
        return CoordinateSystem3D(Point.ZERO, x, y, z)