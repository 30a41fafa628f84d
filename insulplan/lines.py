"""Infinite lines and line segments in 3D."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from .vector import POINT_EPSILON, Point, similar


@dataclass(frozen=True)
class Line3D:
    """A line through ``origin`` running along ``direction``."""

    direction: Point
    origin: Point

    def __post_init__(self) -> None:
        if similar(self.direction.modulo(), 0.0, POINT_EPSILON):
            raise ValueError("line direction must not be a zero vector")

    @classmethod
    def from_points(cls, p1: Point, p2: Point) -> Line3D:
        return cls(p1 - p2, p1)


def are_parallel(l1: Line3D, l2: Line3D) -> bool:
    return l1.direction.is_similar(l2.direction)


def are_same(l1: Line3D, l2: Line3D) -> bool:
    return l1.direction.is_similar(l2.direction) and l1.origin.is_similar(l2.origin)


def distance(l1: Line3D, l2: Line3D) -> float:
    """Shortest distance between two non-parallel lines."""
    n = l1.direction.cross(l2.direction)
    length = n.modulo()
    if length == 0:
        return math.nan
    return abs(n.dot(l1.origin - l2.origin)) / length


def intersection(l1: Line3D, l2: Line3D) -> Union[None, Point, Line3D]:
    """The common point of two lines, the line itself when they coincide, or None."""
    if are_same(l1, l2):
        return l1
    if are_parallel(l1, l2):
        return None
    if not similar(distance(l1, l2), 0.0, POINT_EPSILON):
        return None
    n = l1.direction.cross(l2.direction)
    t = l2.direction.cross(n).dot(l2.origin - l1.origin) / n.dot(n)
    return l1.direction * t + l1.origin


@dataclass(frozen=True)
class LineSegment:
    """A segment between two points."""

    p1: Point
    p2: Point

    def contains_point(self, pt: Point) -> bool:
        v1 = self.p2 - self.p1
        v2 = pt - self.p1
        return (
            v1.is_colinear_with(v2)
            and v1.same_octant(v2)
            and (v1.modulo() > v2.modulo() or similar(v1.modulo(), v2.modulo(), POINT_EPSILON))
        )

    def contains_point_strictly(self, pt: Point) -> bool:
        """Like :meth:`contains_point`, but the end points do not count."""
        if pt.is_similar(self.p1) or pt.is_similar(self.p2):
            return False
        return self.contains_point(pt)

    def distance_from_point(self, pt: Point) -> float:
        if self.contains_point(pt):
            return 0.0
        if self.in_cylinder(pt):
            b_vec = pt - self.p1
            c_vec = pt - self.p2
            angle = b_vec.angle_to(c_vec)
            return b_vec.modulo() * c_vec.modulo() * math.sin(angle.value) / self.length()
        return min((pt - self.p1).modulo(), (pt - self.p2).modulo())

    def in_cylinder(self, pt: Point) -> bool:
        """True when ``pt`` projects onto the segment rather than past its ends."""
        inverted = self.inverted()
        ang1 = self.vector().angle_to(pt - self.p1).value
        ang2 = inverted.vector().angle_to(pt - inverted.p1).value
        half_pi = math.pi / 2.0
        eps = POINT_EPSILON
        return all(
            (similar(a, half_pi, eps) or a < half_pi) and (similar(a, 0.0, eps) or a > 0.0)
            for a in (ang1, ang2)
        )

    def inverted(self) -> LineSegment:
        return LineSegment(self.p2, self.p1)

    def vector(self) -> Point:
        return self.p2 - self.p1

    def length(self) -> float:
        return self.vector().modulo()


def point_left_or_colinear(pt: Point, start: Point, end: Point, normal: Point) -> bool:
    """True when ``pt`` lies left of start->end (seen along ``normal``) or on its line."""
    cp = (end - start).cross(pt - start)
    return similar(cp.modulo(), 0.0, POINT_EPSILON) or cp.same_octant(normal)


def shared_segment(ls1: LineSegment, ls2: LineSegment) -> Optional[LineSegment]:
    """The overlap of two segments when it has non-zero length, else None."""
    if ls2.contains_point(ls1.p1) and ls2.contains_point(ls1.p2):
        return ls1
    if ls1.contains_point(ls2.p1) and ls1.contains_point(ls2.p2):
        return ls2
    for a in (ls1.p1, ls1.p2):
        if not ls2.contains_point(a):
            continue
        for b in (ls2.p1, ls2.p2):
            if ls1.contains_point(b) and not a.is_similar(b):
                return LineSegment(a, b)
    return None