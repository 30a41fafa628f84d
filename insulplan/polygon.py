"""Planar polygons with holes in 3D space, and merging of neighbouring walls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

from .lines import LineSegment, point_left_or_colinear, shared_segment
from .plane import Plane
from .vector import CoordinateSystem3D, Point, points_colinear, similar

_CONSTANT_COORDINATE_EPSILON = 0.01


def _step_past_similar(ring: Sequence[Point], index: int, step: int) -> Point:
    """The nearest point from ``index`` in direction ``step`` that is not similar to it."""
    count = len(ring)
    current = ring[index]
    for k in range(1, count):
        candidate = ring[(index + step * k) % count]
        if not candidate.is_similar(current):
            return candidate
    raise ValueError("ring has no two distinct points")


def _corner_points(ring: Sequence[Point]) -> list[Point]:
    """Keep only the points where the ring changes direction."""
    result = []
    for index, current in enumerate(ring):
        following = _step_past_similar(ring, index, 1)
        preceding = _step_past_similar(ring, index, -1)
        if not points_colinear(preceding, current, following):
            result.append(current)
    return result


def _drop_duplicates(ring: Sequence[Point]) -> list[Point]:
    """Remove consecutive similar points, including a closing repeat of the first."""
    if not ring:
        raise ValueError("ring must contain at least one corner")
    result = [ring[0]]
    for point in ring[1:]:
        if not point.is_similar(result[-1]):
            result.append(point)
    if result[-1].is_similar(result[0]):
        result.pop()
    return result


def _normalize_ring(ring: Sequence[Point]) -> list[Point]:
    return _drop_duplicates(_corner_points(ring))


@dataclass
class PolygonPointsOnSides:
    """A polygon whose rings may hold extra points lying on the sides."""

    rim: list[Point]
    holes: list[list[Point]] = field(default_factory=list)

    def translate(self, inc: Point) -> PolygonPointsOnSides:
        return PolygonPointsOnSides(
            [p + inc for p in self.rim],
            [[p + inc for p in hole] for hole in self.holes],
        )

    def to_rings(self) -> tuple[list[Point], list[list[Point]]]:
        """Rim and holes reduced to their corner points."""
        return _normalize_ring(self.rim), [_normalize_ring(hole) for hole in self.holes]

    def to_polygon(self) -> Polygon:
        rim, holes = self.to_rings()
        return Polygon(rim, holes)


@dataclass(frozen=True)
class Corner:
    """A point where a polygon side borders another polygon."""

    point: Point
    bordering_index: int
    side_index: int


@dataclass(init=False)
class Polygon:
    """A planar polygon with holes; rings hold only their corner points."""

    rim: list[Point]
    holes: list[list[Point]]

    def __init__(
        self, rim: Iterable[Point], holes: Optional[Iterable[Iterable[Point]]] = None
    ) -> None:
        sides = PolygonPointsOnSides(list(rim), [list(h) for h in holes or []])
        self.rim, self.holes = sides.to_rings()

    @classmethod
    def from_sides(cls, sides: PolygonPointsOnSides) -> Polygon:
        return cls(sides.rim, sides.holes)

    @classmethod
    def from_triplets(
        cls,
        rim: Iterable[tuple[float, float, float]],
        holes: Iterable[Iterable[tuple[float, float, float]]] = (),
    ) -> Polygon:
        return cls(
            [Point(*t) for t in rim],
            [[Point(*t) for t in hole] for hole in holes],
        )

    @classmethod
    def from_increments(
        cls,
        start: tuple[float, float],
        increments: Iterable[Union[Point, tuple[float, float]]],
    ) -> Polygon:
        """A polygon in the XY plane walked from ``start`` by successive steps."""
        x, y = start
        rim = [(x, y, 0.0)]
        for inc in increments:
            dx, dy = (inc.x, inc.y) if isinstance(inc, Point) else inc
            x, y = x + dx, y + dy
            rim.append((x, y, 0.0))
        return cls.from_triplets(rim, [])

    def translate(self, inc: Point) -> Polygon:
        return Polygon(
            [p + inc for p in self.rim],
            [[p + inc for p in hole] for hole in self.holes],
        )

    def wireframe(self) -> list[list[Point]]:
        """Every ring as a closed line (first point repeated at the end)."""
        return [ring + ring[:1] for ring in [self.rim, *self.holes]]

    def rim_extrusion(self, inc: Point) -> list[Polygon]:
        return hole_extrusion(self.rim, inc)

    def holes_extrusion(self, inc: Point) -> list[Polygon]:
        return [side for hole in self.holes for side in hole_extrusion(hole, inc)]

    def distance_from_origin(self) -> Point:
        return self.plane().distance_from_origin()

    def normal(self) -> Point:
        return self.plane().normal_vector()

    def plane(self) -> Plane:
        plane = Plane.from_points(self.rim)
        if plane is None:
            raise ValueError("polygon rim does not span a plane")
        return plane

    def coordinate_system(self) -> CoordinateSystem3D:
        """A system at the origin whose XY plane is parallel to this polygon."""
        return self.plane().coordinate_system()

    def to_points_on_sides(self) -> PolygonPointsOnSides:
        return PolygonPointsOnSides(list(self.rim), [list(h) for h in self.holes])

    def is_convex_without_holes(self) -> bool:
        return not self.holes and self._is_convex()

    def _is_convex(self) -> bool:
        rim = self.rim
        count = len(rim)
        normal = self.normal()
        return all(
            point_left_or_colinear(rim[(i + 2) % count], rim[i], rim[(i + 1) % count], normal)
            for i in range(count)
        )

    def to_dict(self) -> dict:
        return {
            "rim": [p.to_dict() for p in self.rim],
            "holes": [[p.to_dict() for p in hole] for hole in self.holes],
        }


def hole_extrusion(hole: Sequence[Point], inc: Point) -> list[Polygon]:
    """The side walls swept by moving every edge of ``hole`` along ``inc``."""
    ring = list(hole)
    return [Polygon([a, b, b + inc, a + inc]) for a, b in zip(ring, ring[1:] + ring[:1])]


def flatten_points(points: Iterable[Point], system: CoordinateSystem3D) -> list[float]:
    """Express the points in ``system`` and drop the coordinate that stays constant.

    The result is a flat list of coordinate pairs.
    """
    transformed = [p.in_system(system) for p in points]
    if len(transformed) < 3:
        raise ValueError("at least three points are needed to flatten")
    a, b, c = transformed[:3]
    eps = _CONSTANT_COORDINATE_EPSILON
    if similar(a.x, b.x, eps) and similar(b.x, c.x, eps):
        pairs = ((p.y, p.z) for p in transformed)
    elif similar(a.y, b.y, eps) and similar(b.y, c.y, eps):
        pairs = ((p.x, p.z) for p in transformed)
    else:
        pairs = ((p.x, p.y) for p in transformed)
    return [value for pair in pairs for value in pair]


def _touches(poly1: Polygon, poly2: Polygon) -> bool:
    rim1, rim2 = poly1.rim, poly2.rim
    count1, count2 = len(rim1), len(rim2)
    for j, point in enumerate(rim1):
        prev1 = rim1[j - 1]
        next1 = rim1[(j + 1) % count1]
        for i, current in enumerate(rim2):
            prev = rim2[i - 1]
            following = rim2[(i + 1) % count2]
            if point.is_similar(current) and (
                next1.is_similar(prev)
                or LineSegment(prev, current).contains_point_strictly(next1)
                or prev1.is_similar(following)
                or LineSegment(following, current).contains_point_strictly(prev1)
            ):
                return True
            if LineSegment(prev, current).contains_point_strictly(point):
                return True
    return False


def _are_neighbours(poly1: Polygon, poly2: Polygon) -> bool:
    normal1, normal2 = poly1.normal(), poly2.normal()
    if not normal1.is_colinear_with(normal2) or not normal1.same_octant(normal2):
        return False
    return _touches(poly1, poly2) or _touches(poly2, poly1)


def _connected_groups(polygons: Sequence[Polygon]) -> list[list[int]]:
    """Groups of indices of neighbouring polygons, each ordered so that every
    member after the first borders an earlier one."""
    count = len(polygons)
    adjacency: list[list[int]] = [[] for _ in range(count)]
    for i in range(count):
        for j in range(i + 1, count):
            if _are_neighbours(polygons[i], polygons[j]):
                adjacency[i].append(j)
                adjacency[j].append(i)

    visited = [False] * count
    groups = []
    for leader in range(count):
        if visited[leader]:
            continue
        order = []
        stack = [leader]
        while stack:
            node = stack.pop()
            if visited[node]:
                continue
            visited[node] = True
            order.append(node)
            stack.extend(n for n in sorted(adjacency[node], reverse=True) if not visited[n])
        groups.append(order)
    groups.reverse()
    return groups


def _point_near_rim(point: Point, poly: Polygon) -> bool:
    rim = poly.rim
    return any(
        point.is_similar(current)
        or LineSegment(current, rim[(i + 1) % len(rim)]).contains_point_strictly(point)
        for i, current in enumerate(rim)
    )


def _segment_holding_point(point: Point, poly: Polygon) -> Optional[tuple[int, int]]:
    rim = poly.rim
    count = len(rim)
    for i, current in enumerate(rim):
        following = rim[(i + 1) % count]
        if point.is_similar(following) or LineSegment(current, following).contains_point_strictly(
            point
        ):
            return i, (i + 1) % count
    return None


def _nearest_point_on_segment(start: Point, end: Point, poly: Polygon) -> Optional[int]:
    segment = LineSegment(start, end)
    candidates = [
        i
        for i, p in enumerate(poly.rim)
        if p.is_similar(end) or segment.contains_point_strictly(p)
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda i: (poly.rim[i] - start).modulo())


def _pick_next(
    current: tuple[bool, int], poly1: Polygon, poly2: Polygon, result: list[Point]
) -> tuple[bool, int]:
    in_first, index = current
    own, other = (poly1, poly2) if in_first else (poly2, poly1)
    own_count, other_count = len(own.rim), len(other.rim)
    point = own.rim[index]
    following = own.rim[(index + 1) % own_count]

    def already_taken(candidate: Point) -> bool:
        return any(candidate.is_similar(p) for p in result)

    segment = _segment_holding_point(point, other)
    if segment is not None:
        if already_taken(other.rim[segment[0]]):
            return in_first, (index + 1) % own_count
        return not in_first, segment[1]

    nearest = _nearest_point_on_segment(point, following, other)
    if nearest is None:
        return in_first, (index + 1) % own_count
    if already_taken(other.rim[nearest]):
        return not in_first, (nearest + 1) % other_count
    return not in_first, nearest


def _merge_pair(poly1: Polygon, poly2: Polygon) -> Polygon:
    start_index = next(
        (i for i, p in enumerate(poly1.rim) if not _point_near_rim(p, poly2)), None
    )
    if start_index is None:
        raise ValueError("polygons cannot be merged: no rim point lies outside the other")
    start_point = poly1.rim[start_index]
    limit = 2 * (len(poly1.rim) + len(poly2.rim)) + 2

    result: list[Point] = []
    current = (True, start_index)
    while True:
        result.append((poly1 if current[0] else poly2).rim[current[1]])
        current = _pick_next(current, poly1, poly2, result)
        if (poly1 if current[0] else poly2).rim[current[1]].is_similar(start_point):
            break
        if len(result) > limit:
            raise ValueError("polygons cannot be merged: outline does not close")

    return Polygon(result, [*poly1.holes, *poly2.holes])


def merge_polygons(polygons: Iterable[Polygon]) -> list[Polygon]:
    """Merge every group of coplanar, equally oriented, touching polygons into one."""
    polygons = list(polygons)
    if not polygons:
        return []
    merged = []
    for group in _connected_groups(polygons):
        result = polygons[group[0]]
        for index in group[1:]:
            result = _merge_pair(result, polygons[index])
        merged.append(result)
    return merged


def _corners_between(poly: Polygon, other: Polygon, other_index: int) -> list[Corner]:
    corners = []
    rim, other_rim = poly.rim, other.rim
    for i, current in enumerate(rim):
        following = rim[(i + 1) % len(rim)]
        for j, other_current in enumerate(other_rim):
            other_following = other_rim[(j + 1) % len(other_rim)]
            segment = shared_segment(
                LineSegment(current, following), LineSegment(other_current, other_following)
            )
            if segment is None:
                continue
            if not (following - current).same_octant(other_following - other_current):
                corners.append(Corner(segment.p1, other_index, i))
                corners.append(Corner(segment.p2, other_index, i))
    return corners


def corners_on_polygon(index: int, polygons: Sequence[Polygon]) -> list[Corner]:
    """All points on the sides of ``polygons[index]`` shared with the other polygons."""
    own = polygons[index]
    return [
        corner
        for other_index, other in enumerate(polygons)
        if other_index != index
        for corner in _corners_between(own, other, other_index)
    ]