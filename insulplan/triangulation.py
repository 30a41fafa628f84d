"""Ear-clipping triangulation of polygons with holes."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from .plane import Plane
from .polygon import Polygon, flatten_points
from .vector import Triangle


class _Node:
    __slots__ = ("i", "x", "y", "prev", "next", "steiner")

    def __init__(self, i: int, x: float, y: float) -> None:
        self.i = i
        self.x = x
        self.y = y
        self.prev: _Node = self
        self.next: _Node = self
        self.steiner = False


def _area(p: _Node, q: _Node, r: _Node) -> float:
    return (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)


def _equals(a: _Node, b: _Node) -> bool:
    return a.x == b.x and a.y == b.y


def _sign(v: float) -> int:
    return (v > 0) - (v < 0)


def _on_segment(p: _Node, q: _Node, r: _Node) -> bool:
    return min(p.x, r.x) <= q.x <= max(p.x, r.x) and min(p.y, r.y) <= q.y <= max(p.y, r.y)


def _intersects(p1: _Node, q1: _Node, p2: _Node, q2: _Node) -> bool:
    o1 = _sign(_area(p1, q1, p2))
    o2 = _sign(_area(p1, q1, q2))
    o3 = _sign(_area(p2, q2, p1))
    o4 = _sign(_area(p2, q2, q1))
    if o1 != o2 and o3 != o4:
        return True
    return (
        (o1 == 0 and _on_segment(p1, p2, q1))
        or (o2 == 0 and _on_segment(p1, q2, q1))
        or (o3 == 0 and _on_segment(p2, p1, q2))
        or (o4 == 0 and _on_segment(p2, q1, q2))
    )


def _point_in_triangle(ax, ay, bx, by, cx, cy, px, py) -> bool:
    return (
        (cx - px) * (ay - py) >= (ax - px) * (cy - py)
        and (ax - px) * (by - py) >= (bx - px) * (ay - py)
        and (bx - px) * (cy - py) >= (cx - px) * (by - py)
    )


def _ring(start: _Node):
    p = start
    while True:
        yield p
        p = p.next
        if p is start:
            return


def _insert(i: int, x: float, y: float, last: Optional[_Node]) -> _Node:
    p = _Node(i, x, y)
    if last is not None:
        p.next = last.next
        p.prev = last
        last.next.prev = p
        last.next = p
    return p


def _remove(p: _Node) -> None:
    p.next.prev = p.prev
    p.prev.next = p.next


def _signed_area(data: Sequence[float], start: int, end: int, dim: int) -> float:
    total = 0.0
    j = end - dim
    for i in range(start, end, dim):
        total += (data[j] - data[i]) * (data[i + 1] + data[j + 1])
        j = i
    return total


def _linked_list(data, start, end, dim, clockwise) -> Optional[_Node]:
    last = None
    indices = range(start, end, dim)
    if clockwise != (_signed_area(data, start, end, dim) > 0):
        indices = reversed(indices)
    for i in indices:
        last = _insert(i // dim, data[i], data[i + 1], last)
    if last is not None and _equals(last, last.next):
        _remove(last)
        last = last.next
    return last


def _filter_points(start: Optional[_Node], end: Optional[_Node] = None) -> Optional[_Node]:
    if start is None:
        return start
    end = end or start
    p = start
    while True:
        again = False
        if not p.steiner and (_equals(p, p.next) or _area(p.prev, p, p.next) == 0):
            _remove(p)
            p = end = p.prev
            if p is p.next:
                break
            again = True
        else:
            p = p.next
        if not again and p is end:
            break
    return end


def _is_ear(ear: _Node) -> bool:
    a, b, c = ear.prev, ear, ear.next
    if _area(a, b, c) >= 0:
        return False
    p = c.next
    while p is not a:
        if _point_in_triangle(a.x, a.y, b.x, b.y, c.x, c.y, p.x, p.y) and _area(
            p.prev, p, p.next
        ) >= 0:
            return False
        p = p.next
    return True


def _locally_inside(a: _Node, b: _Node) -> bool:
    if _area(a.prev, a, a.next) < 0:
        return _area(a, b, a.next) >= 0 and _area(a, a.prev, b) >= 0
    return _area(a, b, a.prev) < 0 or _area(a, a.next, b) < 0


def _middle_inside(a: _Node, b: _Node) -> bool:
    inside = False
    px, py = (a.x + b.x) / 2, (a.y + b.y) / 2
    for p in _ring(a):
        n = p.next
        if (p.y > py) != (n.y > py) and n.y != p.y and px < (n.x - p.x) * (py - p.y) / (
            n.y - p.y
        ) + p.x:
            inside = not inside
    return inside


def _intersects_polygon(a: _Node, b: _Node) -> bool:
    return any(
        p.i != a.i
        and p.next.i != a.i
        and p.i != b.i
        and p.next.i != b.i
        and _intersects(p, p.next, a, b)
        for p in _ring(a)
    )


def _is_valid_diagonal(a: _Node, b: _Node) -> bool:
    if a.next.i == b.i or a.prev.i == b.i or _intersects_polygon(a, b):
        return False
    if (
        _locally_inside(a, b)
        and _locally_inside(b, a)
        and _middle_inside(a, b)
        and (_area(a.prev, a, b.prev) != 0 or _area(a, b.prev, b) != 0)
    ):
        return True
    return (
        _equals(a, b)
        and _area(a.prev, a, a.next) > 0
        and _area(b.prev, b, b.next) > 0
    )


def _split_polygon(a: _Node, b: _Node) -> _Node:
    a2 = _Node(a.i, a.x, a.y)
    b2 = _Node(b.i, b.x, b.y)
    an, bp = a.next, b.prev
    a.next, b.prev = b, a
    a2.next, an.prev = an, a2
    b2.next, a2.prev = a2, b2
    bp.next, b2.prev = b2, bp
    return b2


def _cure_local_intersections(start: _Node, triangles: list[int]) -> Optional[_Node]:
    p = start
    while True:
        a, b = p.prev, p.next.next
        if (
            not _equals(a, b)
            and _intersects(a, p, p.next, b)
            and _locally_inside(a, b)
            and _locally_inside(b, a)
        ):
            triangles.extend((a.i, p.i, b.i))
            _remove(p)
            _remove(p.next)
            p = start = b
        p = p.next
        if p is start:
            break
    return _filter_points(p)


def _split_earcut(start: _Node, triangles: list[int]) -> None:
    a = start
    while True:
        b = a.next.next
        while b is not a.prev:
            if a.i != b.i and _is_valid_diagonal(a, b):
                c = _split_polygon(a, b)
                a = _filter_points(a, a.next)
                c = _filter_points(c, c.next)
                _earcut_linked(a, triangles, 0)
                _earcut_linked(c, triangles, 0)
                return
            b = b.next
        a = a.next
        if a is start:
            return


def _earcut_linked(ear: Optional[_Node], triangles: list[int], stage: int) -> None:
    if ear is None:
        return
    stop = ear
    while ear.prev is not ear.next:
        prev, nxt = ear.prev, ear.next
        if _is_ear(ear):
            triangles.extend((prev.i, ear.i, nxt.i))
            _remove(ear)
            ear = stop = nxt.next
            continue
        ear = nxt
        if ear is stop:
            if stage == 0:
                _earcut_linked(_filter_points(ear), triangles, 1)
            elif stage == 1:
                cured = _cure_local_intersections(_filter_points(ear), triangles)
                _earcut_linked(cured, triangles, 2)
            else:
                _split_earcut(ear, triangles)
            break


def _leftmost(start: _Node) -> _Node:
    return min(_ring(start), key=lambda p: (p.x, p.y))


def _sector_contains_sector(m: _Node, p: _Node) -> bool:
    return _area(m.prev, m, p.prev) < 0 and _area(p.next, m, m.next) < 0


def _find_hole_bridge(hole: _Node, outer: _Node) -> Optional[_Node]:
    hx, hy = hole.x, hole.y
    qx = -math.inf
    m = None
    for p in _ring(outer):
        n = p.next
        if n.y <= hy <= p.y and n.y != p.y:
            x = p.x + (hy - p.y) * (n.x - p.x) / (n.y - p.y)
            if hx >= x > qx:
                qx = x
                m = p if p.x < n.x else n
                if x == hx:
                    return m
    if m is None:
        return None
    mx, my = m.x, m.y
    tan_min = math.inf
    for p in _ring(m):
        if hx >= p.x >= mx and hx != p.x and _point_in_triangle(
            hx if hy < my else qx, hy, mx, my, qx if hy < my else hx, hy, p.x, p.y
        ):
            tan = abs(hy - p.y) / (hx - p.x)
            if _locally_inside(p, hole) and (
                tan < tan_min
                or (
                    tan == tan_min
                    and (p.x > m.x or (p.x == m.x and _sector_contains_sector(m, p)))
                )
            ):
                m = p
                tan_min = tan
    return m


def _eliminate_holes(data, hole_indices, outer: _Node, dim: int) -> _Node:
    leftmosts = []
    bounds = [h * dim for h in hole_indices] + [len(data)]
    for start, end in zip(bounds, bounds[1:]):
        ring = _linked_list(data, start, end, dim, False)
        if ring is None:
            continue
        if ring is ring.next:
            ring.steiner = True
        leftmosts.append(_leftmost(ring))
    leftmosts.sort(key=lambda n: (n.x, n.y))
    for hole in leftmosts:
        bridge = _find_hole_bridge(hole, outer)
        if bridge is None:
            continue
        reverse = _split_polygon(bridge, hole)
        _filter_points(reverse, reverse.next)
        outer = _filter_points(bridge, bridge.next)
    return outer


def earcut(data: Sequence[float], hole_indices: Sequence[int] = (), dim: int = 2) -> list[int]:
    """Triangulate flat vertex coordinates; returns vertex indices, three per triangle.

    ``hole_indices`` are the vertex indices where each hole starts.
    """
    data = list(data)
    hole_indices = list(hole_indices)
    outer_len = hole_indices[0] * dim if hole_indices else len(data)
    outer = _linked_list(data, 0, outer_len, dim, True)
    triangles: list[int] = []
    if outer is None or outer.next is outer.prev:
        return triangles
    if hole_indices:
        outer = _eliminate_holes(data, hole_indices, outer, dim)
    _earcut_linked(outer, triangles, 0)
    return triangles


def triangulate_polygon(polygon: Polygon) -> list[Triangle]:
    """Triangles covering a planar 3D polygon, holes excluded."""
    points = [*polygon.rim, *(p for hole in polygon.holes for p in hole)]
    hole_starts = []
    offset = len(polygon.rim)
    for hole in polygon.holes:
        hole_starts.append(offset)
        offset += len(hole)
    plane = Plane.from_points(points)
    if plane is None:
        raise ValueError("polygon does not span a plane")
    flat = flatten_points(points, plane.coordinate_system())
    indices = earcut(flat, hole_starts, 2)
    return [
        Triangle(points[a], points[b], points[c])
        for a, b, c in zip(indices[0::3], indices[1::3], indices[2::3])
    ]


def triangulate_convex(polygon: Polygon) -> list[Triangle]:
    """Fan triangulation of a convex rim from its first point."""
    rim = polygon.rim
    return [Triangle(rim[0], a, b) for a, b in zip(rim[1:-1], rim[2:])]