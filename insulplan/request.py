"""A request to insulate a building: walls, board size, hooks and speed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .building import PolygonWalls
from .polygon import Polygon
from .tiling import UnitTile
from .vector import Point

_UP = Point(0.0, 0.0, 1.0)
_DOWN = Point(0.0, 0.0, -1.0)


@dataclass(frozen=True)
class HookSystem:
    """Positions of the robot and carrier hooks and their points on the ground."""

    robot_hook: Point
    carrier_hook: Point
    robot_hook_ground: Point
    carrier_hook_ground: Point

    def to_dict(self) -> dict:
        return {
            "robot_hook": self.robot_hook.to_dict(),
            "carrier_hook": self.carrier_hook.to_dict(),
            "robot_hook_ground": self.robot_hook_ground.to_dict(),
            "carrier_hook_ground": self.carrier_hook_ground.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> HookSystem:
        return cls(
            Point.from_dict(data["robot_hook"]),
            Point.from_dict(data["carrier_hook"]),
            Point.from_dict(data["robot_hook_ground"]),
            Point.from_dict(data["carrier_hook_ground"]),
        )


@dataclass(frozen=True)
class IsolationDetails:
    width: float


@dataclass
class WallWithIsolation:
    """A wall and, if it is to be insulated, how thick the insulation is."""

    polygon: Polygon
    isolation: Optional[IsolationDetails] = None


def _polygon_from_dict(data: dict) -> Polygon:
    return Polygon(
        [Point.from_dict(p) for p in data["rim"]],
        [[Point.from_dict(p) for p in hole] for hole in data.get("holes", [])],
    )


@dataclass
class Request:
    data: list[WallWithIsolation]
    unit_tile: UnitTile
    hooks: list[HookSystem]
    velocity: float

    @classmethod
    def from_building(
        cls,
        building: PolygonWalls,
        width: float,
        unit_tile: UnitTile,
        hooks: Iterable[HookSystem],
        velocity: float,
    ) -> Request:
        """Insulate every wall of ``building`` except horizontal ones."""
        data = []
        for wall in building.walls:
            normal = wall.normal().normalize()
            horizontal = normal.is_similar(_UP) or normal.is_similar(_DOWN)
            data.append(WallWithIsolation(wall, None if horizontal else IsolationDetails(width)))
        return cls(data, unit_tile, list(hooks), velocity)

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        walls = []
        for item in data["data"]:
            isolation = item.get("isolation")
            walls.append(
                WallWithIsolation(
                    _polygon_from_dict(item["polygon"]),
                    None if isolation is None else IsolationDetails(float(isolation["width"])),
                )
            )
        return cls(
            walls,
            UnitTile(Point.from_dict(data["unit_tile"]["d"])),
            [HookSystem.from_dict(h) for h in data["hooks"]],
            float(data["velocity"]),
        )