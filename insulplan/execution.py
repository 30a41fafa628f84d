"""Timed events that place insulation tiles from hook systems."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Sequence, Union

from .building import PolygonWalls
from .lines import LineSegment
from .request import HookSystem
from .tiling import TileWithAdhesive, TriangulatedTile, tile_to_triangulated
from .vector import Point


@dataclass(frozen=True)
class CreateEvent:
    """A tile appears at the carrier hook's ground position."""

    tile_id: str
    start: int
    end: int
    styro_position: Point
    adhesive_position: Point
    styro_tile: TriangulatedTile
    adhesive_tile: TriangulatedTile

    def to_dict(self) -> dict:
        return {
            "Create": {
                "tile_id": self.tile_id,
                "start": self.start,
                "end": self.end,
                "styro_position": self.styro_position.to_dict(),
                "adhesive_position": self.adhesive_position.to_dict(),
                "styro_tile": self.styro_tile.to_dict(),
                "adhesive_tile": self.adhesive_tile.to_dict(),
            }
        }


@dataclass(frozen=True)
class TranslateEvent:
    """A tile moves from one position to another over its time span."""

    tile_id: str
    start: int
    end: int
    styro_start_position: Point
    styro_end_position: Point
    adhesive_start_position: Point
    adhesive_end_position: Point

    def duration(self) -> int:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {
            "Translate": {
                "tile_id": self.tile_id,
                "start": self.start,
                "end": self.end,
                "styro_start_position": self.styro_start_position.to_dict(),
                "styro_end_position": self.styro_end_position.to_dict(),
                "adhesive_start_position": self.adhesive_start_position.to_dict(),
                "adhesive_end_position": self.adhesive_end_position.to_dict(),
            }
        }


@dataclass(frozen=True)
class TeleportEvent:
    """A tile jumps to a position."""

    tile_id: str
    start: int
    end: int
    end_position: Point

    def to_dict(self) -> dict:
        return {
            "Teleport": {
                "tile_id": self.tile_id,
                "start": self.start,
                "end": self.end,
                "end_position": self.end_position.to_dict(),
            }
        }


@dataclass(frozen=True)
class FixEvent:
    """A tile is fixed in its final position."""

    tile_id: str
    start: int
    end: int
    end_position: Point

    def to_dict(self) -> dict:
        return {
            "Fix": {
                "tile_id": self.tile_id,
                "start": self.start,
                "end": self.end,
                "end_position": self.end_position.to_dict(),
            }
        }


PlanExecutionEvent = Union[CreateEvent, TranslateEvent, TeleportEvent, FixEvent]


@dataclass
class PlanExecution:
    """The ordered events of a plan and the time span they cover."""

    events: list[PlanExecutionEvent] = field(default_factory=list)
    start: int = 0
    end: int = 0

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "events": [event.to_dict() for event in self.events],
        }


def tile_reachable(tile: TileWithAdhesive, hook_system: HookSystem, max_distance: float) -> bool:
    """True when every rim point of the tile is within reach of the robot's line."""
    robot_segment = LineSegment(hook_system.robot_hook_ground, hook_system.robot_hook)
    return all(
        robot_segment.distance_from_point(pt) <= max_distance
        for pt in (*tile.base_rim(), *tile.surface_rim())
    )


def split_tiles_on_hooks(
    tiles: Sequence[TileWithAdhesive], hooks: Sequence[HookSystem], max_distance: float
) -> list[tuple[int, list[int]]]:
    """Assign each tile to the first hook system that can reach it.

    Returns one ``(hook index, tile indices)`` pair per hook system, in order.
    """
    assigned: set[int] = set()
    groups = []
    for hook_index, hook_system in enumerate(hooks):
        group = [
            tile_index
            for tile_index, tile in enumerate(tiles)
            if tile_index not in assigned and tile_reachable(tile, hook_system, max_distance)
        ]
        assigned.update(group)
        groups.append((hook_index, group))
    return groups


@dataclass(frozen=True)
class PlanExecutionCreator:
    """Builds the event timeline for placing tiles at a given velocity."""

    velocity: float

    def __post_init__(self) -> None:
        if not self.velocity > 0:
            raise ValueError(f"velocity must be positive, got {self.velocity!r}")

    def create_plan(
        self,
        building: PolygonWalls,
        tiles: Sequence[TileWithAdhesive],
        hooks: Sequence[HookSystem],
        max_distance: float,
        number_of_systems: int,
    ) -> PlanExecution:
        """Events for every tile reachable from one of ``hooks``."""
        tiles = list(tiles)
        hooks = list(hooks)
        events: list[PlanExecutionEvent] = []
        start = 0
        for hook_index, group in split_tiles_on_hooks(tiles, hooks, max_distance):
            group_events = self._plan_group(tiles, group, start, hooks[hook_index])
            start = max((event.end for event in group_events), default=0)
            events.extend(group_events)
        end = max((event.end for event in events), default=start)
        return PlanExecution(events, start, end)

    def _plan_group(
        self,
        tiles: Sequence[TileWithAdhesive],
        group: Sequence[int],
        start: int,
        hook_system: HookSystem,
    ) -> list[PlanExecutionEvent]:
        events: list[PlanExecutionEvent] = []
        for tile_index in group:
            tile_events, start = self._plan_tile(tiles[tile_index], start, hook_system)
            events.extend(tile_events)
        return events

    def _plan_tile(
        self, tile: TileWithAdhesive, start: int, hook_system: HookSystem
    ) -> tuple[list[PlanExecutionEvent], int]:
        ground = hook_system.carrier_hook_ground
        target = tile.average_point()
        end = start + int((ground - target).modulo() / self.velocity)
        tile_id = str(uuid.uuid4())

        centred = tile.translate(target * -1.0)
        create = CreateEvent(
            tile_id=tile_id,
            start=start,
            end=end,
            styro_position=ground,
            adhesive_position=ground,
            styro_tile=tile_to_triangulated(centred.styro_tile)[0],
            adhesive_tile=tile_to_triangulated(centred.adhesive_tile)[0],
        )
        translate = TranslateEvent(
            tile_id=tile_id,
            start=start,
            end=end,
            styro_start_position=ground,
            styro_end_position=target,
            adhesive_start_position=ground,
            adhesive_end_position=target,
        )
        return [create, translate], end