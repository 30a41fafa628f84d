import json

import pytest

from insulplan.plane import Plane
from insulplan.planning import Plan, generate_plan, order_planes
from insulplan.polygon import Polygon
from insulplan.request import HookSystem, IsolationDetails, Request, WallWithIsolation
from insulplan.tiling import UnitTile
from insulplan.vector import Point

NEAR_HOOK = HookSystem(
    Point(1.0, -1.0, 2.0),
    Point(0.0, -1.0, 2.0),
    Point(1.0, -1.0, 0.0),
    Point(0.0, -1.0, 0.0),
)

FAR_HOOK = HookSystem(
    Point(1000.0, -1000.0, 2.0),
    Point(1000.0, -1000.0, 2.0),
    Point(1000.0, -1000.0, 0.0),
    Point(1000.0, -1000.0, 0.0),
)


def _wall():
    return Polygon.from_triplets([(0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (2.0, 0.0, 2.0), (0.0, 0.0, 2.0)])


def _request(isolated=True, hooks=(NEAR_HOOK,), thickness=0.1):
    isolation = IsolationDetails(0.1) if isolated else None
    return Request(
        [WallWithIsolation(_wall(), isolation)],
        UnitTile(Point(1.0, 1.0, thickness)),
        list(hooks),
        1.0,
    )


def test_order_planes_by_normal():
    yz = Plane(1.0, 0.0, 0.0, 0.0)
    xz = Plane(0.0, 1.0, 0.0, 0.0)
    assert order_planes(yz, xz) == 1
    assert order_planes(xz, yz) == -1


def test_order_planes_rejects_parallel():
    with pytest.raises(ValueError):
        order_planes(Plane(1.0, 0.0, 0.0, 0.0), Plane(2.0, 0.0, 0.0, 5.0))


def test_wall_without_insulation_gives_no_tiles():
    plan = generate_plan(_request(isolated=False))
    assert isinstance(plan, Plan)
    assert plan.tiles.triangulated_tiles.tiles == []
    assert plan.plan_execution.events == []
    assert plan.plan_execution.start == plan.plan_execution.end == 0
    assert len(plan.building.walls) == 1


def test_single_wall_is_split_into_unit_tiles():
    plan = generate_plan(_request())
    styro = plan.tiles.triangulated_tiles.tiles
    adhesive = plan.tiles.triangulated_adhesive.tiles
    assert len(styro) == len(adhesive) == 4
    assert all(tile.triangles for tile in styro)


def test_events_come_in_create_translate_pairs():
    plan = generate_plan(_request())
    events = plan.plan_execution.events
    assert len(events) == 2 * len(plan.tiles.triangulated_tiles.tiles)
    creates, translates = events[0::2], events[1::2]
    assert [e.tile_id for e in creates] == [e.tile_id for e in translates]
    assert len({e.tile_id for e in creates}) == len(creates)
    starts = [e.start for e in events]
    assert starts == sorted(starts)
    assert all(e.start <= e.end for e in events)
    assert plan.plan_execution.end == max(e.end for e in events)


def test_tiles_are_placed_on_the_insulation_surface():
    plan = generate_plan(_request())
    translates = plan.plan_execution.events[1::2]
    for event in translates:
        assert event.styro_end_position.y == pytest.approx(-0.1)
        assert 0.0 <= event.styro_end_position.x <= 2.0
        assert event.styro_start_position.is_similar(NEAR_HOOK.carrier_hook_ground)


def test_unreachable_hook_schedules_nothing():
    plan = generate_plan(_request(hooks=(FAR_HOOK,)))
    assert len(plan.tiles.triangulated_tiles.tiles) == 4
    assert plan.plan_execution.events == []


def test_unit_tile_thickness_must_match_insulation():
    with pytest.raises(ValueError):
        generate_plan(_request(thickness=0.3))


def test_plan_serialises_to_json():
    plan = generate_plan(_request())
    data = plan.to_dict()
    assert set(data) == {"building", "tiles", "planExecution"}
    decoded = json.loads(json.dumps(data))
    assert len(decoded["planExecution"]["events"]) == len(plan.plan_execution.events)
    assert "Create" in decoded["planExecution"]["events"][0]