# insulplan

insulplan plans external thermal insulation for a building that is given as
planar wall polygons. It works in five steps:

1. It merges touching walls that lie in one plane and face the same way.
2. It extrudes each insulated wall by the insulation width. Where two walls
   meet, it works out the corner points of both insulation slabs.
3. It cuts each slab into pieces no larger than one unit tile. Each piece is
   split into a thin adhesive layer (the tenth nearest the wall) and a
   styrofoam board above it.
4. It triangulates the building and the tiles so they can be drawn, and it
   collects their outlines as wireframes.
5. It builds a timeline of events that carry each tile from a hook system's
   ground position to its place on the wall.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

```
insulplan [--request-id N] [--length L] [--height H] [--width W] [--velocity V]
```

This command generates the plan for one of the bundled sample buildings.
The defaults are request id 1, length 0.5, height 2.0, width 0.1 and
velocity 1.0. The command prints how long the generation took, then the
number of styrofoam tiles and the number of adhesive tiles. An unknown
request id is reported as a usage error.

## Web service

```
insulplan-web [--host HOST] [--port PORT]
```

This command starts a Flask server. By default it listens on
`127.0.0.1:8080`. The server has these routes:

- `GET /` returns `Hello world!`.
- `POST /echo` returns the request body unchanged.
- `GET /hey` returns `Hey there!`.
- `GET /generateplan?request_id=1&length=0.5&height=2&width=0.1&velocity=1`
  returns the plan as JSON. The top-level keys are `building`, `tiles` and
  `planExecution`. If a parameter is missing or malformed, or the request id
  is unknown, the server answers with status 400 and a plain-text message.

When the request carries an `Origin` header, the response includes
`Access-Control-Allow-Origin: *`.

## Library use

```python
from insulplan.buildings import create_request
from insulplan.planning import generate_plan

request = create_request(1, 0.5, 2.0, 0.1, 1.0)
plan = generate_plan(request)
data = plan.to_dict()
```

The arguments of `create_request(request_id, length, height, width, velocity)`
are:

- `length` and `height`: the size of one tile on the wall.
- `width`: the insulation thickness. It is also the unit tile's third
  dimension.
- `request_id`: one of the sample buildings, 1, 2 or 3. Any other id raises
  `ValueError`. All three sample buildings are in `insulplan.buildings`:
  - Building 1 is a cube-shaped house with a door, a window and a porch.
  - Building 2 is a four-storey building with an irregular ground floor.
  - Building 3 is a stepped pyramid of ten storeys.

You can also build a request yourself:

- `Request.from_building(walls, width, unit_tile, hooks, velocity)` marks
  every non-horizontal wall for insulation.
- `Request.from_dict(data)` reads a request from a plain dictionary.

`generate_plan` logs the time taken by each stage through the standard
`logging` module, at INFO level, under the logger `insulplan.planning`.

### Modules

- `insulplan.vector`: `Point`, `Point2D`, `Angle`, `PositiveFloat`,
  `Triangle`, `CoordinateSystem3D`, and the tolerant comparison `similar`.
- `insulplan.lines`: `Line3D`, `LineSegment`, `intersection` and
  `shared_segment`.
- `insulplan.plane`: `Plane` and `align_parallel_planes`.
- `insulplan.polygon`: `Polygon`, `PolygonPointsOnSides`, `merge_polygons`
  and `corners_on_polygon`.
- `insulplan.polygon2d`: `Polygon2D` and `Rectangle`. Clipping is done with
  shapely.
- `insulplan.triangulation`: `earcut`, `triangulate_polygon` and
  `triangulate_convex`. The triangulator uses ear clipping and handles holes.
- `insulplan.building`: `Level`, `PolygonWalls`, `levels_to_polygon_walls`
  and `polygon_walls_to_triangulated`.
- `insulplan.tiling`: `Tile`, `UnitTile`, `TileWithAdhesive`,
  `split_into_tiles` and the triangulated tile containers.
- `insulplan.request`: `Request`, `HookSystem`, `WallWithIsolation` and
  `IsolationDetails`.
- `insulplan.execution`: `PlanExecutionCreator`, `PlanExecution` and the
  event types.
- `insulplan.planning`: `generate_plan` and `Plan`.

## Limits

- A tile is placed only from the first hook system whose robot line
  reaches all of the tile's rim points within 50 units. Tiles that no hook
  system reaches get no events. Building 3 has no hook systems, so its
  timeline is empty.
- The timeline generator emits only create and translate events.
  `TeleportEvent` and `FixEvent` exist as types, but no part of the package
  produces them.
- The command line and the web service work only with the three sample
  buildings. They cannot read a building from a file or from a request body,
  and plans are not stored anywhere.