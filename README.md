# planephys

Collision detection for flat (2D) scenes built from triangles. It is a
library with no command-line tool. Points are three-component numpy arrays,
and the z component stays at zero in flat scenes. Transformations are 4×4
numpy matrices applied to column vectors (`matrix @ (x, y, z, 1)`).

## What is in it

- `planephys.lines`
  - `Line(point_1, point_2)` is an infinite line. It has `contains_point`,
    `can_be_solved_by_component`, `solve_by_component`, `solve_by_multiplier`
    and `calculate_intersection_with`.
  - `calculate_intersection_with` returns a `LinesIntersection`. Its
    `intersection` is a `LinesIntersectionType` (`NONE`, `INTERSECTION` or
    `SAME_LINE`), and it also has a `point`. The result is falsy when there is
    no intersection.
  - `floats_are_equal` and `normalized` are small helpers.
- `planephys.segments`
  - `calculate_segments_intersection(first_start, first_end, second_start, second_end)`
    intersects two segments.
  - When the segments are collinear and overlap, the result is `SAME_LINE`
    and its point lies in the overlap.
  - Collinear segments that do not overlap raise `ValueError`.
- `planephys.border`
  - `Border` is an axis-aligned box. It has an `offset` and a `size`, and it
    is valid only while every size component is non-negative.
  - `consider_point` and `expand_with` grow the box.
  - `point_is_inside` and `intersects_with` test against it.
  - `a & b` gives the overlap of two boxes and `a | b` gives the box that
    holds both.
  - Two borders compare equal within a small tolerance.
- `planephys.polygon`
  - `Polygon` is a triangle built from nine raw coordinates and three segment
    collision flags. It is transformed with `update_points` or
    `update_points_with_single_matrix`.
  - `polygon[i]` gives the transformed vertex `i`. Any index past 2 gives
    vertex 0.
  - `RigidBodyPolygon` adds a `mass`.
- `planephys.physical_model`
  - `PhysicalModel2D` builds triangles from a flat coordinate list and keeps
    a `border` and a `center_of_mass`.
  - `RigidBodyPhysicalModel2D` adds `set_masses`, `total_mass` and
    `moment_of_inertia`.
  - `PhysicalModel2DImprint` is a snapshot of a model. It is made with
    `create_imprint()` and can be transformed on its own, copied, or brought
    back to the model's current state.
- `planephys.intersection`
  - `IntersectionData` describes a collision with these fields: `type`,
    `point`, `normal`, `depth`, the two modules `first` and `second`, the
    colliding polygon indices, and `time_of_intersection_ratio`.
  - It is falsy when `type` is `IntersectionType.NONE`.
- `planephys.primitives`
  - `point_is_inside_polygon(point, polygon)` tests a point against one
    triangle.
  - `ray_intersects_polygon(start, direction, polygon)` tests a ray against
    one triangle and returns a `RayIntersection`, which carries the hit
    point.
- `planephys.sat`
  - `collision_model_vs_model(first_polygons, second_polygons)` is a
    separating-axis test between two sets of transformed triangles.
  - It returns an `IntersectionData` with a unit `normal` that points from
    the second model towards the first, the overlap `depth`, and the average
    contact point.
- `planephys.modules`
  - `PhysicsModule` is the base class. Use `set_transform(matrix, rotation_matrix)`
    to place a module and `allow_collisions` to turn collisions on or off.
    `on_collision(other)` calls `on_collision_function` if one is set.
  - `PhysicsModule2D` is backed by a `PhysicalModel2D`. It is built with
    `setup_base_data(raw_coords, collision_permissions)`.
  - `update_prev_state()` remembers the current state of a `PhysicsModule2D`.
  - `update(dt)` moves a `PhysicsModule2D` to its transformation. Its
    `border` then covers both the previous and the current state.
  - `PointModule` is a single point, set with `set_point`.
  - `RayModule` is a ray, set through `base_start` and `base_direction`.
- `planephys.broad_phase`
  - `BinarySpacePartitioner(precision=3, ignore_collision_restriction=False)`
    finds candidate pairs. It splits space in half along its longest axis,
    again and again.
  - `add_filter` adds a predicate that every reported pair must satisfy.
  - The pairs found are in `possible_collisions` as `CollidingPair` objects.
    The order of the two modules in a pair does not matter.
- `planephys.narrow_phase`
  - `ModelVsPointNarrowPhase` checks the candidate pairs for points that lie
    inside 2D models.
  - `ModelVsRayNarrowPhase(tolerance)` checks them for rays that hit 2D
    models.
  - The results are in `collisions`.
- `planephys.detector`
  - `CollisionDetector(broad_phase, narrow_phase)` keeps the registered
    modules.
  - `update()` or `update_with_external_models(...)` runs both phases.
  - The results are in `found_collisions`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np
from planephys.modules import PhysicsModule2D, PointModule
from planephys.broad_phase import BinarySpacePartitioner
from planephys.narrow_phase import ModelVsPointNarrowPhase
from planephys.detector import CollisionDetector

# one triangle: nine coordinates, one collision flag per edge
triangle = PhysicsModule2D()
triangle.set_transform(np.identity(4), np.identity(4))
triangle.setup_base_data(
    [0.0, 0.0, 0.0,  10.0, 0.0, 0.0,  0.0, 10.0, 0.0],
    [True, True, True],
)
triangle.update(0.0)

probe = PointModule()
probe.set_transform(np.identity(4), np.identity(4))
probe.set_point([2.0, 2.0, 0.0])

detector = CollisionDetector(BinarySpacePartitioner(), ModelVsPointNarrowPhase())
detector.register_module(triangle)
detector.register_module(probe)
detector.update()

for collision in detector.found_collisions:
    print(collision.point, collision.first_collided_polygon_index)
```

## What it does not do

planephys detects collisions and reports them. It does not respond to them:

- Nothing here pushes bodies apart, applies impulses or integrates
  velocities. `RigidBodyPhysicalModel2D` supplies mass, centre of mass and
  moment of inertia, but no module moves a body.
- There is no narrow phase that tests two polygonal modules against each
  other over the time between their previous and current states. To test two
  models, call `collision_model_vs_model` directly on their polygons.
- `CollisionDetector` does not call `on_collision`. Your own code decides
  when to notify modules.