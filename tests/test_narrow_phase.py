import numpy as np
import pytest

from planephys.broad_phase import CollidingPair
from planephys.intersection import IntersectionType
from planephys.modules import PhysicsModule2D, PointModule, RayModule
from planephys.narrow_phase import ModelVsPointNarrowPhase, ModelVsRayNarrowPhase, NarrowPhase

TRIANGLE = [0.0, 0.0, 0.0, 2.0, 0.0, 0.0, 0.0, 2.0, 0.0]


def make_model():
    model = PhysicsModule2D()
    model.setup_base_data(TRIANGLE, [True, True, True])
    model.set_transform(np.eye(4))
    return model


def make_point(coords):
    point = PointModule()
    point.set_point(coords)
    return point


def make_ray(start, direction):
    ray = RayModule()
    ray.base_start = start
    ray.base_direction = direction
    ray.set_transform(np.eye(4))
    ray.update(0.0)
    return ray


def test_base_is_abstract():
    with pytest.raises(TypeError):
        NarrowPhase()


def test_point_inside_model_is_found():
    model = make_model()
    point = make_point((0.5, 0.5, 0.0))
    phase = ModelVsPointNarrowPhase()
    phase.update([CollidingPair(model, point)])
    assert len(phase.collisions) == 1
    found = phase.collisions[0]
    assert found.type is IntersectionType.INTERSECTION
    assert found.first is model
    assert found.second is point
    assert found.first_collided_polygon_index == 0
    assert np.allclose(found.point, (0.5, 0.5, 0.0))


def test_point_order_in_pair_does_not_matter():
    model = make_model()
    point = make_point((0.5, 0.5, 0.0))
    phase = ModelVsPointNarrowPhase()
    phase.update([CollidingPair(point, model)])
    assert len(phase.collisions) == 1
    assert phase.collisions[0].first is model
    assert phase.collisions[0].second is point


def test_point_outside_model_is_not_found():
    phase = ModelVsPointNarrowPhase()
    phase.update([CollidingPair(make_model(), make_point((5.0, 5.0, 0.0)))])
    assert phase.collisions == ()


def test_pairs_of_wrong_kind_are_skipped():
    phase = ModelVsPointNarrowPhase()
    phase.update([CollidingPair(make_point((0.5, 0.5, 0.0)), make_point((0.5, 0.5, 0.0)))])
    assert phase.collisions == ()


def test_update_replaces_previous_collisions():
    phase = ModelVsPointNarrowPhase()
    phase.update([CollidingPair(make_model(), make_point((0.5, 0.5, 0.0)))])
    assert len(phase.collisions) == 1
    phase.update([])
    assert phase.collisions == ()


def test_model_without_setup_raises():
    phase = ModelVsPointNarrowPhase()
    with pytest.raises(RuntimeError):
        phase.update([CollidingPair(PhysicsModule2D(), make_point((0.5, 0.5, 0.0)))])


def test_ray_hitting_model_is_found():
    model = make_model()
    ray = make_ray((0.5, 0.5, 5.0), (0.0, 0.0, -1.0))
    phase = ModelVsRayNarrowPhase()
    phase.update([CollidingPair(ray, model)])
    assert len(phase.collisions) == 1
    found = phase.collisions[0]
    assert found.first is model
    assert found.second is ray
    assert np.allclose(found.point, (0.5, 0.5, 0.0))


def test_ray_pointing_away_misses():
    phase = ModelVsRayNarrowPhase()
    phase.update([CollidingPair(make_model(), make_ray((0.5, 0.5, 5.0), (0.0, 0.0, 1.0)))])
    assert phase.collisions == ()


def test_ray_phase_ignores_points():
    phase = ModelVsRayNarrowPhase()
    phase.update([CollidingPair(make_model(), make_point((0.5, 0.5, 0.0)))])
    assert phase.collisions == ()


def test_ray_tolerance_default_and_setting():
    assert ModelVsRayNarrowPhase().tolerance == 0.0001
    assert ModelVsRayNarrowPhase(0.5).tolerance == 0.5