import numpy as np
import pytest

from planephys.broad_phase import BinarySpacePartitioner
from planephys.detector import CollisionDetector
from planephys.modules import PhysicsModule2D, PointModule
from planephys.narrow_phase import ModelVsPointNarrowPhase

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


def make_detector():
    return CollisionDetector(BinarySpacePartitioner(), ModelVsPointNarrowPhase())


def test_register_and_unregister():
    detector = make_detector()
    model = make_model()
    point = make_point((0.5, 0.5, 0.0))
    detector.register_module(model)
    detector.register_module(point)
    assert detector.registered_modules == (model, point)
    detector.unregister_module(model)
    assert detector.registered_modules == (point,)
    detector.unregister_all_modules()
    assert detector.registered_modules == ()


def test_register_twice_raises():
    detector = make_detector()
    model = make_model()
    detector.register_module(model)
    with pytest.raises(ValueError):
        detector.register_module(model)


def test_unregister_unknown_raises():
    with pytest.raises(ValueError):
        make_detector().unregister_module(make_model())


def test_update_without_phases_raises():
    detector = CollisionDetector()
    detector.register_module(make_model())
    with pytest.raises(RuntimeError):
        detector.update()


def test_found_collisions_without_phases_raises():
    with pytest.raises(RuntimeError):
        CollisionDetector(BinarySpacePartitioner()).found_collisions


def test_update_finds_point_inside_model():
    detector = make_detector()
    model = make_model()
    point = make_point((0.5, 0.5, 0.0))
    detector.register_module(model)
    detector.register_module(point)
    detector.update()
    collisions = detector.found_collisions
    assert len(collisions) == 1
    assert collisions[0].first is model
    assert collisions[0].second is point


def test_update_finds_nothing_for_distant_point():
    detector = make_detector()
    detector.register_module(make_model())
    detector.register_module(make_point((5.0, 5.0, 0.0)))
    detector.update()
    assert detector.found_collisions == ()


def test_update_with_external_models():
    detector = make_detector()
    model = make_model()
    point = make_point((0.5, 0.5, 0.0))
    detector.register_module(model)
    detector.update_with_external_models([point])
    collisions = detector.found_collisions
    assert len(collisions) == 1
    assert collisions[0].second is point
    assert detector.registered_modules == (model,)


def test_update_after_unregister_clears_collisions():
    detector = make_detector()
    model = make_model()
    point = make_point((0.5, 0.5, 0.0))
    detector.register_module(model)
    detector.register_module(point)
    detector.update()
    assert len(detector.found_collisions) == 1
    detector.unregister_module(point)
    detector.update()
    assert detector.found_collisions == ()