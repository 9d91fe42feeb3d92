import math

import numpy as np
import pytest

from planephys.intersection import IntersectionType
from planephys.polygon import Polygon
from planephys.sat import collision_model_vs_model


def make_triangle(points, flags=(True, True, True), offset=(0.0, 0.0, 0.0)):
    polygon = Polygon()
    polygon.setup(np.array(points, dtype=float).reshape(-1), flags)
    matrix = np.eye(4)
    matrix[:3, 3] = offset
    polygon.update_points_with_single_matrix(matrix)
    return polygon


BASE = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]


def test_slightly_overlapping_triangles_collide():
    first = make_triangle(BASE)
    second = make_triangle(BASE, offset=(0.9, 0.0, 0.0))
    result = collision_model_vs_model([first], [second])
    assert result.type is IntersectionType.INTERSECTION
    assert result.depth == pytest.approx(0.1 / math.sqrt(2.0))
    assert np.allclose(result.normal, np.array([-1.0, -1.0, 0.0]) / math.sqrt(2.0))
    assert result.first_collided_polygon_index == 0
    assert result.second_collided_polygon_index == 0


def test_normal_points_from_second_towards_first():
    first = make_triangle(BASE)
    second = make_triangle(BASE, offset=(0.5, 0.2, 0.0))
    result = collision_model_vs_model([first], [second])
    assert result
    assert float(np.linalg.norm(result.normal)) == pytest.approx(1.0)
    assert float(np.dot(result.normal, second.center - first.center)) <= 0.0
    assert result.depth > 0.0


def test_separated_triangles_do_not_collide():
    first = make_triangle(BASE)
    second = make_triangle(BASE, offset=(3.0, 0.0, 0.0))
    result = collision_model_vs_model([first], [second])
    assert not result
    assert result.type is IntersectionType.NONE


def test_empty_models_do_not_collide():
    first = make_triangle(BASE)
    assert collision_model_vs_model([], [first]).type is IntersectionType.NONE
    assert collision_model_vs_model([first], []).type is IntersectionType.NONE


def test_triangles_without_collidable_segments_do_not_collide():
    first = make_triangle(BASE, flags=(False, False, False))
    second = make_triangle(BASE, flags=(False, False, False), offset=(0.2, 0.2, 0.0))
    assert collision_model_vs_model([first], [second]).type is IntersectionType.NONE


def test_result_is_invariant_under_common_translation():
    first = make_triangle(BASE)
    second = make_triangle(BASE, offset=(0.6, 0.1, 0.0))
    moved_first = make_triangle(BASE, offset=(5.0, -2.0, 0.0))
    moved_second = make_triangle(BASE, offset=(5.6, -1.9, 0.0))
    original = collision_model_vs_model([first], [second])
    moved = collision_model_vs_model([moved_first], [moved_second])
    assert original and moved
    assert moved.depth == pytest.approx(original.depth)
    assert np.allclose(moved.normal, original.normal)
    assert np.allclose(moved.point, original.point + np.array([5.0, -2.0, 0.0]))


def test_swapping_models_flips_normal():
    first = make_triangle(BASE)
    second = make_triangle(BASE, offset=(0.9, 0.0, 0.0))
    forward = collision_model_vs_model([first], [second])
    backward = collision_model_vs_model([second], [first])
    assert forward.depth == pytest.approx(backward.depth)
    assert np.allclose(forward.normal, -backward.normal)


def test_collided_polygon_indices_name_the_overlapping_triangles():
    far = make_triangle(BASE, offset=(10.0, 10.0, 0.0))
    near = make_triangle(BASE)
    other = make_triangle(BASE, offset=(0.5, 0.3, 0.0))
    result = collision_model_vs_model([far, near], [other])
    assert result
    assert result.first_collided_polygon_index == 1
    assert result.second_collided_polygon_index == 0


def test_contact_point_lies_near_the_models():
    first = make_triangle(BASE)
    second = make_triangle(BASE, offset=(0.9, 0.0, 0.0))
    result = collision_model_vs_model([first], [second])
    assert np.all(np.isfinite(result.point))
    assert -0.01 <= result.point[0] <= 1.91
    assert -0.01 <= result.point[1] <= 1.01
    assert result.point[2] == pytest.approx(0.0)