import numpy as np
import pytest

from planephys.polygon import Polygon
from planephys.primitives import RayIntersection, point_is_inside_polygon, ray_intersects_polygon


def make_triangle(matrix=None):
    polygon = Polygon()
    polygon.setup([0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0], [True, True, True])
    polygon.update_points_with_single_matrix(np.eye(4) if matrix is None else matrix)
    return polygon


def translation(x, y, z=0.0):
    matrix = np.eye(4)
    matrix[:3, 3] = (x, y, z)
    return matrix


@pytest.mark.parametrize("point", [(0.25, 0.25, 0.0), (0.1, 0.2, 0.0), (0.4, 0.4, 0.0)])
def test_point_inside(point):
    assert point_is_inside_polygon(point, make_triangle()) is True


@pytest.mark.parametrize("point", [(0.8, 0.8, 0.0), (2.0, 2.0, 0.0), (-0.5, 0.2, 0.0), (0.25, 0.25, 1.0)])
def test_point_outside(point):
    assert point_is_inside_polygon(point, make_triangle()) is False


def test_point_inside_follows_transformation():
    moved = make_triangle(translation(5.0, 5.0))
    assert point_is_inside_polygon((5.25, 5.25, 0.0), moved) is True
    assert point_is_inside_polygon((0.25, 0.25, 0.0), moved) is False


def test_point_rejects_bad_vector():
    with pytest.raises(ValueError):
        point_is_inside_polygon((1.0, 2.0), make_triangle())


def test_ray_hits_triangle():
    result = ray_intersects_polygon((0.25, 0.25, 1.0), (0.0, 0.0, -1.0), make_triangle())
    assert result
    assert np.allclose(result.point, [0.25, 0.25, 0.0])


def test_ray_hit_point_lies_inside_triangle():
    triangle = make_triangle()
    result = ray_intersects_polygon((0.2, 0.1, -3.0), (0.0, 0.0, 2.0), triangle)
    assert result
    assert point_is_inside_polygon(result.point, triangle)


def test_ray_pointing_away_misses():
    result = ray_intersects_polygon((0.25, 0.25, 1.0), (0.0, 0.0, 1.0), make_triangle())
    assert not result
    assert result.point is None


def test_parallel_ray_misses():
    assert not ray_intersects_polygon((0.0, 0.0, 1.0), (1.0, 0.0, 0.0), make_triangle())


def test_ray_outside_triangle_misses():
    assert not ray_intersects_polygon((0.9, 0.9, 1.0), (0.0, 0.0, -1.0), make_triangle())


def test_tighter_tolerance_catches_shallow_ray():
    triangle = make_triangle()
    direction = (0.0, 0.0, -0.00001)
    assert not ray_intersects_polygon((0.25, 0.25, 1.0), direction, triangle)
    assert ray_intersects_polygon((0.25, 0.25, 1.0), direction, triangle, 1e-9)


def test_ray_intersection_default_is_false():
    assert not RayIntersection()
    assert RayIntersection(True, np.zeros(3))