import numpy as np

from planephys.intersection import IntersectionData, IntersectionType


def test_default_is_empty():
    data = IntersectionData()
    assert not data
    assert data.type is IntersectionType.NONE
    assert data.time_of_intersection_ratio == 1.0
    assert np.array_equal(data.point, np.zeros(3))


def test_intersection_type_is_truthy():
    assert IntersectionData(IntersectionType.INTERSECTION)
    assert IntersectionData(IntersectionType.SAME_LINE)


def test_default_vectors_are_not_shared():
    first = IntersectionData()
    second = IntersectionData()
    first.point[0] = 5.0
    assert second.point[0] == 0.0


def test_copy_keeps_values():
    module_a, module_b = object(), object()
    data = IntersectionData(
        IntersectionType.INTERSECTION,
        point=np.array([1.0, 2.0, 0.0]),
        normal=np.array([0.0, 1.0, 0.0]),
        depth=0.5,
        first=module_a,
        second=module_b,
        first_collided_polygon_index=3,
        second_collided_polygon_index=4,
        time_of_intersection_ratio=0.25,
    )
    duplicate = data.copy()
    assert duplicate.type is IntersectionType.INTERSECTION
    assert np.array_equal(duplicate.point, data.point)
    assert np.array_equal(duplicate.normal, data.normal)
    assert duplicate.depth == data.depth
    assert duplicate.first is module_a
    assert duplicate.second is module_b
    assert duplicate.first_collided_polygon_index == 3
    assert duplicate.second_collided_polygon_index == 4
    assert duplicate.time_of_intersection_ratio == 0.25


def test_copy_has_own_vectors():
    data = IntersectionData(IntersectionType.INTERSECTION, point=np.array([1.0, 1.0, 1.0]))
    duplicate = data.copy()
    duplicate.point[0] = 9.0
    duplicate.normal[1] = 9.0
    assert data.point[0] == 1.0
    assert data.normal[1] == 0.0