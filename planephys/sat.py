"""Separating-axis collision test between two sets of triangles."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from planephys.intersection import IntersectionData, IntersectionType
from planephys.lines import floats_are_equal, normalized
from planephys.polygon import Polygon

_VERTICES = 3
_MIN_DEPTH = 0.00001


@dataclass
class _AxisResult:
    intersection: bool = False
    min_dist: float = -1.0
    axis: np.ndarray = field(default_factory=lambda: np.zeros(3))


def _rotated_perpendicular(vector: np.ndarray) -> np.ndarray:
    return np.array([-vector[1], vector[0], vector[2]])


def _projections(axis: np.ndarray, polygon: Polygon) -> tuple[float, float]:
    values = [float(np.dot(polygon[i], axis)) for i in range(_VERTICES)]
    return min(values), max(values)


def _point_to_segment_distance(point: np.ndarray, seg_start: np.ndarray, seg_end: np.ndarray) -> float:
    direction = seg_end - seg_start
    cross_length = np.float64(np.linalg.norm(np.cross(point - seg_start, direction)))
    segment_length = np.float64(np.linalg.norm(direction))
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(cross_length / segment_length)


def _check_axes(owner: Polygon, other: Polygon, result: _AxisResult) -> bool:
    """Test the edge normals of ``owner``; return False once a separating axis is found."""
    for i in range(_VERTICES):
        if not owner.segment_can_collide(i):
            continue
        axis = owner[i + 1] - owner[i]
        axis[2] = 0.0
        axis = _rotated_perpendicular(normalized(axis))

        f_min, f_max = _projections(axis, owner)
        s_min, s_max = _projections(axis, other)
        if f_min > s_max or s_min > f_max:
            return False

        result.intersection = True
        distance = min(abs(f_max - s_min), abs(s_max - f_min))
        if result.min_dist < 0.0 or result.min_dist > distance:
            result.min_dist = distance
            result.axis = axis
    return True


def _polygons_collision(first: Polygon, second: Polygon) -> _AxisResult:
    result = _AxisResult()
    if not _check_axes(first, second, result):
        return _AxisResult()
    if not _check_axes(second, first, result):
        return _AxisResult()

    direction = second.center - first.center
    if float(np.dot(direction, result.axis)) < 0.0:
        result.axis = -result.axis
    return result


def _smallest_point_to_polygon_distance(point: np.ndarray, polygon: Polygon) -> float:
    min_dist = -1.0
    for i in range(_VERTICES):
        if not polygon.segment_can_collide(i):
            continue
        distance = _point_to_segment_distance(point, polygon[i], polygon[i + 1])
        if distance < 0.0:
            continue
        if min_dist < 0.0 or min_dist > distance:
            min_dist = distance
    return min_dist


def _vecs_are_equal(first: np.ndarray, second: np.ndarray) -> bool:
    return all(floats_are_equal(a, b) for a, b in zip(first, second))


def _points_of_contact(first: list[Polygon], second: list[Polygon]) -> list[np.ndarray]:
    min_dist = -1.0
    points: list[np.ndarray] = []
    for source, target in ((first, second), (second, first)):
        for polygon in source:
            for vertex in range(_VERTICES):
                point = polygon[vertex].copy()
                for other in target:
                    distance = _smallest_point_to_polygon_distance(point, other)
                    if distance < 0.0:
                        continue
                    if min_dist < 0.0 or min_dist > distance:
                        points = [point]
                        min_dist = distance
                    elif floats_are_equal(min_dist, distance):
                        if not any(_vecs_are_equal(existing, point) for existing in points):
                            points.append(point)
    return points


def collision_model_vs_model(first_polygons, second_polygons) -> IntersectionData:
    """Detect a collision between two sets of transformed triangles.

    The returned normal points from the second model towards the first, and
    ``depth`` is how far they overlap along it.  A falsy result means no
    collision.
    """
    first = list(first_polygons)
    second = list(second_polygons)

    first_index: int | None = None
    second_index: int | None = None
    push_out = np.zeros(3)

    for i, first_polygon in enumerate(first):
        for k, second_polygon in enumerate(second):
            result = _polygons_collision(first_polygon, second_polygon)
            if not result.intersection:
                continue
            local = normalized(result.axis) * result.min_dist
            for component in range(3):
                if abs(push_out[component]) >= abs(local[component]):
                    continue
                push_out[component] = local[component]
                first_index, second_index = i, k

    if first_index is None or second_index is None:
        return IntersectionData()

    depth = float(np.linalg.norm(push_out))
    if depth > _MIN_DEPTH:
        push_out = push_out / depth

    points = _points_of_contact(first, second)
    if not points:
        return IntersectionData()

    return IntersectionData(
        type=IntersectionType.INTERSECTION,
        point=np.mean(points, axis=0),
        normal=normalized(-push_out),
        depth=depth,
        first_collided_polygon_index=first_index,
        second_collided_polygon_index=second_index,
    )