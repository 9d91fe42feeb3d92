"""Point-in-triangle and ray-versus-triangle tests."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from planephys.border import Border
from planephys.lines import DEFAULT_TOLERANCE, Line
from planephys.polygon import Polygon

_BETWEEN_TOLERANCE = 0.0001


def _vec(value) -> np.ndarray:
    vector = np.array(value, dtype=float).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got {value!r}")
    return vector


def _value_is_between(value: float, bound_1: float, bound_2: float) -> bool:
    low, high = sorted((bound_1, bound_2))
    return low - _BETWEEN_TOLERANCE <= value <= high + _BETWEEN_TOLERANCE


@dataclass(eq=False)
class RayIntersection:
    """Result of casting a ray at a triangle."""

    intersection: bool = False
    point: np.ndarray | None = None

    def __bool__(self) -> bool:
        return self.intersection


def _check_with_index(point: np.ndarray, polygon: Polygon, index: int, sides: list[Line], tolerance: float) -> bool:
    vertex = polygon[index]
    toward_point = Line(vertex, point)
    opposite = toward_point.calculate_intersection_with(sides[(index + 1) % 3], tolerance)
    if not opposite:
        return False
    return all(_value_is_between(point[i], vertex[i], opposite.point[i]) for i in range(3))


def point_is_inside_polygon(point, polygon: Polygon, tolerance=DEFAULT_TOLERANCE) -> bool:
    """Return True if ``point`` lies within the transformed triangle ``polygon``."""
    point = _vec(point)
    border = Border()
    for i in range(3):
        border.consider_point(polygon[i])

    sides = [Line(polygon[i], polygon[i + 1]) for i in range(3)]

    if not border.point_is_inside(point):
        return False

    return all(_check_with_index(point, polygon, i, sides, tolerance) for i in range(3))


def ray_intersects_polygon(start, direction, polygon: Polygon, tolerance=DEFAULT_TOLERANCE) -> RayIntersection:
    """Cast a ray from ``start`` along ``direction`` at the triangle ``polygon``."""
    start = _vec(start)
    direction = _vec(direction)

    edge1 = polygon[1] - polygon[0]
    edge2 = polygon[2] - polygon[0]

    pvec = np.cross(direction, edge2)
    det = float(np.dot(edge1, pvec))
    if -tolerance < det < tolerance:
        return RayIntersection()

    inv_det = 1.0 / det

    tvec = start - polygon[0]
    u = float(np.dot(tvec, pvec)) * inv_det
    if u < 0.0 or u > 1.0:
        return RayIntersection()

    qvec = np.cross(tvec, edge1)
    v = float(np.dot(direction, qvec)) * inv_det
    if v < 0.0 or u + v > 1.0:
        return RayIntersection()

    t = float(np.dot(edge2, qvec)) * inv_det
    if t < 0.0:
        return RayIntersection()

    return RayIntersection(True, start + direction * t)