"""Intersection of line segments."""

from __future__ import annotations

import numpy as np

from planephys.lines import Line, LinesIntersection, LinesIntersectionType

_BETWEEN_TOLERANCE = 0.0001


def _vec(value) -> np.ndarray:
    vector = np.array(value, dtype=float).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got {value!r}")
    return vector


def _value_is_between(value: float, bound_1: float, bound_2: float) -> bool:
    low, high = sorted((bound_1, bound_2))
    return low - _BETWEEN_TOLERANCE <= value <= high + _BETWEEN_TOLERANCE


def _point_is_between(point: np.ndarray, start: np.ndarray, end: np.ndarray) -> bool:
    start_to_end = end - start
    start_to_point = point - start
    for span, offset in zip(start_to_end, start_to_point):
        if (span < 0.0) != (offset < 0.0):
            return False
        if abs(span) < abs(offset):
            return False
    return True


def _non_parallel_intersection(first_start, first_end, second_start, second_end, lines_intersection):
    point = lines_intersection.point
    for i in range(3):
        if not _value_is_between(point[i], first_start[i], first_end[i]):
            return LinesIntersection()
        if not _value_is_between(point[i], second_start[i], second_end[i]):
            return LinesIntersection()
    return lines_intersection


def _parallel_intersection(first_start, first_end, second_start, second_end):
    first_start_between = _point_is_between(first_start, second_start, second_end)
    first_end_between = _point_is_between(first_end, second_start, second_end)
    second_start_between = _point_is_between(second_start, first_start, first_end)
    second_end_between = _point_is_between(second_end, first_start, first_end)

    if first_start_between != first_end_between and second_start_between != second_end_between:
        inner_first = first_start if first_start_between else first_end
        inner_second = second_start if second_start_between else second_end
        point = (inner_first + inner_second) * 0.5
    elif first_start_between and first_end_between:
        point = (first_start + first_end) * 0.5
    elif second_start_between and second_end_between:
        point = (second_start + second_end) * 0.5
    else:
        raise ValueError("collinear segments do not overlap")

    return LinesIntersection(LinesIntersectionType.SAME_LINE, point)


def calculate_segments_intersection(first_start, first_end, second_start, second_end) -> LinesIntersection:
    """Intersect segment ``first_start``-``first_end`` with ``second_start``-``second_end``.

    Overlapping collinear segments give a SAME_LINE result whose point lies in
    the overlap.  Collinear segments that do not overlap raise ValueError.
    """
    first_start, first_end = _vec(first_start), _vec(first_end)
    second_start, second_end = _vec(second_start), _vec(second_end)

    lines_intersection = Line(first_start, first_end).calculate_intersection_with(Line(second_start, second_end))

    if lines_intersection.intersection is LinesIntersectionType.INTERSECTION:
        return _non_parallel_intersection(first_start, first_end, second_start, second_end, lines_intersection)
    if lines_intersection.intersection is LinesIntersectionType.SAME_LINE:
        return _parallel_intersection(first_start, first_end, second_start, second_end)
    return lines_intersection