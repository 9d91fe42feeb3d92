"""Infinite lines in 3D space and their intersections."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

DEFAULT_TOLERANCE = 0.0001
_SOLVABILITY_TOLERANCE = 0.000000001
_PARALLEL_TOLERANCE = 0.0000001


def _vec(value) -> np.ndarray:
    vector = np.array(value, dtype=float).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got {value!r}")
    return vector


def floats_are_equal(first, second, tolerance=DEFAULT_TOLERANCE) -> bool:
    """Return True if the two values differ by less than ``tolerance``."""
    return abs(first - second) < tolerance


def normalized(vector) -> np.ndarray:
    """Return ``vector`` scaled to unit length; a zero vector stays zero."""
    vector = _vec(vector)
    length = float(np.linalg.norm(vector))
    if length == 0.0:
        return vector
    return vector / length


class LinesIntersectionType(enum.Enum):
    NONE = 0
    INTERSECTION = 1
    SAME_LINE = 2


@dataclass(eq=False)
class LinesIntersection:
    """Result of intersecting two lines or segments."""

    intersection: LinesIntersectionType = LinesIntersectionType.NONE
    point: np.ndarray | None = None

    def __bool__(self) -> bool:
        return self.intersection is not LinesIntersectionType.NONE


class Line:
    """A line through two points, parametrised as ``offset + t * direction``."""

    def __init__(self, point_1, point_2):
        start = _vec(point_1)
        self.direction = _vec(point_2) - start
        self.initial_offset = start

    def __repr__(self) -> str:
        return f"Line(offset={self.initial_offset.tolist()}, direction={self.direction.tolist()})"

    def _multiplier_by_component(self, component: int, value: float) -> float:
        if not self.can_be_solved_by_component(component):
            raise ValueError(f"line cannot be solved by component {component}")
        return (value - self.initial_offset[component]) / self.direction[component]

    def _easy_solution_component(self, other: Line) -> int | None:
        for component in range(3):
            if self.can_be_solved_by_component(component) and not other.can_be_solved_by_component(component):
                return component
        return None

    def _matches_with(self, other: Line) -> bool:
        own = np.abs(normalized(self.direction))
        others = np.abs(normalized(other.direction))
        if not all(floats_are_equal(a, b) for a, b in zip(own, others)):
            return False
        return self.contains_point(other.initial_offset)

    def contains_point(self, point, tolerance=DEFAULT_TOLERANCE) -> bool:
        """Return True if ``point`` lies on the line within ``tolerance``."""
        point = _vec(point)
        common_multiplier = None
        for component in range(3):
            if not self.can_be_solved_by_component(component):
                if not floats_are_equal(self.initial_offset[component], point[component], tolerance):
                    return False
                continue
            multiplier = self._multiplier_by_component(component, point[component])
            if common_multiplier is not None and not floats_are_equal(common_multiplier, multiplier, tolerance):
                return False
            common_multiplier = multiplier
        return True

    def can_be_solved_by_component(self, component) -> bool:
        """Return True if the line's direction is non-zero along ``component``."""
        if not 0 <= component < 3:
            raise IndexError(f"component index {component} out of range")
        return not floats_are_equal(self.direction[component], 0.0, _SOLVABILITY_TOLERANCE)

    def solve_by_component(self, component, value) -> np.ndarray:
        """Return the point of the line whose ``component`` equals ``value``."""
        return self.solve_by_multiplier(self._multiplier_by_component(component, value))

    def solve_by_multiplier(self, multiplier) -> np.ndarray:
        """Return ``offset + multiplier * direction``."""
        return self.direction * multiplier + self.initial_offset

    def calculate_intersection_with(self, other, tolerance=DEFAULT_TOLERANCE) -> LinesIntersection:
        """Intersect this line with ``other``."""
        component = self._easy_solution_component(other)
        if component is not None:
            multiplier = (other.initial_offset[component] - self.initial_offset[component]) / self.direction[component]
            candidate = self.solve_by_multiplier(multiplier)
            if other.contains_point(candidate, tolerance):
                return LinesIntersection(LinesIntersectionType.INTERSECTION, candidate)
            return LinesIntersection()

        component = other._easy_solution_component(self)
        if component is not None:
            multiplier = (self.initial_offset[component] - other.initial_offset[component]) / other.direction[component]
            candidate = other.solve_by_multiplier(multiplier)
            if self.contains_point(candidate, tolerance):
                return LinesIntersection(LinesIntersectionType.INTERSECTION, candidate)
            return LinesIntersection()

        first_component = next((i for i in range(3) if self.can_be_solved_by_component(i)), None)
        if first_component is None:
            return LinesIntersection()

        comp_mult = other.direction[first_component] / self.direction[first_component]
        comp_offs = (other.initial_offset[first_component] - self.initial_offset[first_component]) / self.direction[
            first_component
        ]

        for i in (c for c in range(3) if c != first_component):
            comp_mult *= self.direction[i]
            comp_offs = comp_offs * self.direction[i] + self.initial_offset[i]
            comp_mult -= other.direction[i]
            comp_offs = other.initial_offset[i] - comp_offs
            if not floats_are_equal(comp_mult, 0.0):
                break

        if floats_are_equal(comp_mult, 0.0, _PARALLEL_TOLERANCE):
            if self._matches_with(other):
                return LinesIntersection(LinesIntersectionType.SAME_LINE, self.initial_offset.copy())
            return LinesIntersection()

        point = other.solve_by_multiplier(comp_offs / comp_mult)
        return LinesIntersection(LinesIntersectionType.INTERSECTION, point)