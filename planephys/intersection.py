"""Description of a detected collision between two physics modules."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

import numpy as np


class IntersectionType(enum.Enum):
    NONE = 0
    INTERSECTION = 1
    SAME_LINE = 2


@dataclass(eq=False)
class IntersectionData:
    """Where and how two modules collided.

    ``first`` and ``second`` refer to the colliding modules; the polygon
    indices name the triangles of each that collided.
    """

    type: IntersectionType = IntersectionType.NONE
    point: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    depth: float = 0.0
    first: Any = None
    second: Any = None
    first_collided_polygon_index: int = 0
    second_collided_polygon_index: int = 0
    time_of_intersection_ratio: float = 1.0

    def __bool__(self) -> bool:
        return self.type is not IntersectionType.NONE

    def copy(self) -> IntersectionData:
        """Return a copy with its own vectors; the modules are shared."""
        return IntersectionData(
            type=self.type,
            point=np.array(self.point, dtype=float),
            normal=np.array(self.normal, dtype=float),
            depth=self.depth,
            first=self.first,
            second=self.second,
            first_collided_polygon_index=self.first_collided_polygon_index,
            second_collided_polygon_index=self.second_collided_polygon_index,
            time_of_intersection_ratio=self.time_of_intersection_ratio,
        )