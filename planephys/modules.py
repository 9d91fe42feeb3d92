"""Physics modules: the collidable parts attached to scene objects."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from planephys.border import Border
from planephys.physical_model import PhysicalModel2D, PhysicalModel2DImprint


def _vec(value) -> np.ndarray:
    vector = np.array(value, dtype=float).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got {value!r}")
    return vector


def _matrix(value) -> np.ndarray:
    matrix = np.array(value, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError("expected a 4x4 matrix")
    return matrix


def _transform_point(matrix: np.ndarray, point: np.ndarray) -> np.ndarray:
    return (matrix @ np.append(point, 1.0))[:3]


class PhysicsModule:
    """Base of all physics modules.

    A module is placed in the world by a transformation matrix (column-vector
    convention) and its rotation part, both given through ``set_transform``.
    """

    def __init__(self):
        self._can_collide = True
        self._matrix: np.ndarray | None = None
        self._rotation_matrix: np.ndarray | None = None
        self.on_collision_function: Callable[[PhysicsModule], None] | None = None

    @property
    def can_collide(self) -> bool:
        return self._can_collide

    @property
    def matrix(self) -> np.ndarray | None:
        return None if self._matrix is None else self._matrix.copy()

    @property
    def rotation_matrix(self) -> np.ndarray | None:
        return None if self._rotation_matrix is None else self._rotation_matrix.copy()

    def _can_collide_changed(self) -> None:
        pass

    def _on_transform_set(self) -> None:
        pass

    def set_transform(self, matrix, rotation_matrix=None) -> None:
        """Place the module with a full 4x4 matrix and its rotation part."""
        self._matrix = _matrix(matrix)
        self._rotation_matrix = np.eye(4) if rotation_matrix is None else _matrix(rotation_matrix)
        self._on_transform_set()

    def allow_collisions(self, value: bool) -> None:
        self._can_collide = bool(value)
        self._can_collide_changed()

    def on_collision(self, other: PhysicsModule) -> None:
        """Notify the module that it collided with ``other``."""
        if self.on_collision_function is not None:
            self.on_collision_function(other)

    def expand_border(self, border: Border) -> None:
        """Grow ``border`` to contain this module; the base module adds nothing."""

    def may_intersect_with_other(self, other: PhysicsModule) -> bool:
        return True

    def intersects_with_border(self, border: Border) -> bool:
        return True

    def update(self, dt: float) -> None:
        """Bring the module to its current transformation."""


class PhysicsModule2D(PhysicsModule):
    """A module backed by a polygonal model and a snapshot of its previous state."""

    def __init__(self):
        super().__init__()
        self._border = Border()
        self._physical_model: PhysicalModel2D | None = None
        self._physical_model_prev_state: PhysicalModel2DImprint | None = None

    def _create_physical_model(self) -> PhysicalModel2D:
        return PhysicalModel2D()

    @property
    def border(self) -> Border:
        return self._border

    @property
    def physical_model(self) -> PhysicalModel2D | None:
        return self._physical_model

    @property
    def physical_model_prev_state(self) -> PhysicalModel2DImprint | None:
        return self._physical_model_prev_state

    def _can_collide_changed(self) -> None:
        if not self.can_collide:
            return
        self.update(0.0)
        self.update_prev_state()

    def _on_transform_set(self) -> None:
        self.update_physical_model()

    def _require_model(self) -> tuple[PhysicalModel2D, PhysicalModel2DImprint]:
        if self._physical_model is None or self._physical_model_prev_state is None:
            raise RuntimeError("physical model has not been set up")
        return self._physical_model, self._physical_model_prev_state

    def setup_base_data(self, raw_coords, collision_permissions) -> None:
        """Build the physical model from raw coordinates and segment permissions."""
        model = self._create_physical_model()
        model.setup(raw_coords, collision_permissions)
        if self._matrix is not None:
            model.update(self._matrix)
        self._physical_model = model
        self._physical_model_prev_state = model.create_imprint()

    def move_raw(self, stride) -> None:
        if self._physical_model is None:
            raise RuntimeError("physical model has not been set up")
        self._physical_model.move_raw(stride)

    def update_prev_state(self) -> None:
        """Remember the model's current state as the previous one."""
        if not self.can_collide:
            return
        _, prev_state = self._require_model()
        prev_state.update_to_current_model_state()

    def update(self, dt: float) -> None:
        if not self.can_collide:
            return
        model, prev_state = self._require_model()
        if self._matrix is None:
            raise RuntimeError("module has no transformation")
        model.update(self._matrix)
        self._border = prev_state.border | model.border

    def update_physical_model(self) -> None:
        """Move the model and its previous state to the current transformation."""
        if self._physical_model is None or self._physical_model.polygons_count == 0:
            return
        if self._matrix is None:
            raise RuntimeError("module has no transformation")
        _, prev_state = self._require_model()
        self._physical_model.update(self._matrix)
        prev_state.update_to_current_model_state()
        self._border = prev_state.border | self._physical_model.border

    def expand_border(self, border: Border) -> None:
        border.expand_with(self._border)

    def may_intersect_with_other(self, other: PhysicsModule) -> bool:
        return other.intersects_with_border(self._border)

    def intersects_with_border(self, border: Border) -> bool:
        return self._border.intersects_with(border)


class PointModule(PhysicsModule):
    """A single collidable point."""

    def __init__(self):
        super().__init__()
        self._raw_point = np.zeros(3)
        self._current_point = np.zeros(3)

    @property
    def point(self) -> np.ndarray:
        return self._current_point.copy()

    def set_point(self, point) -> None:
        self._raw_point = _vec(point)
        if self._matrix is not None:
            self._current_point = _transform_point(self._matrix, self._raw_point)
        else:
            self._current_point = self._raw_point.copy()

    def may_intersect_with_other(self, other: PhysicsModule) -> bool:
        return True

    def intersects_with_border(self, border: Border) -> bool:
        return border.point_is_inside(self._current_point)

    def update(self, dt: float) -> None:
        if self._matrix is None:
            return
        self._current_point = _transform_point(self._matrix, self._raw_point)


class RayModule(PhysicsModule):
    """A half-infinite ray given by a start point and a direction."""

    def __init__(self):
        super().__init__()
        self._base_start = np.zeros(3)
        self._base_direction = np.zeros(3)
        self._current_start = np.zeros(3)
        self._current_direction = np.zeros(3)

    @property
    def base_start(self) -> np.ndarray:
        return self._base_start.copy()

    @base_start.setter
    def base_start(self, value) -> None:
        self._base_start = _vec(value)

    @property
    def base_direction(self) -> np.ndarray:
        return self._base_direction.copy()

    @base_direction.setter
    def base_direction(self, value) -> None:
        self._base_direction = _vec(value)

    @property
    def current_start(self) -> np.ndarray:
        return self._current_start.copy()

    @property
    def current_direction(self) -> np.ndarray:
        return self._current_direction.copy()

    def expand_border(self, border: Border) -> None:
        border.consider_point(self._current_start)

    def may_intersect_with_other(self, other: PhysicsModule) -> bool:
        return True

    def _slab(self, border: Border, axis: int) -> tuple[float, float]:
        direction = float(self._current_direction[axis])
        start = float(self._current_start[axis])
        low = float(border.offset[axis])
        high = low + float(border.size[axis])
        if direction != 0.0:
            t_low = (low - start) / direction
            t_high = (high - start) / direction
        else:
            t_low, t_high = -math.inf, math.inf
        return (t_high, t_low) if t_low > t_high else (t_low, t_high)

    def intersects_with_border(self, border: Border) -> bool:
        tmin, tmax = self._slab(border, 0)
        for axis in (1, 2):
            axis_min, axis_max = self._slab(border, axis)
            if tmin > axis_max or axis_min > tmax:
                return False
            tmin = max(tmin, axis_min)
            tmax = min(tmax, axis_max)
        return tmax >= 0.0

    def update(self, dt: float) -> None:
        if self._matrix is None or self._rotation_matrix is None:
            raise RuntimeError("module has no transformation")
        self._current_start = _transform_point(self._matrix, self._base_start)
        self._current_direction = _transform_point(self._rotation_matrix, self._base_direction)