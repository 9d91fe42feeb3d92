"""Polygonal physical models and their frozen snapshots ("imprints")."""

from __future__ import annotations

import numpy as np

from planephys.border import Border
from planephys.polygon import Polygon, RigidBodyPolygon

_COORDS_PER_POLYGON = 9
_COORDS_PER_VERTEX = 3
_VERTICES_PER_POLYGON = 3
_ONE_THIRD = 0.3333333


def _matrix(value) -> np.ndarray:
    matrix = np.asarray(value, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError("expected a 4x4 matrix")
    return matrix


def _border_of(polygons) -> Border:
    border = Border()
    for polygon in polygons:
        for vertex in range(_VERTICES_PER_POLYGON):
            border.consider_point(polygon[vertex])
    return border


def _checked_index(index: int, count: int) -> int:
    if not 0 <= index < count:
        raise IndexError(f"polygon index {index} out of range")
    return index


class PhysicalModel2D:
    """A set of triangles built from a flat list of raw coordinates.

    Every nine coordinates form one triangle; every coordinate triple has one
    collision permission for the segment starting at that vertex.
    """

    def __init__(self):
        self._raw_coords = np.zeros(0)
        self._collision_permissions: tuple[bool, ...] = ()
        self._polygons: list[Polygon] = []
        self._center_of_mass = np.zeros(3)
        self._border = Border()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(polygons={len(self._polygons)})"

    def _create_polygon(self) -> Polygon:
        return Polygon()

    def _calculate_center_of_mass(self) -> np.ndarray:
        total = sum((polygon.center for polygon in self._polygons), np.zeros(3))
        with np.errstate(divide="ignore", invalid="ignore"):
            return total / np.float64(len(self._polygons))

    @property
    def border(self) -> Border:
        return self._border

    @property
    def raw_coords(self) -> np.ndarray:
        return self._raw_coords

    @property
    def raw_coords_count(self) -> int:
        return int(self._raw_coords.size)

    @property
    def polygons(self) -> tuple[Polygon, ...]:
        return tuple(self._polygons)

    @property
    def polygons_count(self) -> int:
        return len(self._polygons)

    @property
    def center_of_mass(self) -> np.ndarray:
        return self._center_of_mass.copy()

    def setup(self, raw_coords, collision_permissions) -> None:
        """Build the triangles from raw coordinates and segment permissions."""
        coords = np.array(raw_coords, dtype=float).reshape(-1)
        permissions = tuple(bool(flag) for flag in collision_permissions)
        needed = coords.size // _COORDS_PER_VERTEX
        if len(permissions) < needed:
            raise ValueError(f"expected at least {needed} collision permissions, got {len(permissions)}")

        self._raw_coords = coords
        self._collision_permissions = permissions[:needed]

        self._polygons = []
        for i in range(coords.size // _COORDS_PER_POLYGON):
            polygon = self._create_polygon()
            polygon.setup(
                self._raw_coords[i * _COORDS_PER_POLYGON:(i + 1) * _COORDS_PER_POLYGON],
                self._collision_permissions[i * _VERTICES_PER_POLYGON:(i + 1) * _VERTICES_PER_POLYGON],
            )
            self._polygons.append(polygon)

    def move_raw(self, stride) -> None:
        """Shift every raw vertex by ``stride`` and recompute the raw centres."""
        stride = np.asarray(stride, dtype=float).reshape(3)
        usable = self._raw_coords.size - self._raw_coords.size % _COORDS_PER_VERTEX
        self._raw_coords[:usable].reshape(-1, _COORDS_PER_VERTEX)[:] += stride
        for polygon in self._polygons:
            polygon.calculate_center()

    def update(self, matrix) -> None:
        """Transform all triangles by ``matrix`` and refresh border and centre of mass."""
        matrix = _matrix(matrix)
        for polygon in self._polygons:
            polygon.update_points_with_single_matrix(matrix)
        self._border = _border_of(self._polygons)
        self._center_of_mass = self._calculate_center_of_mass()

    def copy_real_coordinates(self, other: PhysicalModel2D) -> None:
        """Take over the transformed vertices and border of ``other``."""
        for own, others in zip(self._polygons, other._polygons):
            for vertex in range(_VERTICES_PER_POLYGON):
                own[vertex] = others[vertex].copy()
        self._border = other._border.copy()

    def create_imprint(self) -> PhysicalModel2DImprint:
        return PhysicalModel2DImprint(self)

    def get_polygon(self, index: int) -> Polygon:
        return self._polygons[_checked_index(index, len(self._polygons))]


class PhysicalModel2DImprint:
    """A snapshot of a model's triangles that can be transformed on its own."""

    def __init__(self, parent: PhysicalModel2D):
        self._parent = parent
        self._polygons: list[Polygon] = []
        for source in parent.polygons:
            polygon = parent._create_polygon()
            polygon.copy_from(source)
            self._polygons.append(polygon)
        self._border = parent.border.copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(polygons={len(self._polygons)})"

    @property
    def parent(self) -> PhysicalModel2D:
        return self._parent

    @property
    def polygons(self) -> tuple[Polygon, ...]:
        return tuple(self._polygons)

    @property
    def polygons_count(self) -> int:
        return len(self._polygons)

    @property
    def border(self) -> Border:
        return self._border

    def copy(self) -> PhysicalModel2DImprint:
        """Return an independent imprint with the same parent and state."""
        result = PhysicalModel2DImprint.__new__(PhysicalModel2DImprint)
        result._parent = self._parent
        result._polygons = []
        for source in self._polygons:
            polygon = type(source)()
            polygon.copy_from(source)
            result._polygons.append(polygon)
        result._border = self._border.copy()
        return result

    def update(self, translation, rotation, scale) -> None:
        self.update_with_single_matrix(_matrix(translation) @ _matrix(rotation) @ _matrix(scale))

    def update_with_single_matrix(self, matrix) -> None:
        matrix = _matrix(matrix)
        for polygon in self._polygons:
            polygon.update_points_with_single_matrix(matrix)
        self._border = _border_of(self._polygons)

    def update_to_current_model_state(self) -> None:
        """Copy the parent's current triangles and border."""
        for polygon, source in zip(self._polygons, self._parent.polygons):
            polygon.copy_from(source)
        self._border = self._parent.border.copy()

    def get_polygon(self, index: int) -> Polygon:
        return self._polygons[_checked_index(index, len(self._polygons))]


class RigidBodyPhysicalModel2D(PhysicalModel2D):
    """A physical model whose triangles carry masses."""

    def __init__(self):
        super().__init__()
        self._masses: list[float] = []
        self._total_mass = 0.0
        self._moment_of_inertia = 0.0

    def _create_polygon(self) -> Polygon:
        return RigidBodyPolygon()

    @property
    def masses(self) -> tuple[float, ...]:
        return tuple(self._masses)

    @property
    def total_mass(self) -> float:
        return self._total_mass

    @property
    def moment_of_inertia(self) -> float:
        return self._moment_of_inertia

    def _calculate_center_of_mass(self) -> np.ndarray:
        weighted = sum((polygon.center * polygon.mass for polygon in self._polygons), np.zeros(3))
        with np.errstate(divide="ignore", invalid="ignore"):
            return weighted / np.float64(self._total_mass)

    def _calculate_moment_of_inertia(self) -> float:
        result = 0.0
        for polygon in self._polygons:
            point_mass = polygon.mass * _ONE_THIRD
            for vertex in range(_VERTICES_PER_POLYGON):
                if not polygon.segment_can_collide(vertex):
                    continue
                center_to_point = self._center_of_mass - polygon[vertex]
                result += float(np.dot(center_to_point, center_to_point)) * point_mass
        return result

    def update(self, matrix) -> None:
        super().update(matrix)
        self._moment_of_inertia = self._calculate_moment_of_inertia()

    def set_masses(self, masses) -> None:
        """Assign one mass per triangle."""
        values = [float(mass) for mass in masses]
        if len(values) < len(self._polygons):
            raise ValueError(f"expected {len(self._polygons)} masses, got {len(values)}")
        self._masses = values[:len(self._polygons)]
        self._total_mass = 0.0
        for polygon, mass in zip(self._polygons, self._masses):
            self._total_mass += mass
            polygon.mass = mass