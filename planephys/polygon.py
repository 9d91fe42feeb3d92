"""Triangles built from raw coordinates and transformed by 4x4 matrices."""

from __future__ import annotations

import numpy as np

_VERTEX_COUNT = 3
_COORDS_PER_POLYGON = 9


def _transform(matrix: np.ndarray, point: np.ndarray) -> np.ndarray:
    return (matrix @ np.append(point, 1.0))[:3]


def _matrix(value) -> np.ndarray:
    matrix = np.asarray(value, dtype=float)
    if matrix.shape != (4, 4):
        raise ValueError("expected a 4x4 matrix")
    return matrix


class Polygon:
    """A triangle whose raw coordinates may be shared with its owner.

    The raw coordinates are kept by reference when given as a float array, so
    changes made to that array are seen after ``calculate_center`` or an update.
    Points are transformed as column vectors: ``matrix @ (x, y, z, 1)``.
    """

    def __init__(self):
        self._raw_coords: np.ndarray | None = None
        self._segment_can_collide: tuple[bool, ...] | None = None
        self._points = [np.zeros(3) for _ in range(_VERTEX_COUNT)]
        self._center_raw = np.zeros(3)
        self._center = np.zeros(3)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(points={[p.tolist() for p in self._points]})"

    @property
    def raw_coords(self) -> np.ndarray | None:
        return self._raw_coords

    @property
    def center(self) -> np.ndarray:
        return self._center

    @property
    def center_raw(self) -> np.ndarray:
        return self._center_raw

    def setup(self, raw_coords, segment_can_collide) -> None:
        """Attach nine raw coordinates and three segment collision flags."""
        if raw_coords is None or segment_can_collide is None:
            raise ValueError("raw coordinates and collision flags are required")
        coords = np.asarray(raw_coords, dtype=float).reshape(-1)
        if coords.size < _COORDS_PER_POLYGON:
            raise ValueError("a polygon needs nine raw coordinates")
        flags = tuple(bool(flag) for flag in segment_can_collide)
        if len(flags) < _VERTEX_COUNT:
            raise ValueError("a polygon needs three segment collision flags")
        self._raw_coords = coords[:_COORDS_PER_POLYGON]
        self._segment_can_collide = flags[:_VERTEX_COUNT]
        self.calculate_center()

    def copy_from(self, other: Polygon) -> None:
        """Take over the other polygon's data and current state."""
        self._raw_coords = other._raw_coords
        self._segment_can_collide = other._segment_can_collide
        self._points = [point.copy() for point in other._points]
        self._center_raw = other._center_raw.copy()
        self._center = other._center.copy()

    def _require_setup(self) -> np.ndarray:
        if self._raw_coords is None:
            raise RuntimeError("polygon has not been set up")
        return self._raw_coords

    def calculate_center(self) -> None:
        """Recompute the centre of the raw coordinates."""
        self._center_raw = self._require_setup().reshape(_VERTEX_COUNT, 3).mean(axis=0)

    def update_points(self, translation, rotation, scale) -> None:
        self._require_setup()
        self.update_points_with_single_matrix(_matrix(translation) @ _matrix(rotation) @ _matrix(scale))

    def update_points_with_single_matrix(self, matrix) -> None:
        raw = self._require_setup().reshape(_VERTEX_COUNT, 3)
        matrix = _matrix(matrix)
        self._points = [_transform(matrix, vertex) for vertex in raw]
        self._center = _transform(matrix, self._center_raw)

    def __getitem__(self, index: int) -> np.ndarray:
        """Return a transformed vertex; indices past the last one wrap to the first."""
        return self._points[index] if index in (0, 1, 2) else self._points[0]

    def __setitem__(self, index: int, value) -> None:
        self._points[index if index in (0, 1, 2) else 0] = np.array(value, dtype=float).reshape(3)

    def segment_can_collide(self, index: int) -> bool:
        if not 0 <= index < _VERTEX_COUNT:
            raise IndexError(f"segment index {index} out of range")
        if self._segment_can_collide is None:
            raise RuntimeError("polygon has not been set up")
        return self._segment_can_collide[index]


class RigidBodyPolygon(Polygon):
    """A polygon that carries a mass."""

    def __init__(self):
        super().__init__()
        self.mass = 0.0

    def copy_from(self, other: Polygon) -> None:
        if not isinstance(other, RigidBodyPolygon):
            raise TypeError("can only copy from another RigidBodyPolygon")
        super().copy_from(other)
        self.mass = other.mass