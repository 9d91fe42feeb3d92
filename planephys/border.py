"""Axis-aligned bounding boxes."""

from __future__ import annotations

import numpy as np

from planephys.lines import floats_are_equal

_INSIDE_TOLERANCE = 0.0001


def _vec(value) -> np.ndarray:
    vector = np.array(value, dtype=float).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got {value!r}")
    return vector


class Border:
    """An axis-aligned box given by its lowest corner and its size.

    A border is valid only while every component of its size is non-negative.
    """

    def __init__(self, offset=None, size=None):
        self._offset = np.zeros(3) if offset is None else _vec(offset)
        self._size = np.full(3, -1.0)
        self._valid = False
        if size is not None:
            self.size = size

    def __repr__(self) -> str:
        return f"Border(offset={self._offset.tolist()}, size={self._size.tolist()}, valid={self._valid})"

    @property
    def offset(self) -> np.ndarray:
        return self._offset.copy()

    @offset.setter
    def offset(self, value) -> None:
        self._offset = _vec(value)

    @property
    def size(self) -> np.ndarray:
        return self._size.copy()

    @size.setter
    def size(self, value) -> None:
        self._size = _vec(value)
        self._update_validness()

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def left(self) -> float:
        return float(self._offset[0])

    @property
    def right(self) -> float:
        return float(self._offset[0] + self._size[0])

    @property
    def bottom(self) -> float:
        return float(self._offset[1])

    @property
    def top(self) -> float:
        return float(self._offset[1] + self._size[1])

    @property
    def back(self) -> float:
        return float(self._offset[2])

    @property
    def front(self) -> float:
        return float(self._offset[2] + self._size[2])

    def _update_validness(self) -> None:
        self._valid = bool(np.all(self._size >= 0.0))

    def reset(self) -> None:
        """Make the border invalid."""
        self._size = np.full(3, -1.0)
        self._valid = False

    def copy(self) -> Border:
        result = Border()
        result._offset = self._offset.copy()
        result._size = self._size.copy()
        result._valid = self._valid
        return result

    def modify_offset(self, by) -> None:
        self._offset = self._offset + _vec(by)

    def modify_size(self, by) -> None:
        """Add ``by`` to the size without re-evaluating validity."""
        self._size = self._size + _vec(by)

    def consider_point(self, point) -> Border:
        """Grow the border to contain ``point``; return self."""
        point = _vec(point)
        if not self._valid:
            self._offset = point
            self._size = np.zeros(3)
            self._valid = True
            return self

        below = point < self._offset
        above = ~below & (point > self._offset + self._size)
        self._size = np.where(below, self._size + self._offset - point, np.where(above, point - self._offset, self._size))
        self._offset = np.where(below, point, self._offset)
        self._update_validness()
        return self

    def expand_with(self, other: Border) -> Border:
        """Grow the border to contain ``other``; return self."""
        if not other._valid:
            return self
        if not self._valid:
            self._offset = other._offset.copy()
            self._size = other._size.copy()
            self._update_validness()
            return self
        self.consider_point(other._offset)
        self.consider_point(other._offset + other._size)
        return self

    def point_is_inside(self, point) -> bool:
        point = _vec(point)
        lower = self._offset - _INSIDE_TOLERANCE
        upper = self._offset + self._size + _INSIDE_TOLERANCE
        return bool(np.all(point >= lower) and np.all(point <= upper))

    def _overlap(self, other: Border) -> tuple[np.ndarray, np.ndarray]:
        lower = np.maximum(self._offset, other._offset)
        upper = np.minimum(self._offset + self._size, other._offset + other._size)
        return lower, upper - lower

    def intersects_with(self, other: Border) -> bool:
        if not self._valid or not other._valid:
            return False
        _, size = self._overlap(other)
        return bool(np.all(size >= 0.0))

    def __and__(self, other: Border) -> Border:
        if not isinstance(other, Border):
            return NotImplemented
        if not self._valid or not other._valid:
            return Border()
        offset, size = self._overlap(other)
        if np.any(size < 0.0):
            return Border()
        return Border(offset, size)

    def __or__(self, other: Border) -> Border:
        if not isinstance(other, Border):
            return NotImplemented
        if not self._valid:
            return other.copy()
        if not other._valid:
            return self.copy()
        result = self.copy()
        result.consider_point(other._offset)
        result.consider_point(other._offset + other._size)
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, Border):
            return NotImplemented
        pairs = zip(np.concatenate((self._offset, self._size)), np.concatenate((other._offset, other._size)))
        return all(floats_are_equal(a, b) for a, b in pairs)

    __hash__ = None

    def __bool__(self) -> bool:
        return self._valid