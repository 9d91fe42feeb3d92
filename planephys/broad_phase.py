"""Broad-phase collision detection: finding pairs of modules that may collide."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Callable, Iterable, NamedTuple

import numpy as np

from planephys.border import Border
from planephys.modules import PhysicsModule

FilterFunction = Callable[[PhysicsModule, PhysicsModule], bool]


@dataclass(eq=False)
class CollidingPair:
    """Two distinct modules that may collide; the order does not matter."""

    first: PhysicsModule
    second: PhysicsModule

    def __post_init__(self) -> None:
        if self.first is self.second:
            raise ValueError("a module cannot collide with itself")

    def __eq__(self, other) -> bool:
        if not isinstance(other, CollidingPair):
            return NotImplemented
        return (self.first is other.first and self.second is other.second) or (
            self.first is other.second and self.second is other.first
        )

    def __hash__(self) -> int:
        return hash(frozenset((id(self.first), id(self.second))))


class BroadPhase(abc.ABC):
    """Base of broad-phase algorithms, with pair filters and the found pairs."""

    def __init__(self):
        self._possible_collisions: list[CollidingPair] = []
        self._filters: list[FilterFunction] = []

    @property
    def possible_collisions(self) -> tuple[CollidingPair, ...]:
        return tuple(self._possible_collisions)

    def reset_filters(self) -> None:
        self._filters.clear()

    def add_filter(self, filter_func: FilterFunction) -> None:
        """Add a predicate that every reported pair must satisfy."""
        self._filters.append(filter_func)

    def passes_filters(self, first: PhysicsModule, second: PhysicsModule) -> bool:
        return all(filter_func(first, second) for filter_func in self._filters)

    @abc.abstractmethod
    def reset(self) -> None:
        """Forget the registered modules and the pairs found."""

    @abc.abstractmethod
    def add_models(self, objects: Iterable[PhysicsModule]) -> None:
        """Register modules for the next ``process``."""

    @abc.abstractmethod
    def process(self) -> None:
        """Find the possible collisions among the registered modules."""


class _Entry(NamedTuple):
    module: PhysicsModule
    id: int


class BinarySpacePartitioner(BroadPhase):
    """Recursively halves the space along its longest axis to find candidate pairs.

    ``precision`` bounds how many times in a row a split may leave the same
    modules in an area before the area's pairs are reported.
    """

    def __init__(self, precision=3, ignore_collision_restriction=False):
        super().__init__()
        self.precision = precision
        self.ignore_collision_restriction = ignore_collision_restriction
        self._registered: list[_Entry] = []
        self._checked: set[tuple[int, int]] = set()

    def _participates(self, module: PhysicsModule) -> bool:
        return module.can_collide or self.ignore_collision_restriction

    def _calculate_border(self, entries: list[_Entry]) -> Border:
        result = Border()
        for entry in entries:
            if self._participates(entry.module):
                entry.module.expand_border(result)
        return result

    def _objects_inside_area(self, border: Border, entries: list[_Entry]) -> list[_Entry]:
        return [
            entry
            for entry in entries
            if self._participates(entry.module) and entry.module.intersects_with_border(border)
        ]

    @staticmethod
    def _border_modifier(border: Border) -> np.ndarray:
        half = border.size * 0.5
        x, y, z = half
        if x > y:
            return np.array([x, 0.0, 0.0]) if x > z else np.array([0.0, 0.0, z])
        return np.array([0.0, y, 0.0]) if y > z else np.array([0.0, 0.0, z])

    @staticmethod
    def _same_objects(first: list[_Entry], second: list[_Entry]) -> bool:
        return [entry.id for entry in first] == [entry.id for entry in second]

    def _save_possible_collisions(self, entries: list[_Entry]) -> None:
        for i, first in enumerate(entries):
            for second in entries[i + 1:]:
                key = (min(first.id, second.id), max(first.id, second.id))
                if key in self._checked:
                    continue
                self._checked.add(key)

                if not (
                    first.module.may_intersect_with_other(second.module)
                    and second.module.may_intersect_with_other(first.module)
                ):
                    continue
                if not self.passes_filters(first.module, second.module):
                    continue
                self._possible_collisions.append(CollidingPair(first.module, second.module))

    def _find_in_area(self, border: Border, entries: list[_Entry], repetition: int) -> None:
        if repetition == self.precision or len(entries) <= 2:
            self._save_possible_collisions(entries)
            return

        modifier = self._border_modifier(border)
        border_1 = border.copy()
        border_2 = border.copy()
        border_1.modify_size(-modifier)
        border_2.modify_size(-modifier)
        border_2.modify_offset(modifier)

        inside_1 = self._objects_inside_area(border_1, entries)
        inside_2 = self._objects_inside_area(border_2, entries)

        if not self._same_objects(inside_1, inside_2):
            self._find_in_area(border_1, inside_1, repetition + 1)
            self._find_in_area(border_2, inside_2, repetition + 1)
        elif self._same_objects(entries, inside_1):
            self._find_in_area(border_1, inside_1, repetition + 1)
        else:
            self._find_in_area(border_1, inside_1, 0)

    def reset(self) -> None:
        self._registered.clear()
        self._possible_collisions.clear()

    def add_models(self, objects: Iterable[PhysicsModule]) -> None:
        for module in objects:
            self._registered.append(_Entry(module, len(self._registered)))

    def process(self) -> None:
        if len(self._registered) < 2:
            return
        self._checked = set()
        initial_border = self._calculate_border(self._registered)
        inside = self._objects_inside_area(initial_border, self._registered)
        self._find_in_area(initial_border, inside, 0)
        self._checked = set()