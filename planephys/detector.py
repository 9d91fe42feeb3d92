"""Collision detection combining a broad phase and a narrow phase."""

from __future__ import annotations

from typing import Iterable

from planephys.broad_phase import BroadPhase
from planephys.intersection import IntersectionData
from planephys.modules import PhysicsModule
from planephys.narrow_phase import NarrowPhase


class CollisionDetector:
    """Holds registered modules and finds collisions between them."""

    def __init__(self, broad_phase: BroadPhase | None = None, narrow_phase: NarrowPhase | None = None):
        self.broad_phase = broad_phase
        self.narrow_phase = narrow_phase
        self._registered: list[PhysicsModule] = []

    @property
    def registered_modules(self) -> tuple[PhysicsModule, ...]:
        return tuple(self._registered)

    def register_module(self, module: PhysicsModule) -> None:
        if any(existing is module for existing in self._registered):
            raise ValueError("module is already registered")
        self._registered.append(module)

    def unregister_module(self, module: PhysicsModule) -> None:
        for index, existing in enumerate(self._registered):
            if existing is module:
                del self._registered[index]
                return
        raise ValueError("module is not registered")

    def unregister_all_modules(self) -> None:
        self._registered.clear()

    def _phases(self) -> tuple[BroadPhase, NarrowPhase]:
        if self.broad_phase is None or self.narrow_phase is None:
            raise RuntimeError("both a broad phase and a narrow phase must be set")
        return self.broad_phase, self.narrow_phase

    def _run(self, *groups: Iterable[PhysicsModule]) -> None:
        broad, narrow = self._phases()
        broad.reset()
        for group in groups:
            broad.add_models(group)
        broad.process()
        narrow.update(broad.possible_collisions)

    def update(self) -> None:
        """Detect collisions among the registered modules."""
        self._run(self._registered)

    def update_with_external_models(self, external_models: Iterable[PhysicsModule]) -> None:
        """Detect collisions among ``external_models`` and the registered modules."""
        self._run(list(external_models), self._registered)

    @property
    def found_collisions(self) -> tuple[IntersectionData, ...]:
        _, narrow = self._phases()
        return narrow.collisions