"""Narrow-phase collision detection: exact tests on the broad phase's candidate pairs."""

from __future__ import annotations

import abc
from typing import Iterable, NamedTuple

from planephys.broad_phase import CollidingPair
from planephys.intersection import IntersectionData, IntersectionType
from planephys.lines import DEFAULT_TOLERANCE
from planephys.modules import PhysicsModule, PhysicsModule2D, PointModule, RayModule
from planephys.physical_model import PhysicalModel2D
from planephys.primitives import point_is_inside_polygon, ray_intersects_polygon


class NarrowPhase(abc.ABC):
    """Base of narrow-phase algorithms; keeps the collisions found by the last update."""

    def __init__(self):
        self._collisions: list[IntersectionData] = []

    @property
    def collisions(self) -> tuple[IntersectionData, ...]:
        return tuple(self._collisions)

    @abc.abstractmethod
    def update(self, possible_collisions: Iterable[CollidingPair]) -> None:
        """Replace the stored collisions with those found among ``possible_collisions``."""


def _model_of(module: PhysicsModule2D) -> PhysicalModel2D:
    model = module.physical_model
    if model is None:
        raise RuntimeError("physical model has not been set up")
    return model


class _ModelAndPoint(NamedTuple):
    model: PhysicsModule2D
    point: PointModule


class _ModelAndRay(NamedTuple):
    model: PhysicsModule2D
    ray: RayModule


def _split_pair(pair: CollidingPair, other_type: type):
    """Return (model, other) when one side is a 2D model and the other of ``other_type``."""
    if isinstance(pair.first, PhysicsModule2D):
        model, other = pair.first, pair.second
    else:
        model, other = pair.second, pair.first
    if not isinstance(model, PhysicsModule2D) or not isinstance(other, other_type):
        return None
    return model, other


class ModelVsPointNarrowPhase(NarrowPhase):
    """Detects points lying inside polygonal models."""

    @staticmethod
    def _check(modules: _ModelAndPoint) -> IntersectionData:
        point = modules.point.point
        for index, polygon in enumerate(_model_of(modules.model).polygons):
            if not point_is_inside_polygon(point, polygon):
                continue
            return IntersectionData(
                type=IntersectionType.INTERSECTION,
                point=point,
                first=modules.model,
                second=modules.point,
                first_collided_polygon_index=index,
            )
        return IntersectionData()

    def update(self, possible_collisions: Iterable[CollidingPair]) -> None:
        self._collisions.clear()
        for pair in possible_collisions:
            split = _split_pair(pair, PointModule)
            if split is None:
                continue
            result = self._check(_ModelAndPoint(*split))
            if result:
                self._collisions.append(result)


class ModelVsRayNarrowPhase(NarrowPhase):
    """Detects rays hitting polygonal models."""

    def __init__(self, tolerance=DEFAULT_TOLERANCE):
        super().__init__()
        self.tolerance = tolerance

    def _check(self, modules: _ModelAndRay) -> IntersectionData:
        start = modules.ray.current_start
        direction = modules.ray.current_direction
        for index, polygon in enumerate(_model_of(modules.model).polygons):
            hit = ray_intersects_polygon(start, direction, polygon, self.tolerance)
            if not hit:
                continue
            return IntersectionData(
                type=IntersectionType.INTERSECTION,
                point=hit.point,
                first=modules.model,
                second=modules.ray,
                first_collided_polygon_index=index,
            )
        return IntersectionData()

    def update(self, possible_collisions: Iterable[CollidingPair]) -> None:
        self._collisions.clear()
        for pair in possible_collisions:
            split = _split_pair(pair, RayModule)
            if split is None:
                continue
            result = self._check(_ModelAndRay(*split))
            if result:
                self._collisions.append(result)