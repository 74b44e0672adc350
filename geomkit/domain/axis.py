"""Infinite lines used for snapping."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .bounding_box import BoundingBox
from .geometry import ClosestPointResult, Geometry
from .matrix import AffineMatrix
from .vec import Vec

# Horizontal, vertical and both diagonals
DEFAULT_DIRECTIONS = (
    Vec(1, 0),
    Vec(0, 1),
    Vec(1, 1).normalize(),
    Vec(1, -1).normalize(),
)


class Axis(Geometry):
    """Line through ``origin`` along ``direction``.

    ``direction`` need not be unit length. An axis has no bounding box.
    """

    def __init__(self, origin: Optional[Vec] = None, direction: Optional[Vec] = None):
        self.origin = origin if origin is not None else Vec(0, 0)
        self.direction = direction if direction is not None else Vec(1, 0)

    def __repr__(self) -> str:
        return f"Axis(origin={self.origin!r}, direction={self.direction!r})"

    def clone(self) -> Axis:
        return Axis(self.origin.clone(), self.direction.clone())

    def is_valid(self) -> bool:
        return (isinstance(self.origin, Vec) and self.origin.is_valid() and
                isinstance(self.direction, Vec) and self.direction.is_valid())

    def affine_transform(self, matrix: AffineMatrix) -> Axis:
        self.origin.affine_transform(matrix)
        self.direction.affine_transform_without_translation(matrix)
        return self

    def affine_transform_without_translation(self, matrix: AffineMatrix) -> Axis:
        self.direction.affine_transform_without_translation(matrix)
        return self

    def all_intersectables(self) -> List[Geometry]:
        return [self]

    def _second_point(self) -> Vec:
        return self.origin + self.direction

    def closest_point_within_distance_to_point(self, max_distance: float, point: Vec) -> ClosestPointResult:
        position = point.clone().project_to_line(self.origin, self._second_point())
        distance = point.distance(position)
        if distance <= max_distance:
            return ClosestPointResult(distance=distance, position=position)
        return ClosestPointResult()

    def is_intersected_by_bounding_box(self, box: BoundingBox) -> bool:
        """True when the line passes within half the box diagonal of its centre."""
        center = box.center
        projected = center.clone().project_to_line(self.origin, self._second_point())
        return projected.distance(center) <= box.max.distance(box.min) / 2

    def is_overlapped_by_bounding_box(self, box: BoundingBox) -> bool:
        return self.is_intersected_by_bounding_box(box)

    @staticmethod
    def from_origin_and_closest_direction_to_point(origin: Vec, point: Vec,
                                                   directions: Sequence[Vec] = DEFAULT_DIRECTIONS) -> Axis:
        """Axis through ``origin`` along the candidate direction that best points at ``point``.

        The winning direction is scaled by the projection of ``point - origin``
        onto it, so the axis' second point is the projection of ``point``.
        """
        offset = point - origin
        best = directions[0]
        best_magnitude = -math.inf
        best_dot = 0.0
        for direction in directions:
            d = direction.dot(offset)
            if abs(d) > best_magnitude:
                best = direction
                best_magnitude = abs(d)
                best_dot = d
        return Axis(origin.clone(), best * best_dot)
