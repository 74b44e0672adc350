"""Path vertex with relative bezier handles."""

from __future__ import annotations

from typing import List, Optional

from ..constants import DEFAULT_TOLERANCE
from .bounding_box import BoundingBox
from .geometry import ClosestPointResult, Geometry
from .matrix import AffineMatrix
from .vec import Vec


class Anchor(Geometry):
    """A vertex of a path.

    ``handle_in`` and ``handle_out`` are offsets from ``position``, not
    absolute points. A zero handle means the adjoining segment has no
    curvature on that side.
    """

    def __init__(self, position: Optional[Vec] = None, handle_in: Optional[Vec] = None,
                 handle_out: Optional[Vec] = None):
        self.position = position if position is not None else Vec(0, 0)
        self.handle_in = handle_in if handle_in is not None else Vec(0, 0)
        self.handle_out = handle_out if handle_out is not None else Vec(0, 0)

    def __repr__(self) -> str:
        return f"Anchor(position={self.position!r}, handle_in={self.handle_in!r}, handle_out={self.handle_out!r})"

    def clone(self) -> Anchor:
        return Anchor(self.position.clone(), self.handle_in.clone(), self.handle_out.clone())

    def is_valid(self) -> bool:
        return all(isinstance(v, Vec) and v.is_valid()
                   for v in (self.position, self.handle_in, self.handle_out))

    def affine_transform(self, matrix: AffineMatrix) -> Anchor:
        self.position.affine_transform(matrix)
        self.handle_in.affine_transform_without_translation(matrix)
        self.handle_out.affine_transform_without_translation(matrix)
        return self

    def affine_transform_without_translation(self, matrix: AffineMatrix) -> Anchor:
        self.position.affine_transform_without_translation(matrix)
        self.handle_in.affine_transform_without_translation(matrix)
        self.handle_out.affine_transform_without_translation(matrix)
        return self

    def all_anchors(self) -> List[Anchor]:
        return [self]

    def all_orphaned_anchors(self) -> List[Anchor]:
        return [self]

    def loose_bounding_box(self) -> BoundingBox:
        return BoundingBox(self.position.clone(), self.position.clone())

    def tight_bounding_box(self) -> BoundingBox:
        return BoundingBox(self.position.clone(), self.position.clone())

    def is_contained_by_bounding_box(self, box: BoundingBox) -> bool:
        return box.contains_point(self.position)

    def is_intersected_by_bounding_box(self, box: BoundingBox) -> bool:
        """True when the position lies on the box boundary."""
        x, y = self.position.x, self.position.y
        on_horizontal_edge = box.min.x <= x <= box.max.x and (y == box.min.y or y == box.max.y)
        on_vertical_edge = box.min.y <= y <= box.max.y and (x == box.min.x or x == box.max.x)
        return on_horizontal_edge or on_vertical_edge

    def is_overlapped_by_bounding_box(self, box: BoundingBox) -> bool:
        return box.contains_point(self.position)

    def closest_point_within_distance_to_point(self, max_distance: float, point: Vec) -> ClosestPointResult:
        distance_sq = self.position.distance_squared(point)
        if distance_sq <= max_distance * max_distance:
            return ClosestPointResult(distance=distance_sq ** 0.5, position=self.position.clone())
        return ClosestPointResult()

    def reverse(self) -> Anchor:
        """Swap the handles, reversing travel direction through this anchor."""
        self.handle_in, self.handle_out = self.handle_out, self.handle_in
        return self

    def has_tangent_handles(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Handles point in opposite directions, i.e. the curve is smooth here."""
        handle_in = self.handle_in.clone().normalize()
        handle_out = self.handle_out.clone().normalize()
        return handle_in.dot(handle_out) <= tolerance - 1

    def has_zero_handles(self) -> bool:
        """Corner anchor with no curvature on either side."""
        return self.handle_in.is_zero() and self.handle_out.is_zero()
