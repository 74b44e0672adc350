"""Shared capability surface of geometry entities.

Every entity (Anchor, Path, Shape, Group, Axis) derives from ``Geometry``.
Subclasses must implement ``clone``, ``is_valid``, ``affine_transform`` and
``affine_transform_without_translation``; leaving one out is a programming
error that ``abc`` reports when the class is instantiated. All other
capabilities have neutral defaults (empty collections, no bounding box,
no hit, unchanged style) so callers can treat a heterogeneous tree
uniformly.

Also defined here:
    ClosestPointResult: Outcome of a closest-point query. ``distance`` is
        ``math.inf`` when nothing lies within the search radius.
    CanvasContext: Callback interface driven by ``to_canvas_path``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Protocol

from .matrix import AffineMatrix, Transform

if TYPE_CHECKING:
    from .anchor import Anchor
    from .bounding_box import BoundingBox
    from .path import Path
    from .shape import Shape
    from .style import Fill, Stroke
    from .vec import Vec


@dataclass
class ClosestPointResult:
    """Closest point found by a query.

    Attributes:
        distance: Distance from the query point, ``math.inf`` for no result.
        position: Closest position, None for no result.
        time: Path time of the closest position, when the entity has one.
    """
    distance: float = math.inf
    position: Optional[Vec] = None
    time: Optional[float] = None

    @property
    def found(self) -> bool:
        return self.distance != math.inf


class CanvasContext(Protocol):
    """Receiver of path traversal calls (a 2D canvas, a recorder, a pen adapter)."""

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def bezier_curve_to(self, cp1x: float, cp1y: float, cp2x: float, cp2y: float,
                        x: float, y: float) -> None: ...

    def close_path(self) -> None: ...


class Geometry(ABC):
    """Base class for all geometry entities."""

    @abstractmethod
    def clone(self) -> Geometry:
        """Deep copy."""

    @abstractmethod
    def is_valid(self) -> bool:
        """Structural and numeric well-formedness."""

    @abstractmethod
    def affine_transform(self, matrix: AffineMatrix) -> Geometry:
        """Transform in place and return self."""

    @abstractmethod
    def affine_transform_without_translation(self, matrix: AffineMatrix) -> Geometry:
        """Transform in place ignoring the matrix translation."""

    def transform(self, transform: Transform) -> Geometry:
        return self.affine_transform(AffineMatrix.from_transform(transform))

    def transform_and_scale_stroke(self, matrix: AffineMatrix) -> Geometry:
        """Transform and, for a uniform scale, scale stroke widths to match."""
        self.affine_transform(matrix)
        if matrix.is_uniform_scale():
            self.scale_stroke(math.sqrt(abs(matrix.determinant())))
        return self

    @staticmethod
    def is_valid_geometry(value) -> bool:
        return isinstance(value, Geometry) and value.is_valid()

    # -----------------------------------------------------------------------
    # Collections
    # -----------------------------------------------------------------------

    def all_shapes(self) -> List[Shape]:
        return []

    def all_paths(self) -> List[Path]:
        return []

    def all_anchors(self) -> List[Anchor]:
        return []

    def all_orphaned_anchors(self) -> List[Anchor]:
        return []

    def all_shapes_and_orphaned_paths(self) -> List[Geometry]:
        return []

    def all_intersectables(self) -> List[Geometry]:
        return []

    def reverse(self) -> Geometry:
        return self

    # -----------------------------------------------------------------------
    # Style
    # -----------------------------------------------------------------------

    def assign_fill(self, fill: Fill) -> Geometry:
        return self

    def remove_fill(self) -> Geometry:
        return self

    def assign_stroke(self, stroke: Stroke) -> Geometry:
        return self

    def remove_stroke(self) -> Geometry:
        return self

    def assign_style(self, fill: Optional[Fill], stroke: Optional[Stroke]) -> Geometry:
        return self

    def copy_style(self, item: Geometry) -> Geometry:
        return self

    def scale_stroke(self, scale_factor: float) -> Geometry:
        return self

    # -----------------------------------------------------------------------
    # Bounds and hit testing
    # -----------------------------------------------------------------------

    def loose_bounding_box(self) -> Optional[BoundingBox]:
        return None

    def tight_bounding_box(self) -> Optional[BoundingBox]:
        return None

    def is_contained_by_bounding_box(self, box: BoundingBox) -> bool:
        return False

    def is_intersected_by_bounding_box(self, box: BoundingBox) -> bool:
        return False

    def is_overlapped_by_bounding_box(self, box: BoundingBox) -> bool:
        return False

    def contains_point(self, point: Vec) -> bool:
        return False

    def closest_point_within_distance_to_point(self, max_distance: float, point: Vec) -> ClosestPointResult:
        return ClosestPointResult()


def union_of_boxes(boxes) -> Optional[BoundingBox]:
    """Union of the non-None boxes in ``boxes``, or None if there are none."""
    result = None
    for box in boxes:
        if box is None:
            continue
        if result is None:
            result = box.clone()
        else:
            result.expand_to_include_bounding_box(box)
    return result


def closest_of(results) -> ClosestPointResult:
    """Result with the smallest distance; the no-result sentinel if none found."""
    best = ClosestPointResult()
    for result in results:
        if result.distance < best.distance:
            best = result
    return best
