"""Axis-aligned bounding box."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .vec import Vec


@dataclass(eq=False)
class BoundingBox:
    """Mutable axis-aligned box with ``min`` and ``max`` corners.

    A box built from unsorted corners may be inverted on either axis until
    ``canonicalize()`` is called. "No box" (e.g. for an empty path) is
    ``None``, never a zero-size box.
    """
    min: Vec = field(default_factory=Vec)
    max: Vec = field(default_factory=Vec)

    def clone(self) -> BoundingBox:
        return BoundingBox(self.min.clone(), self.max.clone())

    @property
    def center(self) -> Vec:
        return self.min.clone().add(self.max).mul_scalar(0.5)

    @property
    def size(self) -> Vec:
        return self.max.clone().sub(self.min)

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    def is_finite(self) -> bool:
        return self.min.is_finite() and self.max.is_finite()

    def is_valid(self) -> bool:
        return (isinstance(self.min, Vec) and isinstance(self.max, Vec) and
                self.min.is_valid() and self.max.is_valid())

    def canonicalize(self) -> BoundingBox:
        """Swap min and max per axis where they are inverted."""
        x1, y1 = self.min.x, self.min.y
        x2, y2 = self.max.x, self.max.y
        self.min.set(min(x1, x2), min(y1, y2))
        self.max.set(max(x1, x2), max(y1, y2))
        return self

    def expand_to_include_point(self, point: Vec) -> BoundingBox:
        self.min.min(point)
        self.max.max(point)
        return self

    def expand_to_include_bounding_box(self, box: BoundingBox) -> BoundingBox:
        return self.expand_to_include_point(box.min).expand_to_include_point(box.max)

    def expand_scalar(self, distance: float) -> BoundingBox:
        """Pad outward by ``distance`` on every side."""
        self.min.sub_scalar(distance)
        self.max.add_scalar(distance)
        return self

    def contains_point(self, point: Vec) -> bool:
        """Inclusive point containment."""
        return (self.min.x <= point.x <= self.max.x and
                self.min.y <= point.y <= self.max.y)

    def contains_bounding_box(self, box: BoundingBox) -> bool:
        return (box.min.x >= self.min.x and box.max.x <= self.max.x and
                box.min.y >= self.min.y and box.max.y <= self.max.y)

    def overlaps_bounding_box(self, box: BoundingBox) -> bool:
        """Overlap test; boxes touching along an edge overlap."""
        return (box.max.x >= self.min.x and box.min.x <= self.max.x and
                box.max.y >= self.min.y and box.min.y <= self.max.y)

    def corners(self) -> Tuple[Vec, Vec, Vec, Vec]:
        """Corners in order (min.x, min.y), (max.x, min.y), (max.x, max.y), (min.x, max.y)."""
        return (
            Vec(self.min.x, self.min.y),
            Vec(self.max.x, self.min.y),
            Vec(self.max.x, self.max.y),
            Vec(self.min.x, self.max.y),
        )

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.min.x, self.min.y, self.max.x, self.max.y)

    @classmethod
    def from_tuple(cls, t: Tuple[float, float, float, float]) -> BoundingBox:
        return cls(Vec(t[0], t[1]), Vec(t[2], t[3]))

    @classmethod
    def from_points(cls, points: Sequence[Vec]) -> Optional[BoundingBox]:
        """Smallest box containing ``points``, or None when there are none."""
        if not points:
            return None
        box = cls(points[0].clone(), points[0].clone())
        for point in points[1:]:
            box.expand_to_include_point(point)
        return box

    @classmethod
    def from_cubic(cls, cubic: Sequence[Vec]) -> BoundingBox:
        """Bound of the control polygon. The curve itself may be smaller."""
        xs = [p.x for p in cubic]
        ys = [p.y for p in cubic]
        return cls(Vec(min(xs), min(ys)), Vec(max(xs), max(ys)))
