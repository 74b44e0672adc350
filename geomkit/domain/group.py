"""Hierarchical containers of geometry entities.

A Group owns its items (Paths, Shapes, Axes, nested Groups) and forwards
transforms, style changes and queries to them, aggregating the answers.

``Group.join_paths`` stitches open paths whose endpoints coincide into
longer paths, closing any result whose two ends meet.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..constants import DEFAULT_TOLERANCE
from .anchor import Anchor
from .bounding_box import BoundingBox
from .geometry import CanvasContext, ClosestPointResult, Geometry, closest_of, union_of_boxes
from .matrix import AffineMatrix
from .path import Path
from .shape import Shape
from .style import Fill, Stroke
from .vec import Vec

logger = logging.getLogger(__name__)


class Group(Geometry):
    """Ordered, heterogeneous collection of geometry entities."""

    def __init__(self, items: Optional[List[Geometry]] = None):
        self.items = items if items is not None else []

    def __repr__(self) -> str:
        return f"Group(items={len(self.items)})"

    def clone(self) -> Group:
        return Group([item.clone() for item in self.items])

    def is_valid(self) -> bool:
        return isinstance(self.items, list) and all(Geometry.is_valid_geometry(item) for item in self.items)

    def affine_transform(self, matrix: AffineMatrix) -> Group:
        for item in self.items:
            item.affine_transform(matrix)
        return self

    def affine_transform_without_translation(self, matrix: AffineMatrix) -> Group:
        for item in self.items:
            item.affine_transform_without_translation(matrix)
        return self

    # -----------------------------------------------------------------------
    # Collections
    # -----------------------------------------------------------------------

    def all_shapes(self) -> List[Shape]:
        return [shape for item in self.items for shape in item.all_shapes()]

    def all_paths(self) -> List[Path]:
        return [path for item in self.items for path in item.all_paths()]

    def all_anchors(self) -> List[Anchor]:
        return [anchor for item in self.items for anchor in item.all_anchors()]

    def all_orphaned_anchors(self) -> List[Anchor]:
        return [anchor for item in self.items for anchor in item.all_orphaned_anchors()]

    def all_shapes_and_orphaned_paths(self) -> List[Geometry]:
        return [geometry for item in self.items for geometry in item.all_shapes_and_orphaned_paths()]

    def all_intersectables(self) -> List[Geometry]:
        return [geometry for item in self.items for geometry in item.all_intersectables()]

    # -----------------------------------------------------------------------
    # Style
    # -----------------------------------------------------------------------

    def assign_fill(self, fill: Fill) -> Group:
        for item in self.items:
            item.assign_fill(fill)
        return self

    def remove_fill(self) -> Group:
        for item in self.items:
            item.remove_fill()
        return self

    def assign_stroke(self, stroke: Stroke) -> Group:
        for item in self.items:
            item.assign_stroke(stroke)
        return self

    def remove_stroke(self) -> Group:
        for item in self.items:
            item.remove_stroke()
        return self

    def assign_style(self, fill: Optional[Fill], stroke: Optional[Stroke]) -> Group:
        for item in self.items:
            item.assign_style(fill, stroke)
        return self

    def copy_style(self, item_to_copy: Geometry) -> Group:
        for item in self.items:
            item.copy_style(item_to_copy)
        return self

    def scale_stroke(self, scale_factor: float) -> Group:
        for item in self.items:
            item.scale_stroke(scale_factor)
        return self

    # -----------------------------------------------------------------------
    # Output, bounds and hit testing
    # -----------------------------------------------------------------------

    def to_canvas_path(self, ctx: CanvasContext) -> None:
        for item in self.items:
            draw = getattr(item, 'to_canvas_path', None)
            if draw is not None:
                draw(ctx)

    def loose_bounding_box(self) -> Optional[BoundingBox]:
        return union_of_boxes(item.loose_bounding_box() for item in self.items)

    def tight_bounding_box(self) -> Optional[BoundingBox]:
        return union_of_boxes(item.tight_bounding_box() for item in self.items)

    def is_contained_by_bounding_box(self, box: BoundingBox) -> bool:
        if not self.items:
            return False
        return all(item.is_contained_by_bounding_box(box) for item in self.items)

    def is_intersected_by_bounding_box(self, box: BoundingBox) -> bool:
        return any(item.is_intersected_by_bounding_box(box) for item in self.items)

    def is_overlapped_by_bounding_box(self, box: BoundingBox) -> bool:
        return any(item.is_overlapped_by_bounding_box(box) for item in self.items)

    def closest_point_within_distance_to_point(self, max_distance: float, point: Vec) -> ClosestPointResult:
        return closest_of(item.closest_point_within_distance_to_point(max_distance, point)
                          for item in self.items)

    def contains_point(self, point: Vec) -> bool:
        return any(item.contains_point(point) for item in self.items)

    def reverse(self) -> Group:
        for item in self.items:
            item.reverse()
        self.items.reverse()
        return self

    # -----------------------------------------------------------------------
    # Path joining
    # -----------------------------------------------------------------------

    @staticmethod
    def join_paths(paths: Sequence[Path], tolerance: float = DEFAULT_TOLERANCE) -> Group:
        """Stitch open paths that share endpoints.

        Each pass walks the worklist and appends every open path onto the
        first earlier open path it touches, in one of four orientations:
        its start on the other's end, start on start, end on start, or end
        on end. Handles at the junction are carried over so the curve is
        unchanged. Passes repeat until one merges nothing. Finally, open
        paths whose two ends coincide are closed.

        Args:
            paths: Input paths. They are cloned, never modified.
            tolerance: Maximum endpoint distance counted as coincident.

        Returns:
            Group of the joined paths.
        """
        tolerance_sq = tolerance * tolerance
        in_paths = [path.clone() for path in paths]
        passes = 0

        while True:
            passes += 1
            out_paths: List[Path] = []
            for in_path in in_paths:
                if in_path.closed or not in_path.anchors or not _merge_into(out_paths, in_path, tolerance_sq):
                    out_paths.append(in_path)

            if len(out_paths) == len(in_paths):
                break
            in_paths = out_paths

        for path in out_paths:
            if len(path.anchors) > 1:
                start = path.anchors[0]
                end = path.anchors[-1]
                if start.position.distance_squared(end.position) <= tolerance_sq:
                    start.handle_in = end.handle_in.clone()
                    path.anchors.pop()
                    path.closed = True

        logger.debug("join_paths merged %d paths into %d in %d passes", len(paths), len(out_paths), passes)
        return Group(out_paths)


def _merge_into(out_paths: List[Path], in_path: Path, tolerance_sq: float) -> bool:
    """Splice ``in_path`` onto the first open path in ``out_paths`` it touches."""
    in_start = in_path.anchors[0]
    in_end = in_path.anchors[-1]

    for out_path in out_paths:
        if out_path.closed or not out_path.anchors:
            continue
        out_start = out_path.anchors[0]
        out_end = out_path.anchors[-1]

        if in_start.position.distance_squared(out_end.position) <= tolerance_sq:
            out_end.handle_out = in_start.handle_out.clone()
            out_path.anchors.extend(in_path.anchors[1:])
            return True
        if in_start.position.distance_squared(out_start.position) <= tolerance_sq:
            out_start.handle_in = in_start.handle_out.clone()
            out_path.anchors[0:0] = in_path.reverse().anchors[:-1]
            return True
        if in_end.position.distance_squared(out_start.position) <= tolerance_sq:
            out_start.handle_in = in_end.handle_in.clone()
            out_path.anchors[0:0] = in_path.anchors[:-1]
            return True
        if in_end.position.distance_squared(out_end.position) <= tolerance_sq:
            out_end.handle_out = in_end.handle_in.clone()
            out_path.anchors.extend(in_path.reverse().anchors[1:])
            return True
    return False
