"""Compound outlines: several paths sharing one style.

A Shape holds the contours of one outline, such as an outer boundary
and its holes. The kernel attaches no winding semantics to the
contours; renderers and the path-operations engine read them with the
even-odd rule unless told otherwise.

Boolean operations and exact stroking are delegated to the engine
registered with ``geomkit.domain.engine.register_engine``. Without one
they degrade as follows (logging a warning each time):

    boolean_union: a Shape of copies of all input paths.
    boolean_intersect / boolean_difference: an empty Shape.
    stroke_geometry: a Shape of copies of the input paths.

Example usage:
    Cutting a hole::

        from geomkit.domain.path import Path
        from geomkit.domain.shape import Shape

        outer = Path.rect(0, 0, 100, 100)
        hole = Path.rect(25, 25, 50, 50)
        ring = Shape.boolean_difference([outer, hole])
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..curves.commands import contours_from_commands, path_commands_for_geometry
from .anchor import Anchor
from .bounding_box import BoundingBox
from .engine import check_operation, get_engine
from .geometry import CanvasContext, ClosestPointResult, Geometry, closest_of, union_of_boxes
from .matrix import AffineMatrix
from .path import Path
from .style import Fill, Stroke, check_stroke_options

logger = logging.getLogger(__name__)


class Shape(Geometry):
    """Ordered paths with a shared fill and stroke."""

    def __init__(self, paths: Optional[List[Path]] = None, stroke: Optional[Stroke] = None,
                 fill: Optional[Fill] = None):
        self.paths = paths if paths is not None else []
        self.stroke = stroke
        self.fill = fill

    def __repr__(self) -> str:
        return f"Shape(paths={len(self.paths)})"

    def clone(self) -> Shape:
        return Shape(
            [path.clone() for path in self.paths],
            self.stroke.clone() if self.stroke else None,
            self.fill.clone() if self.fill else None,
        )

    def is_valid(self) -> bool:
        return (isinstance(self.paths, list) and
                all(isinstance(p, Path) and p.is_valid() for p in self.paths) and
                (self.stroke is None or (isinstance(self.stroke, Stroke) and self.stroke.is_valid())) and
                (self.fill is None or (isinstance(self.fill, Fill) and self.fill.is_valid())))

    def affine_transform(self, matrix: AffineMatrix) -> Shape:
        for path in self.paths:
            path.affine_transform(matrix)
        return self

    def affine_transform_without_translation(self, matrix: AffineMatrix) -> Shape:
        for path in self.paths:
            path.affine_transform_without_translation(matrix)
        return self

    # -----------------------------------------------------------------------
    # Collections
    # -----------------------------------------------------------------------

    def all_shapes(self) -> List[Shape]:
        return [self]

    def all_paths(self) -> List[Path]:
        return list(self.paths)

    def all_anchors(self) -> List[Anchor]:
        return [anchor for path in self.paths for anchor in path.anchors]

    def all_shapes_and_orphaned_paths(self) -> List[Geometry]:
        return [self]

    def all_intersectables(self) -> List[Geometry]:
        return list(self.paths)

    # -----------------------------------------------------------------------
    # Style
    # -----------------------------------------------------------------------

    def assign_fill(self, fill: Fill) -> Shape:
        self.fill = fill.clone()
        for path in self.paths:
            path.remove_fill()
        return self

    def remove_fill(self) -> Shape:
        self.fill = None
        return self

    def assign_stroke(self, stroke: Stroke) -> Shape:
        self.stroke = stroke.clone()
        for path in self.paths:
            path.remove_stroke()
        return self

    def remove_stroke(self) -> Shape:
        self.stroke = None
        return self

    def assign_style(self, fill: Optional[Fill], stroke: Optional[Stroke]) -> Shape:
        self.fill = fill.clone() if fill else None
        self.stroke = stroke.clone() if stroke else None
        for path in self.paths:
            path.assign_style(None, None)
        return self

    def copy_style(self, item: Geometry) -> Shape:
        if isinstance(item, (Path, Shape)):
            self.fill = item.fill.clone() if item.fill else None
            self.stroke = item.stroke.clone() if item.stroke else None
        return self

    def scale_stroke(self, scale_factor: float) -> Shape:
        if self.stroke is not None and not self.stroke.hairline:
            self.stroke.width *= scale_factor
        return self

    # -----------------------------------------------------------------------
    # Output
    # -----------------------------------------------------------------------

    def to_canvas_path(self, ctx: CanvasContext) -> None:
        if ctx is None:
            return
        for path in self.paths:
            path.to_canvas_path(ctx)

    def to_path_commands(self, scale: float = 1.0) -> list:
        return path_commands_for_geometry(self, scale)

    # -----------------------------------------------------------------------
    # Bounds and hit testing
    # -----------------------------------------------------------------------

    def loose_bounding_box(self) -> Optional[BoundingBox]:
        return union_of_boxes(path.loose_bounding_box() for path in self.paths)

    def tight_bounding_box(self) -> Optional[BoundingBox]:
        engine = get_engine()
        if engine is not None and self.paths:
            bounds = engine.tight_bounds(self.to_path_commands())
            if bounds is not None:
                return BoundingBox.from_tuple(bounds)
        return self.loose_bounding_box()

    def is_contained_by_bounding_box(self, box: BoundingBox) -> bool:
        tight = self.tight_bounding_box()
        return tight is not None and box.contains_bounding_box(tight)

    def is_intersected_by_bounding_box(self, box: BoundingBox) -> bool:
        return any(path.is_intersected_by_bounding_box(box) for path in self.paths)

    def is_overlapped_by_bounding_box(self, box: BoundingBox) -> bool:
        return any(path.is_overlapped_by_bounding_box(box) for path in self.paths)

    def closest_point_within_distance_to_point(self, max_distance: float, point) -> ClosestPointResult:
        return closest_of(path.closest_point_within_distance_to_point(max_distance, point)
                          for path in self.paths)

    def reverse(self) -> Shape:
        for path in self.paths:
            path.reverse()
        self.paths.reverse()
        return self

    # -----------------------------------------------------------------------
    # Construction from commands
    # -----------------------------------------------------------------------

    @staticmethod
    def from_path_commands(commands, scale: float = 1.0) -> Shape:
        """Shape with one path per MOVE in ``commands``."""
        return Shape([Path(anchors, closed) for anchors, closed in contours_from_commands(commands, scale)])

    # -----------------------------------------------------------------------
    # Engine-delegated operations
    # -----------------------------------------------------------------------

    @classmethod
    def boolean_union(cls, items: Sequence[Geometry], fill_rule: str = 'evenodd') -> Shape:
        """Union of every shape and orphaned path in ``items``.

        Args:
            items: Paths, Shapes or Groups.
            fill_rule: 'evenodd' or 'winding', used to read each operand.

        Returns:
            New Shape. Inputs are not modified.
        """
        check_operation('union', fill_rule)
        engine = get_engine()
        if engine is None:
            logger.warning("boolean_union needs a path engine, returning the combined paths")
            return cls([path.clone() for item in items for path in item.all_paths()])

        operands = [path_commands_for_geometry(operand)
                    for item in items for operand in item.all_shapes_and_orphaned_paths()]
        logger.debug("boolean_union of %d operands", len(operands))
        return cls.from_path_commands(engine.combine(operands, 'union', fill_rule))

    @classmethod
    def boolean_intersect(cls, items: Sequence[Geometry]) -> Shape:
        """Intersection of ``items``; each Group is first unioned into one operand."""
        return cls._fold(items, 'intersect')

    @classmethod
    def boolean_difference(cls, items: Sequence[Geometry]) -> Shape:
        """First item minus every following item; Groups are unioned first."""
        return cls._fold(items, 'difference')

    @classmethod
    def _fold(cls, items: Sequence[Geometry], operation: str) -> Shape:
        engine = get_engine()
        if engine is None:
            logger.warning("boolean_%s needs a path engine, returning an empty shape", operation)
            return cls()
        if not items:
            return cls()

        operands = _pre_union_operands(engine, items)
        logger.debug("boolean_%s of %d operands", operation, len(operands))
        return cls.from_path_commands(engine.combine(operands, operation))

    @classmethod
    def stroke_geometry(cls, item: Geometry, width: float = 1.0, cap: str = 'butt',
                        join: str = 'miter', miter_limit: float = 4.0) -> Shape:
        """Fillable outline of the stroke of ``item``'s paths."""
        check_stroke_options(cap, join)
        engine = get_engine()
        if engine is None:
            logger.warning("stroke_geometry needs a path engine, returning the input paths")
            return cls([path.clone() for path in item.all_paths()])
        commands = path_commands_for_geometry(item)
        return cls.from_path_commands(engine.stroke(commands, width, cap, join, miter_limit))


def _pre_union_operands(engine, items: Sequence[Geometry]) -> list:
    """One command list per item, with the children of each Group unioned together."""
    from .group import Group

    operands = []
    for item in items:
        if isinstance(item, Group):
            children = [path_commands_for_geometry(child) for child in item.items]
            operands.append(engine.combine(children, 'union'))
        else:
            operands.append(path_commands_for_geometry(item))
    return operands
