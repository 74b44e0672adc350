"""Open or closed sequences of anchors.

Segment ``i`` of a path joins anchors ``i`` and ``i + 1``; a closed path
has one more segment joining the last anchor back to the first. Paths
with fewer than two anchors have no segments.

Path time:
    A float whose integer part selects a segment and whose fractional
    part is the parameter inside it. Closed paths wrap times modulo the
    anchor count, open paths clamp them to ``[0, len(anchors) - 1]``.
    Arc-length conversions (``time_at_distance``, ``distance_at_time``)
    scan the segments linearly and treat time as proportional to length
    inside a segment.

Example usage:
    Sampling a circle::

        from geomkit.domain.path import Path
        from geomkit.domain.vec import Vec

        circle = Path.circle(Vec(0, 0), 10)
        quarter = circle.position_at_time(1)     # Vec(0, 10)
        tangent = circle.tangent_at_time(0.5)
        circle.polygonize(2.0)
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from ..curves.bezier import cubics_by_splitting_cubic_at_time, point_on_cubic_at_time
from ..curves.bezier import position_and_time_at_closest_point_on_cubic
from ..curves.commands import commands_for_contour
from ..curves.segment import (
    cubic_from_segment,
    is_segment_linear,
    line_from_segment,
    partial_segment_length,
    position_and_time_at_closest_point_on_line,
    primitive_from_segment,
    primitive_primitive_intersections,
    segment_length,
)
from ..utils.scalar import clamp, tan
from ..utils.sequences import pairs, rotate_list
from .anchor import Anchor
from .bounding_box import BoundingBox
from .engine import get_engine
from .geometry import CanvasContext, ClosestPointResult, Geometry
from .matrix import AffineMatrix, Transform
from .style import Fill, Stroke
from .vec import Vec

logger = logging.getLogger(__name__)


class Path(Geometry):
    """Ordered anchors plus a closed flag and optional style.

    Attributes:
        anchors: The path's vertices, owned by this path.
        closed: Whether a segment joins the last anchor to the first.
        stroke: Optional outline style.
        fill: Optional interior style.
    """

    def __init__(self, anchors: Optional[List[Anchor]] = None, closed: bool = False,
                 stroke: Optional[Stroke] = None, fill: Optional[Fill] = None):
        self.anchors = anchors if anchors is not None else []
        self.closed = closed
        self.stroke = stroke
        self.fill = fill

    def __repr__(self) -> str:
        return f"Path(anchors={len(self.anchors)}, closed={self.closed})"

    def clone(self) -> Path:
        return Path(
            [anchor.clone() for anchor in self.anchors],
            self.closed,
            self.stroke.clone() if self.stroke else None,
            self.fill.clone() if self.fill else None,
        )

    def is_valid(self) -> bool:
        return (isinstance(self.anchors, list) and
                all(isinstance(a, Anchor) and a.is_valid() for a in self.anchors) and
                (self.stroke is None or (isinstance(self.stroke, Stroke) and self.stroke.is_valid())) and
                (self.fill is None or (isinstance(self.fill, Fill) and self.fill.is_valid())))

    def affine_transform(self, matrix: AffineMatrix) -> Path:
        for anchor in self.anchors:
            anchor.affine_transform(matrix)
        return self

    def affine_transform_without_translation(self, matrix: AffineMatrix) -> Path:
        for anchor in self.anchors:
            anchor.affine_transform_without_translation(matrix)
        return self

    # -----------------------------------------------------------------------
    # Collections
    # -----------------------------------------------------------------------

    def all_paths(self) -> List[Path]:
        return [self]

    def all_anchors(self) -> List[Anchor]:
        return list(self.anchors)

    def all_shapes_and_orphaned_paths(self) -> List[Geometry]:
        return [self]

    def all_intersectables(self) -> List[Geometry]:
        return [self]

    # -----------------------------------------------------------------------
    # Style
    # -----------------------------------------------------------------------

    def assign_fill(self, fill: Fill) -> Path:
        self.fill = fill.clone()
        return self

    def remove_fill(self) -> Path:
        self.fill = None
        return self

    def assign_stroke(self, stroke: Stroke) -> Path:
        self.stroke = stroke.clone()
        return self

    def remove_stroke(self) -> Path:
        self.stroke = None
        return self

    def assign_style(self, fill: Optional[Fill], stroke: Optional[Stroke]) -> Path:
        self.fill = fill.clone() if fill else None
        self.stroke = stroke.clone() if stroke else None
        return self

    def copy_style(self, item: Geometry) -> Path:
        """Copy fill and stroke from another Path; other items are ignored."""
        if isinstance(item, Path):
            self.fill = item.fill.clone() if item.fill else None
            self.stroke = item.stroke.clone() if item.stroke else None
        return self

    def scale_stroke(self, scale_factor: float) -> Path:
        if self.stroke is not None and not self.stroke.hairline:
            self.stroke.width *= scale_factor
        return self

    # -----------------------------------------------------------------------
    # Anchors and segments
    # -----------------------------------------------------------------------

    def first_anchor(self) -> Optional[Anchor]:
        return self.anchors[0] if self.anchors else None

    def last_anchor(self) -> Optional[Anchor]:
        return self.anchors[-1] if self.anchors else None

    def segment_at_index(self, index: int) -> Path:
        """Open two-anchor path sharing anchors ``index`` and ``index + 1`` with this path."""
        return Path(self.anchors[index:index + 2])

    def segments(self) -> List[Path]:
        """One open two-anchor path per segment; anchors are shared, not copied."""
        return [Path([a1, a2]) for a1, a2 in pairs(self.anchors, self.closed)]

    def _segment_pairs(self):
        return pairs(self.anchors, self.closed)

    def _normalized_time(self, time: float) -> float:
        count = len(self.anchors)
        if self.closed:
            time %= count
            # A tiny negative time rounds up to exactly count
            return 0.0 if time >= count else time
        return clamp(time, 0, count - 1)

    def _segment_at_time(self, time: float):
        """Anchor index, segment anchors and local parameter for a normalized time."""
        index = int(time)
        next_index = index + 1
        if self.closed:
            next_index %= len(self.anchors)
        return index, (self.anchors[index], self.anchors[next_index]), time - index

    # -----------------------------------------------------------------------
    # Canvas and command output
    # -----------------------------------------------------------------------

    def to_canvas_path(self, ctx: CanvasContext) -> None:
        """Replay the path as move/line/cubic/close calls on ``ctx``."""
        if ctx is None or not self.anchors:
            return

        def draw_segment(a1: Anchor, a2: Anchor) -> None:
            if a1.handle_out.is_zero() and a2.handle_in.is_zero():
                ctx.line_to(a2.position.x, a2.position.y)
            else:
                ctx.bezier_curve_to(
                    a1.position.x + a1.handle_out.x,
                    a1.position.y + a1.handle_out.y,
                    a2.position.x + a2.handle_in.x,
                    a2.position.y + a2.handle_in.y,
                    a2.position.x,
                    a2.position.y,
                )

        first = self.anchors[0]
        ctx.move_to(first.position.x, first.position.y)
        for a1, a2 in pairs(self.anchors):
            draw_segment(a1, a2)
        if self.closed and len(self.anchors) > 1:
            draw_segment(self.anchors[-1], first)
            ctx.close_path()

    def to_path_commands(self, scale: float = 1.0) -> list:
        return commands_for_contour(self.anchors, self.closed, scale)

    # -----------------------------------------------------------------------
    # Bounds and hit testing
    # -----------------------------------------------------------------------

    def loose_bounding_box(self) -> Optional[BoundingBox]:
        """Box around positions and handle endpoints.

        The first anchor's ``handle_in`` and the last anchor's ``handle_out``
        only shape a segment on closed paths, so they count only then.
        """
        anchors = self.anchors
        if not anchors:
            return None
        if len(anchors) == 1:
            return anchors[0].loose_bounding_box()

        first = anchors[0]
        box = BoundingBox(first.position.clone(), first.position.clone())
        box.expand_to_include_point(first.position + first.handle_out)
        if self.closed:
            box.expand_to_include_point(first.position + first.handle_in)

        for anchor in anchors[1:-1]:
            box.expand_to_include_point(anchor.position)
            box.expand_to_include_point(anchor.position + anchor.handle_in)
            box.expand_to_include_point(anchor.position + anchor.handle_out)

        last = anchors[-1]
        box.expand_to_include_point(last.position)
        box.expand_to_include_point(last.position + last.handle_in)
        if self.closed:
            box.expand_to_include_point(last.position + last.handle_out)
        return box

    def tight_bounding_box(self) -> Optional[BoundingBox]:
        """Exact curve extent from the registered engine, else the loose box."""
        if len(self.anchors) == 1:
            return self.anchors[0].tight_bounding_box()
        engine = get_engine()
        if engine is not None and self.anchors:
            bounds = engine.tight_bounds(self.to_path_commands())
            if bounds is not None:
                return BoundingBox.from_tuple(bounds)
            logger.debug("Engine returned no bounds for %r, using loose box", self)
        return self.loose_bounding_box()

    def is_contained_by_bounding_box(self, box: BoundingBox) -> bool:
        tight = self.tight_bounding_box()
        return tight is not None and box.contains_bounding_box(tight)

    def is_intersected_by_bounding_box(self, box: BoundingBox) -> bool:
        """True when some segment crosses one of the box's edges."""
        loose = self.loose_bounding_box()
        if loose is None or not loose.overlaps_bounding_box(box):
            return False
        if len(self.anchors) == 1:
            return self.anchors[0].is_intersected_by_bounding_box(box)

        edges = [[c1, c2] for c1, c2 in pairs(box.corners(), loop=True)]
        for segment in self._segment_pairs():
            primitive = primitive_from_segment(segment)
            for edge in edges:
                if primitive_primitive_intersections(primitive, edge):
                    return True
        return False

    def is_overlapped_by_bounding_box(self, box: BoundingBox) -> bool:
        return self.is_contained_by_bounding_box(box) or self.is_intersected_by_bounding_box(box)

    # -----------------------------------------------------------------------
    # Direction and length
    # -----------------------------------------------------------------------

    def reverse(self) -> Path:
        for anchor in self.anchors:
            anchor.reverse()
        self.anchors.reverse()
        return self

    def length(self) -> float:
        return sum(segment_length(segment) for segment in self._segment_pairs())

    def time_at_distance(self, distance: float) -> float:
        """Path time at arc length ``distance``, clamped to both ends of the path."""
        if distance <= 0:
            return 0
        time = 0
        length = 0.0
        for segment in self._segment_pairs():
            seg_length = segment_length(segment)
            if length + seg_length > distance:
                return time + (distance - length) / seg_length
            length += seg_length
            time += 1
        return len(self.anchors) if self.closed else len(self.anchors) - 1

    def distance_at_time(self, time: float) -> float:
        """Arc length from the start of the path to ``time``."""
        if time <= 0:
            return 0.0
        count = len(self.anchors)
        if time >= (count if self.closed else count - 1):
            return self.length()

        index = int(time)
        distance = 0.0
        for i in range(index):
            distance += segment_length((self.anchors[i], self.anchors[(i + 1) % count]))
        segment_time = time - index
        if segment_time > 0:
            segment = (self.anchors[index], self.anchors[(index + 1) % count])
            distance += partial_segment_length(segment, segment_time)
        return distance

    # -----------------------------------------------------------------------
    # Time queries
    # -----------------------------------------------------------------------

    def position_at_time(self, time: float) -> Vec:
        if not self.anchors:
            return Vec()
        if len(self.anchors) < 2:
            return self.anchors[0].position.clone()

        time = self._normalized_time(time)
        if time == int(time):
            return self.anchors[int(time)].position.clone()
        _, segment, segment_time = self._segment_at_time(time)
        if is_segment_linear(segment):
            return Vec.mixed(segment[0].position, segment[1].position, segment_time)
        return point_on_cubic_at_time(cubic_from_segment(segment), segment_time)

    def derivative_at_time(self, time: float) -> Vec:
        """Unit direction of travel at ``time``.

        At an anchor the direction follows its handles. An anchor with a zero
        handle on the relevant side points toward (or away from) the
        neighbouring anchor's control point instead.
        """
        anchors = self.anchors
        if len(anchors) < 2:
            return Vec()

        time = self._normalized_time(time)
        index = int(time)
        anchor = anchors[index]

        if time == index:
            if not self.closed and index == len(anchors) - 1:
                if anchor.handle_in.is_zero():
                    previous = anchors[index - 1]
                    return (anchor.position - (previous.position + previous.handle_out)).normalize()
                return (-anchor.handle_in).normalize()
            if anchor.handle_out.is_zero():
                following = anchors[(index + 1) % len(anchors)]
                return (following.position + following.handle_in - anchor.position).normalize()
            return anchor.handle_out.clone().normalize()

        _, segment, t = self._segment_at_time(time)
        if is_segment_linear(segment):
            return (segment[1].position - segment[0].position).normalize()

        p0, p1, p2, p3 = cubic_from_segment(segment)
        mt = 1 - t
        return Vec(
            3 * mt * mt * (p1.x - p0.x) + 6 * mt * t * (p2.x - p1.x) + 3 * t * t * (p3.x - p2.x),
            3 * mt * mt * (p1.y - p0.y) + 6 * mt * t * (p2.y - p1.y) + 3 * t * t * (p3.y - p2.y),
        ).normalize()

    def tangent_at_time(self, time: float) -> Vec:
        return self.derivative_at_time(time).normalize()

    def normal_at_time(self, time: float) -> Vec:
        return self.tangent_at_time(time).rotate90()

    # -----------------------------------------------------------------------
    # Editing
    # -----------------------------------------------------------------------

    def insert_anchor_at_time(self, time: float) -> Optional[Anchor]:
        """Insert an anchor at ``time`` without changing the path's shape.

        Cubic segments are split with de Casteljau and both neighbours'
        handles are shortened to match the two halves.

        Returns:
            The new anchor, the existing anchor when ``time`` lands exactly
            on one, or None for paths with fewer than two anchors.
        """
        anchors = self.anchors
        if len(anchors) < 2:
            return None

        time = self._normalized_time(time)
        index = int(time)
        if time == index:
            return anchors[index % len(anchors)]

        _, segment, segment_time = self._segment_at_time(time)
        a1, a2 = segment
        anchor = Anchor()
        if is_segment_linear(segment):
            anchor.position = Vec.mixed(a1.position, a2.position, segment_time)
        else:
            left, right = cubics_by_splitting_cubic_at_time(cubic_from_segment(segment), segment_time)
            a1.handle_out = left[1] - a1.position
            a2.handle_in = right[2] - a2.position
            anchor.position = right[0].clone()
            anchor.handle_in = left[2] - right[0]
            anchor.handle_out = right[1] - right[0]

        anchors.insert(index + 1, anchor)
        return anchor

    def split_at_anchor(self, anchor: Anchor) -> List[Path]:
        """Cut the path open at ``anchor``.

        A closed path is rotated to start at ``anchor``, gets a copy of it
        appended and is opened in place. An open path is divided into two
        new paths that both contain the junction (the first one a copy).
        """
        index = next((i for i, a in enumerate(self.anchors) if a is anchor), -1)
        if index == -1:
            return [self]

        if self.closed:
            if index > 0:
                rotate_list(self.anchors, index)
            self.anchors.append(self.anchors[0].clone())
            self.closed = False
            return [self]

        path1 = Path(self.anchors[:index])
        path2 = Path(self.anchors[index:])
        path1.anchors.append(path2.anchors[0].clone())
        return [path1, path2]

    def split_at_time(self, time: float) -> List[Path]:
        anchor = self.insert_anchor_at_time(time)
        if anchor is not None:
            return self.split_at_anchor(anchor)
        return [self]

    def polygonize(self, max_segment_length: float) -> Path:
        """Replace the anchors with corner anchors at most ``max_segment_length`` apart.

        Every segment is resampled at equal length steps. Open paths keep
        their final anchor position.
        """
        if max_segment_length <= 0 or len(self.anchors) < 2:
            return self

        new_anchors = []
        for segment in self.segments():
            length = segment.length()
            divisions = math.ceil(length / max_segment_length)
            if divisions == 0:
                continue
            step = length / divisions
            for i in range(divisions):
                time = segment.time_at_distance(i * step)
                new_anchors.append(Anchor(segment.position_at_time(time)))
        if not self.closed:
            new_anchors.append(Anchor(self.anchors[-1].position.clone()))

        self.anchors = new_anchors
        return self

    def close(self) -> Path:
        self.closed = True
        return self

    # -----------------------------------------------------------------------
    # Closest point
    # -----------------------------------------------------------------------

    def closest_point_within_distance_to_point(self, max_distance: float, point: Vec) -> ClosestPointResult:
        """Closest point on the path to ``point`` no farther than ``max_distance``.

        Segments whose control box, padded by ``max_distance``, does not
        contain ``point`` are skipped before the exact line or cubic query.
        """
        result = ClosestPointResult()
        if not self.anchors:
            return result
        if len(self.anchors) == 1:
            return self.anchors[0].closest_point_within_distance_to_point(max_distance, point)

        max_distance_sq = max_distance * max_distance
        best_distance_sq = math.inf
        for index, segment in enumerate(self._segment_pairs()):
            if is_segment_linear(segment):
                line = line_from_segment(segment)
                bounds = BoundingBox.from_points(line).expand_scalar(max_distance)
                if not bounds.contains_point(point):
                    continue
                position, time = position_and_time_at_closest_point_on_line(point, line)
            else:
                cubic = cubic_from_segment(segment)
                bounds = BoundingBox.from_cubic(cubic).expand_scalar(max_distance)
                if not bounds.contains_point(point):
                    continue
                position, time = position_and_time_at_closest_point_on_cubic(point, cubic)

            distance_sq = position.distance_squared(point)
            if distance_sq < max_distance_sq and distance_sq < best_distance_sq:
                best_distance_sq = distance_sq
                result = ClosestPointResult(math.sqrt(distance_sq), position, index + time)
        return result

    # -----------------------------------------------------------------------
    # Factories
    # -----------------------------------------------------------------------

    @staticmethod
    def from_points(points: Sequence[Vec], closed: bool = False) -> Path:
        return Path([Anchor(p.clone()) for p in points], closed)

    @staticmethod
    def from_cubic_bezier_points(points: Sequence[Vec], closed: bool = False) -> Path:
        """Path from ``[p0, c0, c1, p1, c2, c3, p2, ...]`` control points.

        On a closed path a trailing control pair ``[..., pn, c, c']`` only
        needs ``c`` and the first anchor's incoming handle ``c'``.
        """
        previous = Anchor(points[0].clone())
        path = Path([previous], closed)
        i = 1
        n = len(points)
        while i < n:
            previous.handle_out = points[i] - previous.position
            i += 1
            if i == n:
                break
            handle_in_point = points[i].clone()
            i += 1
            if i == n:
                if closed:
                    first = path.anchors[0]
                    first.handle_in = handle_in_point.sub(first.position)
                else:
                    path.anchors.append(Anchor(handle_in_point))
                break
            anchor = Anchor(points[i].clone(), handle_in_point.sub(points[i]))
            path.anchors.append(anchor)
            previous = anchor
            i += 1
        return path

    @staticmethod
    def from_bounding_box(box: BoundingBox) -> Path:
        return Path.from_points(box.corners(), closed=True)

    @staticmethod
    def from_arc(center: Vec, radius: float, start_angle: float, end_angle: float) -> Path:
        """Open circular arc from ``start_angle`` to ``end_angle`` (degrees).

        Uses one cubic per 90 degrees or less.
        """
        segment_count = math.ceil(abs(start_angle - end_angle) / 90)
        path = Path([Anchor(Vec(1, 0))])
        if segment_count > 0:
            segment_angle = (end_angle - start_angle) / segment_count
            for i in range(segment_count):
                start, end = _unit_arc_anchors(segment_angle)
                rotation = AffineMatrix.from_rotation(i * segment_angle)
                start.affine_transform(rotation)
                end.affine_transform(rotation)
                path.anchors[-1].handle_out = start.handle_out
                path.anchors.append(end)

        return path.transform(Transform(position=center, rotation=start_angle, scale=radius))

    @staticmethod
    def circle(center: Vec, radius: float) -> Path:
        """Closed circle of four cubic segments starting at angle 0."""
        path = Path.from_arc(center, radius, 0, 360)
        seam = path.anchors.pop()
        path.anchors[0].handle_in = seam.handle_in
        return path.close()

    @staticmethod
    def rect(x: float, y: float, width: float, height: float) -> Path:
        return Path.from_bounding_box(BoundingBox(Vec(x, y), Vec(x + width, y + height)))


def _unit_arc_anchors(angle: float):
    """Anchors of a unit-circle arc from 0 to ``angle`` degrees."""
    f = (4 / 3) * tan(angle / 4)
    start = Anchor(Vec(1, 0), handle_out=Vec(0, f))
    end = Anchor(Vec.rotated(Vec(1, 0), angle), handle_in=Vec.rotated(Vec(0, -f), angle))
    return start, end
