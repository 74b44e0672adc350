"""Segment operations over pairs of anchors.

A segment is a 2-tuple of adjacent anchors ``(a1, a2)``. It is linear
when ``a1.handle_out`` and ``a2.handle_in`` are both zero, otherwise it
is the cubic ``[a1.position, a1.position + a1.handle_out,
a2.position + a2.handle_in, a2.position]``.

Primitives are the plain point lists behind a segment: a line is two
points, a cubic is four. Intersection functions take primitives and
return ``Intersection(time1, time2)`` records, the parameter on the first
and on the second primitive.

Algorithm Overview:
    line-line: 2x2 linear system; parallel lines and parameters outside
        [0, 1] on either line give no result.
    line-cubic: signed distances of the cubic's control points to the
        line form a cubic polynomial in t, solved with Cardano's formula
        (dropping to quadratic or linear when the leading coefficients
        vanish). Roots are kept when the hit also lies on the line.
    cubic-cubic: after short-circuiting identical, nearly identical and
        overlapping curves (which have no isolated crossings), candidate
        pairs are split in half repeatedly. The first
        CUBIC_INTERSECTION_BOUNDING_BOX_ITERATIONS levels prune pairs whose
        control boxes are disjoint, later levels prune pairs whose end
        chords do not cross. After CUBIC_INTERSECTION_MAX_ITERATIONS levels
        each surviving pair is resolved by intersecting its end chords.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from ..constants import (
    CUBIC_INTERSECTION_BOUNDING_BOX_ITERATIONS,
    CUBIC_INTERSECTION_MAX_ITERATIONS,
    CUBIC_LENGTH_SUBDIVISIONS,
    CUBIC_SOLVER_EPSILON,
    DEFAULT_TOLERANCE,
)
from ..domain.bounding_box import BoundingBox
from ..domain.vec import Vec
from ..utils.scalar import saturate
from .bezier import (
    cubic_by_trimming_cubic,
    cubics_by_splitting_cubic_at_time,
    point_on_cubic_at_time,
    points_on_cubic_at_times,
    position_and_time_at_closest_point_on_cubic,
)

logger = logging.getLogger(__name__)


@dataclass
class Intersection:
    """Crossing of two primitives at ``time1`` on the first and ``time2`` on the second."""
    time1: float
    time2: float

    def swapped(self) -> Intersection:
        return Intersection(self.time2, self.time1)


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------

def is_segment_linear(segment) -> bool:
    anchor1, anchor2 = segment
    return anchor1.handle_out.is_zero() and anchor2.handle_in.is_zero()


def line_from_segment(segment) -> List[Vec]:
    anchor1, anchor2 = segment
    return [anchor1.position, anchor2.position]


def cubic_from_segment(segment) -> List[Vec]:
    anchor1, anchor2 = segment
    return [
        anchor1.position,
        anchor1.position + anchor1.handle_out,
        anchor2.position + anchor2.handle_in,
        anchor2.position,
    ]


def primitive_from_segment(segment) -> List[Vec]:
    """Two points for a linear segment, four for a cubic one."""
    if is_segment_linear(segment):
        return line_from_segment(segment)
    return cubic_from_segment(segment)


def approximate_cubic_length(cubic: Sequence[Vec], subdivisions: int = CUBIC_LENGTH_SUBDIVISIONS) -> float:
    """Length of the polyline through ``subdivisions + 1`` evenly spaced samples."""
    samples = points_on_cubic_at_times(cubic, np.linspace(0.0, 1.0, subdivisions + 1))
    return float(np.sum(np.hypot(*np.diff(samples, axis=0).T)))


def linear_segment_length(segment) -> float:
    return segment[0].position.distance(segment[1].position)


def segment_length(segment) -> float:
    """Exact for lines, a 16-sample polyline estimate for cubics."""
    if is_segment_linear(segment):
        return linear_segment_length(segment)
    return approximate_cubic_length(cubic_from_segment(segment))


def partial_segment_length(segment, end_time: float) -> float:
    """Length from the start of ``segment`` to parameter ``end_time``."""
    if is_segment_linear(segment):
        return end_time * linear_segment_length(segment)
    trimmed = cubic_by_trimming_cubic(cubic_from_segment(segment), 0, end_time)
    return approximate_cubic_length(trimmed)


def position_and_time_at_closest_point_on_line(point: Vec, line: Sequence[Vec]) -> Tuple[Vec, float]:
    """Closest point on the line segment ``line`` and its clamped parameter."""
    p1, p2 = line
    line_dir = p2 - p1
    length_sq = line_dir.length_squared()
    time = saturate((point - p1).dot(line_dir) / length_sq) if length_sq > 0 else 0.0
    return line_dir.mul_scalar(time).add(p1), time


# ---------------------------------------------------------------------------
# Line intersections
# ---------------------------------------------------------------------------

def line_line_intersections(line1: Sequence[Vec], line2: Sequence[Vec]) -> List[Intersection]:
    p1, p2 = line1
    p3, p4 = line2
    denom = (p4.y - p3.y) * (p2.x - p1.x) - (p4.x - p3.x) * (p2.y - p1.y)
    if denom == 0:
        return []

    ua = ((p4.x - p3.x) * (p1.y - p3.y) - (p4.y - p3.y) * (p1.x - p3.x)) / denom
    if ua < 0 or ua > 1:
        return []
    ub = ((p2.x - p1.x) * (p1.y - p3.y) - (p2.y - p1.y) * (p1.x - p3.x)) / denom
    if ub < 0 or ub > 1:
        return []
    return [Intersection(ua, ub)]


def _unit_interval_roots(roots: List[float]) -> List[float]:
    eps = CUBIC_SOLVER_EPSILON
    return [min(1.0, max(0.0, r)) for r in roots if -eps <= r <= 1 + eps]


def solve_cubic(a: float, b: float, c: float, d: float) -> List[float]:
    """Real roots of ``a t^3 + b t^2 + c t + d`` within [0, 1] (clamped).

    Degenerate leading coefficients fall back to the quadratic or linear
    formula.
    """
    eps = CUBIC_SOLVER_EPSILON
    roots = []
    if abs(a) < eps:
        if abs(b) < eps:
            if abs(c) > eps:
                roots.append(-d / c)
        else:
            disc = c * c - 4 * b * d
            if disc >= 0:
                sqrt_disc = math.sqrt(disc)
                roots.append((-c + sqrt_disc) / (2 * b))
                roots.append((-c - sqrt_disc) / (2 * b))
        return _unit_interval_roots(roots)

    # Monic form t^3 + p t^2 + q t + r
    p = b / a
    q = c / a
    r = d / a

    p3 = p / 3
    big_q = (3 * q - p * p) / 9
    big_r = (9 * p * q - 27 * r - 2 * p * p * p) / 54
    discriminant = big_q * big_q * big_q + big_r * big_r

    if discriminant >= 0:
        sqrt_d = math.sqrt(discriminant)
        s = math.copysign(abs(big_r + sqrt_d) ** (1 / 3), big_r + sqrt_d)
        t = math.copysign(abs(big_r - sqrt_d) ** (1 / 3), big_r - sqrt_d)
        roots.append(s + t - p3)
    else:
        cos_theta = big_r / math.sqrt(-big_q * big_q * big_q)
        theta = math.acos(max(-1.0, min(1.0, cos_theta)))
        sqrt_q = 2 * math.sqrt(-big_q)
        roots.append(sqrt_q * math.cos(theta / 3) - p3)
        roots.append(sqrt_q * math.cos((theta + 2 * math.pi) / 3) - p3)
        roots.append(sqrt_q * math.cos((theta + 4 * math.pi) / 3) - p3)
    return _unit_interval_roots(roots)


def line_cubic_intersections(line: Sequence[Vec], cubic: Sequence[Vec]) -> List[Intersection]:
    a1, a2 = line
    b1, b2, b3, b4 = cubic
    line_dir = a2 - a1
    line_len = line_dir.length()
    if line_len == 0:
        return []

    # Signed distance of each control point from the line
    nx = -line_dir.y / line_len
    ny = line_dir.x / line_len
    d0 = (b1.x - a1.x) * nx + (b1.y - a1.y) * ny
    d1 = (b2.x - a1.x) * nx + (b2.y - a1.y) * ny
    d2 = (b3.x - a1.x) * nx + (b3.y - a1.y) * ny
    d3 = (b4.x - a1.x) * nx + (b4.y - a1.y) * ny

    roots = solve_cubic(
        -d0 + 3 * d1 - 3 * d2 + d3,
        3 * d0 - 6 * d1 + 3 * d2,
        -3 * d0 + 3 * d1,
        d0,
    )

    results = []
    length_sq = line_dir.length_squared()
    for time2 in roots:
        hit = point_on_cubic_at_time(cubic, time2)
        time1 = (hit - a1).dot(line_dir) / length_sq
        if 0 <= time1 <= 1:
            results.append(Intersection(time1, time2))
    return results


def cubic_line_intersections(cubic: Sequence[Vec], line: Sequence[Vec]) -> List[Intersection]:
    return [hit.swapped() for hit in line_cubic_intersections(line, cubic)]


# ---------------------------------------------------------------------------
# Cubic-cubic intersections
# ---------------------------------------------------------------------------

def _cubic_bounding_boxes_overlap(cubic1: Sequence[Vec], cubic2: Sequence[Vec]) -> bool:
    return BoundingBox.from_cubic(cubic1).overlaps_bounding_box(BoundingBox.from_cubic(cubic2))


def _cubic_chords_intersect(cubic1: Sequence[Vec], cubic2: Sequence[Vec]) -> bool:
    return bool(line_line_intersections([cubic1[0], cubic1[3]], [cubic2[0], cubic2[3]]))


def _cubics_equal(cubic1: Sequence[Vec], cubic2: Sequence[Vec]) -> bool:
    forward = all(p.equals(q) for p, q in zip(cubic1, cubic2))
    backward = all(p.equals(q) for p, q in zip(cubic1, reversed(cubic2)))
    return forward or backward


def _cubics_almost_equal(cubic1: Sequence[Vec], cubic2: Sequence[Vec], tolerance: float) -> bool:
    forward = all(p.distance(q) <= tolerance for p, q in zip(cubic1, cubic2))
    backward = all(p.distance(q) <= tolerance for p, q in zip(cubic1, reversed(cubic2)))
    return forward or backward


def _cubics_overlap(cubic1: Sequence[Vec], cubic2: Sequence[Vec], tolerance: float) -> bool:
    """True when the curves share a stretch of more than ``tolerance`` in parameter."""
    box1 = BoundingBox.from_points(cubic1).expand_scalar(tolerance)
    box2 = BoundingBox.from_points(cubic2).expand_scalar(tolerance)
    matches = []

    for point, time1 in ((cubic1[0], 0.0), (cubic1[3], 1.0)):
        if box2.contains_point(point):
            position, time2 = position_and_time_at_closest_point_on_cubic(point, cubic2)
            if position.distance(point) < tolerance:
                matches.append(Intersection(time1, time2))

    for point, time2 in ((cubic2[0], 0.0), (cubic2[3], 1.0)):
        if box1.contains_point(point):
            position, time1 = position_and_time_at_closest_point_on_cubic(point, cubic1)
            if position.distance(point) < tolerance:
                matches.append(Intersection(time1, time2))

    if len(matches) < 2:
        return False

    matches.sort(key=lambda m: m.time1)
    start1, end1 = matches[0].time1, matches[-1].time1
    if end1 - start1 < tolerance:
        return False
    start2, end2 = matches[0].time2, matches[-1].time2

    trimmed1 = cubic_by_trimming_cubic(cubic1, start1, end1)
    trimmed2 = cubic_by_trimming_cubic(cubic2, start2, end2)
    return (trimmed1[1].distance(trimmed2[1]) < tolerance and
            trimmed1[2].distance(trimmed2[2]) < tolerance)


@dataclass
class _CandidatePair:
    time1: float
    cubic1: List[Vec]
    time2: float
    cubic2: List[Vec]


def _deduplicated(intersections: List[Intersection], tolerance: float) -> List[Intersection]:
    unique: List[Intersection] = []
    for hit in intersections:
        if not any(abs(hit.time1 - u.time1) <= tolerance and abs(hit.time2 - u.time2) <= tolerance
                   for u in unique):
            unique.append(hit)
    return unique


def cubic_cubic_intersections(cubic1: Sequence[Vec], cubic2: Sequence[Vec]) -> List[Intersection]:
    """Isolated crossings of two cubics.

    Identical or overlapping curves share a continuum of points rather
    than crossings and yield an empty list.
    """
    tolerance = DEFAULT_TOLERANCE
    cubic1, cubic2 = list(cubic1), list(cubic2)

    if _cubics_equal(cubic1, cubic2) or _cubics_almost_equal(cubic1, cubic2, tolerance):
        return []
    if not _cubic_bounding_boxes_overlap(cubic1, cubic2):
        return []
    if _cubics_overlap(cubic1, cubic2, tolerance):
        return []

    candidates = [_CandidatePair(0.0, cubic1, 0.0, cubic2)]
    time_length = 1.0

    for iteration in range(CUBIC_INTERSECTION_MAX_ITERATIONS):
        next_candidates = []
        next_time_length = time_length * 0.5
        use_boxes = iteration < CUBIC_INTERSECTION_BOUNDING_BOX_ITERATIONS

        for pair in candidates:
            if use_boxes:
                keep_exploring = _cubic_bounding_boxes_overlap(pair.cubic1, pair.cubic2)
            else:
                keep_exploring = _cubic_chords_intersect(pair.cubic1, pair.cubic2)
            if not keep_exploring:
                continue

            cubic1a, cubic1b = cubics_by_splitting_cubic_at_time(pair.cubic1, 0.5)
            cubic2a, cubic2b = cubics_by_splitting_cubic_at_time(pair.cubic2, 0.5)
            mid1 = pair.time1 + next_time_length
            mid2 = pair.time2 + next_time_length
            next_candidates.extend([
                _CandidatePair(pair.time1, cubic1a, pair.time2, cubic2a),
                _CandidatePair(pair.time1, cubic1a, mid2, cubic2b),
                _CandidatePair(mid1, cubic1b, pair.time2, cubic2a),
                _CandidatePair(mid1, cubic1b, mid2, cubic2b),
            ])

        if not next_candidates:
            return []
        candidates = next_candidates
        time_length = next_time_length

    logger.debug("cubic_cubic_intersections resolving %d candidate pairs", len(candidates))

    intersections = []
    for pair in candidates:
        for hit in line_line_intersections([pair.cubic1[0], pair.cubic1[3]],
                                           [pair.cubic2[0], pair.cubic2[3]]):
            intersections.append(Intersection(
                pair.time1 + hit.time1 * time_length,
                pair.time2 + hit.time2 * time_length,
            ))
    return _deduplicated(intersections, tolerance)


def cubic_self_intersections(cubic: Sequence[Vec]) -> List[Intersection]:
    """Self-crossings of a cubic. Not detected; always empty."""
    return []


def primitive_primitive_intersections(primitive1: Sequence[Vec], primitive2: Sequence[Vec]) -> List[Intersection]:
    """Dispatch on primitive kind: two points is a line, four is a cubic."""
    if len(primitive1) == 2:
        if len(primitive2) == 2:
            return line_line_intersections(primitive1, primitive2)
        return line_cubic_intersections(primitive1, primitive2)
    if len(primitive2) == 2:
        return cubic_line_intersections(primitive1, primitive2)
    return cubic_cubic_intersections(primitive1, primitive2)
