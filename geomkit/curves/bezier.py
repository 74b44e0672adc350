"""Bezier curve mathematics.

Cubics are sequences of four ``Vec`` control points ``[p0, p1, p2, p3]``.
Functions here never mutate their input points.

The module provides the following functions:
    point_on_cubic_at_time: Evaluate a cubic, exact at the endpoints.
    points_on_cubic_at_times: Vectorized evaluation at many parameters.
    split_bezier: de Casteljau split of a curve of any degree.
    cubics_by_splitting_cubic_at_time: Cubic-specialized split.
    cubic_by_trimming_cubic: Sub-curve between two parameters.
    bernstein_bezier_form_for_closest_point_on_cubic: Degree-5 polynomial
        whose roots are the stationary points of the squared distance.
    find_roots: Recursive Bezier clipping root finder.
    position_and_time_at_closest_point_on_cubic: Closest point query.

Algorithm Overview:
    The closest point from ``p`` to a cubic ``B(t)`` minimizes
    ``|B(t) - p|^2``, so it is a root of ``(B(t) - p) . B'(t)``, a quintic.
    The quintic is built directly in Bernstein form from the dot products
    of the control point offsets and the derivative's control points,
    weighted by a fixed table of binomial ratios (Z_COEFFICIENTS). Its
    control polygon ``(i/5, w_i)`` is then clipped recursively: no sign
    change means no root, one sign change on a flat enough polygon means
    the chord's x intercept is the root, anything else splits at 0.5.
    Recursion stops at FIND_ROOTS_MAX_DEPTH, returning the interval
    midpoint, which bounds the work on any input.

    Endpoints are always added as candidates because the root finder only
    locates interior stationary points.

Example usage:
    Closest point on a curve::

        from geomkit.curves.bezier import position_and_time_at_closest_point_on_cubic
        from geomkit.domain.vec import Vec

        cubic = [Vec(0, 0), Vec(0, 100), Vec(100, 100), Vec(100, 0)]
        position, time = position_and_time_at_closest_point_on_cubic(Vec(50, 120), cubic)
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from ..constants import FIND_ROOTS_EPSILON, FIND_ROOTS_MAX_DEPTH, MINIMUM_TOLERANCE
from ..domain.vec import Vec

Cubic = List[Vec]

# Binomial weights C(3,i)*C(2,j)/C(5,i+j) for the degree-5 closest point form
Z_COEFFICIENTS = (
    (1.0, 0.6, 0.3, 0.1),
    (0.4, 0.6, 0.6, 0.4),
    (0.1, 0.3, 0.6, 1.0),
)


# ---------------------------------------------------------------------------
# Evaluation and subdivision
# ---------------------------------------------------------------------------

def point_on_cubic_at_time(cubic: Sequence[Vec], t: float) -> Vec:
    """Point on ``cubic`` at parameter ``t``. Returns copies of the endpoints at 0 and 1."""
    p0, p1, p2, p3 = cubic
    if t == 0:
        return p0.clone()
    if t == 1:
        return p3.clone()

    mt = 1 - t
    t_sq = t * t
    mt_sq = mt * mt
    a = mt_sq * mt
    b = mt_sq * t * 3
    c = mt * t_sq * 3
    d = t * t_sq
    return Vec(a * p0.x + b * p1.x + c * p2.x + d * p3.x,
               a * p0.y + b * p1.y + c * p2.y + d * p3.y)


def points_on_cubic_at_times(cubic: Sequence[Vec], times) -> np.ndarray:
    """Evaluate ``cubic`` at every parameter in ``times``.

    Args:
        cubic: Four control points.
        times: 1D array-like of parameters.

    Returns:
        Array of shape (len(times), 2).
    """
    t = np.asarray(times, dtype=float)[:, np.newaxis]
    mt = 1.0 - t
    control = np.array([[p.x, p.y] for p in cubic], dtype=float)
    return (mt ** 3 * control[0] + 3 * mt ** 2 * t * control[1]
            + 3 * mt * t ** 2 * control[2] + t ** 3 * control[3])


def split_bezier(points: Sequence[Vec], t: float) -> Tuple[List[Vec], List[Vec]]:
    """Split a Bezier curve of any degree at ``t`` with the de Casteljau triangle.

    The last point of the left half and the first point of the right half
    are the same object, the point on the curve at ``t``.
    """
    degree = len(points) - 1
    rows = [[p.clone() for p in points]]
    for j in range(1, degree + 1):
        previous = rows[j - 1]
        rows.append([Vec.mixed(previous[i], previous[i + 1], t) for i in range(degree - j + 1)])

    left = [rows[j][0] for j in range(degree + 1)]
    right = [rows[degree - j][j] for j in range(degree + 1)]
    return left, right


def cubics_by_splitting_cubic_at_time(cubic: Sequence[Vec], t: float) -> Tuple[Cubic, Cubic]:
    p0, p1, p2, p3 = cubic
    m = Vec.mixed(p1, p2, t)
    a1 = Vec.mixed(p0, p1, t)
    a2 = Vec.mixed(a1, m, t)
    b2 = Vec.mixed(p2, p3, t)
    b1 = Vec.mixed(m, b2, t)
    a3 = Vec.mixed(a2, b1, t)
    return [p0, a1, a2, a3], [a3, b1, b2, p3]


def cubic_by_trimming_cubic(cubic: Sequence[Vec], start: float, end: float) -> Cubic:
    """Portion of ``cubic`` between parameters ``start`` and ``end``.

    When ``start > end`` the result runs backwards, from ``start`` to ``end``.
    """
    cubic = list(cubic)
    if start > end:
        cubic = cubic[::-1]
        start, end = 1 - start, 1 - end
    if start != 0:
        cubic = cubics_by_splitting_cubic_at_time(cubic, start)[1]
    if end != 1:
        cubic = cubics_by_splitting_cubic_at_time(cubic, (end - start) / (1 - start))[0]
    return cubic


# ---------------------------------------------------------------------------
# Closest point
# ---------------------------------------------------------------------------

def bernstein_bezier_form_for_closest_point_on_cubic(point: Vec, cubic: Sequence[Vec]) -> List[Vec]:
    """Control polygon ``(i/5, w_i)`` of ``(B(t) - point) . B'(t)``."""
    c = [p - point for p in cubic]
    c_dot_d = []
    for j in range(3):
        d = (cubic[j + 1] - cubic[j]).mul_scalar(3)
        c_dot_d.append([d.dot(c[i]) for i in range(4)])

    w = [Vec(i / 5, 0) for i in range(6)]
    n = 3
    n1 = n - 1
    for k in range(n + n1 + 1):
        lb = max(0, k - n1)
        ub = min(k, n)
        for i in range(lb, ub + 1):
            j = k - i
            w[i + j].y += c_dot_d[j][i] * Z_COEFFICIENTS[j][i]
    return w


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _zero_crossing_count(points: Sequence[Vec]) -> int:
    count = 0
    previous = _sign(points[0].y)
    for point in points[1:]:
        sign = _sign(point.y)
        if sign != previous:
            count += 1
            previous = sign
    return count


def _is_control_polygon_flat_enough(points: Sequence[Vec], degree: int) -> bool:
    # Implicit line through the first and last control points
    a = points[0].y - points[degree].y
    b = points[degree].x - points[0].x
    c = points[0].x * points[degree].y - points[degree].x * points[0].y

    max_above = 0.0
    max_below = 0.0
    for i in range(1, degree):
        value = a * points[i].x + b * points[i].y + c
        if value > max_above:
            max_above = value
        elif value < max_below:
            max_below = value

    # x intercepts of the lines parallel to the chord through the extremes
    intercept_1 = (c - max_above) / -a
    intercept_2 = (c - max_below) / -a
    error = max(intercept_1, intercept_2) - min(intercept_1, intercept_2)
    return error < FIND_ROOTS_EPSILON


def _x_intercept(points: Sequence[Vec], degree: int) -> float:
    p0 = points[0]
    p1 = points[degree]
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    return (dx * p0.y - dy * p0.x) / -dy


def find_roots(points: Sequence[Vec], degree: int, depth: int = 0) -> List[float]:
    """Roots in x of the Bernstein polynomial with control polygon ``points``.

    Args:
        points: ``degree + 1`` control points whose x values span the
            parameter interval and whose y values are the coefficients.
        degree: Polynomial degree.
        depth: Current recursion depth; callers leave the default.

    Returns:
        Parameters of the roots found, in increasing order.
    """
    crossings = _zero_crossing_count(points)
    if crossings == 0:
        return []
    if depth >= FIND_ROOTS_MAX_DEPTH:
        return [(points[0].x + points[degree].x) / 2]
    if crossings == 1 and _is_control_polygon_flat_enough(points, degree):
        return [_x_intercept(points, degree)]

    left, right = split_bezier(points, 0.5)
    left_roots = find_roots(left, degree, depth + 1)
    right_roots = find_roots(right, degree, depth + 1)
    # A zero ordinate at the split is a root both halves report
    if (left[degree].y == 0 and left_roots and right_roots and
            abs(right_roots[0] - left_roots[-1]) <= MINIMUM_TOLERANCE):
        right_roots = right_roots[1:]
    return left_roots + right_roots


def position_and_time_at_closest_point_on_cubic(point: Vec, cubic: Sequence[Vec]) -> Tuple[Vec, float]:
    """Closest point on ``cubic`` to ``point`` and its parameter."""
    w = bernstein_bezier_form_for_closest_point_on_cubic(point, cubic)
    roots = find_roots(w, 5)

    closest_distance_sq = point.distance_squared(cubic[0])
    position = cubic[0].clone()
    time = 0.0
    for t in roots:
        candidate = point_on_cubic_at_time(cubic, t)
        distance_sq = point.distance_squared(candidate)
        if distance_sq < closest_distance_sq:
            closest_distance_sq = distance_sq
            position = candidate
            time = t
    if point.distance_squared(cubic[3]) < closest_distance_sq:
        position = cubic[3].clone()
        time = 1.0
    return position, time
