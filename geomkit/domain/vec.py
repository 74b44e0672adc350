"""Mutable 2D vector.

``Vec`` is the workhorse value type of the kernel. Its methods mutate the
vector in place and return ``self`` so operations chain::

    v = Vec(1, 0).rotate(90).mul_scalar(10).add(origin)

Call ``clone()`` first whenever the original must be preserved, or use the
non-mutating operators (``a + b``, ``a - b``, ``a * 2``, ``-a``) and the
static helpers (``Vec.mixed``, ``Vec.rotated``), which always return a new
vector.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

from ..constants import DEFAULT_EPSILON, DEFAULT_TOLERANCE, DEGREES_PER_RADIAN, RADIANS_PER_DEGREE
from ..utils.scalar import equal_within_relative_epsilon, expression_code_for_number, saturate

if TYPE_CHECKING:
    from .matrix import AffineMatrix, Transform


def _round_half_up(x: float) -> float:
    return float(math.floor(x + 0.5))


def _segment_parameter(pax: float, pay: float, bax: float, bay: float) -> float:
    length_sq = bax * bax + bay * bay
    if length_sq == 0:
        return 0.0
    return (pax * bax + pay * bay) / length_sq


@dataclass(eq=False)
class Vec:
    """Mutable 2D vector. ``Vec(3)`` is ``Vec(3, 3)``."""
    x: float = 0.0
    y: Optional[float] = None

    def __post_init__(self):
        if self.y is None:
            self.y = self.x

    def clone(self) -> Vec:
        return Vec(self.x, self.y)

    def set(self, x: float, y: float) -> Vec:
        self.x = x
        self.y = y
        return self

    def copy(self, v: Vec) -> Vec:
        """Copy the components of ``v`` into this vector."""
        self.x = v.x
        self.y = v.y
        return self

    # -----------------------------------------------------------------------
    # Transforms
    # -----------------------------------------------------------------------

    def affine_transform(self, m: AffineMatrix) -> Vec:
        x, y = self.x, self.y
        self.x = m.a * x + m.c * y + m.tx
        self.y = m.b * x + m.d * y + m.ty
        return self

    def affine_transform_without_translation(self, m: AffineMatrix) -> Vec:
        x, y = self.x, self.y
        self.x = m.a * x + m.c * y
        self.y = m.b * x + m.d * y
        return self

    def transform(self, transform: Transform) -> Vec:
        from .matrix import AffineMatrix
        return self.affine_transform(AffineMatrix.from_transform(transform))

    # -----------------------------------------------------------------------
    # Arithmetic (mutating)
    # -----------------------------------------------------------------------

    def add(self, v: Vec) -> Vec:
        self.x += v.x
        self.y += v.y
        return self

    def add_scalar(self, s: float) -> Vec:
        self.x += s
        self.y += s
        return self

    def sub(self, v: Vec) -> Vec:
        self.x -= v.x
        self.y -= v.y
        return self

    def sub_scalar(self, s: float) -> Vec:
        self.x -= s
        self.y -= s
        return self

    def mul(self, v: Vec) -> Vec:
        self.x *= v.x
        self.y *= v.y
        return self

    def mul_scalar(self, s: float) -> Vec:
        self.x *= s
        self.y *= s
        return self

    def div(self, v: Vec) -> Vec:
        self.x /= v.x
        self.y /= v.y
        return self

    def div_scalar(self, s: float) -> Vec:
        self.x /= s
        self.y /= s
        return self

    def negate(self) -> Vec:
        self.x = -self.x
        self.y = -self.y
        return self

    # -----------------------------------------------------------------------
    # Operators (non-mutating)
    # -----------------------------------------------------------------------

    def __add__(self, other: Union[Vec, float]) -> Vec:
        if isinstance(other, Vec):
            return Vec(self.x + other.x, self.y + other.y)
        if isinstance(other, (int, float)):
            return Vec(self.x + other, self.y + other)
        return NotImplemented

    def __sub__(self, other: Union[Vec, float]) -> Vec:
        if isinstance(other, Vec):
            return Vec(self.x - other.x, self.y - other.y)
        if isinstance(other, (int, float)):
            return Vec(self.x - other, self.y - other)
        return NotImplemented

    def __mul__(self, other: Union[Vec, float]) -> Vec:
        if isinstance(other, Vec):
            return Vec(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vec(self.x * other, self.y * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Vec, float]) -> Vec:
        if isinstance(other, Vec):
            return Vec(self.x / other.x, self.y / other.y)
        if isinstance(other, (int, float)):
            return Vec(self.x / other, self.y / other)
        return NotImplemented

    def __neg__(self) -> Vec:
        return Vec(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    __hash__ = None

    def __iter__(self):
        yield self.x
        yield self.y

    # -----------------------------------------------------------------------
    # Comparison
    # -----------------------------------------------------------------------

    def equals(self, v: Vec) -> bool:
        return self.x == v.x and self.y == v.y

    def equals_within_tolerance(self, v: Vec, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return abs(self.x - v.x) <= tolerance and abs(self.y - v.y) <= tolerance

    def equals_within_relative_epsilon(self, v: Vec, epsilon: float = DEFAULT_EPSILON) -> bool:
        return (equal_within_relative_epsilon(self.x, v.x, epsilon) and
                equal_within_relative_epsilon(self.y, v.y, epsilon))

    # -----------------------------------------------------------------------
    # Rounding and component-wise operations
    # -----------------------------------------------------------------------

    def floor(self) -> Vec:
        self.x = float(math.floor(self.x))
        self.y = float(math.floor(self.y))
        return self

    def ceil(self) -> Vec:
        self.x = float(math.ceil(self.x))
        self.y = float(math.ceil(self.y))
        return self

    def round(self) -> Vec:
        """Round half up on each component."""
        self.x = _round_half_up(self.x)
        self.y = _round_half_up(self.y)
        return self

    def round_to_fixed(self, fraction_digits: int) -> Vec:
        scale = 10 ** fraction_digits
        self.x = _round_half_up(self.x * scale) / scale
        self.y = _round_half_up(self.y * scale) / scale
        return self

    def min(self, v: Vec) -> Vec:
        self.x = min(self.x, v.x)
        self.y = min(self.y, v.y)
        return self

    def max(self, v: Vec) -> Vec:
        self.x = max(self.x, v.x)
        self.y = max(self.y, v.y)
        return self

    def mix(self, v: Vec, t: float) -> Vec:
        """Move toward ``v`` by fraction ``t``."""
        self.x += (v.x - self.x) * t
        self.y += (v.y - self.y) * t
        return self

    # -----------------------------------------------------------------------
    # Products, normalization and rotation
    # -----------------------------------------------------------------------

    def dot(self, v: Vec) -> float:
        return self.x * v.x + self.y * v.y

    def cross(self, v: Vec) -> float:
        """Z component of the 3D cross product."""
        return self.x * v.y - self.y * v.x

    def normalize(self) -> Vec:
        """Scale to unit length. A zero vector stays zero."""
        length_sq = self.length_squared()
        if length_sq > 0:
            self.mul_scalar(1 / math.sqrt(length_sq))
        return self

    def rotate(self, degrees: float) -> Vec:
        return self.rotate_radians(degrees * RADIANS_PER_DEGREE)

    def rotate_radians(self, radians: float) -> Vec:
        ct = math.cos(radians)
        st = math.sin(radians)
        x, y = self.x, self.y
        self.x = x * ct - y * st
        self.y = x * st + y * ct
        return self

    def rotate90(self) -> Vec:
        self.x, self.y = -self.y, self.x
        return self

    def rotate_neg90(self) -> Vec:
        self.x, self.y = self.y, -self.x
        return self

    def angle(self) -> float:
        """Direction in degrees, measured from the positive x axis."""
        return self.angle_radians() * DEGREES_PER_RADIAN

    def angle_radians(self) -> float:
        return math.atan2(self.y, self.x)

    # -----------------------------------------------------------------------
    # Length and distance
    # -----------------------------------------------------------------------

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def distance(self, v: Vec) -> float:
        dx = v.x - self.x
        dy = v.y - self.y
        return math.sqrt(dx * dx + dy * dy)

    def distance_squared(self, v: Vec) -> float:
        dx = v.x - self.x
        dy = v.y - self.y
        return dx * dx + dy * dy

    # -----------------------------------------------------------------------
    # Lines and segments
    # -----------------------------------------------------------------------

    def time_at_closest_point_on_line_segment(self, a: Vec, b: Vec) -> float:
        """Parameter of the projection onto line ``ab``, not clamped to [0, 1]."""
        return _segment_parameter(self.x - a.x, self.y - a.y, b.x - a.x, b.y - a.y)

    def distance_to_line_segment(self, a: Vec, b: Vec) -> float:
        pax, pay = self.x - a.x, self.y - a.y
        bax, bay = b.x - a.x, b.y - a.y
        h = saturate(_segment_parameter(pax, pay, bax, bay))
        dx = pax - bax * h
        dy = pay - bay * h
        return math.sqrt(dx * dx + dy * dy)

    def project_to_line_segment(self, a: Vec, b: Vec) -> Vec:
        bax, bay = b.x - a.x, b.y - a.y
        h = saturate(_segment_parameter(self.x - a.x, self.y - a.y, bax, bay))
        self.x = a.x + bax * h
        self.y = a.y + bay * h
        return self

    def project_to_line(self, a: Vec, b: Vec) -> Vec:
        bax, bay = b.x - a.x, b.y - a.y
        h = _segment_parameter(self.x - a.x, self.y - a.y, bax, bay)
        self.x = a.x + bax * h
        self.y = a.y + bay * h
        return self

    # -----------------------------------------------------------------------
    # State and conversion
    # -----------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def is_valid(self) -> bool:
        """Both components are finite real numbers."""
        return (isinstance(self.x, (int, float)) and isinstance(self.y, (int, float))
                and not isinstance(self.x, bool) and not isinstance(self.y, bool)
                and self.is_finite())

    def to_expression_code(self, min_fraction_digits: int = 0, max_fraction_digits: int = 6) -> str:
        x = expression_code_for_number(self.x, min_fraction_digits, max_fraction_digits)
        y = expression_code_for_number(self.y, min_fraction_digits, max_fraction_digits)
        return f"Vec({x}, {y})"

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    # -----------------------------------------------------------------------
    # Constructors and non-mutating helpers
    # -----------------------------------------------------------------------

    @classmethod
    def from_tuple(cls, t: Tuple[float, float]) -> Vec:
        return cls(t[0], t[1])

    @staticmethod
    def from_angle(degrees: float) -> Vec:
        return Vec.from_angle_radians(degrees * RADIANS_PER_DEGREE)

    @staticmethod
    def from_angle_radians(radians: float) -> Vec:
        return Vec(math.cos(radians), math.sin(radians))

    @staticmethod
    def mixed(a: Vec, b: Vec, t: float) -> Vec:
        return a.clone().mix(b, t)

    @staticmethod
    def minimum(a: Vec, b: Vec) -> Vec:
        return a.clone().min(b)

    @staticmethod
    def maximum(a: Vec, b: Vec) -> Vec:
        return a.clone().max(b)

    @staticmethod
    def rotated(v: Vec, degrees: float) -> Vec:
        return v.clone().rotate(degrees)

    @staticmethod
    def rotated_radians(v: Vec, radians: float) -> Vec:
        return v.clone().rotate_radians(radians)

    @staticmethod
    def rotated90(v: Vec) -> Vec:
        return Vec(-v.y, v.x)
