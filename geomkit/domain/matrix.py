"""Affine matrices and their human-editable decomposition.

An ``AffineMatrix`` maps ``(x, y)`` to ``(a*x + c*y + tx, b*x + d*y + ty)``.
Like ``Vec``, its operations mutate in place and return ``self``.

``mul(m)`` post-multiplies (``self = self @ m``): ``m`` is applied first,
in the current basis. ``pre_mul(m)`` applies ``m`` after ``self``.

``Transform`` is the position/rotation/scale/skew/origin record that a
matrix decomposes into. Decomposition guarantees ``0 <= rotation < 360``
and ``-90 < skew <= 90``; round trips through ``to_transform`` and
``from_transform`` are exact for non-mirrored, non-degenerate matrices.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from ..constants import (
    BASIS_USABLE_LENGTH_SQUARED,
    DEFAULT_EPSILON,
    DEFAULT_TOLERANCE,
    DEGREES_PER_RADIAN,
    RADIANS_PER_DEGREE,
)
from ..utils.scalar import atan2, equal_within_relative_epsilon, expression_code_for_number, modulo
from .vec import Vec


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class Transform:
    """Decomposed affine transform.

    Attributes:
        position: Translation applied last.
        rotation: Rotation in degrees.
        scale: Per-axis scale. A plain number is expanded to ``Vec(s, s)``.
        skew: Skew of the y axis in degrees.
        origin: Pivot point for rotation, skew and scale.

    Any field left as ``None`` is skipped by ``AffineMatrix.from_transform``.
    """
    position: Optional[Vec] = None
    rotation: Optional[float] = None
    scale: Union[Vec, float, None] = None
    skew: Optional[float] = None
    origin: Optional[Vec] = None

    def __post_init__(self):
        if _is_number(self.scale):
            self.scale = Vec(self.scale, self.scale)

    def equals(self, other: Transform) -> bool:
        return (_optional_vec_equal(self.position, other.position) and
                self.rotation == other.rotation and
                _optional_vec_equal(self.scale, other.scale) and
                self.skew == other.skew and
                _optional_vec_equal(self.origin, other.origin))

    def equals_within_relative_epsilon(self, other: Transform, epsilon: float = DEFAULT_EPSILON) -> bool:
        def vec_close(a, b):
            if a is None or b is None:
                return a is b
            return a.equals_within_relative_epsilon(b, epsilon)

        def num_close(a, b):
            if a is None or b is None:
                return a is b
            return equal_within_relative_epsilon(a, b, epsilon)

        return (vec_close(self.position, other.position) and
                num_close(self.rotation, other.rotation) and
                vec_close(self.scale, other.scale) and
                num_close(self.skew, other.skew) and
                vec_close(self.origin, other.origin))


def _optional_vec_equal(a: Optional[Vec], b: Optional[Vec]) -> bool:
    if a is None or b is None:
        return a is b
    return a.equals(b)


class AffineMatrix:
    """2x3 affine matrix ``[[a, c, tx], [b, d, ty]]``."""

    __slots__ = ('a', 'b', 'c', 'd', 'tx', 'ty')

    def __init__(self, a: float = 1.0, b: float = 0.0, c: float = 0.0, d: float = 1.0,
                 tx: float = 0.0, ty: float = 0.0):
        self.a = a
        self.b = b
        self.c = c
        self.d = d
        self.tx = tx
        self.ty = ty

    def __repr__(self) -> str:
        return (f"AffineMatrix(a={self.a!r}, b={self.b!r}, c={self.c!r}, "
                f"d={self.d!r}, tx={self.tx!r}, ty={self.ty!r})")

    def __matmul__(self, other: AffineMatrix) -> AffineMatrix:
        if not isinstance(other, AffineMatrix):
            return NotImplemented
        return self.clone().mul(other)

    def clone(self) -> AffineMatrix:
        return AffineMatrix(self.a, self.b, self.c, self.d, self.tx, self.ty)

    # -----------------------------------------------------------------------
    # Composition
    # -----------------------------------------------------------------------

    def invert(self) -> AffineMatrix:
        """Invert in place.

        A singular matrix yields infinite or NaN components rather than an
        exception; check ``is_invertible()`` first when that matters.
        """
        a, b, c, d, tx, ty = self.a, self.b, self.c, self.d, self.tx, self.ty
        with np.errstate(divide='ignore', invalid='ignore'):
            ad_minus_bc = np.float64(a * d - b * c)
            bc_minus_ad = np.float64(b * c - a * d)
            self.a = float(d / ad_minus_bc)
            self.b = float(b / bc_minus_ad)
            self.c = float(c / bc_minus_ad)
            self.d = float(a / ad_minus_bc)
            self.tx = float((d * tx - c * ty) / bc_minus_ad)
            self.ty = float((b * tx - a * ty) / ad_minus_bc)
        return self

    def mul(self, m: AffineMatrix) -> AffineMatrix:
        """Post-multiply: ``self = self @ m``."""
        a, b, c, d, tx, ty = self.a, self.b, self.c, self.d, self.tx, self.ty
        self.a = a * m.a + c * m.b
        self.b = b * m.a + d * m.b
        self.c = a * m.c + c * m.d
        self.d = b * m.c + d * m.d
        self.tx = a * m.tx + c * m.ty + tx
        self.ty = b * m.tx + d * m.ty + ty
        return self

    def pre_mul(self, m: AffineMatrix) -> AffineMatrix:
        """Pre-multiply: ``self = m @ self``."""
        a, b, c, d, tx, ty = self.a, self.b, self.c, self.d, self.tx, self.ty
        self.a = m.a * a + m.c * b
        self.b = m.b * a + m.d * b
        self.c = m.a * c + m.c * d
        self.d = m.b * c + m.d * d
        self.tx = m.a * tx + m.c * ty + m.tx
        self.ty = m.b * tx + m.d * ty + m.ty
        return self

    def translate(self, v: Vec) -> AffineMatrix:
        self.tx += self.a * v.x + self.c * v.y
        self.ty += self.b * v.x + self.d * v.y
        return self

    def pre_translate(self, v: Vec) -> AffineMatrix:
        self.tx += v.x
        self.ty += v.y
        return self

    def scale(self, v: Vec) -> AffineMatrix:
        self.a *= v.x
        self.b *= v.x
        self.c *= v.y
        self.d *= v.y
        return self

    def scale_scalar(self, s: float) -> AffineMatrix:
        self.a *= s
        self.b *= s
        self.c *= s
        self.d *= s
        return self

    def normalize(self) -> AffineMatrix:
        """Scale each non-zero basis vector to unit length."""
        m = self.a * self.a + self.b * self.b
        if m > 0:
            m = 1 / math.sqrt(m)
            self.a *= m
            self.b *= m
        m = self.c * self.c + self.d * self.d
        if m > 0:
            m = 1 / math.sqrt(m)
            self.c *= m
            self.d *= m
        return self

    def rotate(self, degrees: float) -> AffineMatrix:
        return self.mul(AffineMatrix.from_rotation(degrees))

    def skew(self, degrees: float) -> AffineMatrix:
        s = math.tan(degrees * RADIANS_PER_DEGREE)
        self.c += s * self.a
        self.d += s * self.b
        return self

    def origin(self, origin: Vec) -> AffineMatrix:
        """Make ``origin`` the pivot of everything composed so far."""
        ox = -origin.x
        oy = -origin.y
        self.tx += self.a * ox + self.c * oy
        self.ty += self.b * ox + self.d * oy
        return self

    def change_basis(self, m: AffineMatrix, m_inverse: Optional[AffineMatrix] = None) -> AffineMatrix:
        """Re-express this matrix in the basis ``m``: ``m_inverse @ self @ m``."""
        if m_inverse is None:
            m_inverse = m.clone().invert()
        return self.pre_mul(m_inverse).mul(m)

    def ensure_minimum_basis_length(self, length: float) -> AffineMatrix:
        """Replace basis vectors shorter than ``length``.

        When both are short the basis becomes ``length`` times the identity.
        When one is short it is rebuilt perpendicular to the other, scaled to
        ``length``.
        """
        a, b, c, d = self.a, self.b, self.c, self.d
        x_len = math.sqrt(a * a + b * b)
        y_len = math.sqrt(c * c + d * d)
        if x_len < length and y_len < length:
            self.a, self.b, self.c, self.d = length, 0.0, 0.0, length
        elif x_len < length:
            scale = length / y_len
            self.a = d * scale
            self.b = -c * scale
        elif y_len < length:
            scale = length / x_len
            self.c = -b * scale
            self.d = a * scale
        return self

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def equals(self, m: AffineMatrix) -> bool:
        return (self.a == m.a and self.b == m.b and self.c == m.c and
                self.d == m.d and self.tx == m.tx and self.ty == m.ty)

    def equals_within_tolerance(self, m: AffineMatrix, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return all(abs(x - y) <= tolerance for x, y in zip(self.components(), m.components()))

    def is_orthogonal(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return abs(self.a * self.c + self.b * self.d) <= tolerance

    def is_invertible(self) -> bool:
        return self.determinant() != 0

    def is_uniform_scale(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Both basis vectors have the same squared length."""
        a, b, c, d = self.a, self.b, self.c, self.d
        return abs(a * a + b * b - (c * c + d * d)) <= tolerance

    def is_mirror(self) -> bool:
        return self.determinant() < 0

    def is_identity(self) -> bool:
        return (self.a == 1 and self.b == 0 and self.c == 0 and
                self.d == 1 and self.tx == 0 and self.ty == 0)

    def is_nan(self) -> bool:
        return any(math.isnan(x) for x in self.components())

    def is_valid(self) -> bool:
        return all(_is_number(x) and math.isfinite(x) for x in self.components())

    def components(self) -> tuple:
        return (self.a, self.b, self.c, self.d, self.tx, self.ty)

    # -----------------------------------------------------------------------
    # Decomposition
    # -----------------------------------------------------------------------

    def to_transform(self) -> Transform:
        """Decompose into position, rotation, scale and skew.

        A basis shorter than the usability threshold is considered
        degenerate; rotation is then taken from the other basis alone.
        """
        a, b, c, d = self.a, self.b, self.c, self.d

        x_basis_usable = a * a + b * b > BASIS_USABLE_LENGTH_SQUARED
        y_basis_usable = c * c + d * d > BASIS_USABLE_LENGTH_SQUARED

        rotation_radians = 0.0
        skew = 0.0
        if x_basis_usable:
            rotation_radians = math.atan2(b, a)
            if y_basis_usable:
                skew = (rotation_radians - math.atan2(-c, d)) * DEGREES_PER_RADIAN
                skew = modulo(skew, 180)
                if skew > 90:
                    skew -= 180
        elif y_basis_usable:
            rotation_radians = math.atan2(-c, d)

        ct = math.cos(-rotation_radians)
        st = math.sin(-rotation_radians)
        rotation = modulo(rotation_radians * DEGREES_PER_RADIAN, 360)
        if rotation >= 360:
            rotation = 0.0

        sx = a * ct - b * st
        sy = c * st + d * ct
        return Transform(Vec(self.tx, self.ty), rotation, Vec(sx, sy), skew, Vec(0, 0))

    def to_transform_with_origin(self, origin: Vec) -> Transform:
        transform = self.clone().translate(origin).to_transform()
        transform.origin = origin.clone()
        return transform

    def to_expression_code(self, min_fraction_digits: int = 0, max_fraction_digits: int = 6) -> str:
        parts = ', '.join(
            expression_code_for_number(x, min_fraction_digits, max_fraction_digits)
            for x in self.components()
        )
        return f"AffineMatrix({parts})"

    # -----------------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------------

    @staticmethod
    def inverse(m: AffineMatrix) -> AffineMatrix:
        return m.clone().invert()

    @staticmethod
    def product(a: AffineMatrix, b: AffineMatrix) -> AffineMatrix:
        return a.clone().mul(b)

    @staticmethod
    def from_transform(transform: Transform) -> AffineMatrix:
        """Compose translate, rotate, skew, scale, then origin.

        Raises:
            TypeError: If ``scale`` is neither a Vec nor a number.
        """
        m = AffineMatrix()
        if isinstance(transform.position, Vec):
            m.translate(transform.position)
        if _is_number(transform.rotation):
            m.rotate(transform.rotation)
        if _is_number(transform.skew):
            m.skew(transform.skew)
        scale = transform.scale
        if isinstance(scale, Vec):
            m.scale(scale)
        elif _is_number(scale):
            m.scale_scalar(scale)
        elif scale is not None:
            raise TypeError(f"Transform scale must be a Vec or a number, got {type(scale).__name__}")
        if isinstance(transform.origin, Vec):
            m.origin(transform.origin)
        return m

    @staticmethod
    def from_translation(translation: Vec) -> AffineMatrix:
        return AffineMatrix(1, 0, 0, 1, translation.x, translation.y)

    @staticmethod
    def from_translation_points(p1: Vec, p2: Vec) -> AffineMatrix:
        return AffineMatrix(1, 0, 0, 1, p2.x - p1.x, p2.y - p1.y)

    @staticmethod
    def from_rotation(degrees: float) -> AffineMatrix:
        radians = degrees * RADIANS_PER_DEGREE
        c = math.cos(radians)
        s = math.sin(radians)
        return AffineMatrix(c, s, -s, c, 0, 0)

    @staticmethod
    def from_center_scale(center: Vec, scale: Vec) -> AffineMatrix:
        x, y = center.x, center.y
        return AffineMatrix(scale.x, 0, 0, scale.y, x - x * scale.x, y - y * scale.y)

    @staticmethod
    def from_center_and_reference_points(center: Vec, p1: Vec, p2: Vec,
                                         allow_rotate: bool = True,
                                         allow_scale: bool = True,
                                         uniform_scale: bool = True) -> AffineMatrix:
        """Matrix that carries reference point ``p1`` to ``p2`` around ``center``.

        Args:
            center: Fixed point of the transform.
            p1: Reference point before the drag.
            p2: Reference point after the drag.
            allow_rotate: Rotate so ``p1``'s direction matches ``p2``'s.
            allow_scale: Scale by the distance ratio (or the projected ratio
                when rotation is not allowed).
            uniform_scale: Scale both axes; otherwise only the x axis of the
                rotated frame.
        """
        v1 = p1 - center
        v2 = p2 - center

        rotation1 = atan2(v1.y, v1.x)
        rotation2 = atan2(v2.y, v2.x) if allow_rotate else rotation1

        scale = 1.0
        if allow_scale:
            if allow_rotate:
                scale = v2.length() / v1.length()
            else:
                scale = v1.dot(v2) / v1.dot(v1)

        matrix1 = AffineMatrix.from_transform(Transform(position=center, rotation=rotation1))
        matrix2 = AffineMatrix.from_transform(Transform(
            position=center,
            rotation=rotation2,
            scale=Vec(scale, scale if uniform_scale else 1),
        ))
        return matrix1.invert().pre_mul(matrix2)

    @staticmethod
    def from_center_and_rotation_points(center: Vec, p1: Vec, p2: Vec) -> AffineMatrix:
        x, y = center.x, center.y
        radians = math.atan2(p2.y - y, p2.x - x) - math.atan2(p1.y - y, p1.x - x)
        return AffineMatrix._rotation_about(x, y, radians)

    @staticmethod
    def from_center_and_quantized_rotation_points(center: Vec, p1: Vec, p2: Vec,
                                                  increment_degrees: float) -> AffineMatrix:
        x, y = center.x, center.y
        radians = math.atan2(p2.y - y, p2.x - x) - math.atan2(p1.y - y, p1.x - x)
        steps = math.floor(radians * DEGREES_PER_RADIAN / increment_degrees + 0.5)
        return AffineMatrix._rotation_about(x, y, steps * increment_degrees * RADIANS_PER_DEGREE)

    @staticmethod
    def _rotation_about(x: float, y: float, radians: float) -> AffineMatrix:
        ct = math.cos(radians)
        st = math.sin(radians)
        return AffineMatrix(ct, st, -st, ct, x - x * ct + y * st, y - x * st - y * ct)

    @staticmethod
    def from_center_and_uniform_scale_points(center: Vec, p1: Vec, p2: Vec) -> AffineMatrix:
        x, y = center.x, center.y
        # An axis where p1 sits on the center does not constrain the scale
        ratios = [(p2.x - x) / (p1.x - x)] if p1.x != x else []
        if p1.y != y:
            ratios.append((p2.y - y) / (p1.y - y))
        s = min(ratios) if ratios else 1.0
        return AffineMatrix(s, 0, 0, s, x - x * s, y - y * s)

    @staticmethod
    def from_center_and_non_uniform_scale_points(center: Vec, p1: Vec, p2: Vec) -> AffineMatrix:
        x, y = center.x, center.y
        dx = p1.x - x
        dy = p1.y - y
        sx = 1.0 if dx == 0 else (p2.x - x) / dx
        sy = 1.0 if dy == 0 else (p2.y - y) / dy
        return AffineMatrix(sx, 0, 0, sy, x - x * sx, y - y * sy)

    @staticmethod
    def from_center_and_y_axis(center: Vec, y_axis: Vec) -> AffineMatrix:
        """Frame at ``center`` whose y axis is ``y_axis`` and x axis is its -90 degree turn."""
        return AffineMatrix(y_axis.y, -y_axis.x, y_axis.x, y_axis.y, center.x, center.y)
