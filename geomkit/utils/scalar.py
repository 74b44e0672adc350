"""Scalar math helpers.

Trigonometry in this module works in degrees: ``sin``, ``cos`` and ``tan``
take degrees, the inverse functions return degrees. Everything else is
plain float arithmetic used by the vector, matrix and curve code.

The module provides the following groups of functions:
    Trigonometry: sin, cos, tan, asin, acos, atan, atan2.
    Interpolation: mix, clamp, saturate, smoothstep.
    Modular arithmetic: modulo, modulo_distance, angular_distance.
    Comparison: equal_within_relative_epsilon, equal_within_tolerance.
    Formatting: round_to_fixed, limited_precision_string_for_number,
        expression_code_for_number.

Example usage:
    Degree-based trigonometry::

        from geomkit.utils.scalar import atan2, cos

        cos(60)          # 0.5 (within float precision)
        atan2(1, 1)      # 45.0

    Choosing a comparison mode::

        equal_within_tolerance(100.0004, 100.0)         # True, absolute
        equal_within_relative_epsilon(1e9, 1e9 + 1e-7)  # True, relative
"""

from __future__ import annotations

import math

from ..constants import (
    DEFAULT_EPSILON,
    DEFAULT_PRECISION,
    DEFAULT_TOLERANCE,
    DEGREES_PER_RADIAN,
    RADIANS_PER_DEGREE,
)


# ---------------------------------------------------------------------------
# Trigonometry (degrees)
# ---------------------------------------------------------------------------

def sin(angle: float) -> float:
    return math.sin(angle * RADIANS_PER_DEGREE)


def cos(angle: float) -> float:
    return math.cos(angle * RADIANS_PER_DEGREE)


def tan(angle: float) -> float:
    return math.tan(angle * RADIANS_PER_DEGREE)


def asin(x: float) -> float:
    return math.asin(x) * DEGREES_PER_RADIAN


def acos(x: float) -> float:
    return math.acos(x) * DEGREES_PER_RADIAN


def atan(x: float) -> float:
    return math.atan(x) * DEGREES_PER_RADIAN


def atan2(y: float, x: float) -> float:
    return math.atan2(y, x) * DEGREES_PER_RADIAN


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------

def mix(a: float, b: float, t: float) -> float:
    """Linear interpolation from ``a`` (t=0) to ``b`` (t=1)."""
    return a + (b - a) * t


def clamp(x: float, min_value: float, max_value: float) -> float:
    if x < min_value:
        return min_value
    if x > max_value:
        return max_value
    return x


def saturate(x: float) -> float:
    """Clamp to the unit interval."""
    if x < 0:
        return 0.0
    if x > 1:
        return 1.0
    return x


def smoothstep(edge0: float, edge1: float, x: float) -> float:
    """Hermite interpolation between two edges, 0 below edge0 and 1 above edge1."""
    x = saturate((x - edge0) / (edge1 - edge0))
    return x * x * (3 - 2 * x)


# ---------------------------------------------------------------------------
# Modular arithmetic
# ---------------------------------------------------------------------------

def modulo(x: float, base: float) -> float:
    """Remainder that is never negative for a positive base.

    Python's ``%`` already follows the sign of the divisor, so this is a
    named wrapper that keeps call sites readable next to modulo_distance.
    """
    return x % base


def modulo_distance(a: float, b: float, base: float) -> float:
    """Shortest distance between ``a`` and ``b`` on a circle of length ``base``."""
    diff = abs(b - a) % base
    return base - diff if diff > base / 2 else diff


def angular_distance(a: float, b: float) -> float:
    """Shortest angle in degrees between two headings."""
    return modulo_distance(a, b, 360)


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def equal_within_relative_epsilon(a: float, b: float, epsilon: float = DEFAULT_EPSILON) -> bool:
    """True when ``|a - b| <= max(|a|, |b|) * epsilon``.

    Use for quantities whose magnitude is unknown in advance. Note that
    nothing is relatively close to zero except zero itself.
    """
    return abs(b - a) <= max(abs(a), abs(b)) * epsilon


def equal_within_tolerance(a: float, b: float, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """True when ``|a - b| <= tolerance``."""
    return abs(a - b) <= tolerance


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def round_to_fixed(x: float, fraction_digits: int) -> float:
    scale = 10 ** fraction_digits
    return math.floor(x * scale + 0.5) / scale


def limited_precision_string_for_number(
    x: float,
    min_fraction_digits: int = 0,
    max_fraction_digits: int = DEFAULT_PRECISION,
) -> str:
    """Format ``x`` with at most ``max_fraction_digits`` decimals.

    Trailing zeros are trimmed, keeping at least ``min_fraction_digits``,
    and the result never ends with a bare decimal point.

    Args:
        x: Number to format.
        min_fraction_digits: Fraction digits always kept.
        max_fraction_digits: Fraction digits at most.

    Returns:
        Decimal string such as ``"1.5"``, ``"2"`` or ``"0.333333"``.

    Example:
        >>> limited_precision_string_for_number(1.50)
        '1.5'
        >>> limited_precision_string_for_number(2, 2)
        '2.00'
    """
    text = f"{x:.{max_fraction_digits}f}"
    if max_fraction_digits > 0:
        # Shortest allowed length: integer part, the point and the kept digits
        min_length = len(text) - max_fraction_digits + min_fraction_digits
        trimmed = text.rstrip('0')
        if len(trimmed) < min_length:
            trimmed = text[:min_length]
        if trimmed.endswith('.'):
            trimmed = trimmed[:-1]
        text = trimmed
    if text.startswith('-') and float(text) == 0:
        text = text[1:]
    return text


def expression_code_for_number(
    x: float,
    min_fraction_digits: int = 0,
    max_fraction_digits: int = DEFAULT_PRECISION,
) -> str:
    """Format a number as a code literal, spelling out non-finite values."""
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'Infinity' if x > 0 else '-Infinity'
    return limited_precision_string_for_number(x, min_fraction_digits, max_fraction_digits)
