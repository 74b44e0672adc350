"""Scalar and sequence utilities.

This package holds the leaf helpers the rest of the kernel builds on.

Modules:
    scalar: Degree-based trigonometry, interpolation, modular arithmetic,
        tolerance comparisons and number formatting.
    sequences: Pairing and rotating lists of anchors.

Example usage:
    Walking a closed loop::

        from geomkit.utils import pairs

        for a, b in pairs(points, loop=True):
            ...
"""

from .scalar import (
    acos,
    angular_distance,
    asin,
    atan,
    atan2,
    clamp,
    cos,
    equal_within_relative_epsilon,
    equal_within_tolerance,
    expression_code_for_number,
    limited_precision_string_for_number,
    mix,
    modulo,
    modulo_distance,
    round_to_fixed,
    saturate,
    sin,
    smoothstep,
    tan,
)
from .sequences import index_range, pairs, rotate_list

__all__ = [
    # Trigonometry
    'sin', 'cos', 'tan', 'asin', 'acos', 'atan', 'atan2',
    # Interpolation
    'mix', 'clamp', 'saturate', 'smoothstep',
    # Modular arithmetic
    'modulo', 'modulo_distance', 'angular_distance',
    # Comparison and formatting
    'equal_within_relative_epsilon', 'equal_within_tolerance',
    'round_to_fixed', 'limited_precision_string_for_number',
    'expression_code_for_number',
    # Sequences
    'index_range', 'pairs', 'rotate_list',
]
