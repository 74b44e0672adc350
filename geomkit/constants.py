"""Numeric constants shared across the geometry kernel.

Tolerances, precision defaults and the depth bounds of the recursive curve
algorithms live here so callers can inspect them in one place.
"""

import math
import sys

# Absolute tolerance used for "close enough" comparisons of coordinates.
DEFAULT_TOLERANCE = 0.001

# Smallest tolerance a caller should ask for before float noise dominates.
MINIMUM_TOLERANCE = 1e-6

# Fraction digits used when formatting numbers for display or code.
DEFAULT_PRECISION = 6

# Relative epsilon for magnitude-aware float comparisons.
DEFAULT_EPSILON = sys.float_info.epsilon

RADIANS_PER_DEGREE = math.pi / 180
DEGREES_PER_RADIAN = 180 / math.pi
TAU = math.pi * 2

# ---------------------------------------------------------------------------
# Curve algorithm bounds
# ---------------------------------------------------------------------------

# Bezier clipping recursion limit; at this depth the interval midpoint is taken.
FIND_ROOTS_MAX_DEPTH = 64

# Control polygon flatness threshold for accepting a chord root.
FIND_ROOTS_EPSILON = 2.0 ** (-FIND_ROOTS_MAX_DEPTH - 1)

# Polyline samples used to approximate cubic arc length.
CUBIC_LENGTH_SUBDIVISIONS = 16

# Cubic-cubic subdivision: bounding box pruning levels, then chord pruning.
CUBIC_INTERSECTION_BOUNDING_BOX_ITERATIONS = 10
CUBIC_INTERSECTION_MAX_ITERATIONS = 20

# Coefficient magnitude below which the cubic solver drops a degree.
CUBIC_SOLVER_EPSILON = 1e-10

# Squared basis length below which a matrix basis is treated as degenerate.
BASIS_USABLE_LENGTH_SQUARED = 1e-7

# Conics closer than this to weight 1 are converted to a single cubic.
CONIC_WEIGHT_TOLERANCE = 0.01
