"""Bridges between the kernel and other libraries.

The package is organized into the following modules:
    pens: Replay geometry into fontTools pens and build shapes from a
        ``RecordingPen``.
    structured: Tagged-dict import and export.
    shapely_engine: ``ShapelyPathOpsEngine``, the shapely-backed path
        engine for boolean operations, stroking and tight bounds.
    hit_testing: Styled point containment.

Example usage:
    Enabling engine-backed operations::

        from geomkit import register_engine
        from geomkit.interop import ShapelyPathOpsEngine

        register_engine(ShapelyPathOpsEngine())
"""

from .hit_testing import style_contains_point
from .pens import PenCanvas, draw, shape_from_recording
from .shapely_engine import ShapelyPathOpsEngine
from .structured import from_dict, to_dict

__all__ = [
    # fontTools
    'PenCanvas', 'draw', 'shape_from_recording',
    # Structured data
    'to_dict', 'from_dict',
    # Engine
    'ShapelyPathOpsEngine', 'style_contains_point',
]
