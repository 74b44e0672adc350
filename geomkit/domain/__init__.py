"""Geometry value objects and entities.

The package is organized into the following modules:
    vec: ``Vec``, the mutable 2-vector.
    matrix: ``AffineMatrix`` and its ``Transform`` decomposition.
    bounding_box: ``BoundingBox`` axis-aligned boxes.
    style: ``Color``, ``Stroke`` and ``Fill`` records.
    geometry: ``Geometry`` base class and ``ClosestPointResult``.
    anchor: ``Anchor`` path vertices.
    engine: Registry for the external path-operations engine.
    path: ``Path`` anchor sequences.
    shape: ``Shape`` compound outlines and boolean operations.
    group: ``Group`` containers and path joining.
    axis: ``Axis`` infinite lines.

Example usage:
    Building and querying a path::

        from geomkit.domain import Path, Vec

        path = Path.from_points([Vec(0, 0), Vec(100, 0), Vec(100, 100)])
        result = path.closest_point_within_distance_to_point(20, Vec(50, 10))
        print(result.distance, result.time)
"""

# Leaf modules first: path imports geomkit.curves, which imports them.
from .vec import Vec
from .matrix import AffineMatrix, Transform
from .bounding_box import BoundingBox
from .style import Color, Fill, Stroke
from .geometry import CanvasContext, ClosestPointResult, Geometry
from .anchor import Anchor
from .engine import PathOpsEngine, get_engine, register_engine, unregister_engine
from .path import Path
from .shape import Shape
from .group import Group
from .axis import Axis

__all__ = [
    # Values
    'Vec', 'AffineMatrix', 'Transform', 'BoundingBox',
    # Style
    'Color', 'Fill', 'Stroke',
    # Entities
    'Geometry', 'ClosestPointResult', 'CanvasContext',
    'Anchor', 'Path', 'Shape', 'Group', 'Axis',
    # Engine
    'PathOpsEngine', 'register_engine', 'unregister_engine', 'get_engine',
]
