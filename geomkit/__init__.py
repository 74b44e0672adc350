"""2D vector-geometry kernel.

Points, affine transforms, bezier paths, compound shapes and groups, with
bounding box, intersection and closest point queries.

Architecture Overview:
    utils and constants are leaf helpers. domain holds the value objects
    (Vec, AffineMatrix, BoundingBox) and the entity tree (Anchor, Path,
    Shape, Group, Axis). curves holds the numerical algorithms the
    entities call per segment. interop connects the kernel to other
    libraries: fontTools pens, plain dicts, and a shapely-backed engine
    for boolean operations and stroking.

The package is organized into the following modules:
    constants: Tolerances and recursion bounds.
    logging_config: ``configure_logging`` for applications.
    utils: Scalar math and list helpers.
    domain: Geometry value objects and entities.
    curves: Bezier, segment and path-command algorithms.
    interop: fontTools, dict and shapely bridges.

Example usage:
    Transforming and measuring a circle::

        from geomkit import AffineMatrix, Path, Vec

        circle = Path.circle(Vec(0, 0), 50)
        circle.affine_transform(AffineMatrix.from_rotation(45))
        print(circle.length(), circle.loose_bounding_box())

    Enabling boolean operations::

        from geomkit import Path, Shape, register_engine
        from geomkit.interop import ShapelyPathOpsEngine

        register_engine(ShapelyPathOpsEngine())
        union = Shape.boolean_union([Path.rect(0, 0, 10, 10), Path.rect(5, 5, 10, 10)])

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .domain import (
    AffineMatrix,
    Anchor,
    Axis,
    BoundingBox,
    ClosestPointResult,
    Color,
    Fill,
    Geometry,
    Group,
    Path,
    Shape,
    Stroke,
    Transform,
    Vec,
    get_engine,
    register_engine,
    unregister_engine,
)
from .logging_config import configure_logging

__all__ = [
    # Values
    'Vec', 'AffineMatrix', 'Transform', 'BoundingBox',
    # Entities
    'Geometry', 'ClosestPointResult', 'Anchor', 'Path', 'Shape', 'Group', 'Axis',
    # Style
    'Color', 'Fill', 'Stroke',
    # Engine
    'register_engine', 'unregister_engine', 'get_engine',
    # Logging
    'configure_logging',
]

__version__ = '1.0.0'
