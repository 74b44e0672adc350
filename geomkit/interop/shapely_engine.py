"""Path-operations engine backed by shapely.

Implements the ``PathOpsEngine`` protocol so that ``Shape`` boolean
operations, ``Shape.stroke_geometry`` and tight bounding boxes work
without a native path library.

Algorithm Overview:
    Operands arrive as path-command lists. Each contour is flattened into
    a ring, sampling every cubic segment ``samples_per_cubic`` times with
    numpy. The rings of one operand are folded into a region: with the
    even-odd rule by symmetric difference, with the winding rule by
    union. Regions are then combined with shapely's ``union``,
    ``intersection`` or ``difference``. Strokes are shapely buffers of
    the flattened contours. Results come back as closed, all-linear
    contours, one per polygon ring.

    Tight bounds do not need flattening: fontTools' ``BoundsPen`` finds
    the exact cubic extrema.

Example usage:
    Registering a precise engine::

        from geomkit.domain.engine import register_engine
        from geomkit.interop.shapely_engine import ShapelyPathOpsEngine

        register_engine(ShapelyPathOpsEngine.create_precise())
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from fontTools.pens.boundsPen import BoundsPen
from shapely.geometry import LinearRing, LineString, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from shapely.validation import make_valid

from ..curves.bezier import points_on_cubic_at_times
from ..curves.commands import Verb, contours_from_commands
from ..curves.segment import cubic_from_segment, is_segment_linear
from ..domain.engine import check_operation
from ..domain.shape import Shape
from ..domain.style import check_stroke_options
from ..utils.sequences import pairs
from .pens import draw

logger = logging.getLogger(__name__)

# Kernel stroke option names to shapely buffer style names
CAP_STYLES = {'butt': 'flat', 'round': 'round', 'square': 'square'}
JOIN_STYLES = {'miter': 'mitre', 'round': 'round', 'bevel': 'bevel'}


def flatten_contour(anchors, closed: bool, samples_per_cubic: int) -> np.ndarray:
    """Polyline through a contour as an ``(n, 2)`` array.

    Linear segments contribute their end point, cubic segments
    ``samples_per_cubic`` evenly spaced parameter samples.
    """
    if not anchors:
        return np.empty((0, 2))
    times = np.linspace(0.0, 1.0, samples_per_cubic + 1)[1:]
    chunks = [np.array([[anchors[0].position.x, anchors[0].position.y]])]
    for segment in pairs(anchors, closed):
        if is_segment_linear(segment):
            end = segment[1].position
            chunks.append(np.array([[end.x, end.y]]))
        else:
            chunks.append(points_on_cubic_at_times(cubic_from_segment(segment), times))
    return np.vstack(chunks)


def polygon_rings(geometry: BaseGeometry) -> List[np.ndarray]:
    """Exterior and interior rings of every polygon in ``geometry``."""
    rings = []
    for part in getattr(geometry, 'geoms', [geometry]):
        if part.is_empty:
            continue
        if part.geom_type == 'Polygon':
            rings.append(np.asarray(part.exterior.coords))
            rings.extend(np.asarray(interior.coords) for interior in part.interiors)
        elif part.geom_type in ('MultiPolygon', 'GeometryCollection'):
            rings.extend(polygon_rings(part))
    return rings


def commands_for_rings(rings: Sequence[np.ndarray]) -> List[tuple]:
    """Closed linear contours; the repeated closing coordinate is dropped."""
    commands: List[tuple] = []
    for ring in rings:
        if len(ring) > 1 and np.array_equal(ring[0], ring[-1]):
            ring = ring[:-1]
        if len(ring) == 0:
            continue
        commands.append((Verb.MOVE, float(ring[0][0]), float(ring[0][1])))
        commands.extend((Verb.LINE, float(x), float(y)) for x, y in ring[1:])
        commands.append((Verb.CLOSE,))
    return commands


def _polygonal(geometry: BaseGeometry) -> BaseGeometry:
    """Polygonal part of a repaired geometry; make_valid may add stray lines or points."""
    parts = [part for part in getattr(geometry, 'geoms', [geometry])
             if part.geom_type in ('Polygon', 'MultiPolygon')]
    return unary_union(parts) if parts else Polygon()


class ShapelyPathOpsEngine:
    """Boolean operations and stroking on flattened contours.

    Attributes:
        samples_per_cubic: Polyline samples per cubic segment.
        quad_segs: Segments per quarter circle for round caps and joins.
    """

    def __init__(self, samples_per_cubic: int = 32, quad_segs: int = 8):
        if samples_per_cubic < 1:
            raise ValueError(f"samples_per_cubic must be positive, got {samples_per_cubic}")
        self.samples_per_cubic = samples_per_cubic
        self.quad_segs = quad_segs

    @classmethod
    def create_fast(cls) -> ShapelyPathOpsEngine:
        return cls(samples_per_cubic=8, quad_segs=4)

    @classmethod
    def create_precise(cls) -> ShapelyPathOpsEngine:
        return cls(samples_per_cubic=128, quad_segs=32)

    # -----------------------------------------------------------------------
    # Commands <-> shapely
    # -----------------------------------------------------------------------

    def _contours(self, commands) -> List[Tuple[np.ndarray, bool]]:
        return [(flatten_contour(anchors, closed, self.samples_per_cubic), closed)
                for anchors, closed in contours_from_commands(commands)]

    def region(self, commands, fill_rule: str = 'evenodd') -> BaseGeometry:
        """Area enclosed by ``commands``; open contours are closed implicitly."""
        region = Polygon()
        for points, _ in self._contours(commands):
            if len(points) < 3:
                continue
            polygon = Polygon(points)
            if not polygon.is_valid:
                polygon = _polygonal(make_valid(polygon))
            if fill_rule == 'winding':
                region = region.union(polygon)
            else:
                region = region.symmetric_difference(polygon)
        return region

    def _result_commands(self, geometry: BaseGeometry, operation: str) -> List[tuple]:
        if not isinstance(geometry, BaseGeometry):
            raise RuntimeError(f"shapely {operation} returned {type(geometry).__name__}, not a geometry")
        commands = commands_for_rings(polygon_rings(geometry))
        logger.debug("%s produced %d commands", operation, len(commands))
        return commands

    # -----------------------------------------------------------------------
    # PathOpsEngine protocol
    # -----------------------------------------------------------------------

    def combine(self, operands, operation: str, fill_rule: str = 'evenodd') -> List[tuple]:
        check_operation(operation, fill_rule)
        regions = [self.region(commands, fill_rule) for commands in operands]
        if not regions:
            return []
        if operation == 'union':
            result = unary_union(regions)
        else:
            result = regions[0]
            for other in regions[1:]:
                if operation == 'intersect':
                    result = result.intersection(other)
                else:
                    result = result.difference(other)
        return self._result_commands(result, operation)

    def stroke_outline(self, commands, width: float, cap: str = 'butt', join: str = 'miter',
                       miter_limit: float = 4.0) -> BaseGeometry:
        """Shapely geometry covered by a centered stroke of ``commands``."""
        check_stroke_options(cap, join)
        pieces = []
        for points, closed in self._contours(commands):
            if len(points) == 0:
                continue
            if len(points) == 1:
                points = np.vstack([points, points])
            # Closed contours already end on their first point; a ring has no caps
            line = LinearRing(points) if closed and len(points) >= 4 else LineString(points)
            pieces.append(line.buffer(
                width / 2,
                quad_segs=self.quad_segs,
                cap_style=CAP_STYLES[cap],
                join_style=JOIN_STYLES[join],
                mitre_limit=miter_limit,
            ))
        return unary_union(pieces) if pieces else Polygon()

    def stroke(self, commands, width: float, cap: str = 'butt', join: str = 'miter',
               miter_limit: float = 4.0) -> List[tuple]:
        return self._result_commands(self.stroke_outline(commands, width, cap, join, miter_limit), 'stroke')

    def tight_bounds(self, commands) -> Optional[Tuple[float, float, float, float]]:
        pen = BoundsPen(None)
        draw(Shape.from_path_commands(commands), pen)
        return pen.bounds
