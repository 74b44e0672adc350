"""Point hit testing against styled geometry.

A point hits a styled Path or Shape when it lies in the filled interior
(even-odd rule) or inside the band painted by a non-hairline stroke.
Strokes honour their alignment: centered bands straddle the outline,
inner bands lie inside the filled region and outer bands outside it.
"""

from __future__ import annotations

from typing import Optional

from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from ..domain.geometry import Geometry
from ..domain.style import Stroke
from ..domain.vec import Vec
from .shapely_engine import ShapelyPathOpsEngine


def stroke_band(engine: ShapelyPathOpsEngine, commands, stroke: Stroke) -> BaseGeometry:
    """Area painted by ``stroke`` along ``commands``."""
    if stroke.alignment == 'centered':
        return engine.stroke_outline(commands, stroke.width, stroke.cap, stroke.join, stroke.miter_limit)

    doubled = engine.stroke_outline(commands, stroke.width * 2, stroke.cap, stroke.join, stroke.miter_limit)
    region = engine.region(commands)
    if stroke.alignment == 'inner':
        return doubled.intersection(region)
    return doubled.difference(region)


def style_contains_point(item: Geometry, point: Vec,
                         engine: Optional[ShapelyPathOpsEngine] = None) -> bool:
    """True when ``point`` is painted by the fill or stroke of any part of ``item``.

    Args:
        item: Path, Shape or Group. Only shapes and paths outside shapes
            carry style; other entities never hit.
        point: Query point.
        engine: Engine used for flattening; a default one when omitted.
    """
    engine = engine or ShapelyPathOpsEngine()
    target = Point(point.x, point.y)
    for styled in item.all_shapes_and_orphaned_paths():
        commands = styled.to_path_commands()
        if not commands:
            continue
        if styled.fill is not None and engine.region(commands).covers(target):
            return True
        stroke = styled.stroke
        if stroke is not None and not stroke.hairline and stroke.width > 0:
            if stroke_band(engine, commands, stroke).covers(target):
                return True
    return False
