"""Curve algorithms over plain point lists.

The package is organized into the following modules:
    bezier: Cubic evaluation, de Casteljau subdivision and trimming, and
        the Bernstein-form closest point root finder.
    segment: Line/cubic view of anchor pairs, arc length, and line-line,
        line-cubic and cubic-cubic intersections.
    commands: Path-command sequences exchanged with path engines.

Example usage:
    Intersecting two primitives::

        from geomkit.curves import primitive_primitive_intersections
        from geomkit.domain import Vec

        line = [Vec(0, 0), Vec(100, 100)]
        cubic = [Vec(0, 100), Vec(30, 0), Vec(70, 0), Vec(100, 100)]
        for hit in primitive_primitive_intersections(line, cubic):
            print(hit.time1, hit.time2)
"""

from .bezier import (
    cubic_by_trimming_cubic,
    cubics_by_splitting_cubic_at_time,
    find_roots,
    point_on_cubic_at_time,
    points_on_cubic_at_times,
    position_and_time_at_closest_point_on_cubic,
    split_bezier,
)
from .commands import Conic, Verb, commands_for_contour, contours_from_commands, path_commands_for_geometry
from .segment import (
    Intersection,
    cubic_cubic_intersections,
    cubic_self_intersections,
    line_cubic_intersections,
    line_line_intersections,
    primitive_primitive_intersections,
    segment_length,
)

__all__ = [
    # Bezier
    'point_on_cubic_at_time', 'points_on_cubic_at_times', 'split_bezier',
    'cubics_by_splitting_cubic_at_time', 'cubic_by_trimming_cubic',
    'find_roots', 'position_and_time_at_closest_point_on_cubic',
    # Segments
    'Intersection', 'segment_length', 'line_line_intersections',
    'line_cubic_intersections', 'cubic_cubic_intersections',
    'cubic_self_intersections', 'primitive_primitive_intersections',
    # Commands
    'Verb', 'Conic', 'commands_for_contour', 'contours_from_commands',
    'path_commands_for_geometry',
]
