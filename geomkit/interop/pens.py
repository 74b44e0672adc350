"""Bridge between geometry entities and fontTools pens.

fontTools pens (``moveTo``, ``lineTo``, ``curveTo``, ``qCurveTo``,
``closePath``, ``endPath``) are the traversal protocol used to hand
outlines to and from font tooling. ``draw`` replays any entity into a
pen; ``shape_from_recording`` builds a ``Shape`` from the operations a
``RecordingPen`` captured, including TrueType ``qCurveTo`` runs whose
on-curve points are implied midpoints.

Example usage:
    Importing a glyph outline::

        from fontTools.pens.recordingPen import RecordingPen
        from fontTools.ttLib import TTFont
        from geomkit.interop.pens import shape_from_recording

        glyphset = TTFont('font.ttf').getGlyphSet()
        pen = RecordingPen()
        glyphset['A'].draw(pen)
        shape = shape_from_recording(pen)
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple, Union

from fontTools.pens.basePen import decomposeQuadraticSegment, decomposeSuperBezierSegment
from fontTools.pens.recordingPen import RecordingPen

from ..curves.commands import Verb
from ..domain.geometry import Geometry
from ..domain.shape import Shape

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class PenCanvas:
    """``CanvasContext`` that forwards traversal calls to a fontTools pen.

    Contours left open when the next ``move_to`` arrives, or when
    ``finish`` is called, are ended with ``endPath``.
    """

    def __init__(self, pen):
        self.pen = pen
        self._contour_open = False

    def move_to(self, x: float, y: float) -> None:
        self.finish()
        self.pen.moveTo((x, y))
        self._contour_open = True

    def line_to(self, x: float, y: float) -> None:
        self.pen.lineTo((x, y))

    def bezier_curve_to(self, cp1x: float, cp1y: float, cp2x: float, cp2y: float,
                        x: float, y: float) -> None:
        self.pen.curveTo((cp1x, cp1y), (cp2x, cp2y), (x, y))

    def close_path(self) -> None:
        self.pen.closePath()
        self._contour_open = False

    def finish(self) -> None:
        if self._contour_open:
            self.pen.endPath()
            self._contour_open = False


def draw(item: Geometry, pen) -> None:
    """Replay every path of ``item`` into ``pen``."""
    canvas = PenCanvas(pen)
    for path in item.all_paths():
        path.to_canvas_path(canvas)
    canvas.finish()


def recording_for_geometry(item: Geometry) -> RecordingPen:
    pen = RecordingPen()
    draw(item, pen)
    return pen


# ---------------------------------------------------------------------------
# Recording -> Shape
# ---------------------------------------------------------------------------

def _quad_commands(points: Sequence[Point]) -> List[tuple]:
    return [(Verb.QUAD, c[0], c[1], p[0], p[1]) for c, p in decomposeQuadraticSegment(points)]


def commands_from_recording(value: Sequence[Tuple[str, tuple]]) -> List[tuple]:
    """Translate recorded pen operations into path commands.

    Args:
        value: ``RecordingPen.value``, a list of ``(operator, points)``.

    Returns:
        Command tuples as understood by ``Shape.from_path_commands``.
    """
    commands: List[tuple] = []
    for op, args in value:
        if op == 'moveTo':
            commands.append((Verb.MOVE, args[0][0], args[0][1]))
        elif op == 'lineTo':
            commands.append((Verb.LINE, args[0][0], args[0][1]))
        elif op == 'curveTo':
            for c1, c2, p in decomposeSuperBezierSegment(args) if len(args) > 3 else [args]:
                commands.append((Verb.CUBIC, c1[0], c1[1], c2[0], c2[1], p[0], p[1]))
        elif op == 'qCurveTo':
            if args[-1] is None:
                # Closed contour of off-curve points only; start at an implied midpoint
                off_curve = args[:-1]
                start = ((off_curve[-1][0] + off_curve[0][0]) / 2,
                         (off_curve[-1][1] + off_curve[0][1]) / 2)
                commands.append((Verb.MOVE, start[0], start[1]))
                commands.extend(_quad_commands(tuple(off_curve) + (start,)))
            elif len(args) == 1:
                commands.append((Verb.LINE, args[0][0], args[0][1]))
            else:
                commands.extend(_quad_commands(args))
        elif op == 'closePath':
            commands.append((Verb.CLOSE,))
        elif op == 'endPath':
            continue
        else:
            logger.warning("Ignoring unsupported pen operation %s", op)
    return commands


def shape_from_recording(recording: Union[RecordingPen, Sequence[Tuple[str, tuple]]]) -> Shape:
    """Shape with one path per contour recorded by a ``RecordingPen``."""
    value = recording.value if isinstance(recording, RecordingPen) else recording
    return Shape.from_path_commands(commands_from_recording(value))
