"""Path-command sequences exchanged with external path engines.

A command is a tuple whose first element is a ``Verb`` followed by flat
coordinates::

    (Verb.MOVE, x, y)
    (Verb.LINE, x, y)
    (Verb.QUAD, x1, y1, x, y)
    (Verb.CONIC, x1, y1, x, y, weight)
    (Verb.CUBIC, x1, y1, x2, y2, x, y)
    (Verb.CLOSE,)

The kernel emits only MOVE, LINE, CUBIC and CLOSE. QUAD and CONIC come
back from engines and are mapped to cubic handles: a conic whose weight
is within CONIC_WEIGHT_TOLERANCE of 1 becomes one cubic, any other conic
is subdivided once and each half becomes one cubic.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Sequence, Tuple

from ..constants import CONIC_WEIGHT_TOLERANCE
from ..domain.anchor import Anchor
from ..domain.vec import Vec

logger = logging.getLogger(__name__)

Command = Tuple
ContourData = Tuple[List[Anchor], bool]


class Verb(IntEnum):
    MOVE = 0
    LINE = 1
    QUAD = 2
    CONIC = 3
    CUBIC = 4
    CLOSE = 5


# Number of values following the verb in each command
_ARITY = {
    Verb.MOVE: 2,
    Verb.LINE: 2,
    Verb.QUAD: 4,
    Verb.CONIC: 5,
    Verb.CUBIC: 6,
    Verb.CLOSE: 0,
}


def validate_command(command: Sequence) -> Verb:
    """Return the command's verb, raising ValueError when the tuple is malformed."""
    if not command:
        raise ValueError("Empty path command")
    try:
        verb = Verb(command[0])
    except ValueError:
        raise ValueError(f"Unknown path command verb {command[0]!r}") from None
    if len(command) - 1 != _ARITY[verb]:
        raise ValueError(f"{verb.name} command takes {_ARITY[verb]} values, got {len(command) - 1}")
    return verb


# ---------------------------------------------------------------------------
# Conics
# ---------------------------------------------------------------------------

@dataclass
class Conic:
    """Rational quadratic from ``p0`` to ``p2`` with control ``p1`` and weight ``w``."""
    p0: Vec
    p1: Vec
    p2: Vec
    w: float

    def subdivide(self) -> Tuple[Conic, Conic]:
        """Split at the parameter midpoint into two conics of equal weight."""
        p0, p1, p2, w = self.p0, self.p1, self.p2, self.w
        q1 = (p0 + p1 * w) * (1 / (1 + w))
        q2 = (p0 + p1 * (2 * w) + p2) * (1 / (2 + 2 * w))
        q3 = (p1 * w + p2) * (1 / (1 + w))
        qw = math.sqrt((1 + w) / 2)
        return Conic(p0.clone(), q1, q2, qw), Conic(q2.clone(), q3, p2.clone(), qw)

    def approximate_cubic(self) -> List[Anchor]:
        """Two anchors whose single cubic segment approximates the conic."""
        p0, p1, p2, w = self.p0, self.p1, self.p2, self.w
        factor = (4 / 3) * w / (1 + w)
        handle_out = (p1 - p0) * factor
        handle_in = (p1 - p2) * factor
        return [Anchor(p0.clone(), Vec(0, 0), handle_out), Anchor(p2.clone(), handle_in, Vec(0, 0))]

    def approximate_cubic_pieces(self) -> List[Anchor]:
        """Anchors for one cubic, or two after a single subdivision when the weight is far from 1."""
        if abs(self.w - 1) < CONIC_WEIGHT_TOLERANCE:
            return self.approximate_cubic()
        first, second = self.subdivide()
        anchors1 = first.approximate_cubic()
        anchors2 = second.approximate_cubic()
        anchors2[0].handle_in = anchors1[-1].handle_in
        return anchors1[:-1] + anchors2


# ---------------------------------------------------------------------------
# Kernel -> commands
# ---------------------------------------------------------------------------

def _segment_command(a1: Anchor, a2: Anchor, scale: float) -> Command:
    if not a1.handle_out.is_zero() or not a2.handle_in.is_zero():
        return (
            Verb.CUBIC,
            (a1.position.x + a1.handle_out.x) * scale,
            (a1.position.y + a1.handle_out.y) * scale,
            (a2.position.x + a2.handle_in.x) * scale,
            (a2.position.y + a2.handle_in.y) * scale,
            a2.position.x * scale,
            a2.position.y * scale,
        )
    return (Verb.LINE, a2.position.x * scale, a2.position.y * scale)


def commands_for_contour(anchors: Sequence[Anchor], closed: bool, scale: float = 1.0) -> List[Command]:
    """Commands for one anchor loop. Empty for no anchors."""
    if not anchors:
        return []
    first = anchors[0]
    commands = [(Verb.MOVE, first.position.x * scale, first.position.y * scale)]
    for a1, a2 in zip(anchors[:-1], anchors[1:]):
        commands.append(_segment_command(a1, a2, scale))
    if closed:
        commands.append(_segment_command(anchors[-1], first, scale))
        commands.append((Verb.CLOSE,))
    return commands


def path_commands_for_geometry(item, scale: float = 1.0) -> List[Command]:
    """Commands for every path of ``item`` (a Path, Shape or Group), in order."""
    commands: List[Command] = []
    for path in item.all_paths():
        commands.extend(commands_for_contour(path.anchors, path.closed, scale))
    return commands


# ---------------------------------------------------------------------------
# Commands -> kernel
# ---------------------------------------------------------------------------

def contours_from_commands(commands: Iterable[Sequence], scale: float = 1.0) -> List[ContourData]:
    """Rebuild anchor lists from a command sequence.

    Args:
        commands: Command tuples, as produced by an engine.
        scale: Factor the coordinates were multiplied by; divided out here.

    Returns:
        List of ``(anchors, closed)`` tuples, one per MOVE.

    Raises:
        ValueError: On malformed commands.
    """
    inv_scale = 1 / scale
    contours: List[List] = []
    current = None

    def point(x, y) -> Vec:
        return Vec(x * inv_scale, y * inv_scale)

    for command in commands:
        verb = validate_command(command)
        if verb == Verb.MOVE:
            current = [[Anchor(point(command[1], command[2]))], False]
            contours.append(current)
            continue
        if current is None:
            logger.warning("Ignoring %s command before any MOVE", verb.name)
            continue

        anchors = current[0]
        last = anchors[-1]
        if verb == Verb.LINE:
            anchors.append(Anchor(point(command[1], command[2])))
        elif verb == Verb.CUBIC:
            last.handle_out = point(command[1], command[2]).sub(last.position)
            position = point(command[5], command[6])
            handle_in = point(command[3], command[4]).sub(position)
            anchors.append(Anchor(position, handle_in))
        elif verb in (Verb.QUAD, Verb.CONIC):
            weight = command[5] if verb == Verb.CONIC else 1.0
            conic = Conic(last.position.clone(), point(command[1], command[2]),
                          point(command[3], command[4]), weight)
            pieces = conic.approximate_cubic_pieces()
            last.handle_out = pieces[0].handle_out
            anchors.extend(pieces[1:])
        elif verb == Verb.CLOSE:
            current[1] = True
            # The explicit closing segment lands back on the first anchor
            first = anchors[0]
            if len(anchors) > 1 and last.position.equals(first.position):
                first.handle_in = last.handle_in
                anchors.pop()

    return [(anchors, closed) for anchors, closed in contours]
