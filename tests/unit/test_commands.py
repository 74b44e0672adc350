"""Unit tests for path-command conversion.

Tests geomkit.curves.commands:
    - Command validation
    - Kernel anchors to MOVE/LINE/CUBIC/CLOSE commands
    - Commands back to anchors, including QUAD and CONIC mapping
"""

import math

import pytest

from geomkit.curves.commands import (
    Conic,
    Verb,
    commands_for_contour,
    contours_from_commands,
    path_commands_for_geometry,
    validate_command,
)
from geomkit.domain import Anchor, Path, Shape, Vec


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("command", [
    (),
    (42, 0, 0),
    (Verb.LINE, 1),
    (Verb.CLOSE, 0),
    (Verb.CUBIC, 0, 0, 1, 1, 2),
])
def test_malformed_commands_raise(command):
    """Unknown verbs and wrong arities are ValueErrors."""
    with pytest.raises(ValueError):
        validate_command(command)


def test_validate_returns_verb():
    """Plain ints are accepted and mapped to the verb."""
    assert validate_command((1, 3.0, 4.0)) is Verb.LINE


# -----------------------------------------------------------------------------
# Anchors -> commands
# -----------------------------------------------------------------------------

def test_closed_square_commands(unit_square_path):
    """A closed polygon emits MOVE, a LINE per edge including the closing one, then CLOSE."""
    commands = commands_for_contour(unit_square_path.anchors, True)
    assert [c[0] for c in commands] == [Verb.MOVE, Verb.LINE, Verb.LINE, Verb.LINE, Verb.LINE, Verb.CLOSE]
    assert commands[0] == (Verb.MOVE, 0, 0)
    assert commands[4] == (Verb.LINE, 0, 0)


def test_cubic_command_uses_absolute_handles():
    """Relative handles become absolute control points."""
    anchors = [Anchor(Vec(0, 0), handle_out=Vec(0, 10)), Anchor(Vec(20, 0), handle_in=Vec(0, 10))]
    commands = commands_for_contour(anchors, False)
    assert commands[1] == (Verb.CUBIC, 0, 10, 20, 10, 20, 0)


def test_scale_multiplies_coordinates():
    """Every coordinate is multiplied by the scale."""
    commands = commands_for_contour([Anchor(Vec(1, 2)), Anchor(Vec(3, 4))], False, scale=10)
    assert commands == [(Verb.MOVE, 10, 20), (Verb.LINE, 30, 40)]


def test_empty_contour():
    """No anchors emit nothing."""
    assert commands_for_contour([], True) == []


def test_geometry_commands_cover_all_paths():
    """A shape emits one MOVE per path."""
    shape = Shape([Path.rect(0, 0, 1, 1), Path.rect(5, 5, 1, 1)])
    commands = path_commands_for_geometry(shape)
    assert sum(1 for c in commands if c[0] == Verb.MOVE) == 2


# -----------------------------------------------------------------------------
# Commands -> anchors
# -----------------------------------------------------------------------------

def test_round_trip_closed_path_merges_closing_anchor(unit_square_path):
    """The explicit closing segment does not add a duplicate anchor."""
    contours = contours_from_commands(commands_for_contour(unit_square_path.anchors, True))
    assert len(contours) == 1
    anchors, closed = contours[0]
    assert closed
    assert [a.position for a in anchors] == [a.position for a in unit_square_path.anchors]


def test_closing_cubic_handle_moves_to_first_anchor():
    """A curved closing segment's incoming handle lands on the first anchor."""
    commands = [
        (Verb.MOVE, 0, 0),
        (Verb.LINE, 10, 0),
        (Verb.CUBIC, 10, 10, 0, 10, 0, 0),
        (Verb.CLOSE,),
    ]
    anchors, closed = contours_from_commands(commands)[0]
    assert closed
    assert len(anchors) == 2
    assert anchors[0].handle_in == Vec(0, 10)
    assert anchors[1].handle_out == Vec(0, 10)


def test_open_contours_and_scale():
    """Coordinates are divided by the scale; contours without CLOSE stay open."""
    commands = [(Verb.MOVE, 10, 10), (Verb.LINE, 20, 10), (Verb.MOVE, 0, 0), (Verb.LINE, 0, 50)]
    contours = contours_from_commands(commands, scale=10)
    assert len(contours) == 2
    assert all(not closed for _, closed in contours)
    assert contours[0][0][1].position == Vec(2, 1)


def test_commands_before_move_are_ignored():
    """A LINE without a current contour is skipped."""
    assert contours_from_commands([(Verb.LINE, 1, 1)]) == []


def test_quad_becomes_exact_cubic():
    """Quadratic controls are raised to cubic handles at two thirds."""
    anchors, _ = contours_from_commands([(Verb.MOVE, 0, 0), (Verb.QUAD, 30, 30, 60, 0)])[0]
    assert len(anchors) == 2
    assert anchors[0].handle_out.equals_within_tolerance(Vec(20, 20), 1e-9)
    assert anchors[1].handle_in.equals_within_tolerance(Vec(-20, 20), 1e-9)


def test_conic_far_from_unit_weight_is_subdivided():
    """A quarter circle conic is split once into two cubics."""
    weight = math.sqrt(2) / 2
    anchors, _ = contours_from_commands([(Verb.MOVE, 1, 0), (Verb.CONIC, 1, 1, 0, 1, weight)])[0]
    assert len(anchors) == 3
    middle = anchors[1].position
    assert middle.length() == pytest.approx(1, abs=1e-9)
    assert middle.x == pytest.approx(middle.y, abs=1e-9)


def test_conic_subdivide_shares_midpoint():
    """Both halves meet at the same point and share a weight."""
    conic = Conic(Vec(1, 0), Vec(1, 1), Vec(0, 1), math.sqrt(2) / 2)
    first, second = conic.subdivide()
    assert first.p2 == second.p0
    assert first.w == second.w
