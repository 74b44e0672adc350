"""Integration tests for the fontTools pen bridge."""

import logging

import pytest
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.recordingPen import RecordingPen

from geomkit.domain import Group, Path, Shape, Vec
from geomkit.interop.pens import PenCanvas, draw, recording_for_geometry, shape_from_recording

pytestmark = pytest.mark.integration


def positions(path):
    return [(a.position.x, a.position.y) for a in path.anchors]


# -----------------------------------------------------------------------------
# Geometry -> pen
# -----------------------------------------------------------------------------

def test_closed_path_recording(unit_square_path):
    """A closed path draws its closing segment and closes the contour."""
    pen = recording_for_geometry(unit_square_path)

    ops = [op for op, _ in pen.value]
    assert ops == ['moveTo', 'lineTo', 'lineTo', 'lineTo', 'lineTo', 'closePath']
    assert pen.value[-2] == ('lineTo', ((0, 0),))


def test_open_path_is_ended(quarter_circle_path):
    """Open contours finish with endPath."""
    pen = RecordingPen()
    draw(quarter_circle_path, pen)

    assert pen.value[0][0] == 'moveTo'
    assert pen.value[1][0] == 'curveTo'
    assert pen.value[-1] == ('endPath', ())


def test_group_draws_every_contour(unit_square_path, quarter_circle_path):
    """Each path of a group becomes its own contour."""
    pen = recording_for_geometry(Group([unit_square_path, Shape([quarter_circle_path])]))

    ops = [op for op, _ in pen.value]
    assert ops.count('moveTo') == 2
    assert ops.count('closePath') == 1
    assert ops.count('endPath') == 1


def test_canvas_finish_is_idempotent():
    """finish only ends a contour that is still open."""
    pen = RecordingPen()
    canvas = PenCanvas(pen)
    canvas.move_to(0, 0)
    canvas.line_to(1, 1)
    canvas.finish()
    canvas.finish()

    assert [op for op, _ in pen.value] == ['moveTo', 'lineTo', 'endPath']


def test_bounds_pen_measures_the_curve(sample_cubic):
    """Any fontTools pen can consume the path."""
    pen = BoundsPen(None)
    draw(Path.from_cubic_bezier_points(sample_cubic), pen)

    assert pen.bounds == pytest.approx((0, 0, 100, 75))


# -----------------------------------------------------------------------------
# Recording -> Shape
# -----------------------------------------------------------------------------

def test_round_trip_merges_closing_point(unit_square_path):
    """The explicit closing lineTo does not add a fifth anchor."""
    shape = shape_from_recording(recording_for_geometry(unit_square_path))

    assert len(shape.paths) == 1
    path = shape.paths[0]
    assert path.closed
    assert positions(path) == [(0, 0), (100, 0), (100, 100), (0, 100)]


def test_round_trip_keeps_curves(quarter_circle_path):
    """Cubic handles come back unchanged."""
    path = shape_from_recording(recording_for_geometry(quarter_circle_path)).paths[0]

    assert not path.closed
    assert len(path.anchors) == 2
    original = quarter_circle_path.anchors[0].handle_out
    assert path.anchors[0].handle_out.x == pytest.approx(original.x)
    assert path.anchors[0].handle_out.y == pytest.approx(original.y)


def test_quadratic_run_uses_implied_midpoints():
    """Consecutive off-curve points imply an on-curve point between them."""
    value = [
        ('moveTo', ((0, 0),)),
        ('qCurveTo', ((10, 10), (20, 10), (30, 0))),
        ('closePath', ()),
    ]

    path = shape_from_recording(value).paths[0]

    assert path.closed
    assert positions(path) == [(0, 0), (15, 10), (30, 0)]
    assert not path.anchors[0].handle_out.is_zero()


def test_all_off_curve_contour():
    """A None-terminated run starts between its last and first points."""
    value = [
        ('qCurveTo', ((0, 10), (10, 10), (10, 0), (0, 0), None)),
        ('closePath', ()),
    ]

    path = shape_from_recording(value).paths[0]

    assert path.closed
    assert positions(path) == [(0, 5), (5, 10), (10, 5), (5, 0)]


def test_single_point_qcurve_is_a_line():
    """qCurveTo with only an on-curve point is a straight segment."""
    value = [('moveTo', ((0, 0),)), ('qCurveTo', ((10, 0),)), ('endPath', ())]

    path = shape_from_recording(value).paths[0]

    assert positions(path) == [(0, 0), (10, 0)]
    assert path.anchors[0].handle_out.is_zero()


def test_super_bezier_is_split():
    """curveTo with more than two off-curve points becomes several cubics."""
    value = [
        ('moveTo', ((0, 0),)),
        ('curveTo', ((0, 10), (10, 20), (20, 10), (30, 0))),
        ('endPath', ()),
    ]

    path = shape_from_recording(value).paths[0]

    assert len(path.anchors) == 3
    assert path.anchors[-1].position == Vec(30, 0)


def test_recording_pen_object_accepted():
    """Both a RecordingPen and its value list are accepted."""
    pen = RecordingPen()
    pen.moveTo((0, 0))
    pen.lineTo((5, 5))
    pen.endPath()

    assert positions(shape_from_recording(pen).paths[0]) == [(0, 0), (5, 5)]


def test_unsupported_operation_is_logged(caplog):
    """Unknown pen operations are skipped with a warning."""
    value = [('moveTo', ((0, 0),)), ('addComponent', ('a', (1, 0, 0, 1, 0, 0))), ('lineTo', ((1, 0),))]

    with caplog.at_level(logging.WARNING, logger='geomkit.interop.pens'):
        shape = shape_from_recording(value)

    assert 'addComponent' in caplog.text
    assert positions(shape.paths[0]) == [(0, 0), (1, 0)]
