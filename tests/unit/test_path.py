"""Unit tests for Path.

Tests geomkit.domain.path.Path:
    - Length, arc-length and time conversions
    - Position, derivative and normal queries
    - Anchor insertion and splitting
    - Polygonization
    - Closest point and bounding box hit tests
    - Factories (points, cubic control points, arcs, circles, rectangles)
"""

import math

import pytest

from geomkit.domain import AffineMatrix, Anchor, BoundingBox, Fill, Path, Stroke, Vec


def assert_vec_close(actual, expected, tolerance=1e-6):
    assert actual.equals_within_tolerance(expected, tolerance), f"{actual!r} != {expected!r}"


# -----------------------------------------------------------------------------
# Length and time
# -----------------------------------------------------------------------------

def test_square_length(unit_square_path):
    """The closing segment is part of a closed path's length."""
    assert unit_square_path.length() == 400


def test_open_path_length():
    """An open path has no closing segment."""
    path = Path.from_points([Vec(0, 0), Vec(100, 0), Vec(100, 100)])
    assert path.length() == 200


def test_time_at_distance(unit_square_path):
    """Distance 150 is halfway along the second edge."""
    assert unit_square_path.time_at_distance(150) == 1.5
    assert unit_square_path.time_at_distance(0) == 0
    assert unit_square_path.time_at_distance(1000) == 4


def test_time_at_distance_open_path_clamps():
    """Past the end of an open path the time is the last anchor index."""
    path = Path.from_points([Vec(0, 0), Vec(10, 0), Vec(20, 0)])
    assert path.time_at_distance(100) == 2


def test_distance_at_time(unit_square_path):
    """distance_at_time inverts time_at_distance."""
    assert unit_square_path.distance_at_time(1.5) == pytest.approx(150)
    assert unit_square_path.distance_at_time(-1) == 0
    assert unit_square_path.distance_at_time(4) == pytest.approx(400)


def test_arc_length(quarter_circle_path):
    """A quarter arc of radius 100 is about 157 long."""
    assert quarter_circle_path.length() == pytest.approx(math.pi * 50, rel=1e-3)


# -----------------------------------------------------------------------------
# Position and direction
# -----------------------------------------------------------------------------

def test_position_at_time(unit_square_path):
    """Fractional times interpolate along edges; integer times hit anchors."""
    assert unit_square_path.position_at_time(0.5) == Vec(50, 0)
    assert unit_square_path.position_at_time(2) == Vec(100, 100)
    assert unit_square_path.position_at_time(3.5) == Vec(0, 50)


def test_position_at_time_wraps_closed(unit_square_path):
    """Closed paths wrap time modulo the anchor count."""
    assert unit_square_path.position_at_time(4.5) == Vec(50, 0)
    assert unit_square_path.position_at_time(-0.5) == Vec(0, 50)


@pytest.mark.parametrize("time", [-1e-20, -5e-17, -1e-300])
def test_time_just_below_zero_wraps_to_start(unit_square_path, time):
    """Times that round up to a full loop land on the first anchor."""
    assert unit_square_path.position_at_time(time) == Vec(0, 0)
    assert unit_square_path.derivative_at_time(time) == Vec(1, 0)
    assert unit_square_path.tangent_at_time(time) == Vec(1, 0)
    assert unit_square_path.normal_at_time(time).length() == pytest.approx(1)


def test_position_at_time_clamps_open():
    """Open paths clamp time to their ends."""
    path = Path.from_points([Vec(0, 0), Vec(10, 0)])
    assert path.position_at_time(5) == Vec(10, 0)
    assert path.position_at_time(-5) == Vec(0, 0)
    assert path.position_at_time(1) == Vec(10, 0)


def test_position_on_degenerate_paths():
    """Empty paths give the origin, single anchors give the anchor."""
    assert Path().position_at_time(0.5) == Vec(0, 0)
    assert Path.from_points([Vec(3, 4)]).position_at_time(0.5) == Vec(3, 4)


def test_derivative_on_edges(unit_square_path):
    """Linear segments point from start to end, including the closing one."""
    assert unit_square_path.derivative_at_time(0.5) == Vec(1, 0)
    assert unit_square_path.derivative_at_time(3.5) == Vec(0, -1)


def test_derivative_at_corner_anchor(unit_square_path):
    """A corner anchor points toward the next anchor."""
    assert unit_square_path.derivative_at_time(1) == Vec(0, 1)


def test_derivative_at_open_end():
    """The last anchor of an open path continues the incoming direction."""
    path = Path.from_points([Vec(0, 0), Vec(10, 0), Vec(10, 10)])
    assert path.derivative_at_time(2) == Vec(0, 1)


def test_normal_is_left_of_tangent(unit_square_path):
    """Normals are the tangent turned 90 degrees counter-clockwise."""
    assert unit_square_path.normal_at_time(0.5) == Vec(0, 1)


def test_tangent_on_arc(quarter_circle_path):
    """The arc starts heading straight up and is unit length mid-way."""
    assert_vec_close(quarter_circle_path.tangent_at_time(0), Vec(0, 1))
    assert quarter_circle_path.tangent_at_time(0.5).length() == pytest.approx(1)


# -----------------------------------------------------------------------------
# Editing
# -----------------------------------------------------------------------------

def test_insert_anchor_preserves_shape(quarter_circle_path):
    """Inserting into a cubic keeps the curve's points in place."""
    original = quarter_circle_path.clone()
    anchor = quarter_circle_path.insert_anchor_at_time(0.5)
    assert len(quarter_circle_path.anchors) == 3
    assert quarter_circle_path.anchors[1] is anchor
    assert_vec_close(anchor.position, original.position_at_time(0.5))
    assert_vec_close(quarter_circle_path.position_at_time(0.5), original.position_at_time(0.25))
    assert_vec_close(quarter_circle_path.position_at_time(1.5), original.position_at_time(0.75))


def test_insert_anchor_on_line(unit_square_path):
    """Linear segments get a corner anchor."""
    anchor = unit_square_path.insert_anchor_at_time(0.25)
    assert anchor.position == Vec(25, 0)
    assert anchor.has_zero_handles()
    assert len(unit_square_path.anchors) == 5


def test_insert_anchor_at_existing_anchor(unit_square_path):
    """An integer time returns the anchor already there."""
    assert unit_square_path.insert_anchor_at_time(2) is unit_square_path.anchors[2]
    assert len(unit_square_path.anchors) == 4


def test_insert_anchor_in_closing_segment(unit_square_path):
    """The closing segment's new anchor goes at the end of the list."""
    anchor = unit_square_path.insert_anchor_at_time(3.5)
    assert unit_square_path.anchors[-1] is anchor
    assert anchor.position == Vec(0, 50)


def test_split_open_path_at_anchor():
    """Both halves contain the junction; the second holds the original anchor."""
    path = Path.from_points([Vec(0, 0), Vec(10, 0), Vec(20, 0)])
    junction = path.anchors[1]
    first, second = path.split_at_anchor(junction)
    assert [a.position for a in first.anchors] == [Vec(0, 0), Vec(10, 0)]
    assert [a.position for a in second.anchors] == [Vec(10, 0), Vec(20, 0)]
    assert second.anchors[0] is junction
    assert first.anchors[-1] is not junction


def test_split_closed_path_opens_it(unit_square_path):
    """A closed path is rotated and opened with the junction at both ends."""
    junction = unit_square_path.anchors[2]
    result = unit_square_path.split_at_anchor(junction)
    assert result == [unit_square_path]
    assert not unit_square_path.closed
    assert len(unit_square_path.anchors) == 5
    assert unit_square_path.anchors[0] is junction
    assert unit_square_path.anchors[-1].position == Vec(100, 100)
    assert unit_square_path.length() == 400


def test_split_at_foreign_anchor(unit_square_path):
    """An anchor from another path leaves this path alone."""
    assert unit_square_path.split_at_anchor(Anchor(Vec(0, 0))) == [unit_square_path]
    assert unit_square_path.closed


def test_split_at_time():
    """Splitting a line at its middle yields two halves."""
    path = Path.from_points([Vec(0, 0), Vec(10, 0)])
    first, second = path.split_at_time(0.5)
    assert first.anchors[-1].position == Vec(5, 0)
    assert second.anchors[0].position == Vec(5, 0)


def test_polygonize_open_keeps_end():
    """An open line is resampled at equal steps and keeps its last point."""
    path = Path.from_points([Vec(0, 0), Vec(10, 0)]).polygonize(3)
    assert [a.position.x for a in path.anchors] == pytest.approx([0, 2.5, 5, 7.5, 10])


def test_polygonize_closed(unit_square_path):
    """Each edge of a closed square is halved."""
    unit_square_path.polygonize(50)
    assert len(unit_square_path.anchors) == 8
    assert all(a.has_zero_handles() for a in unit_square_path.anchors)


def test_polygonize_curve_stays_on_arc(quarter_circle_path):
    """Resampled points lie on the arc."""
    quarter_circle_path.polygonize(10)
    assert len(quarter_circle_path.anchors) > 10
    for anchor in quarter_circle_path.anchors:
        assert anchor.position.length() == pytest.approx(100, rel=1e-3)


def test_reverse(unit_square_path):
    """Reversal flips anchor order."""
    unit_square_path.reverse()
    assert [a.position for a in unit_square_path.anchors] == [
        Vec(0, 100), Vec(100, 100), Vec(100, 0), Vec(0, 0)]


def test_segments_share_anchors(unit_square_path):
    """Segment paths reuse the path's anchors."""
    segments = unit_square_path.segments()
    assert len(segments) == 4
    assert segments[3].anchors[1] is unit_square_path.anchors[0]
    assert unit_square_path.segment_at_index(1).anchors[0] is unit_square_path.anchors[1]


# -----------------------------------------------------------------------------
# Closest point and bounds
# -----------------------------------------------------------------------------

def test_closest_point(unit_square_path):
    """The closest point carries its distance and path time."""
    result = unit_square_path.closest_point_within_distance_to_point(20, Vec(50, 10))
    assert result.found
    assert result.distance == pytest.approx(10)
    assert result.time == pytest.approx(0.5)
    assert result.position == Vec(50, 0)


def test_closest_point_out_of_range(unit_square_path):
    """Nothing within the radius gives the empty result."""
    result = unit_square_path.closest_point_within_distance_to_point(5, Vec(50, 50))
    assert not result.found
    assert result.position is None


def test_closest_point_on_arc(quarter_circle_path):
    """A point outside the arc projects radially."""
    direction = Vec.from_angle(45)
    result = quarter_circle_path.closest_point_within_distance_to_point(50, direction * 120)
    assert result.distance == pytest.approx(20, abs=0.1)
    assert result.time == pytest.approx(0.5, abs=1e-3)


def test_loose_bounding_box_includes_handles(quarter_circle_path):
    """Handle endpoints can extend the loose box past the curve."""
    box = quarter_circle_path.loose_bounding_box()
    assert box.max.x == pytest.approx(100)
    assert box.max.y == pytest.approx(100)
    assert box.min.x == pytest.approx(0, abs=1e-9)


def test_empty_path_has_no_box():
    """No anchors means no box."""
    assert Path().loose_bounding_box() is None
    assert Path().tight_bounding_box() is None


def test_tight_box_without_engine_is_loose(unit_square_path, no_engine):
    """Without an engine the tight box falls back to the loose one."""
    assert unit_square_path.tight_bounding_box().to_tuple() == (0, 0, 100, 100)


def test_contained_by_bounding_box(unit_square_path, no_engine):
    """A box around the square contains it."""
    assert unit_square_path.is_contained_by_bounding_box(BoundingBox(Vec(-1, -1), Vec(101, 101)))
    assert not unit_square_path.is_contained_by_bounding_box(BoundingBox(Vec(1, 1), Vec(101, 101)))


@pytest.mark.parametrize("box,expected", [
    (BoundingBox(Vec(50, 50), Vec(150, 150)), True),
    (BoundingBox(Vec(10, 10), Vec(90, 90)), False),
    (BoundingBox(Vec(200, 200), Vec(300, 300)), False),
])
def test_intersected_by_bounding_box(unit_square_path, box, expected):
    """Only boxes whose edges cross the outline intersect it."""
    assert unit_square_path.is_intersected_by_bounding_box(box) is expected


def test_overlapped_by_bounding_box(unit_square_path, no_engine):
    """Overlap is containment or intersection."""
    assert unit_square_path.is_overlapped_by_bounding_box(BoundingBox(Vec(50, 50), Vec(150, 150)))
    assert unit_square_path.is_overlapped_by_bounding_box(BoundingBox(Vec(-5, -5), Vec(105, 105)))
    assert not unit_square_path.is_overlapped_by_bounding_box(BoundingBox(Vec(10, 10), Vec(90, 90)))


# -----------------------------------------------------------------------------
# Style and transforms
# -----------------------------------------------------------------------------

def test_assign_style_clones(unit_square_path):
    """Assigned styles are copies."""
    fill = Fill()
    unit_square_path.assign_fill(fill)
    assert unit_square_path.fill == fill
    assert unit_square_path.fill is not fill


def test_copy_style_ignores_non_paths(unit_square_path, rect_shape):
    """Only another Path provides style."""
    unit_square_path.assign_fill(Fill())
    unit_square_path.copy_style(rect_shape)
    assert unit_square_path.fill is not None
    unit_square_path.copy_style(Path())
    assert unit_square_path.fill is None


def test_transform_and_scale_stroke(unit_square_path):
    """A uniform scale scales non-hairline strokes."""
    unit_square_path.assign_stroke(Stroke(hairline=False, width=2))
    unit_square_path.transform_and_scale_stroke(AffineMatrix(3, 0, 0, 3, 0, 0))
    assert unit_square_path.stroke.width == pytest.approx(6)
    assert unit_square_path.anchors[2].position == Vec(300, 300)


def test_hairline_stroke_not_scaled(unit_square_path):
    """Hairlines keep their width."""
    unit_square_path.assign_stroke(Stroke(hairline=True, width=2))
    unit_square_path.scale_stroke(5)
    assert unit_square_path.stroke.width == 2


def test_is_valid(unit_square_path):
    """A NaN coordinate invalidates the path."""
    assert unit_square_path.is_valid()
    unit_square_path.anchors[0].position.x = math.nan
    assert not unit_square_path.is_valid()


# -----------------------------------------------------------------------------
# Factories
# -----------------------------------------------------------------------------

def test_from_cubic_bezier_points_open(sample_cubic):
    """Four control points make two anchors with relative handles."""
    path = Path.from_cubic_bezier_points(sample_cubic)
    assert len(path.anchors) == 2
    assert path.anchors[0].handle_out == Vec(0, 100)
    assert path.anchors[1].handle_in == Vec(0, 100)
    assert path.position_at_time(0.5) == Vec(50, 75)


def test_from_cubic_bezier_points_closed():
    """A trailing control pair sets the first anchor's incoming handle."""
    points = [Vec(0, 0), Vec(0, 10), Vec(10, 10), Vec(10, 0), Vec(10, -10), Vec(0, -10)]
    path = Path.from_cubic_bezier_points(points, closed=True)
    assert len(path.anchors) == 2
    assert path.closed
    assert path.anchors[1].handle_out == Vec(0, -10)
    assert path.anchors[0].handle_in == Vec(0, -10)


def test_circle():
    """Four cubic anchors, closed, without a seam duplicate."""
    circle = Path.circle(Vec(0, 0), 10)
    assert circle.closed
    assert len(circle.anchors) == 4
    assert_vec_close(circle.anchors[0].position, Vec(10, 0), 1e-9)
    assert_vec_close(circle.position_at_time(1), Vec(0, 10), 1e-9)
    assert not circle.anchors[0].handle_in.is_zero()
    for t in (0.5, 1.5, 2.5, 3.5):
        assert circle.position_at_time(t).length() == pytest.approx(10, rel=1e-3)


def test_arc_zero_sweep():
    """A zero sweep is a single anchor at the start angle."""
    path = Path.from_arc(Vec(5, 5), 10, 90, 90)
    assert len(path.anchors) == 1
    assert_vec_close(path.anchors[0].position, Vec(5, 15), 1e-9)


def test_arc_segment_count():
    """One cubic per quarter turn or less."""
    assert len(Path.from_arc(Vec(0, 0), 1, 0, 180).anchors) == 3
    assert len(Path.from_arc(Vec(0, 0), 1, 0, 100).anchors) == 3
    assert len(Path.from_arc(Vec(0, 0), 1, 0, 45).anchors) == 2


def test_rect():
    """rect builds a closed box path."""
    path = Path.rect(10, 10, 40, 20)
    assert path.closed
    assert path.loose_bounding_box().to_tuple() == (10, 10, 50, 30)
