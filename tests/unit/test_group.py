"""Unit tests for Group.

Tests geomkit.domain.group.Group:
    - Recursive collection and forwarding
    - Aggregated bounds and hit tests
    - join_paths in every orientation
"""

import unittest

from geomkit.domain import Anchor, Axis, BoundingBox, Fill, Group, Path, Shape, Stroke, Vec


def _line(x1, y1, x2, y2):
    return Path.from_points([Vec(x1, y1), Vec(x2, y2)])


class TestGroupStructure(unittest.TestCase):
    """Tests for nested collection and forwarding."""

    def setUp(self):
        self.path = _line(0, 0, 10, 0)
        self.shape = Shape([Path.rect(20, 20, 10, 10)])
        self.inner = Group([self.shape])
        self.axis = Axis(Vec(0, 0), Vec(0, 1))
        self.group = Group([self.path, self.inner, self.axis])

    def test_all_paths_recurses(self):
        """Paths of nested groups and shapes are collected in order."""
        self.assertEqual(self.group.all_paths(), [self.path, self.shape.paths[0]])

    def test_all_shapes_and_orphaned_paths(self):
        """Loose paths and shapes are the boolean operands."""
        self.assertEqual(self.group.all_shapes_and_orphaned_paths(), [self.path, self.shape])

    def test_all_intersectables_include_axes(self):
        """Axes take part in snapping."""
        self.assertIn(self.axis, self.group.all_intersectables())

    def test_all_anchors(self):
        """Anchors of every path."""
        self.assertEqual(len(self.group.all_anchors()), 6)

    def test_clone_is_deep(self):
        """A cloned group shares no entities."""
        copy = self.group.clone()
        copy.all_paths()[0].anchors[0].position.x = 99
        self.assertEqual(self.path.anchors[0].position.x, 0)

    def test_style_is_forwarded(self):
        """assign_stroke reaches paths and shapes."""
        self.group.assign_stroke(Stroke(width=2))
        self.assertEqual(self.path.stroke.width, 2)
        self.assertEqual(self.shape.stroke.width, 2)
        self.group.remove_stroke()
        self.assertIsNone(self.path.stroke)

    def test_loose_bounding_box_skips_axes(self):
        """Axes have no box and do not affect the union."""
        self.assertEqual(self.group.loose_bounding_box().to_tuple(), (0, 0, 30, 30))

    def test_empty_group(self):
        """An empty group has no box and is contained by nothing."""
        empty = Group()
        self.assertIsNone(empty.loose_bounding_box())
        self.assertFalse(empty.is_contained_by_bounding_box(BoundingBox(Vec(-1, -1), Vec(1, 1))))

    def test_reverse(self):
        """Item order flips."""
        self.group.reverse()
        self.assertIs(self.group.items[0], self.axis)

    def test_closest_point(self):
        """The nearest item across the tree."""
        result = self.group.closest_point_within_distance_to_point(5, Vec(5, 2))
        self.assertAlmostEqual(result.distance, 2)

    def test_to_canvas_path_skips_axes(self):
        """Only drawable items reach the context."""
        calls = []

        class Recorder:
            def move_to(self, x, y):
                calls.append('move')

            def line_to(self, x, y):
                calls.append('line')

            def bezier_curve_to(self, *args):
                calls.append('cubic')

            def close_path(self):
                calls.append('close')

        self.group.to_canvas_path(Recorder())
        self.assertEqual(calls.count('move'), 2)
        self.assertEqual(calls.count('close'), 1)

    def test_fill_forwarding(self):
        """assign_fill on a group reaches nested shapes."""
        self.group.assign_fill(Fill())
        self.assertIsNotNone(self.shape.fill)


class TestJoinPaths(unittest.TestCase):
    """Tests for stitching paths at shared endpoints."""

    def test_three_segments_close_into_triangle(self):
        """Segments meeting end to start form one closed path."""
        paths = [_line(0, 0, 10, 0), _line(10, 0, 10, 10), _line(10, 10, 0, 0)]
        group = Group.join_paths(paths)
        self.assertEqual(len(group.items), 1)
        joined = group.items[0]
        self.assertTrue(joined.closed)
        self.assertEqual([a.position for a in joined.anchors], [Vec(0, 0), Vec(10, 0), Vec(10, 10)])

    def test_inputs_are_not_modified(self):
        """join_paths works on copies."""
        paths = [_line(0, 0, 10, 0), _line(10, 0, 20, 0)]
        Group.join_paths(paths)
        self.assertEqual(len(paths[0].anchors), 2)
        self.assertEqual(len(paths[1].anchors), 2)

    def test_start_to_start(self):
        """A path sharing its start is reversed and prepended."""
        group = Group.join_paths([_line(0, 0, 10, 0), _line(0, 0, 0, 10)])
        self.assertEqual(len(group.items), 1)
        self.assertEqual([a.position for a in group.items[0].anchors],
                         [Vec(0, 10), Vec(0, 0), Vec(10, 0)])

    def test_end_to_start(self):
        """A path ending at another's start is prepended."""
        group = Group.join_paths([_line(10, 0, 20, 0), _line(0, 0, 10, 0)])
        self.assertEqual([a.position for a in group.items[0].anchors],
                         [Vec(0, 0), Vec(10, 0), Vec(20, 0)])

    def test_end_to_end(self):
        """A path sharing its end is reversed and appended."""
        group = Group.join_paths([_line(0, 0, 10, 0), _line(20, 0, 10, 0)])
        self.assertEqual([a.position for a in group.items[0].anchors],
                         [Vec(0, 0), Vec(10, 0), Vec(20, 0)])

    def test_handles_survive_the_junction(self):
        """The junction anchor keeps the curvature of both sides."""
        curve = Path([Anchor(Vec(0, 0), handle_out=Vec(0, 5)), Anchor(Vec(10, 0), handle_in=Vec(0, 5))])
        other = Path([Anchor(Vec(0, 0), handle_out=Vec(0, -5)), Anchor(Vec(0, -10))])
        joined = Group.join_paths([curve, other]).items[0]
        junction = joined.anchors[1]
        self.assertEqual(junction.position, Vec(0, 0))
        self.assertEqual(junction.handle_in, Vec(0, -5))
        self.assertEqual(junction.handle_out, Vec(0, 5))

    def test_tolerance(self):
        """Endpoints within the tolerance count as shared."""
        paths = [_line(0, 0, 10, 0), _line(10.0005, 0, 20, 0)]
        self.assertEqual(len(Group.join_paths(paths).items), 1)
        self.assertEqual(len(Group.join_paths(paths, tolerance=0.0001).items), 2)

    def test_disjoint_paths_stay_separate(self):
        """Paths that do not touch are returned as copies."""
        paths = [_line(0, 0, 1, 0), _line(5, 5, 6, 5)]
        group = Group.join_paths(paths)
        self.assertEqual(len(group.items), 2)
        self.assertIsNot(group.items[0], paths[0])

    def test_closed_paths_pass_through(self):
        """Closed inputs are never merged."""
        paths = [Path.rect(0, 0, 10, 10), _line(0, 0, -10, 0)]
        self.assertEqual(len(Group.join_paths(paths).items), 2)

    def test_single_path_closing(self):
        """A lone open path whose ends meet is closed."""
        path = Path.from_points([Vec(0, 0), Vec(10, 0), Vec(10, 10), Vec(0, 0)])
        joined = Group.join_paths([path]).items[0]
        self.assertTrue(joined.closed)
        self.assertEqual(len(joined.anchors), 3)


if __name__ == '__main__':
    unittest.main()
