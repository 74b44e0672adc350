"""Unit tests for tagged-dict import and export."""

import json

import pytest

from geomkit.domain import Anchor, Axis, Color, Fill, Group, Path, Shape, Stroke, Vec
from geomkit.interop.structured import from_dict, to_dict


def test_vec_round_trip():
    """Vectors carry their components."""
    data = to_dict(Vec(1.5, -2))
    assert data == {'type': 'vec', 'x': 1.5, 'y': -2}
    assert from_dict(data) == Vec(1.5, -2)


def test_anchor_vectors_are_lists():
    """Anchor vectors are compact [x, y] pairs."""
    data = to_dict(Anchor(Vec(1, 2), Vec(-1, 0), Vec(1, 0)))
    assert data['position'] == [1, 2]
    assert data['handle_in'] == [-1, 0]


def test_styled_path_through_json():
    """Paths survive JSON with their style."""
    path = Path.from_points([Vec(0, 0), Vec(10, 0), Vec(10, 10)], closed=True)
    path.assign_fill(Fill(Color(1, 0, 0, 1)))
    path.assign_stroke(Stroke(hairline=False, width=2.5, cap='round'))

    restored = from_dict(json.loads(json.dumps(to_dict(path))))

    assert isinstance(restored, Path)
    assert restored.closed
    assert [a.position for a in restored.anchors] == [a.position for a in path.anchors]
    assert restored.fill == path.fill
    assert restored.stroke == path.stroke


def test_unstyled_path_omits_style_keys():
    """Missing style stays missing."""
    data = to_dict(Path.rect(0, 0, 1, 1))
    assert 'fill' not in data
    assert 'stroke' not in data
    assert from_dict(data).fill is None


def test_group_tree_round_trip():
    """Nested groups keep their structure and item kinds."""
    group = Group([
        Shape([Path.rect(0, 0, 5, 5), Path.rect(1, 1, 2, 2)], fill=Fill()),
        Group([Axis(Vec(0, 0), Vec(0, 1))]),
        Path.from_arc(Vec(0, 0), 10, 0, 90),
    ])

    restored = from_dict(to_dict(group))

    assert isinstance(restored.items[0], Shape)
    assert len(restored.items[0].paths) == 2
    assert restored.items[0].fill is not None
    assert isinstance(restored.items[1].items[0], Axis)
    assert restored.items[1].items[0].direction == Vec(0, 1)
    arc = restored.items[2]
    assert arc.anchors[0].handle_out == group.items[2].anchors[0].handle_out


def test_missing_handles_default_to_zero():
    """Hand-written anchors may omit their handles."""
    anchor = from_dict({'type': 'anchor', 'position': [3, 4]})
    assert anchor.position == Vec(3, 4)
    assert anchor.has_zero_handles()


@pytest.mark.parametrize("data", [
    {'type': 'ellipse'},
    {'x': 1, 'y': 2},
])
def test_unknown_type_raises_value_error(data):
    """Unknown or missing tags are rejected."""
    with pytest.raises(ValueError):
        from_dict(data)


def test_unsupported_object_raises_type_error():
    """Only kernel objects can be exported."""
    with pytest.raises(TypeError):
        to_dict(object())
