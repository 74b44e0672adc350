"""Unit tests for the path-engine registry."""

import pytest

from geomkit.domain.engine import (
    PathOpsEngine,
    check_operation,
    get_engine,
    register_engine,
    unregister_engine,
)


class _RecordingEngine:
    """Minimal engine that remembers its calls."""

    def __init__(self):
        self.calls = []

    def combine(self, operands, operation, fill_rule='evenodd'):
        self.calls.append(('combine', operation, fill_rule, len(operands)))
        return []

    def stroke(self, commands, width, cap, join, miter_limit):
        self.calls.append(('stroke', width, cap, join, miter_limit))
        return []

    def tight_bounds(self, commands):
        self.calls.append(('tight_bounds',))
        return (1.0, 2.0, 3.0, 4.0)


@pytest.fixture
def recording_engine(no_engine):
    """Register a recording engine for one test."""
    engine = _RecordingEngine()
    register_engine(engine)
    yield engine
    unregister_engine()


def test_register_and_unregister(no_engine):
    """The registry holds one engine at a time."""
    engine = _RecordingEngine()
    register_engine(engine)
    assert get_engine() is engine
    unregister_engine()
    assert get_engine() is None


def test_register_rejects_non_engine(no_engine):
    """Objects missing protocol methods are refused."""
    with pytest.raises(TypeError):
        register_engine(object())
    assert get_engine() is None


def test_protocol_is_structural():
    """Any object with the three methods is an engine."""
    assert isinstance(_RecordingEngine(), PathOpsEngine)


@pytest.mark.parametrize("operation,fill_rule", [
    ('xor', 'evenodd'),
    ('union', 'nonzero'),
])
def test_check_operation_rejects_unknown(operation, fill_rule):
    """Unknown operations and fill rules are ValueErrors."""
    with pytest.raises(ValueError):
        check_operation(operation, fill_rule)


def test_tight_bounds_delegated(recording_engine, unit_square_path):
    """Paths ask the engine for their tight box."""
    box = unit_square_path.tight_bounding_box()
    assert box.to_tuple() == (1.0, 2.0, 3.0, 4.0)
    assert recording_engine.calls == [('tight_bounds',)]


def test_boolean_union_passes_fill_rule(recording_engine, unit_square_path, rect_shape):
    """One operand per shape or orphaned path, with the caller's fill rule."""
    from geomkit.domain import Shape

    Shape.boolean_union([unit_square_path, rect_shape], fill_rule='winding')
    assert recording_engine.calls == [('combine', 'union', 'winding', 2)]


def test_group_operands_are_unioned_first(recording_engine, unit_square_path, rect_shape):
    """A Group contributes a single pre-unioned operand."""
    from geomkit.domain import Group, Path, Shape

    group = Group([Path.rect(0, 0, 5, 5), Path.rect(2, 2, 5, 5)])
    Shape.boolean_difference([unit_square_path, group, rect_shape])
    assert recording_engine.calls == [
        ('combine', 'union', 'evenodd', 2),
        ('combine', 'difference', 'evenodd', 3),
    ]


def test_stroke_forwards_options(recording_engine, unit_square_path):
    """Stroke options reach the engine unchanged."""
    from geomkit.domain import Shape

    Shape.stroke_geometry(unit_square_path, width=3, cap='round', join='bevel', miter_limit=2)
    assert recording_engine.calls == [('stroke', 3, 'round', 'bevel', 2)]
