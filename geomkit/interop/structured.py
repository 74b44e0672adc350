"""Plain-dict import and export of geometry.

``to_dict`` turns any entity, vector or style record into nested dicts,
lists and floats with a ``type`` tag, ready for ``json.dumps``.
``from_dict`` rebuilds the object. Text formats such as SVG are the
caller's concern; this module only fixes the structure.

Example usage:
    Round trip through JSON::

        import json
        from geomkit.interop.structured import from_dict, to_dict

        text = json.dumps(to_dict(group))
        restored = from_dict(json.loads(text))
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from ..domain.anchor import Anchor
from ..domain.axis import Axis
from ..domain.group import Group
from ..domain.path import Path
from ..domain.shape import Shape
from ..domain.style import Color, Fill, Stroke
from ..domain.vec import Vec


def _vec(v: Vec) -> list:
    return [v.x, v.y]


def _to_vec(data) -> Vec:
    return Vec(float(data[0]), float(data[1]))


def _style_fields(item) -> dict:
    fields = {}
    if item.fill is not None:
        fields['fill'] = to_dict(item.fill)
    if item.stroke is not None:
        fields['stroke'] = to_dict(item.stroke)
    return fields


def to_dict(item) -> Dict[str, Any]:
    """Tagged dict for ``item``.

    Raises:
        TypeError: If ``item`` is not a supported type.
    """
    if isinstance(item, Vec):
        return {'type': 'vec', 'x': item.x, 'y': item.y}
    if isinstance(item, Color):
        return {'type': 'color', 'rgba': list(item.to_tuple())}
    if isinstance(item, Fill):
        return {'type': 'fill', 'color': to_dict(item.color)}
    if isinstance(item, Stroke):
        return {
            'type': 'stroke',
            'color': to_dict(item.color),
            'hairline': item.hairline,
            'width': item.width,
            'alignment': item.alignment,
            'cap': item.cap,
            'join': item.join,
            'miter_limit': item.miter_limit,
        }
    if isinstance(item, Anchor):
        return {
            'type': 'anchor',
            'position': _vec(item.position),
            'handle_in': _vec(item.handle_in),
            'handle_out': _vec(item.handle_out),
        }
    if isinstance(item, Path):
        data = {
            'type': 'path',
            'anchors': [to_dict(a) for a in item.anchors],
            'closed': item.closed,
        }
        data.update(_style_fields(item))
        return data
    if isinstance(item, Shape):
        data = {'type': 'shape', 'paths': [to_dict(p) for p in item.paths]}
        data.update(_style_fields(item))
        return data
    if isinstance(item, Group):
        return {'type': 'group', 'items': [to_dict(i) for i in item.items]}
    if isinstance(item, Axis):
        return {'type': 'axis', 'origin': _vec(item.origin), 'direction': _vec(item.direction)}
    raise TypeError(f"Cannot convert {type(item).__name__} to a structured dict")


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def _style_from(data: dict):
    fill = from_dict(data['fill']) if data.get('fill') else None
    stroke = from_dict(data['stroke']) if data.get('stroke') else None
    return fill, stroke


def _color(data: dict) -> Color:
    return Color(*[float(c) for c in data['rgba']])


def _stroke(data: dict) -> Stroke:
    return Stroke(
        color=from_dict(data['color']),
        hairline=bool(data.get('hairline', True)),
        width=float(data.get('width', 0.1)),
        alignment=data.get('alignment', 'centered'),
        cap=data.get('cap', 'butt'),
        join=data.get('join', 'miter'),
        miter_limit=float(data.get('miter_limit', 4.0)),
    )


def _anchor(data: dict) -> Anchor:
    return Anchor(
        _to_vec(data['position']),
        _to_vec(data.get('handle_in', (0, 0))),
        _to_vec(data.get('handle_out', (0, 0))),
    )


def _path(data: dict) -> Path:
    fill, stroke = _style_from(data)
    return Path([_anchor(a) for a in data.get('anchors', [])], bool(data.get('closed', False)), stroke, fill)


def _shape(data: dict) -> Shape:
    fill, stroke = _style_from(data)
    return Shape([_path(p) for p in data.get('paths', [])], stroke, fill)


_READERS: Dict[str, Callable[[dict], Any]] = {
    'vec': lambda data: Vec(float(data['x']), float(data['y'])),
    'color': _color,
    'fill': lambda data: Fill(from_dict(data['color'])),
    'stroke': _stroke,
    'anchor': _anchor,
    'path': _path,
    'shape': _shape,
    'group': lambda data: Group([from_dict(i) for i in data.get('items', [])]),
    'axis': lambda data: Axis(_to_vec(data['origin']), _to_vec(data['direction'])),
}


def from_dict(data: Dict[str, Any]):
    """Object described by a dict produced by ``to_dict``.

    Raises:
        ValueError: If the ``type`` tag is missing or unknown.
    """
    kind = data.get('type')
    reader = _READERS.get(kind)
    if reader is None:
        raise ValueError(f"Unknown structured geometry type {kind!r}")
    return reader(data)
