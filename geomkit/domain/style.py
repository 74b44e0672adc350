"""Fill and stroke records attached to paths and shapes.

The kernel treats style as opaque data. It only reads a stroke's width
(to scale it under uniform transforms) and hands the rest to rendering or
hit-testing collaborators.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

# Allowed values for the enumerated stroke attributes
STROKE_ALIGNMENTS = ('centered', 'inner', 'outer')
STROKE_CAPS = ('butt', 'round', 'square')
STROKE_JOINS = ('miter', 'round', 'bevel')


def _is_unit(value) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value) and 0 <= value <= 1)


@dataclass
class Color:
    """RGBA color with components in the unit range."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    def clone(self) -> Color:
        return Color(self.r, self.g, self.b, self.a)

    def is_valid(self) -> bool:
        return all(_is_unit(v) for v in (self.r, self.g, self.b, self.a))

    def is_visible(self) -> bool:
        return self.a > 0

    def to_tuple(self) -> tuple:
        return (self.r, self.g, self.b, self.a)


@dataclass
class Stroke:
    """Outline style.

    Attributes:
        color: Stroke color.
        hairline: Draw one device pixel wide regardless of ``width``.
        width: Width in geometry units, ignored for hairlines.
        alignment: 'centered', 'inner' or 'outer' relative to the outline.
        cap: 'butt', 'round' or 'square'.
        join: 'miter', 'round' or 'bevel'.
        miter_limit: Miter length limit relative to the width.
    """
    color: Color = field(default_factory=Color)
    hairline: bool = True
    width: float = 0.1
    alignment: str = 'centered'
    cap: str = 'butt'
    join: str = 'miter'
    miter_limit: float = 4.0

    def clone(self) -> Stroke:
        return Stroke(self.color.clone(), self.hairline, self.width,
                      self.alignment, self.cap, self.join, self.miter_limit)

    def is_valid(self) -> bool:
        return (isinstance(self.color, Color) and self.color.is_valid() and
                isinstance(self.hairline, bool) and
                isinstance(self.width, (int, float)) and
                isinstance(self.miter_limit, (int, float)) and
                self.alignment in STROKE_ALIGNMENTS and
                self.cap in STROKE_CAPS and
                self.join in STROKE_JOINS)


@dataclass
class Fill:
    """Interior style; interiors use the even-odd rule."""
    color: Color = field(default_factory=Color)

    def clone(self) -> Fill:
        return Fill(self.color.clone())

    def is_valid(self) -> bool:
        return isinstance(self.color, Color) and self.color.is_valid()


def check_stroke_options(cap: str, join: str, alignment: str = 'centered') -> None:
    """Raise ValueError for stroke options outside the allowed sets."""
    if cap not in STROKE_CAPS:
        raise ValueError(f"Unknown stroke cap {cap!r}, expected one of {STROKE_CAPS}")
    if join not in STROKE_JOINS:
        raise ValueError(f"Unknown stroke join {join!r}, expected one of {STROKE_JOINS}")
    if alignment not in STROKE_ALIGNMENTS:
        raise ValueError(f"Unknown stroke alignment {alignment!r}, expected one of {STROKE_ALIGNMENTS}")
