"""Registry for the external path-operations engine.

Boolean operations, exact stroking and tight bounds are delegated to an
engine that works on path-command sequences (see ``geomkit.curves.commands``).
No engine is registered by default; entities then fall back to the
behaviors documented on ``Path.tight_bounding_box`` and the ``Shape``
boolean class methods.

Example usage:
    Registering the shapely-backed engine at startup::

        from geomkit.domain.engine import register_engine
        from geomkit.interop.shapely_engine import ShapelyPathOpsEngine

        register_engine(ShapelyPathOpsEngine())
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

logger = logging.getLogger(__name__)

# Boolean operations an engine must understand
BOOLEAN_OPERATIONS = ('union', 'intersect', 'difference')

# Fill rules understood by ``combine``
FILL_RULES = ('evenodd', 'winding')

CommandList = List[tuple]


@runtime_checkable
class PathOpsEngine(Protocol):
    """Operations the kernel delegates to an external engine.

    Every method takes and returns command lists whose coordinates are in
    kernel units.
    """

    def combine(self, operands: Sequence[CommandList], operation: str,
                fill_rule: str = 'evenodd') -> CommandList:
        """Fold ``operation`` over ``operands`` left to right."""
        ...

    def stroke(self, commands: CommandList, width: float, cap: str, join: str,
               miter_limit: float) -> CommandList:
        """Outline of the stroke of ``commands`` as fillable contours."""
        ...

    def tight_bounds(self, commands: CommandList) -> Optional[Tuple[float, float, float, float]]:
        """Exact ``(x_min, y_min, x_max, y_max)`` of the curves, None when empty."""
        ...


_engine: Optional[PathOpsEngine] = None


def register_engine(engine: PathOpsEngine) -> None:
    """Install ``engine`` for all subsequent delegated operations."""
    global _engine
    if not isinstance(engine, PathOpsEngine):
        raise TypeError(f"{type(engine).__name__} does not implement PathOpsEngine")
    _engine = engine
    logger.info("Registered path engine %s", type(engine).__name__)


def unregister_engine() -> None:
    global _engine
    _engine = None


def get_engine() -> Optional[PathOpsEngine]:
    return _engine


def check_operation(operation: str, fill_rule: str = 'evenodd') -> None:
    if operation not in BOOLEAN_OPERATIONS:
        raise ValueError(f"Unknown boolean operation {operation!r}, expected one of {BOOLEAN_OPERATIONS}")
    if fill_rule not in FILL_RULES:
        raise ValueError(f"Unknown fill rule {fill_rule!r}, expected one of {FILL_RULES}")
