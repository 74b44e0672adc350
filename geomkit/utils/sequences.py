"""Small list helpers used to walk anchors and segments."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar('T')


def index_range(start: float, stop: Optional[float] = None, step: float = 1) -> List[float]:
    """Evenly spaced numbers from ``start`` up to (excluding) ``stop``.

    With a single argument the range starts at 0, like the builtin ``range``,
    but float bounds and steps are allowed.
    """
    if stop is None:
        start, stop = 0, start
    count = max(0, math.ceil((stop - start) / step))
    return [start + i * step for i in range(count)]


def pairs(items: Sequence[T], loop: bool = False) -> List[Tuple[T, T]]:
    """Adjacent pairs of ``items``.

    Args:
        items: Sequence to pair up.
        loop: Append the wrap-around pair ``(last, first)``.

    Returns:
        List of 2-tuples. Empty when fewer than two items are given.

    Example:
        >>> pairs([1, 2, 3], loop=True)
        [(1, 2), (2, 3), (3, 1)]
    """
    if len(items) < 2:
        return []
    result = list(zip(items[:-1], items[1:]))
    if loop:
        result.append((items[-1], items[0]))
    return result


def rotate_list(items: List[T], zero_index: int) -> None:
    """Rotate ``items`` in place so ``items[zero_index]`` becomes the first element."""
    items[:] = items[zero_index:] + items[:zero_index]
