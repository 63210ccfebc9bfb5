"""Utility helpers for clamping and weighted draws."""

from __future__ import annotations

import math
import random
from typing import Callable, Iterable, Optional, Tuple, TypeVar

T = TypeVar("T")


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Bound ``value`` to ``[minimum, maximum]``; NaN maps to ``minimum``."""

    if math.isnan(value):
        return minimum
    return max(min(value, maximum), minimum)


def weighted_choice(
    entries: Iterable[Tuple[T, float]],
    total: float,
    *,
    random_fn: Callable[[], float] = random.random,
) -> Optional[T]:
    """Choose an item from ``(item, weight)`` pairs with probability ``weight / total``.

    ``total`` must be the sum of the weights; it is passed in so callers keeping
    a running total avoid a second pass. Falls back to the first item when the
    scan runs past the end (rounding at the boundary or ``total <= 0``) and
    returns ``None`` when there are no entries.
    """

    remaining = random_fn() * total
    first: Optional[T] = None
    seen = False
    for item, weight in entries:
        if not seen:
            first = item
            seen = True
        remaining -= weight
        if remaining <= 0:
            return item
    return first


__all__ = ["clamp", "weighted_choice"]
