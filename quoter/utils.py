"""Small helpers shared by trades, search and call encoding."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from quoter.errors import invariant
from quoter.math.fraction import Fraction

T = TypeVar("T")


def sorted_insert(items: list[T], add: T, max_size: int, comparator: Callable[[T, T], int]) -> T | None:
    """Insert ``add`` into the sorted list ``items``, keeping at most ``max_size``.

    ``items`` is modified in place and stays sorted by ``comparator``
    (negative means the first argument sorts first). Ties keep insertion
    order.

    Returns:
        The item that fell off the end of the list, ``add`` itself if it
        did not make the cut, or None if nothing was dropped.

    Raises:
        InvariantViolation: If max_size <= 0 or items is already too long
    """
    invariant(max_size > 0, "MAX_SIZE_ZERO", f"max_size is {max_size}")
    invariant(len(items) <= max_size, "ITEMS_SIZE", f"{len(items)} items exceed max_size {max_size}")

    if not items:
        items.append(add)
        return None

    is_full = len(items) == max_size
    if is_full and comparator(items[-1], add) <= 0:
        return add

    lo, hi = 0, len(items)
    while lo < hi:
        mid = (lo + hi) // 2
        if comparator(items[mid], add) <= 0:
            lo = mid + 1
        else:
            hi = mid
    items.insert(lo, add)
    return items.pop() if is_full else None


def to_hex(value: int | Fraction) -> str:
    """0x-prefixed lowercase hex of an integer (or a fraction's quotient)."""
    if isinstance(value, Fraction):
        value = value.quotient
    return hex(value)


__all__ = ["sorted_insert", "to_hex"]
