"""
Ordering helpers shared by the task collection and the status draft.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def array_move(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """
    Return a copy of ``items`` with the element at ``from_index`` moved to
    ``to_index``. Elements between the two indices shift by one.

    Raises IndexError when either index is outside ``items``.
    """
    size = len(items)
    if not (0 <= from_index < size and 0 <= to_index < size):
        raise IndexError(
            f"array_move indices out of range: {from_index} -> {to_index} (size {size})"
        )
    result = list(items)
    result.insert(to_index, result.pop(from_index))
    return result


def is_dense(positions: Sequence[int]) -> bool:
    """True when ``positions`` is a permutation of 0..n-1."""
    return sorted(positions) == list(range(len(positions)))
