from __future__ import annotations

from typing import AbstractSet, Set, TypeVar

T = TypeVar("T")


def intersect(a: AbstractSet[T], b: AbstractSet[T]) -> Set[T]:
    """
    Return a new set holding the elements common to ``a`` and ``b``.

    Neither input is modified. The smaller operand is scanned and the
    larger one probed, so cost is O(min(|a|, |b|)).
    """

    if len(a) > len(b):
        a, b = b, a
    return {x for x in a if x in b}
