"""Permutation generation for the assignment search."""

from collections.abc import Iterator, Sequence
from typing import TypeVar

T = TypeVar("T")


def permutations(items: Sequence[T]) -> Iterator[list[T]]:
    """Yield every ordering of ``items`` exactly once (``n!`` in total).

    Each ordering is built by inserting the first item at every position of
    each ordering of the rest. The output order is deterministic, which
    matters because the search keeps generation order for exact ties.

    >>> list(permutations(["a", "b"]))
    [['a', 'b'], ['b', 'a']]
    """
    if not items:
        yield []
        return

    first, rest = items[0], items[1:]
    for perm in permutations(rest):
        for position in range(len(perm) + 1):
            yield perm[:position] + [first] + perm[position:]
