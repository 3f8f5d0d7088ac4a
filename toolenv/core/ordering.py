"""
Ordering helpers shared by the resolvers and the cache manager.

Two rules decide the final shape of a generated environment:

- stable_dedupe: the first occurrence of an item wins, later copies are
  dropped and the relative order of survivors is kept.
- reverse_for_precedence: items that must take precedence are applied last.
  PATH prepends are last-applied-wins, so a list in priority order is
  reversed before its operations are emitted.
"""

from typing import Hashable, Iterable, List, TypeVar

T = TypeVar("T", bound=Hashable)


def stable_dedupe(items: Iterable[T]) -> List[T]:
    """
    Drop repeated items, keeping the first occurrence of each.

    Example:
        >>> stable_dedupe(["a", "b", "a", "c", "b"])
        ['a', 'b', 'c']
    """
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def reverse_for_precedence(items: Iterable[T]) -> List[T]:
    """
    Order items so the highest-priority one is applied last.

    Example:
        >>> reverse_for_precedence(["3.11", "3.10"])
        ['3.10', '3.11']
    """
    return list(reversed(list(items)))
