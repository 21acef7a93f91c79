"""
Reorder engine: pure permutation of an ordered sequence.

move() knows nothing about columns or tasks. It removes the element at
from_index and reinserts it at to_index; elements in between shift by one
and everything else keeps its relative order. The input is never mutated.

Out-of-bounds indices (notably -1 from a failed id lookup) follow an
IndexPolicy:
    NOOP  → return an unchanged copy, log a warning (default)
    RAISE → raise InvalidIndex
    CLAMP → clamp both indices into [0, len - 1]
"""
import logging
from enum import Enum
from typing import List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InvalidIndex(Exception):
    """Raised when a reorder index falls outside the sequence (RAISE policy)."""

    def __init__(self, index: int, length: int):
        super().__init__(f"Index {index} out of bounds for sequence of length {length}")
        self.index = index
        self.length = length


class IndexPolicy(Enum):
    """How move() treats an out-of-bounds index."""
    NOOP = "noop"
    RAISE = "raise"
    CLAMP = "clamp"

    @classmethod
    def from_str(cls, value: str) -> "IndexPolicy":
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.NOOP


def in_bounds(index: int, length: int) -> bool:
    """Python negative indexing is not honoured: -1 is always out of bounds."""
    return 0 <= index < length


def move(
    sequence: Sequence[T],
    from_index: int,
    to_index: int,
    policy: IndexPolicy = IndexPolicy.NOOP,
) -> List[T]:
    """Return a new list with sequence[from_index] relocated to to_index."""
    items = list(sequence)
    length = len(items)

    if not (in_bounds(from_index, length) and in_bounds(to_index, length)):
        bad = from_index if not in_bounds(from_index, length) else to_index
        if policy is IndexPolicy.RAISE:
            raise InvalidIndex(bad, length)
        if policy is IndexPolicy.CLAMP and length:
            from_index = min(max(from_index, 0), length - 1)
            to_index = min(max(to_index, 0), length - 1)
        else:
            logger.warning(
                f"Reorder skipped: index {bad} out of bounds (length={length})"
            )
            return items

    if from_index == to_index:
        return items

    element = items.pop(from_index)
    items.insert(to_index, element)
    return items
