"""
Identifier allocation for columns and tasks.

One allocator per board session, shared by columns and tasks so a column
id never equals a task id. Ids are a monotonic counter, so an id is never
handed out twice while the session lives, including ids of entities that
were since deleted.
"""
from typing import Iterable

from .schema import Identifier


class IdAllocator:
    """Monotonic, collision-free identifier source."""

    def __init__(self, first_id: int = 1):
        self._next_id: int = first_id

    def allocate(self) -> Identifier:
        nid = self._next_id
        self._next_id += 1
        return nid

    def seed(self, existing: Iterable[Identifier]) -> None:
        """Advance past ids already present in a pre-populated collection."""
        numeric = [i for i in existing if isinstance(i, int)]
        if numeric:
            self._next_id = max(self._next_id, max(numeric) + 1)

    def peek(self) -> Identifier:
        """Next id that allocate() would return."""
        return self._next_id
