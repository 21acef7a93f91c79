"""
Board schema: columns, tasks, and the drag state vocabulary.

Hierarchy:
  Column (ordered) → Task (ordered, flat sequence filtered by column_id)

Entities are immutable; every mutation produces a new instance via
dataclasses.replace() so a stored element is never aliased by a caller.
"""
from enum import Enum
from dataclasses import dataclass, replace
from typing import Optional, Dict, Any, Union

Identifier = int


class EntityKind(Enum):
    """Declared kind of a draggable entity (the `data.type` wire field)."""
    COLUMN = "Column"
    TASK = "Task"

    @classmethod
    def from_str(cls, value: Optional[str]) -> "EntityKind":
        for kind in cls:
            if value is not None and kind.value.lower() == str(value).lower():
                return kind
        raise ValueError(f"Unknown entity type: {value!r}")


class OverKind(Enum):
    """What a dragged task is currently hovering over."""
    TASK = "task"        # task-over-task: reparent + reorder
    COLUMN = "column"    # task-over-column: reparent only


class DragState(Enum):
    """Drag session states."""
    IDLE = "idle"
    DRAGGING_COLUMN = "dragging_column"
    DRAGGING_TASK = "dragging_task"


@dataclass(frozen=True)
class Column:
    """One ordered bucket of tasks."""
    id: Identifier
    title: str = ""

    def renamed(self, title: str) -> "Column":
        return replace(self, title=title)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Column":
        if not isinstance(data, dict):
            raise ValueError("Column payload must be an object")
        if "id" not in data:
            raise ValueError("Column payload requires an id")
        return cls(id=data["id"], title=data.get("title", ""))


@dataclass(frozen=True)
class Task:
    """A unit of content owned by exactly one column.

    column_id is the only record of ownership; position inside the column
    is the task's relative position in the board's flat task sequence.
    """
    id: Identifier
    column_id: Identifier
    content: str = ""

    def reparented(self, column_id: Identifier) -> "Task":
        if column_id == self.column_id:
            return self
        return replace(self, column_id=column_id)

    def edited(self, content: str) -> "Task":
        return replace(self, content=content)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "columnId": self.column_id, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Deserialize from the wire shape (accepts columnId or column_id)."""
        if not isinstance(data, dict):
            raise ValueError("Task payload must be an object")
        if "id" not in data:
            raise ValueError("Task payload requires an id")
        column_id = data.get("columnId", data.get("column_id"))
        if column_id is None:
            raise ValueError(f"Task {data['id']} payload requires a columnId")
        return cls(id=data["id"], column_id=column_id, content=data.get("content", ""))


Entity = Union[Column, Task]
