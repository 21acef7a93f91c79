"""
Drag event payloads consumed from the input collaborator, and the
notification taxonomy emitted by the drag session.

Wire shapes:
    start:    { active: { id, data: { type: "Column"|"Task", column?, task? } } }
    over/end: { active: { id, data }, over: { id, data } | null }
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any

from .schema import Column, Task, Entity, EntityKind, Identifier, OverKind


# ═══════════════════════════════════════════════════════════════
# NOTIFICATION TAXONOMY (CLOSED SET)
# ═══════════════════════════════════════════════════════════════

class EventType:
    """All event types a DragSession emits to subscribers."""

    DRAG_STARTED   = "drag_started"
    TASK_MOVED     = "task_moved"
    COLUMN_MOVED   = "column_moved"
    DRAG_ENDED     = "drag_ended"
    DRAG_CANCELLED = "drag_cancelled"

    _ALL = None

    @classmethod
    def all_types(cls) -> set:
        if cls._ALL is None:
            cls._ALL = {
                v for k, v in vars(cls).items()
                if isinstance(v, str) and not k.startswith("_")
            }
        return cls._ALL

    @classmethod
    def is_valid(cls, event_type: str) -> bool:
        return event_type in cls.all_types()


# ═══════════════════════════════════════════════════════════════
# DRAG PAYLOADS
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DragItem:
    """The `active` or `over` side of a drag event."""
    id: Identifier
    kind: EntityKind
    column: Optional[Column] = None
    task: Optional[Task] = None

    @property
    def snapshot(self) -> Optional[Entity]:
        """Entity carried for overlay rendering, if any."""
        return self.column if self.kind is EntityKind.COLUMN else self.task

    @classmethod
    def for_column(cls, column: Column) -> "DragItem":
        return cls(id=column.id, kind=EntityKind.COLUMN, column=column)

    @classmethod
    def for_task(cls, task: Task) -> "DragItem":
        return cls(id=task.id, kind=EntityKind.TASK, task=task)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.kind.value}
        if self.column is not None:
            data["column"] = self.column.to_dict()
        if self.task is not None:
            data["task"] = self.task.to_dict()
        return {"id": self.id, "data": data}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DragItem":
        if not isinstance(raw, dict) or "id" not in raw:
            raise ValueError("Drag item requires an id")
        data = raw.get("data") or {}
        if not isinstance(data, dict):
            raise ValueError(f"Drag item {raw['id']} has malformed data")
        kind = EntityKind.from_str(data.get("type"))
        column = Column.from_dict(data["column"]) if data.get("column") else None
        task = Task.from_dict(data["task"]) if data.get("task") else None
        return cls(id=raw["id"], kind=kind, column=column, task=task)


def _optional_item(raw: Optional[Dict[str, Any]]) -> Optional[DragItem]:
    return DragItem.from_dict(raw) if raw else None


@dataclass(frozen=True)
class DragStartEvent:
    active: DragItem

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DragStartEvent":
        if not isinstance(data, dict) or not data.get("active"):
            raise ValueError("Drag event requires an active item")
        return cls(active=DragItem.from_dict(data["active"]))


@dataclass(frozen=True)
class DragOverEvent:
    active: DragItem
    over: Optional[DragItem] = None

    @property
    def over_kind(self) -> Optional[OverKind]:
        if self.over is None:
            return None
        return OverKind.TASK if self.over.kind is EntityKind.TASK else OverKind.COLUMN

    @property
    def same_entity(self) -> bool:
        """Active and over refer to the same entity (same id, same kind)."""
        return (
            self.over is not None
            and self.over.id == self.active.id
            and self.over.kind is self.active.kind
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active": self.active.to_dict(),
            "over": self.over.to_dict() if self.over else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        if not isinstance(data, dict) or not data.get("active"):
            raise ValueError("Drag event requires an active item")
        return cls(
            active=DragItem.from_dict(data["active"]),
            over=_optional_item(data.get("over")),
        )


@dataclass(frozen=True)
class DragEndEvent(DragOverEvent):
    """Same shape as DragOverEvent; over=None means the gesture was cancelled."""
