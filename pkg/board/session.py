"""
Drag session: turns the raw start / over / end event stream into board moves.

State machine:
  IDLE ──start──> DRAGGING_COLUMN | DRAGGING_TASK ──end──> IDLE

Tasks are committed live on every over event so the board reflects the
drop position throughout the gesture. Columns are committed once, on end.
An end event without an over target is a cancelled gesture.
"""
import logging
from typing import Optional, Dict, Any, Callable, Tuple

from .config import BoardConfig
from .events import DragItem, DragStartEvent, DragOverEvent, DragEndEvent, EventType
from .schema import Column, Task, Entity, EntityKind, DragState, OverKind, Identifier
from .store import BoardStore

logger = logging.getLogger(__name__)


class DragSession:
    """Ephemeral drag state bound to one BoardStore."""

    def __init__(self, store: BoardStore, config: Optional[BoardConfig] = None):
        self.store = store
        self.config = config or store.config
        self.state: DragState = DragState.IDLE
        self.active: Optional[Entity] = None   # overlay snapshot, not the source of truth
        self.subscribers: Dict[str, list] = {}  # event_type -> list of callbacks
        self._active_item: Optional[DragItem] = None
        self._last_over: Optional[Tuple[Identifier, Optional[Identifier], Optional[OverKind]]] = None
        self._tasks_at_start: Optional[Tuple[Task, ...]] = None

    @property
    def is_dragging(self) -> bool:
        return self.state is not DragState.IDLE

    def subscribe(self, event_type: str, callback: Callable) -> None:
        """Register a callback for an event type."""
        if not EventType.is_valid(event_type):
            raise ValueError(f"Invalid event_type: {event_type}")
        self.subscribers.setdefault(event_type, []).append(callback)

    def _emit(self, event_type: str, **kwargs) -> None:
        for callback in self.subscribers.get(event_type, []):
            try:
                callback(**kwargs)
            except Exception as e:
                logger.warning(f"Error in {event_type} callback: {e}")

    # ── Transitions ──────────────────────────────────────────

    def on_drag_start(self, event: DragStartEvent) -> DragState:
        item = event.active
        if self.is_dragging:
            logger.debug(f"Drag start for {item.id} while already {self.state.value}; restarting")

        self.state = (
            DragState.DRAGGING_COLUMN if item.kind is EntityKind.COLUMN
            else DragState.DRAGGING_TASK
        )
        self.active = item.snapshot or self._lookup(item)
        self._active_item = item
        self._last_over = None
        self._tasks_at_start = self.store.tasks if self.config.rollback_cancelled_drag else None

        logger.debug(f"Drag started: {item.kind.value} {item.id}")
        self._emit(EventType.DRAG_STARTED, active_id=item.id, kind=item.kind)
        return self.state

    def on_drag_over(self, event: DragOverEvent) -> bool:
        """Commit a task move for the current hover target. Returns True if the board changed."""
        active, over = event.active, event.over
        key = (active.id, over.id if over else None, event.over_kind)
        if key == self._last_over:
            return False
        self._last_over = key

        if over is None or event.same_entity:
            return False
        if active.kind is not EntityKind.TASK:
            # Column order is resolved at drag end
            return False

        changed = self.store.move_task(active.id, over.id, event.over_kind)
        if changed:
            task = self.store.get_task(active.id)
            self._emit(
                EventType.TASK_MOVED,
                task_id=active.id,
                over_id=over.id,
                over_kind=event.over_kind,
                column_id=task.column_id if task else None,
            )
        return changed

    def on_drag_end(self, event: DragEndEvent) -> bool:
        """Finish the gesture; always returns to IDLE. Returns True if the board changed."""
        active, over = event.active, event.over
        tasks_at_start = self._tasks_at_start
        self._reset()

        if over is None:
            rolled_back = False
            if tasks_at_start is not None:
                rolled_back = self.store.restore_tasks(tasks_at_start)
            logger.debug(f"Drag cancelled: {active.kind.value} {active.id} (rolled_back={rolled_back})")
            self._emit(EventType.DRAG_CANCELLED, active_id=active.id, rolled_back=rolled_back)
            return rolled_back

        changed = False
        if active.kind is EntityKind.COLUMN and not event.same_entity:
            if over.kind is EntityKind.COLUMN:
                changed = self.store.move_column(active.id, over.id)
                if changed:
                    self._emit(EventType.COLUMN_MOVED, column_id=active.id, over_id=over.id)
            else:
                logger.debug(f"Column {active.id} dropped on task {over.id}; ignored")

        self._emit(EventType.DRAG_ENDED, active_id=active.id, over_id=over.id, changed=changed)
        return changed

    def on_drag_cancel(self) -> bool:
        """Abort the current gesture as if it ended with no drop target."""
        if self._active_item is None:
            self._reset()
            return False
        return self.on_drag_end(DragEndEvent(active=self._active_item, over=None))

    # ── Presentation ─────────────────────────────────────────

    def overlay(self) -> Optional[Dict[str, Any]]:
        """Snapshot of the dragged entity for ghost rendering, or None when idle."""
        if self.active is None:
            return None
        if isinstance(self.active, Column):
            return {
                "type": EntityKind.COLUMN.value,
                "column": self.active.to_dict(),
                "tasks": [t.to_dict() for t in self.store.tasks_for(self.active.id)],
            }
        return {"type": EntityKind.TASK.value, "task": self.active.to_dict()}

    # ── Internals ────────────────────────────────────────────

    def _lookup(self, item: DragItem) -> Optional[Entity]:
        if item.kind is EntityKind.COLUMN:
            return self.store.get_column(item.id)
        return self.store.get_task(item.id)

    def _reset(self) -> None:
        self.state = DragState.IDLE
        self.active = None
        self._active_item = None
        self._last_over = None
        self._tasks_at_start = None
