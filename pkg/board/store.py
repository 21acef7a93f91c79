"""
Board store: in-memory owner of the column and task sequences.

Provides CRUD operations, the drag move operations, and the rendering
view. Every mutation is total: an unknown id is a silent no-op. Methods
that mutate return True when the board changed and False otherwise.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Dict, Any, Sequence, Tuple

from .config import BoardConfig
from .ids import IdAllocator
from .reorder import IndexPolicy, InvalidIndex, move
from .schema import Column, Task, Identifier, OverKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnView:
    """One column as handed to the presentation layer."""
    column: Column
    tasks: Tuple[Task, ...]

    def to_dict(self) -> Dict[str, Any]:
        data = self.column.to_dict()
        data["tasks"] = [t.to_dict() for t in self.tasks]
        return data


class BoardStore:
    """Owns the ordered columns and the flat ordered task sequence."""

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        columns: Optional[Sequence[Column]] = None,
        tasks: Optional[Sequence[Task]] = None,
    ):
        self.config = config or BoardConfig()
        self.policy = IndexPolicy.from_str(self.config.invalid_index_policy)
        self._columns: List[Column] = list(columns or [])
        self._tasks: List[Task] = list(tasks or [])
        # One counter for both kinds keeps a column id from ever equalling a task id
        self._ids = IdAllocator(self.config.first_id)
        self._ids.seed([c.id for c in self._columns] + [t.id for t in self._tasks])

    # ── Queries ──────────────────────────────────────────────

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(self._tasks)

    def column_index(self, column_id: Identifier) -> Optional[int]:
        """Position of a column, or None when not found."""
        for i, col in enumerate(self._columns):
            if col.id == column_id:
                return i
        return None

    def task_index(self, task_id: Identifier) -> Optional[int]:
        """Position of a task in the flat sequence, or None when not found."""
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def get_column(self, column_id: Identifier) -> Optional[Column]:
        idx = self.column_index(column_id)
        return self._columns[idx] if idx is not None else None

    def get_task(self, task_id: Identifier) -> Optional[Task]:
        idx = self.task_index(task_id)
        return self._tasks[idx] if idx is not None else None

    def tasks_for(self, column_id: Identifier) -> List[Task]:
        """Tasks of one column in display order."""
        return [t for t in self._tasks if t.column_id == column_id]

    def view(self) -> List[ColumnView]:
        return [ColumnView(col, tuple(self.tasks_for(col.id))) for col in self._columns]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": [v.to_dict() for v in self.view()],
            "stats": {"columns": len(self._columns), "tasks": len(self._tasks)},
        }

    # ── Column operations ────────────────────────────────────

    def create_column(self) -> Column:
        column = Column(
            id=self._ids.allocate(),
            title=self.config.column_title_template.format(n=len(self._columns) + 1),
        )
        self._columns = self._columns + [column]
        logger.info(f"Created column {column.id} ({column.title!r})")
        return column

    def delete_column(self, column_id: Identifier) -> bool:
        """Remove a column and every task it owns."""
        if self.column_index(column_id) is None:
            logger.debug(f"delete_column: column {column_id} not found")
            return False
        self._columns = [c for c in self._columns if c.id != column_id]
        kept = [t for t in self._tasks if t.column_id != column_id]
        removed = len(self._tasks) - len(kept)
        self._tasks = kept
        logger.info(f"Deleted column with id {column_id} ({removed} tasks removed)")
        return True

    def rename_column(self, column_id: Identifier, title: str) -> bool:
        idx = self.column_index(column_id)
        if idx is None:
            logger.debug(f"rename_column: column {column_id} not found")
            return False
        columns = list(self._columns)
        columns[idx] = columns[idx].renamed(title)
        self._columns = columns
        return True

    def move_column(self, active_id: Identifier, over_id: Identifier) -> bool:
        """Put the active column where the over column is."""
        if active_id == over_id:
            return False
        a = self.column_index(active_id)
        o = self.column_index(over_id)
        if a is None or o is None:
            logger.debug(f"move_column: {active_id} or {over_id} not found")
            return False
        reordered = self._reorder(self._columns, a, o)
        if reordered is None:
            return False
        self._columns = reordered
        logger.debug(f"Moved column {active_id} from {a} to {o}")
        return True

    # ── Task operations ──────────────────────────────────────

    def create_task(self, column_id: Identifier) -> Task:
        """Append a task to column_id (existence of the column is not checked)."""
        task = Task(
            id=self._ids.allocate(),
            column_id=column_id,
            content=self.config.task_content_template.format(n=len(self._tasks) + 1),
        )
        self._tasks = self._tasks + [task]
        logger.debug(f"Created task {task.id} in column {column_id}")
        return task

    def delete_task(self, task_id: Identifier) -> bool:
        if self.task_index(task_id) is None:
            logger.debug(f"delete_task: task {task_id} not found")
            return False
        self._tasks = [t for t in self._tasks if t.id != task_id]
        return True

    def edit_task_content(self, task_id: Identifier, content: str) -> bool:
        idx = self.task_index(task_id)
        if idx is None:
            logger.debug(f"edit_task_content: task {task_id} not found")
            return False
        tasks = list(self._tasks)
        tasks[idx] = tasks[idx].edited(content)
        self._tasks = tasks
        return True

    def move_task(self, active_id: Identifier, over_id: Identifier, over_kind: OverKind) -> bool:
        """Reparent the active task and reposition it in the flat sequence.

        TASK: adopt the over task's column and take the over task's index.
        COLUMN: adopt the over column. With placement "keep" the flat index
        is unchanged, so the task shows up in the target column wherever its
        old index falls among that column's tasks, not necessarily last.
        With placement "append" it lands after the column's last task.
        """
        a = self.task_index(active_id)
        if a is None:
            logger.debug(f"move_task: task {active_id} not found")
            return False

        if over_kind is OverKind.TASK:
            if active_id == over_id:
                return False
            o = self.task_index(over_id)
            if o is None:
                logger.debug(f"move_task: over task {over_id} not found")
                return False
            target_column = self._tasks[o].column_id
            to_index = o
        else:
            if self.column_index(over_id) is None:
                logger.debug(f"move_task: over column {over_id} not found")
                return False
            target_column = over_id
            if self.config.task_over_column_placement == "append":
                to_index = self._append_index(a, target_column)
            else:
                to_index = a

        moved = self._tasks[a].reparented(target_column)
        order = self._reorder(self._tasks, a, to_index)
        if order is None:
            return False
        committed = [moved if t.id == active_id else t for t in order]
        if committed == self._tasks:
            return False
        self._tasks = committed
        logger.debug(
            f"Moved task {active_id} to column {target_column} at index {to_index}"
        )
        return True

    def restore_tasks(self, snapshot: Sequence[Task]) -> bool:
        """Reapply the order and column membership recorded in snapshot.

        Tasks deleted since the snapshot stay deleted, tasks created since
        keep their place at the end, and content edits are preserved.
        """
        live = {t.id: t for t in self._tasks}
        restored: List[Task] = []
        for old in snapshot:
            current = live.pop(old.id, None)
            if current is None:
                continue
            if self.column_index(old.column_id) is not None:
                current = current.reparented(old.column_id)
            restored.append(current)
        restored.extend(t for t in self._tasks if t.id in live)
        if restored == self._tasks:
            return False
        self._tasks = restored
        logger.debug(f"Restored task arrangement ({len(restored)} tasks)")
        return True

    # ── Internals ────────────────────────────────────────────

    def _append_index(self, active_index: int, column_id: Identifier) -> int:
        """Index just after the column's last task, counted with the active task removed."""
        remaining = self._tasks[:active_index] + self._tasks[active_index + 1:]
        last = None
        for i, task in enumerate(remaining):
            if task.column_id == column_id:
                last = i
        return last + 1 if last is not None else active_index

    def _reorder(self, sequence, from_index: int, to_index: int):
        try:
            return move(sequence, from_index, to_index, self.policy)
        except InvalidIndex as e:
            logger.warning(f"Reorder rejected: {e}")
            return None
