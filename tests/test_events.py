"""Tests for drag event payload parsing and the schema wire shape."""
import pytest

from pkg.board.events import DragItem, DragStartEvent, DragOverEvent, DragEndEvent, EventType
from pkg.board.schema import Column, Task, EntityKind, OverKind


class TestEventType:
    """Tests for the closed notification taxonomy."""

    def test_all_types(self):
        assert EventType.all_types() == {
            "drag_started", "task_moved", "column_moved", "drag_ended", "drag_cancelled",
        }

    def test_is_valid(self):
        assert EventType.is_valid(EventType.TASK_MOVED)
        assert not EventType.is_valid("")
        assert not EventType.is_valid("task.moved")


class TestSchema:
    """Tests for entity helpers."""

    def test_entity_kind_from_str(self):
        assert EntityKind.from_str("Column") is EntityKind.COLUMN
        assert EntityKind.from_str("task") is EntityKind.TASK
        with pytest.raises(ValueError):
            EntityKind.from_str("Board")
        with pytest.raises(ValueError):
            EntityKind.from_str(None)

    def test_task_from_dict_accepts_both_spellings(self):
        assert Task.from_dict({"id": 1, "columnId": 2}) == Task(1, 2)
        assert Task.from_dict({"id": 1, "column_id": 2, "content": "x"}) == Task(1, 2, "x")

    def test_from_dict_rejects_non_objects(self):
        for bad in (5, "id", None, ["id"]):
            with pytest.raises(ValueError):
                Column.from_dict(bad)
            with pytest.raises(ValueError):
                Task.from_dict(bad)

    def test_task_from_dict_requires_column(self):
        with pytest.raises(ValueError):
            Task.from_dict({"id": 1})

    def test_reparented_returns_same_instance_when_unchanged(self):
        task = Task(1, 2)
        assert task.reparented(2) is task
        assert task.reparented(3) == Task(1, 3)
        assert task.column_id == 2


class TestDragPayloads:
    """Tests for parsing the input collaborator's event dicts."""

    def test_start_event_with_column(self):
        event = DragStartEvent.from_dict({
            "active": {"id": 1, "data": {"type": "Column", "column": {"id": 1, "title": "Todo"}}},
        })
        assert event.active.kind is EntityKind.COLUMN
        assert event.active.snapshot == Column(1, "Todo")

    def test_start_event_with_task(self):
        event = DragStartEvent.from_dict({
            "active": {"id": 5, "data": {"type": "Task", "task": {"id": 5, "columnId": 1, "content": "hi"}}},
        })
        assert event.active.snapshot == Task(5, 1, "hi")

    def test_start_event_requires_active(self):
        with pytest.raises(ValueError):
            DragStartEvent.from_dict({})
        with pytest.raises(ValueError):
            DragStartEvent.from_dict({"active": {"data": {"type": "Task"}}})

    def test_non_object_snapshot_rejected(self):
        with pytest.raises(ValueError):
            DragStartEvent.from_dict({"active": {"id": 1, "data": {"type": "Column", "column": 5}}})
        with pytest.raises(ValueError):
            DragStartEvent.from_dict({"active": {"id": 1, "data": {"type": "Task", "task": "id"}}})
        with pytest.raises(ValueError):
            DragOverEvent.from_dict({
                "active": {"id": 1, "data": {"type": "Task"}},
                "over": {"id": 2, "data": {"type": "Column", "column": [1]}},
            })

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            DragOverEvent.from_dict({"active": {"id": 1, "data": {"type": "Lane"}}, "over": None})

    def test_over_event_with_null_over(self):
        event = DragOverEvent.from_dict({"active": {"id": 1, "data": {"type": "Task"}}, "over": None})
        assert event.over is None
        assert event.over_kind is None
        assert not event.same_entity

    def test_over_kind(self):
        active = {"id": 1, "data": {"type": "Task"}}
        on_task = DragOverEvent.from_dict({"active": active, "over": {"id": 2, "data": {"type": "Task"}}})
        on_column = DragOverEvent.from_dict({"active": active, "over": {"id": 3, "data": {"type": "Column"}}})
        assert on_task.over_kind is OverKind.TASK
        assert on_column.over_kind is OverKind.COLUMN

    def test_same_entity_requires_same_kind(self):
        task = DragItem(id=4, kind=EntityKind.TASK)
        column = DragItem(id=4, kind=EntityKind.COLUMN)
        assert DragOverEvent(task, task).same_entity
        assert not DragOverEvent(task, column).same_entity

    def test_end_event_parses_as_end(self):
        event = DragEndEvent.from_dict({"active": {"id": 1, "data": {"type": "Column"}}, "over": None})
        assert isinstance(event, DragEndEvent)

    def test_to_dict_matches_wire_shape(self):
        item = DragItem.for_task(Task(7, 2, "x"))
        event = DragOverEvent(item, DragItem.for_column(Column(2, "Doing")))
        data = event.to_dict()
        assert data["active"] == {"id": 7, "data": {"type": "Task", "task": {"id": 7, "columnId": 2, "content": "x"}}}
        assert data["over"]["data"]["type"] == "Column"
        assert DragOverEvent.from_dict(data) == event
