#!/usr/bin/env python3
"""
Quick verification that a board session works end-to-end.
"""
import logging
import sys

from pkg.board.config import BoardConfig
from pkg.board.events import DragItem, DragStartEvent, DragOverEvent, DragEndEvent
from pkg.board.session import DragSession
from pkg.board.store import BoardStore


def show(store: BoardStore) -> None:
    for view in store.view():
        contents = ", ".join(f"{t.content}#{t.id}" for t in view.tasks) or "(empty)"
        print(f"   {view.column.title:<10} | {contents}")


def main():
    cfg = BoardConfig.load()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s [dragboard] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    print("=" * 60)
    print("Dragboard Session Verification")
    print("=" * 60)

    print("\n[1/6] Creating board and drag session...")
    store = BoardStore(cfg)
    session = DragSession(store, cfg)
    print("✅ Store and session created")

    print("\n[2/6] Creating columns and tasks...")
    todo, doing, done = store.create_column(), store.create_column(), store.create_column()
    t1 = store.create_task(todo.id)
    t2 = store.create_task(todo.id)
    t3 = store.create_task(doing.id)
    show(store)

    print("\n[3/6] Dragging a task onto another task in a different column...")
    session.on_drag_start(DragStartEvent(DragItem.for_task(t3)))
    session.on_drag_over(DragOverEvent(DragItem.for_task(t3), DragItem.for_task(t1)))
    session.on_drag_over(DragOverEvent(DragItem.for_task(t3), DragItem.for_task(t1)))
    session.on_drag_end(DragEndEvent(DragItem.for_task(t3), DragItem.for_task(t1)))
    show(store)
    if store.get_task(t3.id).column_id != todo.id:
        print("❌ Task was not reparented")
        return

    print("\n[4/6] Dragging a task onto an empty column...")
    session.on_drag_start(DragStartEvent(DragItem.for_task(t2)))
    session.on_drag_over(DragOverEvent(DragItem.for_task(t2), DragItem.for_column(done)))
    session.on_drag_end(DragEndEvent(DragItem.for_task(t2), DragItem.for_column(done)))
    show(store)

    print("\n[5/6] Reordering columns, then cancelling a second column drag...")
    session.on_drag_start(DragStartEvent(DragItem.for_column(done)))
    session.on_drag_end(DragEndEvent(DragItem.for_column(done), DragItem.for_column(todo)))
    session.on_drag_start(DragStartEvent(DragItem.for_column(doing)))
    session.on_drag_end(DragEndEvent(DragItem.for_column(doing), None))
    print("   Order:", " → ".join(c.title for c in store.columns))
    print(f"   Drag state after cancel: {session.state.value}")

    print("\n[6/6] Deleting a column (cascade)...")
    store.delete_column(todo.id)
    show(store)
    orphans = [t for t in store.tasks if store.get_column(t.column_id) is None]
    if orphans:
        print(f"❌ Orphaned tasks: {orphans}")
        return

    print("\n" + "=" * 60)
    print("✅ Dragboard verification complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
