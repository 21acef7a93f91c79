# Board system: ordered columns and tasks restructured by drag gestures
#
# Components:
#   schema.py   - Data model (Column, Task, EntityKind, OverKind, DragState)
#   ids.py      - Monotonic identifier allocation
#   reorder.py  - Pure sequence permutation (move) and index policies
#   store.py    - In-memory board store: CRUD, moves, rendering view
#   events.py   - Drag event payloads and session notification taxonomy
#   session.py  - Drag session state machine dispatching into the store
#   config.py   - YAML-backed runtime configuration
