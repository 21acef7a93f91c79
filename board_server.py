#!/usr/bin/env python3
"""
Dragboard Server
----------------
Serves a JSON API over one in-memory board session so a browser UI can
render the board and forward its drag events.

Usage:
    python board_server.py
    python board_server.py --port 3000 --config config/board.yaml

API:
    GET    /api/board                 → JSON: { columns, stats, overlay, drag_state }
    POST   /api/columns               → create column
    PUT    /api/columns/<id>          → JSON body: { title }
    DELETE /api/columns/<id>          → delete column and its tasks
    POST   /api/columns/<id>/tasks    → create task in column
    PUT    /api/tasks/<id>            → JSON body: { content }
    DELETE /api/tasks/<id>            → delete task
    POST   /api/drag/start            → JSON body: { active }
    POST   /api/drag/over             → JSON body: { active, over }
    POST   /api/drag/end              → JSON body: { active, over }
    POST   /api/drag/cancel           → abort current gesture

State lives in process memory only and is gone when the server stops.
"""

import logging
import sys
from typing import Optional

from flask import Flask, jsonify, request

from pkg.board.config import BoardConfig
from pkg.board.events import DragStartEvent, DragOverEvent, DragEndEvent
from pkg.board.session import DragSession
from pkg.board.store import BoardStore


def create_app(cfg: Optional[BoardConfig] = None) -> Flask:
    """Build a Flask app bound to a fresh board session."""
    cfg = cfg or BoardConfig.load()
    app = Flask(__name__)
    store = BoardStore(cfg)
    session = DragSession(store, cfg)
    app.config["BOARD_CONFIG"] = cfg
    app.config["BOARD_STORE"] = store
    app.config["DRAG_SESSION"] = session

    def board_payload() -> dict:
        payload = store.to_dict()
        payload["overlay"] = session.overlay()
        payload["drag_state"] = session.state.value
        return payload

    def json_body() -> dict:
        data = request.get_json(force=True, silent=True)
        return data if isinstance(data, dict) else {}

    # ── Board ────────────────────────────────────────────────────────────────

    @app.route("/api/board")
    def api_board():
        return jsonify(board_payload())

    # ── Columns ──────────────────────────────────────────────────────────────

    @app.route("/api/columns", methods=["POST"])
    def api_create_column():
        column = store.create_column()
        return jsonify({"column": column.to_dict()}), 201

    @app.route("/api/columns/<int:column_id>", methods=["PUT"])
    def api_rename_column(column_id):
        title = json_body().get("title")
        if not isinstance(title, str):
            return jsonify({"error": "title is required"}), 400
        changed = store.rename_column(column_id, title)
        return jsonify({"changed": changed, "column": _dict_or_none(store.get_column(column_id))})

    @app.route("/api/columns/<int:column_id>", methods=["DELETE"])
    def api_delete_column(column_id):
        return jsonify({"changed": store.delete_column(column_id)})

    @app.route("/api/columns/<int:column_id>/tasks", methods=["POST"])
    def api_create_task(column_id):
        task = store.create_task(column_id)
        return jsonify({"task": task.to_dict()}), 201

    # ── Tasks ────────────────────────────────────────────────────────────────

    @app.route("/api/tasks/<int:task_id>", methods=["PUT"])
    def api_edit_task(task_id):
        content = json_body().get("content")
        if not isinstance(content, str):
            return jsonify({"error": "content is required"}), 400
        changed = store.edit_task_content(task_id, content)
        return jsonify({"changed": changed, "task": _dict_or_none(store.get_task(task_id))})

    @app.route("/api/tasks/<int:task_id>", methods=["DELETE"])
    def api_delete_task(task_id):
        return jsonify({"changed": store.delete_task(task_id)})

    # ── Drag events ──────────────────────────────────────────────────────────

    @app.route("/api/drag/start", methods=["POST"])
    def api_drag_start():
        try:
            event = DragStartEvent.from_dict(json_body())
        except ValueError as e:
            app.logger.warning(f"Rejected drag start: {e}")
            return jsonify({"error": str(e)}), 400
        session.on_drag_start(event)
        return jsonify(board_payload())

    @app.route("/api/drag/over", methods=["POST"])
    def api_drag_over():
        try:
            event = DragOverEvent.from_dict(json_body())
        except ValueError as e:
            app.logger.warning(f"Rejected drag over: {e}")
            return jsonify({"error": str(e)}), 400
        changed = session.on_drag_over(event)
        return jsonify(dict(board_payload(), changed=changed))

    @app.route("/api/drag/end", methods=["POST"])
    def api_drag_end():
        try:
            event = DragEndEvent.from_dict(json_body())
        except ValueError as e:
            app.logger.warning(f"Rejected drag end: {e}")
            return jsonify({"error": str(e)}), 400
        changed = session.on_drag_end(event)
        return jsonify(dict(board_payload(), changed=changed))

    @app.route("/api/drag/cancel", methods=["POST"])
    def api_drag_cancel():
        changed = session.on_drag_cancel()
        return jsonify(dict(board_payload(), changed=changed))

    @app.route("/health")
    def health():
        return jsonify({
            "status": "ok",
            "columns": len(store.columns),
            "tasks": len(store.tasks),
            "drag_state": session.state.value,
        })

    return app


def _dict_or_none(entity):
    return entity.to_dict() if entity is not None else None


# ── Main ─────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Dragboard Server")
    parser.add_argument("--config", help="Path to board.yaml (overrides DRAGBOARD_CONFIG env var)")
    parser.add_argument("--host", help="Bind address (defaults to config host)")
    parser.add_argument("--port", type=int, help="Port (defaults to config port)")
    args = parser.parse_args()

    cfg = BoardConfig.load(args.config)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s [dragboard] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    host = args.host or cfg.host
    port = args.port or cfg.port

    print(f"""
╔═══════════════════════════════════════╗
║  Dragboard Server                     ║
╠═══════════════════════════════════════╣
║  URL:    http://{host}:{port:<18}║
║  Policy: {cfg.invalid_index_policy:<29}║
╚═══════════════════════════════════════╝
""")

    # Single-threaded: drag events must be applied one at a time
    create_app(cfg).run(host=host, port=port, debug=False, threaded=False)
