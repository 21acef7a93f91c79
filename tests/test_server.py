"""Tests for the Flask JSON front end."""


def task_ref(task):
    return {"id": task["id"], "data": {"type": "Task", "task": task}}


def column_ref(column):
    return {"id": column["id"], "data": {"type": "Column", "column": column}}


def make_board(client):
    c1 = client.post("/api/columns").get_json()["column"]
    c2 = client.post("/api/columns").get_json()["column"]
    t1 = client.post(f"/api/columns/{c1['id']}/tasks").get_json()["task"]
    t2 = client.post(f"/api/columns/{c2['id']}/tasks").get_json()["task"]
    return c1, c2, t1, t2


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"
    assert r.get_json()["drag_state"] == "idle"


def test_empty_board(client):
    data = client.get("/api/board").get_json()
    assert data["columns"] == []
    assert data["overlay"] is None
    assert data["drag_state"] == "idle"


def test_crud_roundtrip(client):
    c1, c2, t1, t2 = make_board(client)
    assert c1["title"] == "Column 1"
    assert t2["content"] == "Task 2"

    r = client.put(f"/api/columns/{c1['id']}", json={"title": "Todo"})
    assert r.get_json()["column"]["title"] == "Todo"

    r = client.put(f"/api/tasks/{t1['id']}", json={"content": "write docs"})
    assert r.get_json()["task"]["content"] == "write docs"

    board = client.get("/api/board").get_json()
    assert [c["title"] for c in board["columns"]] == ["Todo", "Column 2"]
    assert board["columns"][0]["tasks"][0]["content"] == "write docs"

    assert client.delete(f"/api/tasks/{t2['id']}").get_json()["changed"]
    assert client.delete(f"/api/columns/{c1['id']}").get_json()["changed"]
    board = client.get("/api/board").get_json()
    assert board["stats"] == {"columns": 1, "tasks": 0}


def test_unknown_ids_are_not_errors(client):
    assert client.delete("/api/columns/999").get_json() == {"changed": False}
    r = client.put("/api/tasks/999", json={"content": "x"})
    assert r.status_code == 200
    assert r.get_json() == {"changed": False, "task": None}


def test_missing_body_fields(client):
    c1, _, t1, _ = make_board(client)
    assert client.put(f"/api/columns/{c1['id']}", json={}).status_code == 400
    assert client.put(f"/api/tasks/{t1['id']}", data="not json").status_code == 400


def test_task_drag_across_columns(client):
    c1, c2, t1, t2 = make_board(client)
    r = client.post("/api/drag/start", json={"active": task_ref(t1)})
    assert r.get_json()["drag_state"] == "dragging_task"
    assert r.get_json()["overlay"]["task"]["id"] == t1["id"]

    r = client.post("/api/drag/over", json={"active": task_ref(t1), "over": column_ref(c2)})
    assert r.get_json()["changed"] is True

    r = client.post("/api/drag/end", json={"active": task_ref(t1), "over": column_ref(c2)})
    data = r.get_json()
    assert data["drag_state"] == "idle"
    assert data["overlay"] is None
    assert [t["id"] for t in data["columns"][1]["tasks"]] == [t1["id"], t2["id"]]


def test_column_drag(client):
    c1, c2, _, _ = make_board(client)
    client.post("/api/drag/start", json={"active": column_ref(c2)})
    r = client.post("/api/drag/end", json={"active": column_ref(c2), "over": column_ref(c1)})
    assert r.get_json()["changed"] is True
    assert [c["id"] for c in r.get_json()["columns"]] == [c2["id"], c1["id"]]


def test_drag_cancel(client):
    c1, _, t1, _ = make_board(client)
    client.post("/api/drag/start", json={"active": task_ref(t1)})
    r = client.post("/api/drag/cancel")
    assert r.get_json()["drag_state"] == "idle"
    assert r.get_json()["changed"] is False


def test_malformed_drag_event(client):
    assert client.post("/api/drag/start", json={}).status_code == 400
    r = client.post("/api/drag/over", json={"active": {"id": 1, "data": {"type": "Lane"}}})
    assert r.status_code == 400
    assert "error" in r.get_json()


def test_non_object_snapshot_is_bad_request(client):
    r = client.post("/api/drag/start", json={"active": {"id": 1, "data": {"type": "Column", "column": 5}}})
    assert r.status_code == 400
    r = client.post("/api/drag/over", json={
        "active": {"id": 1, "data": {"type": "Task", "task": "id"}},
        "over": None,
    })
    assert r.status_code == 400
    r = client.post("/api/drag/end", json={
        "active": {"id": 1, "data": {"type": "Task"}},
        "over": {"id": 2, "data": {"type": "Column", "column": 7}},
    })
    assert r.status_code == 400
    assert client.get("/api/board").get_json()["drag_state"] == "idle"
