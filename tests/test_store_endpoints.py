from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(settings):
    import app as app_module

    with TestClient(app_module.create_app(settings)) as c:
        yield c


def test_set_get_remove(client):
    r = client.put("/db/user", json={"value": {"name": "ada", "langs": ["en"]}})
    assert r.status_code == 200

    r = client.get("/db/user")
    assert r.status_code == 200
    assert r.json() == {"key": "user", "value": {"name": "ada", "langs": ["en"]}}

    r = client.get("/db")
    assert r.json() == {"data": {"user": {"name": "ada", "langs": ["en"]}}}

    assert client.delete("/db/user").status_code == 200
    r = client.get("/db/user")
    assert r.status_code == 404
    assert r.json()["error"] == "KEY_NOT_FOUND"


def test_null_is_stored_but_missing_value_is_rejected(client):
    assert client.put("/db/k", json={}).status_code == 422
    assert client.put("/db/k", json={"value": None}).status_code == 200
    r = client.get("/db/k")
    assert r.status_code == 200
    assert r.json()["value"] is None


def test_falsy_values_round_trip(client):
    client.put("/db/zero", json={"value": 0})
    assert client.get("/db/zero").json()["value"] == 0


def test_math_and_error_mapping(client):
    client.put("/db/counter", json={"value": 10})

    r = client.post("/db/counter/math", json={"operator": "+", "operand": 5})
    assert r.status_code == 200
    assert r.json() == {"key": "counter", "value": 15}

    r = client.post("/db/counter/math", json={"operator": "/", "operand": 0})
    assert r.status_code == 409
    assert r.json()["error"] == "DIVISION_BY_ZERO"

    r = client.post("/db/counter/math", json={"operator": "^", "operand": 2})
    assert r.status_code == 422
    assert r.json()["error"] == "INVALID_OPERATOR"

    assert client.get("/db/counter").json()["value"] == 15


def test_array_and_object_routes(client):
    client.put("/db/list", json={"value": ["a", "b", "a"]})
    client.put("/db/obj", json={"value": {"x": 1, "y": 2}})

    assert client.post("/db/list/remove-value", json={"value": "a"}).status_code == 200
    assert client.get("/db/list/items/0").json() == {"value": "b"}
    assert client.get("/db/list/items/5").json() == {"value": None}

    assert client.get("/db/obj/fields/y").json() == {"value": 2}
    assert client.delete("/db/obj/fields/y").status_code == 200
    assert client.get("/db/obj").json()["value"] == {"x": 1}

    r = client.get("/db/obj/items/0")
    assert r.status_code == 409
    assert r.json()["error"] == "ARRAY_NOT_FOUND"

    r = client.post("/db/list/remove-value", json={"value": 1})
    assert r.status_code == 200
    r = client.get("/db/list/fields/x")
    assert r.status_code == 409
    assert r.json()["error"] == "OBJECT_NOT_FOUND"


def test_delete_each_clear_backup_restore(client):
    client.put("/db/a", json={"value": ["x", "y"]})
    client.put("/db/b", json={"value": "x"})

    assert client.post("/db/delete-each", json={"value": "x"}).status_code == 200
    assert client.get("/db").json() == {"data": {"a": ["y"]}}

    r = client.post("/db/backup")
    assert r.status_code == 200
    assert r.json()["path"].endswith("database.json.bak")

    assert client.delete("/db").status_code == 200
    assert client.get("/db").json() == {"data": {}}

    assert client.post("/db/restore").status_code == 200
    assert client.get("/db").json() == {"data": {"a": ["y"]}}


def test_restore_without_backup_is_404(client):
    r = client.post("/db/restore")
    assert r.status_code == 404
    assert r.json()["error"] == "FILE_NOT_FOUND"
