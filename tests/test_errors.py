from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from kitchen import app as app_module
from kitchen import crud
from kitchen.errors import BadRequest, Conflict, Forbidden, NotFound, Unauthorized, conflict_message


def test_error_status_codes():
    assert BadRequest("x").status_code == 400
    assert Unauthorized("x").status_code == 401
    assert Forbidden("x").status_code == 403
    assert NotFound("x").status_code == 404
    assert Conflict("x").status_code == 409
    assert str(NotFound("User not found")) == "[404] User not found"


def test_conflict_message_from_driver_text():
    sqlite_err = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))
    assert conflict_message(sqlite_err) == "email already exists"

    pg_err = IntegrityError("INSERT", {}, Exception('Key (recipe_id)=(R-00001) already exists.'))
    assert conflict_message(pg_err) == "recipeId already exists"

    other = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: users.fullname"))
    assert conflict_message(other) == "Duplicate key"


def test_conflict_on_internal_column_is_generic():
    err = IntegrityError("UPDATE", {}, Exception("UNIQUE constraint failed: id_sequences.prefix"))
    assert conflict_message(err) == "Duplicate key"


def test_unhandled_error_returns_json_500(client, monkeypatch):
    def boom(db):
        raise RuntimeError("database went away")

    monkeypatch.setattr(crud, "count_recipes", boom)
    quiet = TestClient(app_module.app, raise_server_exceptions=False)
    res = quiet.get("/stats")
    assert res.status_code == 500
    assert res.json() == {"ok": False, "error": "Server error"}


def test_malformed_json_is_bad_request(client):
    res = client.post(
        "/login", content=b"{not json", headers={"content-type": "application/json"}
    )
    assert res.status_code == 400
    assert res.json()["ok"] is False
