import pytest

from kitchen import ids, models


def test_format_and_parse():
    assert ids.format_id("U", 1) == "U-00001"
    assert ids.format_id("R", 42) == "R-00042"
    assert ids.format_id("I", 123456) == "I-123456"
    assert ids.parse_id("R-00042") == 42
    assert ids.parse_id("I-123456") == 123456


@pytest.mark.parametrize("bad", ["", "R", "R00042", "R-abc"])
def test_parse_rejects_malformed(bad):
    with pytest.raises(ValueError):
        ids.parse_id(bad)


def test_seed_ids(db):
    assert ids.next_id(db, "user") == "U-00001"
    assert ids.next_id(db, "recipe") == "R-00001"
    assert ids.next_id(db, "inventory") == "I-00001"


def test_sequence_strictly_increases(db):
    issued = [ids.next_id(db, "recipe") for _ in range(25)]
    db.commit()
    numbers = [ids.parse_id(i) for i in issued]
    assert numbers == list(range(1, 26))
    assert len(set(issued)) == len(issued)


def test_prefixes_are_independent(db):
    ids.next_id(db, "user")
    ids.next_id(db, "user")
    assert ids.next_id(db, "inventory") == "I-00001"
    assert ids.next_id(db, "user") == "U-00003"


def test_counter_continues_after_existing_rows(db):
    # rows written before any counter existed
    for uid in ("U-00007", "U-00003"):
        db.add(models.User(user_id=uid, fullname=uid, email=f"{uid}@example.com", password="x", role="user"))
    db.commit()

    assert ids.highest_existing(db, "U") == 7
    assert ids.next_id(db, "user") == "U-00008"


def test_highest_existing_orders_numerically(db):
    for rid in ("R-99999", "R-100000"):
        db.add(models.Recipe(recipe_id=rid, user_id="U-00001", owner_id="U-00001", title=rid, chef="A"))
    db.commit()
    assert ids.highest_existing(db, "R") == 100000


def test_unknown_entity(db):
    with pytest.raises(ValueError):
        ids.next_id(db, "order")


def test_counter_collision_surfaces_as_conflict(client, session_factory):
    # A counter that lags behind the table (e.g. restored from an old backup)
    # hands out an id that already exists; the unique index rejects it.
    db = session_factory()
    db.add(models.User(user_id="U-00001", fullname="Old", email="old@example.com", password="x", role="chef"))
    db.add(models.IdSequence(prefix="U", last_value=0))
    db.commit()
    db.close()

    res = client.post(
        "/register",
        json={"fullname": "New", "email": "new@example.com", "password": "x", "role": "chef"},
    )
    assert res.status_code == 409
    assert res.json() == {"ok": False, "error": "userId already exists"}
