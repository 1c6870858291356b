# flake8: noqa
import sys
from pathlib import Path

# Ensure project root is on sys.path so `kitchen` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient  # noqa: E402

from kitchen import app as app_module
from kitchen import models  # noqa: F401  registers the tables on Base
from kitchen.db import Base


SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def session_factory():
    # Use StaticPool so the same in-memory database is shared across connections
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def static_dir(tmp_path):
    return tmp_path / "browser"


@pytest.fixture
def client(session_factory, static_dir):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app_module.app.dependency_overrides[app_module.get_db] = override_get_db
    app_module.app.dependency_overrides[app_module.get_static_dir] = lambda: static_dir
    yield TestClient(app_module.app)
    app_module.app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return the generated userId."""

    def _register(email, role="chef", fullname=None, password="secret"):
        res = client.post(
            "/register",
            json={
                "fullname": fullname or email.split("@")[0].title(),
                "email": email,
                "password": password,
                "role": role,
                "phone": "0400000000",
            },
        )
        assert res.status_code == 201, res.text
        return res.json()["userId"]

    return _register


@pytest.fixture
def add_recipe(client):
    def _add(user_id, title="Soup", chef="Alice", **extra):
        payload = {
            "userId": user_id,
            "title": title,
            "chef": chef,
            "ingredients": ["water", "salt"],
            "instructions": ["Boil", "Season"],
            "mealType": "Lunch",
            "cuisineType": "French",
            "prepTime": 20,
            "difficulty": "Easy",
            "servings": 2,
        }
        payload.update(extra)
        return client.post("/add-recipe", json=payload)

    return _add


@pytest.fixture
def add_item(client):
    def _add(user_id, name="Flour", **extra):
        payload = {
            "userId": user_id,
            "ingredientName": name,
            "quantity": 2,
            "unit": "kg",
            "category": "Dry goods",
            "purchaseDate": "2026-10-01T00:00:00",
            "expirationDate": "2027-04-01T00:00:00",
            "location": "Pantry",
            "cost": 4.5,
        }
        payload.update(extra)
        return client.post("/inventory", json=payload)

    return _add
