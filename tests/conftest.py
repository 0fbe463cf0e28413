from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from task_tracker.config import ADMIN_REGISTRATION_KEY
from task_tracker.database import get_db
from task_tracker.main import app
from task_tracker.models import Category

PASSWORD = "Secret@12"


@pytest.fixture()
def engine():
    """Fresh in-memory database per test, shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def category(db) -> Category:
    category = Category(name="Groceries")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def register(client: TestClient, name: str, email: str, role: str = "user", admin_key: str | None = None, password: str = PASSWORD):
    payload = {"name": name, "email": email, "password": password, "role": role}
    if admin_key is not None:
        payload["adminKey"] = admin_key
    return client.post("/api/auth/register", json=payload)


def login_headers(client: TestClient, email: str, password: str = PASSWORD) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def alice(client) -> dict:
    assert register(client, "Alice", "alice@example.com").status_code == 201
    return login_headers(client, "alice@example.com")


@pytest.fixture()
def carol(client) -> dict:
    assert register(client, "Carol", "carol@example.com").status_code == 201
    return login_headers(client, "carol@example.com")


@pytest.fixture()
def bob_admin(client) -> dict:
    response = register(client, "Bob", "bob@example.com", role="admin", admin_key=ADMIN_REGISTRATION_KEY)
    assert response.status_code == 201
    return login_headers(client, "bob@example.com")
