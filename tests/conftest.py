"""
Shared pytest fixtures.

Each test gets a fresh SQLite file database, an ``EventStore`` bound to test
settings and, for API tests, an app whose ``get_db`` dependency is pointed at
that database.
"""

import os
from datetime import date, time, timedelta

# Test environment must be in place before any eventpro import
os.environ["DATABASE_URL"] = "sqlite:///./eventpro_import.db"
os.environ["SECRET_KEY"] = "test-secret-key-do-not-use-in-production"
os.environ["SEND_EMAILS"] = "false"
os.environ["ENVIRONMENT"] = "testing"
os.environ["ENFORCE_CAPACITY_ATOMICALLY"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from eventpro import crud
from eventpro.core.config import Settings
from eventpro.db.database import Base, build_engine, get_db
from eventpro.main import create_app
from eventpro.models.user import UserRole
from eventpro.schemas.event import EventCreate, TopicCreate
from eventpro.schemas.user import UserCreate
from eventpro.services.event_store import EventStore

PASSWORD = "secret123"


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'eventpro_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def settings():
    # Differs from the environment so code reading the module-level settings shows up
    return Settings(
        SECRET_KEY="injected-test-key-not-from-environment",
        SEND_EMAILS=False,
        ENFORCE_CAPACITY_ATOMICALLY=False,
        ENVIRONMENT="testing",
    )


@pytest.fixture
def store(settings):
    return EventStore(settings)


@pytest.fixture
def app(settings, session_factory):
    app = create_app(settings)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


# ---------------------------
# Factories
# ---------------------------
@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role: UserRole = UserRole.USER, username: str = None, **kwargs):
        counter["n"] += 1
        username = username or f"{role.value}{counter['n']}"
        user_in = UserCreate(
            username=username,
            email=kwargs.pop("email", f"{username}@example.com"),
            name=kwargs.pop("name", f"{role.value.title()} Number {counter['n']}"),
            password=kwargs.pop("password", PASSWORD),
            role=role,
            **kwargs,
        )
        return crud.user.create(db, obj_in=user_in)

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, username="admin")


@pytest.fixture
def speaker(make_user):
    return make_user(UserRole.SPEAKER, username="speaker", name="Jane Smith")


@pytest.fixture
def make_event(db, store, admin):
    def _make_event(capacity: int = 10, days_ahead: int = 7, title: str = "DevOps Summit", topics=None):
        event_in = EventCreate(
            title=title,
            description="Talks about pipelines, clusters and on-call rotations.",
            event_date=date.today() + timedelta(days=days_ahead),
            start_time=time(9, 0),
            end_time=time(17, 0),
            venue="Tech Hub, San Francisco",
            location_type="in-person",
            capacity=capacity,
            status="published",
            topics=[TopicCreate(**topic) for topic in (topics or [])],
        )
        return store.create_event(db, event_in, admin)

    return _make_event


def login(client: TestClient, username: str, password: str = PASSWORD):
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response


@pytest.fixture
def login_as(client):
    def _login_as(user, password: str = PASSWORD):
        client.cookies.clear()
        login(client, user.username, password)
        return client

    return _login_as
