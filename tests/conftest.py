import os

# Must be set before app.config / app.db are imported
os.environ["ENV"] = "test"
os.environ["DISABLE_AUTH"] = "true"

import pytest
from fastapi.testclient import TestClient

import app.models  # noqa: F401  registers every table on Base.metadata
from app.db import Base, SessionLocal, engine, get_db
from app.main import create_app

pytest_plugins = [
    "tests.fixtures.user_fixtures",
    "tests.fixtures.song_fixtures",
    "tests.fixtures.relay_fixtures",
]


@pytest.fixture(scope="function")
def db():
    """Fresh schema per test on the in-memory test database."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_app(db):
    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app, setup_user):
    """Client authenticated as setup_user (auth disabled; X-User-Id is trusted)."""
    with TestClient(test_app, headers={"X-User-Id": setup_user.external_id}) as c:
        yield c


@pytest.fixture
def anonymous_client(test_app):
    with TestClient(test_app) as c:
        yield c
