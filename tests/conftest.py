"""Test fixtures: in-memory SQLite, fresh tables per test, Flask test client.

DATABASE_URL must be set before ``models`` is imported, because the storage singleton
binds its engine at import time.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "test"

import pytest  # noqa: E402

from api import create_app  # noqa: E402
from models import storage  # noqa: E402

PASSWORD = "correct-horse-battery"


@pytest.fixture()
def app():
    storage.drop_all()
    storage.reload()
    app = create_app("test")
    yield app
    storage.close()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def gateway(app):
    """AuthGateway with an app context held for the duration of the test."""
    with app.app_context():
        yield app.extensions["auth_gateway"]


@pytest.fixture()
def auth_headers():
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def register(client):
    def _register(username="alice", email=None, password=PASSWORD):
        email = email or f"{username}@example.com"
        r = client.post(
            "/api/v1/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert r.status_code == 201, r.get_json()
        return r.get_json()["data"]

    return _register


@pytest.fixture()
def login(client):
    def _login(username="alice", password=PASSWORD):
        r = client.post("/api/v1/auth/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.get_json()
        return r.get_json()

    return _login


@pytest.fixture()
def user_session(register, login):
    """Register and log in a user; returns the login response body."""
    def _session(username="alice"):
        register(username)
        return login(username)

    return _session
