# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.main import create_app


@pytest.fixture()
def settings() -> Settings:
    """Settings pointing at a private in-memory SQLite database."""
    return Settings(DATABASE_URL="sqlite://", jwt_secret="test-secret")


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def register(client: TestClient) -> Callable[..., dict]:
    """Register a user and return the auth response body."""

    def _register(email: str = "a@x.com", password: str = "secret1", name: str = "Alice") -> dict:
        resp = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _register


@pytest.fixture()
def auth_headers(register) -> Callable[..., dict]:
    """Register a user and return ready-to-use Authorization headers."""

    def _headers(email: str = "a@x.com", name: str = "Alice") -> dict:
        body = register(email=email, name=name)
        return {"Authorization": f"Bearer {body['token']}"}

    return _headers


@pytest.fixture()
def make_project(client: TestClient) -> Callable[..., dict]:
    def _make(headers: dict, name: str = "Home", **fields) -> dict:
        resp = client.post("/api/projects", json={"name": name, **fields}, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture()
def make_task(client: TestClient) -> Callable[..., dict]:
    def _make(headers: dict, project_id: str, title: str = "Buy milk", **fields) -> dict:
        resp = client.post(
            "/api/tasks",
            json={"title": title, "project_id": project_id, **fields},
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
