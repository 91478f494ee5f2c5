"""Shared fixtures: an app wired to an in-memory MongoDB."""

from __future__ import annotations

from typing import Callable, Iterator

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.database import Database

from app.core.config import Settings
from app.main import create_app
from app.services.accounts import AccountService


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        cors_allowed_origins="http://localhost:5173",
    )


@pytest.fixture()
def database() -> Database:
    return mongomock.MongoClient()["blog_api_test"]


@pytest.fixture()
def client(settings: Settings, database: Database) -> Iterator[TestClient]:
    app = create_app(settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def register(client: TestClient) -> Callable[..., dict]:
    def _register(name: str, email: str, password: str = "pw1") -> dict:
        response = client.post(
            "/registrar/cadastrar",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture()
def login_headers(client: TestClient) -> Callable[..., dict[str, str]]:
    def _login(email: str, password: str = "pw1") -> dict[str, str]:
        response = client.post("/login/logar", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture()
def admin_headers(
    client: TestClient,
    database: Database,
    settings: Settings,
    login_headers: Callable[..., dict[str, str]],
) -> dict[str, str]:
    AccountService(database, settings).create_admin(
        name="Root", email="root@example.com", password="root-pw"
    )
    return login_headers("root@example.com", "root-pw")
