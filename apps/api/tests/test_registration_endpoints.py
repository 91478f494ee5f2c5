"""Integration-style tests for registration and admin user management."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from pymongo.database import Database

from app.core.config import Settings
from app.core.errors import Conflict
from app.core.security import create_access_token, verify_password
from app.repositories.user import UserRepository
from app.services.accounts import AccountService


def _admin_payload(index: int) -> dict[str, str]:
    return {"name": f"Admin {index}", "email": f"admin{index}@example.com", "password": "pw"}


def test_register_returns_public_user(client: TestClient, database: Database) -> None:
    response = client.post(
        "/registrar/cadastrar",
        json={"name": " Ana ", "email": " Ana@X.com ", "password": "pw1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Ana"
    assert body["email"] == "ana@x.com"
    assert body["is_admin"] is False
    assert "password" not in body and "password_hash" not in body

    stored = database["users"].find_one({"email": "ana@x.com"})
    assert stored["password_hash"] != "pw1"
    assert verify_password("pw1", stored["password_hash"])


def test_register_existing_email_is_conflict(client: TestClient, database: Database, register) -> None:
    register("Ana", "ana@x.com")

    response = client.post(
        "/registrar/cadastrar",
        json={"name": "Other", "email": "ANA@x.com", "password": "pw2"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "conflict"
    assert database["users"].count_documents({"email": "ana@x.com"}) == 1


def test_unique_index_blocks_duplicates_that_skip_the_lookup(
    client: TestClient, database: Database, settings: Settings, monkeypatch
) -> None:
    service = AccountService(database, settings)
    service.register(name="Ana", email="ana@x.com", password="pw1")
    # A concurrent request can pass the lookup before the first insert lands.
    monkeypatch.setattr(UserRepository, "get_by_email", lambda self, db, email: None)

    with pytest.raises(Conflict):
        service.register(name="Ana 2", email="ana@x.com", password="pw1")

    assert database["users"].count_documents({}) == 1



def test_register_requires_all_fields(client: TestClient) -> None:
    response = client.post("/registrar/cadastrar", json={"name": "Ana", "email": "ana@x.com"})

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"
    assert "password" in response.json()["detail"]


def test_register_rejects_blank_name(client: TestClient) -> None:
    response = client.post(
        "/registrar/cadastrar",
        json={"name": "   ", "email": "ana@x.com", "password": "pw"},
    )

    assert response.status_code == 400


def test_register_rejects_password_longer_than_bcrypt_accepts(
    client: TestClient, database: Database
) -> None:
    response = client.post(
        "/registrar/cadastrar",
        json={"name": "Ana", "email": "ana@x.com", "password": "p" * 80},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"
    assert "password" in response.json()["detail"]
    assert database["users"].count_documents({}) == 0


def test_create_admin_requires_token(client: TestClient) -> None:
    response = client.post("/registrar/admins", json=_admin_payload(1))

    assert response.status_code == 401


def test_create_admin_forbidden_for_regular_user(
    client: TestClient, register, login_headers
) -> None:
    register("Ana", "ana@x.com")

    response = client.post(
        "/registrar/admins", json=_admin_payload(1), headers=login_headers("ana@x.com")
    )

    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


def test_role_check_uses_stored_flag_not_token_claim(
    client: TestClient, settings: Settings, register
) -> None:
    user = register("Ana", "ana@x.com")
    forged = create_access_token(user_id=user["id"], is_admin=True, settings=settings)

    response = client.post(
        "/registrar/admins",
        json=_admin_payload(1),
        headers={"Authorization": f"Bearer {forged}"},
    )

    assert response.status_code == 403


def test_role_check_for_deleted_account_is_not_found(
    client: TestClient, settings: Settings
) -> None:
    token = create_access_token(
        user_id="64b000000000000000000000", is_admin=True, settings=settings
    )

    response = client.post(
        "/registrar/admins",
        json=_admin_payload(1),
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 404


def test_admin_creates_admin(client: TestClient, admin_headers, login_headers) -> None:
    response = client.post("/registrar/admins", json=_admin_payload(1), headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["is_admin"] is True
    login_headers("admin1@example.com", "pw")


def test_create_admin_with_taken_email_is_conflict(client: TestClient, admin_headers) -> None:
    response = client.post(
        "/registrar/admins",
        json={"name": "Dup", "email": "root@example.com", "password": "pw"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "conflict"


def test_sixth_admin_is_rejected(client: TestClient, database: Database, admin_headers) -> None:
    for index in range(1, 5):
        response = client.post(
            "/registrar/admins", json=_admin_payload(index), headers=admin_headers
        )
        assert response.status_code == 201

    response = client.post("/registrar/admins", json=_admin_payload(5), headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "admin_limit_exceeded"
    assert database["users"].count_documents({"is_admin": True}) == 5
    assert database["counters"].find_one({"_id": "admins"})["count"] == 5


def test_promotion_respects_admin_limit(
    client: TestClient, database: Database, admin_headers, register
) -> None:
    for index in range(1, 5):
        client.post("/registrar/admins", json=_admin_payload(index), headers=admin_headers)
    user = register("Ana", "ana@x.com")

    response = client.put(
        f"/registrar/users/{user['id']}", json={"is_admin": True}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["code"] == "admin_limit_exceeded"
    assert database["users"].find_one({"email": "ana@x.com"})["is_admin"] is False


def test_demotion_frees_an_admin_slot(
    client: TestClient, database: Database, admin_headers, register
) -> None:
    created = [
        client.post("/registrar/admins", json=_admin_payload(i), headers=admin_headers).json()
        for i in range(1, 5)
    ]
    user = register("Ana", "ana@x.com")

    demoted = client.put(
        f"/registrar/users/{created[0]['id']}", json={"is_admin": False}, headers=admin_headers
    )
    promoted = client.put(
        f"/registrar/users/{user['id']}", json={"is_admin": True}, headers=admin_headers
    )

    assert demoted.status_code == 200
    assert demoted.json()["is_admin"] is False
    assert promoted.status_code == 200
    assert promoted.json()["is_admin"] is True
    assert database["counters"].find_one({"_id": "admins"})["count"] == 5


def test_admin_update_rehashes_password(
    client: TestClient, admin_headers, register, login_headers
) -> None:
    user = register("Ana", "ana@x.com")

    response = client.put(
        f"/registrar/users/{user['id']}",
        json={"name": "Ana Maria", "password": "new-pw"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Ana Maria"
    login_headers("ana@x.com", "new-pw")


def test_admin_update_unknown_user_is_not_found(client: TestClient, admin_headers) -> None:
    missing = client.put(
        "/registrar/users/64b000000000000000000000", json={"name": "x"}, headers=admin_headers
    )
    malformed = client.put("/registrar/users/nope", json={"name": "x"}, headers=admin_headers)

    assert missing.status_code == 404
    assert malformed.status_code == 404


def test_admin_deletes_regular_user(
    client: TestClient, database: Database, admin_headers, register
) -> None:
    user = register("Ana", "ana@x.com")

    response = client.delete(f"/registrar/users/{user['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert database["users"].count_documents({"email": "ana@x.com"}) == 0


def test_admin_cannot_delete_admin(
    client: TestClient, database: Database, admin_headers
) -> None:
    other = client.post("/registrar/admins", json=_admin_payload(1), headers=admin_headers).json()

    response = client.delete(f"/registrar/users/{other['id']}", headers=admin_headers)

    assert response.status_code == 403
    assert database["users"].count_documents({"email": "admin1@example.com"}) == 1


def test_admin_cannot_delete_self(client: TestClient, database: Database, admin_headers) -> None:
    root = database["users"].find_one({"email": "root@example.com"})

    response = client.delete(f"/registrar/users/{root['_id']}", headers=admin_headers)

    assert response.status_code == 403


def test_delete_unknown_user_is_not_found(client: TestClient, admin_headers) -> None:
    response = client.delete(
        "/registrar/users/64b000000000000000000000", headers=admin_headers
    )

    assert response.status_code == 404
