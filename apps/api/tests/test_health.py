from fastapi.testclient import TestClient


def test_root_health_status(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "service": client.app.title,
        "version": client.app.version,
    }


def test_explicit_health_endpoint_matches_root(client: TestClient) -> None:
    assert client.get("/health").json() == client.get("/").json()
