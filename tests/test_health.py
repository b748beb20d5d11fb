# tests/test_health.py
from fastapi import status


def test_root_responds(client) -> None:
    """The root endpoint describes the API."""
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["name"] == "CS2 Smokes Hub API"
    assert body["docs"] == "/docs"


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}
