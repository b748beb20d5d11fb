# tests/v1/test_users.py
"""Tests for public user directory endpoints."""

from fastapi import status


def test_user_count_empty(client) -> None:
    response = client.get("/users/count")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"count": 0}


def test_user_count(client, test_user, other_user) -> None:
    assert client.get("/users/count").json() == {"count": 2}
