# tests/v1/test_reports.py
"""Tests for moderation report endpoints."""

from __future__ import annotations

from fastapi import status

from smokes_hub.models import Report, ReportStatus


def test_report_smoke(client, db_session, other_user, other_auth_headers, test_smoke) -> None:
    response = client.post(
        f"/smokes/{test_smoke.id}/report",
        headers=other_auth_headers,
        json={"reason": "Bad content example"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"message": "Report submitted successfully"}
    report = db_session.query(Report).one()
    assert report.reporter_id == other_user.id
    assert report.status is ReportStatus.PENDING


def test_report_twice(client, db_session, other_auth_headers, test_smoke) -> None:
    url = f"/smokes/{test_smoke.id}/report"
    client.post(url, headers=other_auth_headers, json={"reason": "Bad content example"})

    response = client.post(url, headers=other_auth_headers, json={"reason": "Still bad content"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "You have already reported this smoke"
    assert db_session.query(Report).one().reason == "Bad content example"


def test_report_ignores_client_status(client, db_session, other_auth_headers, test_smoke) -> None:
    response = client.post(
        f"/smokes/{test_smoke.id}/report",
        headers=other_auth_headers,
        json={"reason": "Bad content example", "status": "RESOLVED"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert db_session.query(Report).one().status is ReportStatus.PENDING


def test_report_reason_too_short(client, db_session, other_auth_headers, test_smoke) -> None:
    response = client.post(
        f"/smokes/{test_smoke.id}/report",
        headers=other_auth_headers,
        json={"reason": "   meh   "},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == ["reason: should have at least 10 characters"]
    assert db_session.query(Report).count() == 0


def test_report_unknown_smoke(client, other_auth_headers) -> None:
    response = client.post(
        "/smokes/999999/report",
        headers=other_auth_headers,
        json={"reason": "Bad content example"},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_report_status(client, other_auth_headers, auth_headers, test_smoke) -> None:
    url = f"/smokes/{test_smoke.id}/report/status"
    assert client.get(url, headers=other_auth_headers).json() == {"hasReported": False}

    client.post(
        f"/smokes/{test_smoke.id}/report",
        headers=other_auth_headers,
        json={"reason": "Bad content example"},
    )

    assert client.get(url, headers=other_auth_headers).json() == {"hasReported": True}
    assert client.get(url, headers=auth_headers).json() == {"hasReported": False}


def test_report_status_batch(client, other_auth_headers, test_user, game_map, smoke_factory) -> None:
    first = smoke_factory(test_user, game_map, "First")
    second = smoke_factory(test_user, game_map, "Second")
    client.post(
        f"/smokes/{second.id}/report",
        headers=other_auth_headers,
        json={"reason": "Bad content example"},
    )

    response = client.post(
        "/reports/status/batch",
        headers=other_auth_headers,
        json={"smokeIds": [second.id, first.id, 999999]},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == [
        {"smokeId": second.id, "hasReported": True},
        {"smokeId": first.id, "hasReported": False},
        {"smokeId": 999999, "hasReported": False},
    ]


def test_report_requires_token(client, test_smoke) -> None:
    response = client.post(
        f"/smokes/{test_smoke.id}/report",
        json={"reason": "Bad content example"},
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
