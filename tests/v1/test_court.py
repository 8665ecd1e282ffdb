# mypy: ignore-errors
# tests/v1/test_court.py
"""Tests for Open Court juror endpoints."""

import pytest
from fastapi import status

from open_court.api.v1.dependencies import get_verdict_service_dep
from open_court.services.verdicts import ResolutionPolicy, VerdictService


@pytest.fixture()
def four_vote_court(app):
    """Resolve cases after four verdicts instead of the configured default."""
    app.dependency_overrides[get_verdict_service_dep] = lambda: VerdictService(
        ResolutionPolicy(min_verdicts=4)
    )
    yield
    app.dependency_overrides.pop(get_verdict_service_dep, None)


@pytest.fixture()
def reporter(make_user):
    return make_user("reporter")


@pytest.fixture()
def report(make_report, reporter, post):
    return make_report(reporter, post)


def test_list_cases(client, make_user, report, auth_headers) -> None:
    """Test that a juror sees an anonymized case."""
    response = client.get("/api/v1/court/cases", headers=auth_headers(make_user()))
    assert response.status_code == status.HTTP_200_OK
    cases = response.json()["cases"]
    assert [c["id"] for c in cases] == [report.id]
    assert cases[0]["reporter"] == "Community Member"


def test_reporter_sees_no_cases(client, reporter, report, auth_headers) -> None:
    """Test that reporters are not offered their own reports."""
    response = client.get("/api/v1/court/cases", headers=auth_headers(reporter))
    assert response.json()["cases"] == []


def test_submit_verdict(client, make_user, report, auth_headers) -> None:
    """Test casting a verdict returns updated stats."""
    response = client.post(
        "/api/v1/court/verdict",
        json={"report_id": report.id, "vote": "guilty"},
        headers=auth_headers(make_user()),
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["success"] is True
    assert data["verdict"]["vote"] == "guilty"
    assert data["verdict"]["report_id"] == report.id
    assert data["stats"]["rank"] == "Novice Juror"
    assert data["stats"]["accuracy"] == 50.0


def test_submit_verdict_twice(client, make_user, report, auth_headers) -> None:
    """Test that a juror cannot vote twice on the same case."""
    headers = auth_headers(make_user())
    payload = {"report_id": report.id, "vote": "guilty"}
    client.post("/api/v1/court/verdict", json=payload, headers=headers)
    response = client.post("/api/v1/court/verdict", json=payload, headers=headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"detail": "Already voted on this case", "error": "duplicate_vote"}


def test_reporter_cannot_vote(client, reporter, report, auth_headers) -> None:
    """Test that the reporter is rejected as a juror."""
    response = client.post(
        "/api/v1/court/verdict",
        json={"report_id": report.id, "vote": "innocent"},
        headers=auth_headers(reporter),
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_invalid_vote_value(client, make_user, report, auth_headers) -> None:
    """Test that unknown vote values fail validation."""
    response = client.post(
        "/api/v1/court/verdict",
        json={"report_id": report.id, "vote": "abstain"},
        headers=auth_headers(make_user()),
    )
    assert response.status_code == 422


def test_case_resolves_and_closes(
    client, make_user, report, auth_headers, four_vote_court
) -> None:
    """Test the full flow from votes to a closed case."""
    for vote in ("guilty", "guilty", "guilty", "innocent"):
        client.post(
            "/api/v1/court/verdict",
            json={"report_id": report.id, "vote": vote},
            headers=auth_headers(make_user()),
        )

    summary = client.get(
        f"/api/v1/court/cases/{report.id}",
        headers=auth_headers(make_user()),
    ).json()
    assert summary["status"] == "resolved"
    assert summary["outcome"] == "guilty"
    assert (summary["guilty"], summary["innocent"]) == (3, 1)

    late = client.post(
        "/api/v1/court/verdict",
        json={"report_id": report.id, "vote": "innocent"},
        headers=auth_headers(make_user()),
    )
    assert late.status_code == status.HTTP_409_CONFLICT
    assert late.json()["detail"] == "Case already closed"


def test_stats_include_pending_cases(client, make_user, report, auth_headers) -> None:
    """Test that stats report how many cases await the juror."""
    response = client.get("/api/v1/court/stats", headers=auth_headers(make_user()))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["cases_reviewed"] == 0
    assert data["pending_cases"] == 1


def test_history(client, make_user, report, auth_headers) -> None:
    """Test that the juror's verdict history lists their votes."""
    juror = make_user()
    headers = auth_headers(juror)
    client.post(
        "/api/v1/court/verdict",
        json={"report_id": report.id, "vote": "innocent"},
        headers=headers,
    )
    history = client.get("/api/v1/court/history", headers=headers).json()["history"]
    assert len(history) == 1
    assert history[0]["report_id"] == report.id
    assert history[0]["was_correct"] is None


def test_missing_case(client, make_user, auth_headers) -> None:
    """Test fetching a case that does not exist."""
    response = client.get("/api/v1/court/cases/99999", headers=auth_headers(make_user()))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "not_found"
