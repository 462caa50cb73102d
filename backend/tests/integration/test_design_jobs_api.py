"""Integration tests for design job endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient


def iso(delta: timedelta) -> str:
    return (datetime.now(UTC) + delta).isoformat()


@pytest.mark.asyncio
async def test_rejected_job_without_reason(client: AsyncClient):
    record = {
        "status_code": "rejected",
        "started_at": iso(timedelta(days=-3)),
        "completed_at": iso(timedelta(days=-1)),
        "actual_hours": 6,
    }

    response = await client.post("/api/design-jobs/validate", json=record)
    assert response.status_code == 422
    assert [v["field"] for v in response.json()["details"]["violations"]] == ["rejection_reason"]

    record["rejection_reason"] = "Logo is not vector artwork"
    response = await client.post("/api/design-jobs/validate", json=record)
    assert response.status_code == 200
    assert response.json()["valid"] is True


@pytest.mark.asyncio
async def test_warning_only_job_is_valid(client: AsyncClient):
    response = await client.post(
        "/api/design-jobs/validate",
        json={
            "status_code": "approved",
            "started_at": iso(timedelta(days=-3)),
            "completed_at": iso(timedelta(days=-1)),
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    assert data["violations"][0]["severity"] == "warning"


@pytest.mark.asyncio
async def test_review_validation(client: AsyncClient):
    response = await client.post(
        "/api/design-jobs/review/validate",
        json={"approved": False, "revision_required": True, "quality_score": 2},
    )

    assert response.status_code == 422
    fields = {v["field"] for v in response.json()["details"]["violations"]}
    assert fields == {"rejection_reason", "revision_notes"}


@pytest.mark.asyncio
async def test_status_change_accepts_legacy_review(client: AsyncClient):
    response = await client.post(
        "/api/design-jobs/status",
        json={
            "record": {"status_code": "submitted_for_review", "started_at": iso(timedelta(days=-1))},
            "change": {"status_code": "review"},
        },
    )

    assert response.status_code == 200
    assert response.json()["status_code"] == "under_review"


@pytest.mark.asyncio
async def test_status_change_skipping_review_rejected(client: AsyncClient):
    response = await client.post(
        "/api/design-jobs/status",
        json={
            "record": {"status_code": "drafting", "started_at": iso(timedelta(days=-1))},
            "change": {"status_code": "approved"},
        },
    )

    assert response.status_code == 409
    assert response.json()["error"] == "invalid_transition"
