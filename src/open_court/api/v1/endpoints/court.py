"""Open Court endpoints: juror case queue, verdicts, stats and history."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, status

from open_court.api.v1.dependencies import CurrentUserDep, SessionDep, VerdictServiceDep
from open_court.schemas.court import (
    CaseSummaryResponse,
    JurorStatsResponse,
    VerdictCreate,
    VerdictHistoryEntry,
    VerdictResponse,
)
from open_court.services.cases import list_cases_for_juror
from open_court.services.eligibility import count_eligible_reports
from open_court.services.juror_stats import get_juror_stats

router = APIRouter(prefix="/court", tags=["open-court"])


def _stats_payload(stats: Any, pending_cases: int | None = None) -> JurorStatsResponse:
    response = JurorStatsResponse.model_validate(stats)
    response.pending_cases = pending_cases
    return response


@router.get("/cases")
async def list_cases(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: int = Query(1, ge=1),
) -> dict[str, list[dict[str, Any]]]:
    """Get pending cases the current user may still judge."""
    return {"cases": list_cases_for_juror(db, current_user.id, page=page)}


@router.get("/cases/{report_id}", response_model=CaseSummaryResponse)
async def get_case(
    report_id: int,
    _current_user: CurrentUserDep,
    db: SessionDep,
    verdict_service: VerdictServiceDep,
) -> dict[str, Any]:
    """Return a case's standing and tally."""
    return verdict_service.get_case_summary(db, report_id)


@router.post("/verdict", status_code=status.HTTP_201_CREATED)
async def submit_verdict(
    payload: VerdictCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    verdict_service: VerdictServiceDep,
) -> dict[str, Any]:
    """Cast a verdict on a case and return the juror's updated stats."""
    verdict = verdict_service.cast_verdict(
        db,
        juror_id=current_user.id,
        report_id=payload.report_id,
        vote=payload.vote,
    )
    stats = get_juror_stats(db, current_user.id)
    return {
        "success": True,
        "verdict": VerdictResponse.model_validate(verdict).model_dump(),
        "stats": _stats_payload(stats).model_dump(exclude={"pending_cases"}),
    }


@router.get("/stats", response_model=JurorStatsResponse)
async def get_stats(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> JurorStatsResponse:
    """Get the current user's juror stats and the number of cases awaiting them."""
    stats = get_juror_stats(db, current_user.id)
    return _stats_payload(stats, count_eligible_reports(db, current_user.id))


@router.get("/history", response_model=dict[str, list[VerdictHistoryEntry]])
async def get_history(
    current_user: CurrentUserDep,
    db: SessionDep,
    verdict_service: VerdictServiceDep,
    limit: int = Query(50, ge=1, le=100),
) -> dict[str, list[dict[str, Any]]]:
    """Get the current user's verdict history, newest first."""
    return {"history": verdict_service.list_verdict_history(db, current_user.id, limit=limit)}
