"""Content reporting endpoints feeding the Open Court queue."""

from __future__ import annotations

from fastapi import APIRouter, status

from open_court.api.v1.dependencies import CurrentUserDep, SessionDep
from open_court.models.court import TARGET_COMMENT, TARGET_POST
from open_court.schemas.report import ReportCreate, ReportResponse
from open_court.services.reports import TargetRef, submit_report

router = APIRouter(tags=["reports"])


@router.post(
    "/posts/{post_id}/report",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_post(
    post_id: int,
    payload: ReportCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReportResponse:
    """Report a post for review by the community."""
    report = submit_report(
        db,
        current_user.id,
        TargetRef(TARGET_POST, post_id),
        payload.reason,
        payload.details,
    )
    return ReportResponse.model_validate(report)


@router.post(
    "/comments/{comment_id}/report",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_comment(
    comment_id: int,
    payload: ReportCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReportResponse:
    """Report a comment for review by the community."""
    report = submit_report(
        db,
        current_user.id,
        TargetRef(TARGET_COMMENT, comment_id),
        payload.reason,
        payload.details,
    )
    return ReportResponse.model_validate(report)
