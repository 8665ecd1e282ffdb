"""User-facing endpoints outside the jury flow."""

from __future__ import annotations

from fastapi import APIRouter

from open_court.api.v1.dependencies import CurrentUserDep, SessionDep
from open_court.schemas.user import ReputationResponse
from open_court.services.reputation import sync_user_reputation

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/me/reputation/sync", response_model=ReputationResponse)
async def sync_reputation(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ReputationResponse:
    """Recalculate the caller's reputation from their post and comment scores."""
    snapshot = sync_user_reputation(db, current_user.id)
    return ReputationResponse(
        reputation=snapshot.reputation,
        post_score=snapshot.post_score,
        comment_score=snapshot.comment_score,
    )
