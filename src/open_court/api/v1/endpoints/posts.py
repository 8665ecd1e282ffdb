# src/open_court/api/v1/endpoints/posts.py
"""Moderator actions on posts."""

from __future__ import annotations

from fastapi import APIRouter

from open_court.api.v1.dependencies import CurrentUserDep, SessionDep
from open_court.schemas.post import PostModerationRequest, PostModerationResponse
from open_court.services.content_moderation import moderate_post

router = APIRouter(prefix="/posts", tags=["posts"])


@router.patch("/{post_id}/mod", response_model=PostModerationResponse)
async def apply_mod_action(
    post_id: int,
    payload: PostModerationRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostModerationResponse:
    """Pin, lock or mark a post NSFW; moderators only."""
    post, message = moderate_post(db, post_id, current_user.id, payload.action)
    return PostModerationResponse(
        id=post.id,
        is_pinned=post.is_pinned,
        is_locked=post.is_locked,
        is_nsfw=post.is_nsfw,
        message=message,
    )
