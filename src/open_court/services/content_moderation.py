"""Manual moderator actions gated by the community permission resolver."""

from __future__ import annotations

import logging
from typing import Final

from sqlalchemy.orm import Session

from open_court.models import Community, Post
from open_court.services.exceptions import (
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from open_court.services.mod_log import record_mod_action
from open_court.services.permissions import resolve_community_role
from open_court.services.store import commit_or_raise

logger = logging.getLogger(__name__)

# action -> (post attribute, log action when enabled, log action when disabled, message pair)
POST_TOGGLES: Final[dict[str, tuple[str, str, str, str, str]]] = {
    "toggle_pin": (
        "is_pinned", "pin_post", "unpin_post",
        "Post pinned to community", "Post unpinned",
    ),
    "toggle_lock": (
        "is_locked", "lock_comments", "unlock_comments",
        "Comments locked", "Comments unlocked",
    ),
    "toggle_nsfw": (
        "is_nsfw", "mark_nsfw", "unmark_nsfw",
        "Post marked as NSFW", "NSFW mark removed",
    ),
}


def moderate_post(db: Session, post_id: int, actor_id: int, action: str) -> tuple[Post, str]:
    """Apply a toggle action to a post and log it publicly.

    Returns the updated post and a human-readable message.
    """
    toggle = POST_TOGGLES.get(action)
    if toggle is None:
        raise InvalidRequestError("Invalid action", field="action")

    post = db.query(Post).filter(Post.id == post_id, Post.removed.is_(False)).first()
    if post is None:
        raise NotFoundError("Post", post_id)

    if not resolve_community_role(db, post.community_id, actor_id).is_mod:
        raise PermissionDeniedError("Only moderators can perform this action")

    attribute, on_action, off_action, on_message, off_message = toggle
    enabled = not getattr(post, attribute)
    setattr(post, attribute, enabled)
    message = on_message if enabled else off_message

    record_mod_action(
        db,
        post.community_id,
        on_action if enabled else off_action,
        moderator_id=actor_id,
        target_type="post",
        target_id=post.id,
        reason=message,
        is_public=True,
    )
    commit_or_raise(db)
    db.refresh(post)
    logger.info("Moderator %s applied %s to post %s", actor_id, action, post_id)
    return post, message


def update_community_settings(
    db: Session,
    community_id: int,
    actor_id: int,
    *,
    name: str | None = None,
    description: str | None = None,
    rules: str | None = None,
) -> Community:
    """Edit community metadata; only roles with ``can_edit_settings`` may do so."""
    community = db.get(Community, community_id)
    if community is None:
        raise NotFoundError("Community", community_id)

    if not resolve_community_role(db, community_id, actor_id).can_edit_settings:
        raise PermissionDeniedError("Only the creator can edit community settings")

    changed: list[str] = []
    for field, value in (("name", name), ("description", description), ("rules", rules)):
        if value is not None and getattr(community, field) != value:
            setattr(community, field, value)
            changed.append(field)

    if changed:
        record_mod_action(
            db,
            community_id,
            "update_settings",
            moderator_id=actor_id,
            target_type="community",
            target_id=community_id,
            reason=f"Updated {', '.join(changed)}",
            is_public=True,
        )
        commit_or_raise(db)
        db.refresh(community)
    return community
