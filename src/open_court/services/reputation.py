"""User reputation synchronizer.

Reputation is recomputed from the user's aggregate post and comment scores,
summed and floored at zero so it never reflects a debt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from open_court.models import Comment, Post, User
from open_court.services.exceptions import NotFoundError
from open_court.services.store import commit_or_raise, read_with_retry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReputationSnapshot:
    """Result of a reputation sync."""

    reputation: int
    post_score: int
    comment_score: int


def _score_sums(db: Session, user_id: int) -> tuple[int, int]:
    post_score = (
        db.query(func.coalesce(func.sum(Post.score), 0))
        .filter(Post.author_id == user_id)
        .scalar()
    )
    comment_score = (
        db.query(func.coalesce(func.sum(Comment.score), 0))
        .filter(Comment.author_id == user_id)
        .scalar()
    )
    return int(post_score or 0), int(comment_score or 0)


def sync_user_reputation(db: Session, user_id: int) -> ReputationSnapshot:
    """Recompute and store a user's reputation; idempotent without new activity."""
    user = read_with_retry(db, lambda: db.get(User, user_id))
    if user is None:
        raise NotFoundError("User", user_id)

    post_score, comment_score = read_with_retry(db, lambda: _score_sums(db, user_id))
    reputation = max(0, post_score + comment_score)

    user.reputation = reputation
    commit_or_raise(db)
    logger.debug(
        "Synced reputation for user %s: %d (posts %d, comments %d)",
        user_id,
        reputation,
        post_score,
        comment_score,
    )
    return ReputationSnapshot(
        reputation=reputation,
        post_score=post_score,
        comment_score=comment_score,
    )


def sync_all_reputations(db: Session) -> int:
    """Recompute reputation for every user; returns how many were synced."""
    user_ids = [row[0] for row in db.query(User.id).order_by(User.id).all()]
    for user_id in user_ids:
        sync_user_reputation(db, user_id)
    return len(user_ids)
