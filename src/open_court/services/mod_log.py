"""Append-only recorder and public reader for the moderation log."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from open_court.core.settings import settings
from open_court.models import ModAction
from open_court.services.store import read_with_retry

logger = logging.getLogger(__name__)


def record_mod_action(
    db: Session,
    community_id: int,
    action: str,
    *,
    moderator_id: int | None = None,
    target_type: str | None = None,
    target_id: int | None = None,
    reason: str | None = None,
    is_public: bool = True,
) -> ModAction:
    """Append a mod-log entry to the caller's transaction.

    The entry is flushed, not committed, so it lands atomically with the
    moderation effect it describes.
    """
    entry = ModAction(
        community_id=community_id,
        moderator_id=moderator_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        reason=reason,
        is_public=is_public,
    )
    db.add(entry)
    db.flush()
    logger.debug(
        "Recorded mod action %s in community %s (public=%s)",
        action,
        community_id,
        is_public,
    )
    return entry


def clamp_limit(limit: int | None) -> int:
    """Bound a requested page size to the configured mod-log window."""
    if limit is None:
        return settings.mod_log_page_size
    return max(1, min(limit, settings.mod_log_max_page_size))


def list_public_mod_actions(
    db: Session,
    community_id: int,
    limit: int | None = None,
) -> Sequence[ModAction]:
    """Return public mod actions for a community, most recent first."""
    stmt = (
        select(ModAction)
        .where(ModAction.community_id == community_id, ModAction.is_public.is_(True))
        .order_by(ModAction.created_at.desc(), ModAction.id.desc())
        .limit(clamp_limit(limit))
    )
    return read_with_retry(db, lambda: db.scalars(stmt).all())
