"""Report intake: the sole creation path for Open Court reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from open_court.models import Comment, Post, Report
from open_court.models.court import (
    REPORT_STATUS_PENDING,
    TARGET_COMMENT,
    TARGET_POST,
)
from open_court.services.exceptions import (
    DuplicateReportError,
    InvalidRequestError,
    NotFoundError,
    SelfReportError,
)
from open_court.services.mod_log import record_mod_action
from open_court.services.store import commit_or_raise

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetRef:
    """Reference to a reportable piece of content."""

    target_type: str
    target_id: int


@dataclass(frozen=True)
class TargetInfo:
    """Authorship and placement of a reported piece of content."""

    author_id: int
    community_id: int


def resolve_target(db: Session, target: TargetRef) -> TargetInfo:
    """Look up who authored the target and which community it lives in."""
    if target.target_type == TARGET_POST:
        post = (
            db.query(Post)
            .filter(Post.id == target.target_id, Post.removed.is_(False))
            .first()
        )
        if post is None:
            raise NotFoundError("Post", target.target_id)
        return TargetInfo(author_id=post.author_id, community_id=post.community_id)

    if target.target_type == TARGET_COMMENT:
        row = (
            db.query(Comment.author_id, Post.community_id)
            .join(Post, Post.id == Comment.post_id)
            .filter(Comment.id == target.target_id, Comment.removed.is_(False))
            .first()
        )
        if row is None:
            raise NotFoundError("Comment", target.target_id)
        return TargetInfo(author_id=row.author_id, community_id=row.community_id)

    raise NotFoundError("Content type", target.target_type)


def _open_report_exists(db: Session, reporter_id: int, target: TargetRef) -> bool:
    return (
        db.query(Report.id)
        .filter(
            Report.reporter_id == reporter_id,
            Report.target_type == target.target_type,
            Report.target_id == target.target_id,
            Report.status == REPORT_STATUS_PENDING,
        )
        .first()
        is not None
    )


def submit_report(
    db: Session,
    reporter_id: int,
    target: TargetRef,
    reason: str,
    description: str | None = None,
) -> Report:
    """Validate and record a content report for Open Court review.

    Raises:
        InvalidRequestError: The reason is blank.
        NotFoundError: The target content does not exist.
        SelfReportError: The reporter authored the target.
        DuplicateReportError: An open report already exists for this reporter and target.
    """
    reason = (reason or "").strip()
    if not reason:
        raise InvalidRequestError("Please select a reason", field="reason")

    info = resolve_target(db, target)
    if info.author_id == reporter_id:
        raise SelfReportError(f"You cannot report your own {target.target_type}")

    if _open_report_exists(db, reporter_id, target):
        raise DuplicateReportError(target.target_type, target.target_id)

    description = (description or "").strip() or None
    report = Report(
        reporter_id=reporter_id,
        target_type=target.target_type,
        target_id=target.target_id,
        community_id=info.community_id,
        reason=reason,
        description=description,
        status=REPORT_STATUS_PENDING,
    )

    db.add(report)
    try:
        # The partial unique index settles races between concurrent submissions.
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateReportError(target.target_type, target.target_id) from exc

    record_mod_action(
        db,
        info.community_id,
        f"report_{target.target_type}",
        moderator_id=reporter_id,
        target_type=target.target_type,
        target_id=target.target_id,
        reason=f"{reason}: {description}" if description else reason,
        is_public=False,
    )
    commit_or_raise(db)
    db.refresh(report)
    logger.info(
        "Report %s filed by user %s against %s %s",
        report.id,
        reporter_id,
        target.target_type,
        target.target_id,
    )
    return report
