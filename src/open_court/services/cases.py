"""Juror-facing case views built on top of the eligibility filter."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from open_court.models import Comment, Community, Post, Report, User
from open_court.models.court import TARGET_COMMENT, TARGET_POST
from open_court.services.eligibility import list_eligible_reports
from open_court.services.toxicity import analyze_content
from open_court.services.verdicts import tally_verdicts


def _post_content(db: Session, post_id: int) -> tuple[dict[str, Any], dict[str, Any] | None] | None:
    row = (
        db.query(Post, User.username, Community.name)
        .join(User, User.id == Post.author_id)
        .join(Community, Community.id == Post.community_id)
        .filter(Post.id == post_id, Post.removed.is_(False))
        .first()
    )
    if row is None:
        return None
    post, author, community = row
    text = post.title + (f"\n\n{post.body}" if post.body else "")
    content = {
        "type": "Post",
        "author": author,
        "text": text,
        "community": community,
    }
    return content, None


def _comment_content(
    db: Session,
    comment_id: int,
) -> tuple[dict[str, Any], dict[str, Any] | None] | None:
    row = (
        db.query(Comment, User.username, Post.title, Community.name)
        .join(User, User.id == Comment.author_id)
        .join(Post, Post.id == Comment.post_id)
        .join(Community, Community.id == Post.community_id)
        .filter(
            Comment.id == comment_id,
            Comment.removed.is_(False),
            Post.removed.is_(False),
        )
        .first()
    )
    if row is None:
        return None
    comment, author, post_title, community = row
    content = {
        "type": "Comment",
        "author": author,
        "text": comment.body,
        "community": community,
    }
    return content, {"post_title": post_title}


def describe_case(db: Session, report: Report) -> dict[str, Any] | None:
    """Return the anonymized juror view of a report, or None if its content is gone."""
    if report.target_type == TARGET_POST:
        found = _post_content(db, report.target_id)
    elif report.target_type == TARGET_COMMENT:
        found = _comment_content(db, report.target_id)
    else:
        found = None
    if found is None:
        return None

    content, context = found
    signal = analyze_content(content["text"])
    tally = tally_verdicts(db, report.id)
    return {
        "id": report.id,
        "reason": report.reason,
        "description": report.description,
        # Reporter identity is withheld from jurors.
        "reporter": "Community Member",
        "created_at": report.created_at,
        "content": content,
        "context": context,
        "signal": {
            "toxicity_score": signal.toxicity_score,
            "flagged_keywords": signal.flagged_keywords,
            "confidence": signal.confidence,
        },
        "verdict_counts": {"guilty": tally.guilty, "innocent": tally.innocent},
    }


def list_cases_for_juror(
    db: Session,
    juror_id: int,
    page: int = 1,
) -> list[dict[str, Any]]:
    """Return one page of eligible cases, skipping those whose content vanished."""
    cases = []
    for report in list_eligible_reports(db, juror_id, page=page):
        case = describe_case(db, report)
        if case is not None:
            cases.append(case)
    return cases
