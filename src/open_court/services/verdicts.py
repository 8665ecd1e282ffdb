"""Verdict aggregation and report resolution for Open Court.

Votes are recorded under a store-level uniqueness constraint, and the
``pending -> resolved`` transition is a conditional update on ``status`` so a
report resolves exactly once however many qualifying votes race for it.
Resolution evaluation is idempotent and may be re-run at any time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from open_court.core.settings import settings
from open_court.db.time import utcnow
from open_court.models import Comment, Post, Report, Verdict
from open_court.models.court import (
    REPORT_STATUS_PENDING,
    REPORT_STATUS_RESOLVED,
    TARGET_COMMENT,
    TARGET_POST,
    VOTE_GUILTY,
    VOTE_INNOCENT,
)
from open_court.services.exceptions import (
    DuplicateVoteError,
    InvalidRequestError,
    NotFoundError,
    NotPendingError,
    SelfReportError,
)
from open_court.services.juror_stats import recompute_juror_stats
from open_court.services.mod_log import record_mod_action
from open_court.services.store import commit_or_raise, read_with_retry

logger = logging.getLogger(__name__)

RESOLUTION_ACTION = "resolve_report"


@dataclass(frozen=True)
class ResolutionPolicy:
    """Threshold deciding when and how a report resolves.

    A report resolves once it has ``min_verdicts`` votes. The outcome is
    guilty when the guilty share strictly exceeds ``guilty_ratio``; ties and
    anything below go to innocent.
    """

    min_verdicts: int = 5
    guilty_ratio: float = 0.5

    def decide(self, guilty: int, innocent: int) -> str | None:
        """Return the outcome for a tally, or ``None`` while below threshold."""
        total = guilty + innocent
        if total < self.min_verdicts or total == 0:
            return None
        return VOTE_GUILTY if guilty / total > self.guilty_ratio else VOTE_INNOCENT


@dataclass(frozen=True)
class VerdictTally:
    """Current vote counts on a report."""

    guilty: int = 0
    innocent: int = 0

    @property
    def total(self) -> int:
        return self.guilty + self.innocent


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of the single successful resolution of a report."""

    report_id: int
    outcome: str
    tally: VerdictTally
    juror_ids: tuple[int, ...]


def tally_verdicts(db: Session, report_id: int) -> VerdictTally:
    """Count guilty and innocent verdicts on a report."""
    rows = (
        db.query(Verdict.vote, func.count(Verdict.id))
        .filter(Verdict.report_id == report_id)
        .group_by(Verdict.vote)
        .all()
    )
    counts = dict(rows)
    return VerdictTally(
        guilty=int(counts.get(VOTE_GUILTY, 0)),
        innocent=int(counts.get(VOTE_INNOCENT, 0)),
    )


class VerdictService:
    """Service recording juror votes and resolving reports."""

    def __init__(self, policy: ResolutionPolicy | None = None) -> None:
        self.policy = policy or settings.resolution_policy

    def cast_verdict(self, db: Session, juror_id: int, report_id: int, vote: str) -> Verdict:
        """Record a juror's vote, then evaluate the report for resolution.

        The vote is committed before resolution is evaluated, so a failure
        during evaluation never loses the vote; evaluation is simply retried
        on the next vote or read.

        Raises:
            InvalidRequestError: ``vote`` is not guilty or innocent.
            NotFoundError: The report does not exist.
            NotPendingError: The report is already resolved.
            SelfReportError: The juror filed the report.
            DuplicateVoteError: The juror already voted on this report.
        """
        if vote not in (VOTE_GUILTY, VOTE_INNOCENT):
            raise InvalidRequestError("Vote must be 'guilty' or 'innocent'", field="vote")

        report = (
            db.query(Report)
            .filter(Report.id == report_id)
            .with_for_update()
            .first()
        )
        if report is None:
            db.rollback()
            raise NotFoundError("Report", report_id)
        if report.status != REPORT_STATUS_PENDING:
            db.rollback()
            raise NotPendingError(report_id)
        if report.reporter_id == juror_id:
            db.rollback()
            raise SelfReportError("Cannot vote on your own report")

        verdict = Verdict(report_id=report_id, juror_id=juror_id, vote=vote)
        db.add(verdict)
        try:
            db.flush()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateVoteError(report_id, juror_id) from exc
        commit_or_raise(db)
        logger.debug("Juror %s voted %s on report %s", juror_id, vote, report_id)

        try:
            self.evaluate_report(db, report_id)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Resolution evaluation failed for report %s; will retry", report_id)

        return verdict

    def evaluate_report(self, db: Session, report_id: int) -> ResolutionResult | None:
        """Resolve the report if its verdicts meet the policy threshold.

        Returns the resolution only for the caller that performed the
        transition; every other call, including re-runs on an already
        resolved report, returns ``None``.
        """
        tally = tally_verdicts(db, report_id)
        outcome = self.policy.decide(tally.guilty, tally.innocent)
        if outcome is None:
            return None

        result = db.execute(
            update(Report)
            .where(Report.id == report_id, Report.status == REPORT_STATUS_PENDING)
            .values(status=REPORT_STATUS_RESOLVED, outcome=outcome, resolved_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.rollback()
            return None

        report = db.get(Report, report_id)
        if report is None:  # pragma: no cover - guarded by the update above
            db.rollback()
            return None
        db.refresh(report)

        # Re-read inside the transition: the row is now locked, so this tally
        # covers every vote that landed before the status flipped.
        tally = tally_verdicts(db, report_id)
        final_outcome = self.policy.decide(tally.guilty, tally.innocent) or outcome
        if final_outcome != outcome:
            report.outcome = final_outcome
            outcome = final_outcome

        record_mod_action(
            db,
            report.community_id,
            RESOLUTION_ACTION,
            moderator_id=None,
            target_type=report.target_type,
            target_id=report.target_id,
            reason=(
                f"Open Court verdict: {outcome} "
                f"({tally.guilty} guilty, {tally.innocent} innocent)"
            ),
            is_public=settings.court_verdict_public,
        )
        if outcome == VOTE_GUILTY:
            _remove_target(db, report)

        juror_ids = tuple(
            row[0]
            for row in db.query(Verdict.juror_id)
            .filter(Verdict.report_id == report_id)
            .order_by(Verdict.juror_id)
            .all()
        )
        for juror_id in juror_ids:
            recompute_juror_stats(db, juror_id)

        commit_or_raise(db)
        logger.info(
            "Report %s resolved %s (%d guilty / %d innocent)",
            report_id,
            outcome,
            tally.guilty,
            tally.innocent,
        )
        return ResolutionResult(
            report_id=report_id,
            outcome=outcome,
            tally=tally,
            juror_ids=juror_ids,
        )

    def resolve_pending_reports(self, db: Session) -> int:
        """Re-run evaluation on every pending report; returns how many resolved."""
        pending_ids = [
            row[0]
            for row in db.query(Report.id)
            .filter(Report.status == REPORT_STATUS_PENDING)
            .order_by(Report.id)
            .all()
        ]
        resolved = 0
        for report_id in pending_ids:
            try:
                if self.evaluate_report(db, report_id) is not None:
                    resolved += 1
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Resolution evaluation failed for report %s", report_id)
        return resolved

    def get_case_summary(self, db: Session, report_id: int) -> dict[str, Any]:
        """Return a report with its tally, healing a stuck resolution first."""
        report = read_with_retry(db, lambda: db.get(Report, report_id))
        if report is None:
            raise NotFoundError("Report", report_id)

        if report.status == REPORT_STATUS_PENDING:
            try:
                self.evaluate_report(db, report_id)
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Resolution evaluation failed for report %s", report_id)
            db.refresh(report)

        tally = read_with_retry(db, lambda: tally_verdicts(db, report_id))
        return {
            "id": report.id,
            "target_type": report.target_type,
            "target_id": report.target_id,
            "community_id": report.community_id,
            "reason": report.reason,
            "description": report.description,
            "status": report.status,
            "outcome": report.outcome,
            "created_at": report.created_at,
            "resolved_at": report.resolved_at,
            "guilty": tally.guilty,
            "innocent": tally.innocent,
        }

    def list_verdict_history(
        self,
        db: Session,
        juror_id: int,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return the juror's verdicts newest first, with each case's standing."""
        size = limit or settings.court_history_limit

        def _load() -> list[tuple[Verdict, Report]]:
            return (
                db.query(Verdict, Report)
                .join(Report, Report.id == Verdict.report_id)
                .filter(Verdict.juror_id == juror_id)
                .order_by(Verdict.created_at.desc(), Verdict.id.desc())
                .limit(size)
                .all()
            )

        history: list[dict[str, Any]] = []
        for verdict, report in read_with_retry(db, _load):
            tally = tally_verdicts(db, report.id)
            was_correct = None
            if report.status == REPORT_STATUS_RESOLVED:
                was_correct = verdict.vote == report.outcome
            history.append(
                {
                    "id": verdict.id,
                    "report_id": report.id,
                    "vote": verdict.vote,
                    "voted_at": verdict.created_at,
                    "reason": report.reason,
                    "target_type": report.target_type,
                    "target_id": report.target_id,
                    "status": report.status,
                    "outcome": report.outcome,
                    "guilty": tally.guilty,
                    "innocent": tally.innocent,
                    "was_correct": was_correct,
                }
            )
        return history


def _remove_target(db: Session, report: Report) -> None:
    """Soft-remove the content a guilty verdict applies to."""
    model: type[Post] | type[Comment] | None = None
    if report.target_type == TARGET_POST:
        model = Post
    elif report.target_type == TARGET_COMMENT:
        model = Comment
    if model is None:
        return
    db.execute(
        update(model)
        .where(model.id == report.target_id)
        .values(removed=True)
        .execution_options(synchronize_session=False)
    )


def get_verdict_service() -> VerdictService:
    """Return a verdict service bound to the configured resolution policy."""
    return VerdictService()
