"""Live projection of the pending reports a juror may vote on.

Eligibility is always derived from Report and Verdict rows; there is no
separately maintained assignment ledger that could drift out of sync.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import exists, func
from sqlalchemy.orm import Query, Session

from open_court.core.settings import settings
from open_court.models import Report, Verdict
from open_court.models.court import REPORT_STATUS_PENDING
from open_court.services.store import read_with_retry


def _eligible_query(db: Session, juror_id: int) -> Query[Report]:
    already_voted = exists().where(
        Verdict.report_id == Report.id,
        Verdict.juror_id == juror_id,
    )
    return db.query(Report).filter(
        Report.status == REPORT_STATUS_PENDING,
        Report.reporter_id != juror_id,
        ~already_voted,
    )


def count_eligible_reports(db: Session, juror_id: int) -> int:
    """Return how many pending reports the juror can still vote on."""

    def _count() -> int:
        query = _eligible_query(db, juror_id).with_entities(func.count(Report.id))
        return int(query.scalar() or 0)

    return read_with_retry(db, _count)


def list_eligible_reports(
    db: Session,
    juror_id: int,
    page: int = 1,
    page_size: int | None = None,
) -> Sequence[Report]:
    """Return one page of eligible reports, oldest first."""
    size = page_size or settings.court_page_size
    offset = (max(page, 1) - 1) * size

    def _list() -> list[Report]:
        return (
            _eligible_query(db, juror_id)
            .order_by(Report.created_at, Report.id)
            .offset(offset)
            .limit(size)
            .all()
        )

    return read_with_retry(db, _list)
