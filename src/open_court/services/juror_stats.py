"""Reputation and rank engine for Open Court jurors.

Juror statistics are a deterministic fold over the juror's verdicts on
resolved reports. Nothing is incremented in place: every recomputation reads
the full history, so replays and out-of-order triggers converge on the same
numbers and no resolved case can be counted twice or lost.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from open_court.db.time import utcnow
from open_court.models import JurorStats, Report, Verdict
from open_court.models.court import (
    DEFAULT_ACCURACY,
    DEFAULT_RANK,
    REPORT_STATUS_RESOLVED,
    VOTE_GUILTY,
)
from open_court.services.store import read_with_retry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankTier:
    """Minimum case volume and accuracy required for a rank label."""

    label: str
    min_cases: int
    min_accuracy: float


# Highest tier first; the first tier a juror qualifies for wins.
RANK_TIERS: tuple[RankTier, ...] = (
    RankTier("Chief Justice", 100, 80.0),
    RankTier("Senior Juror", 50, 70.0),
    RankTier("Juror", 20, 60.0),
    RankTier("Junior Juror", 5, 0.0),
    RankTier(DEFAULT_RANK, 0, 0.0),
)


@dataclass(frozen=True)
class JurorTally:
    """Aggregate of a juror's resolved verdicts."""

    cases_reviewed: int = 0
    guilty_votes: int = 0
    innocent_votes: int = 0
    correct_votes: int = 0

    @property
    def accuracy(self) -> float:
        """Percentage of votes matching the final outcome; 50.0 with no history."""
        if self.cases_reviewed == 0:
            return DEFAULT_ACCURACY
        return round(self.correct_votes / self.cases_reviewed * 100, 2)

    @property
    def rank(self) -> str:
        return rank_for(self.cases_reviewed, self.accuracy)


def rank_for(cases_reviewed: int, accuracy: float) -> str:
    """Map case volume and accuracy to the best rank the juror qualifies for."""
    for tier in RANK_TIERS:
        if cases_reviewed >= tier.min_cases and accuracy >= tier.min_accuracy:
            return tier.label
    return DEFAULT_RANK


def fold_juror_history(pairs: Iterable[tuple[str, str]]) -> JurorTally:
    """Fold ``(vote, outcome)`` pairs from resolved cases into a tally."""
    cases = guilty = correct = 0
    for vote, outcome in pairs:
        cases += 1
        if vote == VOTE_GUILTY:
            guilty += 1
        if vote == outcome:
            correct += 1
    return JurorTally(
        cases_reviewed=cases,
        guilty_votes=guilty,
        innocent_votes=cases - guilty,
        correct_votes=correct,
    )


def _new_stats(user_id: int) -> JurorStats:
    return JurorStats(
        user_id=user_id,
        cases_reviewed=0,
        guilty_votes=0,
        innocent_votes=0,
        correct_votes=0,
        accuracy=DEFAULT_ACCURACY,
        rank=DEFAULT_RANK,
    )


def get_juror_stats(db: Session, user_id: int) -> JurorStats:
    """Return the juror's stats, creating the default row on first interaction."""
    stats = read_with_retry(db, lambda: db.get(JurorStats, user_id))
    if stats is not None:
        return stats

    stats = _new_stats(user_id)
    db.add(stats)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the row first.
        db.rollback()
        stats = db.get(JurorStats, user_id)
        if stats is None:  # pragma: no cover - the conflicting row vanished
            raise
    return stats


def _load_for_update(db: Session, user_id: int) -> JurorStats:
    stats = (
        db.query(JurorStats)
        .filter(JurorStats.user_id == user_id)
        .with_for_update()
        .first()
    )
    if stats is None:
        stats = _new_stats(user_id)
        db.add(stats)
    return stats


def recompute_juror_stats(db: Session, user_id: int) -> JurorStats:
    """Rebuild a juror's stats from their full resolved history.

    Runs inside the caller's transaction and does not commit. The stats row is
    locked first so concurrent recomputations for the same juror serialize.
    """
    stats = _load_for_update(db, user_id)

    history = (
        db.query(Verdict.vote, Report.outcome)
        .join(Report, Report.id == Verdict.report_id)
        .filter(
            Verdict.juror_id == user_id,
            Report.status == REPORT_STATUS_RESOLVED,
        )
        .all()
    )
    tally = fold_juror_history((vote, outcome) for vote, outcome in history)

    stats.cases_reviewed = tally.cases_reviewed
    stats.guilty_votes = tally.guilty_votes
    stats.innocent_votes = tally.innocent_votes
    stats.correct_votes = tally.correct_votes
    stats.accuracy = tally.accuracy
    stats.rank = tally.rank
    stats.updated_at = utcnow()
    db.flush()

    logger.debug(
        "Recomputed juror %s: %d cases, %.2f%% accuracy, rank %s",
        user_id,
        tally.cases_reviewed,
        tally.accuracy,
        tally.rank,
    )
    return stats


def recompute_all_juror_stats(db: Session) -> int:
    """Recompute stats for every user who has cast a verdict; returns the count."""
    juror_ids = [row[0] for row in db.query(Verdict.juror_id).distinct().all()]
    for juror_id in juror_ids:
        recompute_juror_stats(db, juror_id)
    db.commit()
    return len(juror_ids)
