# src/open_court/models/court.py
"""Models tracking Open Court reports, juror verdicts and juror statistics."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from open_court.db.session import Base
from open_court.db.time import utcnow

REPORT_STATUS_PENDING = "pending"
REPORT_STATUS_RESOLVED = "resolved"

VOTE_GUILTY = "guilty"
VOTE_INNOCENT = "innocent"

TARGET_POST = "post"
TARGET_COMMENT = "comment"

DEFAULT_ACCURACY = 50.0
DEFAULT_RANK = "Novice Juror"


class Report(Base):
    """A flagged piece of content awaiting (or past) adjudication."""

    __tablename__ = "report"
    __table_args__ = (
        CheckConstraint("status IN ('pending', 'resolved')", name="ck_report_status"),
        CheckConstraint(
            "outcome IS NULL OR outcome IN ('guilty', 'innocent')",
            name="ck_report_outcome",
        ),
        # At most one open report per reporter and target.
        Index(
            "uq_report_open_reporter_target",
            "reporter_id",
            "target_type",
            "target_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("ix_report_status_created", "status", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    # "post" or "comment"; no FK so reports outlive the content they target.
    target_type: Mapped[str] = mapped_column(Text, nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    # Snapshot of the target's community at intake time.
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id"),
        nullable=False,
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(Text, nullable=False, default=REPORT_STATUS_PENDING)
    outcome: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class Verdict(Base):
    """One juror's immutable vote on one report."""

    __tablename__ = "verdict"
    __table_args__ = (
        # Store-level guarantee of one vote per juror per report.
        UniqueConstraint("report_id", "juror_id", name="uq_verdict_report_juror"),
        CheckConstraint("vote IN ('guilty', 'innocent')", name="ck_verdict_vote"),
        Index("ix_verdict_juror_id", "juror_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("report.id"),
        nullable=False,
    )
    juror_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    vote: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class JurorStats(Base):
    """Per-user juror statistics derived from resolved verdicts.

    Written exclusively by the reputation and rank engine.
    """

    __tablename__ = "juror_stats"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    cases_reviewed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    guilty_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    innocent_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    correct_votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    accuracy: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_ACCURACY)
    rank: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_RANK)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
