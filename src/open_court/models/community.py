"""SQLAlchemy models for communities and their moderator rosters."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from open_court.db.session import Base
from open_court.db.time import utcnow

MOD_ROLE_ADMIN = "admin"
MOD_ROLE_MODERATOR = "moderator"


class Community(Base):
    """Community metadata; the creator implicitly holds the highest role."""

    __tablename__ = "community"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rules: Mapped[str | None] = mapped_column(Text, nullable=True)
    creator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )


class CommunityModerator(Base):
    """Explicit admin or moderator assignment within a community."""

    __tablename__ = "community_moderator"
    __table_args__ = (
        UniqueConstraint("community_id", "user_id", name="uq_community_moderator_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    # "admin" or "moderator"; the creator never has a row here.
    role: Mapped[str] = mapped_column(Text, nullable=False, default=MOD_ROLE_MODERATOR)
    added_by_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=True,
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
