# src/open_court/models/user.py
"""SQLAlchemy models for forum user identities."""

from __future__ import annotations

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from open_court.db.session import Base


class User(Base):
    """Forum account as seen by the adjudication subsystem."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Derived from content scores by the reputation synchronizer; never negative.
    reputation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
