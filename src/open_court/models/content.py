"""SQLAlchemy models for authored content (posts and comments).

Authoring flows live outside this service; the adjudication subsystem only
reads authorship and score aggregates, and flips moderation flags.
"""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from open_court.db.session import Base


class Post(Base):
    """Top-level content submitted to a community."""

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id"),
        nullable=False,
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Net vote score maintained by the voting subsystem.
    score: Mapped[int] = mapped_column(default=0, nullable=False)

    is_pinned: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_locked: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_nsfw: Mapped[bool] = mapped_column(default=False, nullable=False)
    # Set when an Open Court verdict finds the post guilty.
    removed: Mapped[bool] = mapped_column(default=False, nullable=False)


class Comment(Base):
    """Reply attached to a post."""

    __tablename__ = "comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    score: Mapped[int] = mapped_column(default=0, nullable=False)
    removed: Mapped[bool] = mapped_column(default=False, nullable=False)
