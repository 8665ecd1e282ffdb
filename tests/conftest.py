# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "open-court-test-secret")
os.environ.setdefault("PYTEST_RUNNING", "true")

from open_court.core.security import create_access_token  # noqa: E402
from open_court.db.session import Base  # noqa: E402
from open_court.db.session import get_db as app_get_session  # noqa: E402
from open_court.main import app as fastapi_app  # noqa: E402
from open_court.models import Comment, Community, Post, Report, User  # noqa: E402
from open_court.models.court import TARGET_COMMENT, TARGET_POST  # noqa: E402
from open_court.services.reports import TargetRef, submit_report  # noqa: E402

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
_COMMUNITY_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit for real, so wipe every table between tests.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with unique usernames."""

    def _make_user(username: str | None = None) -> User:
        n = next(_USER_COUNTER)
        user = User(username=username or f"user{n}", display_name=f"User {n}")
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def creator(make_user: Callable[..., User]) -> User:
    """Owner of the default community."""
    return make_user("creator")


@pytest.fixture()
def community(db_session: Session, creator: User) -> Community:
    """Create a default test community owned by ``creator``."""
    n = next(_COMMUNITY_COUNTER)
    community = Community(
        slug=f"test-{n}",
        name="Test Community",
        description="Test community description",
        rules="Be kind",
        creator_id=creator.id,
    )
    db_session.add(community)
    db_session.commit()
    db_session.refresh(community)
    return community


@pytest.fixture()
def make_post(db_session: Session, community: Community) -> Callable[..., Post]:
    """Return a factory for posts in the default community."""

    def _make_post(author: User, title: str = "Test post", body: str = "Post body", score: int = 0) -> Post:
        post = Post(
            community_id=community.id,
            author_id=author.id,
            title=title,
            body=body,
            score=score,
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    """Return a factory for comments on an existing post."""

    def _make_comment(post: Post, author: User, body: str = "A comment", score: int = 0) -> Comment:
        comment = Comment(post_id=post.id, author_id=author.id, body=body, score=score)
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make_comment


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    return make_user("author")


@pytest.fixture()
def post(make_post: Callable[..., Post], author: User) -> Post:
    """A baseline post written by ``author``."""
    return make_post(author)


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(user.id)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def make_report(db_session: Session) -> Callable[..., Report]:
    """Return a factory filing a report through the intake service."""

    def _make_report(reporter: User, target: Post | Comment, reason: str = "Spam") -> Report:
        target_type = TARGET_POST if isinstance(target, Post) else TARGET_COMMENT
        return submit_report(db_session, reporter.id, TargetRef(target_type, target.id), reason)

    return _make_report
