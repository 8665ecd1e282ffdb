"""Shared API dependencies for caller identity and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from open_court.core.security import decode_subject
from open_court.db.session import get_db
from open_court.models import User
from open_court.services.exceptions import UnauthorizedError
from open_court.services.verdicts import VerdictService, get_verdict_service

# HTTP Bearer scheme for JWT authentication; missing credentials are handled below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Resolve the authenticated user from the bearer token.

    Raises:
        UnauthorizedError: If the token is missing, invalid, or names no known user.
    """
    if credentials is None:
        raise UnauthorizedError()

    user_id = decode_subject(credentials.credentials)
    if user_id is None:
        raise UnauthorizedError()

    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError()
    return user


def get_verdict_service_dep() -> VerdictService:
    """Return a verdict service bound to the configured resolution policy."""
    return get_verdict_service()


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
VerdictServiceDep = Annotated[VerdictService, Depends(get_verdict_service_dep)]
