"""Community role resolution and moderator roster management.

Roles are resolved by an explicit precedence check rather than a class
hierarchy: creator, then admin, then moderator, then nothing. Every lookup
fails closed, so a missing community or a store error yields no capabilities.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from open_court.models import Community, CommunityModerator, User
from open_court.models.community import MOD_ROLE_ADMIN, MOD_ROLE_MODERATOR
from open_court.services.exceptions import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from open_court.services.mod_log import record_mod_action
from open_court.services.store import commit_or_raise

logger = logging.getLogger(__name__)


class ModRole(str, Enum):
    """Role a user holds within a community."""

    CREATOR = "creator"
    ADMIN = "admin"
    MODERATOR = "moderator"
    NONE = "none"


@dataclass(frozen=True)
class CommunityRole:
    """Capability record granted by a community role."""

    role: ModRole
    is_mod: bool
    can_add_mods: bool
    can_add_admins: bool
    can_edit_settings: bool


_CAPABILITIES: dict[ModRole, CommunityRole] = {
    ModRole.CREATOR: CommunityRole(ModRole.CREATOR, True, True, True, True),
    ModRole.ADMIN: CommunityRole(ModRole.ADMIN, True, True, False, False),
    ModRole.MODERATOR: CommunityRole(ModRole.MODERATOR, True, False, False, False),
    ModRole.NONE: CommunityRole(ModRole.NONE, False, False, False, False),
}

NO_ROLE = _CAPABILITIES[ModRole.NONE]


def capabilities_for(role: ModRole) -> CommunityRole:
    """Return the capability record for ``role``."""
    return _CAPABILITIES[role]


def resolve_community_role(db: Session, community_id: int, user_id: int | None) -> CommunityRole:
    """Resolve ``user_id``'s role in a community; never mutates state."""
    if user_id is None:
        return NO_ROLE

    try:
        creator_id = (
            db.query(Community.creator_id)
            .filter(Community.id == community_id)
            .scalar()
        )
        if creator_id is None:
            return NO_ROLE
        if creator_id == user_id:
            return capabilities_for(ModRole.CREATOR)

        assigned_role = (
            db.query(CommunityModerator.role)
            .filter(
                CommunityModerator.community_id == community_id,
                CommunityModerator.user_id == user_id,
            )
            .scalar()
        )
    except SQLAlchemyError as exc:
        logger.warning(
            "Role lookup failed for user %s in community %s; denying: %s",
            user_id,
            community_id,
            exc,
        )
        db.rollback()
        return NO_ROLE

    if assigned_role == MOD_ROLE_ADMIN:
        return capabilities_for(ModRole.ADMIN)
    if assigned_role == MOD_ROLE_MODERATOR:
        return capabilities_for(ModRole.MODERATOR)
    return NO_ROLE


def is_moderator_of(db: Session, community_id: int, user_id: int | None) -> bool:
    """Return True when the user holds any moderation role in the community."""
    return resolve_community_role(db, community_id, user_id).is_mod


def _get_community_or_raise(db: Session, community_id: int) -> Community:
    community = db.get(Community, community_id)
    if community is None:
        raise NotFoundError("Community", community_id)
    return community


def list_moderators(db: Session, community_id: int) -> list[dict[str, object]]:
    """Return the community roster with the creator first."""
    community = _get_community_or_raise(db, community_id)
    creator = db.get(User, community.creator_id)

    roster: list[dict[str, object]] = [
        {
            "id": None,
            "user_id": community.creator_id,
            "username": creator.username if creator else None,
            "role": ModRole.CREATOR.value,
            "added_at": None,
            "added_by": None,
        }
    ]

    rows = (
        db.query(CommunityModerator, User)
        .join(User, User.id == CommunityModerator.user_id)
        .filter(CommunityModerator.community_id == community_id)
        .order_by(CommunityModerator.added_at, CommunityModerator.id)
        .all()
    )
    added_by_names = {
        user.id: user.username
        for user in db.query(User).filter(
            User.id.in_([assignment.added_by_id for assignment, _ in rows if assignment.added_by_id])
        )
    }
    for assignment, user in rows:
        roster.append(
            {
                "id": assignment.id,
                "user_id": user.id,
                "username": user.username,
                "role": assignment.role,
                "added_at": assignment.added_at,
                "added_by": added_by_names.get(assignment.added_by_id),
            }
        )
    return roster


def add_moderator(
    db: Session,
    community_id: int,
    actor_id: int,
    username: str,
    role: str = MOD_ROLE_MODERATOR,
) -> CommunityModerator:
    """Appoint ``username`` as admin or moderator if the actor's role allows it."""
    if role not in (MOD_ROLE_ADMIN, MOD_ROLE_MODERATOR):
        raise InvalidRequestError("Invalid role", field="role")

    community = _get_community_or_raise(db, community_id)
    actor = resolve_community_role(db, community_id, actor_id)

    if role == MOD_ROLE_ADMIN and not actor.can_add_admins:
        raise PermissionDeniedError("Only the creator can add admins")
    if role == MOD_ROLE_MODERATOR and not actor.can_add_mods:
        raise PermissionDeniedError("Only creators and admins can add moderators")

    user = db.query(User).filter(User.username == username).first()
    if user is None:
        raise NotFoundError("User", username)
    if user.id == community.creator_id:
        raise ConflictError("Creator is already the owner")

    existing = (
        db.query(CommunityModerator)
        .filter(
            CommunityModerator.community_id == community_id,
            CommunityModerator.user_id == user.id,
        )
        .first()
    )
    if existing is not None:
        raise ConflictError("User is already a moderator")

    assignment = CommunityModerator(
        community_id=community_id,
        user_id=user.id,
        role=role,
        added_by_id=actor_id,
    )
    db.add(assignment)
    record_mod_action(
        db,
        community_id,
        "add_moderator",
        moderator_id=actor_id,
        target_type="user",
        target_id=user.id,
        reason=f"Added {user.username} as {role}",
        is_public=True,
    )
    commit_or_raise(db)
    db.refresh(assignment)
    logger.info("User %s added %s as %s in community %s", actor_id, user.id, role, community_id)
    return assignment


def remove_moderator(
    db: Session,
    community_id: int,
    actor_id: int,
    assignment_id: int,
) -> None:
    """Remove a roster entry if the actor outranks it."""
    _get_community_or_raise(db, community_id)

    assignment = (
        db.query(CommunityModerator)
        .filter(
            CommunityModerator.id == assignment_id,
            CommunityModerator.community_id == community_id,
        )
        .first()
    )
    if assignment is None:
        raise NotFoundError("Moderator", assignment_id)

    actor = resolve_community_role(db, community_id, actor_id)
    if assignment.role == MOD_ROLE_ADMIN and not actor.can_add_admins:
        raise PermissionDeniedError("Only the creator can remove admins")
    if assignment.role == MOD_ROLE_MODERATOR and not actor.can_add_mods:
        raise PermissionDeniedError("You cannot remove this moderator")

    user = db.get(User, assignment.user_id)
    username = user.username if user else str(assignment.user_id)
    removed_role = assignment.role
    removed_user_id = assignment.user_id

    db.delete(assignment)
    record_mod_action(
        db,
        community_id,
        "remove_moderator",
        moderator_id=actor_id,
        target_type="user",
        target_id=removed_user_id,
        reason=f"Removed {username} as {removed_role}",
        is_public=True,
    )
    commit_or_raise(db)
    logger.info(
        "User %s removed %s (%s) from community %s",
        actor_id,
        removed_user_id,
        removed_role,
        community_id,
    )
