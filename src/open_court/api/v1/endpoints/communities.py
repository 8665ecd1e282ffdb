"""Community role, roster, mod-log and settings endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, status

from open_court.api.v1.dependencies import CurrentUserDep, SessionDep
from open_court.models import Community
from open_court.schemas.community import (
    CommunityResponse,
    CommunityRoleResponse,
    CommunitySettingsUpdate,
    ModActionResponse,
    ModeratorCreate,
    ModeratorEntry,
)
from open_court.services.content_moderation import update_community_settings
from open_court.services.exceptions import NotFoundError
from open_court.services.mod_log import list_public_mod_actions
from open_court.services.permissions import (
    add_moderator,
    list_moderators,
    remove_moderator,
    resolve_community_role,
)

router = APIRouter(prefix="/communities", tags=["communities"])


@router.get("/{community_id}/role", response_model=CommunityRoleResponse)
async def get_my_role(
    community_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommunityRoleResponse:
    """Get the caller's role and capabilities in a community."""
    role = resolve_community_role(db, community_id, current_user.id)
    return CommunityRoleResponse(
        community_id=community_id,
        role=role.role.value,
        is_mod=role.is_mod,
        can_add_mods=role.can_add_mods,
        can_add_admins=role.can_add_admins,
        can_edit_settings=role.can_edit_settings,
    )


@router.get("/{community_id}/moderators", response_model=dict[str, list[ModeratorEntry]])
async def get_moderators(
    community_id: int,
    db: SessionDep,
) -> dict[str, list[dict[str, Any]]]:
    """List a community's creator, admins and moderators."""
    return {"moderators": list_moderators(db, community_id)}


@router.post("/{community_id}/moderators", status_code=status.HTTP_201_CREATED)
async def appoint_moderator(
    community_id: int,
    payload: ModeratorCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Appoint a user as admin or moderator."""
    assignment = add_moderator(
        db,
        community_id,
        current_user.id,
        payload.username,
        role=payload.role,
    )
    return {
        "success": True,
        "id": assignment.id,
        "message": f"Added {payload.username} as {assignment.role}",
    }


@router.delete("/{community_id}/moderators/{assignment_id}")
async def dismiss_moderator(
    community_id: int,
    assignment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> dict[str, Any]:
    """Remove a moderator assignment."""
    remove_moderator(db, community_id, current_user.id, assignment_id)
    return {"success": True, "message": "Moderator removed"}


@router.get("/{community_id}/modlog", response_model=dict[str, list[ModActionResponse]])
async def get_mod_log(
    community_id: int,
    db: SessionDep,
    limit: int | None = Query(None, ge=1),
) -> dict[str, Any]:
    """Get the public moderation log, newest first."""
    if db.get(Community, community_id) is None:
        raise NotFoundError("Community", community_id)
    return {"actions": list(list_public_mod_actions(db, community_id, limit))}


@router.patch("/{community_id}/settings", response_model=CommunityResponse)
async def edit_settings(
    community_id: int,
    payload: CommunitySettingsUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Community:
    """Edit community name, description or rules (creator only)."""
    return update_community_settings(
        db,
        community_id,
        current_user.id,
        name=payload.name,
        description=payload.description,
        rules=payload.rules,
    )
