"""Community and moderation-roster Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CommunityResponse(BaseModel):
    """Schema for community information returned by the API."""

    id: int
    slug: str
    name: str
    description: str | None
    rules: str | None
    creator_id: int

    model_config = ConfigDict(from_attributes=True)


class CommunitySettingsUpdate(BaseModel):
    """Partial update of community settings."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=5000)
    rules: str | None = Field(None, max_length=10000)


class CommunityRoleResponse(BaseModel):
    """Caller's role and capabilities within a community."""

    community_id: int
    role: str
    is_mod: bool
    can_add_mods: bool
    can_add_admins: bool
    can_edit_settings: bool


class ModeratorCreate(BaseModel):
    """Schema for appointing a moderator."""

    username: str = Field(..., min_length=1)
    role: Literal["admin", "moderator"] = "moderator"


class ModeratorEntry(BaseModel):
    """One roster entry; the creator has no assignment id."""

    id: int | None
    user_id: int
    username: str | None
    role: str
    added_at: datetime | None
    added_by: str | None


class ModActionResponse(BaseModel):
    """Public mod-log entry."""

    id: int
    community_id: int
    moderator_id: int | None
    action: str
    target_type: str | None
    target_id: int | None
    reason: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
