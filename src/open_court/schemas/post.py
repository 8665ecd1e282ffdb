"""Post moderation Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class PostModerationRequest(BaseModel):
    """Schema for a manual moderator action on a post."""

    action: Literal["toggle_pin", "toggle_lock", "toggle_nsfw"] = Field(
        ...,
        description="Moderator toggle to apply",
    )


class PostModerationResponse(BaseModel):
    """Post flags after a moderator action."""

    id: int
    is_pinned: bool
    is_locked: bool
    is_nsfw: bool
    message: str
