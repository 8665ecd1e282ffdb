"""User-related Pydantic schemas."""

from pydantic import BaseModel, Field


class ReputationResponse(BaseModel):
    """Result of recomputing a user's reputation."""

    reputation: int = Field(..., ge=0, description="Derived reputation, never negative")
    post_score: int
    comment_score: int
    message: str = "Reputation synced successfully"
