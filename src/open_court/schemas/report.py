"""Report-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReportCreate(BaseModel):
    """Schema for reporting a post or comment."""

    reason: str = Field(..., min_length=1, max_length=200, description="Report reason")
    details: str | None = Field(None, max_length=2000, description="Optional free-text details")


class ReportResponse(BaseModel):
    """Schema for a report as seen by its reporter."""

    id: int
    target_type: str
    target_id: int
    community_id: int
    reason: str
    description: str | None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
