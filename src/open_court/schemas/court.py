"""Open Court Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class VerdictCreate(BaseModel):
    """Schema for casting a verdict on a case."""

    report_id: int
    vote: Literal["guilty", "innocent"] = Field(..., description="Juror's decision")


class VerdictResponse(BaseModel):
    """Schema for a recorded verdict."""

    id: int
    report_id: int
    vote: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class JurorStatsResponse(BaseModel):
    """Juror statistics, optionally with the number of cases awaiting the juror."""

    cases_reviewed: int
    guilty_votes: int
    innocent_votes: int
    correct_votes: int
    accuracy: float
    rank: str
    pending_cases: int | None = None

    model_config = ConfigDict(from_attributes=True)


class CaseSummaryResponse(BaseModel):
    """Report standing with its current tally."""

    id: int
    target_type: str
    target_id: int
    community_id: int
    reason: str
    description: str | None
    status: str
    outcome: str | None
    created_at: datetime
    resolved_at: datetime | None
    guilty: int
    innocent: int


class VerdictHistoryEntry(BaseModel):
    """One entry in a juror's verdict history."""

    id: int
    report_id: int
    vote: str
    voted_at: datetime
    reason: str
    target_type: str
    target_id: int
    status: str
    outcome: str | None
    guilty: int
    innocent: int
    was_correct: bool | None
