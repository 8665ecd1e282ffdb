"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .community import (
    CommunityResponse,
    CommunityRoleResponse,
    CommunitySettingsUpdate,
    ModActionResponse,
    ModeratorCreate,
    ModeratorEntry,
)
from .court import (
    CaseSummaryResponse,
    JurorStatsResponse,
    VerdictCreate,
    VerdictHistoryEntry,
    VerdictResponse,
)
from .post import PostModerationRequest, PostModerationResponse
from .report import ReportCreate, ReportResponse
from .user import ReputationResponse

__all__ = [
    "CommunityResponse", "CommunityRoleResponse", "CommunitySettingsUpdate",
    "ModActionResponse", "ModeratorCreate", "ModeratorEntry",
    "CaseSummaryResponse", "JurorStatsResponse", "VerdictCreate",
    "VerdictHistoryEntry", "VerdictResponse",
    "PostModerationRequest", "PostModerationResponse",
    "ReportCreate", "ReportResponse",
    "ReputationResponse",
]
