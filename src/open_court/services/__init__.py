# src/open_court/services/__init__.py
"""Business logic services for the Open Court subsystem."""

from .permissions import CommunityRole, ModRole, resolve_community_role
from .reports import TargetRef, submit_report
from .eligibility import count_eligible_reports, list_eligible_reports
from .juror_stats import get_juror_stats, recompute_juror_stats
from .mod_log import list_public_mod_actions, record_mod_action
from .reputation import ReputationSnapshot, sync_user_reputation
from .verdicts import ResolutionPolicy, VerdictService, get_verdict_service

__all__ = [
    "CommunityRole", "ModRole", "resolve_community_role",
    "TargetRef", "submit_report",
    "count_eligible_reports", "list_eligible_reports",
    "get_juror_stats", "recompute_juror_stats",
    "list_public_mod_actions", "record_mod_action",
    "ReputationSnapshot", "sync_user_reputation",
    "ResolutionPolicy", "VerdictService", "get_verdict_service",
]
