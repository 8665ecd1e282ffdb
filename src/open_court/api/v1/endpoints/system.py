"""Transparency endpoints exposing public court configuration."""

from __future__ import annotations

from fastapi import APIRouter

from open_court.core.settings import settings
from open_court.services.juror_stats import RANK_TIERS

router = APIRouter(prefix="/system", tags=["system", "transparency"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings; suitable for transparency UIs.
    """
    policy = settings.resolution_policy
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "court": {
            "min_verdicts": policy.min_verdicts,
            "guilty_ratio": policy.guilty_ratio,
            "verdicts_public": settings.court_verdict_public,
            "page_size": settings.court_page_size,
            "ranks": [
                {
                    "label": tier.label,
                    "min_cases": tier.min_cases,
                    "min_accuracy": tier.min_accuracy,
                }
                for tier in RANK_TIERS
            ],
        },
        "mod_log": {
            "page_size": settings.mod_log_page_size,
            "max_page_size": settings.mod_log_max_page_size,
        },
    }
