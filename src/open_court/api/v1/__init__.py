"""Version 1 API endpoints."""

from .endpoints import (
    communities_router,
    court_router,
    posts_router,
    reports_router,
    system_router,
    users_router,
)

__all__ = [
    "communities_router",
    "court_router",
    "posts_router",
    "reports_router",
    "system_router",
    "users_router",
]
