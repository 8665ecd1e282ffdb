"""API endpoint modules for version 1."""

from .communities import router as communities_router
from .court import router as court_router
from .posts import router as posts_router
from .reports import router as reports_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "communities_router",
    "court_router",
    "posts_router",
    "reports_router",
    "system_router",
    "users_router",
]
