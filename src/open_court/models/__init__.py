"""SQLAlchemy models for the Open Court service."""

from .community import Community, CommunityModerator
from .content import Comment, Post
from .court import JurorStats, Report, Verdict
from .mod_action import ModAction
from .user import User

__all__ = [
    "Community", "CommunityModerator",
    "Comment", "Post",
    "JurorStats", "Report", "Verdict",
    "ModAction",
    "User",
]
