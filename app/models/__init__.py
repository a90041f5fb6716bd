"""
Models package initialization
"""

from .post import Post
from .answer import Answer
from .profile import Profile
from .user_interaction import UserInteraction, AnswerInteraction
from .reports import Report

__all__ = [
    "Post", "Answer", "Profile",
    "UserInteraction", "AnswerInteraction",
    "Report",
]
