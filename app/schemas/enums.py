"""
Enumeration definitions for fixed options offered to users.
"""

from enum import Enum


class Category(str, Enum):
    """Topics a post can be filed under."""
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"
    SPORTS = "Sports"
    NEWS = "News"
    TECHNOLOGY = "Technology"
    HEALTH = "Health"
    SCIENCE = "Science"
    POLITICS = "Politics"
    BUSINESS = "Business"
    ARTS = "Arts"
    TRAVEL = "Travel"
    FOOD = "Food"
    OTHER = "Other"


class InteractionType(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"


class FeedScope(str, Enum):
    """Which collection is re-fetched after a mutation."""
    ALL = "all"
    PROFILE = "profile"
