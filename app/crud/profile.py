import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.profile import Profile
from app.schemas.answer import UserAnswerRead
from app.schemas.post import PostRead
from app.schemas.profile import ProfileStats
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import PROFILE_FETCH_ERROR, PROFILE_UPDATE_ERROR

logger = logging.getLogger(__name__)


async def get_profiles_map(db: AsyncSession, user_ids: Iterable[Optional[UUID]]) -> Dict[UUID, Profile]:
    """One batched lookup for every author on a page"""
    ids = {user_id for user_id in user_ids if user_id}
    if not ids:
        return {}

    result = await db.execute(select(Profile).where(Profile.user_id.in_(ids)))
    return {profile.user_id: profile for profile in result.scalars().all()}


async def get_profile(db: AsyncSession, user_id: UUID) -> Optional[Profile]:
    try:
        result = await db.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()
    except Exception as e:
        logger.error(f"Failed to fetch profile for {user_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load your profile data.",
            error_code=PROFILE_FETCH_ERROR
        )


async def _update_profile(db: AsyncSession, user_id: UUID, **fields) -> Profile:
    """Apply fields to the user's profile row, creating it when missing"""
    profile = await get_profile(db, user_id)
    if profile is None:
        profile = Profile(user_id=user_id)

    for field, value in fields.items():
        setattr(profile, field, value)
    profile.updated_at = datetime.now(timezone.utc)

    try:
        db.add(profile)
        await db.commit()
        await db.refresh(profile)
        return profile
    except Exception as e:
        await db.rollback()
        logger.error(f"Profile update failed for {user_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile.",
            error_code=PROFILE_UPDATE_ERROR
        )


async def update_display_name(db: AsyncSession, user_id: UUID, display_name: str) -> Profile:
    return await _update_profile(db, user_id, display_name=display_name)


async def update_avatar_url(db: AsyncSession, user_id: UUID, avatar_url: str) -> Profile:
    return await _update_profile(db, user_id, avatar_url=avatar_url)


def compute_profile_stats(posts: List[PostRead], answers: List[UserAnswerRead]) -> ProfileStats:
    """Likes received counts likes on the user's posts and on their answers"""
    return ProfileStats(
        total_posts=len(posts),
        total_answers=len(answers),
        total_likes_received=sum(post.likes for post in posts) + sum(answer.likes for answer in answers),
    )
