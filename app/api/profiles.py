from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.schemas.auth import AuthUser
from app.schemas.enums import FeedScope
from app.schemas.profile import (
    AvatarUploadResponse,
    ProfilePage,
    ProfileRead,
    ProfileUpdate,
)
from app.crud.answer import get_answers_by_user
from app.crud.post import load_feed
from app.crud.profile import (
    compute_profile_stats,
    get_profile,
    update_avatar_url,
    update_display_name,
)
from app.core.security import require_user
from app.utils.file_handling import save_avatar

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfilePage)
async def read_my_profile(
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    """
    Profile page data:
    - the profile row (may not exist yet)
    - the user's posts with answers and interaction maps
    - the user's answers with the title of the post each belongs to
    - totals derived from the above
    """
    profile = await get_profile(db, current_user.id)
    feed = await load_feed(db, current_user, FeedScope.PROFILE)
    answers = await get_answers_by_user(db, current_user.id)

    return ProfilePage(
        profile=ProfileRead.model_validate(profile) if profile else None,
        stats=compute_profile_stats(feed.posts, answers),
        feed=feed,
        answers=answers,
    )


@router.put("/me", response_model=ProfileRead)
async def update_my_profile(
    profile_in: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    profile = await update_display_name(db, current_user.id, profile_in.display_name)
    return ProfileRead.model_validate(profile)


@router.post("/me/avatar", response_model=AvatarUploadResponse)
async def upload_my_avatar(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    """Replace the avatar image; the stored URL carries a cache-busting timestamp."""
    avatar_url = await save_avatar(file, str(current_user.id))
    profile = await update_avatar_url(db, current_user.id, avatar_url)
    return AvatarUploadResponse(
        avatar_url=avatar_url,
        profile=ProfileRead.model_validate(profile)
    )
