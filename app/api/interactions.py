from uuid import UUID
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.schemas.auth import AuthUser
from app.schemas.post import InteractionMap
from app.crud.interaction import get_post_interactions, get_answer_interactions
from app.core.security import get_current_user


router = APIRouter(prefix="/interactions", tags=["Interactions"])


@router.get("/posts", response_model=InteractionMap)
async def fetch_post_interactions(
    post_ids: List[UUID] = Query([]),
    db: AsyncSession = Depends(get_db),
    current_user: Optional[AuthUser] = Depends(get_current_user)
):
    """The current user's like/dislike per requested post; empty for anonymous visitors."""
    if current_user is None:
        return {}
    return await get_post_interactions(db, current_user.id, post_ids)


@router.get("/answers", response_model=InteractionMap)
async def fetch_answer_interactions(
    answer_ids: List[UUID] = Query([]),
    db: AsyncSession = Depends(get_db),
    current_user: Optional[AuthUser] = Depends(get_current_user)
):
    if current_user is None:
        return {}
    return await get_answer_interactions(db, current_user.id, answer_ids)
