from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.schemas.auth import AuthUser
from app.schemas.enums import FeedScope, InteractionType
from app.schemas.post import FeedUpdate, Notice
from app.crud.interaction import record_answer_interaction
from app.crud.post import load_feed
from app.core.security import require_user


router = APIRouter(prefix="/answers", tags=["Answers"])

INTERACTION_NOTICES = {
    InteractionType.LIKE: Notice(title="Answer liked!", description="Your interaction has been recorded."),
    InteractionType.DISLIKE: Notice(title="Answer disliked!", description="Your interaction has been recorded."),
}


async def _interact(db: AsyncSession, answer_id: UUID, current_user: AuthUser, interaction: InteractionType, scope: FeedScope) -> FeedUpdate:
    await record_answer_interaction(db, answer_id, current_user.id, interaction)
    return FeedUpdate(
        notice=INTERACTION_NOTICES[interaction],
        feed=await load_feed(db, current_user, scope)
    )


@router.post("/{answer_id}/like", response_model=FeedUpdate)
async def like_answer(
    answer_id: UUID,
    scope: FeedScope = Query(FeedScope.ALL),
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    return await _interact(db, answer_id, current_user, InteractionType.LIKE, scope)


@router.post("/{answer_id}/dislike", response_model=FeedUpdate)
async def dislike_answer(
    answer_id: UUID,
    scope: FeedScope = Query(FeedScope.ALL),
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    return await _interact(db, answer_id, current_user, InteractionType.DISLIKE, scope)
