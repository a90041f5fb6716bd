"""
post endpoints implementation
- Listing and title search
- Post creation, editing and deletion
- Likes, dislikes, answers and reports on a post

Every write re-reads the affected feed and returns it with a notice.
"""

from uuid import UUID
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.schemas.auth import AuthUser
from app.schemas.enums import FeedScope, InteractionType
from app.schemas.post import FeedUpdate, Notice, PostCreate, PostFeed, PostUpdate
from app.schemas.answer import AnswerCreate
from app.schemas.reports import ReportCreate
from app.crud.post import create_post, update_post, delete_post, load_feed
from app.crud.answer import create_answer
from app.crud.interaction import record_post_interaction
from app.crud.reports import create_report
from app.core.security import get_current_user, require_user

router = APIRouter(prefix="/posts", tags=["posts"])

INTERACTION_NOTICES = {
    InteractionType.LIKE: Notice(title="Post liked!", description="Your interaction has been recorded."),
    InteractionType.DISLIKE: Notice(title="Post disliked!", description="Your interaction has been recorded."),
}


@router.get("", response_model=PostFeed)
async def list_all_posts(
    q: Optional[str] = Query(None, description="Case-insensitive title search"),
    db: AsyncSession = Depends(get_db),
    current_user: Optional[AuthUser] = Depends(get_current_user)
):
    """All posts, newest first, optionally narrowed by title."""
    return await load_feed(db, current_user, FeedScope.ALL, query=q)


@router.post("", response_model=FeedUpdate, status_code=status.HTTP_201_CREATED)
async def create_new_post(
    *,
    post_in: PostCreate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    await create_post(db, post_in, current_user)
    return FeedUpdate(
        notice=Notice(title="Post created!", description="Your question/content has been posted successfully."),
        feed=await load_feed(db, current_user, FeedScope.ALL)
    )


@router.put("/{post_id}", response_model=FeedUpdate)
async def edit_post(
    post_id: UUID,
    post_in: PostUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    """Owner-only edit of title, description and category."""
    await update_post(db, post_id, post_in, current_user)
    return FeedUpdate(
        notice=Notice(title="Post updated", description="Your post has been updated successfully."),
        feed=await load_feed(db, current_user, FeedScope.PROFILE)
    )


@router.delete("/{post_id}", response_model=FeedUpdate)
async def remove_post(
    post_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    await delete_post(db, post_id, current_user)
    return FeedUpdate(
        notice=Notice(title="Post deleted", description="Your post has been deleted successfully."),
        feed=await load_feed(db, current_user, FeedScope.PROFILE)
    )


async def _interact(db: AsyncSession, post_id: UUID, current_user: AuthUser, interaction: InteractionType, scope: FeedScope) -> FeedUpdate:
    await record_post_interaction(db, post_id, current_user.id, interaction)
    return FeedUpdate(
        notice=INTERACTION_NOTICES[interaction],
        feed=await load_feed(db, current_user, scope)
    )


@router.post("/{post_id}/like", response_model=FeedUpdate)
async def like_post(
    post_id: UUID,
    scope: FeedScope = Query(FeedScope.ALL),
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    return await _interact(db, post_id, current_user, InteractionType.LIKE, scope)


@router.post("/{post_id}/dislike", response_model=FeedUpdate)
async def dislike_post(
    post_id: UUID,
    scope: FeedScope = Query(FeedScope.ALL),
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    return await _interact(db, post_id, current_user, InteractionType.DISLIKE, scope)


@router.post("/{post_id}/answers", response_model=FeedUpdate, status_code=status.HTTP_201_CREATED)
async def answer_post(
    post_id: UUID,
    answer_in: AnswerCreate,
    scope: FeedScope = Query(FeedScope.ALL),
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    await create_answer(db, post_id, current_user.id, answer_in)
    return FeedUpdate(
        notice=Notice(title="Answer posted!", description="Your answer has been added successfully."),
        feed=await load_feed(db, current_user, scope)
    )


@router.post("/{post_id}/report", response_model=Notice, status_code=status.HTTP_201_CREATED)
async def report_post(
    post_id: UUID,
    report_in: ReportCreate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthUser = Depends(require_user)
):
    await create_report(db, post_id, current_user, report_in)
    return Notice(title="Report submitted", description="Thank you for helping keep our community safe.")
