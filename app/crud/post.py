"""
Post reads and writes against the hosted `posts` table.
Every feed is rebuilt from the database; nothing is patched in memory.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.models.answer import Answer
from app.models.post import Post
from app.models.profile import Profile
from app.schemas.auth import AuthUser
from app.schemas.enums import FeedScope
from app.schemas.post import AnswerRead, PostCreate, PostFeed, PostRead, PostUpdate
from app.crud.profile import get_profiles_map
from app.crud.interaction import get_post_interactions, get_answer_interactions
from app.utils.file_handling import delete_file
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import (
    POST_NOT_FOUND,
    POST_CREATION_ERROR,
    POST_UPDATE_PERMISSION_DENIED,
    POST_DELETE_PERMISSION_DENIED,
    POST_UPDATE_ERROR,
    POST_DELETE_ERROR,
    POSTS_FETCH_ERROR,
)

logger = logging.getLogger(__name__)


def _author(profiles: Dict[UUID, Profile], user_id: Optional[UUID]):
    profile = profiles.get(user_id) if user_id else None
    if not profile:
        return None, None
    return profile.display_name or None, profile.avatar_url or None


def to_answer_read(answer: Answer, profiles: Dict[UUID, Profile]) -> AnswerRead:
    author_name, author_avatar = _author(profiles, answer.user_id)
    return AnswerRead(
        id=answer.id,
        post_id=answer.post_id,
        content=answer.content,
        likes=answer.likes,
        dislikes=answer.dislikes,
        created_at=answer.created_at,
        author_name=author_name,
        author_avatar=author_avatar,
    )


def to_post_read(post: Post, profiles: Dict[UUID, Profile]) -> PostRead:
    author_name, author_avatar = _author(profiles, post.user_id)
    return PostRead(
        id=post.id,
        title=post.title,
        description=post.description,
        category=post.category,
        likes=post.likes,
        dislikes=post.dislikes,
        image_url=post.image_url,
        created_at=post.created_at,
        author_name=author_name,
        author_avatar=author_avatar,
        answers=[to_answer_read(answer, profiles) for answer in (post.answers or [])],
    )


def filter_posts_by_title(posts: List[PostRead], query: Optional[str]) -> List[PostRead]:
    """Case-insensitive title match; keeps the original order.

    Blank queries match everything, otherwise the query is matched as typed,
    surrounding spaces included.
    """
    if not query or not query.strip():
        return list(posts)
    needle = query.lower()
    return [post for post in posts if needle in post.title.lower()]


async def get_post(db: AsyncSession, post_id: UUID) -> Optional[Post]:
    return await db.get(Post, post_id)


async def list_posts(db: AsyncSession, limit: Optional[int] = None) -> List[Post]:
    """Newest first, answers loaded with each post"""
    query = (
        select(Post)
        .options(selectinload(Post.answers))
        .order_by(Post.created_at.desc())
    )
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


async def get_posts_by_user(db: AsyncSession, user_id: UUID) -> List[Post]:
    result = await db.execute(
        select(Post)
        .options(selectinload(Post.answers))
        .where(Post.user_id == user_id)
        .order_by(Post.created_at.desc())
    )
    return result.scalars().all()


async def enrich_posts(db: AsyncSession, posts: List[Post]) -> List[PostRead]:
    """Attach author names/avatars for posts and their answers"""
    user_ids = [post.user_id for post in posts]
    user_ids += [answer.user_id for post in posts for answer in (post.answers or [])]
    profiles = await get_profiles_map(db, user_ids)
    return [to_post_read(post, profiles) for post in posts]


async def load_feed(
    db: AsyncSession,
    current_user: Optional[AuthUser],
    scope: FeedScope = FeedScope.ALL,
    query: Optional[str] = None,
    limit: Optional[int] = None
) -> PostFeed:
    """
    Fetch a collection and the current user's interactions with it.
    scope=profile is the signed-in user's own posts.
    """
    try:
        if scope == FeedScope.PROFILE:
            posts = await get_posts_by_user(db, current_user.id) if current_user else []
        else:
            posts = await list_posts(db, limit=limit)
        post_reads = filter_posts_by_title(await enrich_posts(db, posts), query)
    except Exception as e:
        logger.error(f"Error fetching posts: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load posts. Please try again.",
            error_code=POSTS_FETCH_ERROR
        )

    feed = PostFeed(posts=post_reads, query=query or None)
    if current_user and post_reads:
        feed.interactions = await get_post_interactions(
            db, current_user.id, [post.id for post in post_reads]
        )
        answer_ids = [answer.id for post in post_reads for answer in post.answers]
        feed.answer_interactions = await get_answer_interactions(db, current_user.id, answer_ids)
    return feed


async def create_post(db: AsyncSession, post_in: PostCreate, current_user: AuthUser) -> Post:
    post = Post(
        user_id=current_user.id,
        title=post_in.title,
        description=post_in.description,
        category=post_in.category.value,
        image_url=post_in.image_url,
    )
    try:
        db.add(post)
        await db.commit()
        await db.refresh(post)
        logger.info(f"Post {post.id} created by {current_user.id}")
        return post
    except Exception as e:
        await db.rollback()
        logger.error(f"Error creating post: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post. Please try again.",
            error_code=POST_CREATION_ERROR
        )


async def _get_owned_post(db: AsyncSession, post_id: UUID, current_user: AuthUser, denied_code: str) -> Post:
    post = await get_post(db, post_id)
    if not post:
        raise CustomHTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
            error_code=POST_NOT_FOUND
        )
    if str(post.user_id) != str(current_user.id):
        raise CustomHTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only change your own posts",
            error_code=denied_code
        )
    return post


async def update_post(
    db: AsyncSession,
    post_id: UUID,
    post_in: PostUpdate,
    current_user: AuthUser
) -> Post:
    """
    Apply only the submitted title/description/category.
    Counters, answers and the image are left as stored.
    """
    post = await _get_owned_post(db, post_id, current_user, POST_UPDATE_PERMISSION_DENIED)

    update_data = post_in.model_dump(exclude_unset=True, exclude_none=True)
    if "category" in update_data:
        update_data["category"] = update_data["category"].value

    for field, value in update_data.items():
        setattr(post, field, value)

    try:
        db.add(post)
        await db.commit()
        await db.refresh(post)
        return post
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating post {post_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update post.",
            error_code=POST_UPDATE_ERROR
        )


async def delete_post(db: AsyncSession, post_id: UUID, current_user: AuthUser) -> None:
    """Answers and interactions go with the post (ON DELETE CASCADE)"""
    post = await _get_owned_post(db, post_id, current_user, POST_DELETE_PERMISSION_DENIED)
    image_url = post.image_url

    try:
        await db.delete(post)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"Error deleting post {post_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete post.",
            error_code=POST_DELETE_ERROR
        )

    if image_url:
        await delete_file(image_url)
