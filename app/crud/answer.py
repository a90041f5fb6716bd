import logging
from typing import List
from uuid import UUID

from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.models.answer import Answer
from app.models.post import Post
from app.schemas.answer import AnswerCreate, AnsweredPost, UserAnswerRead
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import ANSWER_CREATION_ERROR, POST_NOT_FOUND

logger = logging.getLogger(__name__)


async def create_answer(
    db: AsyncSession,
    post_id: UUID,
    user_id: UUID,
    data: AnswerCreate
) -> Answer:
    post = await db.get(Post, post_id)
    if not post:
        raise CustomHTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
            error_code=POST_NOT_FOUND
        )

    answer = Answer(post_id=post_id, user_id=user_id, content=data.content)
    try:
        db.add(answer)
        await db.commit()
        await db.refresh(answer)
        return answer
    except Exception as e:
        await db.rollback()
        logger.error(f"Failed to create answer on post {post_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add answer. Please try again.",
            error_code=ANSWER_CREATION_ERROR
        )


def to_user_answer_read(answer: Answer) -> UserAnswerRead:
    post = answer.post
    return UserAnswerRead(
        id=answer.id,
        content=answer.content,
        likes=answer.likes,
        dislikes=answer.dislikes,
        created_at=answer.created_at,
        post=AnsweredPost(id=post.id, title=post.title) if post else AnsweredPost(),
    )


async def get_answers_by_user(db: AsyncSession, user_id: UUID) -> List[UserAnswerRead]:
    """The user's answers, newest first, each with the title of its post"""
    result = await db.execute(
        select(Answer)
        .options(selectinload(Answer.post))
        .where(Answer.user_id == user_id)
        .order_by(Answer.created_at.desc())
    )
    return [to_user_answer_read(answer) for answer in result.scalars().all()]
