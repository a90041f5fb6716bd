"""
Like/dislike recording.

Counters and the one-interaction-per-user rule live in the database
procedures; this module only calls them and reads back what was stored.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.user_interaction import UserInteraction, AnswerInteraction
from app.schemas.enums import InteractionType
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import INTERACTION_FAILED, INTERACTIONS_FETCH_ERROR

logger = logging.getLogger(__name__)

POST_PROCEDURES = {
    InteractionType.LIKE: "increment_post_likes",
    InteractionType.DISLIKE: "increment_post_dislikes",
}

ANSWER_PROCEDURES = {
    InteractionType.LIKE: "increment_answer_likes",
    InteractionType.DISLIKE: "increment_answer_dislikes",
}

FAILURE_MESSAGES = {
    ("post", InteractionType.LIKE): "Failed to like post. Please try again.",
    ("post", InteractionType.DISLIKE): "Failed to dislike post. Please try again.",
    ("answer", InteractionType.LIKE): "Failed to like answer. Please try again.",
    ("answer", InteractionType.DISLIKE): "Failed to dislike answer. Please try again.",
}


async def _call_procedure(db: AsyncSession, name: str, target_id: UUID, user_id: UUID) -> None:
    await db.execute(select(getattr(func, name)(target_id, user_id)))
    await db.commit()


async def record_post_interaction(
    db: AsyncSession,
    post_id: UUID,
    user_id: UUID,
    interaction: InteractionType
) -> None:
    try:
        await _call_procedure(db, POST_PROCEDURES[interaction], post_id, user_id)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error recording {interaction.value} on post {post_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=FAILURE_MESSAGES[("post", interaction)],
            error_code=INTERACTION_FAILED
        )


async def record_answer_interaction(
    db: AsyncSession,
    answer_id: UUID,
    user_id: UUID,
    interaction: InteractionType
) -> None:
    try:
        await _call_procedure(db, ANSWER_PROCEDURES[interaction], answer_id, user_id)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error recording {interaction.value} on answer {answer_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=FAILURE_MESSAGES[("answer", interaction)],
            error_code=INTERACTION_FAILED
        )


def build_interaction_map(target_ids: List[UUID], rows) -> Dict[str, Optional[InteractionType]]:
    """Every requested id is present; ids without a stored row map to None"""
    interactions: Dict[str, Optional[InteractionType]] = {str(target_id): None for target_id in target_ids}
    for target_id, interaction_type in rows:
        interactions[str(target_id)] = InteractionType(interaction_type)
    return interactions


async def get_post_interactions(
    db: AsyncSession,
    user_id: UUID,
    post_ids: List[UUID]
) -> Dict[str, Optional[InteractionType]]:
    if not post_ids:
        return {}
    try:
        result = await db.execute(
            select(UserInteraction.post_id, UserInteraction.interaction_type).where(
                UserInteraction.user_id == user_id,
                UserInteraction.post_id.in_(post_ids)
            )
        )
        return build_interaction_map(post_ids, result.all())
    except Exception as e:
        logger.error(f"Error fetching user interactions: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load your interactions.",
            error_code=INTERACTIONS_FETCH_ERROR
        )


async def get_answer_interactions(
    db: AsyncSession,
    user_id: UUID,
    answer_ids: List[UUID]
) -> Dict[str, Optional[InteractionType]]:
    if not answer_ids:
        return {}
    try:
        result = await db.execute(
            select(AnswerInteraction.answer_id, AnswerInteraction.interaction_type).where(
                AnswerInteraction.user_id == user_id,
                AnswerInteraction.answer_id.in_(answer_ids)
            )
        )
        return build_interaction_map(answer_ids, result.all())
    except Exception as e:
        logger.error(f"Error fetching answer interactions: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load your interactions.",
            error_code=INTERACTIONS_FETCH_ERROR
        )
