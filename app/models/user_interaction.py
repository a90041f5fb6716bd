import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, String, UniqueConstraint

from app.schemas.enums import InteractionType


class UserInteraction(SQLModel, table=True):
    """At most one like/dislike per (user, post), enforced by the database."""
    __tablename__ = "user_interactions"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="user_interactions_user_id_post_id_key"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(index=True)
    post_id: uuid.UUID = Field(foreign_key="posts.id", index=True)
    interaction_type: InteractionType = Field(sa_column=Column(String(10), nullable=False))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class AnswerInteraction(SQLModel, table=True):
    __tablename__ = "answer_interactions"
    __table_args__ = (
        UniqueConstraint("user_id", "answer_id", name="answer_interactions_user_id_answer_id_key"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(index=True)
    answer_id: uuid.UUID = Field(foreign_key="answers.id", index=True)
    interaction_type: InteractionType = Field(sa_column=Column(String(10), nullable=False))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
