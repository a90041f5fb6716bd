import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .post import Post


class Answer(SQLModel, table=True):
    __tablename__ = "answers"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    post_id: uuid.UUID = Field(foreign_key="posts.id", index=True)
    user_id: Optional[uuid.UUID] = Field(default=None, index=True)
    content: str = Field(..., max_length=1000)
    likes: int = Field(default=0)
    dislikes: int = Field(default=0)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    post: Optional["Post"] = Relationship(back_populates="answers")
