"""
Report schemas
"""

from pydantic import BaseModel, Field, field_validator


class ReportCreate(BaseModel):
    """Schema for reporting a post"""
    reason: str = Field(..., max_length=1000, description="Why the post is being reported")

    @field_validator("reason", mode="before")
    @classmethod
    def validate_reason(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Please explain why you're reporting this post.")
        return v.strip()
