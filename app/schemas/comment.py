# app/schemas/comment.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional

from app.schemas.user import AuthorSummary


class CommentCreate(BaseModel):
    user_id: int
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    created_at: datetime
    blog_id: int
    parent_id: Optional[int] = None
    user: AuthorSummary
    reply_count: int = 0
