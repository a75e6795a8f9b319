# app/schemas/blog.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional, List

from app.schemas.user import AuthorSummary


class BlogCreate(BaseModel):
    """Schema for creating blogs"""
    title: str = Field(..., min_length=1, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    content: str = Field(..., min_length=1)
    thumbnail: Optional[str] = Field(default=None, max_length=512)
    reading_time: Optional[str] = Field(default=None, max_length=32)
    tags: List[str] = Field(default_factory=list, max_length=10)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        cleaned = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in cleaned:
                cleaned.append(tag)
        return cleaned


class BlogCard(BaseModel):
    """Blog as shown in feeds and lists, with derived counters"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    subtitle: Optional[str] = None
    thumbnail: Optional[str] = None
    reading_time: str
    created_at: datetime
    author: AuthorSummary
    tags: List[str] = []
    upvote_count: int = 0
    comment_count: int = 0

    @field_validator("tags", mode="before")
    @classmethod
    def tag_names(cls, v):
        return [getattr(t, "tag", t) for t in v or []]


class BlogDetail(BlogCard):
    """Schema for complete blog representation"""
    content: str


class ScoredBlog(BlogCard):
    score: float


class Recommendations(BaseModel):
    from_author: List[ScoredBlog] = []
    by_tags: List[ScoredBlog] = []


class TagCount(BaseModel):
    tag: str
    count: int


class PlatformStats(BaseModel):
    word_count: int
    total_users: int


class ToggleResult(BaseModel):
    """State after a toggle mutation: whether the edge exists and the new total"""
    active: bool
    count: int


class InteractionStatus(BaseModel):
    upvoted: bool
    bookmarked: bool


class BlogPublish(BlogCreate):
    """Create request: the blog plus the acting author"""
    author_id: int
