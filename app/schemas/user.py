# app/schemas/user.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl
from datetime import datetime
from typing import Optional


class AuthorSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar: str


class UserLogin(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    social_id: str = Field(..., min_length=3)
    avatar: HttpUrl


class User(AuthorSummary):
    social_id: str
    email: str
    bio: Optional[str] = None
    created_at: datetime


class FollowResult(BaseModel):
    following: bool
    follower_count: int


class ImageCreate(BaseModel):
    url: HttpUrl


class ImageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    created_at: datetime


class ActorRequest(BaseModel):
    """Body of toggle requests: the user performing the action"""
    user_id: int


class ImageDelete(BaseModel):
    url: str
