# app/schemas/profile.py

from typing import List

from app.schemas.blog import BlogCard
from app.schemas.user import User


class UserProfile(User):
    follower_count: int = 0
    following_count: int = 0
    recent_blogs: List[BlogCard] = []
