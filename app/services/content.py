"""
Cached read paths: single blog, comment threads, trending tags, platform
stats, plus the uncached per-user lists and status checks.
"""
import logging
from typing import List

from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from app.cache import keys
from app.cache.manager import read_through
from app.cache.redis import Client
from app.core.config import Settings, settings as default_settings
from app.core.exceptions import NotFoundError
from app.crud import crud_blog, crud_comment, crud_interaction, crud_user
from app.models.interaction import Bookmark, Upvote
from app.schemas import (
    BlogCard,
    BlogDetail,
    CommentOut,
    InteractionStatus,
    PlatformStats,
    TagCount,
    UserProfile,
)
from app.services.paging import page_window

logger = logging.getLogger(__name__)

TRENDING_TAGS_LIMIT = 10
PROFILE_RECENT_BLOGS = 5

_blog_adapter = TypeAdapter(BlogDetail)
_comments_adapter = TypeAdapter(List[CommentOut])
_tags_adapter = TypeAdapter(List[TagCount])
_stats_adapter = TypeAdapter(PlatformStats)


class ContentService:
    def __init__(self, db: Session, cache: Client, settings: Settings = default_settings):
        self.db = db
        self.cache = cache
        self.settings = settings

    def _require_blog(self, blog_id: int):
        blog = crud_blog.get_blog(self.db, blog_id)
        if blog is None:
            raise NotFoundError(f"blog {blog_id} not found")
        return blog

    def get_blog(self, blog_id: int) -> BlogDetail:
        def load() -> BlogDetail:
            return BlogDetail.model_validate(self._require_blog(blog_id))

        return read_through(self.cache, keys.blog_key(blog_id), _blog_adapter, load)

    def get_comments(self, blog_id: int) -> List[CommentOut]:
        """Top-level comments, newest first"""
        def load() -> List[CommentOut]:
            self._require_blog(blog_id)
            comments = crud_comment.get_top_level_comments(self.db, blog_id)
            return [CommentOut.model_validate(c) for c in comments]

        return read_through(self.cache, keys.comments_key(blog_id), _comments_adapter, load)

    def get_replies(self, blog_id: int, parent_id: int) -> List[CommentOut]:
        def load() -> List[CommentOut]:
            parent = crud_comment.get_comment(self.db, parent_id)
            if parent is None or parent.blog_id != blog_id:
                raise NotFoundError(f"comment {parent_id} not found on blog {blog_id}")
            replies = crud_comment.get_replies(self.db, blog_id, parent_id)
            return [CommentOut.model_validate(c) for c in replies]

        return read_through(self.cache, keys.replies_key(blog_id, parent_id), _comments_adapter, load)

    def get_trending_tags(self) -> List[TagCount]:
        def load() -> List[TagCount]:
            rows = crud_blog.get_trending_tags(self.db, limit=TRENDING_TAGS_LIMIT)
            return [TagCount(tag=tag, count=count) for tag, count in rows]

        return read_through(
            self.cache,
            keys.TRENDING_TAGS_KEY,
            _tags_adapter,
            load,
            ttl=self.settings.TRENDING_TAGS_CACHE_TTL,
        )

    def get_stats(self) -> PlatformStats:
        def load() -> PlatformStats:
            return PlatformStats(
                word_count=crud_blog.get_total_word_count(self.db),
                total_users=crud_user.count_users(self.db),
            )

        return read_through(self.cache, keys.STATS_KEY, _stats_adapter, load, ttl=self.settings.STATS_CACHE_TTL)

    def fetch_bookmarked(self, user_id: int, page: int = 1, limit: int = 5) -> List[BlogCard]:
        skip, limit = page_window(page, limit)
        blogs = crud_interaction.get_bookmarked_blogs(self.db, user_id, skip=skip, limit=limit)
        return [BlogCard.model_validate(b) for b in blogs]

    def get_author_blogs(self, author_id: int, page: int = 1, limit: int = 5) -> List[BlogCard]:
        skip, limit = page_window(page, limit)
        blogs = crud_blog.get_author_blogs(self.db, author_id, skip=skip, limit=limit)
        return [BlogCard.model_validate(b) for b in blogs]

    def get_interaction_status(self, blog_id: int, user_id: int) -> InteractionStatus:
        return InteractionStatus(
            upvoted=crud_interaction.get_edge(self.db, Upvote, user_id, blog_id) is not None,
            bookmarked=crud_interaction.get_edge(self.db, Bookmark, user_id, blog_id) is not None,
        )

    def is_following(self, user_id: int, author_id: int) -> bool:
        return crud_user.is_following(self.db, user_id, author_id)

    def get_user_profile(self, user_id: int) -> UserProfile:
        user = crud_user.get_user(self.db, user_id)
        if user is None:
            raise NotFoundError(f"user {user_id} not found")
        recent = crud_blog.get_author_blogs(self.db, user_id, limit=PROFILE_RECENT_BLOGS)
        return UserProfile(
            id=user.id,
            name=user.name,
            avatar=user.avatar,
            social_id=user.social_id,
            email=user.email,
            bio=user.bio,
            created_at=user.created_at,
            follower_count=crud_user.count_followers(self.db, user_id),
            following_count=crud_user.count_following(self.db, user_id),
            recent_blogs=[BlogCard.model_validate(b) for b in recent],
        )
