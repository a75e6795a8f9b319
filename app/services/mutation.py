"""
Validated writes.

Every mutation runs the same sequence: validate input, verify the caller's
token against the acting user, check referenced rows, delete the cache keys
the write affects, then write, then delete the same keys again. Cache keys
are deleted, never patched, and a failed invalidation before the write aborts
it.
"""
import logging
from contextlib import contextmanager
from typing import Optional, Type

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from app.cache import keys
from app.cache.redis import Client
from app.core.exceptions import (
    ConflictError,
    NotFoundError,
    TransientInfraError,
    UnauthorizedError,
    ValidationError,
)
from app.crud import crud_blog, crud_comment, crud_interaction, crud_user
from app.models.blog import Blog
from app.models.interaction import Bookmark, Upvote
from app.models.user import User
from app.schemas import BlogCreate, BlogDetail, CommentOut, FollowResult, ToggleResult
from app.services.auth import FirebaseTokenVerifier
from app.utils.text import calculate_reading_time

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 5000


@contextmanager
def store_write(db: Session):
    """Roll back and report an unreachable database as a transient failure"""
    try:
        yield
    except OperationalError as e:
        db.rollback()
        logger.error(f"Database write failed: {e}")
        raise TransientInfraError("database unavailable") from e


def _require_text(value: str, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} must not be blank")
    if len(value) > MAX_COMMENT_LENGTH:
        raise ValidationError(f"{field} is too long")
    return value


class MutationService:
    def __init__(self, db: Session, cache: Client, verifier: FirebaseTokenVerifier):
        self.db = db
        self.cache = cache
        self.verifier = verifier

    def authorize(self, user_id: int, token: str) -> User:
        """Load the acting user and check the token was issued to them"""
        user = crud_user.get_user(self.db, user_id)
        if user is None:
            raise NotFoundError(f"user {user_id} not found")
        claims = self.verifier.verify_token(token)
        if claims.subject_id != user.social_id:
            logger.warning(f"Token subject does not match user {user_id}")
            raise UnauthorizedError("token subject does not match user")
        return user

    @contextmanager
    def _invalidating(self, *stale: str, pattern: Optional[str] = None):
        """
        Delete stale keys, run the write, then delete them again once it has
        committed. The second pass clears entries a concurrent reader cached
        from the pre-write rows; its failure is logged, not raised.
        """
        self._delete(stale, pattern)
        with store_write(self.db):
            yield
        try:
            self._delete(stale, pattern)
        except TransientInfraError:
            logger.warning(f"Post-write invalidation failed for {list(stale)} {pattern or ''}")

    def _delete(self, stale, pattern: Optional[str]) -> None:
        self.cache.delete(*stale)
        if pattern:
            self.cache.delete_pattern(pattern)

    def _require_blog(self, blog_id: int) -> Blog:
        blog = self.db.get(Blog, blog_id)
        if blog is None:
            raise NotFoundError(f"blog {blog_id} not found")
        return blog

    def create_blog(self, author_id: int, token: str, data: BlogCreate) -> BlogDetail:
        self.authorize(author_id, token)
        reading_time = data.reading_time or calculate_reading_time(data.content)

        with self._invalidating(keys.TRENDING_TAGS_KEY, keys.STATS_KEY):
            blog = crud_blog.create_blog(
                self.db,
                author_id=author_id,
                title=data.title,
                subtitle=data.subtitle,
                content=data.content,
                thumbnail=data.thumbnail,
                reading_time=reading_time,
                tags=data.tags,
            )
        return BlogDetail.model_validate(blog)

    def delete_blog(self, blog_id: int, user_id: int, token: str) -> None:
        self.authorize(user_id, token)
        blog = self._require_blog(blog_id)
        if blog.author_id != user_id:
            raise UnauthorizedError(f"user {user_id} does not own blog {blog_id}")

        with self._invalidating(
            keys.blog_key(blog_id),
            keys.comments_key(blog_id),
            keys.TRENDING_TAGS_KEY,
            keys.STATS_KEY,
            pattern=keys.replies_pattern(blog_id),
        ):
            crud_blog.delete_blog(self.db, blog)

    def add_comment(self, blog_id: int, user_id: int, token: str, content: str) -> CommentOut:
        content = _require_text(content, "content")
        self.authorize(user_id, token)
        self._require_blog(blog_id)

        with self._invalidating(keys.blog_key(blog_id), keys.comments_key(blog_id)):
            comment = crud_comment.create_comment(self.db, blog_id, user_id, content)
        return CommentOut.model_validate(comment)

    def add_reply(self, blog_id: int, parent_id: int, user_id: int, token: str, content: str) -> CommentOut:
        content = _require_text(content, "content")
        self.authorize(user_id, token)
        self._require_blog(blog_id)

        parent = crud_comment.get_comment(self.db, parent_id)
        if parent is None:
            raise NotFoundError(f"comment {parent_id} not found")
        if parent.blog_id != blog_id:
            raise ValidationError(f"comment {parent_id} belongs to another blog")
        if parent.parent_id is not None:
            raise ValidationError("replies can only be attached to top-level comments")

        with self._invalidating(
            keys.blog_key(blog_id),
            keys.comments_key(blog_id),
            keys.replies_key(blog_id, parent_id),
        ):
            reply = crud_comment.create_comment(self.db, blog_id, user_id, content, parent_id=parent_id)
        return CommentOut.model_validate(reply)

    def toggle_upvote(self, blog_id: int, user_id: int, token: str) -> ToggleResult:
        return self._toggle(Upvote, blog_id, user_id, token)

    def toggle_bookmark(self, blog_id: int, user_id: int, token: str) -> ToggleResult:
        return self._toggle(Bookmark, blog_id, user_id, token)

    def _toggle(self, model: Type, blog_id: int, user_id: int, token: str) -> ToggleResult:
        self.authorize(user_id, token)
        self._require_blog(blog_id)
        existing = crud_interaction.get_edge(self.db, model, user_id, blog_id)

        with self._invalidating(keys.blog_key(blog_id)):
            if existing is not None:
                crud_interaction.delete_edge(self.db, existing)
                active = False
            else:
                try:
                    crud_interaction.create_edge(self.db, model, user_id, blog_id)
                    active = True
                except ConflictError:
                    # Lost a race with an identical toggle; its row stands
                    logger.info(f"Concurrent {model.__tablename__} toggle for user {user_id} on blog {blog_id}")
                    active = crud_interaction.get_edge(self.db, model, user_id, blog_id) is not None

        count = crud_interaction.count_edges(self.db, model, blog_id)
        logger.info(f"{model.__tablename__} for user {user_id} on blog {blog_id} -> {active} ({count})")
        return ToggleResult(active=active, count=count)

    def toggle_follow(self, user_id: int, author_id: int, token: str) -> FollowResult:
        if user_id == author_id:
            raise ValidationError("you cannot follow yourself")
        self.authorize(user_id, token)
        if crud_user.get_user(self.db, author_id) is None:
            raise NotFoundError(f"user {author_id} not found")

        with store_write(self.db):
            if crud_user.is_following(self.db, user_id, author_id):
                crud_user.unfollow(self.db, user_id, author_id)
                following = False
            else:
                try:
                    crud_user.follow(self.db, user_id, author_id)
                    following = True
                except IntegrityError:
                    self.db.rollback()
                    logger.info(f"Concurrent follow of {author_id} by {user_id}")
                    following = True

        return FollowResult(following=following, follower_count=crud_user.count_followers(self.db, author_id))
