"""
Feed ranking.

Feeds page through the store newest first and then reorder each fetched
window by trending score. Ranking is local to the window: a page never pulls
in a higher scoring blog from a later page.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.crud import crud_blog
from app.core.exceptions import NotFoundError
from app.models.blog import Blog
from app.schemas import Recommendations, ScoredBlog
from app.services.paging import page_window
from app.services.scoring import engagement_score, trending_score

logger = logging.getLogger(__name__)

RECOMMENDATION_CANDIDATES = 10
RECOMMENDATION_LIMIT = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def rank_by_trending(blogs: List[Blog], limit: int, now: datetime) -> List[ScoredBlog]:
    """Score, stable-sort descending and truncate; ties keep the input order"""
    scored = [
        _scored(blog, trending_score(blog.created_at, blog.comment_count, blog.upvote_count, now))
        for blog in blogs
    ]
    scored.sort(key=lambda b: b.score, reverse=True)
    return scored[:limit]


def rank_by_engagement(blogs: List[Blog], limit: int) -> List[ScoredBlog]:
    scored = [_scored(blog, float(engagement_score(blog.comment_count, blog.upvote_count))) for blog in blogs]
    scored.sort(key=lambda b: b.score, reverse=True)
    return scored[:limit]


def _scored(blog: Blog, score: float) -> ScoredBlog:
    blog.score = score
    return ScoredBlog.model_validate(blog)


class RankingService:
    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.clock = clock or _utcnow

    def fetch_trending(self, page: int = 1, limit: int = 5) -> List[ScoredBlog]:
        skip, limit = page_window(page, limit)
        blogs = crud_blog.get_blogs(self.db, skip=skip, limit=limit)
        logger.debug(f"Ranking {len(blogs)} blogs for trending page {page}")
        return rank_by_trending(blogs, limit, self.clock())

    def fetch_by_tag(self, tag: str, page: int = 1, limit: int = 5) -> List[ScoredBlog]:
        skip, limit = page_window(page, limit)
        if not tag.strip():
            return []
        blogs = crud_blog.get_blogs_by_tag(self.db, tag.strip(), skip=skip, limit=limit)
        return rank_by_trending(blogs, limit, self.clock())

    def fetch_followed(self, user_id: int, page: int = 1, limit: int = 5) -> List[ScoredBlog]:
        skip, limit = page_window(page, limit)
        blogs = crud_blog.get_followed_blogs(self.db, user_id, skip=skip, limit=limit)
        return rank_by_trending(blogs, limit, self.clock())

    def fetch_recommendations(self, blog_id: int) -> Recommendations:
        """
        "More from this author" and "similar topics" for a blog, each the top
        three of the ten most recent candidates by plain engagement.
        """
        source = crud_blog.get_blog(self.db, blog_id)
        if source is None:
            raise NotFoundError(f"blog {blog_id} not found")

        from_author = crud_blog.get_author_blogs(
            self.db, source.author_id, limit=RECOMMENDATION_CANDIDATES, exclude_id=source.id
        )
        by_tags = crud_blog.get_blogs_sharing_tags(
            self.db, source.tag_names, exclude_id=source.id, limit=RECOMMENDATION_CANDIDATES
        )

        return Recommendations(
            from_author=rank_by_engagement(from_author, RECOMMENDATION_LIMIT),
            by_tags=rank_by_engagement(by_tags, RECOMMENDATION_LIMIT),
        )
