"""
Blog and author search.

The first page holds 10 blogs, later pages 5 each, laid end to end:

    page 1 -> rows 0..9
    page 2 -> rows 10..14
    page 3 -> rows 15..19

Authors are only looked up on page 1; later pages carry an empty list and
callers keep the first page's authors.
"""
import logging
from typing import Tuple

from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from app.cache import keys
from app.cache.manager import read_through
from app.cache.redis import Client
from app.core.config import Settings, settings as default_settings
from app.core.exceptions import ValidationError
from app.crud import crud_blog, crud_user
from app.schemas import AuthorSummary, BlogCard, SearchResult

logger = logging.getLogger(__name__)

FIRST_PAGE_SIZE = 10
PAGE_SIZE = 5
AUTHOR_LIMIT = 5

_result_adapter = TypeAdapter(SearchResult)


def search_window(page: int) -> Tuple[int, int]:
    """(offset, size) of the blog rows for a search page"""
    if page < 1:
        raise ValidationError("page must be >= 1")
    if page == 1:
        return 0, FIRST_PAGE_SIZE
    return FIRST_PAGE_SIZE + (page - 2) * PAGE_SIZE, PAGE_SIZE


class SearchService:
    def __init__(self, db: Session, cache: Client, settings: Settings = default_settings):
        self.db = db
        self.cache = cache
        self.settings = settings

    def search(self, query: str, page: int = 1) -> SearchResult:
        offset, size = search_window(page)
        query = (query or "").strip()
        if not query:
            return SearchResult()

        def load() -> SearchResult:
            blogs = crud_blog.search_blogs(self.db, query, skip=offset, limit=size)
            authors = crud_user.search_users(self.db, query, limit=AUTHOR_LIMIT) if page == 1 else []
            logger.info(f"Search '{query}' page {page}: {len(blogs)} blogs, {len(authors)} authors")
            return SearchResult(
                blogs=[BlogCard.model_validate(b) for b in blogs],
                authors=[AuthorSummary.model_validate(a) for a in authors],
                has_more=len(blogs) == size,
            )

        return read_through(
            self.cache,
            keys.search_key(query, page),
            _result_adapter,
            load,
            ttl=self.settings.SEARCH_CACHE_TTL,
        )
