# app/api/endpoints/discover.py

from typing import List
from fastapi import APIRouter, Depends, Query
from app import schemas
from app.api import deps
from app.services.content import ContentService
from app.services.search import SearchService

router = APIRouter()


@router.get("/search", response_model=schemas.SearchResult)
def search(
    q: str = Query("", max_length=100),
    page: int = Query(1, ge=1),
    search_service: SearchService = Depends(deps.get_search_service),
):
    """
    Search blogs by title, subtitle, author or tag, and authors by name.

    Authors are only returned on the first page.
    """
    return search_service.search(q, page)


@router.get("/tags/trending", response_model=List[schemas.TagCount])
def trending_tags(content: ContentService = Depends(deps.get_content_service)):
    return content.get_trending_tags()


@router.get("/stats", response_model=schemas.PlatformStats)
def platform_stats(content: ContentService = Depends(deps.get_content_service)):
    """Total words published and total registered users"""
    return content.get_stats()
