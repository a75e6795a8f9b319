# app/api/endpoints/pages.py

import os
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup
from app.api import deps
from app.core.config import settings
from app.services.content import ContentService
from app.services.ranking import RankingService
from app.utils.text import format_count, render_markdown

router = APIRouter()
templates = Jinja2Templates(directory=os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "templates"))
templates.env.filters["count"] = format_count


@router.get("/", response_class=HTMLResponse)
def render_index(
    request: Request,
    page: int = Query(1, ge=1),
    ranking: RankingService = Depends(deps.get_ranking_service),
):
    blogs = ranking.fetch_trending(page=page, limit=settings.DEFAULT_FEED_LIMIT)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"blogs": blogs, "page": page, "project_name": settings.PROJECT_NAME},
    )


@router.get("/blog/{blog_id}", response_class=HTMLResponse)
def render_blog(
    request: Request,
    blog_id: int,
    content: ContentService = Depends(deps.get_content_service),
):
    blog = content.get_blog(blog_id)
    return templates.TemplateResponse(
        request,
        "blog.html",
        {
            "blog": blog,
            "body": Markup(render_markdown(blog.content)),
            "project_name": settings.PROJECT_NAME,
        },
    )
