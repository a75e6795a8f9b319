# app/schemas/search.py

from pydantic import BaseModel
from typing import List

from app.schemas.blog import BlogCard
from app.schemas.user import AuthorSummary


class SearchResult(BaseModel):
    blogs: List[BlogCard] = []
    authors: List[AuthorSummary] = []
    has_more: bool = False
