# app/api/endpoints/comments.py

from typing import List
from fastapi import APIRouter, Depends
from app import schemas
from app.api import deps
from app.services.content import ContentService
from app.services.mutation import MutationService

router = APIRouter()


@router.get("/{blog_id}/comments", response_model=List[schemas.CommentOut])
def read_comments(
    blog_id: int,
    content: ContentService = Depends(deps.get_content_service),
):
    """Top-level comments on a blog, newest first"""
    return content.get_comments(blog_id)


@router.post("/{blog_id}/comments", response_model=schemas.CommentOut, status_code=201)
def add_comment(
    blog_id: int,
    comment: schemas.CommentCreate,
    token: str = Depends(deps.get_token),
    mutations: MutationService = Depends(deps.get_mutation_service),
):
    return mutations.add_comment(blog_id, comment.user_id, token, comment.content)


@router.get("/{blog_id}/comments/{parent_id}/replies", response_model=List[schemas.CommentOut])
def read_replies(
    blog_id: int,
    parent_id: int,
    content: ContentService = Depends(deps.get_content_service),
):
    return content.get_replies(blog_id, parent_id)


@router.post("/{blog_id}/comments/{parent_id}/replies", response_model=schemas.CommentOut, status_code=201)
def add_reply(
    blog_id: int,
    parent_id: int,
    comment: schemas.CommentCreate,
    token: str = Depends(deps.get_token),
    mutations: MutationService = Depends(deps.get_mutation_service),
):
    return mutations.add_reply(blog_id, parent_id, comment.user_id, token, comment.content)
