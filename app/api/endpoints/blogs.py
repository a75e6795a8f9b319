# app/api/endpoints/blogs.py

import logging
from typing import List
from fastapi import APIRouter, Depends, Path, Query, Response
from app import schemas
from app.api import deps
from app.core.resources import Resources
from app.services.content import ContentService
from app.services.mutation import MutationService
from app.services.ranking import RankingService


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/trending", response_model=List[schemas.ScoredBlog])
def get_trending_blogs(
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1, le=50),
    ranking: RankingService = Depends(deps.get_ranking_service),
):
    return ranking.fetch_trending(page=page, limit=limit)


@router.get("/tag/{tag}", response_model=List[schemas.ScoredBlog])
def get_blogs_by_tag(
    tag: str,
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1, le=50),
    ranking: RankingService = Depends(deps.get_ranking_service),
):
    return ranking.fetch_by_tag(tag, page=page, limit=limit)


@router.get("/following/{user_id}", response_model=List[schemas.ScoredBlog])
def get_followed_blogs(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1, le=50),
    ranking: RankingService = Depends(deps.get_ranking_service),
):
    """Blogs by authors the user follows"""
    return ranking.fetch_followed(user_id, page=page, limit=limit)


@router.post("", response_model=schemas.BlogDetail, status_code=201)
def create_blog(
    blog: schemas.BlogPublish,
    token: str = Depends(deps.get_token),
    mutations: MutationService = Depends(deps.get_mutation_service),
):
    return mutations.create_blog(blog.author_id, token, blog)


@router.get("/{blog_id}", response_model=schemas.BlogDetail)
def read_blog(
    blog_id: int = Path(..., title="The ID of the blog"),
    content: ContentService = Depends(deps.get_content_service),
):
    return content.get_blog(blog_id)


@router.delete("/{blog_id}", status_code=204)
def delete_blog(
    blog_id: int,
    user_id: int = Query(..., title="Author deleting the blog"),
    token: str = Depends(deps.get_token),
    mutations: MutationService = Depends(deps.get_mutation_service),
):
    mutations.delete_blog(blog_id, user_id, token)
    return Response(status_code=204)


@router.get("/{blog_id}/recommendations", response_model=schemas.Recommendations)
def get_recommendations(
    blog_id: int,
    ranking: RankingService = Depends(deps.get_ranking_service),
):
    """More from the same author and blogs on similar topics"""
    return ranking.fetch_recommendations(blog_id)


@router.get("/{blog_id}/status/{user_id}", response_model=schemas.InteractionStatus)
def get_interaction_status(
    blog_id: int,
    user_id: int,
    content: ContentService = Depends(deps.get_content_service),
):
    """Whether a user has upvoted and bookmarked a blog"""
    return content.get_interaction_status(blog_id, user_id)


@router.post("/{blog_id}/upvote", response_model=schemas.ToggleResult)
def toggle_upvote(
    blog_id: int,
    actor: schemas.ActorRequest,
    token: str = Depends(deps.get_token),
    mutations: MutationService = Depends(deps.get_mutation_service),
):
    return mutations.toggle_upvote(blog_id, actor.user_id, token)


@router.post("/{blog_id}/bookmark", response_model=schemas.ToggleResult)
def toggle_bookmark(
    blog_id: int,
    actor: schemas.ActorRequest,
    token: str = Depends(deps.get_token),
    mutations: MutationService = Depends(deps.get_mutation_service),
):
    return mutations.toggle_bookmark(blog_id, actor.user_id, token)


@router.post("/{blog_id}/tweet", response_model=schemas.TweetOut)
def generate_tweet(
    blog_id: int,
    share: schemas.ShareRequest,
    content: ContentService = Depends(deps.get_content_service),
    resources: Resources = Depends(deps.get_resources),
):
    blog = content.get_blog(blog_id)
    return schemas.TweetOut(tweet=resources.summaries.generate_tweet(blog, str(share.link)))


@router.post("/{blog_id}/thread", response_model=schemas.ThreadOut)
def generate_thread(
    blog_id: int,
    share: schemas.ShareRequest,
    content: ContentService = Depends(deps.get_content_service),
    resources: Resources = Depends(deps.get_resources),
):
    blog = content.get_blog(blog_id)
    return schemas.ThreadOut(thread=resources.summaries.generate_thread(blog, str(share.link)))
