# app/api/endpoints/users.py
from fastapi import APIRouter, Depends, Query, Response
from typing import List

from app import schemas
from app.api import deps
from app.services.account import AccountService
from app.services.content import ContentService
from app.services.mutation import MutationService

router = APIRouter()


@router.post("/login", response_model=schemas.User)
def login(user: schemas.UserLogin, accounts: AccountService = Depends(deps.get_account_service)):
    return accounts.login(user)


@router.get("/{user_id}", response_model=schemas.UserProfile)
def read_profile(user_id: int, content: ContentService = Depends(deps.get_content_service)):
    return content.get_user_profile(user_id)


@router.get("/{user_id}/blogs", response_model=List[schemas.BlogCard])
def read_user_blogs(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1, le=50),
    content: ContentService = Depends(deps.get_content_service),
):
    return content.get_author_blogs(user_id, page=page, limit=limit)


@router.get("/{user_id}/bookmarks", response_model=List[schemas.BlogCard])
def read_bookmarks(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(5, ge=1, le=50),
    content: ContentService = Depends(deps.get_content_service),
):
    return content.fetch_bookmarked(user_id, page=page, limit=limit)


@router.get("/{user_id}/following/{author_id}")
def read_follow_status(
    user_id: int,
    author_id: int,
    content: ContentService = Depends(deps.get_content_service),
):
    return {"following": content.is_following(user_id, author_id)}


@router.post("/{user_id}/follow/{author_id}", response_model=schemas.FollowResult)
def toggle_follow(
    user_id: int,
    author_id: int,
    token: str = Depends(deps.get_token),
    mutations: MutationService = Depends(deps.get_mutation_service),
):
    return mutations.toggle_follow(user_id, author_id, token)


@router.get("/{user_id}/images", response_model=List[schemas.ImageOut])
def read_images(user_id: int, accounts: AccountService = Depends(deps.get_account_service)):
    return accounts.list_images(user_id)


@router.post("/{user_id}/images", response_model=schemas.ImageOut, status_code=201)
def save_image(
    user_id: int,
    image: schemas.ImageCreate,
    token: str = Depends(deps.get_token),
    accounts: AccountService = Depends(deps.get_account_service),
):
    return accounts.save_image(user_id, token, str(image.url))


@router.delete("/{user_id}/images", status_code=204)
def delete_image(
    user_id: int,
    image: schemas.ImageDelete,
    token: str = Depends(deps.get_token),
    accounts: AccountService = Depends(deps.get_account_service),
):
    accounts.delete_image(user_id, token, image.url)
    return Response(status_code=204)
