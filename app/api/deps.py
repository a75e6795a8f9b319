# app/api/deps.py

from typing import Generator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.cache.redis import Client
from app.core.exceptions import UnauthorizedError
from app.core.resources import Resources
from app.services.account import AccountService
from app.services.content import ContentService
from app.services.mutation import MutationService
from app.services.ranking import RankingService
from app.services.search import SearchService


def get_resources(request: Request) -> Resources:
    return request.app.state.resources


def get_db(resources: Resources = Depends(get_resources)) -> Generator[Session, None, None]:
    db = resources.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_cache(resources: Resources = Depends(get_resources)) -> Client:
    return resources.cache


def get_token(authorization: Optional[str] = Header(default=None)) -> str:
    """Extract the bearer token from the Authorization header"""
    if not authorization:
        raise UnauthorizedError("missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("expected a Bearer token")
    return token.strip()


def get_content_service(
    db: Session = Depends(get_db),
    resources: Resources = Depends(get_resources),
) -> ContentService:
    return ContentService(db, resources.cache, resources.settings)


def get_ranking_service(db: Session = Depends(get_db)) -> RankingService:
    return RankingService(db)


def get_search_service(
    db: Session = Depends(get_db),
    resources: Resources = Depends(get_resources),
) -> SearchService:
    return SearchService(db, resources.cache, resources.settings)


def get_mutation_service(
    db: Session = Depends(get_db),
    resources: Resources = Depends(get_resources),
) -> MutationService:
    return MutationService(db, resources.cache, resources.verifier)


def get_account_service(
    db: Session = Depends(get_db),
    resources: Resources = Depends(get_resources),
    mutations: MutationService = Depends(get_mutation_service),
) -> AccountService:
    return AccountService(db, mutations, resources.storage)
