# app/api/api.py

import logging
from fastapi import APIRouter
from app.api.endpoints import (
    blogs,
    comments,
    discover,
    users,
)


# Set up logging
logger = logging.getLogger(__name__)

api_router = APIRouter()

api_router.include_router(blogs.router, prefix="/blogs", tags=["blogs"])
api_router.include_router(comments.router, prefix="/blogs", tags=["comments"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(discover.router, tags=["discover"])

logger.debug(f"API routes configured: {[getattr(route, 'path', route) for route in api_router.routes]}")
