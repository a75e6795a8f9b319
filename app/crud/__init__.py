# app/crud/__init__.py

from . import crud_blog
from . import crud_comment
from . import crud_interaction
from . import crud_user
from . import crud_image

from .crud_blog import (
    get_blog,
    get_blogs,
)
from .crud_user import get_user, get_user_by_social_id

__all__ = [
    "crud_blog", "crud_comment", "crud_interaction", "crud_user", "crud_image",
    "get_blog", "get_blogs", "get_user", "get_user_by_social_id",
]
