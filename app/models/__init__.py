from app.models.user import User, follows
from app.models.blog import Blog, BlogTag
from app.models.comment import Comment
from app.models.interaction import Upvote, Bookmark
from app.models.image import Image

__all__ = [
    "User",
    "follows",
    "Blog",
    "BlogTag",
    "Comment",
    "Upvote",
    "Bookmark",
    "Image",
]
