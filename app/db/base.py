# Import all the models so that Base has them registered before
# create_all / alembic autogenerate run.

from app.db.base_class import Base
from app.models.user import User, follows
from app.models.blog import Blog, BlogTag
from app.models.comment import Comment
from app.models.interaction import Upvote, Bookmark
from app.models.image import Image
