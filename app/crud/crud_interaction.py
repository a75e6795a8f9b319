# app/crud/crud_interaction.py
"""
Upvote and bookmark edges. Both are unique (user_id, blog_id) rows whose
existence is the state, so they share one set of helpers.
"""
from typing import List, Optional, Type, Union
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc
from app.core.exceptions import ConflictError
from app.crud.crud_blog import attach_counts
from app.models.blog import Blog
from app.models.interaction import Upvote, Bookmark
import logging

logger = logging.getLogger(__name__)

Edge = Union[Upvote, Bookmark]


def get_edge(db: Session, model: Type[Edge], user_id: int, blog_id: int) -> Optional[Edge]:
    return db.query(model).filter(
        model.user_id == user_id,
        model.blog_id == blog_id
    ).first()


def create_edge(db: Session, model: Type[Edge], user_id: int, blog_id: int) -> Edge:
    """
    Insert the edge. A concurrent insert of the same pair is reported as
    ConflictError after the session has been rolled back.
    """
    edge = model(user_id=user_id, blog_id=blog_id)
    db.add(edge)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Duplicate {model.__tablename__} for user {user_id} on blog {blog_id}")
        raise ConflictError(f"{model.__tablename__} already exists") from e
    db.refresh(edge)
    return edge


def delete_edge(db: Session, edge: Edge) -> None:
    db.delete(edge)
    db.commit()


def count_edges(db: Session, model: Type[Edge], blog_id: int) -> int:
    return db.query(model).filter(model.blog_id == blog_id).count()


def get_bookmarked_blogs(db: Session, user_id: int, skip: int = 0, limit: int = 5) -> List[Blog]:
    """Blogs bookmarked by user_id, most recently bookmarked first"""
    bookmarks = db.query(Bookmark)\
                  .options(selectinload(Bookmark.blog).selectinload(Blog.author),
                           selectinload(Bookmark.blog).selectinload(Blog.tags))\
                  .filter(Bookmark.user_id == user_id)\
                  .order_by(desc(Bookmark.created_at), desc(Bookmark.id))\
                  .offset(skip)\
                  .limit(limit)\
                  .all()
    return attach_counts(db, [bookmark.blog for bookmark in bookmarks])
