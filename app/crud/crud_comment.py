# app/crud/crud_comment.py

from typing import List, Optional
from sqlalchemy.orm import Session, aliased, selectinload
from sqlalchemy import desc, func
from app.models.comment import Comment
import logging

logger = logging.getLogger(__name__)


def get_comment(db: Session, comment_id: int) -> Optional[Comment]:
    return db.query(Comment).filter(Comment.id == comment_id).first()


def _with_reply_counts(db: Session, blog_id: int, parent_id: Optional[int]) -> List[Comment]:
    reply = aliased(Comment)
    reply_counts = db.query(reply.parent_id.label("parent_id"), func.count(reply.id).label("reply_count"))\
                     .filter(reply.blog_id == blog_id, reply.parent_id.isnot(None))\
                     .group_by(reply.parent_id)\
                     .subquery()

    query = db.query(Comment, func.coalesce(reply_counts.c.reply_count, 0))\
              .outerjoin(reply_counts, reply_counts.c.parent_id == Comment.id)\
              .options(selectinload(Comment.user))\
              .filter(Comment.blog_id == blog_id)
    if parent_id is None:
        query = query.filter(Comment.parent_id.is_(None))
    else:
        query = query.filter(Comment.parent_id == parent_id)

    comments = []
    for comment, reply_count in query.order_by(desc(Comment.created_at), desc(Comment.id)).all():
        comment.reply_count = reply_count
        comments.append(comment)
    return comments


def get_top_level_comments(db: Session, blog_id: int) -> List[Comment]:
    """Top-level comments on a blog, newest first, each with its reply count"""
    return _with_reply_counts(db, blog_id, None)


def get_replies(db: Session, blog_id: int, parent_id: int) -> List[Comment]:
    return _with_reply_counts(db, blog_id, parent_id)


def create_comment(
    db: Session,
    blog_id: int,
    user_id: int,
    content: str,
    parent_id: Optional[int] = None,
) -> Comment:
    comment = Comment(blog_id=blog_id, user_id=user_id, content=content, parent_id=parent_id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    comment.reply_count = 0
    logger.info(f"Comment {comment.id} added to blog {blog_id} (parent={parent_id})")
    return comment
