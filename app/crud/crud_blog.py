# app/crud/crud_blog.py

from typing import Iterable, List, Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc, func, or_, select
from app.models.blog import Blog, BlogTag
from app.models.comment import Comment
from app.models.interaction import Upvote
from app.models.user import User, follows
from app.utils.text import LIKE_ESCAPE, contains_pattern, word_count
import logging

logger = logging.getLogger(__name__)


def _blog_query(db: Session):
    return db.query(Blog).options(selectinload(Blog.author), selectinload(Blog.tags))


def _newest_first(query):
    return query.order_by(desc(Blog.created_at), desc(Blog.id))


def attach_counts(db: Session, blogs: List[Blog]) -> List[Blog]:
    """Set upvote_count and comment_count on each blog with two grouped queries"""
    if not blogs:
        return blogs
    ids = [blog.id for blog in blogs]

    upvotes = dict(
        db.query(Upvote.blog_id, func.count(Upvote.id))
        .filter(Upvote.blog_id.in_(ids))
        .group_by(Upvote.blog_id)
        .all()
    )
    comments = dict(
        db.query(Comment.blog_id, func.count(Comment.id))
        .filter(Comment.blog_id.in_(ids))
        .group_by(Comment.blog_id)
        .all()
    )

    for blog in blogs:
        blog.upvote_count = upvotes.get(blog.id, 0)
        blog.comment_count = comments.get(blog.id, 0)
    return blogs


def get_blog(db: Session, blog_id: int) -> Optional[Blog]:
    """Get a single blog with its author, tags and counters"""
    blog = _blog_query(db).filter(Blog.id == blog_id).first()
    if blog:
        attach_counts(db, [blog])
    return blog


def get_blogs(db: Session, skip: int = 0, limit: int = 10) -> List[Blog]:
    """Get a page of blogs, newest first"""
    blogs = _newest_first(_blog_query(db)).offset(skip).limit(limit).all()
    return attach_counts(db, blogs)


def get_blogs_by_tag(db: Session, tag: str, skip: int = 0, limit: int = 10) -> List[Blog]:
    """Get a page of blogs carrying tag, matched case-insensitively"""
    blogs = _newest_first(
        _blog_query(db).filter(Blog.tags.any(func.lower(BlogTag.tag) == tag.lower()))
    ).offset(skip).limit(limit).all()
    return attach_counts(db, blogs)


def get_followed_blogs(db: Session, user_id: int, skip: int = 0, limit: int = 10) -> List[Blog]:
    """Get a page of blogs written by authors user_id follows"""
    followed = select(follows.c.followed_id).where(follows.c.follower_id == user_id)
    blogs = _newest_first(
        _blog_query(db).filter(Blog.author_id.in_(followed))
    ).offset(skip).limit(limit).all()
    return attach_counts(db, blogs)


def get_author_blogs(
    db: Session,
    author_id: int,
    skip: int = 0,
    limit: int = 10,
    exclude_id: Optional[int] = None,
) -> List[Blog]:
    query = _blog_query(db).filter(Blog.author_id == author_id)
    if exclude_id is not None:
        query = query.filter(Blog.id != exclude_id)
    blogs = _newest_first(query).offset(skip).limit(limit).all()
    return attach_counts(db, blogs)


def get_blogs_sharing_tags(
    db: Session,
    tags: Iterable[str],
    exclude_id: int,
    limit: int = 10,
) -> List[Blog]:
    """Get the most recent blogs sharing at least one tag with the given set"""
    lowered = list({tag.lower() for tag in tags})
    if not lowered:
        return []
    blogs = _newest_first(
        _blog_query(db)
        .filter(Blog.id != exclude_id)
        .filter(Blog.tags.any(func.lower(BlogTag.tag).in_(lowered)))
    ).limit(limit).all()
    return attach_counts(db, blogs)


def search_blogs(db: Session, query: str, skip: int = 0, limit: int = 10) -> List[Blog]:
    """Case-insensitive substring match on title, subtitle, author name or tag"""
    pattern = contains_pattern(query)
    blogs = _newest_first(
        _blog_query(db).filter(
            or_(
                Blog.title.ilike(pattern, escape=LIKE_ESCAPE),
                Blog.subtitle.ilike(pattern, escape=LIKE_ESCAPE),
                Blog.author.has(User.name.ilike(pattern, escape=LIKE_ESCAPE)),
                Blog.tags.any(BlogTag.tag.ilike(pattern, escape=LIKE_ESCAPE)),
            )
        )
    ).offset(skip).limit(limit).all()
    return attach_counts(db, blogs)


def create_blog(
    db: Session,
    author_id: int,
    title: str,
    content: str,
    reading_time: str,
    subtitle: Optional[str] = None,
    thumbnail: Optional[str] = None,
    tags: Iterable[str] = (),
) -> Blog:
    blog = Blog(
        title=title,
        subtitle=subtitle,
        content=content,
        thumbnail=thumbnail,
        reading_time=reading_time,
        author_id=author_id,
        tags=[BlogTag(tag=tag) for tag in tags],
    )
    db.add(blog)
    db.commit()
    db.refresh(blog)
    logger.info(f"Blog created successfully. ID: {blog.id}")
    return attach_counts(db, [blog])[0]


def delete_blog(db: Session, blog: Blog) -> None:
    blog_id = blog.id
    db.delete(blog)
    db.commit()
    logger.info(f"Blog {blog_id} deleted")


def get_trending_tags(db: Session, limit: int = 10) -> List[tuple]:
    """Tags ordered by how many blogs carry them"""
    count = func.count(BlogTag.blog_id)
    return db.query(BlogTag.tag, count)\
             .group_by(BlogTag.tag)\
             .order_by(desc(count), BlogTag.tag)\
             .limit(limit)\
             .all()


def get_total_word_count(db: Session) -> int:
    total = 0
    for (content,) in db.query(Blog.content).yield_per(500):
        total += word_count(content)
    return total
