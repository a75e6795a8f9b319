# app/models/blog.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base_class import Base


class Blog(Base):
    """Model for blogs"""
    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    subtitle = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    thumbnail = Column(String(512), nullable=True)
    reading_time = Column(String(32), nullable=False)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True
    )

    author = relationship("User", back_populates="blogs")
    tags = relationship("BlogTag", back_populates="blog", cascade="all, delete-orphan", passive_deletes=True)
    comments = relationship("Comment", back_populates="blog", cascade="all, delete-orphan", passive_deletes=True)
    upvotes = relationship("Upvote", back_populates="blog", cascade="all, delete-orphan", passive_deletes=True)
    bookmarks = relationship("Bookmark", back_populates="blog", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def tag_names(self):
        return [t.tag for t in self.tags]


class BlogTag(Base):
    """Model for blog tags"""
    __tablename__ = "blog_tags"

    id = Column(Integer, primary_key=True, index=True)
    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False, index=True)
    tag = Column(String(64), nullable=False, index=True)

    blog = relationship("Blog", back_populates="tags")

    __table_args__ = (UniqueConstraint('blog_id', 'tag', name='blog_tags_unique'),)
