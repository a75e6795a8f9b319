# app/models/interaction.py

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base_class import Base


class Upvote(Base):
    """Model for blog upvotes"""
    __tablename__ = "upvotes"

    id = Column(Integer, primary_key=True, index=True)
    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    blog = relationship("Blog", back_populates="upvotes")

    __table_args__ = (UniqueConstraint('user_id', 'blog_id', name='upvotes_user_blog_unique'),)


class Bookmark(Base):
    """Model for blog bookmarks"""
    __tablename__ = "bookmarks"

    id = Column(Integer, primary_key=True, index=True)
    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    blog = relationship("Blog", back_populates="bookmarks")

    __table_args__ = (UniqueConstraint('user_id', 'blog_id', name='bookmarks_user_blog_unique'),)
