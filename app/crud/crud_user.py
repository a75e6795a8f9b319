# app/crud/crud_user.py

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func
from app.models.user import User, follows
from app.utils.text import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_social_id(db: Session, social_id: str) -> Optional[User]:
    return db.query(User).filter(User.social_id == social_id).first()


def create_user(db: Session, social_id: str, name: str, email: str, avatar: str) -> User:
    logger.info(f"Creating new user for social id {social_id}")
    user = User(social_id=social_id, name=name, email=email, avatar=avatar)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def search_users(db: Session, query: str, limit: int = 5) -> List[User]:
    return db.query(User)\
             .filter(User.name.ilike(contains_pattern(query), escape=LIKE_ESCAPE))\
             .order_by(User.name, User.id)\
             .limit(limit)\
             .all()


def count_users(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0


def is_following(db: Session, follower_id: int, followed_id: int) -> bool:
    return db.query(follows).filter(
        follows.c.follower_id == follower_id,
        follows.c.followed_id == followed_id
    ).first() is not None


def follow(db: Session, follower_id: int, followed_id: int) -> None:
    db.execute(follows.insert().values(follower_id=follower_id, followed_id=followed_id))
    db.commit()


def unfollow(db: Session, follower_id: int, followed_id: int) -> None:
    db.execute(follows.delete().where(
        follows.c.follower_id == follower_id,
        follows.c.followed_id == followed_id
    ))
    db.commit()


def count_followers(db: Session, user_id: int) -> int:
    return db.query(func.count()).select_from(follows).filter(follows.c.followed_id == user_id).scalar() or 0


def count_following(db: Session, user_id: int) -> int:
    return db.query(func.count()).select_from(follows).filter(follows.c.follower_id == user_id).scalar() or 0
