# app/crud/crud_image.py
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
from app.core.exceptions import ConflictError
from app.models.image import Image

logger = logging.getLogger(__name__)


def save_image(db: Session, user_id: int, url: str) -> Image:
    """Store an image reference; a URL already saved by anyone is a ConflictError"""
    image = Image(user_id=user_id, url=url)
    db.add(image)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Image {url} is already referenced")
        raise ConflictError(f"image {url} already saved") from e
    db.refresh(image)
    return image


def get_user_images(db: Session, user_id: int) -> List[Image]:
    return db.query(Image)\
             .filter(Image.user_id == user_id)\
             .order_by(Image.created_at.desc(), Image.id.desc())\
             .all()


def get_user_image(db: Session, user_id: int, url: str) -> Optional[Image]:
    return db.query(Image).filter(Image.user_id == user_id, Image.url == url).first()


def delete_image(db: Session, image: Image) -> None:
    db.delete(image)
    db.commit()
