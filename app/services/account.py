"""
Login and uploaded-image references.
"""
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.crud import crud_image, crud_user
from app.models.user import User
from app.schemas import ImageOut, UserLogin
from app.services.mutation import MutationService, store_write
from app.services.storage import UploadStorageClient

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, db: Session, mutations: MutationService, storage: UploadStorageClient):
        self.db = db
        self.mutations = mutations
        self.storage = storage

    def login(self, data: UserLogin) -> User:
        """Return the user for a social id, creating it on first login"""
        user = crud_user.get_user_by_social_id(self.db, data.social_id)
        if user is not None:
            return user
        with store_write(self.db):
            try:
                return crud_user.create_user(
                    self.db,
                    social_id=data.social_id,
                    name=data.name,
                    email=str(data.email),
                    avatar=str(data.avatar),
                )
            except IntegrityError:
                # First login raced with another request for the same account
                self.db.rollback()
                return crud_user.get_user_by_social_id(self.db, data.social_id)

    def list_images(self, user_id: int) -> List[ImageOut]:
        return [ImageOut.model_validate(i) for i in crud_image.get_user_images(self.db, user_id)]

    def save_image(self, user_id: int, token: str, url: str) -> ImageOut:
        self.mutations.authorize(user_id, token)
        if crud_image.get_user_image(self.db, user_id, url) is not None:
            raise ConflictError(f"image {url} already saved")
        with store_write(self.db):
            image = crud_image.save_image(self.db, user_id, url)
        return ImageOut.model_validate(image)

    def delete_image(self, user_id: int, token: str, url: str) -> None:
        """Drop the reference, then ask the upload service to drop the bytes"""
        self.mutations.authorize(user_id, token)
        image = crud_image.get_user_image(self.db, user_id, url)
        if image is None:
            raise NotFoundError(f"image {url} not found for user {user_id}")
        with store_write(self.db):
            crud_image.delete_image(self.db, image)
        self.storage.delete(url)
