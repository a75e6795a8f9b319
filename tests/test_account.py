from unittest.mock import MagicMock

import pytest

from app.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from app.models import Image, User
from app.schemas import UserLogin
from app.services.account import AccountService
from app.services.mutation import MutationService
from tests.conftest import token_for


@pytest.fixture
def storage():
    return MagicMock()


@pytest.fixture
def accounts(db, cache, verifier, storage):
    return AccountService(db, MutationService(db, cache, verifier), storage)


def login_payload(social_id="firebase-uid-1"):
    return UserLogin(
        name="Ada Lovelace",
        email="ada@example.com",
        social_id=social_id,
        avatar="https://img.example.com/ada.png",
    )


def test_first_login_creates_user_and_later_logins_reuse_it(db, accounts):
    first = accounts.login(login_payload())
    second = accounts.login(login_payload())

    assert first.id == second.id
    assert db.query(User).count() == 1


def test_save_and_list_images(accounts, make_user):
    user = make_user()
    image = accounts.save_image(user.id, token_for(user), "https://utfs.io/f/one.png")

    assert [i.url for i in accounts.list_images(user.id)] == [image.url]


def test_saving_the_same_image_twice_conflicts(accounts, make_user):
    user = make_user()
    accounts.save_image(user.id, token_for(user), "https://utfs.io/f/one.png")

    with pytest.raises(ConflictError):
        accounts.save_image(user.id, token_for(user), "https://utfs.io/f/one.png")


def test_url_saved_by_another_user_conflicts(db, accounts, make_user):
    owner, other = make_user(), make_user()
    accounts.save_image(owner.id, token_for(owner), "https://img.example.com/x.png")

    with pytest.raises(ConflictError):
        accounts.save_image(other.id, token_for(other), "https://img.example.com/x.png")

    assert accounts.list_images(other.id) == []
    assert [i.user_id for i in db.query(Image).all()] == [owner.id]


def test_url_conflict_over_http_is_409(client, make_user):
    owner, other = make_user(), make_user()
    url = "https://img.example.com/x.png"
    client.post(f"/api/users/{owner.id}/images", json={"url": url}, headers={"Authorization": f"Bearer {token_for(owner)}"})

    response = client.post(
        f"/api/users/{other.id}/images", json={"url": url}, headers={"Authorization": f"Bearer {token_for(other)}"}
    )

    assert response.status_code == 409


def test_delete_image_removes_row_then_upload(db, accounts, storage, make_user):
    user = make_user()
    accounts.save_image(user.id, token_for(user), "https://utfs.io/f/one.png")

    accounts.delete_image(user.id, token_for(user), "https://utfs.io/f/one.png")

    assert db.query(Image).count() == 0
    storage.delete.assert_called_once_with("https://utfs.io/f/one.png")


def test_delete_unknown_image(accounts, storage, make_user):
    user = make_user()
    with pytest.raises(NotFoundError):
        accounts.delete_image(user.id, token_for(user), "https://utfs.io/f/missing.png")
    storage.delete.assert_not_called()


def test_image_writes_require_matching_token(accounts, make_user):
    user, other = make_user(), make_user()
    with pytest.raises(UnauthorizedError):
        accounts.save_image(user.id, token_for(other), "https://utfs.io/f/one.png")
