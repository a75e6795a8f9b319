import itertools
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.cache.redis import Client
from app.core.config import Settings
from app.core.exceptions import UnauthorizedError
from app.core.resources import Resources
from app.db.base import Base
from app.db.session import create_db_engine, create_session_factory
from app.main import create_app
from app.models import Blog, BlogTag, Comment, Upvote, User
from app.services.auth import TokenClaims

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def hours_ago(hours: float) -> datetime:
    return NOW - timedelta(hours=hours)


def token_for(user: User) -> str:
    return f"token-{user.social_id}"


class StubVerifier:
    """Accepts tokens of the form 'token-<social_id>'"""

    def verify_token(self, token: str) -> TokenClaims:
        if not token or not token.startswith("token-"):
            raise UnauthorizedError("invalid token")
        return TokenClaims(subject_id=token[len("token-"):])


@pytest.fixture
def engine():
    engine = create_db_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def redis_server():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def cache(redis_server):
    return Client(client=redis_server)


@pytest.fixture
def settings():
    return Settings(DATABASE_URL="sqlite://", FIREBASE_PROJECT_ID="pixie-test")


@pytest.fixture
def verifier():
    return StubVerifier()


@pytest.fixture
def resources(engine, session_factory, cache, verifier, settings):
    return Resources(
        engine=engine,
        session_factory=session_factory,
        cache=cache,
        verifier=verifier,
        summaries=MagicMock(),
        storage=MagicMock(),
        settings=settings,
    )


@pytest.fixture
def client(resources):
    with TestClient(create_app(resources)) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(name=None, social_id=None):
        n = next(counter)
        user = User(
            social_id=social_id or f"social-{n}",
            name=name or f"User {n}",
            email=f"user{n}@example.com",
            avatar=f"https://img.example.com/{n}.png",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_blog(db):
    def _make(author, title="A blog", created_at=None, tags=(), content=None, subtitle=None):
        blog = Blog(
            title=title,
            subtitle=subtitle,
            content=content or "word " * 50,
            reading_time="1 min read",
            author_id=author.id,
            created_at=created_at or NOW,
            tags=[BlogTag(tag=tag) for tag in tags],
        )
        db.add(blog)
        db.commit()
        db.refresh(blog)
        return blog

    return _make


@pytest.fixture
def engage(db, make_user):
    """Add upvotes from fresh users and comments from the blog's author"""

    def _engage(blog, upvotes=0, comments=0):
        for _ in range(upvotes):
            db.add(Upvote(user_id=make_user().id, blog_id=blog.id))
        for i in range(comments):
            db.add(Comment(blog_id=blog.id, user_id=blog.author_id, content=f"comment {i}", created_at=NOW))
        db.commit()

    return _engage
