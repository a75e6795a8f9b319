import pytest

from app.cache import keys
from app.core.exceptions import NotFoundError
from app.crud import crud_user
from app.models import Bookmark, Comment
from app.services.content import ContentService
from tests.conftest import NOW, hours_ago


@pytest.fixture
def content(db, cache, settings):
    return ContentService(db, cache, settings)


def test_get_blog_reads_through_cache(db, content, redis_server, make_user, make_blog):
    blog = make_blog(make_user(), title="Cached", tags=["python"])

    first = content.get_blog(blog.id)
    db.add(Comment(blog_id=blog.id, user_id=blog.author_id, content="sneaky", created_at=NOW))
    db.commit()
    second = content.get_blog(blog.id)

    assert first.tags == ["python"]
    assert second.comment_count == 0
    assert redis_server.exists(keys.blog_key(blog.id)) == 1
    assert redis_server.ttl(keys.blog_key(blog.id)) == -1


def test_get_missing_blog(content):
    with pytest.raises(NotFoundError):
        content.get_blog(404)


def test_comments_for_missing_blog(content):
    with pytest.raises(NotFoundError):
        content.get_comments(404)


def test_replies_for_parent_on_another_blog(db, content, make_user, make_blog):
    author = make_user()
    blog, other = make_blog(author), make_blog(author)
    parent = Comment(blog_id=other.id, user_id=author.id, content="elsewhere", created_at=NOW)
    db.add(parent)
    db.commit()

    with pytest.raises(NotFoundError):
        content.get_replies(blog.id, parent.id)


def test_top_level_comments_carry_reply_counts(db, content, make_user, make_blog):
    author = make_user()
    blog = make_blog(author)
    older = Comment(blog_id=blog.id, user_id=author.id, content="first", created_at=hours_ago(2))
    newer = Comment(blog_id=blog.id, user_id=author.id, content="second", created_at=hours_ago(1))
    db.add_all([older, newer])
    db.commit()
    db.add(Comment(blog_id=blog.id, user_id=author.id, content="reply", parent_id=older.id, created_at=NOW))
    db.commit()

    comments = content.get_comments(blog.id)

    assert [c.content for c in comments] == ["second", "first"]
    assert [c.reply_count for c in comments] == [0, 1]
    assert [r.content for r in content.get_replies(blog.id, older.id)] == ["reply"]


def test_trending_tags_by_count(content, redis_server, make_user, make_blog):
    author = make_user()
    make_blog(author, tags=["python", "web"])
    make_blog(author, tags=["python"])
    make_blog(author, tags=["rust"])

    tags = content.get_trending_tags()

    assert [(t.tag, t.count) for t in tags] == [("python", 2), ("rust", 1), ("web", 1)]
    assert 0 < redis_server.ttl(keys.TRENDING_TAGS_KEY) <= 600


def test_stats_count_words_and_users(content, make_user, make_blog):
    author = make_user()
    make_user()
    make_blog(author, content="one two three")
    make_blog(author, content="four five")

    stats = content.get_stats()

    assert stats.word_count == 5
    assert stats.total_users == 2


def test_bookmarks_most_recent_first(db, content, make_user, make_blog):
    reader, author = make_user(), make_user()
    first, second = make_blog(author, title="First"), make_blog(author, title="Second")
    db.add(Bookmark(user_id=reader.id, blog_id=second.id, created_at=hours_ago(2)))
    db.add(Bookmark(user_id=reader.id, blog_id=first.id, created_at=hours_ago(1)))
    db.commit()

    assert [b.title for b in content.fetch_bookmarked(reader.id)] == ["First", "Second"]
    assert content.get_interaction_status(first.id, reader.id).bookmarked is True
    assert content.get_interaction_status(first.id, reader.id).upvoted is False


def test_user_profile(db, content, make_user, make_blog):
    author, fan = make_user(), make_user()
    make_blog(author, title="Hello")
    crud_user.follow(db, fan.id, author.id)

    profile = content.get_user_profile(author.id)

    assert profile.follower_count == 1
    assert profile.following_count == 0
    assert [b.title for b in profile.recent_blogs] == ["Hello"]
    assert content.is_following(fan.id, author.id) is True


def test_profile_for_missing_user(content):
    with pytest.raises(NotFoundError):
        content.get_user_profile(404)
