import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.crud import crud_user
from app.services.paging import page_window
from app.services.ranking import RankingService
from tests.conftest import NOW, hours_ago


@pytest.fixture
def ranking(db):
    return RankingService(db, clock=lambda: NOW)


def test_page_window():
    assert page_window(1, 5) == (0, 5)
    assert page_window(3, 5) == (10, 5)


@pytest.mark.parametrize("page,limit", [(0, 5), (1, 0), (1, 51)])
def test_page_window_rejects_out_of_range(page, limit):
    with pytest.raises(ValidationError):
        page_window(page, limit)


def test_trending_pages_do_not_overlap(ranking, make_user, make_blog):
    author = make_user()
    for i in range(5):
        make_blog(author, title=f"Blog {i}", created_at=hours_ago(i))

    assert len(ranking.fetch_trending(page=1, limit=5)) == 5
    assert ranking.fetch_trending(page=2, limit=5) == []


def test_trending_orders_window_by_score(ranking, make_user, make_blog, engage):
    author = make_user()
    quiet = make_blog(author, title="Quiet", created_at=hours_ago(1))
    busy = make_blog(author, title="Busy", created_at=hours_ago(10))
    engage(busy, upvotes=3, comments=2)

    result = ranking.fetch_trending(page=1, limit=5)

    assert [b.id for b in result] == [busy.id, quiet.id]
    assert result[0].score > result[1].score
    assert result[0].upvote_count == 3
    assert result[0].comment_count == 2


def test_recent_blog_beats_older_blog_with_same_engagement(ranking, make_user, make_blog, engage):
    author = make_user()
    older = make_blog(author, title="Older", created_at=hours_ago(10))
    newer = make_blog(author, title="Newer", created_at=hours_ago(1))
    engage(older, upvotes=2)
    engage(newer, upvotes=2)

    assert [b.id for b in ranking.fetch_trending()] == [newer.id, older.id]


def test_ties_keep_newest_first_order(ranking, make_user, make_blog):
    author = make_user()
    blogs = [make_blog(author, title=f"Blog {i}", created_at=hours_ago(i)) for i in range(3)]

    assert [b.id for b in ranking.fetch_trending()] == [b.id for b in blogs]


def test_ranking_is_local_to_the_fetched_window(ranking, make_user, make_blog, engage):
    author = make_user()
    for i in range(5):
        make_blog(author, title=f"Recent {i}", created_at=hours_ago(i))
    popular = make_blog(author, title="Old but popular", created_at=hours_ago(48))
    engage(popular, upvotes=20)

    assert popular.id not in [b.id for b in ranking.fetch_trending(page=1, limit=5)]
    assert [b.id for b in ranking.fetch_trending(page=2, limit=5)] == [popular.id]


def test_tag_feed_matches_case_insensitively(ranking, make_user, make_blog):
    author = make_user()
    tagged = make_blog(author, title="Tagged", tags=["Python"])
    make_blog(author, title="Other", tags=["rust"])

    assert [b.id for b in ranking.fetch_by_tag("python")] == [tagged.id]
    assert [b.id for b in ranking.fetch_by_tag("PYTHON")] == [tagged.id]


def test_blank_tag_returns_nothing(ranking, make_user, make_blog):
    make_blog(make_user(), tags=["python"])
    assert ranking.fetch_by_tag("   ") == []


def test_followed_feed_only_contains_followed_authors(db, ranking, make_user, make_blog):
    reader, followed, stranger = make_user(), make_user(), make_user()
    mine = make_blog(followed, title="Followed")
    make_blog(stranger, title="Stranger")
    crud_user.follow(db, reader.id, followed.id)

    assert [b.id for b in ranking.fetch_followed(reader.id)] == [mine.id]
    assert ranking.fetch_followed(stranger.id) == []


def test_recommendations_exclude_source_and_keep_top_three(ranking, make_user, make_blog, engage):
    author, other = make_user(), make_user()
    source = make_blog(author, title="Source", tags=["python"])
    engage(source, upvotes=10)
    same_author = [make_blog(author, title=f"Mine {i}", created_at=hours_ago(i + 1)) for i in range(4)]
    for i, blog in enumerate(same_author):
        engage(blog, upvotes=i)
    similar = make_blog(other, title="Similar", tags=["PYTHON"])
    make_blog(other, title="Unrelated", tags=["cooking"])

    result = ranking.fetch_recommendations(source.id)

    assert [b.id for b in result.from_author] == [same_author[3].id, same_author[2].id, same_author[1].id]
    assert source.id not in [b.id for b in result.by_tags]
    assert similar.id in [b.id for b in result.by_tags]
    assert all(b.title != "Unrelated" for b in result.by_tags)


def test_recommendations_for_missing_blog(ranking):
    with pytest.raises(NotFoundError):
        ranking.fetch_recommendations(999)
