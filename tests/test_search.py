import pytest

from app.core.exceptions import ValidationError
from app.services.search import FIRST_PAGE_SIZE, PAGE_SIZE, SearchService, search_window
from tests.conftest import hours_ago


@pytest.fixture
def search(db, cache, settings):
    return SearchService(db, cache, settings)


def test_search_windows_are_contiguous():
    assert search_window(1) == (0, FIRST_PAGE_SIZE)
    assert search_window(2) == (10, PAGE_SIZE)
    assert search_window(3) == (15, PAGE_SIZE)


def test_search_window_rejects_page_zero():
    with pytest.raises(ValidationError):
        search_window(0)


def test_blank_query_returns_empty_and_is_not_cached(search, redis_server, make_user, make_blog):
    make_blog(make_user(), title="Anything")

    result = search.search("   ")

    assert result.blogs == [] and result.authors == [] and result.has_more is False
    assert redis_server.keys("search:*") == []


def test_pages_cover_every_match_once(search, make_user, make_blog):
    author = make_user()
    ids = [make_blog(author, title=f"Python tip {i}", created_at=hours_ago(i)).id for i in range(12)]
    make_blog(author, title="Gardening")

    first = search.search("python", page=1)
    second = search.search("python", page=2)

    assert len(first.blogs) == 10
    assert first.has_more is True
    assert len(second.blogs) == 2
    assert second.has_more is False
    assert [b.id for b in first.blogs + second.blogs] == ids


def test_authors_only_on_first_page(search, make_user, make_blog):
    author = make_user(name="Pythonista")
    for i in range(11):
        make_blog(author, title=f"Post {i}", created_at=hours_ago(i))

    first = search.search("python", page=1)
    second = search.search("python", page=2)

    assert [a.id for a in first.authors] == [author.id]
    assert second.authors == []
    assert len(second.blogs) == 1


def test_search_matches_subtitle_and_tag(search, make_user, make_blog):
    author = make_user()
    by_subtitle = make_blog(author, title="One", subtitle="all about Django", created_at=hours_ago(1))
    by_tag = make_blog(author, title="Two", tags=["django"], created_at=hours_ago(2))
    make_blog(author, title="Three")

    assert [b.id for b in search.search("DJANGO").blogs] == [by_subtitle.id, by_tag.id]


def test_results_are_cached_by_normalized_query(search, redis_server, make_user, make_blog):
    author = make_user()
    make_blog(author, title="Rust ownership")
    assert len(search.search("Rust").blogs) == 1

    make_blog(author, title="Rust lifetimes")

    assert len(search.search("  rust ").blogs) == 1
    assert redis_server.exists("search:rust:1") == 1
    assert 0 < redis_server.ttl("search:rust:1") <= 3600


@pytest.mark.parametrize("query", ["_", "%"])
def test_like_wildcards_match_literally(search, make_user, make_blog, query):
    author = make_user()
    make_blog(author, title="Gardening", created_at=hours_ago(1))
    literal = make_blog(author, title=f"snake{query}case names", created_at=hours_ago(2))

    assert [b.id for b in search.search(query).blogs] == [literal.id]


def test_backslash_in_query_matches_literally(search, make_user, make_blog):
    author = make_user(name="Plain")
    make_blog(author, title="Gardening")
    windows = make_blog(author, title=r"C:\temp paths", created_at=hours_ago(1))

    result = search.search("\\")

    assert [b.id for b in result.blogs] == [windows.id]
    assert result.authors == []


def test_author_search_treats_underscore_literally(search, make_user, make_blog):
    make_user(name="ab")
    underscored = make_user(name="a_b")

    assert [a.id for a in search.search("a_b").authors] == [underscored.id]
