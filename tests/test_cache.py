from typing import List
from unittest.mock import MagicMock

import pytest
import redis
from pydantic import TypeAdapter

from app.cache import keys
from app.cache.manager import read_through
from app.cache.redis import Client
from app.core.exceptions import TransientInfraError
from app.schemas import TagCount

tags_adapter = TypeAdapter(List[TagCount])


@pytest.fixture
def broken_cache():
    server = MagicMock()
    server.get.side_effect = redis.ConnectionError("down")
    server.set.side_effect = redis.ConnectionError("down")
    server.delete.side_effect = redis.ConnectionError("down")
    server.scan_iter.side_effect = redis.ConnectionError("down")
    return Client(client=server)


def test_search_key_normalizes_query():
    assert keys.search_key("  PyThon ", 2) == "search:python:2"


def test_replies_pattern_matches_replies_keys_of_one_blog():
    assert keys.replies_key(7, 3).startswith(keys.replies_pattern(7)[:-1])
    assert not keys.replies_key(70, 3).startswith(keys.replies_pattern(7)[:-1])


def test_read_through_loads_and_stores_on_miss(cache, redis_server):
    loader = MagicMock(return_value=[TagCount(tag="python", count=2)])

    result = read_through(cache, "tags:test", tags_adapter, loader, ttl=60)

    assert result == [TagCount(tag="python", count=2)]
    loader.assert_called_once()
    assert redis_server.get("tags:test") is not None
    assert 0 < redis_server.ttl("tags:test") <= 60


def test_read_through_serves_hits_without_loading(cache):
    read_through(cache, "tags:test", tags_adapter, lambda: [TagCount(tag="go", count=1)])
    loader = MagicMock()

    result = read_through(cache, "tags:test", tags_adapter, loader)

    assert result == [TagCount(tag="go", count=1)]
    loader.assert_not_called()


def test_keys_without_ttl_do_not_expire(cache, redis_server):
    read_through(cache, "blog:1", tags_adapter, lambda: [])
    assert redis_server.ttl("blog:1") == -1


def test_unreadable_entry_is_recomputed(cache, redis_server):
    redis_server.set("tags:test", "{not json")

    result = read_through(cache, "tags:test", tags_adapter, lambda: [TagCount(tag="rust", count=4)])

    assert result == [TagCount(tag="rust", count=4)]
    assert tags_adapter.validate_json(redis_server.get("tags:test")) == result


def test_read_falls_back_to_loader_when_redis_is_down(broken_cache):
    result = read_through(broken_cache, "tags:test", tags_adapter, lambda: [TagCount(tag="go", count=1)])
    assert result == [TagCount(tag="go", count=1)]


def test_get_and_set_degrade_quietly(broken_cache):
    assert broken_cache.get("anything") is None
    assert broken_cache.set("anything", "value") is False


def test_delete_failure_is_raised(broken_cache):
    with pytest.raises(TransientInfraError):
        broken_cache.delete("blog:1")
    with pytest.raises(TransientInfraError):
        broken_cache.delete_pattern("replies:1:*")


def test_delete_pattern_only_removes_matching_keys(cache, redis_server):
    redis_server.set("replies:1:10", "[]")
    redis_server.set("replies:1:11", "[]")
    redis_server.set("replies:12:10", "[]")

    assert cache.delete_pattern(keys.replies_pattern(1)) == 2
    assert redis_server.exists("replies:12:10") == 1


def test_delete_without_keys_is_a_no_op(cache):
    assert cache.delete() == 0
