"""
Read-through helpers for the service layer.
"""
import logging
from typing import Callable, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from app.cache.redis import Client

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read_through(
    cache: Client,
    key: str,
    adapter: TypeAdapter,
    loader: Callable[[], T],
    ttl: Optional[int] = None,
) -> T:
    """
    Return the cached value for key, computing and storing it on a miss.

    Values are stored as the JSON form of the adapter's type. An entry that
    no longer parses is recomputed and overwritten.
    """
    cached = cache.get(key)
    if cached is not None:
        try:
            return adapter.validate_json(cached)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")

    value = loader()
    cache.set(key, adapter.dump_json(value).decode("utf-8"), ttl=ttl)
    return value
