import logging
from typing import Optional

import redis

from app.core.exceptions import TransientInfraError


class Client:
    def __init__(self, redis_url: str = None, client: redis.Redis = None):
        """
        Initialize Redis client for the blog read caches

        Args:
            redis_url: Redis connection URL (from settings)
            client: Pre-built redis client, used instead of redis_url when given
        """
        self.logger = logging.getLogger(self.__class__.__name__)

        if client is not None:
            self.client = client
            return

        self.client = redis.from_url(redis_url, decode_responses=True)
        try:
            self.client.ping()
            self.logger.info("Redis connection established")
        except redis.RedisError as e:
            # Reads fall through to the database until Redis comes back
            self.logger.error(f"Failed to connect to Redis: {e}")

    def get(self, key: str) -> Optional[str]:
        """
        Get a cached value

        Returns:
            The stored string, or None on a miss or when Redis is unreachable
        """
        try:
            data = self.client.get(key)
        except redis.RedisError as e:
            self.logger.warning(f"Cache read failed for {key}, falling back to database: {e}")
            return None

        if data is None:
            self.logger.debug(f"Cache miss: {key}")
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        self.logger.debug(f"Cache hit: {key}")
        return data

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> bool:
        """
        Store a value, optionally expiring after ttl seconds

        Returns:
            True if successful, False otherwise
        """
        try:
            self.client.set(key, value, ex=ttl)
            return True
        except redis.RedisError as e:
            self.logger.warning(f"Failed to cache {key}: {e}")
            return False

    def delete(self, *keys: str) -> int:
        """Invalidate keys, raising TransientInfraError when Redis is unreachable"""
        if not keys:
            return 0
        try:
            result = self.client.delete(*keys)
        except redis.RedisError as e:
            self.logger.error(f"Failed to invalidate {keys}: {e}")
            raise TransientInfraError("cache invalidation failed") from e
        self.logger.info(f"Invalidated {list(keys)} ({result} present)")
        return result

    def delete_pattern(self, pattern: str) -> int:
        """Invalidate every key matching a glob pattern"""
        try:
            keys = list(self.client.scan_iter(match=pattern))
            if not keys:
                return 0
            result = self.client.delete(*keys)
        except redis.RedisError as e:
            self.logger.error(f"Failed to invalidate pattern {pattern}: {e}")
            raise TransientInfraError("cache invalidation failed") from e
        self.logger.info(f"Invalidated {result} keys matching {pattern}")
        return result

    def close(self) -> None:
        try:
            self.client.close()
        except redis.RedisError as e:
            self.logger.warning(f"Error closing Redis connection: {e}")
