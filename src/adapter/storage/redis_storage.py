"""Redis implementation of KeyValueStorage.

Values are stored as plain strings under a namespaced key. Reads degrade to
None when Redis is unreachable; writes raise StorageError.
"""

import logging
from typing import Optional

import redis
from redis.exceptions import RedisError

from port.storage import StorageError

logger = logging.getLogger(__name__)

KEY_PREFIX = 'wordtap:'


class RedisStorage:
    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None):
        self.redis_url = redis_url
        self._client_cache: Optional[redis.Redis] = client
        self._connection_attempted: bool = client is not None
        self._connection_failed: bool = False

    def _get_client(self) -> Optional[redis.Redis]:
        """Get Redis client with caching and reconnection logic."""
        if self._client_cache:
            try:
                self._client_cache.ping()
                return self._client_cache
            except Exception:
                self._client_cache = None
                logger.debug("[REDIS] Cached client failed ping, attempting reconnection...")

        if self._connection_failed:
            return None

        if not self.redis_url:
            logger.error("[REDIS] REDIS_URL not configured for STORAGE_BACKEND=redis")
            self._connection_failed = True
            return None

        try:
            client = redis.from_url(
                self.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
            )
            client.ping()

            is_first = not self._connection_attempted
            self._connection_attempted = True
            self._client_cache = client

            if is_first:
                logger.info("[REDIS] Connected successfully")

            return client
        except (RedisError, ValueError, OSError) as e:
            if not self._connection_attempted:
                logger.error(f"[REDIS] Initial connection failed: {str(e)[:200]}")
                self._connection_failed = True
            return None

    # ── KeyValueStorage implementation ───────────────────────

    def get(self, key: str) -> str | None:
        client = self._get_client()
        if not client:
            return None
        try:
            return client.get(KEY_PREFIX + key)
        except RedisError as e:
            logger.warning("Failed to read key", extra={"key": key, "error": str(e)})
            return None

    def set(self, key: str, value: str) -> None:
        client = self._get_client()
        if not client:
            raise StorageError("Redis unavailable")
        try:
            client.set(KEY_PREFIX + key, value)
        except RedisError as e:
            logger.error("Failed to write key", extra={"key": key, "error": str(e)})
            raise StorageError(str(e)) from e

    def remove(self, key: str) -> None:
        client = self._get_client()
        if not client:
            raise StorageError("Redis unavailable")
        try:
            client.delete(KEY_PREFIX + key)
        except RedisError as e:
            logger.error("Failed to delete key", extra={"key": key, "error": str(e)})
            raise StorageError(str(e)) from e

    def ping(self) -> bool:
        return self._get_client() is not None
