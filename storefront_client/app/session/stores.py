"""
Credential stores for the session context.
"""

from typing import Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from shared.errors import SessionStoreError
from shared.logging import get_logger


class TokenStore:
    """Async key-value store holding string entries."""

    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> None:
        raise NotImplementedError


class NullTokenStore(TokenStore):
    """Store for headless contexts: nothing is ever persisted."""

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None


class MemoryTokenStore(TokenStore):
    """In-process store, the local-storage analogue for a single user agent."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class RedisTokenStore(TokenStore):
    """Redis-backed store for sessions shared across processes.

    Keys are namespaced per session so one Redis database can hold many
    user sessions. Connection and command errors are raised as
    ``SessionStoreError``.
    """

    def __init__(self, redis_url: str, session_id: str, key_prefix: str = "storefront:session:",
                 client: Optional[redis.Redis] = None):
        self.redis_url = redis_url
        self.session_id = session_id
        self.key_prefix = key_prefix
        self.logger = get_logger("storefront.session.redis")
        self._redis: Optional[redis.Redis] = client

    async def _get_redis(self) -> redis.Redis:
        """Get Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
        return self._redis

    def _make_key(self, key: str) -> str:
        return f"{self.key_prefix}{self.session_id}:{key}"

    async def get(self, key: str) -> Optional[str]:
        try:
            client = await self._get_redis()
            value = await client.get(self._make_key(key))
        except RedisError as e:
            raise SessionStoreError("Failed to read session entry", details={"key": key, "error": str(e)}) from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            client = await self._get_redis()
            await client.set(self._make_key(key), value)
        except RedisError as e:
            raise SessionStoreError("Failed to write session entry", details={"key": key, "error": str(e)}) from e

    async def delete(self, key: str) -> None:
        try:
            client = await self._get_redis()
            await client.delete(self._make_key(key))
        except RedisError as e:
            raise SessionStoreError("Failed to delete session entry", details={"key": key, "error": str(e)}) from e

    async def close(self):
        """Close the Redis connection."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            self.logger.info("Redis session store closed")
