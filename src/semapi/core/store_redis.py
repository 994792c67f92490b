"""Redis-backed lock store using SET NX PX semantics."""

from __future__ import annotations

import asyncio
import datetime as dt
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from semapi.core.errors import StoreUnavailable
from semapi.core.models import ttl_to_millis
from semapi.core.settings import RedisSettings
from semapi.core.store import LockStore
from semapi.utils.logging import get_logger

# delete only if the value still matches
_COMPARE_AND_DELETE = """
if redis.call('get', KEYS[1]) == ARGV[1] then
    return redis.call('del', KEYS[1])
else
    return 0
end
"""

_STORE_ERRORS = (RedisError, OSError, asyncio.TimeoutError)


class RedisLockStore(LockStore):
    def __init__(self, redis: Redis, *, key_prefix: str = "") -> None:
        self._redis = redis
        self._prefix = key_prefix
        self.logger = get_logger("RedisLockStore")

    @classmethod
    def from_settings(cls, settings: RedisSettings) -> "RedisLockStore":
        redis = Redis.from_url(
            settings.dsn(),
            decode_responses=True,
            socket_timeout=settings.socket_timeout,
            socket_connect_timeout=settings.connect_timeout,
        )
        return cls(redis, key_prefix=settings.key_prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _unavailable(self, op: str, exc: BaseException) -> StoreUnavailable:
        self.logger.error("Redis %s failed: %s", op, exc)
        return StoreUnavailable(f"lock store unavailable: {exc}")

    async def create_if_absent(self, key: str, value: str, ttl: dt.timedelta) -> bool:
        try:
            created = await self._redis.set(self._key(key), value, px=ttl_to_millis(ttl), nx=True)
        except _STORE_ERRORS as exc:
            raise self._unavailable("SET", exc) from exc
        return bool(created)

    async def read(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(self._key(key))
        except _STORE_ERRORS as exc:
            raise self._unavailable("GET", exc) from exc

    async def delete_if_matches(self, key: str, expected: str) -> bool:
        try:
            deleted = await self._redis.eval(_COMPARE_AND_DELETE, 1, self._key(key), expected)
        except _STORE_ERRORS as exc:
            raise self._unavailable("EVAL", exc) from exc
        return int(deleted or 0) > 0

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except _STORE_ERRORS as exc:
            raise self._unavailable("PING", exc) from exc

    async def close(self) -> None:
        await self._redis.aclose()
