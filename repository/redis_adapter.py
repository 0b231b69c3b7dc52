# repository/redis_adapter.py
from typing import Optional
from redis.asyncio import Redis
from redis.exceptions import RedisError
from repository.cache_adapter import CacheAdapter
from util.errors import CacheError


class RedisAdapter(CacheAdapter):
    """TTL is sent with every SET; touch() is EXPIRE with the same TTL."""

    def __init__(self, client: Redis, expire: int) -> None:
        super().__init__(expire)
        self.client = client

    async def get(self, key: str) -> Optional[str]:
        try:
            raw = await self.client.get(key)
        except (RedisError, OSError) as e:
            raise CacheError(f"redis GET failed: {e}") from e
        return self._decode(raw)

    async def set(self, key: str, value: str) -> None:
        try:
            await self.client.set(key, value.encode("utf-8"), ex=self.expire)
        except (RedisError, OSError) as e:
            raise CacheError(f"redis SET failed: {e}") from e

    async def touch(self, key: str) -> None:
        try:
            await self.client.expire(key, self.expire)
        except (RedisError, OSError) as e:
            raise CacheError(f"redis EXPIRE failed: {e}") from e
