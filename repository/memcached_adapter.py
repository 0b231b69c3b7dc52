# repository/memcached_adapter.py
from typing import Optional
import aiomcache
from aiomcache.exceptions import ClientException
from repository.cache_adapter import CacheAdapter
from util.errors import CacheError


class MemcachedAdapter(CacheAdapter):
    """
    Flow:
    - The TTL is fixed at construction and reused as `exptime` on set/touch.
    - aiomcache speaks bytes only; keys are ASCII (hex digest + prefix), values UTF-8 JSON.
    """

    def __init__(self, client: aiomcache.Client, expire: int) -> None:
        super().__init__(expire)
        self.client = client

    @staticmethod
    def _key(key: str) -> bytes:
        return key.encode("utf-8")

    async def get(self, key: str) -> Optional[str]:
        try:
            raw = await self.client.get(self._key(key))
        except (ClientException, ValueError, OSError) as e:
            raise CacheError(f"memcached get failed: {e}") from e
        return self._decode(raw)

    async def set(self, key: str, value: str) -> None:
        try:
            ok = await self.client.set(
                self._key(key), value.encode("utf-8"), exptime=self.expire
            )
        except (ClientException, ValueError, OSError) as e:
            raise CacheError(f"memcached set failed: {e}") from e
        if ok is False:
            raise CacheError("memcached set was not stored")

    async def touch(self, key: str) -> None:
        try:
            await self.client.touch(self._key(key), self.expire)
        except (ClientException, ValueError, OSError) as e:
            raise CacheError(f"memcached touch failed: {e}") from e
