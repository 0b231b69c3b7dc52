# repository/cache_adapter.py
from abc import ABC, abstractmethod
from typing import Any, Optional
from util.enums import CacheBackend
from util.errors import ConfigurationError, ParseError


class CacheAdapter(ABC):
    """
    Flow:
    - Uniform get/set/touch over a key/value store holding serialized Wit responses.
    - Every record lives for `expire` seconds; touch() restarts that clock.
    - Backend failures surface as CacheError, undecodable payloads as ParseError;
      the caller decides to absorb them.
    """

    def __init__(self, expire: int) -> None:
        self.expire = int(expire)

    @abstractmethod
    async def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    async def touch(self, key: str) -> None: ...

    @staticmethod
    def _decode(raw: Any) -> Optional[str]:
        if raw is None:
            return None
        if isinstance(raw, (bytes, bytearray)):
            try:
                return raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"cached payload is not UTF-8: {e}") from e
        return str(raw)


def create_cache_adapter(
    backend: CacheBackend | str, client: Any, expire: int
) -> CacheAdapter:
    # Imported here so each adapter module can import CacheAdapter from this one.
    from repository.memcached_adapter import MemcachedAdapter
    from repository.redis_adapter import RedisAdapter

    try:
        kind = CacheBackend(backend)
    except ValueError:
        raise ConfigurationError(
            f"Invalid cache backend {backend!r}; expected one of "
            + ", ".join(b.value for b in CacheBackend)
        ) from None

    if kind is CacheBackend.REDIS:
        return RedisAdapter(client, expire)
    return MemcachedAdapter(client, expire)
