# config/cache.py
from typing import Optional
import aiomcache
from redis.asyncio import Redis, from_url
from config.settings import settings

_client: Optional[Redis] = None
_memcached: Optional[aiomcache.Client] = None


async def get_redis() -> Redis:
    global _client
    if _client is None:
        _client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=False,  # adapters decode cached payloads themselves
            socket_keepalive=True,
            health_check_interval=30,
        )
        # Fail fast on startup if Redis is unreachable.
        await _client.ping()
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def get_memcached() -> aiomcache.Client:
    global _memcached
    if _memcached is None:
        _memcached = aiomcache.Client(settings.MEMCACHED_HOST, settings.MEMCACHED_PORT)
        # aiomcache connects lazily; a version round-trip surfaces a dead server now.
        await _memcached.version()
    return _memcached


async def close_memcached() -> None:
    global _memcached
    if _memcached is not None:
        await _memcached.close()
        _memcached = None
