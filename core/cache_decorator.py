# core/cache_decorator.py
import hashlib
import logging
from typing import Optional
from pydantic import ValidationError
from model.wit import WitResponse
from repository.cache_adapter import CacheAdapter
from util.errors import CacheError, ParseError
from util.tasks import spawn
from util.types import ClassifyFn, WitContext

logger = logging.getLogger(__name__)


def cache_key(text: str, prefix: str = "") -> str:
    # Same text -> same key across processes; per-call context is deliberately ignored.
    return prefix + hashlib.sha256(text.encode("utf-8")).hexdigest()


def _parse(raw: str) -> WitResponse:
    try:
        return WitResponse.model_validate_json(raw)
    except ValidationError as e:
        raise ParseError(f"cached payload is not a Wit response ({e.error_count()} errors)") from e


async def _lookup(adapter: CacheAdapter, key: str) -> Optional[WitResponse]:
    """Any cache fault is reported and treated as a miss."""
    try:
        raw = await adapter.get(key)
        if raw is None:
            return None
        return _parse(raw)
    except CacheError as e:
        logger.warning("cache.get.error key=%s err=%s", key, e)
    except ParseError as e:
        logger.warning("cache.parse.error key=%s err=%s", key, e)
    return None


def cached_classify(
    classify: ClassifyFn, adapter: CacheAdapter, prefix: str = ""
) -> ClassifyFn:
    """
    Wrap `classify` with a cache-aside read/write cycle.
    - hit: refresh the TTL in the background, skip `classify` entirely.
    - miss: await `classify`; its exceptions propagate untouched.
      Successful responses without an `error` are stored in the background.
    """

    async def classify_with_cache(
        text: str, context: Optional[WitContext] = None
    ) -> WitResponse:
        key = cache_key(text, prefix)

        cached = await _lookup(adapter, key)
        if cached is not None:
            logger.debug("cache.hit key=%s", key)
            spawn(adapter.touch(key), name=f"cache.touch:{key}")
            return cached

        logger.debug("cache.miss key=%s", key)
        response = await classify(text, context)
        if response.error:
            logger.debug("cache.skip key=%s reason=error", key)
        else:
            spawn(adapter.set(key, response.to_cache()), name=f"cache.set:{key}")
        return response

    return classify_with_cache
