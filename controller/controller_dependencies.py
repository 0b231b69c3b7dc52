# controller/controller_dependencies.py
from typing import Any, Optional
from config.cache import get_memcached, get_redis
from config.settings import settings
from core.recognizer import WitRecognizer
from core.wit_client import WitClient
from service.recognition_service import RecognitionService
from util.enums import CacheBackend

_recognizer: Optional[WitRecognizer] = None


async def _cache_client(backend: CacheBackend) -> Any:
    if backend is CacheBackend.REDIS:
        return await get_redis()
    return await get_memcached()


async def get_recognizer() -> WitRecognizer:
    # Built once per process; the Wit and cache clients are shared, read-mostly.
    global _recognizer
    if _recognizer is None:
        wit = WitClient(
            settings.WIT_ACCESS_TOKEN,
            api_url=settings.WIT_API_URL,
            api_version=settings.WIT_API_VERSION,
            timeout=settings.WIT_TIMEOUT_SECONDS,
        )
        if settings.cache_enabled:
            backend = CacheBackend(settings.CACHE_BACKEND)
            _recognizer = WitRecognizer(
                settings.WIT_ACCESS_TOKEN,
                cache=await _cache_client(backend),
                backend=backend,
                expire=settings.CACHE_EXPIRE_SECONDS,
                prefix=settings.CACHE_PREFIX,
                wit_client=wit,
            )
        else:
            _recognizer = WitRecognizer(settings.WIT_ACCESS_TOKEN, wit_client=wit)
    return _recognizer


def reset_recognizer() -> None:
    global _recognizer
    _recognizer = None


async def get_recognition_service() -> RecognitionService:
    return RecognitionService(await get_recognizer())
