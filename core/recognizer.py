# core/recognizer.py
import logging
import math
from numbers import Real
from typing import Any, Mapping, Optional
from core.cache_decorator import cached_classify
from core.normalizer import normalize
from core.wit_client import WitClient
from model.result import RecognizerResult
from repository.cache_adapter import CacheAdapter, create_cache_adapter
from util.constants import DEFAULT_CACHE_EXPIRE_SECONDS
from util.enums import CacheBackend
from util.errors import ConfigurationError, RemoteError
from util.types import ClassifyFn, DoneCallback, RecognizeContext

logger = logging.getLogger(__name__)

INVALID_ACCESS_TOKEN = 'access_token must be a non-empty string'
INVALID_CACHE = "Invalid cache client: pass backend='redis' or backend='memcached' with cache"


def _valid_expire(expire: Any) -> bool:
    # Memcached reads exptime=0 as "never expire" and Redis rejects EX 0, so a TTL is at least 1s.
    if not isinstance(expire, Real) or isinstance(expire, bool):
        return False
    return math.isfinite(expire) and int(expire) >= 1


def _utterance(context: Optional[RecognizeContext]) -> Optional[str]:
    if not context:
        return None
    message = context.get("message")
    if not isinstance(message, Mapping):
        return None
    return message.get("text") or None


class WitRecognizer:
    """
    Intent recognizer backed by Wit.ai.

    Optional response caching: pass the cache client and name its backend
    explicitly. The classify step is composed once here; the Wit client
    itself is never modified.
    """

    def __init__(
        self,
        access_token: str,
        *,
        cache: Any = None,
        backend: CacheBackend | str | None = None,
        expire: Any = None,
        prefix: Any = None,
        wit_client: Optional[WitClient] = None,
    ) -> None:
        if not access_token or not isinstance(access_token, str):
            raise ConfigurationError(INVALID_ACCESS_TOKEN)

        self._wit_client = wit_client or WitClient(access_token)
        self._cache_adapter: Optional[CacheAdapter] = None
        self.expire = int(expire) if _valid_expire(expire) else DEFAULT_CACHE_EXPIRE_SECONDS
        self.prefix = prefix if isinstance(prefix, str) else ""

        classify: ClassifyFn = self._wit_client.message
        if cache is not None:
            if backend is None:
                raise ConfigurationError(INVALID_CACHE)
            self._cache_adapter = create_cache_adapter(backend, cache, self.expire)
            classify = cached_classify(classify, self._cache_adapter, self.prefix)
            logger.info(
                "recognizer.cache backend=%s expire=%d prefix=%r",
                CacheBackend(backend).value,
                self.expire,
                self.prefix,
            )
        self._classify = classify

    @property
    def wit_client(self) -> WitClient:
        return self._wit_client

    @property
    def cache_adapter(self) -> Optional[CacheAdapter]:
        return self._cache_adapter

    async def recognize(self, context: Optional[RecognizeContext]) -> RecognizerResult:
        """
        Classify context["message"]["text"].
        Raises RemoteError when Wit.ai answers with an error, TransportError when it can't be reached.
        """
        utterance = _utterance(context)
        if utterance is None:
            return RecognizerResult.default()

        response = await self._classify(utterance, {})
        if response.error:
            logger.warning("recognize.remote_error code=%s", response.code)
            raise RemoteError(response.error, response.code)

        return normalize(response, utterance)

    async def recognize_callback(
        self, context: Optional[RecognizeContext], done: DoneCallback
    ) -> None:
        # Dialog-framework style: the outcome goes to done(err, result), never raised.
        try:
            result = await self.recognize(context)
        except Exception as e:
            done(e, None)
            return
        done(None, result)
