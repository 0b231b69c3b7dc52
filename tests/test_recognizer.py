from unittest.mock import AsyncMock

import pytest

from core.recognizer import INVALID_ACCESS_TOKEN, WitRecognizer
from core.wit_client import WitClient
from model.wit import WitResponse
from repository.memcached_adapter import MemcachedAdapter
from repository.redis_adapter import RedisAdapter
from util.constants import DEFAULT_CACHE_EXPIRE_SECONDS
from util.enums import CacheBackend
from util.errors import ConfigurationError, RemoteError, TransportError
from util.tasks import drain


def _stub_wit(*responses_or_errors) -> WitClient:
    client = WitClient("access token")
    effects = [
        WitResponse.model_validate(r) if isinstance(r, dict) else r
        for r in responses_or_errors
    ]
    client.message = AsyncMock(side_effect=effects)
    return client


def _ctx(text):
    return {"message": {"text": text}}


class TestConstructor:
    @pytest.mark.parametrize("token", [None, "", 42, {"accessToken": "foo"}])
    def test_rejects_bad_access_token(self, token):
        with pytest.raises(ConfigurationError, match=INVALID_ACCESS_TOKEN):
            WitRecognizer(token)

    def test_accepts_string_token(self):
        recognizer = WitRecognizer("access token")
        assert isinstance(recognizer.wit_client, WitClient)
        assert recognizer.cache_adapter is None

    def test_uses_provided_expire(self, redis_client):
        recognizer = WitRecognizer("t", cache=redis_client, backend="redis", expire=3600)
        assert recognizer.cache_adapter.expire == 3600

    def test_fractional_expire_is_truncated_to_whole_seconds(self, redis_client):
        recognizer = WitRecognizer("t", cache=redis_client, backend="redis", expire=1.9)
        assert recognizer.cache_adapter.expire == 1

    @pytest.mark.parametrize(
        "expire", [None, "3600", True, -5, 0, 0.5, float("nan"), float("inf")]
    )
    def test_falls_back_to_default_expire(self, redis_client, expire):
        recognizer = WitRecognizer("t", cache=redis_client, backend="redis", expire=expire)
        assert recognizer.cache_adapter.expire == DEFAULT_CACHE_EXPIRE_SECONDS == 3 * 3600

    def test_prefix_defaults_to_empty(self, redis_client):
        assert WitRecognizer("t", cache=redis_client, backend="redis", prefix=7).prefix == ""
        assert WitRecognizer("t", cache=redis_client, backend="redis", prefix="p:").prefix == "p:"

    def test_redis_backend(self, redis_client):
        recognizer = WitRecognizer("t", cache=redis_client, backend=CacheBackend.REDIS)
        assert isinstance(recognizer.cache_adapter, RedisAdapter)

    def test_memcached_backend(self, memcached_client):
        recognizer = WitRecognizer("t", cache=memcached_client, backend="memcached")
        assert isinstance(recognizer.cache_adapter, MemcachedAdapter)

    def test_cache_without_backend_is_rejected(self, redis_client):
        with pytest.raises(ConfigurationError, match="Invalid cache client"):
            WitRecognizer("t", cache=redis_client)

    def test_unknown_backend_is_rejected(self, redis_client):
        with pytest.raises(ConfigurationError):
            WitRecognizer("t", cache=redis_client, backend="couchbase")

    def test_client_method_is_not_patched(self, redis_client):
        wit = WitClient("t")
        original = wit.message
        WitRecognizer("t", cache=redis_client, backend="redis", wit_client=wit)
        assert wit.message == original
        assert "message" not in vars(wit)


class TestRecognize:
    @pytest.mark.asyncio
    async def test_provider_error_raises_remote_error(self, error_response):
        recognizer = WitRecognizer("t", wit_client=_stub_wit(error_response))
        with pytest.raises(RemoteError, match="Bad auth, check token/params") as exc_info:
            await recognizer.recognize(_ctx("error"))
        assert exc_info.value.code == "no-auth"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("context", [None, {}, {"message": {}}, _ctx(""), _ctx(None), {"message": "hi"}])
    async def test_missing_text_returns_default_without_calling_wit(self, context):
        wit = _stub_wit()
        result = await WitRecognizer("t", wit_client=wit).recognize(context)
        assert result.to_payload() == {"score": 0.0, "intent": None}
        wit.message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_entities(self, no_entities_response):
        recognizer = WitRecognizer("t", wit_client=_stub_wit(no_entities_response))
        result = await recognizer.recognize(_ctx("no entities"))
        assert result.to_payload() == {"score": 0.0, "intent": None}

    @pytest.mark.asyncio
    async def test_intent_plus_entities(self, intent_plus_response):
        wit = _stub_wit(intent_plus_response)
        result = await WitRecognizer("t", wit_client=wit).recognize(_ctx("intent plus"))

        payload = result.to_payload()
        assert payload["intent"] == "foo"
        assert payload["score"] == 0.99
        assert len(payload["entities"]) == 2
        wit.message.assert_awaited_once_with("intent plus", {})

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        recognizer = WitRecognizer("t", wit_client=_stub_wit(TransportError("Something failed")))
        with pytest.raises(TransportError, match="Something failed"):
            await recognizer.recognize(_ctx("exception"))

    @pytest.mark.asyncio
    async def test_cached_recognizer_calls_wit_once(self, redis_client, intent_plus_response):
        store = {}

        async def _get(key):
            return store.get(key)

        async def _set(key, value, ex=None):
            store[key] = value

        redis_client.get.side_effect = _get
        redis_client.set.side_effect = _set
        wit = _stub_wit(intent_plus_response, intent_plus_response)
        recognizer = WitRecognizer("t", cache=redis_client, backend="redis", wit_client=wit)

        first = await recognizer.recognize(_ctx("intent plus"))
        await drain()
        second = await recognizer.recognize(_ctx("intent plus"))
        await drain()

        assert wit.message.await_count == 1
        assert first.to_payload() == second.to_payload()

    @pytest.mark.asyncio
    async def test_error_response_is_not_cached(self, redis_client, error_response):
        wit = _stub_wit(error_response)
        recognizer = WitRecognizer("t", cache=redis_client, backend="redis", wit_client=wit)

        with pytest.raises(RemoteError):
            await recognizer.recognize(_ctx("error"))
        await drain()

        redis_client.set.assert_not_awaited()


class TestRecognizeCallback:
    @pytest.mark.asyncio
    async def test_success_goes_to_done(self, intent_only_response):
        calls = []
        recognizer = WitRecognizer("t", wit_client=_stub_wit(intent_only_response))

        await recognizer.recognize_callback(_ctx("intent only"), lambda err, res: calls.append((err, res)))

        ((err, res),) = calls
        assert err is None
        assert res.to_payload() == {
            "score": 0.99,
            "intent": "foo",
            "intents": [{"intent": "foo", "score": 0.99}],
        }

    @pytest.mark.asyncio
    async def test_remote_error_goes_to_done(self, error_response):
        calls = []
        recognizer = WitRecognizer("t", wit_client=_stub_wit(error_response))

        await recognizer.recognize_callback(_ctx("error"), lambda err, res: calls.append((err, res)))

        ((err, res),) = calls
        assert isinstance(err, RemoteError)
        assert str(err) == error_response["error"]
        assert res is None

    @pytest.mark.asyncio
    async def test_transport_error_goes_to_done(self):
        calls = []
        recognizer = WitRecognizer("t", wit_client=_stub_wit(TransportError("Something failed")))

        await recognizer.recognize_callback(_ctx("exception"), lambda err, res: calls.append((err, res)))

        ((err, res),) = calls
        assert str(err) == "Something failed"
        assert res is None
