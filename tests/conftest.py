"""
Pytest configuration and fixtures
"""
import os
from unittest.mock import AsyncMock

import pytest

# Settings are read at import time; provide the required variables before any test imports them.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("WIT_ACCESS_TOKEN", "test-token")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("CACHE_BACKEND", "none")

from model.wit import WitResponse  # noqa: E402

UTTERANCE = "There's a bar and a baz in here somewhere"


@pytest.fixture
def error_response() -> dict:
    # What Wit.ai sends back for a bad token.
    return {"error": "Bad auth, check token/params", "code": "no-auth"}


@pytest.fixture
def no_entities_response() -> dict:
    return {"_text": "default", "entities": {}}


@pytest.fixture
def no_intent_response() -> dict:
    return {
        "_text": UTTERANCE,
        "entities": {
            "bar_entity": [{"type": "value", "value": "bar", "confidence": 0.95}],
            "baz_entity": [{"type": "value", "value": "baz", "confidence": 0.85}],
        },
    }


@pytest.fixture
def intent_only_response() -> dict:
    return {
        "_text": UTTERANCE,
        "entities": {"intent": [{"value": "foo", "confidence": 0.99}]},
    }


@pytest.fixture
def intent_plus_response() -> dict:
    return {
        "_text": UTTERANCE,
        "entities": {
            "intent": [{"value": "foo", "confidence": 0.99}],
            "bar_entity": [{"type": "value", "value": "bar", "confidence": 0.95}],
            "baz_entity": [{"type": "value", "value": "baz", "confidence": 0.85}],
        },
    }


@pytest.fixture
def interval_match() -> dict:
    return {
        "confidence": 0.9978530104247438,
        "values": [
            {
                "to": {"value": "2017-01-14T12:00:00.000Z", "grain": "hour"},
                "from": {"value": "2017-01-14T04:00:00.000Z", "grain": "hour"},
                "type": "interval",
            }
        ],
        "to": {"value": "2017-01-14T12:00:00.000Z", "grain": "hour"},
        "from": {"value": "2017-01-14T04:00:00.000Z", "grain": "hour"},
        "type": "interval",
    }


@pytest.fixture
def reminder_match() -> dict:
    return {
        "confidence": 0.7947374127577925,
        "entities": {},
        "type": "value",
        "value": "Set the alarm",
        "suggested": True,
    }


@pytest.fixture
def intent_plus_interval_response(interval_match, reminder_match) -> dict:
    return {
        "_text": " Set the alarm tomorrow morning",
        "entities": {
            "intent": [{"value": "set_alarm", "confidence": 0.99}],
            "reminder": [reminder_match],
            "datetime": [interval_match],
        },
    }


@pytest.fixture
def wit(intent_plus_response) -> AsyncMock:
    """Stand-in for WitClient.message; answers every call with the intent+entities response."""
    return AsyncMock(return_value=WitResponse.model_validate(intent_plus_response))


@pytest.fixture
def redis_client() -> AsyncMock:
    client = AsyncMock()
    client.get.return_value = None
    client.set.return_value = True
    client.expire.return_value = True
    return client


@pytest.fixture
def memcached_client() -> AsyncMock:
    client = AsyncMock()
    client.get.return_value = None
    client.set.return_value = True
    client.touch.return_value = True
    return client
