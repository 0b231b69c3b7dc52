# core/wit_client.py
import json
from typing import Any, Dict, Optional
import httpx
from pydantic import ValidationError
import logging
from model.wit import WitResponse
from util.constants import ExternalURIs
from util.errors import TransportError
from util.timing import timed

logger = logging.getLogger(__name__)


def _error_body(res: httpx.Response) -> Optional[Dict[str, Any]]:
    """
    Wit.ai reports auth/param problems as a JSON body with an "error" key
    (and a 4xx status). Return that body, or None for anything else.
    """
    try:
        body = res.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return body
    return None


class WitClient:
    """
    Thin async client for Wit.ai's /message endpoint.
    Only classify() semantics are needed: one utterance in, one raw response out.
    """

    def __init__(
        self,
        access_token: str,
        *,
        api_url: str = "https://api.wit.ai",
        api_version: str = "20170307",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._access_token = access_token
        self._url = api_url.rstrip("/") + ExternalURIs.WIT_MESSAGE
        self._version = api_version
        self._timeout = httpx.Timeout(timeout, connect=min(timeout, 5.0))
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Accept": f"application/vnd.wit.{self._version}+json",
        }

    async def message(
        self, text: str, context: Optional[Dict[str, Any]] = None
    ) -> WitResponse:
        params: Dict[str, str] = {"v": self._version, "q": text}
        if context:
            params["context"] = json.dumps(context)

        with timed(logger, "wit.message", chars=len(text)) as fields:
            try:
                async with httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                ) as client:
                    res = await client.get(self._url, headers=self._headers(), params=params)
                fields["status"] = res.status_code
            except httpx.RequestError as e:
                logger.error("wit.request_error err=%s", type(e).__name__)
                raise TransportError(f"Wit.ai request failed: {e}") from e

        if res.status_code // 100 != 2:
            body = _error_body(res)
            if body is None:
                logger.error("wit.bad_status %d", res.status_code)
                raise TransportError(f"Wit.ai responded with HTTP {res.status_code}")
            # Let the recognizer turn this into a RemoteError with Wit's own message.
            logger.warning("wit.error status=%d code=%s", res.status_code, body.get("code"))
            return WitResponse.model_validate(body)

        try:
            return WitResponse.model_validate_json(res.content)
        except ValidationError as e:
            logger.error("wit.bad_payload errors=%d", e.error_count())
            raise TransportError("Wit.ai returned an unexpected payload") from e
