# util/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)


class RecognizerError(Exception):
    """Base class for everything the recognizer raises."""


class ConfigurationError(RecognizerError):
    # Bad access token or cache selection; raised at construction time only.
    pass


class RemoteError(RecognizerError):
    # Wit.ai answered, but the payload carries an "error" field.
    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class TransportError(RecognizerError):
    # The call to Wit.ai itself failed (network, non-JSON body, bad status).
    pass


class CacheError(RecognizerError):
    # Any get/set/touch failure from a cache backend. Never reaches callers.
    pass


class ParseError(RecognizerError):
    # A cached payload that does not deserialize to a WitResponse.
    pass
