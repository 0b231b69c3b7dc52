# service/recognition_service.py
import logging
from core.recognizer import WitRecognizer
from model.result import RecognizerResult
from util.enums import ErrorMessage
from util.errors import AppError, RemoteError, TransportError

logger = logging.getLogger(__name__)


class RecognitionService:
    """
    HTTP-facing wrapper around WitRecognizer: domain errors become AppErrors.
    """

    def __init__(self, recognizer: WitRecognizer) -> None:
        self._recognizer = recognizer

    async def recognize(self, text: str | None) -> RecognizerResult:
        try:
            result = await self._recognizer.recognize({"message": {"text": text}})
        except RemoteError as e:
            logger.warning("recognize.upstream_error code=%s", e.code)
            raise AppError(
                f"{ErrorMessage.UPSTREAM_NLU_ERROR.value.message}: {e}",
                ErrorMessage.UPSTREAM_NLU_ERROR.value.http_status,
            )
        except TransportError as e:
            logger.error("recognize.transport_error err=%s", e)
            raise AppError(
                ErrorMessage.INTERNAL_ERROR.value.message,
                ErrorMessage.INTERNAL_ERROR.value.http_status,
            )
        logger.info(
            "recognize.ok intent=%s score=%s entities=%d",
            result.intent,
            result.score,
            len(result.entities or []),
        )
        return result
