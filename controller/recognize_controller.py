# controller/recognize_controller.py
from fastapi import APIRouter, status, Depends
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import get_recognition_service
from model.api import RecognizeRequest
from model.result import RecognizerResult
from service.recognition_service import RecognitionService
from util.constants import InternalURIs

rate_limit = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)

recognize_router = APIRouter(dependencies=[Depends(rate_limit)])


@recognize_router.post(
    InternalURIs.RECOGNIZE,
    response_model=RecognizerResult,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
)
async def recognize(
    payload: RecognizeRequest,
    service: RecognitionService = Depends(get_recognition_service),
) -> RecognizerResult:
    return await service.recognize(payload.message.text)
