# model/api.py
from pydantic import BaseModel, Field


class RecognizeMessage(BaseModel):
    text: str | None = Field(default=None, max_length=280)


class RecognizeRequest(BaseModel):
    message: RecognizeMessage


class HealthResponse(BaseModel):
    ok: bool
