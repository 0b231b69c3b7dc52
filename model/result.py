# model/result.py
from typing import Any
from pydantic import BaseModel


class Intent(BaseModel):
    intent: str
    score: float


class Entity(BaseModel):
    # `entity` is only filled for matches of type "value"; everything else is in rawEntity.
    type: str
    entity: str | None = None
    rawEntity: dict[str, Any]
    score: float | None = None
    startIndex: int | None = None
    endIndex: int | None = None


class RecognizerResult(BaseModel):
    """
    Result handed back to the dialog framework.
    Optional keys are omitted (not null) unless set: dump with exclude_unset=True.
    """

    score: float = 0.0
    intent: str | None = None
    intents: list[Intent] | None = None
    entities: list[Entity] | None = None

    @classmethod
    def default(cls) -> "RecognizerResult":
        return cls(score=0.0, intent=None)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
