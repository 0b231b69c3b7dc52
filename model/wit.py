# model/wit.py
from typing import Any
from pydantic import BaseModel, ConfigDict, Field

# One match under an entity label, kept verbatim. Typical shapes:
#   {"type": "value", "value": "bar", "confidence": 0.95}
#   {"type": "interval", "confidence": 0.99, "values": [...], "from": {...}, "to": {...}}
#   intent label: {"value": "set_alarm", "confidence": 0.99}
WitEntity = dict[str, Any]


class WitResponse(BaseModel):
    """
    JSON body of Wit.ai's /message endpoint.
    - `entities` maps label -> matches; the reserved "intent" label holds at most one match.
    - An auth/param failure comes back as {"error": "...", "code": "..."} with no entities.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    msg_id: str | None = None
    text: str | None = Field(default=None, alias="_text")
    entities: dict[str, list[WitEntity]] = Field(default_factory=dict)
    error: str | None = None
    code: str | None = None

    def to_cache(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)
