# core/normalizer.py
from typing import Any, Dict, List, Optional
from model.result import Entity, Intent, RecognizerResult
from model.wit import WitEntity, WitResponse
from util.constants import INTENT_LABEL, NONE_INTENT, NONE_INTENT_SCORE


def _build_entity(label: str, match: WitEntity, source: str) -> Entity:
    """
    Map one Wit match to an Entity.
    - type "value": entity = value, indices from the first occurrence in `source`.
      A value that is not a literal substring (e.g. a resolved datetime) yields
      startIndex = -1 and endIndex = len(value) - 2.
    - anything else (e.g. "interval"): entity stays None, no indices; read rawEntity.
    """
    fields: Dict[str, Any] = {
        "type": label,
        "entity": None,
        "rawEntity": match,
        "score": match.get("confidence"),
    }
    if match.get("type") == "value":
        value = str(match.get("value", ""))
        start = source.find(value)
        fields["entity"] = value
        fields["startIndex"] = start
        fields["endIndex"] = start + (len(value) - 1)
    return Entity(**fields)


def normalize(response: WitResponse, text: Optional[str] = None) -> RecognizerResult:
    """
    Translate a Wit.ai response into a RecognizerResult.

    The caller must have rejected responses carrying `error` already.
    `text` is only used when Wit.ai did not echo the utterance back in `_text`.
    """
    entities = dict(response.entities or {})
    intent_matches = entities.pop(INTENT_LABEL, None)

    if not intent_matches and not entities:
        return RecognizerResult.default()

    fields: Dict[str, Any] = {"score": 0.0, "intent": None}

    if intent_matches:
        # Wit.ai returns a single intent at most.
        top = intent_matches[0]
        value, confidence = top.get("value"), top.get("confidence")
        fields["intent"] = value
        fields["score"] = confidence
        fields["intents"] = [Intent(intent=value, score=confidence)]

    if entities:
        if fields["intent"] is None:
            fields["intent"] = NONE_INTENT
            fields["score"] = NONE_INTENT_SCORE

        source = response.text if response.text is not None else (text or "")
        found: List[Entity] = []
        for label, matches in entities.items():
            for match in matches:
                found.append(_build_entity(label, match, source))
        fields["entities"] = found

    return RecognizerResult(**fields)
