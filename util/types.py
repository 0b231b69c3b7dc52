# util/types.py
from typing import Any, Awaitable, Callable, Optional, TypedDict

from model.result import RecognizerResult
from model.wit import WitResponse


# Flow: shape of what a dialog framework hands to recognize().
class MessagePayload(TypedDict, total=False):
    text: str


class RecognizeContext(TypedDict, total=False):
    message: MessagePayload


WitContext = dict[str, Any]

# Either WitClient.message or its cache-aside wrapper.
ClassifyFn = Callable[[str, Optional[WitContext]], Awaitable[WitResponse]]

# Node-style completion callback: done(error, result).
DoneCallback = Callable[[Optional[BaseException], Optional[RecognizerResult]], None]
