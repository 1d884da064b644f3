"""
Response Parser
Extracts the first JSON object embedded in a free-text assistant reply.
"""
import json
from typing import Any, Dict

from ..core.exceptions import MalformedJsonError, NoJsonFoundError

_decoder = json.JSONDecoder()


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Return the first substring of ``text`` that decodes to a JSON object.

    Every ``{`` is tried in order; decoding is string-aware, so braces
    inside JSON strings do not unbalance the match. Anything before or
    after the object is ignored.

    Raises:
        NoJsonFoundError: the text contains no ``{`` at all
        MalformedJsonError: braces exist but none starts a valid object
    """
    start = text.find("{")
    if start == -1:
        raise NoJsonFoundError()

    first_error = None
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError as e:
            if first_error is None:
                first_error = e
        else:
            if isinstance(value, dict):
                return value
        start = text.find("{", start + 1)

    reason = first_error.msg if first_error is not None else None
    raise MalformedJsonError(reason)
