"""Extracts an answer string from the QA service's response payload."""

import json
from typing import Any

NO_DATA_ANSWER = "[No data from the QA service]"
UNRECOGNIZED_LABEL = "`[Unrecognized QA response]`"

_ANSWER_KEYS = ("text", "answer", "result")


def extract_answer(payload: Any) -> str:
    """
    Finds the answer in a Flowise-style response.

    Accepted shapes, in order: a raw string, ``{text}``, ``{answer}``,
    ``{result}``, a list whose first element has ``text`` or ``answer``, and
    ``{data: {text | answer}}``.

    Args:
        payload: Decoded JSON body (or raw text) of the response.

    Returns:
        The answer, a no-data marker for a missing or empty body, or a labeled dump of
        an unrecognized payload.
    """
    if payload is None or payload == "":
        return NO_DATA_ANSWER
    if isinstance(payload, str):
        return payload

    if isinstance(payload, dict):
        for key in _ANSWER_KEYS:
            if payload.get(key):
                return str(payload[key])
        data = payload.get("data")
        if isinstance(data, dict):
            answer = data.get("text") or data.get("answer")
            if answer:
                return str(answer)

    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        answer = payload[0].get("text") or payload[0].get("answer")
        if answer:
            return str(answer)

    return _unrecognized(payload)


def _unrecognized(payload: Any) -> str:
    dumped = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    return f"{UNRECOGNIZED_LABEL} ```json\n{dumped}\n```"
