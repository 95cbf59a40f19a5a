"""Lenient JSON extraction for model output"""
import json
import math
import re
from typing import Any, Optional

from src.eventra.services.errors import AIResponseParseError

CODE_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def _try_loads(text: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return False, None


def extract_json(text: str, prefer: str = "{") -> Any:
    """Parse model output as JSON.

    Tries a strict parse first, then the body of a Markdown code fence, then
    the span from the first ``{`` to the last ``}`` and the span from the first
    ``[`` to the last ``]``, with the ``prefer`` opener tried first so that a
    single value wrapped in explanatory prose is still recovered.
    """
    if text is None:
        raise AIResponseParseError("Empty AI response", "")

    stripped = text.strip()
    ok, value = _try_loads(stripped)
    if ok:
        return value

    fence = CODE_FENCE_RE.search(stripped)
    if fence:
        ok, value = _try_loads(fence.group(1).strip())
        if ok:
            return value

    pairs = [("{", "}"), ("[", "]")]
    if prefer == "[":
        pairs.reverse()
    for open_char, close_char in pairs:
        start = stripped.find(open_char)
        end = stripped.rfind(close_char)
        if start == -1 or end <= start:
            continue
        ok, value = _try_loads(stripped[start:end + 1])
        if ok:
            return value

    raise AIResponseParseError("Invalid AI response format", text)


def extract_json_object(text: str) -> dict:
    value = extract_json(text, prefer="{")
    if not isinstance(value, dict):
        raise AIResponseParseError("AI response is not a JSON object", text)
    return value


def round_half_up(value: float) -> int:
    """Round with halves going up, so 12.5 becomes 13."""
    return math.floor(value + 0.5)


def as_int(value: Any, default: int, lo: Optional[int] = None, hi: Optional[int] = None) -> int:
    if isinstance(value, bool):
        return default
    try:
        result = round_half_up(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    if lo is not None:
        result = max(lo, result)
    if hi is not None:
        result = min(hi, result)
    return result


def as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def as_str(value: Any, default: Optional[str] = "") -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return default


def as_list(value: Any, default: Optional[list] = None) -> list:
    if isinstance(value, list):
        return value
    return list(default) if default else []


def as_choice(value: Any, choices: tuple[str, ...], default: str) -> str:
    if isinstance(value, str) and value.lower() in choices:
        return value.lower()
    return default
