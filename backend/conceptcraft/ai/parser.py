"""Best-effort JSON extraction from free-form LLM output.

Models rarely return bare JSON: they wrap it in prose or ```json fences.
Nothing in here raises; ``None`` means "unrecognised" and the caller falls
back to canned content.
"""
from __future__ import annotations
import json
from typing import Any, Dict, List, Literal, Optional

Shape = Literal["object", "array"]

_BRACKETS = {"object": ("{", "}"), "array": ("[", "]")}
_TYPES = {"object": dict, "array": list}


def _loads(candidate: str, shape: Shape) -> Optional[Any]:
    try:
        value = json.loads(candidate)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, _TYPES[shape]) else None


def _balanced_end(text: str, start: int, open_ch: str, close_ch: str) -> int:
    """Index of the bracket closing text[start], or -1. Skips brackets inside strings."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return i
    return -1


def extract_json(text: Any, shape: Shape = "object") -> Optional[Any]:
    """
    Return the first JSON object (or array) embedded in ``text``.

    The greedy slice from the first opening bracket to the last closing one is
    tried first, which handles the common "prose + one JSON block" reply. When
    that slice is not valid JSON (two blocks, trailing braces in prose) each
    opening bracket is tried in turn with a balanced scan.
    """
    if not isinstance(text, str) or shape not in _BRACKETS:
        return None
    open_ch, close_ch = _BRACKETS[shape]

    first = text.find(open_ch)
    last = text.rfind(close_ch)
    if first == -1 or last <= first:
        return None

    value = _loads(text[first:last + 1], shape)
    if value is not None:
        return value

    start = first
    while start != -1:
        end = _balanced_end(text, start, open_ch, close_ch)
        if end != -1:
            value = _loads(text[start:end + 1], shape)
            if value is not None:
                return value
        start = text.find(open_ch, start + 1)
    return None


# ------------------------------------------------------------------
# Field coercion for untrusted parsed values
# ------------------------------------------------------------------
def coerce_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def coerce_str_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return items or None


def coerce_str_map(value: Any) -> Optional[Dict[str, str]]:
    if not isinstance(value, dict):
        return None
    mapping = {
        str(k).strip(): v.strip()
        for k, v in value.items()
        if str(k).strip() and isinstance(v, str) and v.strip()
    }
    return mapping or None
