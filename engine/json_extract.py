"""Best-effort recovery of a JSON payload from free-form LLM output."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator
from typing import Any, NamedTuple

_FENCE_OPEN = re.compile(r"^```(?:json)?", re.I)
_FENCE_CLOSE = re.compile(r"```$")
_CLOSERS = {"{": "}", "[": "]"}


class JsonExtraction(NamedTuple):
    ok: bool
    value: Any = None


def _loads(text: str) -> JsonExtraction:
    try:
        return JsonExtraction(True, json.loads(text))
    except (json.JSONDecodeError, ValueError):
        return JsonExtraction(False)


def _balanced_span(text: str, start: int) -> str | None:
    """Return the ``{...}`` or ``[...]`` span opening at *start*, honouring strings."""
    stack: list[str] = []
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
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif stack and ch == stack[-1]:
            stack.pop()
            if not stack:
                return text[start : i + 1]
    return None


def _candidates(text: str) -> Iterator[str]:
    """The whole text, the unfenced text, then every bracketed span left to right."""
    yield text
    cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text.strip()).strip()).strip()
    yield cleaned
    for start, ch in enumerate(cleaned):
        if ch in _CLOSERS:
            span = _balanced_span(cleaned, start)
            if span is not None:
                yield span


def extract_json(
    text: str | None,
    accept: Callable[[Any], bool] | None = None,
) -> JsonExtraction:
    """Parse *text* strictly, then fall back to embedded JSON spans.

    Spans that fail to parse, or that *accept* rejects, are skipped in favour
    of the next one. When nothing is accepted the first parseable value is
    returned. Never raises; ``ok`` is False when nothing parsed at all.
    """
    if not text:
        return JsonExtraction(False)

    first: JsonExtraction | None = None
    for candidate in _candidates(text):
        result = _loads(candidate)
        if not result.ok:
            continue
        if accept is None or accept(result.value):
            return result
        if first is None:
            first = result
    return first or JsonExtraction(False)
