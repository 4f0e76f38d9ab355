# labelscan/sanitize.py
# Turns raw generation output into JSON without ever raising.
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Optional, Tuple, Type, TypeVar, Union

from labelscan.models import Fallback, GenerationResult, Parsed

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ```json ... ``` / ``` ... ``` anywhere in the reply
FENCED_BLOCK = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)
OPEN_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\r?\n?")
JSON_START = re.compile(r"[{\[]")

_decoder = json.JSONDecoder()


def clean_gpt_json_block(text: Optional[str]) -> str:
    """
    Strip ``` wrappers (with or without a language tag) and any preamble before
    the first '{' or '[' so the JSON decoder doesn't choke.
    """
    t = (text or "").strip()
    m = FENCED_BLOCK.search(t)
    if m:
        t = m.group(1).strip()
    elif t.startswith("```"):
        # unterminated fence
        t = OPEN_FENCE.sub("", t).strip()
    starts = [i for i in (t.find("{"), t.find("[")) if i != -1]
    if starts:
        t = t[min(starts):]
    return t.strip()


def parse_json_block(text: Optional[str]) -> Tuple[Any, Optional[str]]:
    """
    Returns (value, None) on success or (None, reason) on failure.
    Trailing prose after the JSON value is ignored. When the preamble itself
    holds brackets ("Result [v2]: {...}"), decoding moves on to the next
    '{' or '[' until one parses.
    """
    cleaned = clean_gpt_json_block(text)
    if not cleaned:
        return None, "empty response"
    starts = [0] + [m.start() for m in JSON_START.finditer(cleaned) if m.start() > 0]
    first_error: Optional[Exception] = None
    for pos in starts:
        try:
            value, _end = _decoder.raw_decode(cleaned, pos)
        except (ValueError, RecursionError) as e:
            first_error = first_error or e
            continue
        return value, None
    return None, f"JSON parse failed: {first_error}"


def _clip(s: Optional[str], n: int = 200) -> str:
    s = (s or "").strip()
    return s if len(s) <= n else s[:n] + "..."


def sanitize(
    raw: Optional[str],
    *,
    normalize: Callable[[Any], T],
    fallback: Callable[[], T],
    expect: Union[Type, Tuple[Type, ...]] = dict,
    label: str = "generation",
) -> GenerationResult[T]:
    """
    Parse `raw` and normalize it, or substitute `fallback()`.

    Never raises for malformed output; the result is tagged so callers can
    tell a parsed value from a substituted one.
    """
    value, reason = parse_json_block(raw)
    if reason is None and not isinstance(value, expect):
        reason = f"unexpected JSON type {type(value).__name__}"
    if reason is not None:
        logger.warning("%s: unusable output (%s); using fallback. raw=%r", label, reason, _clip(raw))
        return Fallback(fallback(), reason=reason, raw=raw or "")
    return Parsed(normalize(value))
