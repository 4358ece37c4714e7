"""Parse-then-validate helpers for untrusted language-model text.

Model responses are treated as plain text that may or may not contain the JSON
we asked for. Every helper here returns a :class:`ParsedOutput` instead of
raising, so callers can tell three outcomes apart:

* ``ok`` and a value (the model gave us something usable),
* ``ok`` and ``None`` (the model answered, but with nothing we can accept),
* not ``ok`` (the text could not be parsed at all; ``error`` says why).
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from localbiz_scout.models import is_http_url

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedOutput:
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def strip_code_fence(text: Optional[str]) -> str:
    text = str(text or "").strip()
    match = _FENCE_RE.search(text)
    if match and match.group(1):
        return match.group(1).strip()
    return text


def parse_model_json(text: Optional[str]) -> ParsedOutput:
    cleaned = strip_code_fence(text)
    if not cleaned:
        return ParsedOutput(error="empty response")
    try:
        return ParsedOutput(value=json.loads(cleaned))
    except ValueError as exc:
        return ParsedOutput(error=f"invalid JSON: {exc}")


def extract_website(text: Optional[str]) -> ParsedOutput:
    """Pull an http(s) website out of a ``{"website": ...}`` reply."""
    parsed = parse_model_json(text)
    if not parsed.ok:
        return parsed
    payload = parsed.value
    if payload is None:
        return ParsedOutput(value=None)
    if not isinstance(payload, dict):
        return ParsedOutput(error=f"expected a JSON object, got {type(payload).__name__}")
    website = payload.get("website")
    if not is_http_url(website):
        return ParsedOutput(value=None)
    return ParsedOutput(value=website.strip())


def extract_social_links(text: Optional[str]) -> ParsedOutput:
    parsed = parse_model_json(text)
    if not parsed.ok:
        return parsed
    if not isinstance(parsed.value, list):
        return ParsedOutput(error=f"expected a JSON array, got {type(parsed.value).__name__}")

    links: List[str] = []
    for item in parsed.value:
        if not is_http_url(item):
            continue
        item = item.strip()
        if item not in links:
            links.append(item)
    return ParsedOutput(value=links)
