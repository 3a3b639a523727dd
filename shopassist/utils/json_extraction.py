"""Tolerant JSON object extraction from language-model output."""

import json
import re
from typing import Any, Dict, Optional

_FENCE_START = re.compile(r"^```(?:json)?", re.IGNORECASE)
_FENCE_END = re.compile(r"```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block if present."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_START.sub("", cleaned)
        cleaned = _FENCE_END.sub("", cleaned)
    return cleaned.strip()


def extract_json_block(text: str) -> Optional[str]:
    """Return the span from the first '{' to the last '}', or None."""
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start : end + 1]


def parse_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON object out of model output.

    Tries a direct parse first, then the first brace-delimited block.

    Args:
        text: Raw model output

    Returns:
        Parsed dict, or None when no JSON object can be recovered
    """
    if not text or not text.strip():
        return None

    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    block = extract_json_block(cleaned)
    if not block:
        return None
    try:
        parsed = json.loads(block)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None
