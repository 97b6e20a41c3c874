"""
JSON parsing for model responses.

The text model is asked for JSON, but responses occasionally arrive wrapped in
markdown fences or with chatter around the object. Parsing here is strict
about the result (an object, or an error) and lenient about the wrapping.
"""

import json
from typing import Any, Dict, List, Optional


class JsonParseError(ValueError):
    """Raised when no JSON object can be recovered from a response."""


def strip_markdown_fences(text: str) -> str:
    """Drop ```json ... ``` fence lines, keeping the content between them."""
    normalized = text.strip()
    if not normalized.startswith("```"):
        return normalized
    lines = [line for line in normalized.split("\n") if not line.strip().startswith("```")]
    return "\n".join(lines).strip()


def extract_largest_balanced_json(text: str) -> Optional[str]:
    """Largest balanced ``{...}`` substring, respecting string literals and escapes."""
    if not text:
        return None

    in_string = False
    escape = False
    depth = 0
    start_idx: Optional[int] = None
    best: Optional[str] = None

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == "\"":
                in_string = False
            continue

        if ch == "\"":
            in_string = True
        elif ch == "{":
            if depth == 0:
                start_idx = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth == 0 and start_idx is not None:
                candidate = text[start_idx:i + 1]
                if best is None or len(candidate) > len(best):
                    best = candidate
                start_idx = None

    return best


def parse_json_object(text: Optional[str]) -> Dict[str, Any]:
    """
    Parse a JSON object from a model response.

    Tries the fence-stripped text first, then the largest balanced object
    found inside it. Raises ``JsonParseError`` if neither yields a dict.
    """
    if not text or not text.strip():
        raise JsonParseError("Empty response")

    cleaned = strip_markdown_fences(text)
    candidates: List[str] = [cleaned]
    embedded = extract_largest_balanced_json(cleaned)
    if embedded and embedded != cleaned:
        candidates.append(embedded)

    last_error: Optional[Exception] = None
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as exc:
            last_error = exc
            continue
        if isinstance(parsed, dict):
            return parsed
        last_error = JsonParseError(f"Expected a JSON object, got {type(parsed).__name__}")

    raise JsonParseError(f"Could not parse JSON object: {last_error}")
