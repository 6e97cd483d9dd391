"""Recover an AnalysisResult from the model's reply text.

The reply is supposed to be a bare JSON object, but models wrap it in code
fences or surround it with chatter often enough that each of those cases is
peeled off in turn before parsing:

    strip_code_fence -> extract_json_object -> load_json_object
        -> validate_structure -> normalize_tokens
"""

import json
import logging
import re
from typing import Any

from design_api.errors import MissingFieldsError, ResponseParseError
from design_api.models.response import AnalysisResult
from design_api.tokens import normalize_tokens

logger = logging.getLogger(__name__)

_LEADING_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*")
_TRAILING_FENCE = "```"
_OBJECT_SPAN_RE = re.compile(r"\{.*\}", re.DOTALL)

# How much of an unparseable reply to keep in the log line
_LOG_EXCERPT = 500


def strip_code_fence(text: str) -> str:
    """Drop a leading ``` / ```json fence and a trailing ``` fence, then trim."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE_RE.sub("", cleaned, count=1)
    if cleaned.endswith(_TRAILING_FENCE):
        cleaned = cleaned[: -len(_TRAILING_FENCE)]
    return cleaned.strip()


def extract_json_object(text: str) -> str:
    """Return the span from the first ``{`` to the last ``}`` unless text already is one."""
    if text.startswith("{") and text.endswith("}"):
        return text
    match = _OBJECT_SPAN_RE.search(text)
    return match.group(0) if match else text


def load_json_object(text: str) -> dict[str, Any]:
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ResponseParseError() from e
    if not isinstance(parsed, dict):
        raise ResponseParseError()
    return parsed


def validate_structure(parsed: dict[str, Any]) -> tuple[dict[str, Any], str]:
    tokens = parsed.get("tokens")
    prompt = parsed.get("prompt")
    if not isinstance(tokens, dict) or not isinstance(prompt, str) or not prompt:
        raise MissingFieldsError()
    return tokens, prompt


def parse_analysis(content: str) -> AnalysisResult:
    """Turn raw completion text into a normalized AnalysisResult."""
    candidate = extract_json_object(strip_code_fence(content))
    try:
        parsed = load_json_object(candidate)
    except ResponseParseError:
        logger.error("Failed to parse AI response: %s", content[:_LOG_EXCERPT])
        raise
    try:
        tokens, prompt = validate_structure(parsed)
    except MissingFieldsError:
        logger.error("AI response missing required fields; got keys %s", sorted(parsed))
        raise
    return AnalysisResult(tokens=normalize_tokens(tokens), prompt=prompt)
