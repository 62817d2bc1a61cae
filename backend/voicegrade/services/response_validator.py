"""
Turn the model's free-text reply into a validated AnalysisResult.

The reply is decoded into plain Python values first and then validated
against the AnalysisResult schema; the external shape is never trusted
directly. Any failure is a MalformedResponseError carrying the raw reply for
the log.
"""

import json
import re

from pydantic import ValidationError as SchemaValidationError

from voicegrade.core.errors import MalformedResponseError
from voicegrade.schemas.analysis import AnalysisResult

# Opening fence with optional language tag, and closing fence
_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(raw: str) -> str:
    """
    Remove surrounding whitespace and a wrapping Markdown code fence, if any.

    The model is told not to add fences; this is a recovery path only.
    """
    text = (raw or "").strip()
    if text.startswith("```"):
        text = _LEADING_FENCE.sub("", text, count=1)
        text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def _describe_errors(error: SchemaValidationError) -> str:
    parts = []
    for item in error.errors()[:5]:
        location = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{location}: {item.get('msg')}")
    return "; ".join(parts)


def parse_analysis_response(raw: str) -> AnalysisResult:
    """
    Decode and validate the model reply.

    Args:
        raw: Reply text exactly as received from the model.

    Returns:
        Normalized AnalysisResult ready for persistence.

    Raises:
        MalformedResponseError: If the reply is not a JSON object or violates the schema.
    """
    text = strip_code_fences(raw)
    if not text:
        raise MalformedResponseError("Model reply was empty", raw_reply=raw or "")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Model reply is not valid JSON: {e}", raw_reply=raw) from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Model reply must be a JSON object, got {type(data).__name__}", raw_reply=raw
        )

    try:
        return AnalysisResult.model_validate(data)
    except SchemaValidationError as e:
        raise MalformedResponseError(
            f"Model reply failed validation: {_describe_errors(e)}", raw_reply=raw
        ) from e
