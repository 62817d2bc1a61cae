"""
Compile a teacher's grading profile into a system prompt fragment.

The compiler is a pure function of the profile: it never raises and never
returns an empty string. Missing fields degrade to fixed defaults
("professional", "none recorded yet", "unknown").
"""

import math
from typing import Any, Iterable, List, Optional

from voicegrade.models import TeacherProfile
from voicegrade.services.analysis_prompts import PROFILE_FALLBACK, PROFILE_FRAGMENT

MAX_FRAGMENT_LENGTH = 2000
MAX_TONE_KEYWORDS = 8
MAX_COMMON_PHRASES = 10

DEFAULT_TONE = "professional"
DEFAULT_PHRASES = "none recorded yet"
UNKNOWN = "unknown"

# (attribute, label) in the order the dimensions are listed
WEIGHT_DIMENSIONS = [
    ("thesis_weight", "Thesis"),
    ("evidence_weight", "Evidence"),
    ("analysis_weight", "Analysis"),
    ("mechanics_weight", "Mechanics"),
    ("style_weight", "Style"),
]


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _format_score(value: Any) -> str:
    number = _as_number(value)
    return f"{number:.2f}" if number is not None else UNKNOWN


def _emphasis(weight: float) -> str:
    if weight >= 0.7:
        return "heavy"
    if weight >= 0.4:
        return "moderate"
    return "light"


def _describe_weights(profile: TeacherProfile) -> str:
    parts = []
    for attr, label in WEIGHT_DIMENSIONS:
        weight = _as_number(getattr(profile, attr, None))
        if weight is None:
            parts.append(f"{label} {UNKNOWN}")
        else:
            parts.append(f"{label} {weight:.2f} ({_emphasis(weight)} emphasis)")
    return ", ".join(parts)


def _clean_list(values: Any, limit: int) -> List[str]:
    if not isinstance(values, (list, tuple)):
        return []
    cleaned = [str(v).strip() for v in values if v is not None and str(v).strip()]
    return cleaned[:limit]


def _join_or_default(values: Iterable[str], sep: str, default: str) -> str:
    joined = sep.join(values)
    return joined or default


def _format_grade(value: Any) -> str:
    number = _as_number(value)
    if number is not None:
        return f"{number:.1f}"
    if isinstance(value, str) and value.strip():
        return value.strip()
    return UNKNOWN


def _describe_maturity(profile: TeacherProfile) -> str:
    count = _as_number(getattr(profile, "training_essay_count", None))
    confidence = _as_number(getattr(profile, "confidence_score", None))
    if not count:
        maturity = "no graded essays analyzed yet"
    else:
        maturity = f"based on {int(count)} graded essays"
    if confidence is not None:
        maturity += f" (confidence {confidence:.2f})"
    return maturity


def compile_profile(profile: Optional[TeacherProfile]) -> str:
    """
    Describe a teacher's grading profile in natural language.

    Args:
        profile: The teacher's profile row, or None when no profile exists.

    Returns:
        A non-empty fragment of at most MAX_FRAGMENT_LENGTH characters.
    """
    if profile is None:
        return PROFILE_FALLBACK

    fragment = PROFILE_FRAGMENT.format(
        strictness=_format_score(getattr(profile, "strictness_score", None)),
        weights=_describe_weights(profile),
        tone=_join_or_default(
            _clean_list(getattr(profile, "tone_keywords", None), MAX_TONE_KEYWORDS),
            ", ",
            DEFAULT_TONE,
        ),
        phrases=_join_or_default(
            _clean_list(getattr(profile, "common_phrases", None), MAX_COMMON_PHRASES),
            "; ",
            DEFAULT_PHRASES,
        ),
        avg_grade=_format_grade(getattr(profile, "avg_grade", None)),
        most_common_grade=_format_grade(getattr(profile, "most_common_grade", None)),
        maturity=_describe_maturity(profile),
    )
    if len(fragment) > MAX_FRAGMENT_LENGTH:
        fragment = fragment[: MAX_FRAGMENT_LENGTH - 3] + "..."
    return fragment
