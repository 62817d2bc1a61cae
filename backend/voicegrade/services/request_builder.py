"""
Assemble the model request for one essay analysis.

The instructions name the exact output schema and enumerate the closed value
sets for confidence, category and severity, since the model is not otherwise
constrained.
"""

from dataclasses import dataclass
from typing import Any, Optional

from voicegrade.core.errors import ValidationError
from voicegrade.schemas.analysis import (
    COMMENT_CATEGORIES,
    COMMENT_SEVERITIES,
    CONFIDENCE_LEVELS,
    AnalyzeRequest,
)
from voicegrade.services.analysis_prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    ANALYSIS_USER_PROMPT,
    CLASS_SECTION,
    RUBRIC_SECTION,
)

MIN_INLINE_COMMENTS = 8
MAX_INLINE_COMMENTS = 12


@dataclass(frozen=True)
class ModelRequest:
    """System instruction plus user message for a single model call."""

    system_prompt: str
    user_prompt: str


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def require_analysis_fields(request: AnalyzeRequest) -> None:
    """
    Reject a request without essay text or assignment prompt.

    Raises:
        ValidationError: If either is missing or whitespace only.
    """
    missing = [
        name
        for name, value in (("essay_text", request.essay_text), ("prompt", request.prompt))
        if _blank(value)
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def build_system_prompt(teacher: Any, school: Any, profile_fragment: str) -> str:
    """Describe the teacher to imitate, including the compiled profile fragment."""
    subjects = [s for s in (getattr(teacher, "subjects", None) or []) if s]
    return ANALYSIS_SYSTEM_PROMPT.format(
        teacher_name=getattr(teacher, "name", None) or "Unknown teacher",
        school_name=getattr(school, "name", None) or "Unknown school",
        department=getattr(teacher, "department", None) or "English",
        subjects=", ".join(subjects) or "General",
        grading_style=getattr(teacher, "grading_style", None) or "Standard academic grading",
        profile_fragment=profile_fragment,
    )


def build_user_prompt(request: AnalyzeRequest) -> str:
    """Assignment context, essay body and the required output schema."""
    rubric_section = "" if _blank(request.rubric) else RUBRIC_SECTION.format(rubric=request.rubric.strip())
    class_section = (
        "" if _blank(request.class_name) else CLASS_SECTION.format(class_name=request.class_name.strip())
    )
    return ANALYSIS_USER_PROMPT.format(
        prompt=request.prompt.strip(),
        rubric_section=rubric_section,
        class_section=class_section,
        essay_text=request.essay_text.strip(),
        confidence_values=", ".join(CONFIDENCE_LEVELS),
        category_values=", ".join(COMMENT_CATEGORIES),
        severity_values=", ".join(COMMENT_SEVERITIES),
        category_pattern="|".join(COMMENT_CATEGORIES),
        severity_pattern="|".join(COMMENT_SEVERITIES),
        min_comments=MIN_INLINE_COMMENTS,
        max_comments=MAX_INLINE_COMMENTS,
    )


def build_analysis_request(
    request: AnalyzeRequest,
    teacher: Any,
    school: Any,
    profile_fragment: str,
) -> ModelRequest:
    """
    Build the model request for one essay.

    Args:
        request: Validated inbound request.
        teacher: Teacher row (name, department, subjects, grading_style).
        school: School row (name).
        profile_fragment: Output of compile_profile for this teacher.

    Raises:
        ValidationError: If essay text or assignment prompt is missing.
    """
    require_analysis_fields(request)
    return ModelRequest(
        system_prompt=build_system_prompt(teacher, school, profile_fragment),
        user_prompt=build_user_prompt(request),
    )
