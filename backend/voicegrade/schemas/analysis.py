"""
Schemas for essay analysis: the inbound request and the model's structured reply.

The reply models are the validation allow-list for data produced by the
external model. Closed value sets are declared once here and reused verbatim
by the prompt text.
"""

import math
from typing import Any, List, Literal, Optional, get_args

from pydantic import BaseModel, Field, field_validator, model_validator

ConfidenceLevel = Literal["high", "medium", "low"]
CommentCategoryName = Literal[
    "thesis", "evidence", "analysis", "structure", "style", "mechanics", "strength"
]
CommentSeverityName = Literal["praise", "suggestion", "concern"]

CONFIDENCE_LEVELS = get_args(ConfidenceLevel)
COMMENT_CATEGORIES = get_args(CommentCategoryName)
COMMENT_SEVERITIES = get_args(CommentSeverityName)

MIN_NUMERIC_GRADE = 0.0
MAX_NUMERIC_GRADE = 100.0


def _normalize_choice(value: Any) -> Any:
    """Trim and lower-case enumerated values; anything else is left for the type check."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _none_to_empty_list(value: Any) -> Any:
    return [] if value is None else value


class AnalyzeRequest(BaseModel):
    """Request body for POST /analyze.

    Every field is optional at the schema level; missing required fields are
    reported by the pipeline as a 400 with an error message.
    """

    essay_text: Optional[str] = Field(None, description="Full essay text")
    prompt: Optional[str] = Field(None, description="Assignment prompt")
    rubric: Optional[str] = Field(None, description="Optional rubric text")
    class_name: Optional[str] = Field(None, description="Optional class label")
    assignment_type: Optional[str] = Field(None, description="Optional assignment type")
    school_id: Optional[str] = Field(None, description="School id")
    teacher_id: Optional[str] = Field(None, description="Teacher id")


class GradePredictionResult(BaseModel):
    """Predicted grade as returned by the model."""

    letter_grade: str = Field(..., min_length=1, max_length=8)
    numeric_grade: float
    confidence: ConfidenceLevel
    reasoning: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)

    @field_validator("confidence", mode="before")
    @classmethod
    def normalize_confidence(cls, value: Any) -> Any:
        return _normalize_choice(value)

    @field_validator("reasoning", "strengths", "weaknesses", mode="before")
    @classmethod
    def default_lists(cls, value: Any) -> Any:
        return _none_to_empty_list(value)

    @field_validator("letter_grade", mode="before")
    @classmethod
    def strip_letter(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("numeric_grade")
    @classmethod
    def bound_grade(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("numeric_grade must be a finite number")
        return min(max(value, MIN_NUMERIC_GRADE), MAX_NUMERIC_GRADE)


class InlineCommentResult(BaseModel):
    """One inline comment as returned by the model.

    start_index/end_index are advisory highlighting hints; anything missing or
    unusable becomes 0.
    """

    excerpt: str = ""
    comment: str = ""
    category: CommentCategoryName
    severity: CommentSeverityName
    start_index: int = 0
    end_index: int = 0

    @field_validator("category", "severity", mode="before")
    @classmethod
    def normalize_enums(cls, value: Any) -> Any:
        return _normalize_choice(value)

    @field_validator("excerpt", "comment", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("start_index", "end_index", mode="before")
    @classmethod
    def coerce_index(cls, value: Any) -> int:
        if value is None or isinstance(value, bool):
            return 0
        try:
            index = int(value)
        except (TypeError, ValueError, OverflowError):
            return 0
        return max(index, 0)

    @model_validator(mode="after")
    def require_text(self) -> "InlineCommentResult":
        if not self.excerpt.strip() and not self.comment.strip():
            raise ValueError("inline comment has neither excerpt nor comment")
        return self


class AnalysisResult(BaseModel):
    """Validated analysis of one essay."""

    grade_prediction: GradePredictionResult
    inline_comments: List[InlineCommentResult] = Field(default_factory=list)
    end_comment: str
    next_steps: List[str] = Field(default_factory=list)

    @field_validator("inline_comments", "next_steps", mode="before")
    @classmethod
    def default_lists(cls, value: Any) -> Any:
        return _none_to_empty_list(value)


class AnalyzeResponse(BaseModel):
    """Response body for POST /analyze."""

    essay_id: str
    result: AnalysisResult
    teacher_name: str
    school_name: str
