"""
Schemas for the results view and the student dashboard.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from voicegrade.models import CommentCategory, CommentSeverity, Confidence


class GradePredictionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    letter_grade: str
    numeric_grade: float
    confidence: Confidence
    reasoning: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)


class InlineCommentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    excerpt: str
    comment_text: str
    category: CommentCategory
    severity: CommentSeverity
    start_index: int
    end_index: int
    display_order: int


class EndCommentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    comment_text: str
    next_steps: List[str] = Field(default_factory=list)


class EssayListItem(BaseModel):
    """Dashboard row."""

    id: str
    prompt: str
    class_name: Optional[str] = None
    status: str
    word_count: Optional[int] = None
    teacher_name: Optional[str] = None
    school_name: Optional[str] = None
    letter_grade: Optional[str] = None
    created_at: str


class EssayListResponse(BaseModel):
    total: int
    items: List[EssayListItem]


class EssayDetail(BaseModel):
    """Everything the results view renders for one essay."""

    id: str
    status: str
    essay_text: str
    prompt: str
    rubric: Optional[str] = None
    class_name: Optional[str] = None
    word_count: Optional[int] = None
    teacher_name: Optional[str] = None
    school_name: Optional[str] = None
    created_at: str
    grade_prediction: Optional[GradePredictionRecord] = None
    inline_comments: List[InlineCommentRecord] = Field(default_factory=list)
    end_comment: Optional[EndCommentRecord] = None
