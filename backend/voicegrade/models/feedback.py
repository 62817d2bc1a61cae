"""
Analysis output rows. Written once when an analysis completes, never updated.
"""

import uuid
from enum import Enum

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship

from voicegrade.core.database import Base
from voicegrade.core.datetime_utils import now_iso


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CommentCategory(str, Enum):
    THESIS = "thesis"
    EVIDENCE = "evidence"
    ANALYSIS = "analysis"
    STRUCTURE = "structure"
    STYLE = "style"
    MECHANICS = "mechanics"
    STRENGTH = "strength"


class CommentSeverity(str, Enum):
    PRAISE = "praise"
    SUGGESTION = "suggestion"
    CONCERN = "concern"


def _enum_column(enum_cls):
    return SQLEnum(enum_cls, values_callable=lambda x: [m.value for m in x])


class GradePrediction(Base):
    """Predicted grade for one essay."""

    __tablename__ = "grade_predictions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    essay_id = Column(String(36), ForeignKey("essays.id"), nullable=False, unique=True)
    teacher_id = Column(String(36), ForeignKey("teachers.id"), nullable=False)

    letter_grade = Column(String(8), nullable=False)
    numeric_grade = Column(Float, nullable=False)
    confidence = Column(_enum_column(Confidence), nullable=False)
    reasoning = Column(JSON, nullable=False, default=list)
    strengths = Column(JSON, nullable=False, default=list)
    weaknesses = Column(JSON, nullable=False, default=list)
    created_at = Column(String, default=now_iso)

    essay = relationship("Essay", back_populates="grade_prediction")


class InlineComment(Base):
    """Feedback anchored to a quoted excerpt of the essay."""

    __tablename__ = "inline_comments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    essay_id = Column(String(36), ForeignKey("essays.id"), nullable=False, index=True)
    teacher_id = Column(String(36), ForeignKey("teachers.id"), nullable=False)

    start_index = Column(Integer, nullable=False, default=0)
    end_index = Column(Integer, nullable=False, default=0)
    excerpt = Column(Text, nullable=False)
    comment_text = Column(Text, nullable=False)
    category = Column(_enum_column(CommentCategory), nullable=False)
    severity = Column(_enum_column(CommentSeverity), nullable=False)
    display_order = Column(Integer, nullable=False, default=0)
    created_at = Column(String, default=now_iso)

    essay = relationship("Essay", back_populates="inline_comments")


class EndComment(Base):
    """Holistic summary and next steps for one essay."""

    __tablename__ = "end_comments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    essay_id = Column(String(36), ForeignKey("essays.id"), nullable=False, unique=True)
    comment_text = Column(Text, nullable=False)
    next_steps = Column(JSON, nullable=False, default=list)
    created_at = Column(String, default=now_iso)

    essay = relationship("Essay", back_populates="end_comment")
