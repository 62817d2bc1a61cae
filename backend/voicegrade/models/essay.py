"""
Essay model: one submission plus its assignment context.

All analysis output (grade prediction, inline comments, end comment) hangs
off the essay id.
"""

import uuid
from enum import Enum

from sqlalchemy import Column, ForeignKey, Integer, String, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship

from voicegrade.core.database import Base
from voicegrade.core.datetime_utils import now_iso


class EssayStatus(str, Enum):
    """Essay lifecycle: submitted -> analyzing -> completed | failed."""

    SUBMITTED = "submitted"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    FAILED = "failed"


class Essay(Base):
    """Submitted essay."""

    __tablename__ = "essays"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id = Column(String(36), ForeignKey("students.id"), nullable=True, index=True)
    school_id = Column(String(36), ForeignKey("schools.id"), nullable=False)
    teacher_id = Column(String(36), ForeignKey("teachers.id"), nullable=False)

    essay_text = Column(Text, nullable=False)
    prompt = Column(Text, nullable=False)
    rubric = Column(Text, nullable=True)
    assignment_type = Column(String(100), nullable=True)
    class_name = Column(String(200), nullable=True)
    word_count = Column(Integer, nullable=True)

    status = Column(
        SQLEnum(EssayStatus, values_callable=lambda x: [m.value for m in x]),
        nullable=False,
        default=EssayStatus.SUBMITTED,
    )
    error_message = Column(Text, nullable=True)

    created_at = Column(String, default=now_iso)
    updated_at = Column(String, default=now_iso, onupdate=now_iso)

    # Relationships
    student = relationship("Student", back_populates="essays")
    teacher = relationship("Teacher")
    school = relationship("School")
    grade_prediction = relationship("GradePrediction", back_populates="essay", uselist=False)
    inline_comments = relationship(
        "InlineComment",
        back_populates="essay",
        order_by="InlineComment.display_order",
    )
    end_comment = relationship("EndComment", back_populates="essay", uselist=False)

    def __repr__(self) -> str:
        return f"<Essay(id={self.id}, status={self.status})>"
