"""
Teacher and TeacherProfile models.

TeacherProfile is the aggregated description of one teacher's historical
grading behaviour. It is produced by an offline ingestion job and is read-only
to the analysis pipeline.
"""

import uuid

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text, JSON
from sqlalchemy.orm import relationship

from voicegrade.core.database import Base
from voicegrade.core.datetime_utils import now_iso


class Teacher(Base):
    """
    Teacher whose grading voice the feedback imitates.
    """

    __tablename__ = "teachers"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    school_id = Column(String(36), ForeignKey("schools.id"), nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    subjects = Column(JSON, nullable=False, default=list)
    grading_style = Column(Text, nullable=True)
    essays_graded = Column(Integer, nullable=False, default=0)
    avatar_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(String, default=now_iso)

    # Relationships
    school = relationship("School", back_populates="teachers")
    profile = relationship("TeacherProfile", back_populates="teacher", uselist=False)

    def __repr__(self) -> str:
        return f"<Teacher(id={self.id}, name={self.name})>"


class TeacherProfile(Base):
    """
    Statistical grading profile of one teacher.

    Weights are nominally in [0, 1] and are not required to sum to 1.
    Any column may be null for a young profile.
    """

    __tablename__ = "teacher_profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    teacher_id = Column(String(36), ForeignKey("teachers.id"), nullable=False, unique=True)

    strictness_score = Column(Float, nullable=True)
    thesis_weight = Column(Float, nullable=True)
    evidence_weight = Column(Float, nullable=True)
    analysis_weight = Column(Float, nullable=True)
    mechanics_weight = Column(Float, nullable=True)
    style_weight = Column(Float, nullable=True)

    tone_keywords = Column(JSON, nullable=True)
    common_phrases = Column(JSON, nullable=True)
    feedback_length_avg = Column(Float, nullable=True)

    avg_grade = Column(Float, nullable=True)
    grade_std_dev = Column(Float, nullable=True)
    most_common_grade = Column(String(8), nullable=True)

    training_essay_count = Column(Integer, nullable=True, default=0)
    model_version = Column(String(32), nullable=True)
    confidence_score = Column(Float, nullable=True)

    updated_at = Column(String, default=now_iso, onupdate=now_iso)

    teacher = relationship("Teacher", back_populates="profile")

    def __repr__(self) -> str:
        return f"<TeacherProfile(teacher_id={self.teacher_id}, essays={self.training_essay_count})>"
