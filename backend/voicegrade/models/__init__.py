"""
Models package initialization.
"""

from voicegrade.models.school import School, SchoolType
from voicegrade.models.teacher import Teacher, TeacherProfile
from voicegrade.models.student import Student
from voicegrade.models.essay import Essay, EssayStatus
from voicegrade.models.feedback import (
    CommentCategory,
    CommentSeverity,
    Confidence,
    EndComment,
    GradePrediction,
    InlineComment,
)
from voicegrade.models.settings import Settings

__all__ = [
    "School",
    "SchoolType",
    "Teacher",
    "TeacherProfile",
    "Student",
    "Essay",
    "EssayStatus",
    "CommentCategory",
    "CommentSeverity",
    "Confidence",
    "EndComment",
    "GradePrediction",
    "InlineComment",
    "Settings",
]
