"""
School model: the institution a teacher belongs to.
"""

import uuid
from enum import Enum

from sqlalchemy import Column, Integer, String, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship

from voicegrade.core.database import Base
from voicegrade.core.datetime_utils import now_iso


class SchoolType(str, Enum):
    """Kind of school."""

    PUBLIC = "public"
    PRIVATE = "private"
    CHARTER = "charter"
    INTERNATIONAL = "international"


class School(Base):
    """School record. Listed by name in the submission wizard."""

    __tablename__ = "schools"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=True)
    type = Column(
        SQLEnum(SchoolType, values_callable=lambda x: [m.value for m in x]),
        nullable=False,
        default=SchoolType.PUBLIC,
    )
    description = Column(Text, nullable=True)
    teacher_count = Column(Integer, nullable=False, default=0)
    created_at = Column(String, default=now_iso)

    teachers = relationship("Teacher", back_populates="school")

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name={self.name})>"
