"""
Student model, linked to an identity from the auth provider.
"""

import uuid

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from voicegrade.core.database import Base
from voicegrade.core.datetime_utils import now_iso


class Student(Base):
    """Student account. Created the first time an authenticated user is seen."""

    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    auth_user_id = Column(String(128), nullable=False, unique=True, index=True)
    email = Column(String(200), nullable=True)
    display_name = Column(String(200), nullable=True)
    created_at = Column(String, default=now_iso)

    essays = relationship("Essay", back_populates="student")

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, auth_user_id={self.auth_user_id})>"
