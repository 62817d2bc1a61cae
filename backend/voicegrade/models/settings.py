"""
Settings model for storing application configuration rows.
"""

from sqlalchemy import Column, Integer, String, JSON

from voicegrade.core.database import Base
from voicegrade.core.datetime_utils import now_iso


class Settings(Base):
    """
    Typed JSON configuration row, e.g. type="ai-config" for the LLM provider.
    """

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(50), nullable=False, unique=True)
    config = Column(JSON, nullable=False)
    created_at = Column(String, default=now_iso)
    updated_at = Column(String, default=now_iso, onupdate=now_iso)

    def __repr__(self) -> str:
        return f"<Settings(id={self.id}, type={self.type})>"
