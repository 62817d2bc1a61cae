"""
Core building blocks: configuration, logging, database, errors and security.
"""

from voicegrade.core.config import get_config, get_secrets
from voicegrade.core.database import Base, get_db, init_db
from voicegrade.core.errors import (
    AuthError,
    ForbiddenError,
    MalformedResponseError,
    NotFoundError,
    PersistenceError,
    UpstreamError,
    ValidationError,
    VoiceGradeError,
)
from voicegrade.core.logging import get_logger, setup_logging
from voicegrade.core.security import AuthContext, issue_session_token, read_session_token

__all__ = [
    "get_config",
    "get_secrets",
    "Base",
    "get_db",
    "init_db",
    "AuthError",
    "ForbiddenError",
    "MalformedResponseError",
    "NotFoundError",
    "PersistenceError",
    "UpstreamError",
    "ValidationError",
    "VoiceGradeError",
    "get_logger",
    "setup_logging",
    "AuthContext",
    "issue_session_token",
    "read_session_token",
]
