"""
Error taxonomy for the essay analysis service.

Every error carries the HTTP status it maps to; the API layer renders all of
them as {"error": message}. None of them is retried internally.
"""

from typing import Optional

ANALYSIS_FAILED_MESSAGE = "Failed to analyze essay"


class VoiceGradeError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    # Shown to the caller instead of the internal message when set
    user_message: Optional[str] = None

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if user_message is not None:
            self.user_message = user_message

    @property
    def public_message(self) -> str:
        return self.user_message or self.message


class ValidationError(VoiceGradeError):
    """Required request input is missing or invalid."""

    status_code = 400


class AuthError(VoiceGradeError):
    """Missing, malformed or expired session."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(VoiceGradeError):
    """Caller is authenticated but lacks a required role or third-party grant."""

    status_code = 403


class NotFoundError(VoiceGradeError):
    """A referenced record (teacher, school, essay) does not exist."""

    status_code = 404


class UpstreamError(VoiceGradeError):
    """The external model or document API failed or returned no usable text."""

    status_code = 500
    user_message = ANALYSIS_FAILED_MESSAGE


class MalformedResponseError(VoiceGradeError):
    """The model replied, but the reply did not decode or validate.

    The raw reply is kept for logging only and is never sent to the client.
    """

    status_code = 500
    user_message = ANALYSIS_FAILED_MESSAGE

    def __init__(self, message: str, raw_reply: str = ""):
        super().__init__(message)
        self.raw_reply = raw_reply


class PersistenceError(VoiceGradeError):
    """A data store write failed."""

    status_code = 500
