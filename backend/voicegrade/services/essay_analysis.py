"""
Essay analysis pipeline.

One request per essay: validate input, look up teacher and school, record the
essay as analyzing, call the model once, validate the reply and store the
results. Nothing is retried; a failure after the essay row exists marks the
essay failed.
"""

import time
from typing import Optional

from sqlalchemy.orm import Session

from voicegrade.core.errors import (
    MalformedResponseError,
    NotFoundError,
    UpstreamError,
    ValidationError,
    VoiceGradeError,
)
from voicegrade.core.logging import get_logger
from voicegrade.core.security import AuthContext
from voicegrade.schemas.analysis import AnalysisResult, AnalyzeRequest, AnalyzeResponse
from voicegrade.services.ai_providers import LLMProvider, get_llm_provider
from voicegrade.services.essay_store import EssayStore
from voicegrade.services.profile_compiler import compile_profile
from voicegrade.services.request_builder import (
    ModelRequest,
    build_analysis_request,
    require_analysis_fields,
)
from voicegrade.services.response_validator import parse_analysis_response

logger = get_logger()


class EssayAnalysisService:
    """
    Runs the analysis pipeline for one essay submission.

    The LLM provider is resolved from the ai-config settings unless one is
    passed in explicitly.
    """

    def __init__(self, db: Session, llm: Optional[LLMProvider] = None):
        self.db = db
        self.store = EssayStore(db)
        self._llm = llm

    async def analyze(self, auth: AuthContext, request: AnalyzeRequest) -> AnalyzeResponse:
        """
        Analyze one essay on behalf of the authenticated caller.

        Raises:
            ValidationError: Missing essay text, prompt, school or teacher.
            NotFoundError: Unknown teacher or school.
            UpstreamError: The model call failed or returned no text.
            MalformedResponseError: The reply did not decode or validate.
            PersistenceError: A database write failed.
        """
        if not (request.school_id and request.teacher_id):
            raise ValidationError("Missing required fields: school_id, teacher_id")
        require_analysis_fields(request)

        teacher = self.store.get_teacher(request.teacher_id)
        school = self.store.get_school(request.school_id)
        if not teacher or not school:
            raise NotFoundError("Teacher or school not found")
        profile = self.store.get_profile(teacher.id)

        model_request = build_analysis_request(request, teacher, school, compile_profile(profile))

        student = self.store.get_or_create_student(auth)
        essay = self.store.create_analyzing_essay(request, student.id)
        logger.info(
            "Essay %s analyzing: teacher=%s, school=%s, words=%s",
            essay.id,
            teacher.id,
            school.id,
            essay.word_count,
        )

        try:
            result = await self._run_model(essay.id, model_request)
            self.store.save_results(essay, result)
        except MalformedResponseError as e:
            logger.error("Essay %s: %s. Raw reply:\n%s", essay.id, e.message, e.raw_reply)
            self.store.mark_failed(essay, e.message)
            raise
        except VoiceGradeError as e:
            logger.error("Essay %s failed: %s", essay.id, e.message)
            self.store.mark_failed(essay, e.message)
            raise
        except Exception as e:
            logger.exception("Essay %s failed unexpectedly", essay.id)
            self.store.mark_failed(essay, f"Unexpected error: {e}")
            raise

        logger.info(
            "Essay %s completed: grade=%s, comments=%d",
            essay.id,
            result.grade_prediction.letter_grade,
            len(result.inline_comments),
        )
        return AnalyzeResponse(
            essay_id=essay.id,
            result=result,
            teacher_name=teacher.name,
            school_name=school.name,
        )

    async def _run_model(self, essay_id: str, model_request: ModelRequest) -> AnalysisResult:
        raw = await self._call_model(essay_id, model_request)
        return parse_analysis_response(raw)

    async def _call_model(self, essay_id: str, model_request: ModelRequest) -> str:
        """Single model call; every provider failure becomes an UpstreamError."""
        started = time.monotonic()
        try:
            llm = self._llm or get_llm_provider(self.db)
            logger.debug(
                "Essay %s: calling model, system_prompt_length=%d, prompt_length=%d",
                essay_id,
                len(model_request.system_prompt),
                len(model_request.user_prompt),
            )
            text = await llm.complete(
                model_request.user_prompt,
                system_prompt=model_request.system_prompt,
            )
        except ValueError as e:
            raise UpstreamError(f"Model not configured: {e}") from e
        except Exception as e:
            raise UpstreamError(f"Model call failed: {e}") from e

        logger.info("Essay %s: model replied in %.1fs", essay_id, time.monotonic() - started)
        if not isinstance(text, str) or not text.strip():
            raise UpstreamError("Model returned no text content")
        return text


def get_essay_analysis_service(db: Session) -> EssayAnalysisService:
    """Get an essay analysis service bound to the request's session."""
    return EssayAnalysisService(db)
