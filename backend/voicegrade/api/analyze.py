"""
Essay analysis endpoint.
"""

import json

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from voicegrade.api.deps import get_auth_context
from voicegrade.core.database import get_db
from voicegrade.core.security import AuthContext
from voicegrade.schemas import AnalyzeRequest, AnalyzeResponse
from voicegrade.services import get_essay_analysis_service

router = APIRouter(tags=["Analysis"])


async def get_analyze_request(
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> AnalyzeRequest:
    """
    Decode the request body only after the session has been checked, so an
    unauthenticated caller gets 401 even when the body is malformed.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
        ) from e
    try:
        return AnalyzeRequest.model_validate(body)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors()) from e


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": AnalyzeRequest.model_json_schema()}},
            "required": True,
        }
    },
)
async def analyze_essay(
    auth: AuthContext = Depends(get_auth_context),
    request: AnalyzeRequest = Depends(get_analyze_request),
    db: Session = Depends(get_db),
):
    """
    Analyze a student essay in the selected teacher's voice.

    Creates an essay record, calls the model once and stores the grade
    prediction, inline comments and end comment. Takes as long as the model
    call takes (typically ~30s).
    """
    service = get_essay_analysis_service(db)
    return await service.analyze(auth, request)
