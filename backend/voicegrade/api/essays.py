"""
Essay read endpoints: the student dashboard and the results view.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from voicegrade.api.deps import get_auth_context
from voicegrade.core.database import get_db
from voicegrade.core.errors import NotFoundError
from voicegrade.core.security import AuthContext
from voicegrade.models import Essay
from voicegrade.schemas import (
    EndCommentRecord,
    EssayDetail,
    EssayListItem,
    EssayListResponse,
    GradePredictionRecord,
    InlineCommentRecord,
)
from voicegrade.services import EssayStore

router = APIRouter(prefix="/essays", tags=["Essays"])


def _list_item(essay: Essay) -> EssayListItem:
    return EssayListItem(
        id=essay.id,
        prompt=essay.prompt,
        class_name=essay.class_name,
        status=essay.status.value,
        word_count=essay.word_count,
        teacher_name=essay.teacher.name if essay.teacher else None,
        school_name=essay.school.name if essay.school else None,
        letter_grade=essay.grade_prediction.letter_grade if essay.grade_prediction else None,
        created_at=essay.created_at,
    )


@router.get("", response_model=EssayListResponse)
async def list_my_essays(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """List the caller's essays, newest first."""
    store = EssayStore(db)
    student = store.get_or_create_student(auth)
    essays = store.list_student_essays(student.id, limit=limit, offset=offset)
    return EssayListResponse(
        total=store.count_student_essays(student.id),
        items=[_list_item(e) for e in essays],
    )


@router.get("/{essay_id}", response_model=EssayDetail)
async def get_essay_results(
    essay_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """Results view for one essay. Comments come back in display order."""
    store = EssayStore(db)
    student = store.get_or_create_student(auth)
    essay = store.get_student_essay(essay_id, student.id)
    if not essay:
        raise NotFoundError("Essay not found")

    return EssayDetail(
        id=essay.id,
        status=essay.status.value,
        essay_text=essay.essay_text,
        prompt=essay.prompt,
        rubric=essay.rubric,
        class_name=essay.class_name,
        word_count=essay.word_count,
        teacher_name=essay.teacher.name if essay.teacher else None,
        school_name=essay.school.name if essay.school else None,
        created_at=essay.created_at,
        grade_prediction=(
            GradePredictionRecord.model_validate(essay.grade_prediction)
            if essay.grade_prediction
            else None
        ),
        inline_comments=[
            InlineCommentRecord.model_validate(c)
            for c in sorted(essay.inline_comments, key=lambda c: c.display_order)
        ],
        end_comment=(
            EndCommentRecord.model_validate(essay.end_comment) if essay.end_comment else None
        ),
    )
