"""
School and teacher directory routes used by the submission wizard.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from voicegrade.api.deps import get_auth_context
from voicegrade.core.database import get_db
from voicegrade.core.errors import NotFoundError, PersistenceError
from voicegrade.core.logging import get_logger
from voicegrade.core.security import AuthContext
from voicegrade.models import School, Teacher
from voicegrade.schemas import SchoolCreate, SchoolResponse, TeacherCreate, TeacherResponse

logger = get_logger()

router = APIRouter(tags=["Directory"])


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error while %s: %s", action, e)
        raise PersistenceError(f"Failed to {action}") from e


@router.get("/schools", response_model=List[SchoolResponse])
async def list_schools(db: Session = Depends(get_db)):
    """All schools ordered by name."""
    return db.query(School).order_by(School.name).all()


@router.post("/schools", response_model=SchoolResponse, status_code=201)
async def create_school(
    request: SchoolCreate,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """Add a school (contribute flow)."""
    school = School(
        name=request.name,
        location=(request.location or "").strip() or None,
        type=request.type,
        description=request.description,
    )
    db.add(school)
    _commit(db, "create school")
    db.refresh(school)
    logger.info("School %s created by %s", school.id, auth.user_id)
    return school


@router.get("/schools/{school_id}/teachers", response_model=List[TeacherResponse])
async def list_school_teachers(school_id: str, db: Session = Depends(get_db)):
    """Active teachers of a school ordered by name."""
    if not db.query(School).filter(School.id == school_id).first():
        raise NotFoundError("School not found")
    return (
        db.query(Teacher)
        .filter(Teacher.school_id == school_id, Teacher.is_active.is_(True))
        .order_by(Teacher.name)
        .all()
    )


@router.post("/teachers", response_model=TeacherResponse, status_code=201)
async def create_teacher(
    request: TeacherCreate,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """Add a teacher to an existing school and bump the school's teacher count."""
    school = db.query(School).filter(School.id == request.school_id).first()
    if not school:
        raise NotFoundError("School not found")

    teacher = Teacher(
        school_id=school.id,
        name=request.name,
        email=request.email,
        department=request.department or None,
        subjects=[s.strip() for s in request.subjects if s and s.strip()],
        grading_style=(request.grading_style or "").strip() or None,
    )
    db.add(teacher)
    school.teacher_count = (school.teacher_count or 0) + 1
    _commit(db, "create teacher")
    db.refresh(teacher)
    logger.info("Teacher %s created in school %s by %s", teacher.id, school.id, auth.user_id)
    return teacher
