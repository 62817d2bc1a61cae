"""
Persistence adapter for essays and their analysis results.

The analysis pipeline needs four writes: record the essay as analyzing, add
inline comments, add the grade prediction and end comment, and move the essay
to completed or failed. The result rows and the completed status are committed
together; the initial essay row is committed on its own so that a failure
later on can still be recorded against it.
"""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from voicegrade.core.datetime_utils import is_older_than
from voicegrade.core.errors import PersistenceError
from voicegrade.core.logging import get_logger
from voicegrade.core.security import AuthContext
from voicegrade.models import (
    EndComment,
    Essay,
    EssayStatus,
    GradePrediction,
    InlineComment,
    School,
    Student,
    Teacher,
    TeacherProfile,
)
from voicegrade.schemas.analysis import AnalysisResult, AnalyzeRequest

logger = get_logger()

MAX_ERROR_MESSAGE_LENGTH = 500


def count_words(text: str) -> int:
    """Whitespace-separated word count."""
    return len((text or "").split())


class EssayStore:
    """SQLAlchemy-backed storage for the analysis pipeline and the results view."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Database write failed while %s: %s", action, e)
            raise PersistenceError(f"Failed to {action}") from e

    # Lookups

    def get_teacher(self, teacher_id: str) -> Optional[Teacher]:
        return self.db.query(Teacher).filter(Teacher.id == teacher_id).first()

    def get_school(self, school_id: str) -> Optional[School]:
        return self.db.query(School).filter(School.id == school_id).first()

    def get_profile(self, teacher_id: str) -> Optional[TeacherProfile]:
        return (
            self.db.query(TeacherProfile)
            .filter(TeacherProfile.teacher_id == teacher_id)
            .first()
        )

    def get_or_create_student(self, auth: AuthContext) -> Student:
        """Return the student row for the caller, creating it on first contact."""
        student = (
            self.db.query(Student)
            .filter(Student.auth_user_id == auth.user_id)
            .first()
        )
        if student:
            return student
        student = Student(
            auth_user_id=auth.user_id,
            email=auth.email,
            display_name=auth.display_name or auth.email,
        )
        self.db.add(student)
        self._commit("create student")
        self.db.refresh(student)
        logger.info("Created student %s for auth user %s", student.id, auth.user_id)
        return student

    # Pipeline writes

    def create_analyzing_essay(self, request: AnalyzeRequest, student_id: Optional[str]) -> Essay:
        """Record a new essay in the analyzing state and return it with its id."""
        essay = Essay(
            student_id=student_id,
            school_id=request.school_id,
            teacher_id=request.teacher_id,
            essay_text=request.essay_text,
            prompt=request.prompt,
            rubric=request.rubric or None,
            assignment_type=request.assignment_type or None,
            class_name=request.class_name or None,
            word_count=count_words(request.essay_text),
            status=EssayStatus.ANALYZING,
        )
        self.db.add(essay)
        self._commit("save essay")
        self.db.refresh(essay)
        return essay

    def add_inline_comments(self, essay: Essay, result: AnalysisResult) -> List[InlineComment]:
        """Stage one row per inline comment; display_order follows the reply order."""
        rows = [
            InlineComment(
                essay_id=essay.id,
                teacher_id=essay.teacher_id,
                start_index=comment.start_index,
                end_index=comment.end_index,
                excerpt=comment.excerpt,
                comment_text=comment.comment,
                category=comment.category,
                severity=comment.severity,
                display_order=index,
            )
            for index, comment in enumerate(result.inline_comments)
        ]
        self.db.add_all(rows)
        return rows

    def add_grade_prediction(self, essay: Essay, result: AnalysisResult) -> GradePrediction:
        gp = result.grade_prediction
        row = GradePrediction(
            essay_id=essay.id,
            teacher_id=essay.teacher_id,
            letter_grade=gp.letter_grade,
            numeric_grade=gp.numeric_grade,
            confidence=gp.confidence,
            reasoning=list(gp.reasoning),
            strengths=list(gp.strengths),
            weaknesses=list(gp.weaknesses),
        )
        self.db.add(row)
        return row

    def add_end_comment(self, essay: Essay, result: AnalysisResult) -> EndComment:
        row = EndComment(
            essay_id=essay.id,
            comment_text=result.end_comment,
            next_steps=list(result.next_steps),
        )
        self.db.add(row)
        return row

    def save_results(self, essay: Essay, result: AnalysisResult) -> None:
        """
        Write all result rows and mark the essay completed in one commit.

        Raises:
            PersistenceError: If the write fails, or the essay is no longer
                analyzing (the stale sweep failed it while the model was running).
        """
        if not self.mark_completed(essay):
            self.db.rollback()
            raise PersistenceError(f"Essay {essay.id} is no longer analyzing")
        self.add_grade_prediction(essay, result)
        self.add_inline_comments(essay, result)
        self.add_end_comment(essay, result)
        self._commit("save analysis results")

    def mark_completed(self, essay: Essay) -> bool:
        """
        Stage analyzing -> completed without committing.

        The update is conditional on the stored status, so an essay already
        moved to failed stays failed. Returns False in that case.
        """
        try:
            updated = (
                self.db.query(Essay)
                .filter(Essay.id == essay.id, Essay.status == EssayStatus.ANALYZING)
                .update(
                    {Essay.status: EssayStatus.COMPLETED, Essay.error_message: None},
                    synchronize_session="fetch",
                )
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Database write failed while completing essay %s: %s", essay.id, e)
            raise PersistenceError("Failed to update essay status") from e
        return updated == 1

    def mark_failed(self, essay: Essay, reason: str) -> None:
        """Move the essay to failed. Never raises; the original error is what matters."""
        try:
            self.db.rollback()
            if essay.status == EssayStatus.FAILED:
                return
            essay.status = EssayStatus.FAILED
            essay.error_message = (reason or "")[:MAX_ERROR_MESSAGE_LENGTH]
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Could not mark essay %s as failed: %s", essay.id, e)

    def fail_stale_essays(self, older_than_minutes: int) -> int:
        """
        Move essays stuck in analyzing for longer than the cutoff to failed.

        Returns:
            Number of essays updated.
        """
        stale = [
            essay
            for essay in self.db.query(Essay).filter(Essay.status == EssayStatus.ANALYZING).all()
            if is_older_than(essay.updated_at, older_than_minutes)
        ]
        for essay in stale:
            essay.status = EssayStatus.FAILED
            essay.error_message = f"Analysis did not finish within {older_than_minutes} minutes"
        if stale:
            self._commit("fail stale essays")
            logger.info("Marked %d stale essays as failed", len(stale))
        return len(stale)

    # Read side

    def get_student_essay(self, essay_id: str, student_id: str) -> Optional[Essay]:
        """Essay with all result rows, only if it belongs to the student."""
        return (
            self.db.query(Essay)
            .options(
                joinedload(Essay.teacher),
                joinedload(Essay.school),
                joinedload(Essay.grade_prediction),
                joinedload(Essay.inline_comments),
                joinedload(Essay.end_comment),
            )
            .filter(Essay.id == essay_id, Essay.student_id == student_id)
            .first()
        )

    def list_student_essays(self, student_id: str, limit: int = 50, offset: int = 0) -> List[Essay]:
        """Newest first."""
        return (
            self.db.query(Essay)
            .options(
                joinedload(Essay.teacher),
                joinedload(Essay.school),
                joinedload(Essay.grade_prediction),
            )
            .filter(Essay.student_id == student_id)
            .order_by(Essay.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_student_essays(self, student_id: str) -> int:
        return self.db.query(Essay).filter(Essay.student_id == student_id).count()
