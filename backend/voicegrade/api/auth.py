"""
Authenticated caller routes.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicegrade.api.deps import get_auth_context
from voicegrade.core.database import get_db
from voicegrade.core.security import AuthContext
from voicegrade.schemas import StudentResponse
from voicegrade.services import EssayStore

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=StudentResponse)
async def get_me(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
):
    """Return the caller's student record, creating it on first sign-in."""
    return EssayStore(db).get_or_create_student(auth)
