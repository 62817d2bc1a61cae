"""
Schemas for schools and teachers (submission wizard and contribute flow).
"""

from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from voicegrade.models import SchoolType


class SchoolCreate(BaseModel):
    """Request to create a school."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    location: Optional[str] = None
    type: Literal["public", "private", "charter", "international"] = "public"
    description: Optional[str] = None


class SchoolResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    location: Optional[str] = None
    type: SchoolType
    description: Optional[str] = None
    teacher_count: int = 0


class TeacherCreate(BaseModel):
    """Request to create a teacher under an existing school."""

    school_id: str
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    email: Optional[str] = None
    department: Optional[str] = None
    subjects: List[str] = Field(default_factory=list)
    grading_style: Optional[str] = None


class TeacherResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str
    name: str
    email: Optional[str] = None
    department: Optional[str] = None
    subjects: List[str] = Field(default_factory=list)
    grading_style: Optional[str] = None
    essays_graded: int = 0
    avatar_url: Optional[str] = None
    is_active: bool = True
