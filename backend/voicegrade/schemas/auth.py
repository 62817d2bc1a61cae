"""
Schemas for the authenticated caller.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class StudentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    auth_user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
