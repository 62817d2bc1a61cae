"""
Pydantic schemas for the AI settings API.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class AIConfigResponse(BaseModel):
    """AI configuration response. The API key itself is never returned."""

    provider: str
    model: str
    base_url: Optional[str] = None
    max_tokens: int
    temperature: float
    timeout: int
    has_api_key: bool
    available_providers: List[str]


class AIConfigUpdate(BaseModel):
    """Partial update of the AI configuration."""

    provider: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = Field(None, description="Stored encrypted")
    max_tokens: Optional[int] = Field(None, gt=0)
    temperature: Optional[float] = Field(None, ge=0, le=2)
    timeout: Optional[int] = Field(None, gt=0)
