"""
Schemas for importing an essay from Google Docs.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class GoogleDocImportRequest(BaseModel):
    doc_url: Optional[str] = Field(None, description="Google Docs share/edit URL")
    provider_token: Optional[str] = Field(None, description="Google OAuth access token")


class ImportedComment(BaseModel):
    excerpt: str = ""
    comment: str


class GoogleDocImportResponse(BaseModel):
    essay_text: str
    comments: List[ImportedComment] = Field(default_factory=list)
    doc_title: str
