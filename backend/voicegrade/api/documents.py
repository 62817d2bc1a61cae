"""
Document import routes.
"""

from fastapi import APIRouter, Depends

from voicegrade.api.deps import get_auth_context
from voicegrade.core.security import AuthContext
from voicegrade.schemas import GoogleDocImportRequest, GoogleDocImportResponse
from voicegrade.services import get_document_importer

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post("/import-google-doc", response_model=GoogleDocImportResponse)
async def import_google_doc(
    request: GoogleDocImportRequest,
    auth: AuthContext = Depends(get_auth_context),
):
    """
    Import essay text and open comments from a Google Doc.

    Requires the caller's Google access token (provider_token) with Docs and
    Drive read scopes.
    """
    importer = get_document_importer()
    return await importer.import_document(request)
