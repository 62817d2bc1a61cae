"""
Import an essay from Google Docs.

Fetches the document body and its unresolved Drive comments with the
caller's Google access token and reshapes them into
{essay_text, comments: [{excerpt, comment}], doc_title}. This is a
fetch-and-reshape helper only; it is not part of the analysis pipeline.
"""

import re
from typing import Any, Dict, List, Optional

import httpx

from voicegrade.core.config import get_config
from voicegrade.core.errors import ForbiddenError, UpstreamError, ValidationError
from voicegrade.core.logging import get_logger
from voicegrade.schemas.documents import (
    GoogleDocImportRequest,
    GoogleDocImportResponse,
    ImportedComment,
)

logger = get_logger()

_DOC_ID_PATTERN = re.compile(r"/document/d/([a-zA-Z0-9_-]+)")
COMMENT_FIELDS = "comments(content,quotedFileContent,resolved)"


def extract_document_id(doc_url: str) -> str:
    """
    Pull the document id out of a Google Docs URL.

    Raises:
        ValidationError: If the URL is not a Google Docs document link.
    """
    match = _DOC_ID_PATTERN.search(doc_url or "")
    if not match:
        raise ValidationError("Invalid Google Docs URL. Please paste a valid Google Docs link.")
    return match.group(1)


def extract_document_text(document: Dict[str, Any]) -> str:
    """Concatenate the text runs of every paragraph in the document body."""
    parts: List[str] = []
    for element in (document.get("body") or {}).get("content") or []:
        paragraph = element.get("paragraph") or {}
        for run in paragraph.get("elements") or []:
            content = (run.get("textRun") or {}).get("content")
            if content:
                parts.append(content)
    return "".join(parts).strip()


def reshape_comments(payload: Dict[str, Any]) -> List[ImportedComment]:
    """Keep unresolved comments with non-blank text."""
    comments = []
    for item in payload.get("comments") or []:
        if item.get("resolved"):
            continue
        text = item.get("content") or ""
        if not text.strip():
            continue
        excerpt = (item.get("quotedFileContent") or {}).get("value") or ""
        comments.append(ImportedComment(excerpt=excerpt, comment=text))
    return comments


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = {}
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return response.reason_phrase or f"HTTP {response.status_code}"


class GoogleDocImporter:
    """Client for the Google Docs and Drive comment APIs."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client
        self._google = get_config().google

    async def import_document(self, request: GoogleDocImportRequest) -> GoogleDocImportResponse:
        """
        Fetch a document and its open comments.

        Raises:
            ValidationError: Missing or invalid document URL.
            ForbiddenError: No Google token, or the token was rejected.
            UpstreamError: Google returned any other error.
        """
        if not request.doc_url or not request.doc_url.strip():
            raise ValidationError("Missing Google Docs URL")
        if not request.provider_token:
            raise ForbiddenError(
                "Google account not connected. Please link your Google account first."
            )
        doc_id = extract_document_id(request.doc_url)
        headers = {"Authorization": f"Bearer {request.provider_token}"}

        if self._client is not None:
            return await self._fetch(self._client, doc_id, headers)
        async with httpx.AsyncClient(timeout=self._google.timeout) as client:
            return await self._fetch(client, doc_id, headers)

    async def _fetch(
        self, client: httpx.AsyncClient, doc_id: str, headers: Dict[str, str]
    ) -> GoogleDocImportResponse:
        docs_url = f"{self._google.docs_api_base.rstrip('/')}/documents/{doc_id}"
        try:
            doc_res = await client.get(docs_url, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"Google Docs request failed: {e}", user_message="Failed to import document"
            ) from e

        if doc_res.status_code in (401, 403):
            raise ForbiddenError(
                "Google token expired or insufficient permissions. "
                "Please reconnect your Google account."
            )
        if doc_res.is_error:
            message = f"Failed to fetch document: {_error_message(doc_res)}"
            raise UpstreamError(message, status_code=doc_res.status_code, user_message=message)

        try:
            document = doc_res.json()
        except ValueError as e:
            raise UpstreamError(
                f"Google Docs returned a non-JSON body: {e}", user_message="Failed to import document"
            ) from e
        if not isinstance(document, dict):
            raise UpstreamError(
                "Google Docs returned an unexpected payload", user_message="Failed to import document"
            )
        comments = await self._fetch_comments(client, doc_id, headers)
        logger.info("Imported Google Doc %s with %d open comments", doc_id, len(comments))
        return GoogleDocImportResponse(
            essay_text=extract_document_text(document),
            comments=comments,
            doc_title=document.get("title") or "Untitled Document",
        )

    async def _fetch_comments(
        self, client: httpx.AsyncClient, doc_id: str, headers: Dict[str, str]
    ) -> List[ImportedComment]:
        """Comments are optional; a failed comments call yields an empty list."""
        comments_url = f"{self._google.drive_api_base.rstrip('/')}/files/{doc_id}/comments"
        params = {"fields": COMMENT_FIELDS, "includeDeleted": "false"}
        try:
            res = await client.get(comments_url, headers=headers, params=params)
        except httpx.HTTPError as e:
            logger.warning("Drive comments request for %s failed: %s", doc_id, e)
            return []
        if res.is_error:
            logger.warning("Drive comments for %s returned %s", doc_id, res.status_code)
            return []
        try:
            payload = res.json()
        except ValueError as e:
            logger.warning("Drive comments for %s were not JSON: %s", doc_id, e)
            return []
        if not isinstance(payload, dict):
            logger.warning("Drive comments for %s had an unexpected payload", doc_id)
            return []
        return reshape_comments(payload)


def get_document_importer() -> GoogleDocImporter:
    """Get a Google Docs importer using the configured endpoints."""
    return GoogleDocImporter()
