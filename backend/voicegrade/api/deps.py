"""
FastAPI dependencies - get_auth_context, require_operator.
"""

from fastapi import Depends, Request

from voicegrade.core.config import get_config
from voicegrade.core.errors import AuthError, ForbiddenError
from voicegrade.core.security import AuthContext, read_session_token


def get_session_token(request: Request) -> str:
    """Session token from the session cookie or an Authorization: Bearer header."""
    token = request.cookies.get(get_config().auth.cookie_name)
    if not token:
        auth_header = request.headers.get("Authorization") or ""
        if auth_header.startswith("Bearer "):
            token = auth_header[len("Bearer "):].strip()
    return token or ""


async def get_auth_context(request: Request) -> AuthContext:
    """
    Resolve the authenticated caller.

    Raises:
        AuthError: If no valid, unexpired session token is present.
    """
    token = get_session_token(request)
    if not token:
        raise AuthError("Unauthorized")
    return read_session_token(token, ttl=get_config().auth.session_ttl)


async def require_operator(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    """
    Resolve the caller and require an operator account (auth.admin_user_ids).

    Raises:
        ForbiddenError: If the caller is a regular student session.
    """
    if auth.user_id not in get_config().auth.admin_user_ids:
        raise ForbiddenError("Operator access required")
    return auth
