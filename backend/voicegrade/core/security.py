"""
Security utilities: API key encryption and session tokens.

Sessions are issued by the identity provider as Fernet tokens sharing
VOICEGRADE_SECRET_KEY with this service. The decoded session is carried as an
explicit AuthContext value into every operation that needs the caller.
"""

import base64
import json
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from voicegrade.core.config import get_secrets
from voicegrade.core.errors import AuthError

API_KEY_SALT = b"voicegrade_api_key_salt"
SESSION_SALT = b"voicegrade_session_salt"


@dataclass(frozen=True)
class AuthContext:
    """Identity of the authenticated caller."""

    user_id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


@lru_cache(maxsize=8)
def _derive_key(password: str, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=480000,
    )
    return base64.urlsafe_b64encode(kdf.derive(password.encode()))


def get_encryption_key(password: Optional[str] = None, salt: bytes = API_KEY_SALT) -> bytes:
    """
    Derive a Fernet key from a password or VOICEGRADE_SECRET_KEY.

    Args:
        password: Optional password to derive key from. If None, uses the configured secret.
        salt: Salt separating API key encryption from session tokens.

    Returns:
        Encryption key bytes.
    """
    if password is None:
        password = get_secrets().secret_key
    return _derive_key(password, salt)


def encrypt_api_key(api_key: str, password: Optional[str] = None) -> str:
    """
    Encrypt an API key for storage in the Settings table.

    Returns:
        Encrypted API key as a base64-encoded string.
    """
    fernet = Fernet(get_encryption_key(password))
    encrypted = fernet.encrypt(api_key.encode())
    return base64.urlsafe_b64encode(encrypted).decode()


def decrypt_api_key(encrypted_key: str, password: Optional[str] = None) -> str:
    """
    Decrypt an API key produced by encrypt_api_key.

    Raises:
        cryptography.fernet.InvalidToken: If the key was encrypted with another secret.
    """
    fernet = Fernet(get_encryption_key(password))
    encrypted_bytes = base64.urlsafe_b64decode(encrypted_key.encode())
    return fernet.decrypt(encrypted_bytes).decode()


def issue_session_token(
    user_id: str,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
    password: Optional[str] = None,
) -> str:
    """Mint a session token for the given identity."""
    payload = {"sub": user_id, "email": email, "name": display_name}
    fernet = Fernet(get_encryption_key(password, salt=SESSION_SALT))
    return fernet.encrypt(json.dumps(payload).encode()).decode()


def read_session_token(token: str, ttl: int, password: Optional[str] = None) -> AuthContext:
    """
    Decode a session token into an AuthContext.

    Raises:
        AuthError: If the token is malformed, forged or older than ttl seconds.
    """
    fernet = Fernet(get_encryption_key(password, salt=SESSION_SALT))
    try:
        payload = json.loads(fernet.decrypt(token.encode(), ttl=ttl))
    except (InvalidToken, ValueError) as e:
        raise AuthError("Unauthorized") from e

    user_id = payload.get("sub") if isinstance(payload, dict) else None
    if not user_id:
        raise AuthError("Unauthorized")
    return AuthContext(
        user_id=str(user_id),
        email=payload.get("email"),
        display_name=payload.get("name"),
    )
