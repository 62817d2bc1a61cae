"""
Single source of truth for AI provider and model configuration.

The essay analysis pipeline reads the provider and model from Settings
(type=ai-config) through these helpers. Do not duplicate config reading or
default values elsewhere.
"""

import os
from typing import Any, Dict

from cryptography.fernet import InvalidToken
from sqlalchemy.orm import Session

from voicegrade.core.logging import get_logger
from voicegrade.core.security import decrypt_api_key
from voicegrade.core.settings_db import DEFAULT_AI_CONFIG, ensure_settings_config

logger = get_logger()

# Environment fallback when no key is stored in Settings
PROVIDER_API_KEY_ENV = {
    "anthropic": "ANTHROPIC_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def get_resolved_ai_config(db: Session) -> Dict[str, Any]:
    """
    Return full resolved AI config: provider, model, api_key, base_url, timeout,
    max_tokens, temperature. api_key is decrypted; None if unavailable.
    """
    rec = ensure_settings_config(db)
    cfg = rec.config or {}
    provider = (cfg.get("provider") or DEFAULT_AI_CONFIG["provider"]).strip().lower()
    model = (cfg.get("model") or DEFAULT_AI_CONFIG["model"]).strip()

    api_key = None
    raw_key = cfg.get("api_key")
    if raw_key:
        try:
            api_key = decrypt_api_key(raw_key)
        except (InvalidToken, ValueError):
            logger.warning("Stored API key for %s could not be decrypted; check VOICEGRADE_SECRET_KEY", provider)
    if not api_key:
        env_name = PROVIDER_API_KEY_ENV.get(provider)
        api_key = os.environ.get(env_name) if env_name else None

    return {
        "provider": provider,
        "model": model,
        "base_url": cfg.get("base_url") or None,
        "api_key": api_key,
        "timeout": cfg.get("timeout", DEFAULT_AI_CONFIG["timeout"]),
        "max_tokens": cfg.get("max_tokens", DEFAULT_AI_CONFIG["max_tokens"]),
        "temperature": cfg.get("temperature", DEFAULT_AI_CONFIG["temperature"]),
    }
