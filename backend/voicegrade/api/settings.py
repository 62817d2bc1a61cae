"""
Settings API routes (AI provider configuration).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from voicegrade.api.deps import require_operator
from voicegrade.core.database import get_db
from voicegrade.core.errors import ValidationError
from voicegrade.core.logging import get_logger
from voicegrade.core.security import AuthContext, encrypt_api_key
from voicegrade.core.settings_db import DEFAULT_AI_CONFIG, ensure_settings_config
from voicegrade.models import Settings
from voicegrade.schemas import AIConfigResponse, AIConfigUpdate
from voicegrade.services.ai_providers import list_llm_provider_names, resolve_provider_name

logger = get_logger()

router = APIRouter(prefix="/settings", tags=["Settings"])


def _to_response(rec: Settings) -> AIConfigResponse:
    cfg = rec.config or {}
    return AIConfigResponse(
        provider=cfg.get("provider", DEFAULT_AI_CONFIG["provider"]),
        model=cfg.get("model", DEFAULT_AI_CONFIG["model"]),
        base_url=cfg.get("base_url"),
        max_tokens=cfg.get("max_tokens", DEFAULT_AI_CONFIG["max_tokens"]),
        temperature=cfg.get("temperature", DEFAULT_AI_CONFIG["temperature"]),
        timeout=cfg.get("timeout", DEFAULT_AI_CONFIG["timeout"]),
        # Never send the real api_key back
        has_api_key=bool(cfg.get("api_key")),
        available_providers=list_llm_provider_names(),
    )


@router.get("/ai-config", response_model=AIConfigResponse)
async def get_ai_config(
    auth: AuthContext = Depends(require_operator),
    db: Session = Depends(get_db),
):
    """Current AI provider configuration (operators only)."""
    return _to_response(ensure_settings_config(db))


@router.put("/ai-config", response_model=AIConfigResponse)
async def update_ai_config(
    request: AIConfigUpdate,
    auth: AuthContext = Depends(require_operator),
    db: Session = Depends(get_db),
):
    """
    Update AI provider configuration (stored in Settings table, type=ai-config).
    Operators only. API key is encrypted before storage. A stored key is
    never sent to a new base_url: changing base_url without a new api_key
    drops the stored key.
    """
    rec = ensure_settings_config(db)
    config_data = dict(rec.config or {})

    if request.provider is not None:
        try:
            config_data["provider"] = resolve_provider_name(request.provider)
        except ValueError as e:
            raise ValidationError(str(e)) from e
    if request.model is not None:
        config_data["model"] = request.model.strip()
    if request.base_url is not None:
        base_url = request.base_url.strip() or None
        if base_url != config_data.get("base_url") and not request.api_key:
            if config_data.pop("api_key", None):
                logger.warning("base_url changed without a new API key; stored key dropped")
        config_data["base_url"] = base_url
    if request.api_key:
        config_data["api_key"] = encrypt_api_key(request.api_key)
    for field in ("max_tokens", "temperature", "timeout"):
        value = getattr(request, field)
        if value is not None:
            config_data[field] = value

    rec.config = config_data
    db.commit()
    db.refresh(rec)
    logger.info(
        "AI config updated by %s: provider=%s, model=%s",
        auth.user_id,
        config_data.get("provider"),
        config_data.get("model"),
    )
    return _to_response(rec)
