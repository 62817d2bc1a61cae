"""
Database-backed settings and default values.

The LLM provider configuration is stored in the Settings table as
type="ai-config". Defaults are defined in ensure_settings_config() and used
when no record exists.
"""

from sqlalchemy.orm import Session

from voicegrade.models import Settings

DEFAULT_AI_CONFIG = {
    "provider": "anthropic",
    "model": "claude-sonnet-4-20250514",
    "max_tokens": 4096,
    "temperature": 0.3,
    "timeout": 120,
}


def ensure_settings_config(db: Session) -> Settings:
    """Ensure AI settings exist (type=ai-config)."""
    config = db.query(Settings).filter(Settings.type == "ai-config").first()
    if not config:
        config = Settings(type="ai-config", config=dict(DEFAULT_AI_CONFIG))
        db.add(config)
        db.commit()
        db.refresh(config)
    return config
