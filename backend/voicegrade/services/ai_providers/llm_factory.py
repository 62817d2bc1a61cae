"""
Factory for the LLM provider used by the analysis pipeline.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from voicegrade.core.ai_config import get_resolved_ai_config
from voicegrade.services.ai_providers.interface import LLMProvider
from voicegrade.services.ai_providers.llm_anthropic import AnthropicLLMProvider
from voicegrade.services.ai_providers.llm_openai import OpenAILLMProvider

_PROVIDERS = {cls.name: cls for cls in (AnthropicLLMProvider, OpenAILLMProvider)}
_ALIASES = {"claude": "anthropic"}


def resolve_provider_name(name: Optional[str]) -> str:
    """
    Canonical provider name for a configured value ("Claude " -> "anthropic").

    Raises:
        ValueError: If the name is not a known provider or alias.
    """
    key = (name or AnthropicLLMProvider.name).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _PROVIDERS:
        raise ValueError(
            f"Unknown AI provider: {key}. Available: {', '.join(list_llm_provider_names())}"
        )
    return key


def get_llm_provider_for_config(config: Dict[str, Any]) -> LLMProvider:
    """Provider instance for a resolved ai-config dict (see core.ai_config)."""
    return _PROVIDERS[resolve_provider_name(config.get("provider"))](config)


def get_llm_provider(db: Session) -> LLMProvider:
    """Provider instance for the ai-config stored in the database."""
    return get_llm_provider_for_config(get_resolved_ai_config(db))


def list_llm_provider_names() -> List[str]:
    return sorted(_PROVIDERS)
