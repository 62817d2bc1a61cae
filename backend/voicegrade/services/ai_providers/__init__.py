"""
LLM providers behind a single interface: get_llm_provider(db).complete(...).
"""

from .interface import LLMProvider
from .llm_factory import (
    get_llm_provider,
    get_llm_provider_for_config,
    list_llm_provider_names,
    resolve_provider_name,
)

__all__ = [
    "LLMProvider",
    "get_llm_provider",
    "get_llm_provider_for_config",
    "list_llm_provider_names",
    "resolve_provider_name",
]
