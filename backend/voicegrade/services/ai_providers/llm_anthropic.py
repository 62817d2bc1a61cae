"""
Anthropic (Claude) provider, the default for essay analysis.
"""

from voicegrade.services.ai_providers._litellm import LiteLLMProvider


class AnthropicLLMProvider(LiteLLMProvider):
    name = "anthropic"
    model_prefix = "anthropic"
    default_model = "claude-sonnet-4-20250514"
