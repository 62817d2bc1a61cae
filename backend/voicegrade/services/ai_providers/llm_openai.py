"""
OpenAI provider. A base_url in ai-config points it at any OpenAI-compatible endpoint.
"""

from voicegrade.services.ai_providers._litellm import LiteLLMProvider


class OpenAILLMProvider(LiteLLMProvider):
    name = "openai"
    model_prefix = "openai"
    default_model = "gpt-4o"
