"""
LiteLLM plumbing shared by the provider implementations.
Do not import from outside the ai_providers package.
"""

from typing import Any, Dict, List, Optional

from voicegrade.core.logging import get_logger

logger = get_logger()

DEFAULT_TIMEOUT = 120
DEFAULT_MAX_TOKENS = 4096


async def completion(
    model: str,
    messages: List[Dict[str, str]],
    *,
    api_base: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
    max_tokens: Optional[int] = None,
    temperature: Optional[float] = None,
) -> str:
    """
    One litellm.acompletion call.

    Returns:
        The first choice's text; "" when the reply carries no text content
        (tool calls, refusals with null content).
    """
    import litellm

    kwargs: Dict[str, Any] = {"model": model, "messages": messages, "timeout": timeout}
    optional = {
        "api_base": api_base,
        "api_key": api_key,
        "max_tokens": max_tokens,
        "temperature": temperature,
    }
    kwargs.update({k: v for k, v in optional.items() if v is not None})

    response = await litellm.acompletion(**kwargs)
    content = response.choices[0].message.content
    return content if isinstance(content, str) else ""


class LiteLLMProvider:
    """
    Base for providers reached through LiteLLM.

    Subclasses only name themselves, their LiteLLM model prefix and their
    default model; everything else comes from the resolved ai-config.
    """

    name = ""
    model_prefix = ""
    default_model = ""

    def __init__(self, config: Dict[str, Any]):
        self.model = (config.get("model") or self.default_model).strip()
        self.api_key = config.get("api_key") or None
        self.api_base = config.get("base_url") or None
        self.timeout = int(config.get("timeout") or DEFAULT_TIMEOUT)
        self.max_tokens = int(config.get("max_tokens") or DEFAULT_MAX_TOKENS)
        self.temperature = config.get("temperature")

    @property
    def litellm_model(self) -> str:
        return f"{self.model_prefix}/{self.model}"

    @staticmethod
    def build_messages(prompt: str, system_prompt: Optional[str] = None) -> List[Dict[str, str]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        *,
        timeout: Optional[int] = None,
    ) -> str:
        if not self.api_key:
            raise ValueError(f"No API key configured for provider: {self.name}")
        logger.debug("%s completion: model=%s", self.name, self.litellm_model)
        return await completion(
            model=self.litellm_model,
            messages=self.build_messages(prompt, system_prompt),
            api_base=self.api_base,
            api_key=self.api_key,
            timeout=timeout if timeout is not None else self.timeout,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
