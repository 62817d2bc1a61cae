"""
The one interface the analysis pipeline uses to reach a model.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class LLMProvider(Protocol):
    """
    A configured model endpoint that turns one prompt into one text reply.

    Implementations neither retry nor parse; the reply is handed to the
    response validator as-is.
    """

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        *,
        timeout: Optional[int] = None,
    ) -> str:
        """
        Args:
            prompt: User message (assignment context and essay).
            system_prompt: Instruction describing the teacher to imitate.
            timeout: Seconds; the configured timeout when None.

        Returns:
            The reply text, possibly empty.

        Raises:
            ValueError: No API key or an unusable configuration.
            Exception: Whatever the transport raises on network or API errors.
        """
        ...
