"""Abstract base class for LLM service providers.

Defines the contract for the chat-completion backend used for answer
synthesis and the supplementary web-search summary.  The adapter keeps
every call-site provider-agnostic; only ``src/providers/llm/`` imports
the vendor SDK.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: OpenAILLMProvider (src/providers/llm/)
class ILLMProvider(ABC):
    """Contract for chat-completion services."""

    @abstractmethod
    async def chat(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Run a chat completion over an ordered message list.

        Parameters
        ----------
        messages:
            ``{"role", "content"}`` dicts, oldest first.  The provider sends
            them verbatim and in order.
        model:
            Override the provider's default chat model for this call (e.g.
            a model with built-in web search).
        temperature:
            Sampling temperature, or ``None`` to use the model default.
            Some search-enabled models reject this parameter entirely.
        max_tokens:
            Upper bound on response tokens, or ``None`` for the default.

        Returns
        -------
        str
            The assistant message content, or an empty string when the
            model returned none.

        Raises
        ------
        src.utils.errors.LLMError
            If the API call fails.
        src.utils.errors.ConfigurationError
            If no API key is configured.
        """

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Convenience wrapper: one system message plus one user message."""
        return await self.chat(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"openai"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are present (no network call)."""
