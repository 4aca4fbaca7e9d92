"""OpenAI-compatible LLM provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.
When a custom ``openai_base_url`` is configured the client points at that
URL instead of the default OpenAI endpoint, so any OpenAI-compatible API
works unchanged.

Two models are used by the console:
    - ``openai_chat_model``   — main answer synthesis (default gpt-4o-mini)
    - ``openai_search_model`` — supplementary summary with built-in live
                                web search (default gpt-4o-mini-search-preview)

The search-preview models reject ``temperature``; callers pass ``None``
and the parameter is then omitted from the request.
"""

from __future__ import annotations

from typing import Any

import openai
import structlog

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.utils.errors import ConfigurationError, LLMError

logger = structlog.get_logger(logger_name=__name__)

_TIMEOUT = openai.Timeout(60.0, connect=5.0)


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by an OpenAI-compatible chat completions API.

    The async client is built once, on first use, and reused for every
    request for the lifetime of the process.
    """

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.openai_api_key
        self._base_url = settings.openai_base_url
        self._chat_model = settings.openai_chat_model
        self._client: openai.AsyncOpenAI | None = None
        self._provider_label = "openai-compatible" if settings.openai_base_url else "openai"

    def _get_client(self) -> openai.AsyncOpenAI:
        if not self._api_key:
            raise ConfigurationError(
                message="Missing OpenAI API key",
                provider_name=self.get_provider_name(),
            )
        if self._client is None:
            client_kwargs: dict[str, Any] = {"api_key": self._api_key, "timeout": _TIMEOUT}
            if self._base_url:
                client_kwargs["base_url"] = self._base_url
            self._client = openai.AsyncOpenAI(**client_kwargs)
        return self._client

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def chat(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Send *messages* verbatim to the chat completions endpoint."""
        client = self._get_client()
        chosen_model = model or self._chat_model

        request: dict[str, Any] = {"model": chosen_model, "messages": messages}
        if temperature is not None:
            request["temperature"] = temperature
        if max_tokens is not None:
            request["max_tokens"] = max_tokens

        try:
            response = await client.chat.completions.create(**request)
        except openai.APITimeoutError as exc:
            raise LLMError(
                message=f"{self._provider_label} request timed out",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            # "from exc" keeps the SDK traceback in server logs; callers only
            # need to know about LLMError.
            raise LLMError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.warning("openai_empty_completion", model=chosen_model)
            return ""

        logger.info(
            "openai_completion",
            model=chosen_model,
            provider=self._provider_label,
            messages=len(messages),
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return content

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
        return bool(self._api_key)

    def get_provider_name(self) -> str:
        return self._provider_label
