"""Shared pytest fixtures for the knowledge-base console test suite."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.vector_search_provider import IVectorSearchProvider
from src.interfaces.web_search_provider import IWebSearchProvider
from src.models.search import SearchHit, SourceType

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def build_settings(**overrides: Any) -> Settings:
    """Settings with every external collaborator configured, ignoring any .env file."""
    defaults: dict[str, Any] = {
        "openai_api_key": "sk-test",
        "google_search_api_key": "g-key",
        "google_search_engine_id": "g-cx",
        "document_db_url": "http://db.test",
        "security_token": "",
        "scraper_api_url": "http://scraper.test",
        "transcript_api_url": "",
        "aws_region": "us-west-1",
        "s3_bucket": "intersightai-db",
        "app_env": "development",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


@pytest.fixture
def settings() -> Settings:
    return build_settings()


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    return build_settings


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """An AsyncClient whose every request is answered by *handler*."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]


# ---------------------------------------------------------------------------
# Search hits
# ---------------------------------------------------------------------------


def vector_hit(n: int = 1, distance: float = 0.2) -> SearchHit:
    return SearchHit(
        title=f"Policy doc {n}",
        source=f"https://docs.test/policy-{n}",
        snippet=f"Server policies chunk {n}",
        score=distance,
        source_type=SourceType.VECTOR,
        document_id=str(n),
    )


def google_hit(n: int = 1) -> SearchHit:
    return SearchHit(
        title=f"Result {n}",
        source=f"https://web.test/{n}",
        snippet=f"Snippet {n}",
        source_type=SourceType.GOOGLE,
        display_link="web.test",
    )


# ---------------------------------------------------------------------------
# Provider fakes
# ---------------------------------------------------------------------------


class FakeWebSearch(IWebSearchProvider):
    def __init__(self, hits: list[SearchHit] | None = None, error: Exception | None = None) -> None:
        self.hits = hits or []
        self.error = error
        self.calls: list[tuple[str, int]] = []

    async def search(self, query: str, num_results: int = 10) -> list[SearchHit]:
        self.calls.append((query, num_results))
        if self.error is not None:
            raise self.error
        return list(self.hits)

    def get_provider_name(self) -> str:
        return "fake-google"

    def is_available(self) -> bool:
        return True


class FakeVectorSearch(IVectorSearchProvider):
    def __init__(self, hits: list[SearchHit] | None = None, error: Exception | None = None) -> None:
        self.hits = hits or []
        self.error = error
        self.calls: list[tuple[str, int, float]] = []

    async def search(self, query: str, limit: int = 10, distance: float = 0.4) -> list[SearchHit]:
        self.calls.append((query, limit, distance))
        if self.error is not None:
            raise self.error
        return list(self.hits)

    def get_provider_name(self) -> str:
        return "fake-vector"

    def is_available(self) -> bool:
        return True


class FakeLLM(ILLMProvider):
    """Records every message list; answers from a queue or raises."""

    def __init__(self, *answers: str | Exception) -> None:
        self._answers = list(answers) or ["ok"]
        self.calls: list[dict[str, Any]] = []

    async def chat(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        self.calls.append({"messages": messages, "model": model})
        answer = self._answers.pop(0) if len(self._answers) > 1 else self._answers[0]
        if isinstance(answer, Exception):
            raise answer
        return answer

    def get_provider_name(self) -> str:
        return "fake-llm"

    def is_available(self) -> bool:
        return True


@pytest.fixture
def assistant_config() -> dict[str, Any]:
    return {
        "domain": "Cisco Intersight",
        "refusal_message": "I can only help with questions about Cisco Intersight.",
        "no_documentation_message": (
            "There is no confirmed Cisco documentation matching this question."
        ),
        "summary_top_n": 2,
    }
