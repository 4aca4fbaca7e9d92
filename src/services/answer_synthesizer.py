"""Answer synthesis over aggregated search results.

Two language-model calls per question:

1. **Web-search summary** -- the search-enabled model answers from the
   top vector hits only (keyword hits are withheld), falls back to live
   web search with citations, and otherwise declines with a fixed
   "no confirmed documentation" sentence.
2. **Main answer** -- the chat model receives every source, ranked by a
   strict trust order, plus the caller's conversation history.  The
   current query is always appended last.

Source trust order (highest first):
    vector results  >  keyword results  >  web-search summary

Neither call ever raises to the caller.  Failures become fixed strings
so the chat UI always gets a 200 with something to show.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

import structlog

from src.interfaces.llm_provider import ILLMProvider
from src.models.conversation import ChatTurn
from src.models.search import AggregatedSearchResults, SearchHit
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

ERROR_RESPONSE = "Error processing AI response."
EMPTY_RESPONSE = "No response."
SUMMARY_FAILED = "Web search failed or returned no content."
SUMMARY_EMPTY = "No web search summary available."

_SUMMARY_PROMPT = """\
You are a {domain} specialist.

You have two inputs:
1. A user query
2. A set of reliable Vector Database Results from {domain} subject matter experts

### Your Instructions:
- First, **try to answer the query using only the Vector Database Results**.
- If you **cannot find a sufficient answer**, then and only then:
  - Use **live web search** to find a highly credible and verifiable answer.
  - **Cite the source** exactly if you use anything from the web.
- If neither vector nor web has a trustworthy answer, reply: "{no_documentation}"

Always prioritize vector data. Never make things up.

### Vector Database Results:
{search_results}"""

_ANSWER_PROMPT = """\
You are a helpful AI assistant specializing in **{domain}**. Your role is to \
provide **factual, structured, and markdown-formatted answers** to user \
questions using only the information available in the search results below.

### Source Trust Hierarchy (follow this order)
1. **Use the Vector Database Results FIRST.** These are subject matter \
expert-verified and have the highest reliability. This is your **primary \
source** of truth.
2. **If the Vector Results do not contain enough information**, you may \
**supplement with Google Search Results**, but still prioritize vector-based \
answers.
3. **Only if both the Vector and Google Results fail**, you may refer to the \
**Web Search Summary**. Treat it as **supplementary** and **never build your \
entire answer based solely on it**.

Do not make anything up. If none of the sources help answer the question, \
say "I don't know" instead of guessing.

### Markdown Response Format
- Use **headings** (e.g., `## Overview of {domain} Policies`)
- Use **bold**, *italics*, `code`, lists, and tables where appropriate
- Avoid fluff, and keep responses concise and technical

### Restrictions
- Do **not** hallucinate or fabricate links or data
- Do **not** include anything outside the context of {domain}; for \
off-topic questions reply exactly: "{refusal}"
- Do **not** include any profanity or inappropriate content

---

### Search Result Context

**Vector Database Results** (highest priority):
{vector_results}

**Google Search Results** (fallback if vector is insufficient):
{google_results}

**Web Search Summary** (use only if others fail or for context expansion; \
sometimes this will be wrong: if there is no mention of any of these topics \
or answers in the vector database results then it is probably incorrect):
{web_summary}

---

Now generate a detailed, markdown-formatted response to the following query:

"{query}\""""


def _dump_hits(hits: Sequence[SearchHit]) -> str:
    return json.dumps([hit.model_dump(mode="json") for hit in hits], indent=2)


def _dump_summary_payload(vector_hits: Sequence[SearchHit]) -> str:
    # Keyword hits are withheld from the summary call; the empty list says so.
    payload = {
        "vectorResults": [hit.model_dump(mode="json") for hit in vector_hits],
        "googleResults": [],
    }
    return json.dumps(payload, indent=2)


class AnswerSynthesizer:
    """Builds the prompts and runs both language-model calls.

    Parameters
    ----------
    llm:
        Chat-completion provider.
    assistant_config:
        The ``assistant`` section of the loaded config: ``domain``,
        ``refusal_message``, ``no_documentation_message`` and
        ``summary_top_n``.
    search_model:
        Model used for the web-search summary call.
    """

    def __init__(
        self,
        llm: ILLMProvider,
        assistant_config: dict[str, Any],
        search_model: str = "gpt-4o-mini-search-preview",
    ) -> None:
        self._llm = llm
        self._domain = assistant_config.get("domain", "Cisco Intersight")
        self._refusal = assistant_config.get(
            "refusal_message", f"I can only help with questions about {self._domain}."
        )
        self._no_documentation = assistant_config.get(
            "no_documentation_message",
            "There is no confirmed Cisco documentation matching this question.",
        )
        self._summary_top_n = int(assistant_config.get("summary_top_n", 2))
        self._search_model = search_model

    # ------------------------------------------------------------------
    # Prompt construction
    # ------------------------------------------------------------------

    def build_summary_messages(
        self, query: str, vector_hits: Sequence[SearchHit]
    ) -> list[dict[str, str]]:
        system = _SUMMARY_PROMPT.format(
            domain=self._domain,
            no_documentation=self._no_documentation,
            search_results=_dump_summary_payload(vector_hits),
        )
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": query},
        ]

    def build_answer_messages(
        self,
        query: str,
        conversation: Sequence[ChatTurn],
        results: AggregatedSearchResults,
        web_summary: str,
    ) -> list[dict[str, str]]:
        """Return ``[system, *conversation, user(query)]``.

        The query is appended even if the conversation already ends with
        it, so the model always sees the latest question last.
        """
        system = _ANSWER_PROMPT.format(
            domain=self._domain,
            refusal=self._refusal,
            vector_results=_dump_hits(results.vectorResults),
            google_results=_dump_hits(results.googleResults),
            web_summary=web_summary,
            query=query,
        )
        messages = [{"role": "system", "content": system}]
        messages.extend(turn.as_message() for turn in conversation)
        messages.append({"role": "user", "content": query})
        return messages

    # ------------------------------------------------------------------
    # Model calls
    # ------------------------------------------------------------------

    async def web_search_summary(self, query: str, results: AggregatedSearchResults) -> str:
        """Summarize from the top vector hits, with live web search as fallback."""
        top_hits = results.top_vector(self._summary_top_n)
        messages = self.build_summary_messages(query, top_hits)
        try:
            summary = await self._llm.chat(messages, model=self._search_model)
        except Exception as exc:  # noqa: BLE001
            logger.warning("web_search_summary_failed", error=str(exc))
            return SUMMARY_FAILED
        return summary or SUMMARY_EMPTY

    async def synthesize(
        self,
        query: str,
        conversation: Sequence[ChatTurn],
        results: AggregatedSearchResults,
        web_summary: str,
    ) -> str:
        """Produce the final answer.  Never raises."""
        try:
            messages = self.build_answer_messages(query, conversation, results, web_summary)
            answer = await self._llm.chat(messages)
        except Exception as exc:  # noqa: BLE001
            logger.error("answer_synthesis_failed", error_type=type(exc).__name__, error=str(exc))
            return ERROR_RESPONSE
        logger.info("answer_synthesized", turns=len(conversation), chars=len(answer))
        return answer or EMPTY_RESPONSE

    async def answer(
        self,
        query: str,
        conversation: Sequence[ChatTurn],
        results: AggregatedSearchResults,
    ) -> str:
        """Run the summary call, then the main answer call."""
        summary = await self.web_search_summary(query, results)
        return await self.synthesize(query, conversation, results, summary)
