"""
Todo list summarization with graceful degradation.

TodoSummarizer asks a chat completion API for a summary of the current todos.
Any failure of that call is logged and replaced by a deterministic fallback
text, so summarize() always produces a SummaryResult and never raises.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .models import TodoEntity
from .settings import Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant that summarizes a to-do list."
USER_PROMPT_PREFIX = "Summarize this to-do list:\n"


class CompletionError(Exception):
    """The chat completion call failed or returned an unusable payload."""


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class SummaryResult:
    """
    Outcome of the summarize step.

    degraded is True when the fallback text was used; error then holds the
    reason the completion call failed.
    """

    summary: str
    degraded: bool = False
    error: Optional[str] = None


# PUBLIC_INTERFACE
def build_bullet_list(todos: Sequence[TodoEntity]) -> str:
    """Return the todos' text as newline-joined '- text' bullets."""
    return "\n".join(f"- {todo['text']}" for todo in todos)


# PUBLIC_INTERFACE
def fallback_summary(todos: Sequence[TodoEntity]) -> str:
    """Deterministic summary used when the completion API is unavailable."""
    return f"You have {len(todos)} todos:\n{build_bullet_list(todos)}"


class ChatCompletionClient:
    """Minimal client for an OpenAI compatible /chat/completions endpoint."""

    def __init__(
        self,
        client: httpx.Client,
        api_key: Optional[str],
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self.model = model
        self._timeout = timeout

    def complete(self, messages: List[Dict[str, str]], temperature: float) -> str:
        """
        Send the messages and return the first choice's message content.

        Raises:
            CompletionError on missing credentials, transport failure,
            non-2xx status or a payload without choices[0].message.content.
        """
        if not self._api_key:
            raise CompletionError("OPENAI_API_KEY is not configured")
        try:
            response = self._client.post(
                self._url,
                json={"model": self.model, "messages": messages, "temperature": temperature},
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPStatusError as exc:
            raise CompletionError(f"{exc.response.status_code}: {exc.response.text}") from exc
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise CompletionError(str(exc) or exc.__class__.__name__) from exc

        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise CompletionError("Completion response has no message content") from exc
        if not isinstance(content, str):
            raise CompletionError("Completion response has no message content")
        return content


# PUBLIC_INTERFACE
class TodoSummarizer:
    """Summarizes todos through ChatCompletionClient, falling back on failure."""

    def __init__(self, completions: ChatCompletionClient, temperature: float = 0.7) -> None:
        self._completions = completions
        self._temperature = temperature

    def summarize(self, todos: Sequence[TodoEntity]) -> SummaryResult:
        bullets = build_bullet_list(todos)
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"{USER_PROMPT_PREFIX}{bullets}"},
        ]
        try:
            summary = self._completions.complete(messages, self._temperature)
        except CompletionError as exc:
            logger.warning("Completion API error, falling back to plain summary: %s", exc)
            return SummaryResult(summary=fallback_summary(todos), degraded=True, error=str(exc))
        return SummaryResult(summary=summary)


# PUBLIC_INTERFACE
def build_summarizer(settings: Settings, client: httpx.Client) -> TodoSummarizer:
    """Construct the TodoSummarizer from settings and the shared HTTP client."""
    completions = ChatCompletionClient(
        client,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        timeout=settings.http_timeout_seconds,
    )
    return TodoSummarizer(completions, temperature=settings.summary_temperature)
