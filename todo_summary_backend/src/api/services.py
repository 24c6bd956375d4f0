"""
Process-scoped collaborators and the FastAPI dependencies that hand them out.

create_app() either receives a ready Services instance (tests) or builds one
from settings during application startup and closes it at shutdown.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

from .notifier import SlackNotifier, build_notifier
from .repositories import Repository, build_repository
from .settings import Settings
from .summarizer import TodoSummarizer, build_summarizer


# PUBLIC_INTERFACE
@dataclass
class Services:
    """Collaborators shared by every request for the lifetime of the process."""

    repository: Repository
    summarizer: TodoSummarizer
    notifier: SlackNotifier
    http_client: Optional[httpx.Client] = None

    def close(self) -> None:
        if self.http_client is not None:
            self.http_client.close()


# PUBLIC_INTERFACE
def build_services(settings: Settings) -> Services:
    """Create one HTTP client and wire the store, summarizer and notifier to it."""
    client = httpx.Client(timeout=settings.http_timeout_seconds)
    return Services(
        repository=build_repository(settings, client),
        summarizer=build_summarizer(settings, client),
        notifier=build_notifier(settings, client),
        http_client=client,
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_repository(request: Request) -> Repository:
    return get_services(request).repository


def get_summarizer(request: Request) -> TodoSummarizer:
    return get_services(request).summarizer


def get_notifier(request: Request) -> SlackNotifier:
    return get_services(request).notifier
