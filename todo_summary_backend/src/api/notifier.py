from __future__ import annotations

import logging
from typing import Optional

import httpx

from .errors import UpstreamError
from .settings import Settings

logger = logging.getLogger(__name__)

SUMMARY_LABEL = "📝 *Todo Summary:*"


# PUBLIC_INTERFACE
def format_message(summary: str) -> str:
    """Prefix the summary with the fixed label line."""
    return f"{SUMMARY_LABEL}\n{summary}"


# PUBLIC_INTERFACE
class SlackNotifier:
    """
    Posts a summary to a Slack incoming webhook with a single POST.

    There is no retry; any failure is raised as UpstreamError.
    """

    def __init__(self, client: httpx.Client, webhook_url: Optional[str], timeout: float = 10.0) -> None:
        self._client = client
        self._webhook_url = webhook_url
        self._timeout = timeout

    def send(self, summary: str) -> None:
        if not self._webhook_url:
            raise UpstreamError("SLACK_WEBHOOK_URL is not configured")
        try:
            response = self._client.post(
                self._webhook_url,
                json={"text": format_message(summary)},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"Webhook returned {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamError(str(exc) or exc.__class__.__name__) from exc


# PUBLIC_INTERFACE
def build_notifier(settings: Settings, client: httpx.Client) -> SlackNotifier:
    return SlackNotifier(client, settings.slack_webhook_url, timeout=settings.http_timeout_seconds)
