"""
Error taxonomy shared by the routers and the upstream clients.

Routers raise ValidationError/NotFoundError before or after talking to the
store; store and webhook clients raise UpstreamError. The inference step never
raises and reports failures through summarizer.SummaryResult instead.
"""
from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Base error rendered as a JSON body with a human-readable message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# PUBLIC_INTERFACE
class ValidationError(AppError):
    """Client input is missing a required field."""

    status_code = status.HTTP_400_BAD_REQUEST


# PUBLIC_INTERFACE
class NotFoundError(AppError):
    """The store reported no record for the given id."""

    status_code = status.HTTP_404_NOT_FOUND


# PUBLIC_INTERFACE
class UpstreamError(AppError):
    """A call to the data store, inference API or webhook failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
