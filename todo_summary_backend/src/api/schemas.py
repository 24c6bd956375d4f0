from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoText(BaseModel):
    """
    Request body for creating or replacing a Todo.

    text is optional at the schema level so that a missing value reaches the
    handler, which answers 400 "Text is required" before any store call.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"text": "Buy milk"}})

    text: Optional[str] = Field(default=None, description="Todo text; must be non-empty")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.

    Extra columns coming from the store are passed through.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"id": 1, "text": "Buy milk"}},
    )

    id: Any = Field(..., description="Identifier assigned by the store")
    text: Optional[str] = Field(default=None, description="Todo text")


class MessageOut(BaseModel):
    message: str = Field(..., description="Human-readable status message")


class ErrorOut(BaseModel):
    error: str = Field(..., description="Human-readable error message")


# PUBLIC_INTERFACE
class SummaryOut(BaseModel):
    """Response of a successful summarize-and-notify run."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Summary sent to Slack successfully.",
                "summary": "You have 2 todos:\n- Buy milk\n- Walk dog",
            }
        }
    )

    message: str = Field(..., description="Fixed success message")
    summary: str = Field(..., description="Summary text that was posted to the webhook")
