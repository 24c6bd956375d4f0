from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..errors import AppError
from ..notifier import SlackNotifier
from ..repositories import Repository
from ..schemas import MessageOut, SummaryOut
from ..services import get_notifier, get_repository, get_summarizer
from ..summarizer import TodoSummarizer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summary"])

SUCCESS_MESSAGE = "Summary sent to Slack successfully."
NO_TODOS_MESSAGE = "No todos to summarize."
FAILURE_MESSAGE = "Failed to summarize todos or send to Slack."


# PUBLIC_INTERFACE
@router.post(
    "/summarize",
    response_model=SummaryOut,
    summary="Summarize Todos",
    description=(
        "Fetch all todos, summarize them with the completion API (or a plain fallback "
        "summary when it is unavailable) and post the result to the Slack webhook."
    ),
    responses={
        400: {"model": MessageOut, "description": NO_TODOS_MESSAGE},
        500: {"model": MessageOut, "description": FAILURE_MESSAGE},
    },
)
def summarize_todos(
    repo: Repository = Depends(get_repository),
    summarizer: TodoSummarizer = Depends(get_summarizer),
    notifier: SlackNotifier = Depends(get_notifier),
):
    """
    Fetch, summarize, notify, respond.

    Store and webhook failures end the request with a generic 500 even when a
    summary was already computed. Completion API failures never reach this
    level; the summarizer substitutes its fallback text.
    """
    try:
        todos = repo.list()
        if not todos:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"message": NO_TODOS_MESSAGE},
            )

        result = summarizer.summarize(todos)
        notifier.send(result.summary)
    except AppError as exc:
        logger.error("Error summarizing todos or sending to Slack: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": FAILURE_MESSAGE},
        )
    except Exception:
        logger.exception("Unexpected error summarizing todos or sending to Slack")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": FAILURE_MESSAGE},
        )

    logger.info("Sent summary of %d todos to Slack (degraded=%s)", len(todos), result.degraded)
    return SummaryOut(message=SUCCESS_MESSAGE, summary=result.summary)
