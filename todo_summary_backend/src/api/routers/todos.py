from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from ..errors import NotFoundError, ValidationError
from ..models import TodoEntity
from ..repositories import Repository
from ..schemas import ErrorOut, MessageOut, TodoOut, TodoText
from ..services import get_repository

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

_ERRORS = {
    400: {"model": ErrorOut, "description": "Text is required"},
    500: {"model": ErrorOut, "description": "Store call failed"},
}


def _require_text(payload: Optional[TodoText]) -> str:
    """
    Presence check done before any store call.
    """
    if payload is None or not payload.text:
        raise ValidationError("Text is required")
    return payload.text


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every todo in store-defined order.",
    responses={500: _ERRORS[500]},
)
def list_todos(repo: Repository = Depends(get_repository)) -> List[TodoEntity]:
    return repo.list()


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new todo and return it including the id assigned by the store.",
    responses=_ERRORS,
)
def create_todo(
    payload: Optional[TodoText] = Body(default=None),
    repo: Repository = Depends(get_repository),
) -> TodoEntity:
    text = _require_text(payload)
    return repo.create(text)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Replace Todo",
    description="Replace the text of an existing todo.",
    responses={**_ERRORS, 404: {"model": ErrorOut, "description": "Todo not found"}},
)
def put_todo(
    todo_id: str,
    payload: Optional[TodoText] = Body(default=None),
    repo: Repository = Depends(get_repository),
) -> TodoEntity:
    """
    Full update keyed by id. An id matching no record answers 404.
    """
    text = _require_text(payload)
    updated = repo.update(todo_id, text)
    if updated is None:
        raise NotFoundError("Todo not found")
    return updated


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=MessageOut,
    summary="Delete Todo",
    description=(
        "Delete a todo by id. Succeeds whether or not a record matched, since the store "
        "does not distinguish the two."
    ),
    responses={500: _ERRORS[500]},
)
def delete_todo(todo_id: str, repo: Repository = Depends(get_repository)) -> MessageOut:
    repo.delete(todo_id)
    return MessageOut(message="Todo deleted successfully")
