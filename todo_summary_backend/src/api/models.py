from __future__ import annotations

from typing import Any, TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict, total=False):
    """
    A Todo row as returned by the store.

    Fields:
    - id: Identifier assigned by the store (opaque; int or uuid string)
    - text: Non-empty todo text

    The hosted store may add further columns (e.g. created_at); they are
    relayed unchanged.
    """

    id: Any
    text: str
