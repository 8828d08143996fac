"""Helpers shared by the repositories.

Repositories flush but never commit; the calling manager owns the
transaction.
"""

from typing import Callable, Optional, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")


def save_audited(db: Session, model: T, clock: Callable) -> T:
    """Insert or update ``model``, refreshing its audit timestamps.

    ``created_date`` is set on insert only; ``last_modified_date`` on every save.
    """
    now = clock()
    if model.created_date is None:
        model.created_date = now
    model.last_modified_date = now
    db.add(model)
    db.flush()
    return model


def delete_model(db: Session, model) -> None:
    db.delete(model)
    db.flush()


def contains_ignore_case(column, query: Optional[str]):
    """Case-insensitive substring filter; an empty query matches every row."""
    return column.icontains(query or "", autoescape=True)
