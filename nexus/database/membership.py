"""
nexus.database.membership — Set-like child rows keyed by account
=================================================================

Enrollments, idea votes and keyed achievements are "at most one row per
(parent, account)" collections.  These helpers are the only way services
touch them, so the contract is explicit:

* :func:`insert_if_absent` — add the row unless one with the same key
  exists; returns the new row, or ``None`` when it was already there.
* :func:`remove_if_present` — delete the row with the key if any; returns
  whether one was removed.

A unique constraint / composite primary key backs each collection, so a
concurrent duplicate surfaces as :class:`sqlalchemy.exc.IntegrityError`
at flush time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from nexus.database.models import Base

M = TypeVar("M", bound=Base)


def find_member(session: Session, model: type[M], **key: Any) -> M | None:
    """Return the row of *model* matching *key*, or ``None``."""
    return session.scalar(select(model).filter_by(**key))


def insert_if_absent(session: Session, model: type[M], key: dict[str, Any], **values: Any) -> M | None:
    """Insert ``model(**key, **values)`` unless a row with *key* exists.

    Returns the new (flushed) row, or ``None`` if one was already present.
    """
    if find_member(session, model, **key) is not None:
        return None
    row = model(**key, **values)
    session.add(row)
    session.flush()
    return row


def remove_if_present(session: Session, model: type[M], **key: Any) -> bool:
    """Delete the row of *model* matching *key*.  Returns ``True`` if removed."""
    result = session.execute(delete(model).filter_by(**key))
    return bool(result.rowcount)
