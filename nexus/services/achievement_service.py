"""
nexus.services.achievement_service — Badge listing & system awards
===================================================================

Achievements are never created by a client request.  :func:`grant_once`
is called from inside another service's transaction (course completion)
and is idempotent per ``(account, award_key)``.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from nexus.database.membership import insert_if_absent
from nexus.database.models import Achievement

logger = logging.getLogger(__name__)


def achievement_dict(a: Achievement) -> dict[str, Any]:
    return {
        "id": a.id,
        "name": a.name,
        "description": a.description,
        "icon": a.icon,
        "color": a.color,
        "earnedAt": a.earned_at.isoformat() if a.earned_at else None,
    }


def list_achievements(engine: Engine, account_id: int) -> list[dict[str, Any]]:
    """All achievements owned by *account_id*, newest first."""
    with Session(engine) as session:
        rows = session.scalars(
            select(Achievement)
            .where(Achievement.account_id == account_id)
            .order_by(Achievement.earned_at.desc(), Achievement.id.desc())
        ).all()
        return [achievement_dict(a) for a in rows]


def grant_once(
    session: Session,
    *,
    account_id: int,
    award_key: str,
    name: str,
    description: str,
    icon: str,
    color: str,
) -> Achievement | None:
    """Add a keyed achievement within the caller's transaction.

    Returns the new row, or ``None`` if *award_key* was already granted.
    """
    row = insert_if_absent(
        session,
        Achievement,
        {"account_id": account_id, "award_key": award_key},
        name=name,
        description=description,
        icon=icon,
        color=color,
    )
    if row is None:
        logger.info("Award %s already held by account %d", award_key, account_id)
    return row
