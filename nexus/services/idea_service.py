"""
nexus.services.idea_service — Idea Board
=========================================

Votes are a set keyed by account (``idea_votes`` composite PK); the toggle
goes through :mod:`nexus.database.membership` so an account can never hold
two votes on the same idea.

Orderings:
* ``latest``   — created_at desc, id desc.
* ``trending`` — vote count desc, then created_at desc, then id desc.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Engine, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from nexus.database.membership import insert_if_absent, remove_if_present
from nexus.database.models import (
    Idea,
    IdeaCategory,
    IdeaComment,
    IdeaSort,
    IdeaStatus,
    IdeaVote,
)
from nexus.exceptions import ConflictError, NotFoundError, ValidationError
from nexus.services.account_service import load_account, public_author

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------
def _comment_dict(c: IdeaComment) -> dict[str, Any]:
    return {
        "id": c.id,
        "text": c.text,
        "createdAt": c.created_at.isoformat() if c.created_at else None,
        "user": {"id": c.account.id, "name": c.account.name, "avatar": c.account.avatar},
    }


def idea_dict(idea: Idea) -> dict[str, Any]:
    return {
        "id": idea.id,
        "title": idea.title,
        "description": idea.description,
        "category": idea.category,
        "status": idea.status,
        "author": public_author(idea.author),
        "createdAt": idea.created_at.isoformat() if idea.created_at else None,
    }


def _load_idea(session: Session, idea_id: int) -> Idea:
    idea = session.get(Idea, idea_id)
    if idea is None:
        raise NotFoundError("Idea not found")
    return idea


def _vote_count(session: Session, idea_id: int) -> int:
    return session.scalar(
        select(func.count()).select_from(IdeaVote).where(IdeaVote.idea_id == idea_id)
    ) or 0


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------
def list_ideas(
    engine: Engine,
    account_id: int,
    *,
    category: IdeaCategory | str | None = None,
    sort: IdeaSort | str = IdeaSort.TRENDING,
) -> list[dict[str, Any]]:
    """Ideas with author, vote count, caller's vote flag and comment count."""
    with Session(engine) as session:
        query = select(Idea).options(
            selectinload(Idea.author),
            selectinload(Idea.votes),
            selectinload(Idea.comments),
        )
        if category:
            query = query.where(Idea.category == str(category))
        ideas = session.scalars(query).all()

        rows = [
            {
                **idea_dict(idea),
                "voteCount": len(idea.votes),
                "hasVoted": any(v.account_id == account_id for v in idea.votes),
                "commentCount": len(idea.comments),
                "_created": idea.created_at,
            }
            for idea in ideas
        ]

    # Python's sort is stable: apply the weakest key first.
    rows.sort(key=lambda r: r["id"], reverse=True)
    rows.sort(key=lambda r: r["_created"], reverse=True)
    if IdeaSort(sort) is IdeaSort.TRENDING:
        rows.sort(key=lambda r: r["voteCount"], reverse=True)

    for row in rows:
        del row["_created"]
    return rows


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------
def create_idea(
    engine: Engine,
    account_id: int,
    *,
    title: str,
    description: str,
    category: IdeaCategory | str,
) -> dict[str, Any]:
    """Submit a new idea owned by *account_id* with status ``pending``."""
    if not title.strip() or not description.strip():
        raise ValidationError("Title and description are required")

    with Session(engine, expire_on_commit=False) as session:
        load_account(session, account_id)
        idea = Idea(
            title=title.strip(),
            description=description.strip(),
            category=str(category),
            author_id=account_id,
            status=IdeaStatus.PENDING.value,
        )
        session.add(idea)
        session.commit()
        session.refresh(idea)

        logger.info("Account %d submitted idea %d", account_id, idea.id)
        return {**idea_dict(idea), "votes": [], "comments": []}


def toggle_vote(engine: Engine, idea_id: int, account_id: int) -> dict[str, Any]:
    """Remove the caller's vote if present, otherwise add it.

    Returns ``{"voteCount": int, "hasVoted": bool}``.
    """
    with Session(engine) as session:
        _load_idea(session, idea_id)
        load_account(session, account_id)

        removed = remove_if_present(
            session, IdeaVote, idea_id=idea_id, account_id=account_id
        )
        if not removed:
            try:
                insert_if_absent(
                    session, IdeaVote, {"idea_id": idea_id, "account_id": account_id}
                )
            except IntegrityError as exc:
                session.rollback()
                raise ConflictError("Vote already recorded") from exc

        session.commit()
        return {"voteCount": _vote_count(session, idea_id), "hasVoted": not removed}


def add_comment(
    engine: Engine, idea_id: int, account_id: int, text: str
) -> list[dict[str, Any]]:
    """Append a comment; return the full thread with authors resolved."""
    if not text.strip():
        raise ValidationError("Comment text is required")

    with Session(engine) as session:
        _load_idea(session, idea_id)
        load_account(session, account_id)
        session.add(IdeaComment(idea_id=idea_id, account_id=account_id, text=text.strip()))
        session.commit()

        comments = session.scalars(
            select(IdeaComment)
            .options(selectinload(IdeaComment.account))
            .where(IdeaComment.idea_id == idea_id)
            .order_by(IdeaComment.id)
        ).all()
        return [_comment_dict(c) for c in comments]
