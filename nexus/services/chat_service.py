"""
nexus.services.chat_service — Assistant exchanges
==================================================

Wraps the pure rule engine in :mod:`nexus.engine.chat` with the two
things it cannot do itself: look up the top-rated Technical course and
persist every exchange to ``chat_logs``.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from nexus.database.models import ChatLog, CourseCategory
from nexus.engine.chat import Intent, ReplyContext, classify, new_ticket_id, respond
from nexus.services.account_service import load_account
from nexus.services.course_service import top_rated_title

logger = logging.getLogger(__name__)


def chat_log_dict(log: ChatLog) -> dict[str, Any]:
    return {
        "id": log.id,
        "message": log.message,
        "response": log.response,
        "intent": log.intent,
        "createdAt": log.created_at.isoformat() if log.created_at else None,
    }


def _context_for(session: Session, message: str) -> ReplyContext:
    rule = classify(message)
    if rule is None:
        return ReplyContext()
    if rule.intent is Intent.TRAINING:
        return ReplyContext(top_course_title=top_rated_title(session, CourseCategory.TECHNICAL))
    if rule.intent is Intent.SUPPORT:
        return ReplyContext(ticket_id=new_ticket_id())
    return ReplyContext()


def send_message(engine: Engine, account_id: int, message: str) -> dict[str, Any]:
    """Answer *message* and record the exchange.

    Returns ``{"response": str, "intent": str}``.
    """
    with Session(engine) as session:
        load_account(session, account_id)
        reply = respond(message, _context_for(session, message))
        session.add(ChatLog(
            account_id=account_id,
            message=message,
            response=reply.response,
            intent=reply.intent.value,
        ))
        session.commit()

    if reply.intent is Intent.SUPPORT:
        logger.info("Support ticket raised by account %d", account_id)
    return {"response": reply.response, "intent": reply.intent.value}


def get_history(engine: Engine, account_id: int, *, limit: int) -> list[dict[str, Any]]:
    """The caller's *limit* most recent exchanges, newest first."""
    with Session(engine) as session:
        logs = session.scalars(
            select(ChatLog)
            .where(ChatLog.account_id == account_id)
            .order_by(ChatLog.created_at.desc(), ChatLog.id.desc())
            .limit(limit)
        ).all()
        return [chat_log_dict(log) for log in logs]
