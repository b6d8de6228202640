"""
nexus.services.account_service — Registration, Login, Profile & Dashboard
==========================================================================

Every function takes the :class:`~sqlalchemy.Engine`, opens its own
session and returns plain JSON-ready dicts.  Password hashes never leave
this module.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Engine, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from nexus.constants import DASHBOARD_ACHIEVEMENT_COUNT
from nexus.database.models import Account, Achievement, Enrollment, Idea
from nexus.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from nexus.security import hash_password, verify_password
from nexus.services.achievement_service import achievement_dict

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

SKILL_FIELDS: dict[str, str] = {
    "technical": "skill_technical",
    "communication": "skill_communication",
    "leadership": "skill_leadership",
    "design": "skill_design",
}


# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------
def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def public_author(account: Account) -> dict[str, Any]:
    """The slice of an account shown next to ideas and comments."""
    return {
        "id": account.id,
        "name": account.name,
        "avatar": account.avatar,
        "role": account.role,
    }


def account_dict(account: Account) -> dict[str, Any]:
    """Public-safe projection of an account (no password hash)."""
    return {
        "id": account.id,
        "name": account.name,
        "email": account.email,
        "role": account.role,
        "avatar": account.avatar,
        "level": account.level,
        "xp": account.xp,
        "productivityScore": account.productivity_score,
        "learningPathProgress": account.learning_path_progress,
        "skills": {
            skill: getattr(account, column) for skill, column in SKILL_FIELDS.items()
        },
        "streak": account.streak,
        "lastLogin": _iso(account.last_login),
        "createdAt": _iso(account.created_at),
    }


def get_account_by_email(session: Session, email: str) -> Account | None:
    return session.scalar(select(Account).where(Account.email == email.strip().lower()))


def load_account(session: Session, account_id: int) -> Account:
    """The account behind a token.  Raises :class:`NotFoundError` once it is gone."""
    account = session.get(Account, account_id)
    if account is None:
        raise NotFoundError("User not found")
    return account


# ---------------------------------------------------------------------------
# Registration / Login
# ---------------------------------------------------------------------------
def register(engine: Engine, *, name: str, email: str, password: str) -> dict[str, Any]:
    """Create an account with default gamification values.

    Raises :class:`ConflictError` if the email is already registered.
    """
    email = email.strip().lower()
    password_hash = hash_password(password)

    with Session(engine, expire_on_commit=False) as session:
        if get_account_by_email(session, email) is not None:
            raise ConflictError("Email already registered")

        account = Account(name=name.strip(), email=email, password_hash=password_hash)
        session.add(account)
        try:
            session.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email
            session.rollback()
            raise ConflictError("Email already registered") from exc

        logger.info("Registered account %d (%s)", account.id, email)
        return account_dict(account)


def authenticate(engine: Engine, *, email: str, password: str) -> dict[str, Any]:
    """Verify credentials and stamp ``last_login``.

    Unknown email and wrong password raise the same
    :class:`AuthenticationError`.
    """
    with Session(engine, expire_on_commit=False) as session:
        account = get_account_by_email(session, email)
        if account is None or not verify_password(password, account.password_hash):
            logger.warning("Failed login for %s", email.strip().lower())
            raise AuthenticationError(INVALID_CREDENTIALS)

        account.last_login = datetime.now(UTC)
        session.commit()
        return account_dict(account)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------
def get_profile(engine: Engine, account_id: int) -> dict[str, Any]:
    with Session(engine) as session:
        account = load_account(session, account_id)
        return account_dict(account)


def update_profile(
    engine: Engine,
    account_id: int,
    *,
    name: str | None = None,
    role: str | None = None,
    skills: dict[str, int] | None = None,
) -> dict[str, Any]:
    """Partial update: only the arguments that are not ``None`` are written."""
    if (name is not None and not name.strip()) or (role is not None and not role.strip()):
        raise ValidationError("Name and role must not be blank")

    with Session(engine, expire_on_commit=False) as session:
        account = load_account(session, account_id)

        if name is not None:
            account.name = name.strip()
        if role is not None:
            account.role = role.strip()
        for skill, value in (skills or {}).items():
            column = SKILL_FIELDS.get(skill)
            if column is not None and value is not None:
                setattr(account, column, value)

        session.commit()
        return account_dict(account)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
def get_dashboard(engine: Engine, account_id: int) -> dict[str, Any]:
    """Aggregate headline stats for the caller.  Read-only."""
    with Session(engine) as session:
        account = load_account(session, account_id)

        recent = session.scalars(
            select(Achievement)
            .where(Achievement.account_id == account_id)
            .order_by(Achievement.earned_at.desc(), Achievement.id.desc())
            .limit(DASHBOARD_ACHIEVEMENT_COUNT)
        ).all()

        total_ideas = session.scalar(
            select(func.count()).select_from(Idea).where(Idea.author_id == account_id)
        ) or 0

        enrolled = session.scalar(
            select(func.count())
            .select_from(Enrollment)
            .where(Enrollment.account_id == account_id)
        ) or 0

        return {
            "productivityScore": account.productivity_score,
            "learningPathProgress": account.learning_path_progress,
            "totalIdeas": total_ideas,
            "achievements": [achievement_dict(a) for a in recent],
            "enrolledCourses": enrolled,
            "streak": account.streak,
            "level": account.level,
            "xp": account.xp,
        }
