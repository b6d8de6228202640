"""
nexus.services.seed — Demo Workspace Reset
===========================================

**Destructive.**  Wipes every table and loads the demo workspace from
``seeds/demo.yaml``: one account (Alex Morgan), three courses, two ideas
and two achievements.

Reachable two ways:
* ``python -m nexus.services.seed`` — for local setup.
* ``POST /api/seed`` — only when ``enable_seed_endpoint: true`` in
  ``config.yaml``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from sqlalchemy import Engine, delete
from sqlalchemy.orm import Session

from nexus.constants import DEFAULT_ROLE
from nexus.database.engine import create_db_engine, get_session, init_db
from nexus.database.models import (
    Account,
    Achievement,
    ChatLog,
    Course,
    Enrollment,
    Idea,
    IdeaComment,
    IdeaVote,
)
from nexus.security import hash_password

logger = logging.getLogger(__name__)

# Resolve the seeds directory relative to the project root
_SEEDS_DIR = Path(__file__).resolve().parent.parent.parent / "seeds"
DEMO_FIXTURE = _SEEDS_DIR / "demo.yaml"

# Children before parents.
_WIPE_ORDER = (ChatLog, Achievement, IdeaVote, IdeaComment, Idea, Enrollment, Course, Account)


def load_fixture(path: Path = DEMO_FIXTURE) -> dict[str, Any]:
    """Read a seed fixture.  Raises :class:`FileNotFoundError` if absent."""
    if not path.exists():
        raise FileNotFoundError(f"Seed fixture not found: {path}")
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _wipe(session: Session) -> None:
    for model in _WIPE_ORDER:
        session.execute(delete(model))


def _seed_account(session: Session, data: dict[str, Any]) -> Account:
    account = Account(
        name=data["name"],
        email=data["email"].strip().lower(),
        password_hash=hash_password(data["password"]),
        role=data.get("role", DEFAULT_ROLE),
    )
    session.add(account)
    session.flush()
    return account


def _seed_courses(session: Session, items: list[dict[str, Any]]) -> int:
    for item in items:
        session.add(Course(
            title=item["title"],
            description=item["description"],
            category=item["category"],
            duration=item["duration"],
            rating=item.get("rating", 4.5),
            gradient=item.get("gradient", "from-indigo-500 to-blue-600"),
            icon=item.get("icon", "brain-circuit"),
            is_locked=item.get("is_locked", False),
        ))
    logger.info("Seeded %d courses.", len(items))
    return len(items)


def _seed_ideas(session: Session, author: Account, items: list[dict[str, Any]]) -> int:
    for item in items:
        session.add(Idea(
            title=item["title"],
            description=item["description"],
            category=item["category"],
            author_id=author.id,
        ))
    logger.info("Seeded %d ideas.", len(items))
    return len(items)


def _seed_achievements(session: Session, owner: Account, items: list[dict[str, Any]]) -> int:
    for item in items:
        session.add(Achievement(
            account_id=owner.id,
            name=item["name"],
            description=item["description"],
            icon=item["icon"],
            color=item.get("color", "yellow"),
        ))
    logger.info("Seeded %d achievements.", len(items))
    return len(items)


def reset_and_seed(engine: Engine, fixture: dict[str, Any] | None = None) -> dict[str, int]:
    """Delete all data and insert *fixture* (default: the demo workspace).

    Runs in a single transaction; a failure leaves the old data in place.
    Returns the number of rows created per kind.
    """
    fixture = fixture if fixture is not None else load_fixture()

    with get_session(engine) as session:
        _wipe(session)
        account = _seed_account(session, fixture["account"])
        counts = {
            "accounts": 1,
            "courses": _seed_courses(session, fixture.get("courses") or []),
            "ideas": _seed_ideas(session, account, fixture.get("ideas") or []),
            "achievements": _seed_achievements(
                session, account, fixture.get("achievements") or []
            ),
        }

    logger.warning("Database reset and seeded with demo data (%s).", account.email)
    return counts


def main() -> None:
    """``python -m nexus.services.seed``"""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    )
    load_dotenv()

    engine = create_db_engine()
    init_db(engine)
    counts = reset_and_seed(engine)
    logger.info("Done: %s", ", ".join(f"{n} {kind}" for kind, n in counts.items()))


if __name__ == "__main__":
    main()
