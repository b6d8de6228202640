"""
nexus.services.course_service — Catalog, Enrollment & Progress
===============================================================

Completion flow (:func:`set_progress`), all inside **one** transaction:

  1. Overwrite the caller's enrollment progress.
  2. If progress is now 100 and the enrollment was never completed:
     stamp ``completed_at``, add the xp bonus, grant the keyed
     ``Course Completed`` achievement.
  3. Commit.

Any failure along the way rolls back all three writes together.  Repeating
``progress=100`` is a no-op for rewards: the first completion is the only
one that pays out.  Two requests racing on the first completion collide on
the achievement key; the loser rolls back and gets :class:`ConflictError`.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from nexus.constants import (
    COMPLETION_ACHIEVEMENT_COLOR,
    COMPLETION_ACHIEVEMENT_ICON,
    COMPLETION_ACHIEVEMENT_NAME,
    COMPLETION_PROGRESS,
    completion_award_key,
)
from nexus.database.membership import find_member, insert_if_absent
from nexus.database.models import Course, CourseCategory, Enrollment
from nexus.exceptions import ConflictError, NotFoundError, ValidationError
from nexus.services.account_service import load_account
from nexus.services.achievement_service import grant_once

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------
def _prerequisite_dict(course: Course) -> dict[str, Any] | None:
    if course.prerequisite is None:
        return None
    return {"id": course.prerequisite.id, "title": course.prerequisite.title}


def course_dict(course: Course) -> dict[str, Any]:
    return {
        "id": course.id,
        "title": course.title,
        "description": course.description,
        "category": course.category,
        "duration": course.duration,
        "rating": course.rating,
        "thumbnail": course.thumbnail,
        "gradient": course.gradient,
        "icon": course.icon,
        "isLocked": course.is_locked,
        "prerequisite": _prerequisite_dict(course),
        "createdAt": course.created_at.isoformat() if course.created_at else None,
    }


def _enrollment_dict(e: Enrollment) -> dict[str, Any]:
    return {
        "userId": e.account_id,
        "progress": e.progress,
        "startedAt": e.started_at.isoformat() if e.started_at else None,
        "completedAt": e.completed_at.isoformat() if e.completed_at else None,
    }


def course_detail_dict(course: Course) -> dict[str, Any]:
    return {
        **course_dict(course),
        "enrolledUsers": [_enrollment_dict(e) for e in course.enrollments],
    }


def _load_course(session: Session, course_id: int) -> Course:
    course = session.get(Course, course_id)
    if course is None:
        raise NotFoundError("Course not found")
    return course


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
def list_courses(
    engine: Engine,
    account_id: int,
    category: CourseCategory | str | None = None,
) -> list[dict[str, Any]]:
    """All courses, newest first, annotated with the caller's progress."""
    with Session(engine) as session:
        query = (
            select(Course)
            .options(selectinload(Course.prerequisite))
            .order_by(Course.created_at.desc(), Course.id.desc())
        )
        if category:
            query = query.where(Course.category == str(category))
        courses = session.scalars(query).all()

        progress_by_course = dict(
            session.execute(
                select(Enrollment.course_id, Enrollment.progress)
                .where(Enrollment.account_id == account_id)
            ).tuples().all()
        )

        return [
            {
                **course_dict(c),
                "userProgress": progress_by_course.get(c.id, 0),
                "isEnrolled": c.id in progress_by_course,
            }
            for c in courses
        ]


def get_course(engine: Engine, course_id: int) -> dict[str, Any]:
    with Session(engine) as session:
        return course_detail_dict(_load_course(session, course_id))


def top_rated_title(session: Session, category: CourseCategory) -> str | None:
    """Title of the highest-rated course in *category*, if any."""
    return session.scalar(
        select(Course.title)
        .where(Course.category == category.value)
        .order_by(Course.rating.desc(), Course.id)
        .limit(1)
    )


# ---------------------------------------------------------------------------
# Enrollment
# ---------------------------------------------------------------------------
def enroll(engine: Engine, course_id: int, account_id: int) -> dict[str, Any]:
    """Add the caller to the course at progress 0.

    Raises :class:`NotFoundError` / :class:`ConflictError`.
    """
    with Session(engine, expire_on_commit=False) as session:
        course = _load_course(session, course_id)
        load_account(session, account_id)
        try:
            added = insert_if_absent(
                session,
                Enrollment,
                {"course_id": course_id, "account_id": account_id},
                progress=0,
            )
            if added is None:
                raise ConflictError("Already enrolled")
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ConflictError("Already enrolled") from exc

        logger.info("Account %d enrolled in course %d", account_id, course_id)
        session.refresh(course)
        return course_detail_dict(course)


def set_progress(
    engine: Engine,
    course_id: int,
    account_id: int,
    progress: int,
    *,
    completion_xp_bonus: int,
) -> dict[str, Any]:
    """Overwrite the caller's progress; pay out on first completion.

    Returns ``{"progress": int, "xpAwarded": int}``.
    """
    if not 0 <= progress <= COMPLETION_PROGRESS:
        raise ValidationError("Progress must be between 0 and 100")

    with Session(engine) as session:
        course = _load_course(session, course_id)
        account = load_account(session, account_id)
        enrollment = find_member(
            session, Enrollment, course_id=course_id, account_id=account_id
        )
        if enrollment is None:
            raise ValidationError("Not enrolled in this course")

        enrollment.progress = progress
        xp_awarded = 0

        try:
            if progress == COMPLETION_PROGRESS and enrollment.completed_at is None:
                enrollment.completed_at = datetime.now(UTC)
                achievement = grant_once(
                    session,
                    account_id=account_id,
                    award_key=completion_award_key(course_id),
                    name=COMPLETION_ACHIEVEMENT_NAME,
                    description=f"Completed {course.title}",
                    icon=COMPLETION_ACHIEVEMENT_ICON,
                    color=COMPLETION_ACHIEVEMENT_COLOR,
                )
                if achievement is not None:
                    account.xp += completion_xp_bonus
                    xp_awarded = completion_xp_bonus

            session.commit()
        except IntegrityError as exc:
            # A concurrent request recorded this completion first
            session.rollback()
            raise ConflictError("Course completion already recorded") from exc

    if xp_awarded:
        logger.info(
            "Account %d completed course %d (+%d xp)",
            account_id, course_id, xp_awarded,
        )
    return {"progress": progress, "xpAwarded": xp_awarded}
