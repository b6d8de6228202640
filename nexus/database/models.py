"""
nexus.database.models — SQLAlchemy 2.0 Data Models
===================================================

Tables:
- accounts          — Employee identities + gamification counters
- courses           — Learning catalog
- enrollments       — Per-account progress in a course (unique per pair)
- ideas             — Team idea board submissions
- idea_votes        — One vote per (idea, account)
- idea_comments     — Ordered comment thread per idea
- achievements      — Earned badges (system-granted, read-only afterwards)
- chat_logs         — Append-only assistant exchanges
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from nexus.constants import (
    DEFAULT_AVATAR_URL,
    DEFAULT_LEARNING_PATH_PROGRESS,
    DEFAULT_LEVEL,
    DEFAULT_PRODUCTIVITY_SCORE,
    DEFAULT_ROLE,
    DEFAULT_SKILLS,
    DEFAULT_STREAK,
    DEFAULT_XP,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Nexus ORM models."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class CourseCategory(enum.StrEnum):
    TECHNICAL = "Technical"
    SOFT_SKILLS = "Soft Skills"
    LEADERSHIP = "Leadership"


class IdeaCategory(enum.StrEnum):
    PROCESS_IMPROVEMENT = "Process Improvement"
    TECHNICAL_SOLUTION = "Technical Solution"
    TEAM_CULTURE = "Team Culture"


class IdeaStatus(enum.StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    IMPLEMENTED = "implemented"
    REJECTED = "rejected"


class IdeaSort(enum.StrEnum):
    """Orderings accepted by the idea board listing."""
    TRENDING = "trending"
    LATEST = "latest"


# ---------------------------------------------------------------------------
# Accounts — one row per registered employee
# ---------------------------------------------------------------------------
class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(100), default=DEFAULT_ROLE)
    avatar: Mapped[str] = mapped_column(String(500), default=DEFAULT_AVATAR_URL)

    # Gamification
    level: Mapped[int] = mapped_column(Integer, default=DEFAULT_LEVEL)
    xp: Mapped[int] = mapped_column(Integer, default=DEFAULT_XP)
    productivity_score: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_PRODUCTIVITY_SCORE
    )
    learning_path_progress: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_LEARNING_PATH_PROGRESS
    )
    skill_technical: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_SKILLS["technical"]
    )
    skill_communication: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_SKILLS["communication"]
    )
    skill_leadership: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_SKILLS["leadership"]
    )
    skill_design: Mapped[int] = mapped_column(Integer, default=DEFAULT_SKILLS["design"])
    streak: Mapped[int] = mapped_column(Integer, default=DEFAULT_STREAK)

    last_login: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
    )

    # Relationships
    enrollments: Mapped[list[Enrollment]] = relationship(
        back_populates="account", cascade="all, delete-orphan"
    )
    ideas: Mapped[list[Idea]] = relationship(
        back_populates="author", cascade="all, delete-orphan"
    )
    achievements: Mapped[list[Achievement]] = relationship(
        back_populates="account", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Account id={self.id} email={self.email!r} lvl={self.level}>"


# ---------------------------------------------------------------------------
# Courses — the learning catalog
# ---------------------------------------------------------------------------
class Course(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    duration: Mapped[str] = mapped_column(String(50), nullable=False)
    rating: Mapped[float] = mapped_column(Float, default=4.5)
    thumbnail: Mapped[str | None] = mapped_column(String(500), default=None)
    gradient: Mapped[str] = mapped_column(
        String(100), default="from-indigo-500 to-blue-600"
    )
    icon: Mapped[str] = mapped_column(String(50), default="brain-circuit")
    is_locked: Mapped[bool] = mapped_column(Boolean, default=False)
    prerequisite_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("courses.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    prerequisite: Mapped[Course | None] = relationship(remote_side="Course.id")
    enrollments: Mapped[list[Enrollment]] = relationship(
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Enrollment.id",
    )

    __table_args__ = (
        Index("ix_courses_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Course id={self.id} title={self.title!r}>"


# ---------------------------------------------------------------------------
# Enrollments — per-account progress marker
# ---------------------------------------------------------------------------
class Enrollment(Base):
    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    progress: Mapped[int] = mapped_column(Integer, default=0)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    # Set the first time progress reaches 100; guards the completion award.
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    course: Mapped[Course] = relationship(back_populates="enrollments")
    account: Mapped[Account] = relationship(back_populates="enrollments")

    __table_args__ = (
        UniqueConstraint("course_id", "account_id", name="uq_enrollments_course_account"),
        Index("ix_enrollments_account", "account_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Enrollment course={self.course_id} account={self.account_id} "
            f"progress={self.progress}>"
        )


# ---------------------------------------------------------------------------
# Ideas — team idea board
# ---------------------------------------------------------------------------
class Idea(Base):
    __tablename__ = "ideas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=IdeaStatus.PENDING.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    author: Mapped[Account] = relationship(back_populates="ideas")
    votes: Mapped[list[IdeaVote]] = relationship(
        back_populates="idea", cascade="all, delete-orphan"
    )
    comments: Mapped[list[IdeaComment]] = relationship(
        back_populates="idea",
        cascade="all, delete-orphan",
        order_by="IdeaComment.id",
    )

    __table_args__ = (
        Index("ix_ideas_author", "author_id"),
        Index("ix_ideas_created", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Idea id={self.id} title={self.title!r} status={self.status}>"


class IdeaVote(Base):
    __tablename__ = "idea_votes"

    idea_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ideas.id", ondelete="CASCADE"), primary_key=True
    )
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True
    )
    voted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    idea: Mapped[Idea] = relationship(back_populates="votes")

    def __repr__(self) -> str:
        return f"<IdeaVote idea={self.idea_id} account={self.account_id}>"


class IdeaComment(Base):
    __tablename__ = "idea_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    idea_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False
    )
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    idea: Mapped[Idea] = relationship(back_populates="comments")
    account: Mapped[Account] = relationship()

    __table_args__ = (
        Index("ix_idea_comments_idea", "idea_id"),
    )

    def __repr__(self) -> str:
        return f"<IdeaComment id={self.id} idea={self.idea_id}>"


# ---------------------------------------------------------------------------
# Achievements — earned badges
# ---------------------------------------------------------------------------
class Achievement(Base):
    __tablename__ = "achievements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(String(50), nullable=False)
    color: Mapped[str] = mapped_column(String(20), default="yellow")
    # System awards carry a key so the same milestone is never granted twice.
    award_key: Mapped[str | None] = mapped_column(String(100), nullable=True)
    earned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    account: Mapped[Account] = relationship(back_populates="achievements")

    __table_args__ = (
        UniqueConstraint("account_id", "award_key", name="uq_achievements_account_award"),
        Index("ix_achievements_account_earned", "account_id", "earned_at"),
    )

    def __repr__(self) -> str:
        return f"<Achievement id={self.id} account={self.account_id} name={self.name!r}>"


# ---------------------------------------------------------------------------
# ChatLog — append-only assistant exchanges
# ---------------------------------------------------------------------------
class ChatLog(Base):
    __tablename__ = "chat_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    intent: Mapped[str | None] = mapped_column(String(30), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_chat_logs_account_time", "account_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<ChatLog id={self.id} account={self.account_id} intent={self.intent}>"
