"""Initial schema: accounts, courses, enrollments, ideas, votes, comments,
achievements, chat logs

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now())


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("role", sa.String(100), server_default="Senior Developer"),
        sa.Column(
            "avatar",
            sa.String(500),
            server_default="https://api.dicebear.com/7.x/avataaars/svg?seed=Felix",
        ),
        sa.Column("level", sa.Integer(), server_default="5"),
        sa.Column("xp", sa.Integer(), server_default="1250"),
        sa.Column("productivity_score", sa.Integer(), server_default="94"),
        sa.Column("learning_path_progress", sa.Integer(), server_default="82"),
        sa.Column("skill_technical", sa.Integer(), server_default="85"),
        sa.Column("skill_communication", sa.Integer(), server_default="62"),
        sa.Column("skill_leadership", sa.Integer(), server_default="70"),
        sa.Column("skill_design", sa.Integer(), server_default="55"),
        sa.Column("streak", sa.Integer(), server_default="12"),
        _created_at("last_login"),
        _created_at(),
        _created_at("updated_at"),
    )

    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("duration", sa.String(50), nullable=False),
        sa.Column("rating", sa.Float(), server_default="4.5"),
        sa.Column("thumbnail", sa.String(500), nullable=True),
        sa.Column("gradient", sa.String(100), server_default="from-indigo-500 to-blue-600"),
        sa.Column("icon", sa.String(50), server_default="brain-circuit"),
        sa.Column("is_locked", sa.Boolean(), server_default=sa.false()),
        sa.Column(
            "prerequisite_id",
            sa.Integer(),
            sa.ForeignKey("courses.id", ondelete="SET NULL"),
            nullable=True,
        ),
        _created_at(),
    )
    op.create_index("ix_courses_category", "courses", ["category"])

    op.create_table(
        "enrollments",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column(
            "course_id", sa.Integer(),
            sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "account_id", sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("progress", sa.Integer(), server_default="0"),
        _created_at("started_at"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("course_id", "account_id", name="uq_enrollments_course_account"),
    )
    op.create_index("ix_enrollments_account", "enrollments", ["account_id"])

    op.create_table(
        "ideas",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column(
            "author_id", sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        _created_at(),
    )
    op.create_index("ix_ideas_author", "ideas", ["author_id"])
    op.create_index("ix_ideas_created", "ideas", ["created_at"])

    op.create_table(
        "idea_votes",
        sa.Column(
            "idea_id", sa.Integer(),
            sa.ForeignKey("ideas.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "account_id", sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True,
        ),
        _created_at("voted_at"),
    )

    op.create_table(
        "idea_comments",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column(
            "idea_id", sa.Integer(),
            sa.ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "account_id", sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("text", sa.Text(), nullable=False),
        _created_at(),
    )
    op.create_index("ix_idea_comments_idea", "idea_comments", ["idea_id"])

    op.create_table(
        "achievements",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column(
            "account_id", sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(50), nullable=False),
        sa.Column("color", sa.String(20), server_default="yellow"),
        sa.Column("award_key", sa.String(100), nullable=True),
        _created_at("earned_at"),
        sa.UniqueConstraint("account_id", "award_key", name="uq_achievements_account_award"),
    )
    op.create_index(
        "ix_achievements_account_earned", "achievements", ["account_id", "earned_at"]
    )

    op.create_table(
        "chat_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column(
            "account_id", sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("response", sa.Text(), nullable=False),
        sa.Column("intent", sa.String(30), nullable=True),
        _created_at(),
    )
    op.create_index("ix_chat_logs_account_time", "chat_logs", ["account_id", "created_at"])


def downgrade() -> None:
    op.drop_table("chat_logs")
    op.drop_table("achievements")
    op.drop_table("idea_comments")
    op.drop_table("idea_votes")
    op.drop_table("ideas")
    op.drop_table("enrollments")
    op.drop_table("courses")
    op.drop_table("accounts")
