"""
tests/test_chat_service.py — Assistant replies, chat log, seed reset
=====================================================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from nexus.database.models import Account, ChatLog, Course, Idea
from nexus.exceptions import NotFoundError
from nexus.services import account_service, achievement_service, chat_service
from nexus.services.seed import load_fixture, reset_and_seed


@pytest.fixture
def engine(db_engine):
    return db_engine


@pytest.fixture
def account_id(engine) -> int:
    return account_service.register(
        engine, name="Chatty", email="chatty@nexus.com", password="password123"
    )["id"]


class TestSendMessage:
    def test_course_question_names_top_technical_course(self, engine, account_id, courses):
        reply = chat_service.send_message(engine, account_id, "Recommend a course?")
        assert reply["intent"] == "training"
        assert "AI Tools for Modern Developers" in reply["response"]

    def test_course_question_without_catalog(self, engine, account_id):
        reply = chat_service.send_message(engine, account_id, "Recommend a course?")
        assert reply["intent"] == "training"
        assert "Skill Development" in reply["response"]

    def test_support_logs_ticket(self, engine, account_id):
        reply = chat_service.send_message(engine, account_id, "There's a bug")
        assert reply["intent"] == "support"
        assert "#IT-" in reply["response"]

    def test_unmatched_is_general(self, engine, account_id):
        assert chat_service.send_message(engine, account_id, "hello there")["intent"] == "general"

    def test_every_exchange_is_logged(self, engine, account_id):
        chat_service.send_message(engine, account_id, "hello there")
        chat_service.send_message(engine, account_id, "remote policy?")
        with Session(engine) as session:
            logs = session.scalars(select(ChatLog).order_by(ChatLog.id)).all()
        assert [(log.message, log.intent) for log in logs] == [
            ("hello there", "general"),
            ("remote policy?", "policy"),
        ]


    def test_deleted_account_is_not_logged(self, engine):
        with pytest.raises(NotFoundError, match="User not found"):
            chat_service.send_message(engine, 999, "hello there")
        with Session(engine) as session:
            assert session.scalars(select(ChatLog)).all() == []


class TestHistory:
    def test_newest_first_and_limited(self, engine, account_id):
        for n in range(5):
            chat_service.send_message(engine, account_id, f"message {n}")
        history = chat_service.get_history(engine, account_id, limit=3)
        assert [h["message"] for h in history] == ["message 4", "message 3", "message 2"]

    def test_history_is_per_account(self, engine, account_id):
        other = account_service.register(
            engine, name="Other", email="other@nexus.com", password="password123"
        )["id"]
        chat_service.send_message(engine, other, "mine only")
        assert chat_service.get_history(engine, account_id, limit=50) == []


class TestSeed:
    def test_demo_fixture_loads(self):
        fixture = load_fixture()
        assert fixture["account"]["email"] == "alex@nexus.com"
        assert len(fixture["courses"]) == 3

    def test_reset_replaces_everything(self, engine, account_id):
        chat_service.send_message(engine, account_id, "hello")

        counts = reset_and_seed(engine)
        assert counts == {"accounts": 1, "courses": 3, "ideas": 2, "achievements": 2}

        with Session(engine) as session:
            emails = session.scalars(select(Account.email)).all()
            assert emails == ["alex@nexus.com"]
            assert session.scalars(select(ChatLog)).all() == []
            locked = session.scalar(select(Course).where(Course.is_locked.is_(True)))
            assert locked.title == "Managing Remote Teams"
            assert len(session.scalars(select(Idea)).all()) == 2

    def test_seeded_account_can_log_in(self, engine):
        reset_and_seed(engine)
        user = account_service.authenticate(
            engine, email="alex@nexus.com", password="password123"
        )
        names = {a["name"] for a in achievement_service.list_achievements(engine, user["id"])}
        assert names == {"Early Bird", "Code Master"}

    def test_reset_is_repeatable(self, engine):
        reset_and_seed(engine)
        reset_and_seed(engine)
        with Session(engine) as session:
            assert len(session.scalars(select(Course)).all()) == 3
