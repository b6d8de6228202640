"""
tests/test_idea_service.py — Idea board, vote toggle, comments
===============================================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from nexus.database.models import IdeaVote
from nexus.exceptions import NotFoundError, ValidationError
from nexus.services import account_service, idea_service


@pytest.fixture
def engine(db_engine):
    return db_engine


def _account(engine, n: int) -> int:
    return account_service.register(
        engine, name=f"User {n}", email=f"user{n}@nexus.com", password="password123"
    )["id"]


@pytest.fixture
def author(engine) -> int:
    return _account(engine, 1)


def _submit(engine, author_id: int, title: str, category: str = "Team Culture") -> int:
    return idea_service.create_idea(
        engine, author_id, title=title, description=f"{title} details", category=category
    )["id"]


class TestCreate:
    def test_new_idea_shape(self, engine, author):
        idea = idea_service.create_idea(
            engine, author,
            title="Fail Fast Fridays",
            description="Weekly retro on what didn't work.",
            category="Process Improvement",
        )
        assert idea["status"] == "pending"
        assert idea["votes"] == []
        assert idea["comments"] == []
        assert idea["author"]["id"] == author
        assert idea["author"]["name"] == "User 1"
        assert "voteCount" not in idea

    def test_dashboard_counts_ideas(self, engine, author):
        _submit(engine, author, "One")
        _submit(engine, author, "Two")
        assert account_service.get_dashboard(engine, author)["totalIdeas"] == 2


class TestVote:
    def test_vote_then_unvote(self, engine, author):
        idea_id = _submit(engine, author, "Bridge")
        assert idea_service.toggle_vote(engine, idea_id, author) == {"voteCount": 1, "hasVoted": True}
        assert idea_service.toggle_vote(engine, idea_id, author) == {"voteCount": 0, "hasVoted": False}

    def test_votes_from_different_accounts_add_up(self, engine, author):
        idea_id = _submit(engine, author, "Bridge")
        other = _account(engine, 2)
        idea_service.toggle_vote(engine, idea_id, author)
        result = idea_service.toggle_vote(engine, idea_id, other)
        assert result == {"voteCount": 2, "hasVoted": True}

    def test_never_more_than_one_vote_per_account(self, engine, author):
        idea_id = _submit(engine, author, "Bridge")
        for _ in range(5):
            idea_service.toggle_vote(engine, idea_id, author)
        with Session(engine) as session:
            rows = session.scalar(
                select(func.count()).select_from(IdeaVote).where(IdeaVote.idea_id == idea_id)
            )
        assert rows == 1

    def test_missing_idea(self, engine, author):
        with pytest.raises(NotFoundError, match="Idea not found"):
            idea_service.toggle_vote(engine, 404, author)


class TestList:
    def test_has_voted_is_per_caller(self, engine, author):
        idea_id = _submit(engine, author, "Bridge")
        other = _account(engine, 2)
        idea_service.toggle_vote(engine, idea_id, other)

        mine = idea_service.list_ideas(engine, author)[0]
        theirs = idea_service.list_ideas(engine, other)[0]
        assert mine["voteCount"] == theirs["voteCount"] == 1
        assert mine["hasVoted"] is False
        assert theirs["hasVoted"] is True

    def test_latest_is_newest_first(self, engine, author):
        ids = [_submit(engine, author, t) for t in ("A", "B", "C")]
        listing = idea_service.list_ideas(engine, author, sort="latest")
        assert [i["id"] for i in listing] == list(reversed(ids))

    def test_trending_orders_by_votes_then_recency(self, engine, author):
        a = _submit(engine, author, "A")
        b = _submit(engine, author, "B")
        c = _submit(engine, author, "C")
        voters = [_account(engine, n) for n in (2, 3)]
        for voter in voters:
            idea_service.toggle_vote(engine, a, voter)
        idea_service.toggle_vote(engine, b, voters[0])

        listing = idea_service.list_ideas(engine, author, sort="trending")
        assert [i["id"] for i in listing] == [a, b, c]

        idea_service.toggle_vote(engine, c, voters[0])
        listing = idea_service.list_ideas(engine, author, sort="trending")
        # b and c tie on one vote; the newer one wins.
        assert [i["id"] for i in listing] == [a, c, b]

    def test_category_filter(self, engine, author):
        _submit(engine, author, "Process", category="Process Improvement")
        _submit(engine, author, "Tech", category="Technical Solution")
        listing = idea_service.list_ideas(engine, author, category="Technical Solution")
        assert [i["title"] for i in listing] == ["Tech"]


class TestComments:
    def test_comment_thread(self, engine, author):
        idea_id = _submit(engine, author, "Bridge")
        other = _account(engine, 2)
        idea_service.add_comment(engine, idea_id, author, "First!")
        comments = idea_service.add_comment(engine, idea_id, other, "  Second  ")

        assert [c["text"] for c in comments] == ["First!", "Second"]
        assert comments[1]["user"]["name"] == "User 2"
        assert set(comments[1]["user"]) == {"id", "name", "avatar"}

        listing = idea_service.list_ideas(engine, author)
        assert listing[0]["commentCount"] == 2

    def test_comment_on_missing_idea(self, engine, author):
        with pytest.raises(NotFoundError):
            idea_service.add_comment(engine, 404, author, "hello")

    def test_blank_comment_rejected(self, engine, author):
        idea_id = _submit(engine, author, "Bridge")
        with pytest.raises(ValidationError):
            idea_service.add_comment(engine, idea_id, author, "   ")


class TestMissingAccount:
    GONE = 999

    def test_create_for_deleted_account(self, engine, author):
        with pytest.raises(NotFoundError, match="User not found"):
            idea_service.create_idea(
                engine, self.GONE, title="Orphan", description="No author", category="Team Culture"
            )
        assert idea_service.list_ideas(engine, author) == []

    def test_vote_and_comment_for_deleted_account(self, engine, author):
        idea_id = _submit(engine, author, "Bridge")
        with pytest.raises(NotFoundError, match="User not found"):
            idea_service.toggle_vote(engine, idea_id, self.GONE)
        with pytest.raises(NotFoundError, match="User not found"):
            idea_service.add_comment(engine, idea_id, self.GONE, "hello")

        listing = idea_service.list_ideas(engine, author)
        assert listing[0]["voteCount"] == 0
        assert listing[0]["commentCount"] == 0
