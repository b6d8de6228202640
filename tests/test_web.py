"""
tests/test_web.py — View state & HTML fragment rendering
=========================================================
Pure unit tests: renderers take plain dicts, no database.
"""

from __future__ import annotations

import dataclasses

import pytest

from nexus.web import render
from nexus.web.state import VIEWS, ViewState

USER = {"id": 1, "name": "Alex Morgan", "role": "Senior Developer", "avatar": "https://a/x.svg"}


def _course(**overrides):
    course = {
        "id": 1,
        "title": "AI Tools for Modern Developers",
        "description": "LLMs in your workflow.",
        "category": "Technical",
        "duration": "2h 30m",
        "rating": 4.8,
        "gradient": "from-indigo-500 to-blue-600",
        "icon": "brain-circuit",
        "isLocked": False,
        "prerequisite": None,
        "userProgress": 0,
        "isEnrolled": False,
    }
    course.update(overrides)
    return course


def _idea(**overrides):
    idea = {
        "id": 7,
        "title": "Legacy System Bridge",
        "description": "Wrap the old SQL database.",
        "category": "Technical Solution",
        "author": {"id": 1, "name": "Alex Morgan", "avatar": "https://a/x.svg", "role": "Dev"},
        "createdAt": "2026-03-01T10:00:00+00:00",
        "voteCount": 3,
        "hasVoted": False,
        "commentCount": 2,
    }
    idea.update(overrides)
    return idea


class TestViewState:
    def test_default_is_signed_out_dashboard(self):
        state = ViewState()
        assert state.active_view == "dashboard"
        assert state.title == "Overview Dashboard"
        assert not state.is_authenticated

    @pytest.mark.parametrize(
        ("view", "title"),
        [
            ("training", "Skill Development"),
            ("assistant", "AI Assistant"),
            ("team", "Collaboration Hub"),
        ],
    )
    def test_show_view(self, view, title):
        state = ViewState().show_view(view)
        assert state.active_view == view
        assert state.title == title

    def test_show_view_returns_new_state(self):
        before = ViewState()
        after = before.show_view("team")
        assert before.active_view == "dashboard"
        assert after is not before

    def test_unknown_view_rejected(self):
        with pytest.raises(ValueError):
            ViewState().show_view("settings")

    def test_sign_in_and_out(self):
        state = ViewState().show_view("team").signed_in("tok", USER)
        assert state.is_authenticated
        assert state.active_view == "dashboard"
        assert state.current_user == USER
        assert state.signed_out() == ViewState()

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ViewState().active_view = "team"

    def test_views(self):
        assert set(VIEWS) == {"dashboard", "training", "assistant", "team"}


class TestAchievements:
    def test_empty(self):
        assert "No achievements yet" in render.render_achievements([])

    def test_at_most_three(self):
        badges = [
            {"id": n, "name": f"Badge {n}", "description": "d", "icon": "award", "color": "yellow"}
            for n in range(5)
        ]
        html = render.render_achievements(badges)
        assert html.count("data-achievement-id") == 3
        assert "Badge 3" not in html

    def test_unknown_color_falls_back_to_blue(self):
        html = render.render_achievements(
            [{"id": 1, "name": "X", "description": "d", "icon": "award", "color": "magenta"}]
        )
        assert "bg-blue-100 text-blue-600" in html


class TestCourses:
    def test_empty(self):
        assert "No courses available" in render.render_courses([])

    def test_start_button_for_new_course(self):
        html = render.render_courses([_course()])
        assert "Start Course" in html
        assert "bg-gradient-to-br from-indigo-500 to-blue-600" in html

    def test_resume_with_progress_bar(self):
        html = render.render_courses([_course(isEnrolled=True, userProgress=40)])
        assert "Resume" in html
        assert "width: 40%" in html

    def test_locked(self):
        html = render.render_courses([_course(isLocked=True)])
        assert "Locked" in html
        assert 'data-lucide="lock"' in html
        assert "4.8" not in html

    def test_prerequisite_shown(self):
        html = render.render_courses([_course(prerequisite={"id": 2, "title": "Basics"})])
        assert "Requires: Basics" in html


class TestIdeas:
    def test_empty(self):
        assert "No ideas yet" in render.render_ideas([])

    def test_counts_and_category(self):
        html = render.render_ideas([_idea()])
        assert "3 Votes" in html
        assert "2 Comments" in html
        assert "bg-blue-50 text-blue-700" in html
        assert "Mar 01, 2026" in html

    def test_voted_marker(self):
        assert "voted" in render.render_ideas([_idea(hasVoted=True)])
        assert "voted" not in render.render_ideas([_idea(hasVoted=False)])

    def test_user_text_is_escaped(self):
        html = render.render_ideas([_idea(title="<script>alert(1)</script>")])
        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestChat:
    def test_user_bubble_escapes_text(self):
        state = ViewState(current_user=USER)
        html = render.render_chat_message("<b>hi</b>", "user", state)
        assert "&lt;b&gt;hi&lt;/b&gt;" in html
        assert "You" in html
        assert USER["avatar"] in html

    def test_bot_bubble_keeps_markup(self):
        html = render.render_chat_message("<b>Policy</b>", "bot", ViewState())
        assert "<b>Policy</b>" in html
        assert "Nexus AI" in html

    def test_history_renders_oldest_first(self):
        logs = [
            {"message": "second", "response": "r2"},
            {"message": "first", "response": "r1"},
        ]
        html = render.render_chat_history(logs, ViewState(current_user=USER))
        assert html.index("first") < html.index("second")
        assert html.count('data-sender="bot"') == 2


class TestChrome:
    def test_notification_kinds(self):
        assert "bg-green-500" in render.render_notification("Saved")
        assert "bg-red-500" in render.render_notification("Failed", kind="error")

    def test_dashboard(self):
        stats = {
            "productivityScore": 94,
            "learningPathProgress": 82,
            "totalIdeas": 4,
            "enrolledCourses": 2,
            "level": 5,
            "xp": 1400,
            "achievements": [],
        }
        html = render.render_dashboard(stats)
        assert "2 courses" in html
        assert "width: 82%" in html
        assert "No achievements yet" in html

    def test_view_wraps_body(self):
        state = ViewState(active_view="team", current_user=USER)
        html = render.render_view(state, "<p>body</p>")
        assert "Collaboration Hub" in html
        assert "<p>body</p>" in html
        assert 'id="team-view"' in html
        assert "Alex Morgan" in html
