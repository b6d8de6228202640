"""
nexus.web.render — HTML fragments for the workspace views
==========================================================

Each ``render_*`` function takes the JSON shapes the API already returns
and produces an HTML fragment via the Jinja2 templates next to this
module.  Autoescaping is on: only assistant replies (which carry the rule
engine's own ``<b>``/``<br>`` markup) are inserted unescaped.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from nexus.constants import (
    ACHIEVEMENT_COLOR_CLASSES,
    COURSE_GRADIENT_CLASSES,
    DASHBOARD_ACHIEVEMENT_COUNT,
    DEFAULT_AVATAR_URL,
    IDEA_CATEGORY_CLASSES,
)
from nexus.web.state import ViewState

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def _short_date(value: str | None) -> str:
    if not value:
        return ""
    return datetime.fromisoformat(value).strftime("%b %d, %Y")


def _build_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["achievement_color"] = (
        lambda color: ACHIEVEMENT_COLOR_CLASSES.get(color, ACHIEVEMENT_COLOR_CLASSES["blue"])
    )
    env.filters["course_gradient"] = (
        lambda g: COURSE_GRADIENT_CLASSES.get(
            g, COURSE_GRADIENT_CLASSES["from-indigo-500 to-blue-600"]
        )
    )
    env.filters["idea_category"] = lambda c: IDEA_CATEGORY_CLASSES.get(c, "")
    env.filters["short_date"] = _short_date
    return env


_env = _build_env()


def _render(template: str, **context: Any) -> str:
    return _env.get_template(template).render(**context).strip()


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------
def render_achievements(achievements: list[dict[str, Any]]) -> str:
    """The dashboard badge strip: at most three, newest first as given."""
    return _render("achievements.html", achievements=achievements[:DASHBOARD_ACHIEVEMENT_COUNT])


def render_courses(courses: list[dict[str, Any]]) -> str:
    return _render("courses.html", courses=courses)


def render_ideas(ideas: list[dict[str, Any]]) -> str:
    return _render("ideas.html", ideas=ideas)


# ---------------------------------------------------------------------------
# Assistant
# ---------------------------------------------------------------------------
def render_chat_message(text: str, sender: str, state: ViewState) -> str:
    """One chat bubble.  *sender* is ``"user"`` or ``"bot"``."""
    user = state.current_user or {}
    return _render(
        "chat_message.html",
        text=text,
        sender=sender,
        avatar=user.get("avatar") or DEFAULT_AVATAR_URL,
    )


def render_chat_history(logs: list[dict[str, Any]], state: ViewState) -> str:
    """Render stored exchanges oldest first (the API returns newest first)."""
    bubbles = []
    for log in reversed(logs):
        bubbles.append(render_chat_message(log["message"], "user", state))
        bubbles.append(render_chat_message(log["response"], "bot", state))
    return "\n".join(bubbles)


# ---------------------------------------------------------------------------
# Chrome
# ---------------------------------------------------------------------------
def render_notification(message: str, kind: str = "success") -> str:
    return _render("notification.html", message=message, kind=kind)


def render_dashboard(stats: dict[str, Any]) -> str:
    return _render(
        "dashboard.html",
        stats=stats,
        achievements_html=Markup(render_achievements(stats.get("achievements", []))),
    )


def render_view(state: ViewState, body: str) -> str:
    """Wrap an already-rendered *body* in the page chrome for *state*."""
    return _render("view.html", state=state, body=Markup(body))
