"""
nexus.constants — Shared Constants
===================================

Single source of truth for account defaults, award presentation and the
CSS vocabulary the web fragments share.  Import from here instead of
duplicating in services and renderers.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Account defaults (new registrations)
# ---------------------------------------------------------------------------
DEFAULT_ROLE = "Senior Developer"
DEFAULT_AVATAR_URL = "https://api.dicebear.com/7.x/avataaars/svg?seed=Felix"

DEFAULT_LEVEL = 5
DEFAULT_XP = 1250
DEFAULT_PRODUCTIVITY_SCORE = 94
DEFAULT_LEARNING_PATH_PROGRESS = 82
DEFAULT_STREAK = 12

DEFAULT_SKILLS: dict[str, int] = {
    "technical": 85,
    "communication": 62,
    "leadership": 70,
    "design": 55,
}

# ---------------------------------------------------------------------------
# Course completion award
# ---------------------------------------------------------------------------
COMPLETION_PROGRESS = 100
COMPLETION_ACHIEVEMENT_NAME = "Course Completed"
COMPLETION_ACHIEVEMENT_ICON = "graduation-cap"
COMPLETION_ACHIEVEMENT_COLOR = "blue"


def completion_award_key(course_id: int) -> str:
    """Per-account unique marker for the completion award of *course_id*."""
    return f"course-completed:{course_id}"


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
DASHBOARD_ACHIEVEMENT_COUNT = 3

# ---------------------------------------------------------------------------
# Presentation (used by nexus.web.render)
# ---------------------------------------------------------------------------
ACHIEVEMENT_COLOR_CLASSES: dict[str, str] = {
    "yellow": "bg-yellow-100 text-yellow-600",
    "blue": "bg-blue-100 text-blue-600",
    "purple": "bg-purple-100 text-purple-600",
    "green": "bg-green-100 text-green-600",
}

COURSE_GRADIENT_CLASSES: dict[str, str] = {
    "from-indigo-500 to-blue-600": "bg-gradient-to-br from-indigo-500 to-blue-600",
    "from-orange-400 to-pink-500": "bg-gradient-to-br from-orange-400 to-pink-500",
    "from-green-400 to-teal-500": "bg-gradient-to-br from-green-400 to-teal-500",
}

IDEA_CATEGORY_CLASSES: dict[str, str] = {
    "Process Improvement": "bg-purple-50 text-purple-700 border-purple-100",
    "Technical Solution": "bg-blue-50 text-blue-700 border-blue-100",
    "Team Culture": "bg-green-50 text-green-700 border-green-100",
}

VIEW_TITLES: dict[str, str] = {
    "dashboard": "Overview Dashboard",
    "training": "Skill Development",
    "assistant": "AI Assistant",
    "team": "Collaboration Hub",
}
