"""
nexus.engine.chat — Keyword Intent Rules for the Assistant
===========================================================

An ordered tuple of :class:`IntentRule`.  The first rule with a keyword
contained in the lower-cased message wins; nothing matching yields the
``general`` fallback.  Each rule renders its reply from a
:class:`ReplyContext`, so the only inputs that vary between calls (the
top-rated Technical course, the ticket number) are supplied by the caller.

This module is pure calculation — no database I/O.
"""

from __future__ import annotations

import enum
import html
import random
from collections.abc import Callable
from dataclasses import dataclass


class Intent(enum.StrEnum):
    TRAINING = "training"
    IDEA = "idea"
    POLICY = "policy"
    SUPPORT = "support"
    GENERAL = "general"


@dataclass(frozen=True, slots=True)
class ReplyContext:
    """Inputs a reply template may interpolate."""

    top_course_title: str | None = None
    ticket_id: str = ""


@dataclass(frozen=True, slots=True)
class IntentRule:
    intent: Intent
    keywords: tuple[str, ...]
    reply: Callable[[ReplyContext], str]

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


@dataclass(frozen=True, slots=True)
class ChatReply:
    intent: Intent
    response: str


# ---------------------------------------------------------------------------
# Reply templates
# ---------------------------------------------------------------------------
def _training_reply(ctx: ReplyContext) -> str:
    if ctx.top_course_title is None:
        return (
            "I couldn't find a technical course right now, but the "
            "<b>Skill Development</b> catalog has everything currently on offer."
        )
    return (
        f"I found a highly rated course for you: <b>'{html.escape(ctx.top_course_title)}'</b>. "
        "It matches your technical profile."
    )


def _idea_reply(ctx: ReplyContext) -> str:
    return (
        "That's great! Innovation drives us forward. "
        "You can submit your idea directly to the Team Hub."
    )


def _policy_reply(ctx: ReplyContext) -> str:
    return (
        "<b>Remote Work Policy (Section 4.2):</b><br>"
        "Employees are permitted to work remotely up to 3 days a week with "
        "manager approval. Core hours are 10 AM - 3 PM."
    )


def _support_reply(ctx: ReplyContext) -> str:
    return (
        "I'm sorry you're facing an issue. "
        f"I've logged ticket <b>#{ctx.ticket_id}</b> for you. "
        "Support usually responds within 2 hours."
    )


GENERAL_REPLY = (
    "I can help you with HR policies, technical documentation, or finding "
    "training. What do you need?"
)

# Priority order matters: "help me find a course" is training, not support.
RULES: tuple[IntentRule, ...] = (
    IntentRule(Intent.TRAINING, ("training", "course", "learn"), _training_reply),
    IntentRule(Intent.IDEA, ("idea", "suggestion"), _idea_reply),
    IntentRule(Intent.POLICY, ("policy", "remote", "hr"), _policy_reply),
    IntentRule(Intent.SUPPORT, ("bug", "issue", "help"), _support_reply),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def classify(message: str) -> IntentRule | None:
    """Return the first rule matching *message*, or ``None`` for general."""
    lowered = message.lower()
    for rule in RULES:
        if rule.matches(lowered):
            return rule
    return None


def new_ticket_id(rng: random.Random | None = None) -> str:
    """Generate a support ticket reference like ``IT-4821``."""
    rng = rng or random
    return f"IT-{rng.randrange(10000)}"


def respond(message: str, ctx: ReplyContext) -> ChatReply:
    """Classify *message* and render the canned reply for its intent."""
    rule = classify(message)
    if rule is None:
        return ChatReply(Intent.GENERAL, GENERAL_REPLY)
    return ChatReply(rule.intent, rule.reply(ctx))
