"""
nexus.web.state — Explicit client view state
=============================================

Everything the single-page client used to keep in globals (the active
view, the bearer token, the signed-in user) lives in one immutable
:class:`ViewState`.  Transitions return a new instance; renderers receive
the state they should draw.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from nexus.constants import VIEW_TITLES

VIEWS: tuple[str, ...] = tuple(VIEW_TITLES)
DEFAULT_VIEW = "dashboard"


@dataclass(frozen=True, slots=True)
class ViewState:
    active_view: str = DEFAULT_VIEW
    token: str | None = None
    current_user: dict[str, Any] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.active_view not in VIEW_TITLES:
            raise ValueError(f"Unknown view: {self.active_view!r}")

    @property
    def title(self) -> str:
        return VIEW_TITLES[self.active_view]

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def show_view(self, view: str) -> ViewState:
        """Switch the active view.  Raises ``ValueError`` for unknown views."""
        return replace(self, active_view=view)

    def signed_in(self, token: str, user: dict[str, Any]) -> ViewState:
        return replace(self, token=token, current_user=user, active_view=DEFAULT_VIEW)

    def signed_out(self) -> ViewState:
        return ViewState()
