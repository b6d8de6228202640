"""
nexus.api.routes.ui — Server-rendered view fragments
=====================================================

``GET /api/ui/{view}`` returns the HTML for one workspace view
(``dashboard``, ``training``, ``team``, ``assistant``) drawn for the
caller, using the same service calls as the JSON routes.  An optional
``notice`` (with ``kind`` success or error) is drawn as a toast above the
view, so a client can confirm the action that led to it.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from nexus.api.deps import CurrentIdentity, get_config, get_engine
from nexus.config import NexusConfig
from nexus.database.models import IdeaSort
from nexus.exceptions import NotFoundError
from nexus.services import account_service, chat_service, course_service, idea_service
from nexus.web import render
from nexus.web.state import VIEWS, ViewState

router = APIRouter(prefix="/ui", tags=["ui"])


@router.get("/{view}", response_class=HTMLResponse)
def view_fragment(
    view: str,
    identity: CurrentIdentity,
    cfg: NexusConfig = Depends(get_config),
    engine=Depends(get_engine),
    notice: str | None = Query(default=None, max_length=200),
    kind: Literal["success", "error"] = "success",
):
    if view not in VIEWS:
        raise NotFoundError(f"Unknown view: {view}")

    user = account_service.get_profile(engine, identity.account_id)
    state = ViewState(active_view=view, current_user=user)

    if view == "dashboard":
        body = render.render_dashboard(
            account_service.get_dashboard(engine, identity.account_id)
        )
    elif view == "training":
        body = render.render_courses(
            course_service.list_courses(engine, identity.account_id)
        )
    elif view == "team":
        body = render.render_ideas(
            idea_service.list_ideas(engine, identity.account_id, sort=IdeaSort.TRENDING)
        )
    else:
        body = render.render_chat_history(
            chat_service.get_history(
                engine, identity.account_id, limit=cfg.chat_history_limit
            ),
            state,
        )

    if notice:
        body = render.render_notification(notice, kind) + "\n" + body
    return HTMLResponse(render.render_view(state, body))
