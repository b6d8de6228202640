"""
nexus.client — HTTP client for the Nexus API
=============================================

A thin synchronous wrapper over :class:`httpx.Client`.  The signed-in
state is held in an explicit :class:`ClientSession` owned by the client
instance, never in module globals, so two clients can act as two
different users side by side.

Usage::

    from nexus.client import NexusClient

    with NexusClient("http://localhost:8000") as nexus:
        nexus.login("alex@nexus.com", "password123")
        for idea in nexus.ideas(sort="latest"):
            print(idea["title"], idea["voteCount"])

Any non-2xx answer raises :class:`NexusAPIError` carrying the status and
the server's ``error`` message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

import httpx

from nexus.web.state import ViewState

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class NexusAPIError(Exception):
    """The API answered with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


@dataclass(slots=True)
class ClientSession:
    """Credentials and identity of the signed-in user."""

    token: str | None = None
    user: dict[str, Any] | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def clear(self) -> None:
        self.token = None
        self.user = None


class NexusClient:
    """Typed access to every ``/api`` route.

    Parameters
    ----------
    base_url:
        Server root, e.g. ``http://localhost:8000``.
    http:
        An existing :class:`httpx.Client` to send requests through (for
        example FastAPI's ``TestClient``).  When omitted, one is created
        and closed with this client.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=httpx.HTTPTransport(retries=1),
        )
        self.session = ClientSession()
        self.view = ViewState()

    # -- lifecycle ----------------------------------------------------------
    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> NexusClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- plumbing -----------------------------------------------------------
    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = kwargs.pop("headers", {})
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        resp = self._http.request(method, f"{API_PREFIX}{path}", headers=headers, **kwargs)
        if resp.is_success:
            if resp.headers.get("content-type", "").startswith("application/json"):
                return resp.json()
            return resp.text

        try:
            message = resp.json().get("error", resp.reason_phrase)
        except ValueError:
            message = resp.text or resp.reason_phrase
        logger.debug("%s %s → %d %s", method, path, resp.status_code, message)
        raise NexusAPIError(resp.status_code, message)

    def _sign_in(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.session.token = payload["token"]
        self.session.user = payload["user"]
        self.view = self.view.signed_in(payload["token"], payload["user"])
        return payload["user"]

    def _remember_user(self, user: dict[str, Any]) -> dict[str, Any]:
        self.session.user = user
        self.view = replace(self.view, current_user=user)
        return user

    def view_state(self, view: str | None = None) -> ViewState:
        """The current :class:`ViewState`, switched to *view* when given."""
        if view is not None:
            self.view = self.view.show_view(view)
        return self.view

    # -- auth ---------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        return self._sign_in(self._request(
            "POST", "/auth/register",
            json={"name": name, "email": email, "password": password},
        ))

    def login(self, email: str, password: str) -> dict[str, Any]:
        return self._sign_in(self._request(
            "POST", "/auth/login", json={"email": email, "password": password},
        ))

    def logout(self) -> None:
        self.session.clear()
        self.view = self.view.signed_out()

    # -- profile ------------------------------------------------------------
    def profile(self) -> dict[str, Any]:
        return self._remember_user(self._request("GET", "/user/profile"))

    def update_profile(self, **fields: Any) -> dict[str, Any]:
        return self._remember_user(
            self._request("PUT", "/user/profile", json=fields)["user"]
        )

    def dashboard(self) -> dict[str, Any]:
        return self._request("GET", "/user/dashboard")

    # -- courses ------------------------------------------------------------
    def courses(self, category: str | None = None) -> list[dict[str, Any]]:
        params = {"category": category} if category else None
        return self._request("GET", "/courses", params=params)

    def course(self, course_id: int) -> dict[str, Any]:
        return self._request("GET", f"/courses/{course_id}")

    def enroll(self, course_id: int) -> dict[str, Any]:
        return self._request("POST", f"/courses/{course_id}/enroll")["course"]

    def set_progress(self, course_id: int, progress: int) -> dict[str, Any]:
        return self._request("PUT", f"/courses/{course_id}/progress", json={"progress": progress})

    # -- ideas --------------------------------------------------------------
    def ideas(self, category: str | None = None, sort: str = "trending") -> list[dict[str, Any]]:
        params: dict[str, str] = {"sort": sort}
        if category:
            params["category"] = category
        return self._request("GET", "/ideas", params=params)

    def submit_idea(self, title: str, description: str, category: str) -> dict[str, Any]:
        return self._request(
            "POST", "/ideas",
            json={"title": title, "description": description, "category": category},
        )["idea"]

    def toggle_vote(self, idea_id: int) -> dict[str, Any]:
        return self._request("POST", f"/ideas/{idea_id}/vote")

    def comment(self, idea_id: int, text: str) -> list[dict[str, Any]]:
        return self._request("POST", f"/ideas/{idea_id}/comments", json={"text": text})["comments"]

    # -- achievements / assistant --------------------------------------------
    def achievements(self) -> list[dict[str, Any]]:
        return self._request("GET", "/achievements")

    def chat(self, message: str) -> dict[str, Any]:
        return self._request("POST", "/chat", json={"message": message})

    def chat_history(self) -> list[dict[str, Any]]:
        return self._request("GET", "/chat/history")

    def view_html(self, view: str, notice: str | None = None, kind: str = "success") -> str:
        params = {"notice": notice, "kind": kind} if notice else None
        html = self._request("GET", f"/ui/{view}", params=params)
        self.view_state(view)
        return html

    def health(self) -> bool:
        return self._request("GET", "/health").get("status") == "ok"
