"""Tests for the session guard and request gate on a minimal app."""

from __future__ import annotations

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from packages.automator_core.gate import SessionGateMiddleware, protected_api_prefixes
from packages.automator_core.session import (
    SessionIdentity,
    StarletteSessionResolver,
    end_session,
    require_identity,
    start_session,
)
from packages.automator_shared.http import UnauthenticatedError


def _app() -> FastAPI:
    app = FastAPI()
    app.state.session_resolver = StarletteSessionResolver()

    @app.exception_handler(UnauthenticatedError)
    async def _unauthenticated(request: Request, exc: UnauthenticatedError):
        del request
        return JSONResponse(status_code=401, content={"error": exc.message})

    @app.post("/login")
    async def login(request: Request) -> dict[str, bool]:
        body = await request.json()
        start_session(
            request,
            SessionIdentity(user_id=body["userId"], name=body.get("name")),
        )
        return {"ok": True}

    @app.post("/logout")
    async def logout(request: Request) -> dict[str, bool]:
        end_session(request)
        return {"ok": True}

    @app.get("/api/tasks")
    async def tasks(identity: SessionIdentity = Depends(require_identity)):
        return {"userId": identity.user_id, "name": identity.name}

    @app.get("/api/taskstats")
    async def not_protected(identity: SessionIdentity = Depends(require_identity)):
        return {"userId": identity.user_id}

    @app.get("/dashboard")
    async def dashboard() -> dict[str, str]:
        return {"page": "dashboard"}

    app.add_middleware(
        SessionGateMiddleware,
        login_path="/login",
        page_prefixes=("/dashboard",),
        api_prefixes=protected_api_prefixes("/api"),
    )
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    return app


def test_protected_prefixes_cover_every_resource() -> None:
    assert protected_api_prefixes("/api") == (
        "/api/tasks",
        "/api/calendar",
        "/api/automate",
        "/api/notifications",
        "/api/reports",
    )


def test_signed_in_requests_resolve_identity() -> None:
    client = TestClient(_app())
    client.post("/login", json={"userId": " user-1 ", "name": "Ada"})

    response = client.get("/api/tasks")

    assert response.json() == {"userId": "user-1", "name": "Ada"}
    assert client.get("/dashboard").json() == {"page": "dashboard"}


def test_logout_clears_identity() -> None:
    client = TestClient(_app())
    client.post("/login", json={"userId": "user-1"})
    client.post("/logout")

    assert client.get("/api/tasks").status_code == 401


def test_gate_only_matches_whole_path_segments() -> None:
    """Sibling paths sharing a textual prefix fall through to the route guard."""
    client = TestClient(_app())

    response = client.get("/api/taskstats")

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_tampered_cookie_is_anonymous() -> None:
    client = TestClient(_app())
    client.cookies.set("session", "forged-value")

    response = client.get("/dashboard", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/login?callbackUrl=%2Fdashboard"
