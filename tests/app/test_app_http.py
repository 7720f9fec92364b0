"""End-to-end HTTP tests for the assembled application over SQLite."""

from __future__ import annotations

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from packages.automator_core.main import create_application
from packages.automator_core.session import SessionIdentity, start_session


@pytest.fixture
def app(sqlite_settings) -> FastAPI:
    """Fully wired application with a test-only sign-in route."""
    application = create_application(sqlite_settings)

    @application.post("/test-login")
    async def test_login(request: Request) -> dict[str, bool]:
        body = await request.json()
        start_session(request, SessionIdentity(user_id=body["userId"]))
        return {"ok": True}

    @application.get("/test-boom")
    async def test_boom() -> None:
        raise RuntimeError("boom")

    return application


def _signed_in(app: FastAPI, user_id: str = "user-1") -> TestClient:
    client = TestClient(app)
    assert client.post("/test-login", json={"userId": user_id}).status_code == 200
    return client


def test_anonymous_api_request_is_rejected(app) -> None:
    """Protected API prefixes answer 401 before any handler runs."""
    client = TestClient(app)

    response = client.get("/api/tasks")

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_anonymous_dashboard_request_redirects_to_login(app) -> None:
    """Dashboard pages redirect with the original path as callback."""
    client = TestClient(app)

    response = client.get("/dashboard/tasks", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/login?callbackUrl=%2Fdashboard%2Ftasks"


def test_health_is_public(app) -> None:
    """Health needs no session and reports every component."""
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["ready"] is True
    assert "service_task_authority" in body["services"]
    assert body["resources"]["substrate_sql"]["ready"] is True


def test_create_task_applies_defaults(app) -> None:
    """A title-only task is created TODO/MEDIUM and not completed."""
    client = _signed_in(app)

    response = client.post("/api/tasks", json={"title": "Write report"})

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "TODO"
    assert body["priority"] == "MEDIUM"
    assert body["completedAt"] is None
    assert body["userId"] == "user-1"
    assert response.headers["X-Request-ID"]


def test_task_completion_roundtrip(app) -> None:
    """Completing then reopening a task stamps then clears completedAt."""
    client = _signed_in(app)
    task_id = client.post("/api/tasks", json={"title": "Ship"}).json()["id"]

    completed = client.put(f"/api/tasks/{task_id}", json={"status": "COMPLETED"})
    reopened = client.put(f"/api/tasks/{task_id}", json={"status": "TODO"})

    assert completed.json()["completedAt"] is not None
    assert reopened.json()["completedAt"] is None


def test_validation_errors_use_details_shape(app) -> None:
    """Field errors render as one details entry per field."""
    client = _signed_in(app)

    response = client.post("/api/tasks", json={"priority": "URGENT"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    assert {item["field"] for item in body["details"]} == {"title", "priority"}


def test_malformed_json_is_a_validation_error(app) -> None:
    """Unparseable bodies are 400s naming the body."""
    client = _signed_in(app)

    response = client.post(
        "/api/tasks",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "body"


def test_list_ignores_unknown_query_parameters(app) -> None:
    """Undeclared search params are ignored; declared ones still validate."""
    client = _signed_in(app)
    client.post("/api/tasks", json={"title": "Cached"})

    listed = client.get("/api/tasks", params={"_": "123", "status": "TODO"})
    rejected = client.get("/api/tasks", params={"_": "123", "status": "DONE"})

    assert listed.status_code == 200
    assert [task["title"] for task in listed.json()] == ["Cached"]
    assert rejected.status_code == 400
    assert rejected.json()["details"][0]["field"] == "status"


def test_other_users_records_are_not_found(app) -> None:
    """Cross-owner access is reported as 404, never 403."""
    owner = _signed_in(app, "owner")
    task_id = owner.post("/api/tasks", json={"title": "Private"}).json()["id"]
    intruder = _signed_in(app, "intruder")

    assert intruder.get(f"/api/tasks/{task_id}").status_code == 404
    assert intruder.delete(f"/api/tasks/{task_id}").json() == {
        "error": "Task not found"
    }
    assert owner.get(f"/api/tasks/{task_id}").status_code == 200


def test_calendar_update_rejects_end_before_start(app) -> None:
    """A reversed interval is a 400 and leaves the event unchanged."""
    client = _signed_in(app)
    created = client.post(
        "/api/calendar",
        json={
            "title": "Standup",
            "startTime": "2026-03-02T09:00:00Z",
            "endTime": "2026-03-02T09:15:00Z",
        },
    ).json()

    response = client.put(
        f"/api/calendar/{created['id']}", json={"endTime": "2026-03-02T08:00:00Z"}
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "endTime"
    assert client.get(f"/api/calendar/{created['id']}").json() == created


def test_notifications_list_honors_read_and_limit(app) -> None:
    """Unread listing is capped by limit and newest first."""
    client = _signed_in(app)
    ids = [
        client.post("/api/notifications", json={"message": f"n{index}"}).json()["id"]
        for index in range(7)
    ]
    client.put(f"/api/notifications/{ids[-1]}", content=b"")

    response = client.get("/api/notifications", params={"read": "false", "limit": 5})

    body = response.json()
    assert response.status_code == 200
    assert [item["id"] for item in body] == list(reversed(ids[1:6]))
    assert all(item["read"] is False for item in body)


def test_mark_all_read_reports_updated_count(app) -> None:
    """The bulk route is not shadowed by the id route."""
    client = _signed_in(app)
    for message in ("a", "b"):
        client.post("/api/notifications", json={"message": message})

    response = client.post("/api/notifications/read-all")

    assert response.json() == {"updated": 2}


def test_automation_trigger_accepts_and_leaves_job_running(app) -> None:
    """Triggered jobs are accepted and never complete without an agent runtime."""
    client = _signed_in(app)

    response = client.post("/api/automate", json={"taskInput": "Plan my day"})

    assert response.status_code == 202
    body = response.json()
    assert body["status"] == "RUNNING"
    job = client.get(f"/api/automate/{body['jobId']}").json()
    assert job["status"] == "RUNNING"
    assert job["completedAt"] is None


def test_report_aggregates_across_resources(app) -> None:
    """The report combines task, event, job and notification counts."""
    client = _signed_in(app)
    client.post("/api/tasks", json={"title": "a", "status": "COMPLETED"})
    client.post("/api/tasks", json={"title": "b", "priority": "HIGH"})
    client.post("/api/tasks", json={"title": "c", "status": "IN_PROGRESS"})
    client.post("/api/notifications", json={"message": "hi"})
    client.post("/api/automate", json={"taskInput": "Plan"})

    response = client.get("/api/reports")

    assert response.status_code == 200
    body = response.json()
    assert body["summary"]["totalTasks"] == 3
    assert body["summary"]["completedTasks"] == 1
    assert body["summary"]["completionRate"] == 33.33
    assert body["summary"]["totalAgentJobs"] == 1
    assert body["summary"]["unreadNotifications"] == 1
    assert body["tasksByPriority"] == [
        {"priority": "MEDIUM", "count": 2},
        {"priority": "HIGH", "count": 1},
    ]
    assert sum(item["count"] for item in body["tasksCompletedOverTime"]) == 1


def test_report_rejects_reversed_range(app) -> None:
    client = _signed_in(app)

    response = client.get(
        "/api/reports", params={"startDate": "2026-03-05", "endDate": "2026-03-01"}
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "endDate"


def test_unhandled_exceptions_render_opaque_500(app) -> None:
    """Unexpected failures never leak their message."""
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/test-boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
