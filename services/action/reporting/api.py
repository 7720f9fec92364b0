"""HTTP adapter routes for Reporting Service."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from packages.automator_core.session import (
    SessionIdentity,
    identity_meta,
    require_identity,
)
from packages.automator_shared.envelope import EnvelopeKind
from packages.automator_shared.http import envelope_response
from services.action.reporting.domain import Report
from services.action.reporting.service import ReportingService

_SOURCE = "http_reports"


def register_routes(*, router: APIRouter, service: ReportingService) -> None:
    """Mount report routes on one API router."""

    @router.get("/reports")
    async def generate_report(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.generate_report,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            query=dict(request.query_params),
        )
        return envelope_response(result, render=report_to_json)


def report_to_json(report: Report) -> dict[str, Any]:
    """Render one report with numeric completion rate and ISO dates."""
    summary = report.summary
    return {
        "summary": {
            "totalTasks": summary.total_tasks,
            "completedTasks": summary.completed_tasks,
            "inProgressTasks": summary.in_progress_tasks,
            "todoTasks": summary.todo_tasks,
            "totalEvents": summary.total_events,
            "totalAgentJobs": summary.total_agent_jobs,
            "completedAgentJobs": summary.completed_agent_jobs,
            "unreadNotifications": summary.unread_notifications,
            "completionRate": float(summary.completion_rate),
        },
        "tasksByPriority": [
            {"priority": bucket.priority.value, "count": bucket.count}
            for bucket in report.tasks_by_priority
        ],
        "tasksCompletedOverTime": [
            {"date": item.day.isoformat(), "count": item.count}
            for item in report.tasks_completed_over_time
        ],
    }
