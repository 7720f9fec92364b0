"""HTTP adapter routes for Automation Trigger Service."""

from __future__ import annotations

from http import HTTPStatus
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
from packages.automator_shared.http import envelope_response, read_json_body
from packages.automator_shared.timestamps import format_timestamp
from services.action.automation_trigger.domain import AgentJobRecord
from services.action.automation_trigger.service import AutomationTriggerService

_SOURCE = "http_automate"

TRIGGER_ACCEPTED_MESSAGE = (
    "Automation job started. Processing will continue in the background."
)


def register_routes(*, router: APIRouter, service: AutomationTriggerService) -> None:
    """Mount automation routes on one API router."""

    @router.post("/automate")
    async def trigger(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        body = await read_json_body(request)
        result = await run_in_threadpool(
            service.trigger,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            payload=body,
        )
        return envelope_response(
            result,
            render=lambda job: {
                "jobId": job.id,
                "status": job.status.value,
                "message": TRIGGER_ACCEPTED_MESSAGE,
            },
            status_code=HTTPStatus.ACCEPTED,
        )

    @router.get("/automate")
    async def list_jobs(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.list_jobs,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            query=dict(request.query_params),
        )
        return envelope_response(
            result, render=lambda jobs: [job_to_json(job) for job in jobs]
        )

    @router.get("/automate/{job_id}")
    async def get_job(
        job_id: str, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.get_job,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            job_id=job_id,
        )
        return envelope_response(result, render=job_to_json)


def job_to_json(record: AgentJobRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "userId": record.user_id,
        "taskInput": record.task_input,
        "agentType": record.agent_type.value,
        "status": record.status.value,
        "result": record.result,
        "error": record.error,
        "createdAt": format_timestamp(record.created_at),
        "updatedAt": format_timestamp(record.updated_at),
        "completedAt": format_timestamp(record.completed_at),
    }
