"""HTTP adapter routes for Task Authority Service."""

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
from services.state.task_authority.domain import TaskRecord
from services.state.task_authority.service import TaskAuthorityService

_SOURCE = "http_tasks"


def register_routes(*, router: APIRouter, service: TaskAuthorityService) -> None:
    """Mount task routes on one API router."""

    @router.get("/tasks")
    async def list_tasks(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.list_tasks,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            query=dict(request.query_params),
        )
        return envelope_response(
            result, render=lambda records: [task_to_json(item) for item in records]
        )

    @router.post("/tasks")
    async def create_task(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        body = await read_json_body(request)
        result = await run_in_threadpool(
            service.create_task,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            payload=body,
        )
        return envelope_response(
            result, render=task_to_json, status_code=HTTPStatus.CREATED
        )

    @router.get("/tasks/{task_id}")
    async def get_task(
        task_id: str, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.get_task,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            task_id=task_id,
        )
        return envelope_response(result, render=task_to_json)

    @router.put("/tasks/{task_id}")
    async def update_task(
        task_id: str,
        request: Request,
        identity: SessionIdentity = Depends(require_identity),
    ) -> JSONResponse:
        body = await read_json_body(request)
        result = await run_in_threadpool(
            service.update_task,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            task_id=task_id,
            payload=body,
        )
        return envelope_response(result, render=task_to_json)

    @router.delete("/tasks/{task_id}")
    async def delete_task(
        task_id: str, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.delete_task,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            task_id=task_id,
        )
        return envelope_response(
            result, render=lambda _: {"message": "Task deleted successfully"}
        )


def task_to_json(record: TaskRecord) -> dict[str, Any]:
    """Render one task record as camelCase JSON."""
    return {
        "id": record.id,
        "userId": record.user_id,
        "title": record.title,
        "description": record.description,
        "status": record.status.value,
        "priority": record.priority.value,
        "dueDate": format_timestamp(record.due_date),
        "completedAt": format_timestamp(record.completed_at),
        "createdAt": format_timestamp(record.created_at),
        "updatedAt": format_timestamp(record.updated_at),
    }
