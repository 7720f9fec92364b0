"""HTTP adapter routes for Calendar Authority Service."""

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
from services.state.calendar_authority.domain import CalendarEventRecord
from services.state.calendar_authority.service import CalendarAuthorityService

_SOURCE = "http_calendar"


def register_routes(*, router: APIRouter, service: CalendarAuthorityService) -> None:
    """Mount calendar routes on one API router."""

    @router.get("/calendar")
    async def list_events(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.list_events,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            query=dict(request.query_params),
        )
        return envelope_response(
            result, render=lambda records: [event_to_json(item) for item in records]
        )

    @router.post("/calendar")
    async def create_event(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        body = await read_json_body(request)
        result = await run_in_threadpool(
            service.create_event,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            payload=body,
        )
        return envelope_response(
            result, render=event_to_json, status_code=HTTPStatus.CREATED
        )

    @router.get("/calendar/{event_id}")
    async def get_event(
        event_id: str, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.get_event,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            event_id=event_id,
        )
        return envelope_response(result, render=event_to_json)

    @router.put("/calendar/{event_id}")
    async def update_event(
        event_id: str,
        request: Request,
        identity: SessionIdentity = Depends(require_identity),
    ) -> JSONResponse:
        body = await read_json_body(request)
        result = await run_in_threadpool(
            service.update_event,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            event_id=event_id,
            payload=body,
        )
        return envelope_response(result, render=event_to_json)

    @router.delete("/calendar/{event_id}")
    async def delete_event(
        event_id: str, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.delete_event,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            event_id=event_id,
        )
        return envelope_response(
            result, render=lambda _: {"message": "Event deleted successfully"}
        )


def event_to_json(record: CalendarEventRecord) -> dict[str, Any]:
    """Render one calendar event record as camelCase JSON."""
    return {
        "id": record.id,
        "userId": record.user_id,
        "title": record.title,
        "description": record.description,
        "startTime": format_timestamp(record.start_time),
        "endTime": format_timestamp(record.end_time),
        "allDay": record.all_day,
        "color": record.color,
        "createdAt": format_timestamp(record.created_at),
        "updatedAt": format_timestamp(record.updated_at),
    }
