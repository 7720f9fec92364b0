"""HTTP adapter routes for Notification Authority Service."""

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
from services.state.notification_authority.domain import NotificationRecord
from services.state.notification_authority.service import (
    NotificationAuthorityService,
)

_SOURCE = "http_notifications"


def register_routes(
    *, router: APIRouter, service: NotificationAuthorityService
) -> None:
    """Mount notification routes on one API router."""

    @router.get("/notifications")
    async def list_notifications(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.list_notifications,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            query=dict(request.query_params),
        )
        return envelope_response(
            result,
            render=lambda records: [notification_to_json(item) for item in records],
        )

    @router.post("/notifications")
    async def create_notification(
        request: Request, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        body = await read_json_body(request)
        result = await run_in_threadpool(
            service.create_notification,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            payload=body,
        )
        return envelope_response(
            result, render=notification_to_json, status_code=HTTPStatus.CREATED
        )

    # Registered before the ``{notification_id}`` routes so the literal path wins.
    @router.post("/notifications/read-all")
    async def mark_all_read(
        identity: SessionIdentity = Depends(require_identity),
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.mark_all_read,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
        )
        return envelope_response(result, render=lambda count: {"updated": count})

    @router.get("/notifications/{notification_id}")
    async def get_notification(
        notification_id: str, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.get_notification,
            meta=identity_meta(identity, kind=EnvelopeKind.QUERY, source=_SOURCE),
            notification_id=notification_id,
        )
        return envelope_response(result, render=notification_to_json)

    @router.put("/notifications/{notification_id}")
    async def mark_read(
        notification_id: str,
        request: Request,
        identity: SessionIdentity = Depends(require_identity),
    ) -> JSONResponse:
        body = await read_json_body(request, allow_empty=True)
        result = await run_in_threadpool(
            service.mark_read,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            notification_id=notification_id,
            payload=body,
        )
        return envelope_response(result, render=notification_to_json)

    @router.delete("/notifications/{notification_id}")
    async def delete_notification(
        notification_id: str, identity: SessionIdentity = Depends(require_identity)
    ) -> JSONResponse:
        result = await run_in_threadpool(
            service.delete_notification,
            meta=identity_meta(identity, kind=EnvelopeKind.COMMAND, source=_SOURCE),
            notification_id=notification_id,
        )
        return envelope_response(
            result, render=lambda _: {"message": "Notification deleted successfully"}
        )


def notification_to_json(record: NotificationRecord) -> dict[str, Any]:
    """Render one notification record as camelCase JSON."""
    return {
        "id": record.id,
        "userId": record.user_id,
        "message": record.message,
        "type": record.type.value,
        "actionUrl": record.action_url,
        "read": record.read,
        "createdAt": format_timestamp(record.created_at),
        "updatedAt": format_timestamp(record.updated_at),
    }
