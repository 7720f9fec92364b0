"""Concrete Notification Authority Service implementation."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from packages.automator_shared.envelope import (
    Envelope,
    EnvelopeMeta,
    failure,
    success,
    validate_meta,
)
from packages.automator_shared.errors import (
    ErrorDetail,
    codes,
    dependency_error,
    not_found_error,
    validation_error,
)
from packages.automator_shared.ids import is_ulid_str
from packages.automator_shared.logging import get_logger, public_api_instrumented
from packages.automator_shared.validation import validate_request
from resources.substrates.sql.errors import is_sql_error, normalize_sql_error
from services.state.notification_authority.component import SERVICE_COMPONENT_ID
from services.state.notification_authority.config import (
    NotificationAuthoritySettings,
)
from services.state.notification_authority.data.runtime import NotificationSqlRuntime
from services.state.notification_authority.domain import (
    HealthStatus,
    NotificationRecord,
)
from services.state.notification_authority.interfaces import NotificationRepository
from services.state.notification_authority.service import (
    NotificationAuthorityService,
)
from services.state.notification_authority.validation import (
    CreateNotificationRequest,
    ListNotificationsRequest,
    MarkReadRequest,
)

_LOGGER = get_logger(__name__)


class DefaultNotificationAuthorityService(NotificationAuthorityService):
    """Default Notification Authority implementation over an owner-scoped repository."""

    def __init__(
        self,
        *,
        settings: NotificationAuthoritySettings,
        repository: NotificationRepository,
        runtime: NotificationSqlRuntime | None = None,
    ) -> None:
        self._settings = settings
        self._repository = repository
        self._runtime = runtime

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Return readiness based on owned SQL runtime availability."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        if self._runtime is None:
            return success(
                meta=meta,
                payload=HealthStatus(
                    service_ready=True, substrate_ready=True, detail="ok"
                ),
            )
        status = self._runtime.health()
        return success(
            meta=meta,
            payload=HealthStatus(
                service_ready=True,
                substrate_ready=status.ready,
                detail=status.detail,
            ),
        )

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def create_notification(
        self, *, meta: EnvelopeMeta, payload: Mapping[str, Any]
    ) -> Envelope[NotificationRecord]:
        """Validate and persist one unread notification for the caller."""
        request, errors = self._validate_request(
            meta=meta, model=CreateNotificationRequest, payload=payload
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, CreateNotificationRequest)

        if len(request.message) > self._settings.max_message_length:
            return failure(
                meta=meta,
                errors=[
                    validation_error(
                        "message must be at most "
                        f"{self._settings.max_message_length} characters",
                        code=codes.INVALID_ARGUMENT,
                        metadata={"field": "message"},
                    )
                ],
            )

        try:
            created = self._repository.create_notification(
                user_id=meta.principal,
                message=request.message,
                type=request.type,
                action_url=request.action_url,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(
                meta=meta, operation="create_notification", exc=exc
            )
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("notification_id",),
    )
    def get_notification(
        self, *, meta: EnvelopeMeta, notification_id: str
    ) -> Envelope[NotificationRecord]:
        """Read one caller-owned notification by id."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(notification_id):
            return self._not_found(meta=meta, notification_id=notification_id)

        try:
            record = self._repository.get_notification(
                user_id=meta.principal, notification_id=notification_id
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(
                meta=meta, operation="get_notification", exc=exc
            )
        if record is None:
            return self._not_found(meta=meta, notification_id=notification_id)
        return success(meta=meta, payload=record)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def list_notifications(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[list[NotificationRecord]]:
        """List caller notifications newest first.

        ``limit`` defaults to and is clamped at ``max_list_limit``.
        """
        request, errors = self._validate_request(
            meta=meta, model=ListNotificationsRequest, payload=query
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, ListNotificationsRequest)

        limit = min(
            request.limit or self._settings.max_list_limit,
            self._settings.max_list_limit,
        )
        try:
            records = self._repository.list_notifications(
                user_id=meta.principal, read=request.read, limit=limit
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(
                meta=meta, operation="list_notifications", exc=exc
            )
        return success(meta=meta, payload=records)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("notification_id",),
    )
    def mark_read(
        self,
        *,
        meta: EnvelopeMeta,
        notification_id: str,
        payload: Mapping[str, Any],
    ) -> Envelope[NotificationRecord]:
        """Set the read flag of one caller-owned notification."""
        request, errors = self._validate_request(
            meta=meta, model=MarkReadRequest, payload=payload
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, MarkReadRequest)
        if not is_ulid_str(notification_id):
            return self._not_found(meta=meta, notification_id=notification_id)

        try:
            record = self._repository.set_read(
                user_id=meta.principal,
                notification_id=notification_id,
                read=request.read,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="mark_read", exc=exc)
        if record is None:
            return self._not_found(meta=meta, notification_id=notification_id)
        return success(meta=meta, payload=record)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def mark_all_read(self, *, meta: EnvelopeMeta) -> Envelope[int]:
        """Mark every unread caller notification read and return the count."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        try:
            updated = self._repository.mark_all_read(user_id=meta.principal)
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="mark_all_read", exc=exc)
        return success(meta=meta, payload=updated)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("notification_id",),
    )
    def delete_notification(
        self, *, meta: EnvelopeMeta, notification_id: str
    ) -> Envelope[bool]:
        """Delete one caller-owned notification; unknown ids are not found."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(notification_id):
            return self._not_found(meta=meta, notification_id=notification_id)

        try:
            deleted = self._repository.delete_notification(
                user_id=meta.principal, notification_id=notification_id
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(
                meta=meta, operation="delete_notification", exc=exc
            )
        if not deleted:
            return self._not_found(meta=meta, notification_id=notification_id)
        return success(meta=meta, payload=True)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def count_unread(self, *, meta: EnvelopeMeta) -> Envelope[int]:
        """Count the caller's unread notifications."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        try:
            count = self._repository.count_unread(user_id=meta.principal)
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="count_unread", exc=exc)
        return success(meta=meta, payload=count)

    def _validate_request(
        self,
        *,
        meta: EnvelopeMeta,
        model: type[BaseModel],
        payload: Mapping[str, Any] | None,
    ) -> tuple[BaseModel | None, list[ErrorDetail]]:
        """Validate envelope metadata and request payload model."""
        errors = validate_meta(meta)
        if errors:
            return None, errors
        return validate_request(model=model, payload=payload)

    def _not_found(
        self, *, meta: EnvelopeMeta, notification_id: str
    ) -> Envelope[Any]:
        """Return canonical not-found envelope for notification-id lookups."""
        return failure(
            meta=meta,
            errors=[
                not_found_error(
                    "Notification not found",
                    code=codes.RESOURCE_NOT_FOUND,
                    metadata={"notification_id": notification_id},
                )
            ],
        )

    def _storage_failure(
        self,
        *,
        meta: EnvelopeMeta,
        operation: str,
        exc: Exception,
    ) -> Envelope[Any]:
        """Map one repository exception into structured envelope errors."""
        _LOGGER.warning(
            "%s failed due to dependency error: exception_type=%s",
            operation,
            type(exc).__name__,
            exc_info=exc,
        )
        if is_sql_error(exc):
            return failure(meta=meta, errors=[normalize_sql_error(exc)])
        return failure(
            meta=meta,
            errors=[
                dependency_error(
                    f"{operation} failed",
                    code=codes.DEPENDENCY_FAILURE,
                    metadata={"exception_type": type(exc).__name__},
                )
            ],
        )
