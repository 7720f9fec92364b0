"""Concrete Calendar Authority Service implementation."""

from __future__ import annotations

from datetime import datetime
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
from packages.automator_shared.validation import range_order_errors, validate_request
from resources.substrates.sql.errors import (
    is_sql_error,
    normalize_sql_error,
    violates_constraint,
)
from services.state.calendar_authority.component import SERVICE_COMPONENT_ID
from services.state.calendar_authority.config import CalendarAuthoritySettings
from services.state.calendar_authority.data.runtime import CalendarSqlRuntime
from services.state.calendar_authority.data.schema import TIME_ORDER_CONSTRAINT
from services.state.calendar_authority.domain import CalendarEventRecord, HealthStatus
from services.state.calendar_authority.interfaces import CalendarEventRepository
from services.state.calendar_authority.service import CalendarAuthorityService
from services.state.calendar_authority.validation import (
    CreateEventRequest,
    ListEventsRequest,
    UpdateEventRequest,
)

_LOGGER = get_logger(__name__)

_UPDATE_FIELDS = ("title", "description", "start_time", "end_time", "all_day", "color")
_TIME_ORDER_MESSAGE = "End time must be after start time"


class DefaultCalendarAuthorityService(CalendarAuthorityService):
    """Default Calendar Authority implementation over an owner-scoped repository."""

    def __init__(
        self,
        *,
        settings: CalendarAuthoritySettings,
        repository: CalendarEventRepository,
        runtime: CalendarSqlRuntime | None = None,
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
    def create_event(
        self, *, meta: EnvelopeMeta, payload: Mapping[str, Any]
    ) -> Envelope[CalendarEventRecord]:
        """Validate and persist one event whose end follows its start."""
        request, errors = self._validate_request(
            meta=meta, model=CreateEventRequest, payload=payload
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, CreateEventRequest)

        errors = [
            *self._title_errors(request.title),
            *_time_order_errors(start=request.start_time, end=request.end_time),
        ]
        if errors:
            return failure(meta=meta, errors=errors)

        try:
            created = self._repository.create_event(
                user_id=meta.principal,
                title=request.title,
                description=request.description,
                start_time=request.start_time,
                end_time=request.end_time,
                all_day=request.all_day,
                color=request.color,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="create_event", exc=exc)
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("event_id",),
    )
    def get_event(
        self, *, meta: EnvelopeMeta, event_id: str
    ) -> Envelope[CalendarEventRecord]:
        """Read one caller-owned event by id."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(event_id):
            return self._not_found(meta=meta, event_id=event_id)

        try:
            record = self._repository.get_event(
                user_id=meta.principal, event_id=event_id
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="get_event", exc=exc)
        if record is None:
            return self._not_found(meta=meta, event_id=event_id)
        return success(meta=meta, payload=record)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def list_events(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[list[CalendarEventRecord]]:
        """List caller events overlapping ``[startDate, endDate]``, earliest first."""
        request, errors = self._validate_request(
            meta=meta, model=ListEventsRequest, payload=query
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, ListEventsRequest)

        errors = range_order_errors(
            start=request.start_date,
            end=request.end_date,
            field="endDate",
            message="endDate must not be before startDate",
        )
        if errors:
            return failure(meta=meta, errors=errors)

        try:
            records = self._repository.list_events(
                user_id=meta.principal,
                window_start=request.start_date,
                window_end=request.end_date,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="list_events", exc=exc)
        return success(meta=meta, payload=records)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("event_id",),
    )
    def update_event(
        self, *, meta: EnvelopeMeta, event_id: str, payload: Mapping[str, Any]
    ) -> Envelope[CalendarEventRecord]:
        """Apply a partial update when the merged record keeps end after start."""
        request, errors = self._validate_request(
            meta=meta, model=UpdateEventRequest, payload=payload
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, UpdateEventRequest)

        errors = self._title_errors(request.title)
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(event_id):
            return self._not_found(meta=meta, event_id=event_id)

        try:
            existing = self._repository.get_event(
                user_id=meta.principal, event_id=event_id
            )
            if existing is None:
                return self._not_found(meta=meta, event_id=event_id)

            changes = {
                column: getattr(request, column)
                for column in _UPDATE_FIELDS
                if column in request.model_fields_set
            }
            errors = _time_order_errors(
                start=changes.get("start_time", existing.start_time),
                end=changes.get("end_time", existing.end_time),
            )
            if errors:
                return failure(meta=meta, errors=errors)
            if not changes:
                return success(meta=meta, payload=existing)

            updated = self._repository.update_event(
                user_id=meta.principal, event_id=event_id, changes=changes
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="update_event", exc=exc)
        if updated is None:
            return self._not_found(meta=meta, event_id=event_id)
        return success(meta=meta, payload=updated)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("event_id",),
    )
    def delete_event(self, *, meta: EnvelopeMeta, event_id: str) -> Envelope[bool]:
        """Delete one caller-owned event; unknown ids are not found."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(event_id):
            return self._not_found(meta=meta, event_id=event_id)

        try:
            deleted = self._repository.delete_event(
                user_id=meta.principal, event_id=event_id
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="delete_event", exc=exc)
        if not deleted:
            return self._not_found(meta=meta, event_id=event_id)
        return success(meta=meta, payload=True)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def count_events(
        self,
        *,
        meta: EnvelopeMeta,
        start: datetime | None,
        end: datetime | None,
    ) -> Envelope[int]:
        """Count caller events created within an optional inclusive window."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        try:
            count = self._repository.count_events(
                user_id=meta.principal, created_from=start, created_to=end
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="count_events", exc=exc)
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

    def _title_errors(self, title: str | None) -> list[ErrorDetail]:
        if title is None or len(title) <= self._settings.max_title_length:
            return []
        return [
            validation_error(
                f"title must be at most {self._settings.max_title_length} characters",
                code=codes.INVALID_ARGUMENT,
                metadata={"field": "title"},
            )
        ]

    def _not_found(self, *, meta: EnvelopeMeta, event_id: str) -> Envelope[Any]:
        """Return canonical not-found envelope for event-id lookups."""
        return failure(
            meta=meta,
            errors=[
                not_found_error(
                    "Event not found",
                    code=codes.RESOURCE_NOT_FOUND,
                    metadata={"event_id": event_id},
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
        if violates_constraint(exc, TIME_ORDER_CONSTRAINT):
            return failure(
                meta=meta,
                errors=[
                    validation_error(
                        _TIME_ORDER_MESSAGE,
                        code=codes.INVALID_ARGUMENT,
                        metadata={"field": "endTime"},
                    )
                ],
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


def _time_order_errors(*, start: datetime, end: datetime) -> list[ErrorDetail]:
    """Require the effective end time to fall strictly after the start time."""
    return range_order_errors(
        start=start,
        end=end,
        field="endTime",
        message=_TIME_ORDER_MESSAGE,
        strict=True,
    )
