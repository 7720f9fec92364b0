"""Concrete Task Authority Service implementation."""

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
from packages.automator_shared.timestamps import utc_now
from packages.automator_shared.validation import validate_request
from resources.substrates.sql.errors import is_sql_error, normalize_sql_error
from services.state.task_authority.component import SERVICE_COMPONENT_ID
from services.state.task_authority.config import TaskAuthoritySettings
from services.state.task_authority.data.runtime import TaskSqlRuntime
from services.state.task_authority.domain import (
    HealthStatus,
    PriorityCount,
    TaskPriority,
    TaskRecord,
    TaskStatistics,
    TaskStatus,
)
from services.state.task_authority.interfaces import TaskRepository
from services.state.task_authority.service import TaskAuthorityService
from services.state.task_authority.validation import (
    CreateTaskRequest,
    ListTasksRequest,
    UpdateTaskRequest,
)

_LOGGER = get_logger(__name__)

_UPDATE_FIELDS = ("title", "description", "status", "priority", "due_date")


class DefaultTaskAuthorityService(TaskAuthorityService):
    """Default Task Authority implementation over an owner-scoped repository."""

    def __init__(
        self,
        *,
        settings: TaskAuthoritySettings,
        repository: TaskRepository,
        runtime: TaskSqlRuntime | None = None,
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
    def create_task(
        self, *, meta: EnvelopeMeta, payload: Mapping[str, Any]
    ) -> Envelope[TaskRecord]:
        """Validate and persist one task; COMPLETED on create stamps completion."""
        request, errors = self._validate_request(
            meta=meta, model=CreateTaskRequest, payload=payload
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, CreateTaskRequest)

        errors = self._length_errors(
            title=request.title, description=request.description
        )
        if errors:
            return failure(meta=meta, errors=errors)

        completed_at = utc_now() if request.status == TaskStatus.COMPLETED else None
        try:
            created = self._repository.create_task(
                user_id=meta.principal,
                title=request.title,
                description=request.description,
                status=request.status,
                priority=request.priority,
                due_date=request.due_date,
                completed_at=completed_at,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="create_task", exc=exc)
        return success(meta=meta, payload=created)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("task_id",),
    )
    def get_task(self, *, meta: EnvelopeMeta, task_id: str) -> Envelope[TaskRecord]:
        """Read one caller-owned task by id."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(task_id):
            return self._not_found(meta=meta, task_id=task_id)

        try:
            record = self._repository.get_task(user_id=meta.principal, task_id=task_id)
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="get_task", exc=exc)
        if record is None:
            return self._not_found(meta=meta, task_id=task_id)
        return success(meta=meta, payload=record)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def list_tasks(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[list[TaskRecord]]:
        """List caller tasks newest first, filtered by status and priority."""
        request, errors = self._validate_request(
            meta=meta, model=ListTasksRequest, payload=query
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, ListTasksRequest)

        try:
            records = self._repository.list_tasks(
                user_id=meta.principal,
                status=request.status,
                priority=request.priority,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="list_tasks", exc=exc)
        return success(meta=meta, payload=records)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("task_id",),
    )
    def update_task(
        self, *, meta: EnvelopeMeta, task_id: str, payload: Mapping[str, Any]
    ) -> Envelope[TaskRecord]:
        """Apply a partial update, keeping ``completed_at`` in step with status."""
        request, errors = self._validate_request(
            meta=meta, model=UpdateTaskRequest, payload=payload
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, UpdateTaskRequest)

        errors = self._length_errors(
            title=request.title, description=request.description
        )
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(task_id):
            return self._not_found(meta=meta, task_id=task_id)

        try:
            existing = self._repository.get_task(
                user_id=meta.principal, task_id=task_id
            )
            if existing is None:
                return self._not_found(meta=meta, task_id=task_id)

            changes = _supplied_changes(request)
            if request.status is not None:
                changes.update(
                    _completion_change(previous=existing.status, current=request.status)
                )
            if not changes:
                return success(meta=meta, payload=existing)

            updated = self._repository.update_task(
                user_id=meta.principal, task_id=task_id, changes=changes
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="update_task", exc=exc)
        if updated is None:
            return self._not_found(meta=meta, task_id=task_id)
        return success(meta=meta, payload=updated)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("task_id",),
    )
    def delete_task(self, *, meta: EnvelopeMeta, task_id: str) -> Envelope[bool]:
        """Delete one caller-owned task; unknown ids are not found."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(task_id):
            return self._not_found(meta=meta, task_id=task_id)

        try:
            deleted = self._repository.delete_task(
                user_id=meta.principal, task_id=task_id
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="delete_task", exc=exc)
        if not deleted:
            return self._not_found(meta=meta, task_id=task_id)
        return success(meta=meta, payload=True)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def task_statistics(
        self,
        *,
        meta: EnvelopeMeta,
        start: datetime | None,
        end: datetime | None,
        series_since: datetime,
    ) -> Envelope[TaskStatistics]:
        """Return caller task counts.

        Totals and priority buckets window on ``created_at``; completed counts
        window on ``completed_at``; in-progress and todo counts are current.
        """
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)

        user_id = meta.principal
        try:
            total = self._repository.count_tasks(
                user_id=user_id, created_from=start, created_to=end
            )
            completed = self._repository.count_tasks(
                user_id=user_id,
                status=TaskStatus.COMPLETED,
                completed_from=start,
                completed_to=end,
            )
            in_progress = self._repository.count_tasks(
                user_id=user_id, status=TaskStatus.IN_PROGRESS
            )
            todo = self._repository.count_tasks(user_id=user_id, status=TaskStatus.TODO)
            by_priority = self._repository.count_by_priority(
                user_id=user_id, created_from=start, created_to=end
            )
            recent = self._repository.list_completion_times(
                user_id=user_id, completed_since=series_since
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(
                meta=meta, operation="task_statistics", exc=exc
            )

        return success(
            meta=meta,
            payload=TaskStatistics(
                total=total,
                completed=completed,
                in_progress=in_progress,
                todo=todo,
                by_priority=[
                    PriorityCount(priority=priority, count=by_priority[priority])
                    for priority in TaskPriority
                    if by_priority.get(priority, 0) > 0
                ],
                recent_completions=sorted(recent),
            ),
        )

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

    def _length_errors(
        self, *, title: str | None, description: str | None
    ) -> list[ErrorDetail]:
        """Return validation errors for text fields over configured limits."""
        errors: list[ErrorDetail] = []
        if title is not None and len(title) > self._settings.max_title_length:
            errors.append(
                validation_error(
                    f"title must be at most {self._settings.max_title_length} characters",
                    code=codes.INVALID_ARGUMENT,
                    metadata={"field": "title"},
                )
            )
        if (
            description is not None
            and len(description) > self._settings.max_description_length
        ):
            errors.append(
                validation_error(
                    "description must be at most "
                    f"{self._settings.max_description_length} characters",
                    code=codes.INVALID_ARGUMENT,
                    metadata={"field": "description"},
                )
            )
        return errors

    def _not_found(self, *, meta: EnvelopeMeta, task_id: str) -> Envelope[Any]:
        """Return canonical not-found envelope for task-id lookups."""
        return failure(
            meta=meta,
            errors=[
                not_found_error(
                    "Task not found",
                    code=codes.RESOURCE_NOT_FOUND,
                    metadata={"task_id": task_id},
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


def _supplied_changes(request: UpdateTaskRequest) -> dict[str, Any]:
    """Return column changes for fields explicitly present in the request."""
    supplied = request.model_fields_set
    return {
        column: getattr(request, column)
        for column in _UPDATE_FIELDS
        if column in supplied
    }


def _completion_change(
    *, previous: TaskStatus, current: TaskStatus
) -> dict[str, Any]:
    """Return the ``completed_at`` change implied by one status transition."""
    if current == TaskStatus.COMPLETED and previous != TaskStatus.COMPLETED:
        return {"completed_at": utc_now()}
    if current != TaskStatus.COMPLETED and previous == TaskStatus.COMPLETED:
        return {"completed_at": None}
    return {}
