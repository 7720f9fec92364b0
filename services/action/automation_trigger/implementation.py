"""Concrete Automation Trigger Service implementation."""

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
    internal_error,
    not_found_error,
    validation_error,
)
from packages.automator_shared.ids import is_ulid_str
from packages.automator_shared.logging import get_logger, public_api_instrumented
from packages.automator_shared.validation import validate_request
from resources.substrates.sql.errors import is_sql_error, normalize_sql_error
from services.action.automation_trigger.component import SERVICE_COMPONENT_ID
from services.action.automation_trigger.config import AutomationTriggerSettings
from services.action.automation_trigger.data.runtime import AgentJobSqlRuntime
from services.action.automation_trigger.domain import (
    AgentJobRecord,
    AgentJobStatus,
    HealthStatus,
    JobStatistics,
)
from services.action.automation_trigger.interfaces import (
    AgentDispatcher,
    AgentJobRepository,
)
from services.action.automation_trigger.service import AutomationTriggerService
from services.action.automation_trigger.validation import (
    ListJobsRequest,
    TriggerRequest,
)

_LOGGER = get_logger(__name__)


class DefaultAutomationTriggerService(AutomationTriggerService):
    """Default Automation Trigger implementation.

    ``trigger`` drives PENDING to RUNNING and then returns; progress beyond
    RUNNING belongs to the configured dispatcher. A dispatcher that raises
    during hand-off fails the job immediately.
    """

    def __init__(
        self,
        *,
        settings: AutomationTriggerSettings,
        repository: AgentJobRepository,
        dispatcher: AgentDispatcher,
        runtime: AgentJobSqlRuntime | None = None,
    ) -> None:
        self._settings = settings
        self._repository = repository
        self._dispatcher = dispatcher
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
    def trigger(
        self, *, meta: EnvelopeMeta, payload: Mapping[str, Any]
    ) -> Envelope[AgentJobRecord]:
        request, errors = self._validate_request(
            meta=meta, model=TriggerRequest, payload=payload
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, TriggerRequest)

        if len(request.task_input) > self._settings.max_task_input_length:
            return failure(
                meta=meta,
                errors=[
                    validation_error(
                        "taskInput must be at most "
                        f"{self._settings.max_task_input_length} characters",
                        code=codes.INVALID_ARGUMENT,
                        metadata={"field": "taskInput"},
                    )
                ],
            )

        try:
            pending = self._repository.create_job(
                user_id=meta.principal,
                task_input=request.task_input,
                agent_type=request.agent_type,
            )
            running = self._repository.transition_job(
                user_id=meta.principal,
                job_id=pending.id,
                target=AgentJobStatus.RUNNING,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="trigger", exc=exc)
        if running is None:
            return failure(
                meta=meta,
                errors=[
                    internal_error(
                        "agent job could not be started",
                        code=codes.INTERNAL_ERROR,
                        metadata={"job_id": pending.id},
                    )
                ],
            )

        try:
            self._dispatcher.dispatch(running)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.warning(
                "agent dispatch failed: job_id=%s exception_type=%s",
                running.id,
                type(exc).__name__,
                exc_info=exc,
            )
            return self._fail_job(meta=meta, job=running, reason="dispatch failed")
        return success(meta=meta, payload=running)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
        id_fields=("job_id",),
    )
    def get_job(self, *, meta: EnvelopeMeta, job_id: str) -> Envelope[AgentJobRecord]:
        """Read one caller-owned job by id."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        if not is_ulid_str(job_id):
            return self._not_found(meta=meta, job_id=job_id)

        try:
            record = self._repository.get_job(user_id=meta.principal, job_id=job_id)
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="get_job", exc=exc)
        if record is None:
            return self._not_found(meta=meta, job_id=job_id)
        return success(meta=meta, payload=record)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def list_jobs(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[list[AgentJobRecord]]:
        """List caller jobs newest first, optionally filtered by status."""
        request, errors = self._validate_request(
            meta=meta, model=ListJobsRequest, payload=query
        )
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, ListJobsRequest)

        try:
            records = self._repository.list_jobs(
                user_id=meta.principal, status=request.status
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="list_jobs", exc=exc)
        return success(meta=meta, payload=records)

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def job_statistics(
        self,
        *,
        meta: EnvelopeMeta,
        start: datetime | None,
        end: datetime | None,
    ) -> Envelope[JobStatistics]:
        """Return caller job totals windowed on creation and completion time."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        try:
            total = self._repository.count_jobs(
                user_id=meta.principal, created_from=start, created_to=end
            )
            completed = self._repository.count_jobs(
                user_id=meta.principal,
                status=AgentJobStatus.COMPLETED,
                completed_from=start,
                completed_to=end,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="job_statistics", exc=exc)
        return success(meta=meta, payload=JobStatistics(total=total, completed=completed))

    def _fail_job(
        self, *, meta: EnvelopeMeta, job: AgentJobRecord, reason: str
    ) -> Envelope[AgentJobRecord]:
        try:
            failed = self._repository.transition_job(
                user_id=meta.principal,
                job_id=job.id,
                target=AgentJobStatus.FAILED,
                error=reason,
            )
        except Exception as exc:  # noqa: BLE001
            return self._storage_failure(meta=meta, operation="trigger", exc=exc)
        return success(meta=meta, payload=failed or job)

    def _validate_request(
        self,
        *,
        meta: EnvelopeMeta,
        model: type[BaseModel],
        payload: Mapping[str, Any] | None,
    ) -> tuple[BaseModel | None, list[ErrorDetail]]:
        errors = validate_meta(meta)
        if errors:
            return None, errors
        return validate_request(model=model, payload=payload)

    def _not_found(self, *, meta: EnvelopeMeta, job_id: str) -> Envelope[Any]:
        return failure(
            meta=meta,
            errors=[
                not_found_error(
                    "Job not found",
                    code=codes.RESOURCE_NOT_FOUND,
                    metadata={"job_id": job_id},
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
