"""Concrete Reporting Service implementation."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Mapping

from packages.automator_shared.envelope import (
    Envelope,
    EnvelopeMeta,
    failure,
    success,
    validate_meta,
)
from packages.automator_shared.logging import get_logger, public_api_instrumented
from packages.automator_shared.timestamps import utc_now
from packages.automator_shared.validation import range_order_errors, validate_request
from services.action.automation_trigger.service import AutomationTriggerService
from services.action.reporting.component import SERVICE_COMPONENT_ID
from services.action.reporting.config import ReportingSettings
from services.action.reporting.domain import (
    DailyCount,
    HealthStatus,
    PriorityBucket,
    Report,
    ReportSummary,
)
from services.action.reporting.service import ReportingService
from services.action.reporting.validation import ReportRequest
from services.state.calendar_authority.service import CalendarAuthorityService
from services.state.notification_authority.service import (
    NotificationAuthorityService,
)
from services.state.task_authority.service import TaskAuthorityService

_LOGGER = get_logger(__name__)

_RATE_QUANTUM = Decimal("0.01")


class DefaultReportingService(ReportingService):
    """Default Reporting implementation fanning out to owning services.

    Every upstream call must succeed; the first failing envelope's errors
    become the report's errors.
    """

    def __init__(
        self,
        *,
        settings: ReportingSettings,
        task_service: TaskAuthorityService,
        calendar_service: CalendarAuthorityService,
        notification_service: NotificationAuthorityService,
        automation_service: AutomationTriggerService,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._settings = settings
        self._tasks = task_service
        self._calendar = calendar_service
        self._notifications = notification_service
        self._automation = automation_service
        self._clock = clock

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def generate_report(
        self, *, meta: EnvelopeMeta, query: Mapping[str, Any]
    ) -> Envelope[Report]:
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        request, errors = validate_request(model=ReportRequest, payload=query)
        if errors:
            return failure(meta=meta, errors=errors)
        assert isinstance(request, ReportRequest)

        errors = range_order_errors(
            start=request.start_date,
            end=request.end_date,
            field="endDate",
            message="endDate must not be before startDate",
        )
        if errors:
            return failure(meta=meta, errors=errors)

        start, end = request.start_date, request.end_date
        series_since = self._clock() - timedelta(days=self._settings.series_days)

        tasks = self._tasks.task_statistics(
            meta=meta, start=start, end=end, series_since=series_since
        )
        if not tasks.ok:
            return failure(meta=meta, errors=list(tasks.errors))
        events = self._calendar.count_events(meta=meta, start=start, end=end)
        if not events.ok:
            return failure(meta=meta, errors=list(events.errors))
        jobs = self._automation.job_statistics(meta=meta, start=start, end=end)
        if not jobs.ok:
            return failure(meta=meta, errors=list(jobs.errors))
        unread = self._notifications.count_unread(meta=meta)
        if not unread.ok:
            return failure(meta=meta, errors=list(unread.errors))

        task_stats = tasks.payload.value
        job_stats = jobs.payload.value
        daily = Counter(moment.date() for moment in task_stats.recent_completions)
        return success(
            meta=meta,
            payload=Report(
                summary=ReportSummary(
                    total_tasks=task_stats.total,
                    completed_tasks=task_stats.completed,
                    in_progress_tasks=task_stats.in_progress,
                    todo_tasks=task_stats.todo,
                    total_events=events.payload.value,
                    total_agent_jobs=job_stats.total,
                    completed_agent_jobs=job_stats.completed,
                    unread_notifications=unread.payload.value,
                    completion_rate=completion_rate(
                        completed=task_stats.completed, total=task_stats.total
                    ),
                ),
                tasks_by_priority=[
                    PriorityBucket(priority=item.priority, count=item.count)
                    for item in task_stats.by_priority
                ],
                tasks_completed_over_time=[
                    DailyCount(day=day, count=daily[day]) for day in sorted(daily)
                ],
            ),
        )

    @public_api_instrumented(
        logger=_LOGGER,
        component_id=str(SERVICE_COMPONENT_ID),
    )
    def health(self, *, meta: EnvelopeMeta) -> Envelope[HealthStatus]:
        """Report ready only when every upstream service reports ready."""
        errors = validate_meta(meta)
        if errors:
            return failure(meta=meta, errors=errors)
        upstream = {
            "task_authority": self._tasks.health(meta=meta),
            "calendar_authority": self._calendar.health(meta=meta),
            "notification_authority": self._notifications.health(meta=meta),
            "automation_trigger": self._automation.health(meta=meta),
        }
        not_ready = sorted(
            name
            for name, result in upstream.items()
            if not result.ok or not result.payload.value.substrate_ready
        )
        return success(
            meta=meta,
            payload=HealthStatus(
                service_ready=not not_ready,
                detail="ok" if not not_ready else f"not ready: {', '.join(not_ready)}",
            ),
        )


def completion_rate(*, completed: int, total: int) -> Decimal:
    """Return ``100 * completed / total`` rounded half-up to two places."""
    if total <= 0:
        return Decimal("0")
    return (Decimal(100) * completed / total).quantize(
        _RATE_QUANTUM, rounding=ROUND_HALF_UP
    )
