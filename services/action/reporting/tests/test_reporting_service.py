"""Behavior tests for Reporting Service aggregation semantics."""

from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from packages.automator_shared.envelope import EnvelopeKind, failure, new_meta, success
from packages.automator_shared.errors import ErrorCategory, dependency_error
from services.action.automation_trigger.domain import JobStatistics
from services.action.reporting.api import report_to_json
from services.action.reporting.config import ReportingSettings
from services.action.reporting.implementation import (
    DefaultReportingService,
    completion_rate,
)
from services.state.task_authority.domain import (
    PriorityCount,
    TaskPriority,
    TaskStatistics,
)

_NOW = datetime(2026, 3, 10, 12, tzinfo=UTC)


class _FakeTasks:
    def __init__(self, stats: TaskStatistics) -> None:
        self.stats = stats
        self.calls: list[dict[str, object]] = []

    def task_statistics(self, *, meta, start, end, series_since):
        self.calls.append({"start": start, "end": end, "series_since": series_since})
        return success(meta=meta, payload=self.stats)


class _FakeCalendar:
    def __init__(self, count: int = 0, fail: bool = False) -> None:
        self.count = count
        self.fail = fail

    def count_events(self, *, meta, start, end):
        del start, end
        if self.fail:
            return failure(
                meta=meta, errors=[dependency_error("count_events failed")]
            )
        return success(meta=meta, payload=self.count)


class _FakeAutomation:
    def job_statistics(self, *, meta, start, end):
        del start, end
        return success(meta=meta, payload=JobStatistics(total=4, completed=0))


class _FakeNotifications:
    def count_unread(self, *, meta):
        return success(meta=meta, payload=2)


def _stats(**overrides) -> TaskStatistics:
    values = {
        "total": 3,
        "completed": 2,
        "in_progress": 1,
        "todo": 0,
        "by_priority": [
            PriorityCount(priority=TaskPriority.LOW, count=1),
            PriorityCount(priority=TaskPriority.HIGH, count=2),
        ],
        "recent_completions": [
            datetime(2026, 3, 8, 23, 59, tzinfo=UTC),
            datetime(2026, 3, 9, 0, 1, tzinfo=UTC),
            datetime(2026, 3, 9, 10, tzinfo=UTC),
        ],
    }
    values.update(overrides)
    return TaskStatistics(**values)


def _meta():
    return new_meta(kind=EnvelopeKind.QUERY, source="test", principal="user-1")


def _service(*, stats=None, calendar=None):
    tasks = _FakeTasks(stats or _stats())
    service = DefaultReportingService(
        settings=ReportingSettings(),
        task_service=tasks,
        calendar_service=calendar or _FakeCalendar(count=5),
        notification_service=_FakeNotifications(),
        automation_service=_FakeAutomation(),
        clock=lambda: _NOW,
    )
    return service, tasks


def test_report_combines_upstream_statistics() -> None:
    """Summary, priority buckets and daily series come from upstream counts."""
    service, _ = _service()

    result = service.generate_report(meta=_meta(), query={})

    assert result.ok is True
    body = report_to_json(result.payload.value)
    assert body["summary"] == {
        "totalTasks": 3,
        "completedTasks": 2,
        "inProgressTasks": 1,
        "todoTasks": 0,
        "totalEvents": 5,
        "totalAgentJobs": 4,
        "completedAgentJobs": 0,
        "unreadNotifications": 2,
        "completionRate": 66.67,
    }
    assert body["tasksByPriority"] == [
        {"priority": "LOW", "count": 1},
        {"priority": "HIGH", "count": 2},
    ]
    assert body["tasksCompletedOverTime"] == [
        {"date": "2026-03-08", "count": 1},
        {"date": "2026-03-09", "count": 2},
    ]


def test_report_expands_date_only_bounds_and_series_window() -> None:
    """Date-only bounds cover whole UTC days; the series looks back seven days."""
    service, tasks = _service()

    service.generate_report(
        meta=_meta(), query={"startDate": "2026-03-01", "endDate": "2026-03-02"}
    )

    call = tasks.calls[0]
    assert call["start"] == datetime(2026, 3, 1, tzinfo=UTC)
    assert call["end"].date() == date(2026, 3, 2)
    assert call["end"].hour == 23
    assert call["series_since"] == datetime(2026, 3, 3, 12, tzinfo=UTC)


def test_report_rejects_reversed_range() -> None:
    """An end before the start is a validation failure naming endDate."""
    service, tasks = _service()

    result = service.generate_report(
        meta=_meta(), query={"startDate": "2026-03-05", "endDate": "2026-03-01"}
    )

    assert result.errors[0].category == ErrorCategory.VALIDATION
    assert result.errors[0].metadata["field"] == "endDate"
    assert tasks.calls == []


def test_report_fails_when_any_upstream_fails() -> None:
    """One failing statistics call fails the whole report."""
    service, _ = _service(calendar=_FakeCalendar(fail=True))

    result = service.generate_report(meta=_meta(), query={})

    assert result.ok is False
    assert result.errors[0].category == ErrorCategory.DEPENDENCY


def test_zero_tasks_yield_zero_completion_rate() -> None:
    """Empty task sets report a zero rate and no series."""
    service, _ = _service(
        stats=_stats(total=0, completed=0, by_priority=[], recent_completions=[])
    )

    result = service.generate_report(meta=_meta(), query={})

    assert result.payload.value.summary.completion_rate == Decimal("0")
    assert result.payload.value.tasks_completed_over_time == []


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [
        (0, 0, Decimal("0")),
        (1, 3, Decimal("33.33")),
        (2, 3, Decimal("66.67")),
        (1, 8, Decimal("12.50")),
        (1, 400, Decimal("0.25")),
        (3, 3, Decimal("100.00")),
    ],
)
def test_completion_rate_rounds_half_up(completed, total, expected) -> None:
    assert completion_rate(completed=completed, total=total) == expected
