"""Pydantic request-validation models for Reporting Service API."""

from __future__ import annotations

from packages.automator_shared.validation import QueryModel, RangeEnd, RangeStart


class ReportRequest(QueryModel):
    """Validated report window; date-only bounds cover the whole UTC day."""

    start_date: RangeStart | None = None
    end_date: RangeEnd | None = None
