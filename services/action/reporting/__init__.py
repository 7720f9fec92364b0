"""Reporting Service native package exports."""

from services.action.reporting.component import MANIFEST
from services.action.reporting.config import ReportingSettings
from services.action.reporting.domain import Report, ReportSummary
from services.action.reporting.implementation import (
    DefaultReportingService,
    completion_rate,
)
from services.action.reporting.service import ReportingService

__all__ = [
    "MANIFEST",
    "DefaultReportingService",
    "Report",
    "ReportSummary",
    "ReportingService",
    "ReportingSettings",
    "completion_rate",
]
