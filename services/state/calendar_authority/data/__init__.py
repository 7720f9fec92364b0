"""Data-layer exports for Calendar Authority Service."""

from services.state.calendar_authority.data.repository import (
    SqlCalendarEventRepository,
)
from services.state.calendar_authority.data.runtime import CalendarSqlRuntime

__all__ = ["CalendarSqlRuntime", "SqlCalendarEventRepository"]
