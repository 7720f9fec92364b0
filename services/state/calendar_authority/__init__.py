"""Calendar Authority Service native package exports."""

from services.state.calendar_authority.component import MANIFEST
from services.state.calendar_authority.config import CalendarAuthoritySettings
from services.state.calendar_authority.domain import CalendarEventRecord
from services.state.calendar_authority.implementation import (
    DefaultCalendarAuthorityService,
)
from services.state.calendar_authority.service import CalendarAuthorityService

__all__ = [
    "MANIFEST",
    "CalendarAuthorityService",
    "CalendarAuthoritySettings",
    "CalendarEventRecord",
    "DefaultCalendarAuthorityService",
]
