"""Task Authority Service native package exports."""

from services.state.task_authority.component import MANIFEST
from services.state.task_authority.config import TaskAuthoritySettings
from services.state.task_authority.domain import (
    PriorityCount,
    TaskPriority,
    TaskRecord,
    TaskStatistics,
    TaskStatus,
)
from services.state.task_authority.implementation import DefaultTaskAuthorityService
from services.state.task_authority.service import TaskAuthorityService

__all__ = [
    "MANIFEST",
    "DefaultTaskAuthorityService",
    "PriorityCount",
    "TaskAuthorityService",
    "TaskAuthoritySettings",
    "TaskPriority",
    "TaskRecord",
    "TaskStatistics",
    "TaskStatus",
]
