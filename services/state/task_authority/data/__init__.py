"""Data-layer exports for Task Authority Service."""

from services.state.task_authority.data.repository import SqlTaskRepository
from services.state.task_authority.data.runtime import TaskSqlRuntime

__all__ = ["SqlTaskRepository", "TaskSqlRuntime"]
