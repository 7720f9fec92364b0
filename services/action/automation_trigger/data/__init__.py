"""Data-layer exports for Automation Trigger Service."""

from services.action.automation_trigger.data.repository import SqlAgentJobRepository
from services.action.automation_trigger.data.runtime import AgentJobSqlRuntime

__all__ = ["AgentJobSqlRuntime", "SqlAgentJobRepository"]
