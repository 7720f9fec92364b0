"""Automation Trigger-owned SQL runtime wiring."""

from __future__ import annotations

from dataclasses import dataclass

from resources.substrates.sql import SqlSessionProvider
from resources.substrates.sql.substrate import SqlHealthStatus, SqlSubstrate
from services.action.automation_trigger.data.schema import metadata


@dataclass(frozen=True)
class AgentJobSqlRuntime:
    """Concrete Automation Trigger handle for transactional SQL access."""

    substrate: SqlSubstrate
    sessions: SqlSessionProvider

    @classmethod
    def from_substrate(cls, substrate: SqlSubstrate) -> "AgentJobSqlRuntime":
        substrate.ensure_schema(metadata)
        return cls(substrate=substrate, sessions=substrate.sessions)

    def health(self) -> SqlHealthStatus:
        return self.substrate.health()
