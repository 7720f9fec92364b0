"""Task Authority-owned SQL runtime wiring."""

from __future__ import annotations

from dataclasses import dataclass

from resources.substrates.sql import SqlSessionProvider
from resources.substrates.sql.substrate import SqlHealthStatus, SqlSubstrate
from services.state.task_authority.data.schema import metadata


@dataclass(frozen=True)
class TaskSqlRuntime:
    """Concrete Task Authority handle for transactional SQL access."""

    substrate: SqlSubstrate
    sessions: SqlSessionProvider

    @classmethod
    def from_substrate(cls, substrate: SqlSubstrate) -> "TaskSqlRuntime":
        """Provision owned tables and bind the shared session provider."""
        substrate.ensure_schema(metadata)
        return cls(substrate=substrate, sessions=substrate.sessions)

    def health(self) -> SqlHealthStatus:
        """Return backing database readiness."""
        return self.substrate.health()
