from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import WorkLocation
from ..geo.model import OriginMetadata
from .elapsed import Elapsed, compute_elapsed


@dataclass(frozen=True)
class ClockSession:
    """Domain entity: one continuous work period (a ``time_entries`` row)."""

    session_id: int
    employee_id: int
    employee_name: str
    clock_in: datetime
    location: WorkLocation
    clock_out: Optional[datetime] = None
    elapsed_minutes: Optional[int] = None
    employee_email: Optional[str] = None
    origin: Optional[OriginMetadata] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    def elapsed(self, now: datetime) -> Elapsed:
        """Closed sessions report the persisted value; open ones are measured to ``now``."""

        if self.clock_out is not None and self.elapsed_minutes is not None:
            return Elapsed(total_minutes=int(self.elapsed_minutes))
        return compute_elapsed(self.clock_in, self.clock_out or now)


@dataclass(frozen=True)
class SessionReportRow(ClockSession):
    """Read-model for dashboards and exports (session joined with roster data)."""

    manager: Optional[str] = None
