from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import WorkLocation
from ..employees.model import Employee
from ..geo.model import OriginMetadata
from .model import ClockSession, SessionReportRow


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[ClockSession]:
        raise NotImplementedError

    def get_open_for_employee(self, employee_id: int) -> Optional[ClockSession]:
        """Most recent session with no clock-out, or None."""

        raise NotImplementedError

    def insert_open(
        self,
        *,
        employee: Employee,
        clock_in: datetime,
        location: WorkLocation,
        origin: Optional[OriginMetadata],
    ) -> ClockSession:
        """Conditional insert: raises ``AlreadyOpenError`` if an open session exists."""

        raise NotImplementedError

    def close(self, *, session_id: int, clock_out: datetime, elapsed_minutes: int) -> bool:
        """Set the end time only if it is still unset. Returns False otherwise."""

        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[ClockSession]:
        raise NotImplementedError

    def get_report_rows(self, *, start: datetime, end: datetime) -> Sequence[SessionReportRow]:
        """Sessions with start <= clock_in <= end, newest first."""

        raise NotImplementedError
