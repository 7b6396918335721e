from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence, Union

from ..audit.model import AuditActor
from ..audit.service import AuditRecorder
from ..common.datetime_utils import now_utc
from ..common.validators import parse_location
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AuditAction, WorkLocation
from ..core.exceptions import AlreadyClosedError, NotFoundError
from ..employees.repository import EmployeeRepository
from ..geo.model import OriginMetadata
from .elapsed import Elapsed, compute_elapsed
from .model import ClockSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class ClockRegistry:
    """Use case: open and close attendance sessions.

    Stateless between calls: the employee identity and ``now`` are passed in
    explicitly. The one-open-session rule is enforced by the repository's
    conditional insert, never by a read-then-write here.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        employees: EmployeeRepository,
        recorder: AuditRecorder,
    ):
        self._sessions = sessions
        self._employees = employees
        self._recorder = recorder

    def get_open_session(self, employee_id: int) -> Optional[ClockSession]:
        """Currently open session, if any.

        Sessions left open across a day boundary are still returned; nothing
        here closes stale sessions.
        """

        return self._sessions.get_open_for_employee(employee_id)

    def clock_in(
        self,
        employee_id: int,
        location: Union[str, WorkLocation],
        origin: Optional[OriginMetadata] = None,
        *,
        now: Optional[datetime] = None,
    ) -> ClockSession:
        location = parse_location(location)
        now = now or now_utc()

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")

        session = self._sessions.insert_open(employee=employee, clock_in=now, location=location, origin=origin)

        self._recorder.record(
            AuditAction.CLOCK_IN,
            actor=employee.as_actor(),
            origin=origin,
            details={
                "location": location.value,
                "ip": origin.ip if origin else None,
                "location_data": origin.location_data() if origin else None,
            },
            now=now,
        )
        return session

    def clock_out(
        self,
        session_id: int,
        origin: Optional[OriginMetadata] = None,
        *,
        employee_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ClockSession:
        """Close a session. When ``employee_id`` is given the session must belong to it."""

        now = now or now_utc()

        session = self._sessions.get_by_id(session_id)
        if not session or (employee_id is not None and session.employee_id != employee_id):
            raise NotFoundError(f"Session {session_id} does not exist")
        if not session.is_open:
            raise AlreadyClosedError(f"Session {session_id} was already closed at {session.clock_out.isoformat()}")

        elapsed = compute_elapsed(session.clock_in, now)
        if elapsed.clamped:
            logger.warning("Clock skew on session %s: clock-out %s precedes clock-in %s", session_id, now, session.clock_in)

        if not self._sessions.close(session_id=session_id, clock_out=now, elapsed_minutes=elapsed.total_minutes):
            # Lost a race against another clock-out of the same session.
            raise AlreadyClosedError(f"Session {session_id} was already closed")

        closed = replace(session, clock_out=now, elapsed_minutes=elapsed.total_minutes)

        details = {
            "elapsed_minutes": elapsed.total_minutes,
            "hours_worked": str(elapsed),
            "location": session.location.value,
        }
        if elapsed.clamped:
            details["clock_skew"] = True

        self._recorder.record(
            AuditAction.CLOCK_OUT,
            actor=AuditActor(name=session.employee_name, email=session.employee_email or session.employee_name),
            origin=origin,
            details=details,
            now=now,
        )
        return closed

    def live_elapsed(self, session: ClockSession, now: Optional[datetime] = None) -> Elapsed:
        return session.elapsed(now or now_utc())

    def history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[ClockSession]:
        return self._sessions.get_recent_for_employee(employee_id, int(limit))
