from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence, Union

from ..audit.model import AuditEvent
from ..audit.service import AuditRecorder
from ..clock.model import SessionReportRow
from ..clock.repository import SessionRepository
from ..common.datetime_utils import day_bounds, now_utc
from ..core.enums import AuditAction, WorkLocation
from .aggregates import ALL, DashboardSummary, filter_by_action, filter_by_location, summarize
from .export import audit_to_csv, sessions_to_csv


@dataclass(frozen=True)
class DayReport:
    day: date
    rows: Sequence[SessionReportRow]
    summary: DashboardSummary


class ReportingService:
    """Loads one day's snapshot and hands it to the pure transforms."""

    def __init__(self, sessions: SessionRepository, recorder: AuditRecorder):
        self._sessions = sessions
        self._recorder = recorder

    def sessions_for_day(self, day: date, *, location: Union[str, WorkLocation] = ALL) -> Sequence[SessionReportRow]:
        start, end = day_bounds(day)
        rows = self._sessions.get_report_rows(start=start, end=end)
        return filter_by_location(rows, location)

    def day_report(
        self,
        day: date,
        *,
        location: Union[str, WorkLocation] = ALL,
        now: Optional[datetime] = None,
    ) -> DayReport:
        rows = self.sessions_for_day(day, location=location)
        return DayReport(day=day, rows=rows, summary=summarize(rows, now or now_utc()))

    def audit_for_day(self, day: date, *, action: Union[str, AuditAction] = ALL) -> Sequence[AuditEvent]:
        return filter_by_action(self._recorder.events_for_day(day), action)

    def export_sessions_csv(
        self,
        day: date,
        *,
        location: Union[str, WorkLocation] = ALL,
        now: Optional[datetime] = None,
    ) -> str:
        return sessions_to_csv(self.sessions_for_day(day, location=location), now or now_utc())

    def export_audit_csv(self, day: date, *, action: Union[str, AuditAction] = ALL) -> str:
        return audit_to_csv(self.audit_for_day(day, action=action))
