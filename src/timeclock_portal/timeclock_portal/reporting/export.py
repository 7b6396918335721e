from __future__ import annotations

import json
from datetime import datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..audit.model import AuditEvent
from ..clock.model import ClockSession
from ..common.tabular import read_rows, write_rows

SESSION_COLUMNS = [
    "Employee Email",
    "Employee Name",
    "Manager",
    "Clock In",
    "Clock Out",
    "Location",
    "Hours Worked",
    "IP Address",
    "City",
    "Country",
    "Timezone",
    "Date",
]

AUDIT_COLUMNS = [
    "Timestamp",
    "Action",
    "Employee",
    "Email",
    "IP Address",
    "Location",
    "Details",
]

STILL_CLOCKED_IN = "Still clocked in"
MISSING = "-"


def _iso(value: Optional[datetime]) -> str:
    return value.isoformat(timespec="seconds") if value else ""


def session_export_rows(sessions: Iterable[ClockSession], now: datetime) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for s in sessions:
        origin = s.origin
        out.append(
            {
                "Employee Email": s.employee_email or s.employee_name,
                "Employee Name": s.employee_name,
                "Manager": getattr(s, "manager", None) or MISSING,
                "Clock In": _iso(s.clock_in),
                "Clock Out": _iso(s.clock_out) if s.clock_out else STILL_CLOCKED_IN,
                "Location": s.location.label,
                "Hours Worked": str(s.elapsed(now)),
                "IP Address": (origin.ip if origin else None) or MISSING,
                "City": (origin.city if origin else None) or MISSING,
                "Country": (origin.country if origin else None) or MISSING,
                "Timezone": (origin.timezone if origin else None) or MISSING,
                "Date": s.clock_in.date().isoformat(),
            }
        )
    return out


def audit_export_rows(events: Iterable[AuditEvent]) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for e in events:
        origin = e.origin
        place = MISSING
        if origin and (origin.city or origin.country):
            place = ", ".join(p for p in (origin.city, origin.country) if p)
        out.append(
            {
                "Timestamp": _iso(e.created_at),
                "Action": e.action.label,
                "Employee": (e.actor.name if e.actor else None) or MISSING,
                "Email": (e.actor.email if e.actor else None) or MISSING,
                "IP Address": (origin.ip if origin else None) or MISSING,
                "Location": place,
                "Details": json.dumps(e.details or {}, sort_keys=True, default=str),
            }
        )
    return out


def to_csv_text(columns: Sequence[str], rows: Iterable[Mapping[str, object]]) -> str:
    return write_rows(columns, rows)


def sessions_to_csv(sessions: Iterable[ClockSession], now: datetime) -> str:
    return to_csv_text(SESSION_COLUMNS, session_export_rows(sessions, now))


def audit_to_csv(events: Iterable[AuditEvent]) -> str:
    return to_csv_text(AUDIT_COLUMNS, audit_export_rows(events))


def parse_csv_text(text: str) -> list[dict[str, str]]:
    """Read back an export written by this module (same dialect)."""

    return read_rows(text)
