"""Pure, single-pass transforms over a day's snapshot of sessions and events.

Nothing here touches storage or mutates its inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence, TypeVar, Union

from ..audit.model import AuditEvent
from ..clock.elapsed import format_minutes
from ..clock.model import ClockSession
from ..common.validators import parse_location
from ..core.enums import AuditAction, WorkLocation
from ..core.exceptions import ValidationError

ALL = "all"

S = TypeVar("S", bound=ClockSession)


def count_open_sessions(sessions: Iterable[ClockSession]) -> int:
    return sum(1 for s in sessions if s.is_open)


def count_by_location(sessions: Iterable[ClockSession], location: Union[str, WorkLocation]) -> int:
    location = parse_location(location)
    return sum(1 for s in sessions if s.location == location)


def sum_elapsed(sessions: Iterable[ClockSession], now: datetime) -> int:
    """Total whole minutes; open sessions are measured up to ``now``."""

    return sum(s.elapsed(now).total_minutes for s in sessions)


def filter_by_location(sessions: Sequence[S], location: Union[str, WorkLocation]) -> list[S]:
    if location == ALL:
        return list(sessions)
    location = parse_location(location)
    return [s for s in sessions if s.location == location]


def filter_by_action(events: Sequence[AuditEvent], action: Union[str, AuditAction]) -> list[AuditEvent]:
    if action == ALL:
        return list(events)
    try:
        action = AuditAction(action)
    except ValueError:
        raise ValidationError(f"Unknown action filter: {action!r}") from None
    return [e for e in events if e.action == action]


@dataclass(frozen=True)
class DashboardSummary:
    total_sessions: int
    open_sessions: int
    office: int
    remote: int
    hybrid: int
    total_minutes: int

    @property
    def total_hours(self) -> str:
        return format_minutes(self.total_minutes)

    def as_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "open_sessions": self.open_sessions,
            "office": self.office,
            "remote": self.remote,
            "hybrid": self.hybrid,
            "total_minutes": self.total_minutes,
            "total_hours": self.total_hours,
        }


def summarize(sessions: Iterable[ClockSession], now: datetime) -> DashboardSummary:
    counts = {loc: 0 for loc in WorkLocation}
    total = 0
    open_count = 0
    minutes = 0
    for s in sessions:
        total += 1
        counts[s.location] += 1
        if s.is_open:
            open_count += 1
        minutes += s.elapsed(now).total_minutes

    return DashboardSummary(
        total_sessions=total,
        open_sessions=open_count,
        office=counts[WorkLocation.OFFICE],
        remote=counts[WorkLocation.REMOTE],
        hybrid=counts[WorkLocation.HYBRID],
        total_minutes=minutes,
    )
