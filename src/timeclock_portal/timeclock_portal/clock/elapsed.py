"""Elapsed-time arithmetic shared by live display, clock-out and reports.

Sub-minute remainders are truncated, never rounded, so the value shown on a
running session never disagrees with the one persisted at clock-out.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Elapsed:
    total_minutes: int
    # True when end < start (clock skew) and the result was clamped to zero.
    clamped: bool = False

    @property
    def hours(self) -> int:
        return self.total_minutes // 60

    @property
    def minutes(self) -> int:
        return self.total_minutes % 60

    @property
    def hours_decimal(self) -> str:
        return f"{self.total_minutes / 60:.2f}"

    def __str__(self) -> str:
        return format_minutes(self.total_minutes)


def format_minutes(total_minutes: int) -> str:
    return f"{total_minutes // 60}h {total_minutes % 60}m"


def compute_elapsed(start: datetime, end_or_now: datetime) -> Elapsed:
    seconds = (end_or_now - start).total_seconds()
    if seconds < 0:
        return Elapsed(total_minutes=0, clamped=True)
    return Elapsed(total_minutes=int(seconds // 60))
