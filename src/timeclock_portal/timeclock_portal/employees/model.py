from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..audit.model import AuditActor


def name_key(name: str) -> str:
    """Comparison key for the case-insensitive unique login name."""
    return name.strip().lower()


@dataclass(frozen=True)
class NewEmployee:
    """Validated row waiting to be inserted."""

    name: str
    email: Optional[str] = None
    manager: Optional[str] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class Employee:
    """Domain entity: a roster member allowed to clock in.

    Note: ``email`` also carries the company qualifier for imported rows.
    """

    employee_id: int
    name: str
    created_at: datetime
    email: Optional[str] = None
    manager: Optional[str] = None
    location: Optional[str] = None

    def as_actor(self) -> AuditActor:
        return AuditActor(name=self.name, email=self.email or self.name)
