from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import AuditAction
from ..geo.model import OriginMetadata


@dataclass(frozen=True)
class AuditActor:
    """Name/email snapshot of whoever triggered an action.

    Stored by value so events stay readable after the employee is deleted.
    """

    name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class AuditEvent:
    """Domain entity: one immutable entry of the audit trail."""

    event_id: int
    action: AuditAction
    created_at: datetime
    actor: Optional[AuditActor] = None
    origin: Optional[OriginMetadata] = None
    details: dict[str, Any] = field(default_factory=dict)
