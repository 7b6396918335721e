from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from ..core.enums import AuditAction
from ..geo.model import OriginMetadata
from .model import AuditActor, AuditEvent


class AuditRepository(Protocol):
    """Append-only store: no update or delete operation on purpose."""

    def append(
        self,
        *,
        action: AuditAction,
        actor: Optional[AuditActor],
        origin: Optional[OriginMetadata],
        details: dict[str, Any],
        created_at: datetime,
    ) -> AuditEvent:
        raise NotImplementedError

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[AuditEvent]:
        """Events with start <= created_at <= end, newest first."""

        raise NotImplementedError
