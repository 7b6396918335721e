from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import day_bounds, now_utc
from ..core.enums import AuditAction
from ..core.exceptions import ValidationError
from ..geo.model import OriginMetadata
from .model import AuditActor, AuditEvent
from .repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Use case: mirror every state-changing action into the audit trail.

    Writes are best effort. A failed audit write is logged and swallowed so the
    business action that triggered it still succeeds; the trail may then be
    incomplete.
    """

    def __init__(self, audit: AuditRepository):
        self._audit = audit

    def record(
        self,
        action: AuditAction,
        actor: Optional[AuditActor] = None,
        origin: Optional[OriginMetadata] = None,
        details: Optional[dict[str, Any]] = None,
        *,
        now: Optional[datetime] = None,
    ) -> Optional[AuditEvent]:
        try:
            return self._audit.append(
                action=AuditAction(action),
                actor=actor,
                origin=origin,
                details=dict(details or {}),
                created_at=now or now_utc(),
            )
        except Exception:
            logger.exception(
                "Audit write failed: action=%s actor=%s",
                getattr(action, "value", action),
                actor.name if actor else "-",
            )
            return None

    def query_by_date_range(self, start: datetime, end: datetime) -> Sequence[AuditEvent]:
        if end < start:
            raise ValidationError("End of range must not be before its start")
        return list(self._audit.list_between(start=start, end=end))

    def events_for_day(self, day: date) -> Sequence[AuditEvent]:
        start, end = day_bounds(day)
        return self.query_by_date_range(start, end)
