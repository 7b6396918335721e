from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import as_utc, to_db
from ..core.enums import AuditAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, load_json
from ..geo.model import OriginMetadata
from .model import AuditActor, AuditEvent
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        action: AuditAction,
        actor: Optional[AuditActor],
        origin: Optional[OriginMetadata],
        details: dict[str, Any],
        created_at: datetime,
    ) -> AuditEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(action_type, employee_name, employee_email, ip_address, location_data, details, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    action.value,
                    actor.name if actor else None,
                    actor.email if actor else None,
                    origin.ip if origin else None,
                    dump_json(origin.location_data()) if origin else None,
                    dump_json(details),
                    to_db(created_at),
                ),
            )
            event_id = int(cur.lastrowid)

        return AuditEvent(
            event_id=event_id,
            action=action,
            created_at=created_at,
            actor=actor,
            origin=origin,
            details=dict(details),
        )

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[AuditEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, action_type, employee_name, employee_email, ip_address, location_data, details, created_at
                FROM audit_logs
                WHERE created_at BETWEEN %s AND %s
                ORDER BY created_at DESC, event_id DESC
                """,
                (to_db(start), to_db(end)),
            )
            rows = fetchall(cur)

        return [self._to_event(r) for r in rows]

    @staticmethod
    def _to_event(r: dict) -> AuditEvent:
        actor = None
        if r.get("employee_name") or r.get("employee_email"):
            actor = AuditActor(name=r.get("employee_name"), email=r.get("employee_email"))

        return AuditEvent(
            event_id=int(r["event_id"]),
            action=AuditAction(r["action_type"]),
            created_at=as_utc(r["created_at"]),
            actor=actor,
            origin=OriginMetadata.from_location_data(r.get("ip_address"), load_json(r.get("location_data"))),
            details=load_json(r.get("details")) or {},
        )
