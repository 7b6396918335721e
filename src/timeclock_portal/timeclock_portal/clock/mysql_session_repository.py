from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import as_utc, to_db
from ..core.enums import WorkLocation
from ..core.exceptions import AlreadyOpenError, NotFoundError, PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, is_missing_parent
from ..employees.model import Employee
from ..geo.model import OriginMetadata
from .model import ClockSession, SessionReportRow
from .repository import SessionRepository

_COLUMNS = """
    te.session_id, te.employee_id, te.employee_name, te.employee_email,
    te.clock_in, te.clock_out, te.location, te.elapsed_minutes,
    te.ip_address, te.city, te.country, te.timezone
"""


class MySQLSessionRepository(SessionRepository):
    """``time_entries`` access.

    The one-open-session rule rests on the UNIQUE index over the generated
    ``open_employee_id`` column, so concurrent clock-ins cannot both commit.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[ClockSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_entries te WHERE te.session_id=%s", (int(session_id),))
            row = fetchone(cur)
        return _to_session(row) if row else None

    def get_open_for_employee(self, employee_id: int) -> Optional[ClockSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries te
                WHERE te.employee_id=%s AND te.clock_out IS NULL
                ORDER BY te.clock_in DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
        return _to_session(row) if row else None

    def insert_open(
        self,
        *,
        employee: Employee,
        clock_in: datetime,
        location: WorkLocation,
        origin: Optional[OriginMetadata],
    ) -> ClockSession:
        origin = origin or OriginMetadata()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO time_entries(
                        employee_id, employee_name, employee_email, clock_in, location,
                        ip_address, city, country, timezone
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee.employee_id,
                        employee.name,
                        employee.email,
                        to_db(clock_in),
                        location.value,
                        origin.ip,
                        origin.city,
                        origin.country,
                        origin.timezone,
                    ),
                )
                session_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise AlreadyOpenError(f"{employee.name} is already clocked in") from e
            if is_missing_parent(e):
                raise NotFoundError(f"Employee {employee.employee_id} does not exist") from e
            raise PersistenceError(f"Could not record clock-in: {e.msg}") from e

        return ClockSession(
            session_id=session_id,
            employee_id=employee.employee_id,
            employee_name=employee.name,
            employee_email=employee.email,
            clock_in=clock_in,
            location=location,
            origin=origin if origin != OriginMetadata() else None,
        )

    def close(self, *, session_id: int, clock_out: datetime, elapsed_minutes: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET clock_out=%s, elapsed_minutes=%s
                WHERE session_id=%s AND clock_out IS NULL
                """,
                (to_db(clock_out), int(elapsed_minutes), int(session_id)),
            )
            return cur.rowcount > 0

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[ClockSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries te
                WHERE te.employee_id=%s
                ORDER BY te.clock_in DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            rows = fetchall(cur)
        return [_to_session(r) for r in rows]

    def get_report_rows(self, *, start: datetime, end: datetime) -> Sequence[SessionReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, e.manager
                FROM time_entries te
                LEFT JOIN employees e ON e.employee_id = te.employee_id
                WHERE te.clock_in BETWEEN %s AND %s
                ORDER BY te.clock_in DESC
                """,
                (to_db(start), to_db(end)),
            )
            rows = fetchall(cur)
        return [_to_session(r, report=True) for r in rows]


def _to_session(r: dict, *, report: bool = False) -> ClockSession:
    origin = None
    if any(r.get(k) for k in ("ip_address", "city", "country", "timezone")):
        origin = OriginMetadata(
            ip=r.get("ip_address"),
            city=r.get("city"),
            country=r.get("country"),
            timezone=r.get("timezone"),
        )

    fields = dict(
        session_id=int(r["session_id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r["employee_name"],
        employee_email=r.get("employee_email"),
        clock_in=as_utc(r["clock_in"]),
        clock_out=as_utc(r.get("clock_out")),
        location=WorkLocation(r["location"]),
        elapsed_minutes=r.get("elapsed_minutes"),
        origin=origin,
    )
    if report:
        return SessionReportRow(manager=r.get("manager"), **fields)
    return ClockSession(**fields)
