from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .admin.service import AdminAuthService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.repository import AuditRepository
from .audit.service import AuditRecorder
from .clock.mysql_session_repository import MySQLSessionRepository
from .clock.repository import SessionRepository
from .clock.service import ClockRegistry
from .core.constants import DEFAULT_GEO_LOOKUP_TIMEOUT, DEFAULT_GEO_LOOKUP_URL
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import RosterService
from .geo.lookup import GeoLookup, IpApiGeoLookup, NullGeoLookup
from .reporting.service import ReportingService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    sessions_repo: SessionRepository
    audit_repo: AuditRepository
    geo_lookup: GeoLookup

    audit_recorder: AuditRecorder
    roster_service: RosterService
    clock_registry: ClockRegistry
    reporting_service: ReportingService
    admin_auth_service: AdminAuthService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    sessions_repo: SessionRepository,
    audit_repo: AuditRepository,
    geo_lookup: GeoLookup,
    admin_password_hash: str,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    audit_recorder = AuditRecorder(audit_repo)

    return Container(
        employees_repo=employees_repo,
        sessions_repo=sessions_repo,
        audit_repo=audit_repo,
        geo_lookup=geo_lookup,
        audit_recorder=audit_recorder,
        roster_service=RosterService(employees_repo, audit_recorder),
        clock_registry=ClockRegistry(sessions_repo, employees_repo, audit_recorder),
        reporting_service=ReportingService(sessions_repo, audit_recorder),
        admin_auth_service=AdminAuthService(admin_password_hash, audit_recorder),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    admin_password_hash: str,
    geo_lookup_url: Optional[str] = DEFAULT_GEO_LOOKUP_URL,
    geo_lookup_timeout: float = DEFAULT_GEO_LOOKUP_TIMEOUT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    if geo_lookup_url:
        geo_lookup: GeoLookup = IpApiGeoLookup(geo_lookup_url, timeout=geo_lookup_timeout)
    else:
        geo_lookup = NullGeoLookup()

    return wire_services(
        employees_repo=MySQLEmployeeRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        audit_repo=MySQLAuditRepository(conn),
        geo_lookup=geo_lookup,
        admin_password_hash=admin_password_hash,
        conn=conn,
    )
