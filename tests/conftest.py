from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.timeclock_portal.timeclock_portal.audit.model import AuditEvent
from src.timeclock_portal.timeclock_portal.audit.service import AuditRecorder
from src.timeclock_portal.timeclock_portal.clock.model import ClockSession, SessionReportRow
from src.timeclock_portal.timeclock_portal.clock.service import ClockRegistry
from src.timeclock_portal.timeclock_portal.container import wire_services
from src.timeclock_portal.timeclock_portal.core.exceptions import AlreadyOpenError, DuplicateError, PersistenceError
from src.timeclock_portal.timeclock_portal.employees.model import Employee, NewEmployee, name_key
from src.timeclock_portal.timeclock_portal.employees.service import RosterService
from src.timeclock_portal.timeclock_portal.geo.lookup import NullGeoLookup


class InMemoryAudit:
    def __init__(self):
        self.events: list[AuditEvent] = []
        self.fail = False

    def append(self, *, action, actor, origin, details, created_at) -> AuditEvent:
        if self.fail:
            raise PersistenceError("audit store down")
        event = AuditEvent(
            event_id=len(self.events) + 1,
            action=action,
            created_at=created_at,
            actor=actor,
            origin=origin,
            details=dict(details),
        )
        self.events.append(event)
        return event

    def list_between(self, *, start, end):
        rows = [e for e in self.events if start <= e.created_at <= end]
        rows.sort(key=lambda e: (e.created_at, e.event_id), reverse=True)
        return rows


class InMemorySessions:
    """Mimics the unique index on the open-session marker with a lock."""

    def __init__(self):
        self.rows: dict[int, ClockSession] = {}
        self.employees: Optional["InMemoryEmployees"] = None
        self.fail_insert = False
        self._lock = threading.Lock()
        self._id = 0

    def get_by_id(self, session_id: int) -> Optional[ClockSession]:
        return self.rows.get(session_id)

    def get_open_for_employee(self, employee_id: int) -> Optional[ClockSession]:
        items = [s for s in self.rows.values() if s.employee_id == employee_id and s.clock_out is None]
        items.sort(key=lambda s: s.clock_in, reverse=True)
        return items[0] if items else None

    def insert_open(self, *, employee: Employee, clock_in, location, origin) -> ClockSession:
        if self.fail_insert:
            raise PersistenceError("store rejected write")
        with self._lock:
            if self.get_open_for_employee(employee.employee_id):
                raise AlreadyOpenError(f"{employee.name} is already clocked in")
            self._id += 1
            session = ClockSession(
                session_id=self._id,
                employee_id=employee.employee_id,
                employee_name=employee.name,
                employee_email=employee.email,
                clock_in=clock_in,
                location=location,
                origin=origin,
            )
            self.rows[self._id] = session
            return session

    def close(self, *, session_id: int, clock_out, elapsed_minutes: int) -> bool:
        with self._lock:
            current = self.rows.get(session_id)
            if not current or current.clock_out is not None:
                return False
            self.rows[session_id] = replace(current, clock_out=clock_out, elapsed_minutes=elapsed_minutes)
            return True

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [s for s in self.rows.values() if s.employee_id == employee_id]
        items.sort(key=lambda s: s.clock_in, reverse=True)
        return items[:limit]

    def get_report_rows(self, *, start, end):
        out = []
        for s in self.rows.values():
            if start <= s.clock_in <= end:
                employee = self.employees.get_by_id(s.employee_id) if self.employees else None
                fields = {k: getattr(s, k) for k in ClockSession.__dataclass_fields__}
                out.append(SessionReportRow(manager=employee.manager if employee else None, **fields))
        out.sort(key=lambda r: r.clock_in, reverse=True)
        return out


class InMemoryEmployees:
    def __init__(self, sessions: InMemorySessions):
        self.rows: dict[int, Employee] = {}
        self.sessions = sessions
        self.fail_batch = False
        self._id = 0

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.rows.get(employee_id)

    def get_by_name(self, name: str) -> Optional[Employee]:
        for e in self.rows.values():
            if name_key(e.name) == name_key(name):
                return e
        return None

    def existing_name_keys(self) -> set[str]:
        return {name_key(e.name) for e in self.rows.values()}

    def create(self, employee: NewEmployee, *, created_at) -> Employee:
        if self.get_by_name(employee.name):
            raise DuplicateError(f'Employee name "{employee.name}" already exists')
        self._id += 1
        row = Employee(
            employee_id=self._id,
            name=employee.name,
            created_at=created_at,
            email=employee.email,
            manager=employee.manager,
            location=employee.location,
        )
        self.rows[self._id] = row
        return row

    def create_many(self, employees, *, created_at):
        if self.fail_batch:
            raise PersistenceError("batch insert rejected")
        return [self.create(e, created_at=created_at) for e in employees]

    def delete_with_sessions(self, employee_id: int) -> bool:
        for sid in [sid for sid, s in self.sessions.rows.items() if s.employee_id == employee_id]:
            del self.sessions.rows[sid]
        return self.rows.pop(employee_id, None) is not None

    def list_all(self):
        return sorted(self.rows.values(), key=lambda e: (e.created_at, e.employee_id), reverse=True)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def audit_repo() -> InMemoryAudit:
    return InMemoryAudit()


@pytest.fixture
def sessions_repo() -> InMemorySessions:
    return InMemorySessions()


@pytest.fixture
def employees_repo(sessions_repo) -> InMemoryEmployees:
    repo = InMemoryEmployees(sessions_repo)
    sessions_repo.employees = repo
    return repo


@pytest.fixture
def recorder(audit_repo) -> AuditRecorder:
    return AuditRecorder(audit_repo)


@pytest.fixture
def roster(employees_repo, recorder) -> RosterService:
    return RosterService(employees_repo, recorder)


@pytest.fixture
def registry(sessions_repo, employees_repo, recorder) -> ClockRegistry:
    return ClockRegistry(sessions_repo, employees_repo, recorder)


@pytest.fixture
def container(employees_repo, sessions_repo, audit_repo):
    return wire_services(
        employees_repo=employees_repo,
        sessions_repo=sessions_repo,
        audit_repo=audit_repo,
        geo_lookup=NullGeoLookup(),
        admin_password_hash=generate_password_hash("admin123"),
    )
