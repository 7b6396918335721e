from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..audit.model import AuditActor
from ..audit.service import AuditRecorder
from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_email, require_non_empty
from ..core.enums import AuditAction
from ..core.exceptions import AuthenticationError, DuplicateError, NotFoundError, PersistenceError
from ..geo.model import OriginMetadata
from .importer import ImportReport, RejectedRow, parse_import
from .model import Employee, NewEmployee, name_key
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: maintain the employee directory (admin + bulk import + login)."""

    def __init__(self, employees: EmployeeRepository, recorder: AuditRecorder):
        self._employees = employees
        self._recorder = recorder

    def add_employee(
        self,
        name: str,
        email: Optional[str] = None,
        manager: Optional[str] = None,
        *,
        location: Optional[str] = None,
        actor: Optional[AuditActor] = None,
        now: Optional[datetime] = None,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        email = require_email(email)

        existing = self._employees.get_by_name(name)
        if existing:
            raise DuplicateError(f'Employee name "{existing.name}" already exists. Please use a unique name.')

        employee = self._employees.create(
            NewEmployee(name=name, email=email, manager=optional_text(manager, "Manager"), location=optional_text(location, "Location")),
            created_at=now or now_utc(),
        )

        self._recorder.record(
            AuditAction.EMPLOYEE_ADDED,
            actor=employee.as_actor(),
            details={"added_by": actor.name if actor else None, "manager": employee.manager},
            now=now,
        )
        return employee

    def bulk_import(
        self,
        raw_text: str,
        *,
        actor: Optional[AuditActor] = None,
        now: Optional[datetime] = None,
    ) -> ImportReport:
        parsed = parse_import(raw_text)
        rejected: list[RejectedRow] = list(parsed.rejected)

        taken = self._employees.existing_name_keys()
        accepted = []
        for row in parsed.candidates:
            key = name_key(row.employee.name)
            if key in taken:
                rejected.append(RejectedRow(row.line, f'Line {row.line}: Name "{row.employee.name}" already exists'))
                continue
            taken.add(key)
            accepted.append(row)

        rejected.sort(key=lambda r: r.line)

        if not accepted:
            logger.info("Employee import added nothing (%d rejected)", len(rejected))
            return ImportReport(added=[], rejected=rejected)

        try:
            added = self._employees.create_many([r.employee for r in accepted], created_at=now or now_utc())
        except (DuplicateError, PersistenceError) as e:
            raise PersistenceError(f"Failed to import employees, nothing was added: {e}") from e

        for row, employee in zip(accepted, added):
            self._recorder.record(
                AuditAction.EMPLOYEE_ADDED,
                actor=employee.as_actor(),
                details={"source": "import", "line": row.line, "added_by": actor.name if actor else None},
                now=now,
            )

        report = ImportReport(added=list(added), rejected=rejected)
        logger.info("Employee import finished: %s", report.summary())
        return report

    def remove_employee(self, employee_id: int) -> None:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        if not self._employees.delete_with_sessions(employee_id):
            raise NotFoundError(f"Employee {employee_id} does not exist")

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def login(
        self,
        name: str,
        company: str,
        *,
        origin: Optional[OriginMetadata] = None,
        now: Optional[datetime] = None,
    ) -> Employee:
        """Sign an employee in by name; the company field is required but not matched."""

        name = require_non_empty(name, "Employee name")
        require_non_empty(company, "Company name")

        employee = self._employees.get_by_name(name)
        if not employee:
            raise AuthenticationError("Name not found. Please contact your administrator to add you to the system.")

        self._recorder.record(AuditAction.EMPLOYEE_LOGIN, actor=employee.as_actor(), origin=origin, now=now)
        return employee
