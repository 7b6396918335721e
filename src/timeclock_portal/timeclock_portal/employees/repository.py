from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Employee, NewEmployee


class EmployeeRepository(Protocol):
    """Repository interface for the roster.

    Implementations must enforce the case-insensitive unique name at insert
    time and raise ``DuplicateError`` on violation.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Employee]:
        """Case-insensitive equality lookup."""

        raise NotImplementedError

    def existing_name_keys(self) -> set[str]:
        raise NotImplementedError

    def create(self, employee: NewEmployee, *, created_at: datetime) -> Employee:
        raise NotImplementedError

    def create_many(self, employees: Sequence[NewEmployee], *, created_at: datetime) -> Sequence[Employee]:
        """Insert all rows in one transaction; nothing is kept if any row fails."""

        raise NotImplementedError

    def delete_with_sessions(self, employee_id: int) -> bool:
        """Delete the employee and all of its sessions in one transaction."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError
