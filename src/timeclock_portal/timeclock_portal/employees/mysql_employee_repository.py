from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import as_utc, to_db
from ..core.exceptions import DuplicateError, PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee, NewEmployee, name_key
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, email, manager, location, created_at"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
        return self._to_employee(row) if row else None

    def get_by_name(self, name: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE name_key=LOWER(TRIM(%s))", (name,))
            row = fetchone(cur)
        return self._to_employee(row) if row else None

    def existing_name_keys(self) -> set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name FROM employees")
            rows = fetchall(cur)
        return {name_key(r["name"]) for r in rows}

    def create(self, employee: NewEmployee, *, created_at: datetime) -> Employee:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                employee_id = self._insert(cur, employee, created_at)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateError(f'Employee name "{employee.name}" already exists') from e
            raise PersistenceError(f'Could not add employee "{employee.name}": {e.msg}') from e
        return self._from_new(employee_id, employee, created_at)

    def create_many(self, employees: Sequence[NewEmployee], *, created_at: datetime) -> Sequence[Employee]:
        out: list[Employee] = []
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for employee in employees:
                    employee_id = self._insert(cur, employee, created_at)
                    out.append(self._from_new(employee_id, employee, created_at))
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateError(f"Import batch collides with an existing employee: {e.msg}") from e
            raise PersistenceError(f"Import batch rejected by the store: {e.msg}") from e
        return out

    def delete_with_sessions(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM time_entries WHERE employee_id=%s", (int(employee_id),))
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY created_at DESC, employee_id DESC")
            rows = fetchall(cur)
        return [self._to_employee(r) for r in rows]

    @staticmethod
    def _insert(cur, employee: NewEmployee, created_at: datetime) -> int:
        cur.execute(
            """
            INSERT INTO employees(name, email, manager, location, created_at)
            VALUES(%s,%s,%s,%s,%s)
            """,
            (employee.name, employee.email, employee.manager, employee.location, to_db(created_at)),
        )
        return int(cur.lastrowid)

    @staticmethod
    def _from_new(employee_id: int, employee: NewEmployee, created_at: datetime) -> Employee:
        return Employee(
            employee_id=employee_id,
            name=employee.name,
            created_at=created_at,
            email=employee.email,
            manager=employee.manager,
            location=employee.location,
        )

    @staticmethod
    def _to_employee(r: dict) -> Employee:
        return Employee(
            employee_id=int(r["employee_id"]),
            name=r["name"],
            created_at=as_utc(r["created_at"]),
            email=r.get("email"),
            manager=r.get("manager"),
            location=r.get("location"),
        )
