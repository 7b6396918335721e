from __future__ import annotations

from enum import Enum


class WorkLocation(str, Enum):
    """Where an attendance session is worked from."""

    OFFICE = "office"
    REMOTE = "remote"
    HYBRID = "hybrid"

    @property
    def label(self) -> str:
        return {
            WorkLocation.OFFICE: "In Office",
            WorkLocation.REMOTE: "Remote",
            WorkLocation.HYBRID: "Hybrid",
        }[self]


class AuditAction(str, Enum):
    """Kinds of state-changing actions mirrored into the audit trail."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    EMPLOYEE_REGISTERED = "employee_registered"
    EMPLOYEE_ADDED = "employee_added"
    EMPLOYEE_LOGIN = "employee_login"
    ADMIN_LOGIN = "admin_login"

    @property
    def label(self) -> str:
        return {
            AuditAction.CLOCK_IN: "Clock In",
            AuditAction.CLOCK_OUT: "Clock Out",
            AuditAction.EMPLOYEE_REGISTERED: "Registration",
            AuditAction.EMPLOYEE_ADDED: "Added by Admin",
            AuditAction.EMPLOYEE_LOGIN: "Employee Login",
            AuditAction.ADMIN_LOGIN: "Admin Login",
        }[self]
