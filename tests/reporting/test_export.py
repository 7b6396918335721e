from __future__ import annotations

import json
from datetime import datetime, timezone

from src.timeclock_portal.timeclock_portal.audit.model import AuditActor, AuditEvent
from src.timeclock_portal.timeclock_portal.clock.model import SessionReportRow
from src.timeclock_portal.timeclock_portal.core.enums import AuditAction, WorkLocation
from src.timeclock_portal.timeclock_portal.geo.model import OriginMetadata
from src.timeclock_portal.timeclock_portal.reporting.export import (
    AUDIT_COLUMNS,
    SESSION_COLUMNS,
    audit_export_rows,
    audit_to_csv,
    parse_csv_text,
    session_export_rows,
    sessions_to_csv,
)

NOW = datetime(2024, 1, 1, 18, 0, tzinfo=timezone.utc)


def _rows():
    return [
        SessionReportRow(
            session_id=1,
            employee_id=1,
            employee_name='Doe, "JD" John',
            employee_email="Acme, Inc.",
            clock_in=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
            clock_out=datetime(2024, 1, 1, 17, 30, tzinfo=timezone.utc),
            elapsed_minutes=510,
            location=WorkLocation.OFFICE,
            origin=OriginMetadata(ip="203.0.113.7", city="Washington, D.C.", country="United States", timezone="America/New_York"),
            manager="Johnson, Sarah",
        ),
        SessionReportRow(
            session_id=2,
            employee_id=2,
            employee_name="Bob Wilson",
            clock_in=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
            location=WorkLocation.REMOTE,
        ),
    ]


def test_session_export_round_trip_keeps_commas_and_quotes():
    rows = session_export_rows(_rows(), NOW)

    parsed = parse_csv_text(sessions_to_csv(_rows(), NOW))

    assert parsed == rows
    assert list(parsed[0].keys()) == SESSION_COLUMNS
    assert parsed[0]["City"] == "Washington, D.C."
    assert parsed[0]["Manager"] == "Johnson, Sarah"
    assert parsed[0]["Employee Name"] == 'Doe, "JD" John'


def test_session_export_values():
    first, second = session_export_rows(_rows(), NOW)

    assert first["Location"] == "In Office"
    assert first["Hours Worked"] == "8h 30m"
    assert first["Date"] == "2024-01-01"
    assert second["Clock Out"] == "Still clocked in"
    assert second["Hours Worked"] == "8h 0m"
    assert second["Employee Email"] == "Bob Wilson"
    assert second["Manager"] == "-"
    assert second["City"] == "-"


def test_audit_export_round_trip():
    events = [
        AuditEvent(
            event_id=1,
            action=AuditAction.CLOCK_OUT,
            created_at=NOW,
            actor=AuditActor(name="Jane Smith", email="jane@example.com"),
            origin=OriginMetadata(ip="198.51.100.4", city="Austin", country="United States"),
            details={"hours_worked": "8h 30m", "location": "office"},
        ),
        AuditEvent(event_id=2, action=AuditAction.ADMIN_LOGIN, created_at=NOW),
    ]

    parsed = parse_csv_text(audit_to_csv(events))

    assert parsed == audit_export_rows(events)
    assert list(parsed[0].keys()) == AUDIT_COLUMNS
    assert parsed[0]["Action"] == "Clock Out"
    assert parsed[0]["Location"] == "Austin, United States"
    assert json.loads(parsed[0]["Details"]) == {"hours_worked": "8h 30m", "location": "office"}
    assert parsed[1]["Employee"] == "-"
    assert parsed[1]["Details"] == "{}"
