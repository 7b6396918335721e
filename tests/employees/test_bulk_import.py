from __future__ import annotations

import pytest

from src.timeclock_portal.timeclock_portal.core.enums import AuditAction
from src.timeclock_portal.timeclock_portal.core.exceptions import EmptyInputError, PersistenceError, SchemaError
from src.timeclock_portal.timeclock_portal.employees.importer import import_template, parse_import


def test_duplicate_within_batch_is_rejected(roster, fixed_now):
    raw = "Agent Name,Company,Teams,Location\nA,C1,M1,Office\nA,C2,M2,Hybrid"

    report = roster.bulk_import(raw, now=fixed_now)

    assert [e.name for e in report.added] == ["A"]
    assert report.added[0].email == "C1"
    assert report.added[0].manager == "M1"
    assert len(report.rejected) == 1
    assert report.rejected[0].line == 3
    assert '"A"' in report.rejected[0].reason
    assert report.summary() == "1 added, 1 rejected"


def test_duplicate_against_roster_is_case_insensitive(roster, employees_repo, fixed_now):
    roster.add_employee("Jane Smith", now=fixed_now)

    report = roster.bulk_import("Agent Name,Company\njane smith,Company B\n", now=fixed_now)

    assert report.added == []
    assert report.rejected[0].line == 2
    assert "jane smith" in report.rejected[0].reason
    assert len(employees_repo.rows) == 1


@pytest.mark.parametrize("value", ["WFH", "wfh", "Wfh"])
def test_wfh_maps_to_remote(roster, value, fixed_now):
    report = roster.bulk_import(f"Agent Name,Location\nBob Wilson,{value}\n", now=fixed_now)

    assert report.added[0].location == "remote"


def test_other_locations_pass_through_unvalidated(roster, fixed_now):
    report = roster.bulk_import("name,location\nA,Office\nB,Moon Base\n", now=fixed_now)

    assert [e.location for e in report.added] == ["Office", "Moon Base"]


def test_quoted_fields_keep_commas(roster, fixed_now):
    raw = 'Agent Name,Company,Teams\n"Doe, John","Acme, Inc.","Johnson, Sarah"\n'

    report = roster.bulk_import(raw, now=fixed_now)

    assert report.added[0].name == "Doe, John"
    assert report.added[0].email == "Acme, Inc."
    assert report.added[0].manager == "Johnson, Sarah"


def test_header_aliases_and_extra_columns(fixed_now):
    parsed = parse_import("Employee ID, AGENT ,Team,Notes\n7,Bob,Mike Davis,whatever\n")

    assert parsed.candidates[0].employee.name == "Bob"
    assert parsed.candidates[0].employee.manager == "Mike Davis"
    assert parsed.candidates[0].employee.email is None


def test_short_rows_and_missing_names_are_rejected(roster, fixed_now):
    raw = "Agent Name,Company,Teams,Location\nA,C1\n ,C2,M2,Office\nB,C3,M3,Hybrid\n"

    report = roster.bulk_import(raw, now=fixed_now)

    assert [e.name for e in report.added] == ["B"]
    assert [(r.line, "missing columns" in r.reason) for r in report.rejected] == [(2, True), (3, False)]
    assert "Missing agent name" in report.rejected[1].reason


def test_blank_lines_are_ignored_for_line_numbers(roster, fixed_now):
    raw = "\nAgent Name\n\nA\n\nA\n"

    report = roster.bulk_import(raw, now=fixed_now)

    assert len(report.added) == 1
    assert report.rejected[0].line == 3


def test_empty_input(roster):
    with pytest.raises(EmptyInputError):
        roster.bulk_import(" \n\n  \n")


def test_missing_name_column(roster):
    with pytest.raises(SchemaError):
        roster.bulk_import("Company,Teams\nC1,M1\n")


def test_batch_failure_adds_nothing(roster, employees_repo, audit_repo, fixed_now):
    employees_repo.fail_batch = True

    with pytest.raises(PersistenceError):
        roster.bulk_import("Agent Name\nA\nB\n", now=fixed_now)

    assert employees_repo.rows == {}
    assert audit_repo.events == []


def test_each_added_employee_is_audited(roster, audit_repo, fixed_now):
    roster.bulk_import("Agent Name\nA\nB\n", now=fixed_now)

    added = [e for e in audit_repo.events if e.action == AuditAction.EMPLOYEE_ADDED]
    assert [(e.actor.name, e.details["line"]) for e in added] == [("A", 2), ("B", 3)]


def test_template_imports_cleanly(roster, fixed_now):
    report = roster.bulk_import(import_template(), now=fixed_now)

    assert [e.name for e in report.added] == ["John Doe", "Jane Smith", "Bob Wilson"]
    assert report.added[2].location == "remote"
    assert report.rejected == []


def test_leading_byte_order_mark_is_ignored(roster, fixed_now):
    report = roster.bulk_import("\ufeffAgent Name,Company\nA,C\n", now=fixed_now)

    assert [e.name for e in report.added] == ["A"]
    assert report.rejected == []


def test_accented_names_are_distinct(roster, fixed_now):
    roster.add_employee("José", now=fixed_now)

    report = roster.bulk_import("Agent Name\nJose\njosé\n", now=fixed_now)

    assert [e.name for e in report.added] == ["Jose"]
    assert report.rejected[0].line == 3
