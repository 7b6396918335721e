"""Parsing half of the bulk employee import.

Turns raw comma-separated text into candidate rows plus row-level rejections.
Roster duplicate checks and the batch insert live in ``RosterService``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..common.tabular import split_fields
from ..core.constants import (
    COMPANY_ALIASES,
    IMPORT_TEMPLATE_HEADER,
    LOCATION_ALIASES,
    MANAGER_ALIASES,
    NAME_ALIASES,
)
from ..core.enums import WorkLocation
from ..core.exceptions import EmptyInputError, SchemaError
from .model import Employee, NewEmployee


@dataclass(frozen=True)
class RejectedRow:
    line: int
    reason: str


@dataclass(frozen=True)
class ImportReport:
    added: Sequence[Employee] = field(default_factory=list)
    rejected: Sequence[RejectedRow] = field(default_factory=list)

    def summary(self) -> str:
        return f"{len(self.added)} added, {len(self.rejected)} rejected"


@dataclass(frozen=True)
class ColumnMap:
    name: int
    company: Optional[int] = None
    manager: Optional[int] = None
    location: Optional[int] = None

    @property
    def min_width(self) -> int:
        resolved = [i for i in (self.name, self.company, self.manager, self.location) if i is not None]
        return max(resolved) + 1


@dataclass(frozen=True)
class CandidateRow:
    line: int
    employee: NewEmployee


@dataclass(frozen=True)
class ParsedImport:
    candidates: Sequence[CandidateRow]
    rejected: Sequence[RejectedRow]


def _find(headers: Sequence[str], aliases: Sequence[str]) -> Optional[int]:
    for i, h in enumerate(headers):
        if h in aliases:
            return i
    return None


def resolve_columns(header_line: str) -> ColumnMap:
    headers = [h.strip().lower() for h in split_fields(header_line)]

    name_idx = _find(headers, NAME_ALIASES)
    if name_idx is None:
        raise SchemaError("Import file must contain an 'Agent Name' column")

    return ColumnMap(
        name=name_idx,
        company=_find(headers, COMPANY_ALIASES),
        manager=_find(headers, MANAGER_ALIASES),
        location=_find(headers, LOCATION_ALIASES),
    )


def normalize_location(value: Optional[str]) -> Optional[str]:
    """``WFH`` in any case becomes ``remote``; anything else passes through."""

    if not value:
        return None
    if value.lower() == "wfh":
        return WorkLocation.REMOTE.value
    return value


def _field(tokens: Sequence[str], idx: Optional[int]) -> Optional[str]:
    if idx is None:
        return None
    value = tokens[idx].strip()
    return value or None


def parse_import(raw_text: str) -> ParsedImport:
    # Spreadsheet exports often start with a UTF-8 byte order mark.
    raw_text = (raw_text or "").lstrip("\ufeff")
    lines = [line.strip() for line in raw_text.splitlines() if line.strip()]
    if not lines:
        raise EmptyInputError("Import file is empty")

    columns = resolve_columns(lines[0])

    candidates: list[CandidateRow] = []
    rejected: list[RejectedRow] = []

    # Line numbers are 1-based over non-blank lines; the header is line 1.
    for line_no, line in enumerate(lines[1:], start=2):
        tokens = split_fields(line)
        if len(tokens) < columns.min_width:
            rejected.append(RejectedRow(line_no, f"Line {line_no}: Invalid format or missing columns"))
            continue

        name = _field(tokens, columns.name)
        if not name:
            rejected.append(RejectedRow(line_no, f"Line {line_no}: Missing agent name"))
            continue

        candidates.append(
            CandidateRow(
                line=line_no,
                employee=NewEmployee(
                    name=name,
                    email=_field(tokens, columns.company),
                    manager=_field(tokens, columns.manager),
                    location=normalize_location(_field(tokens, columns.location)),
                ),
            )
        )

    return ParsedImport(candidates=candidates, rejected=rejected)


def import_template() -> str:
    return "\n".join(
        [
            IMPORT_TEMPLATE_HEADER,
            "John Doe,Company A,Sarah Johnson,Office",
            "Jane Smith,Company B,Sarah Johnson,Hybrid",
            "Bob Wilson,Company C,Mike Davis,WFH",
            "",
        ]
    )
