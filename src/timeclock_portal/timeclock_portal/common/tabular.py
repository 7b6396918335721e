"""Comma-separated text helpers shared by the importer and the exporters.

Both directions use the same ``csv`` dialect, so a value written by
:func:`write_rows` comes back unchanged from :func:`split_fields`.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, Mapping, Sequence


def split_fields(line: str) -> list[str]:
    """Split one line on unquoted commas.

    ``"quoted,commas"`` stays a single field and ``""`` inside quotes is a
    literal quote. Surrounding quotes are removed.
    """

    reader = csv.reader([line], skipinitialspace=True)
    return next(reader, [])


def write_rows(columns: Sequence[str], rows: Iterable[Mapping[str, object]]) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(columns), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({c: _cell(row.get(c)) for c in columns})
    return out.getvalue()


def read_rows(text: str) -> list[dict[str, str]]:
    reader = csv.DictReader(io.StringIO(text))
    return [dict(r) for r in reader]


def _cell(value: object) -> str:
    if value is None:
        return ""
    return str(value)
