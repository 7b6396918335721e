"""Bulk-import employees from a CSV file without going through Flask.

Usage: python scripts/import_employees.py employees.csv
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.timeclock_portal.timeclock_portal.audit.model import AuditActor
from src.timeclock_portal.timeclock_portal.container import build_container
from src.timeclock_portal.timeclock_portal.core.exceptions import DomainError


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__.strip().splitlines()[-1])
        return 2

    load_dotenv(override=False)
    settings = load_settings()
    container = build_container(
        db_config=settings.DB_CONFIG,
        admin_password_hash=settings.ADMIN_PASSWORD_HASH,
        geo_lookup_url=None,
    )

    raw_text = Path(argv[1]).read_text(encoding="utf-8-sig")
    try:
        report = container.roster_service.bulk_import(raw_text, actor=AuditActor(name="import-script"))
    except DomainError as e:
        print(f"FAILED: {e}")
        return 1

    for employee in report.added:
        print(f"added: {employee.name}")
    for row in report.rejected:
        print(f"rejected: {row.reason}")
    print(f"OK: {report.summary()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
