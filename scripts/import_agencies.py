"""
Import agencies from a CSV file on the command line.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from app.config import get_bulk_import_settings
from app.mappers.agency_csv_mapper import AgencyCSVParser, CSVHeaderValidationError
from app.repositories.agency_repository import AgencyRepository
from app.services.agency_import_service import ReferenceDataUnavailableError, get_agency_import_service
from db.session import SessionLocal


def _report(payload: dict) -> None:
    print(json.dumps(payload, indent=2, default=str))


def main() -> int:
    parser = argparse.ArgumentParser(description="Bulk import agencies from a CSV file.")
    parser.add_argument("csv_file", type=Path, help="Path to a CSV file in the import template format.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and validate only; nothing is written.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    try:
        parsed = AgencyCSVParser().parse_bytes(args.csv_file.read_bytes())
    except (OSError, CSVHeaderValidationError) as exc:
        print(f"Unable to read {args.csv_file}: {exc}", file=sys.stderr)
        return 2

    if not parsed.success:
        _report({"stage": "parse", "errors": [asdict(error) for error in parsed.errors]})
        return 1

    max_rows = get_bulk_import_settings().max_rows
    if len(parsed.rows) > max_rows:
        print(f"Too many rows. Maximum {max_rows} rows per import.", file=sys.stderr)
        return 1

    service = get_agency_import_service()
    with SessionLocal() as db:
        store = AgencyRepository(db)
        try:
            report = service.preview(rows=parsed.rows, store=store)
            if args.dry_run:
                _report({"stage": "preview", "warnings": parsed.warnings, **asdict(report)})
                return 0 if report.summary.invalid == 0 else 1

            valid_rows = [result.data for result in report.results if result.valid]
            outcome = service.import_rows(rows=valid_rows, store=store)
        except ReferenceDataUnavailableError as exc:
            print(str(exc), file=sys.stderr)
            return 1

    _report(
        {
            "stage": "import",
            "invalid_rows": [
                {"row_number": result.row_number, "errors": result.errors}
                for result in report.results
                if not result.valid
            ],
            **asdict(outcome),
        }
    )
    return 0 if outcome.summary.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
