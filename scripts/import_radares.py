"""Import radars from an .xlsx roster (dry-run by default)."""

from __future__ import annotations

import argparse

from radarcheck.core.errors import ImportFormatError
from radarcheck.core.logging_config import setup_logging
from radarcheck.db.session import init_db
from radarcheck.services.importer import read_workbook
from radarcheck.services.radares import import_radares


def main() -> None:
    parser = argparse.ArgumentParser(description="Import a radar roster spreadsheet.")
    parser.add_argument("path", type=str, help="Path to the .xlsx workbook.")
    parser.add_argument("--apply", action="store_true", help="Actually write radars (default dry-run).")
    parser.add_argument("--batch-size", type=int, default=None, help="Rows per commit (default uses settings.import_batch_size).")
    args = parser.parse_args()

    setup_logging(service_name="radar-check-import")
    try:
        payloads = read_workbook(args.path)
    except ImportFormatError as exc:
        print(f"Cannot import {args.path}: {exc.message}")
        raise SystemExit(1)

    if not args.apply:
        print(f"[dry-run] {len(payloads)} radars found:")
        for payload in payloads:
            print(f"Km {payload['km']} | {payload['speed_kmh']} km/h | {payload['classification'].value}")
        return

    init_db()
    result = import_radares(payloads, batch_size=args.batch_size)
    print(f"Imported {result.imported}/{len(payloads)} radars.")
    for error in result.errors:
        print(f"Failed {error}")


if __name__ == "__main__":
    main()
