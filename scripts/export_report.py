"""Write the inspection report to disk."""

from __future__ import annotations

import argparse
from pathlib import Path

from radarcheck.core.errors import NothingToExport
from radarcheck.core.logging_config import setup_logging
from radarcheck.services.reporting import ReportService


def main() -> None:
    parser = argparse.ArgumentParser(description="Export radars and checklists.")
    parser.add_argument("--format", choices=("pdf", "xlsx", "html"), default="pdf", help="Report format (default pdf).")
    parser.add_argument("--output", type=str, default=None, help="Output file (default uses the report's own file name).")
    args = parser.parse_args()

    setup_logging(service_name="radar-check-export")
    service = ReportService()
    try:
        if args.format == "pdf":
            content: bytes | str = service.export_pdf()
        elif args.format == "xlsx":
            content = service.export_excel()
        else:
            content = service.export_html()
    except NothingToExport as exc:
        print(exc.message)
        raise SystemExit(1)

    target = Path(args.output or service.filename(args.format))
    if isinstance(content, str):
        target.write_text(content, encoding="utf-8")
    else:
        target.write_bytes(content)
    print(f"Wrote {target}")


if __name__ == "__main__":
    main()
