#!/usr/bin/env python3
"""
Print an admin earnings report as JSON.

Usage:
    python3 scripts/ledger_report.py best-profession --start 2020-08-01 --end 2020-08-31
    python3 scripts/ledger_report.py best-clients --start 2020-08-01 --end 2020-08-31 --limit 3

Exit status is 0 on success and 1 on any ledger error, whose message is
printed to stderr.
"""

import argparse
import json
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ledger admin reports.")
    parser.add_argument(
        "report", choices=["best-profession", "best-clients"],
        help="Report to compute",
    )
    parser.add_argument("--start", required=True, help="Window start (ISO date)")
    parser.add_argument("--end", required=True, help="Window end (ISO date, inclusive)")
    parser.add_argument("--limit", default=None, help="Rows for best-clients")
    parser.add_argument(
        "--caller", default="1",
        help="Profile id the report is requested as (default: 1)",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="YAML settings file (default: bundled set plus LEDGER_* env)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from ledger_config import get_active_settings
    from ledger_kernel.logging_config import configure_logging
    from ledger_services import LedgerGateway, error_response

    settings = get_active_settings(args.config)
    configure_logging(level=settings.log_level)
    gateway = LedgerGateway.from_settings(settings)

    try:
        if args.report == "best-profession":
            result = gateway.best_profession(args.caller, args.start, args.end)
        else:
            rows = gateway.best_clients(args.caller, args.start, args.end, args.limit)
            result = [row.to_dict() for row in rows]
    except Exception as exc:
        status, body = error_response(exc)
        print(f"{status}: {body['message']}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
