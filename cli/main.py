#!/usr/bin/env python3
"""
Turnover Tracker CLI - manage companies and their milestone checklists.
"""

import argparse
import json
import sys
from pathlib import Path

from turnover import MILESTONE_NAMES, Company, OperationResult, TrackerService, build_service
from turnover.config import LOG_LEVEL
from turnover.observability import LEVELS, configure_logging


def print_header(text: str):
    """Print a section header."""
    print(f"\n{'═' * 50}")
    print(f"  {text}")
    print(f"{'═' * 50}")


def print_table(headers: list, rows: list, widths: list = None):
    """Print a simple table."""
    if not widths:
        widths = [max(len(str(row[i])) for row in [headers] + rows) for i in range(len(headers))]

    header_str = " │ ".join(str(h).ljust(w) for h, w in zip(headers, widths))
    print(header_str)
    print("─" * len(header_str))

    for row in rows:
        print(" │ ".join(str(c)[:w].ljust(w) for c, w in zip(row, widths)))


def report(result: OperationResult) -> int:
    """Print a result message and map it to an exit code."""
    if result.message:
        stream = sys.stdout if result.success else sys.stderr
        print(result.message, file=stream)
    return 0 if result.success else 1


def cmd_list(service: TrackerService, args) -> int:
    """List companies with checklist progress."""
    result = service.load_companies()
    if not result.success:
        return report(result)

    companies: list[Company] = result.data
    if args.json:
        print(json.dumps([c.to_dict() for c in companies], indent=2))
        return 0

    print_header(f"COMPANIES ({result.source})")
    if result.message:
        print(result.message)
    if not companies:
        print("No companies yet.")
        return 0

    rows = []
    for c in companies:
        pending = next((m.name for m in c.milestones if not m.completed), "done")
        rows.append(
            [c.id, c.address, c.contact_name, f"{c.completed_count()}/{len(c.milestones)}", pending]
        )
    print_table(["ID", "Address", "Contact", "Done", "Next"], rows, [4, 30, 20, 6, 30])
    return 0


def cmd_add(service: TrackerService, args) -> int:
    """Add a company."""
    company = Company(
        id=0,
        address=args.address,
        contact_name=args.contact_name or "",
        contact_email=args.contact_email or "",
    )
    return report(service.add_company(company))


def cmd_complete(service: TrackerService, args) -> int:
    """Mark a milestone completed (or reopen it)."""
    return report(
        service.set_milestone(args.company_id, args.milestone, completed=not args.reopen, completed_date=args.date)
    )


def cmd_delete(service: TrackerService, args) -> int:
    """Delete a company."""
    return report(service.delete_company(args.company_id))


def cmd_configure(service: TrackerService, args) -> int:
    """Store Google Sheets credentials and connect."""
    try:
        content = Path(args.credentials).read_text()
    except OSError as e:
        print(f"Cannot read credentials file: {e}", file=sys.stderr)
        return 1
    return report(service.configure_sheets(content, args.spreadsheet_id))


def cmd_reset_config(service: TrackerService, args) -> int:
    """Forget the Google Sheets configuration."""
    return report(service.reset_sheets_config())


def cmd_refresh(service: TrackerService, args) -> int:
    """Reload from the store, bypassing the cache."""
    result = service.force_refresh()
    if result.success:
        print(f"Loaded {len(result.data)} companies from {result.source}")
    return report(result)


def cmd_cache_status(service: TrackerService, args) -> int:
    """Show read cache state."""
    status = service.cache_status().data
    print(f"Sheets configured: {'yes' if service.is_sheets_configured() else 'no'}")
    if status["cached"]:
        print(f"Cached: {status['size']} companies, expires in {status['expires_in']:.1f}s")
    else:
        print("Cached: nothing")
    print(f"Hits: {status['hits']}  Misses: {status['misses']}")
    return 0


def cmd_clear_all(service: TrackerService, args) -> int:
    """Erase every company from the active store."""
    if not args.yes:
        print("Refusing to clear without --yes", file=sys.stderr)
        return 1
    return report(service.clear_all_data())


def cmd_milestones(service: TrackerService, args) -> int:
    """Show the canonical milestone checklist."""
    for index, name in enumerate(MILESTONE_NAMES, 1):
        print(f"{index:>2}. {name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="turnover", description="Turnover Tracker - rental turnover jobs and their milestones"
    )
    parser.add_argument(
        "--log-level", type=str.upper, choices=LEVELS, default=LOG_LEVEL, help="Log level (default: %(default)s)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("list", help="List companies")
    p.add_argument("--json", action="store_true", help="Output JSON")
    p.set_defaults(func=cmd_list)

    p = subparsers.add_parser("add", help="Add a company")
    p.add_argument("address", help="Property address")
    p.add_argument("--contact-name", "-n", help="Contact name")
    p.add_argument("--contact-email", "-e", help="Contact email")
    p.set_defaults(func=cmd_add)

    p = subparsers.add_parser("complete", help="Complete a milestone")
    p.add_argument("company_id", type=int, help="Company id")
    p.add_argument("milestone", help="Milestone name (see 'milestones')")
    p.add_argument("--date", "-d", help="Completion date (default: today)")
    p.add_argument("--reopen", action="store_true", help="Mark as not completed instead")
    p.set_defaults(func=cmd_complete)

    p = subparsers.add_parser("delete", help="Delete a company")
    p.add_argument("company_id", type=int, help="Company id")
    p.set_defaults(func=cmd_delete)

    p = subparsers.add_parser("milestones", help="Show the milestone checklist")
    p.set_defaults(func=cmd_milestones)

    p = subparsers.add_parser("configure", help="Configure Google Sheets")
    p.add_argument("--credentials", "-c", required=True, help="Service account key file")
    p.add_argument("--spreadsheet-id", "-s", required=True, help="Spreadsheet id")
    p.set_defaults(func=cmd_configure)

    p = subparsers.add_parser("reset-config", help="Remove Google Sheets configuration")
    p.set_defaults(func=cmd_reset_config)

    p = subparsers.add_parser("refresh", help="Reload data bypassing the cache")
    p.set_defaults(func=cmd_refresh)

    p = subparsers.add_parser("cache-status", help="Show cache state")
    p.set_defaults(func=cmd_cache_status)

    p = subparsers.add_parser("clear-all", help="Erase all companies")
    p.add_argument("--yes", action="store_true", help="Confirm erasing everything")
    p.set_defaults(func=cmd_clear_all)

    return parser


def main(argv: list[str] | None = None, service: TrackerService | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as e:
        # Only reachable through a bad TURNOVER_LOG_LEVEL default
        parser.error(str(e))

    if service is None:
        service = build_service()
    # Configure/reset do not need an existing connection
    if args.func not in (cmd_configure, cmd_reset_config, cmd_milestones):
        started = service.startup()
        if not started.success:
            print(started.message, file=sys.stderr)

    return args.func(service, args)


if __name__ == "__main__":
    sys.exit(main())
