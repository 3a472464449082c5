#!/usr/bin/env python3
"""
Lead Review Script

Lists and moderates leads through the running API.

Usage:
    python review_leads.py --url http://localhost:8000 list --limit 25
    python review_leads.py --url http://localhost:8000 list --query muster
    python review_leads.py --url http://localhost:8000 mark <lead-id>
    python review_leads.py --url http://localhost:8000 mark <lead-id> --unprocessed
    python review_leads.py --url http://localhost:8000 delete <lead-id>

The admin password is read from --password or the ADMIN_PASSWORD variable.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.lead import Lead
from domain.maturity import overall_level
from domain.time import from_epoch_ms
from services.api_client import ApiError, FunnelApiClient


def format_lead(lead: Lead) -> str:
    created = from_epoch_ms(lead.created_at).strftime("%d.%m.%Y %H:%M")
    status = "x" if lead.processed else " "
    average = lead.score_summary.average
    level = overall_level(average).value
    return (
        f"[{status}] {created}  {lead.company:<30.30} {lead.contact:<25.25} "
        f"{lead.email:<30.30} {average:4.2f} ({level})  {lead.id}"
    )


def cmd_list(client: FunnelApiClient, args: argparse.Namespace) -> int:
    cursor = args.cursor
    while True:
        page = client.list_leads(limit=args.limit, cursor=cursor, query=args.query)
        for lead in page["items"]:
            print(format_lead(lead))
        cursor = page["next"]
        if cursor is None or not args.all:
            break

    if cursor:
        print(f"\nMore leads available. Continue with: --cursor {cursor}")
    return 0


def cmd_mark(client: FunnelApiClient, args: argparse.Namespace) -> int:
    lead = client.set_processed(args.lead_id, not args.unprocessed)
    print(format_lead(lead))
    return 0


def cmd_delete(client: FunnelApiClient, args: argparse.Namespace) -> int:
    client.delete_lead(args.lead_id)
    print(f"Deleted {args.lead_id}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Review security check leads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--url", default="http://localhost:8000", help="Base URL of the API")
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"), help="Admin password")
    parser.add_argument("--timeout", type=float, default=30.0, help="Request timeout in seconds")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List leads, newest first")
    list_parser.add_argument("--limit", type=int, default=10, help="Page size (1-100)")
    list_parser.add_argument("--cursor", help="Cursor printed by a previous run")
    list_parser.add_argument("--query", "-q", help="Filter by company or contact")
    list_parser.add_argument("--all", action="store_true", help="Follow cursors until the last page")
    list_parser.set_defaults(handler=cmd_list)

    mark_parser = subparsers.add_parser("mark", help="Mark a lead as processed")
    mark_parser.add_argument("lead_id")
    mark_parser.add_argument("--unprocessed", action="store_true", help="Clear the processed flag instead")
    mark_parser.set_defaults(handler=cmd_mark)

    delete_parser = subparsers.add_parser("delete", help="Delete a lead")
    delete_parser.add_argument("lead_id")
    delete_parser.set_defaults(handler=cmd_delete)

    args = parser.parse_args()

    try:
        with FunnelApiClient(args.url, timeout=args.timeout, admin_password=args.password) as client:
            return args.handler(client, args)

    except ApiError as e:
        print(f"\nERROR: {e.message}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
