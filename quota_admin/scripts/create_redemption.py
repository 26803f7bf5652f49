#!/usr/bin/env python3
"""Create redemption codes through the admin API.

Usage:
    python -m quota_admin.scripts.create_redemption --quota 500000 --count 20
    python -m quota_admin.scripts.create_redemption --name launch --quota 5000000 \
        --gift --max-uses 100 --valid-until 2026-12-31T23:59:59 --yes --output-dir codes/

Environment variables:
    QUOTA_ADMIN_API_BASE_URL        - Gateway base URL (default: http://localhost:3000)
    QUOTA_ADMIN_ADMIN_ACCESS_TOKEN  - Admin access token
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime

from quota_admin.core.logging_setup import setup_logging
from quota_admin.services.api_client import AdminApiClient
from quota_admin.services.notifier import ConsoleNotifier
from quota_admin.services.redemption_form import RedemptionFormController


def parse_when(value: str) -> datetime | str:
    """Unix seconds are passed through, anything else must be ISO 8601."""
    text = value.strip()
    if not text or text.lstrip("-").isdigit():
        return text
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a timestamp or ISO datetime: {value!r}") from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create redemption codes via admin API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--server", help="Gateway base URL (overrides QUOTA_ADMIN_API_BASE_URL)")
    parser.add_argument("--name", default="", help="Code name (default: rendered quota, e.g. $1.00)")
    parser.add_argument("--quota", default="100000", help="Quota per code in smallest units (default: 100000)")
    parser.add_argument("--count", default="1", help="Number of codes to generate (default: 1)")
    parser.add_argument("--key", default="", help="Custom code content (default: generated by server)")
    parser.add_argument("--gift", action="store_true", help="Create a reusable gift code")
    parser.add_argument("--max-uses", default="-1", help="Gift code use limit, -1 for unlimited (default: -1)")
    parser.add_argument("--valid-from", type=parse_when, default="0", help="Unix seconds or ISO datetime; 0 = now")
    parser.add_argument("--valid-until", type=parse_when, default="0", help="Unix seconds or ISO datetime; 0 = never")
    parser.add_argument("--output-dir", help="Directory for the generated codes file")
    parser.add_argument("--yes", "-y", action="store_true", help="Save generated codes without asking")
    parser.add_argument("--log-level", help="Logging level (default: QUOTA_ADMIN_LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def make_confirm(assume_yes: bool):
    def confirm(codes: list[str], filename: str) -> bool:
        print(f"Generated {len(codes)} code(s).")
        if assume_yes:
            return True
        if not sys.stdin.isatty():
            for code in codes:
                print(code)
            return False
        answer = input(f"Save them to {filename}? [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    return confirm


async def run(args: argparse.Namespace) -> int:
    notifier = ConsoleNotifier()
    async with AdminApiClient(args.server) as api:
        form = RedemptionFormController(
            api,
            notifier=notifier,
            confirm_download=make_confirm(args.yes),
            export_dir=args.output_dir,
        )
        await form.open()
        form.set_field("name", args.name)
        form.set_field("quota", args.quota)
        form.set_field("count", args.count)
        form.set_field("is_gift", args.gift)
        form.set_field("max_uses", args.max_uses)
        form.set_field("valid_from", args.valid_from)
        form.set_field("valid_until", args.valid_until)
        form.set_key(args.key)
        ok = await form.submit()
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
