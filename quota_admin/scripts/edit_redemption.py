#!/usr/bin/env python3
"""Load a redemption code, change some fields and save it.

Usage:
    python -m quota_admin.scripts.edit_redemption --id 42 --quota 1000000
    python -m quota_admin.scripts.edit_redemption --id 42 --gift --max-uses 10
    python -m quota_admin.scripts.edit_redemption --id 42 --valid-until 0
"""

from __future__ import annotations

import argparse
import asyncio

from quota_admin.core.errors import AdminError
from quota_admin.core.logging_setup import setup_logging
from quota_admin.scripts.create_redemption import parse_when
from quota_admin.services.api_client import AdminApiClient
from quota_admin.services.notifier import ConsoleNotifier
from quota_admin.services.redemption_form import RedemptionFormController

EDITABLE_FIELDS = ("name", "quota", "is_gift", "max_uses", "valid_from", "valid_until")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Edit a redemption code via admin API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--server", help="Gateway base URL (overrides QUOTA_ADMIN_API_BASE_URL)")
    parser.add_argument("--id", required=True, type=int, help="Redemption code id")
    parser.add_argument("--name")
    parser.add_argument("--quota")
    parser.add_argument("--gift", dest="is_gift", action="store_true", default=None, help="Make it a gift code")
    parser.add_argument("--no-gift", dest="is_gift", action="store_false", help="Make it a single-use code")
    parser.add_argument("--max-uses", help="Gift code use limit, -1 for unlimited")
    parser.add_argument("--valid-from", type=parse_when, help="Unix seconds or ISO datetime; 0 = now")
    parser.add_argument("--valid-until", type=parse_when, help="Unix seconds or ISO datetime; 0 = never")
    parser.add_argument("--log-level")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    async with AdminApiClient(args.server) as api:
        form = RedemptionFormController(api, editing_id=args.id, notifier=ConsoleNotifier())
        try:
            await form.open()
        except AdminError:
            return 1

        for field in EDITABLE_FIELDS:
            value = getattr(args, field)
            if value is not None:
                form.set_field(field, value)

        print(f"Saving redemption code {args.id}: {form.inputs}")
        ok = await form.submit()
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
