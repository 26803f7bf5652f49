#!/usr/bin/env python3
"""Inspect and update the sensitive-word filter settings.

Usage:
    python -m quota_admin.scripts.sensitive_words show
    python -m quota_admin.scripts.sensitive_words set --enabled --no-prompt
    python -m quota_admin.scripts.sensitive_words set --words-file words.txt
    python -m quota_admin.scripts.sensitive_words check "some prompt text"

Words file format: one entry per line; prefix a line with ``regex:`` for a
regular expression, e.g. ``regex:foo.*bar``.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from quota_admin.core.errors import AdminError
from quota_admin.core.logging_setup import setup_logging
from quota_admin.services.api_client import AdminApiClient
from quota_admin.services.notifier import ConsoleNotifier
from quota_admin.services.option_store import OptionStore
from quota_admin.services.sensitive_words import list_entries, should_check_prompt
from quota_admin.services.sensitive_words_panel import SensitiveWordsPanel
from quota_admin.services.settings_submission import SubmitOutcome


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sensitive-word filter settings via admin API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--server", help="Gateway base URL (overrides QUOTA_ADMIN_API_BASE_URL)")
    parser.add_argument("--log-level")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print current settings and word list")

    set_parser = sub.add_parser("set", help="Change settings")
    set_parser.add_argument("--enabled", dest="enabled", action="store_true", default=None)
    set_parser.add_argument("--disabled", dest="enabled", action="store_false")
    set_parser.add_argument("--prompt", dest="prompt", action="store_true", default=None)
    set_parser.add_argument("--no-prompt", dest="prompt", action="store_false")
    set_parser.add_argument("--words-file", type=Path, help="Replace the word list with this file's contents")

    check_parser = sub.add_parser("check", help="Show which entries match TEXT")
    check_parser.add_argument("text")
    check_parser.add_argument("--group", help="User group, for the exempt-group rule")
    return parser.parse_args(argv)


def print_settings(panel: SensitiveWordsPanel) -> None:
    settings = panel.settings
    entries = list_entries(panel.inputs.get("SensitiveWords", ""))
    patterns = [entry for entry in entries if entry.is_pattern]
    invalid = [entry for entry in patterns if entry.error]
    print(f"CheckSensitiveEnabled: {str(settings.check_sensitive_enabled).lower()}")
    print(f"CheckSensitiveOnPromptEnabled: {str(settings.check_sensitive_on_prompt_enabled).lower()}")
    print(f"Words: {len(entries) - len(patterns)}, patterns: {len(patterns)}, invalid patterns: {len(invalid)}")
    for entry in entries:
        if entry.error:
            print(f"  {entry.line}    [invalid pattern, ignored: {entry.error}]")
        else:
            print(f"  {entry.line}")


async def run(args: argparse.Namespace) -> int:
    notifier = ConsoleNotifier()
    async with AdminApiClient(args.server) as api:
        store = OptionStore(api)
        panel = SensitiveWordsPanel(api, store, notifier=notifier)
        try:
            await store.load()
        except AdminError as exc:
            notifier.error(exc.message)
            return 1

        if args.command == "show":
            print_settings(panel)
            return 0

        if args.command == "check":
            settings = panel.settings
            if not should_check_prompt(settings, group=args.group):
                print("Prompt checking is disabled for this request")
            hits = panel.word_list.find_matches(args.text)
            if not hits:
                print("No matches")
                return 0
            for hit in hits:
                print(f"match: {hit}")
            return 0

        if args.enabled is not None:
            panel.set_field("CheckSensitiveEnabled", args.enabled)
        if args.prompt is not None:
            panel.set_field("CheckSensitiveOnPromptEnabled", args.prompt)
        if args.words_file is not None:
            if not args.words_file.is_file():
                print(f"Error: words file not found: {args.words_file}", file=sys.stderr)
                return 1
            panel.set_field("SensitiveWords", args.words_file.read_text(encoding="utf-8"))

        outcome = await panel.submit()
        panel.close()
    return 0 if outcome in (SubmitOutcome.SAVED, SubmitOutcome.UNCHANGED) else 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
