"""
Sensitive-word list handling.

The list is stored as a single option string, one entry per line. A line
starting with ``regex:`` holds a regular expression; any other non-blank line
is a literal word.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from quota_admin.core.config import get_settings
from quota_admin.schemas.options import REGEX_PREFIX, SensitiveWordSettings

logger = logging.getLogger(__name__)


@dataclass
class SensitiveWordList:
    words: list[str] = field(default_factory=list)
    patterns: list[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> SensitiveWordList:
        words: list[str] = []
        patterns: list[str] = []
        for raw in (text or "").split("\n"):
            line = raw.strip()
            if not line:
                continue
            if line.startswith(REGEX_PREFIX):
                pattern = line[len(REGEX_PREFIX):]
                try:
                    re.compile(pattern)
                except re.error as exc:
                    logger.warning("Dropping invalid sensitive-word pattern %r: %s", pattern, exc)
                    continue
                patterns.append(pattern)
            else:
                words.append(line)
        return cls(words=words, patterns=patterns)

    def to_text(self) -> str:
        lines = list(self.words) + [f"{REGEX_PREFIX}{pattern}" for pattern in self.patterns]
        return "".join(f"{line}\n" for line in lines)

    def find_matches(self, text: str) -> list[str]:
        """Entries that hit ``text``; patterns are reported with their prefix."""
        hits = [word for word in self.words if word in text]
        hits.extend(f"{REGEX_PREFIX}{pattern}" for pattern in self.patterns if re.search(pattern, text))
        return hits


def should_check_prompt(
    settings: SensitiveWordSettings, group: str | None = None, exempt_group: str | None = None
) -> bool:
    if exempt_group is None:
        exempt_group = get_settings().sensitive_exempt_group
    if exempt_group and group == exempt_group:
        return False
    return settings.check_sensitive_enabled and settings.check_sensitive_on_prompt_enabled


@dataclass
class SensitiveWordEntry:
    line: str
    is_pattern: bool = False
    error: str | None = None


def list_entries(text: str) -> list[SensitiveWordEntry]:
    """Stored lines in their original order; bad patterns are kept and carry ``error``."""
    entries: list[SensitiveWordEntry] = []
    for raw in (text or "").split("\n"):
        line = raw.strip()
        if not line:
            continue
        if not line.startswith(REGEX_PREFIX):
            entries.append(SensitiveWordEntry(line))
            continue
        error = None
        try:
            re.compile(line[len(REGEX_PREFIX):])
        except re.error as exc:
            error = str(exc)
        entries.append(SensitiveWordEntry(line, is_pattern=True, error=error))
    return entries
