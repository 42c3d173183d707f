"""Policy predicates evaluated against a pull request.

Both checks are pure functions over already-fetched data so they can be
tested without GitHub, and both stop at the first match.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from prgate_core.models import CHANGELOG, VERSION_BUMP, ChangedFile, PredicateResult

VERSION_BUMP_TYPES = ("patch", "minor", "major")

# One trailer line: "Version-Bump: <type>", key and value case-insensitive.
_TRAILER_RE = re.compile(
    r"^[ \t]*Version-Bump:[ \t]*(" + "|".join(VERSION_BUMP_TYPES) + r")\b",
    re.IGNORECASE | re.MULTILINE,
)


def _normalize_dir(changelog_dir: str) -> str:
    directory = changelog_dir.strip()
    while directory.startswith("./"):
        directory = directory[2:]
    return directory.rstrip("/")


def check_changelog(files: Iterable[ChangedFile], changelog_dir: str = ".changelog") -> PredicateResult:
    """Pass when any changed path lives under ``changelog_dir``.

    Matching is on whole path segments: with the default directory,
    ``.changelog/fix.md`` matches but ``other-.changelog/fix.md`` and
    ``.changelog-old/fix.md`` do not.
    """
    prefix = _normalize_dir(changelog_dir) + "/"
    for f in files:
        if f.path.startswith(prefix):
            return PredicateResult(kind=CHANGELOG, passed=True, detail=f.path)
    return PredicateResult(kind=CHANGELOG, passed=False)


def find_version_bump(message: str) -> str | None:
    """Return the bump type declared in a commit message, lower-cased, or None."""
    match = _TRAILER_RE.search(message or "")
    if match is None:
        return None
    return match.group(1).lower()


def check_version_bump(messages: Iterable[str]) -> PredicateResult:
    """Pass when some commit message carries a valid ``Version-Bump:`` trailer.

    Messages are scanned in the order given and the first valid trailer wins;
    later commits are not consulted. A trailer whose value is not one of
    VERSION_BUMP_TYPES is ignored and the scan continues.
    """
    for message in messages:
        bump = find_version_bump(message)
        if bump is not None:
            return PredicateResult(kind=VERSION_BUMP, passed=True, detail=bump)
    return PredicateResult(kind=VERSION_BUMP, passed=False)
