"""Render a ValidationResult into the PR status comment."""

from __future__ import annotations

from prgate_core.checks import VERSION_BUMP_TYPES
from prgate_core.models import CHANGELOG, VERSION_BUMP, PredicateResult, ValidationResult

# Identifies the status comment across runs. Changing it orphans every comment
# posted by earlier versions, so it is deliberately not configurable.
COMMENT_MARKER = "<!-- prgate:pr-validation -->"

_BUMP_HINTS = {
    "patch": "for bug fixes",
    "minor": "for new features",
    "major": "for breaking changes",
}

_EXAMPLE_COMMIT = """\
```
Fix critical bug in user authentication

This fixes an issue where users couldn't log in
after password reset.

Version-Bump: patch
```"""


def _changelog_block(predicate: PredicateResult, changelog_dir: str) -> list[str]:
    if predicate.passed:
        return [f"### ✅ Changelog\n\nFound changelog entry `{predicate.detail}`.\n"]
    return [
        "### ❌ Changelog\n",
        f"No changelog file was added under `{changelog_dir}/`. Please document your changes:\n",
        f"1. Create a new file in the `{changelog_dir}/` directory",
        "2. Name it descriptively (e.g. `fix-bug-123.md`, `add-new-feature.md`)",
        "3. Document what changed, why, and any breaking changes\n",
    ]


def _version_bump_block(predicate: PredicateResult) -> list[str]:
    if predicate.passed:
        return [f"### ✅ Version bump\n\nFound `Version-Bump: {predicate.detail}` trailer.\n"]
    lines = [
        "### ❌ Version bump\n",
        "No valid `Version-Bump` trailer was found in the commit messages. "
        "Add one of the following lines to a commit message:\n",
    ]
    lines.extend(f"- `Version-Bump: {bump}` ({_BUMP_HINTS[bump]})" for bump in VERSION_BUMP_TYPES)
    lines.append("\nThe trailer should be on its own line, usually at the end of the message. Example:\n")
    lines.append(_EXAMPLE_COMMIT + "\n")
    return lines


def build_report(result: ValidationResult, changelog_dir: str = ".changelog") -> tuple[str, str]:
    """Return ``(body, severity)`` where severity is ``"pass"`` or ``"fail"``.

    Every predicate gets a block, passed or failed, so each comment is a
    complete snapshot of the PR's state rather than a list of what changed.
    """
    changelog_dir = changelog_dir.rstrip("/")
    severity = "pass" if result.passed else "fail"

    lines = [COMMENT_MARKER, "## PR validation\n"]
    if result.passed:
        bump = result.get(VERSION_BUMP)
        bump_type = bump.detail if bump else ""
        lines.append(f"> All checks passed. This PR will be released as a **{bump_type}** version bump.\n")
    else:
        failed = sum(1 for p in result.predicates if not p.passed)
        lines.append(f"> {failed} of {len(result.predicates)} check(s) failed.\n")

    for predicate in result.predicates:
        if predicate.kind == CHANGELOG:
            lines.extend(_changelog_block(predicate, changelog_dir))
        elif predicate.kind == VERSION_BUMP:
            lines.extend(_version_bump_block(predicate))
        else:
            raise ValueError(f"Unknown predicate kind: {predicate.kind!r}")

    if not result.passed:
        lines.append("---\n_Please fix the issues above and push your changes. This comment updates automatically._")

    return "\n".join(lines), severity
