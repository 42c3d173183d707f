"""GitHub Actions step outputs and job summary.

Booleans become "true"/"false" here and nowhere else.
"""

from __future__ import annotations

import logging

from prgate_core.models import CHANGELOG, VERSION_BUMP, ValidationResult

logger = logging.getLogger(__name__)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def format_outputs(result: ValidationResult | None) -> dict[str, str]:
    """Map a result to the action's outputs. None means nothing was evaluated."""
    changelog = result.get(CHANGELOG) if result else None
    bump = result.get(VERSION_BUMP) if result else None
    bump_found = bool(bump and bump.passed)
    return {
        "changelog-found": _flag(bool(changelog and changelog.passed)),
        "version-bump-found": _flag(bump_found),
        "version-bump-type": bump.detail if bump_found else "",
    }


def write_outputs(outputs: dict[str, str], output_path: str | None) -> None:
    """Append ``key=value`` lines to the file GitHub exposes as GITHUB_OUTPUT."""
    if not output_path:
        logger.debug("GITHUB_OUTPUT not set; skipping step outputs: %s", outputs)
        return
    with open(output_path, "a", encoding="utf-8") as f:
        for key, value in outputs.items():
            f.write(f"{key}={value}\n")


def write_step_summary(body: str, summary_path: str | None) -> None:
    if not summary_path:
        return
    with open(summary_path, "a", encoding="utf-8") as f:
        f.write(body + "\n")
