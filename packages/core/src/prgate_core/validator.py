"""PR validation pipeline: resolve the PR, run both checks, report."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from prgate_core.checks import check_changelog, check_version_bump
from prgate_core.errors import ConfigurationError, UpstreamDataError
from prgate_core.models import CHANGELOG, VERSION_BUMP, PullRequestRef, ValidationResult
from prgate_core.reconcile import reconcile_comment
from prgate_core.report import build_report

if TYPE_CHECKING:
    from prgate_core.config import GateConfig
    from prgate_core.gh.pull_request import GitHubGateway
    from prgate_core.models import PredicateResult

console = Console()
logger = logging.getLogger(__name__)

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


@dataclass
class RunOutcome:
    """What run_validation hands back to the CLI.

    ``result`` is None when the PR had no changed files and nothing was evaluated.
    """

    result: ValidationResult | None
    report: str = ""
    severity: str = "pass"

    @property
    def passed(self) -> bool:
        return self.result is None or self.result.passed


def _parse_repo(repo: str | None) -> str:
    if not repo or repo.count("/") != 1 or not all(repo.split("/")):
        raise ConfigurationError(f"Repository must be in owner/name format, got {repo!r}.")
    return repo


def pr_ref(repo: str | None, number) -> PullRequestRef:
    """Build a PullRequestRef, rejecting anything that is not a positive PR number."""
    if isinstance(number, bool) or number is None:
        raise ConfigurationError("Could not extract PR number from event data.")
    try:
        value = int(number)
    except (TypeError, ValueError):
        raise ConfigurationError(f"PR number is not numeric: {number!r}.")
    if isinstance(number, float) and number != value or value <= 0:
        raise ConfigurationError(f"PR number is not valid: {number!r}.")
    return PullRequestRef(repo=_parse_repo(repo), number=value)


def resolve_pull_request(event_name: str | None, event_path: str | None, repo: str | None) -> PullRequestRef:
    """Resolve the PR from the GitHub Actions event that triggered the run."""
    if event_name not in PULL_REQUEST_EVENTS:
        raise ConfigurationError(f"prgate only runs on pull request events, got {event_name!r}.")

    if not event_path or not Path(event_path).is_file():
        raise ConfigurationError("GITHUB_EVENT_PATH is not set or the file does not exist.")
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read event payload {event_path}: {e}")

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    number = pull_request.get("number") if isinstance(pull_request, dict) else None
    if isinstance(number, str):
        number = number.strip()
    return pr_ref(repo, number)


def _report_predicate(predicate: PredicateResult, changelog_dir: str) -> None:
    if predicate.kind == CHANGELOG:
        if predicate.passed:
            console.print(f"[green]Found changelog file: {predicate.detail}[/green]")
        else:
            console.print(f"[red]No changelog file found in {changelog_dir}/ directory.[/red]")
    elif predicate.kind == VERSION_BUMP:
        if predicate.passed:
            console.print(f"[green]Found valid Version-Bump trailer: {predicate.detail}[/green]")
        else:
            console.print("[red]No valid Version-Bump trailer found in commit messages.[/red]")


def run_validation(pr: PullRequestRef, gateway: GitHubGateway, config: GateConfig, shadow: bool = False) -> RunOutcome:
    """Validate one pull request.

    Checks always run changelog first, then version bump. Errors fetching files
    or commits propagate; failing to post the status comment does not.
    In shadow mode the report is built but no comment is touched.
    """
    console.print(f"Validating PR [bold]{pr}[/bold]")

    files = gateway.list_changed_files(pr)
    if not files:
        console.print("[yellow]No files changed in this PR. Nothing to validate.[/yellow]")
        return RunOutcome(result=None)

    console.print(f"Changed files ({len(files)}):")
    for f in files:
        console.print(f"  {f.path}")

    console.print(f"Checking for changelog files in {config.changelog_dir}/ ...")
    changelog = check_changelog(files, config.changelog_dir)
    _report_predicate(changelog, config.changelog_dir)

    commits = gateway.list_commits(pr)
    if not commits:
        raise UpstreamDataError(f"No commits found for PR {pr}.")

    console.print(f"Checking {len(commits)} commit message(s) for a Version-Bump trailer ...")
    version_bump = check_version_bump(c.message for c in commits)
    _report_predicate(version_bump, config.changelog_dir)

    result = ValidationResult(predicates=[changelog, version_bump])
    body, severity = build_report(result, config.changelog_dir)

    if shadow:
        console.print("[dim]Shadow mode: status comment not posted.[/dim]")
    elif config.post_comment:
        reconcile_comment(gateway, pr, body)

    if result.passed:
        console.print("[bold green]All PR validation checks passed.[/bold green]")
    else:
        console.print("[bold red]PR validation failed.[/bold red] Please fix the issues above and push your changes.")

    return RunOutcome(result=result, report=body, severity=severity)
