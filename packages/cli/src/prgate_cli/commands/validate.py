"""validate command — run PR validation in CI or locally."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markdown import Markdown

from prgate_core.config import GateConfig, load_config
from prgate_core.errors import GateError
from prgate_core.gh.pull_request import GitHubGateway, get_repo
from prgate_core.outputs import format_outputs, write_outputs, write_step_summary
from prgate_core.validator import pr_ref, resolve_pull_request, run_validation

console = Console()


@click.command("validate")
@click.option(
    "--changelog-dir",
    default=None,
    help="Directory changelog entries must be added under. Overrides config file (default: .changelog).",
)
@click.option("--no-comment", is_flag=True, help="Do not post or update the PR status comment.")
@click.option("--repo", default=None, help="GitHub repository (owner/name). Defaults to GITHUB_REPOSITORY.")
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Skips event detection; useful for local runs.",
)
@click.option("--event-name", default=None, help="Triggering event name. Defaults to GITHUB_EVENT_NAME.")
@click.option("--event-path", default=None, help="Path to the event payload JSON. Defaults to GITHUB_EVENT_PATH.")
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the report without posting a comment or writing outputs.",
)
@click.pass_context
def validate_cmd(
    ctx,
    changelog_dir: str | None,
    no_comment: bool,
    repo: str | None,
    pr_number: int | None,
    event_name: str | None,
    event_path: str | None,
    shadow: bool,
):
    """Validate a pull request's changelog entry and Version-Bump trailer.

    Exits 0 when every check passes (or the PR changes no files) and 1
    otherwise. Posting the status comment is best-effort and never changes
    the exit status.

    \b
    Environment variables (set automatically by GitHub Actions):
      GITHUB_TOKEN         Token with pull-requests: write
      GITHUB_REPOSITORY    owner/name of the repository
      GITHUB_EVENT_NAME    Must be pull_request or pull_request_target
      GITHUB_EVENT_PATH    Event payload carrying the PR number
      GITHUB_OUTPUT        Step outputs file
    """
    config_path = (ctx.obj or {}).get("config_path", ".prgate.yml")
    config = load_config(
        config_path,
        cli_overrides={"changelog_dir": changelog_dir, "post_comment": False if no_comment else None},
    )

    token = config.get("github_token")
    if not token:
        raise click.UsageError("No GitHub token found. Set the GITHUB_TOKEN environment variable.")

    repo_name = repo or config.get("github_repository")
    try:
        if pr_number is not None:
            pr = pr_ref(repo_name, pr_number)
        else:
            pr = resolve_pull_request(
                event_name or config.get("github_event_name"),
                event_path or config.get("github_event_path"),
                repo_name,
            )
        gateway = GitHubGateway(get_repo(pr.repo, token=token, api_url=config.get("github_api_url")))
        outcome = run_validation(pr, gateway, GateConfig.from_dict(config), shadow=shadow)
    except GateError as e:
        raise click.ClickException(str(e))

    outputs = format_outputs(outcome.result)
    if shadow:
        if outcome.report:
            console.print(Markdown(outcome.report))
        for key, value in outputs.items():
            console.print(f"[dim]{key}={value}[/dim]")
    else:
        write_outputs(outputs, config.get("github_output"))
        if outcome.report:
            write_step_summary(outcome.report, config.get("github_step_summary"))

    ctx.exit(0 if outcome.passed else 1)
