"""Keep exactly one prgate status comment per pull request.

The protocol is read-then-write: list comments, then update the marked one or
create it. Two runs for the same PR racing each other could both create a
comment; GitHub Actions serializes runs per PR closely enough that this is
accepted rather than guarded against.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console

from prgate_core.errors import GateError
from prgate_core.report import COMMENT_MARKER

if TYPE_CHECKING:
    from prgate_core.gh.pull_request import GitHubGateway
    from prgate_core.models import BotComment, PullRequestRef

console = Console()
logger = logging.getLogger(__name__)


def find_status_comment(comments: list[BotComment]) -> BotComment | None:
    """Return the earliest comment carrying the marker, or None."""
    matches = [c for c in comments if COMMENT_MARKER in (c.body or "")]
    if len(matches) > 1:
        logger.warning(
            "Found %d prgate status comments; updating the earliest (id=%s) only.", len(matches), matches[0].id
        )
    return matches[0] if matches else None


def reconcile_comment(gateway: GitHubGateway, pr: PullRequestRef, body: str) -> BotComment | None:
    """Update the existing status comment or create one.

    Posting is best-effort: gateway failures are logged and None is returned,
    so the caller's exit status never depends on it.
    """
    try:
        existing = find_status_comment(gateway.list_comments(pr))
        if existing is not None:
            comment = gateway.update_comment(pr, existing.id, body)
            console.print(f"[dim]Updated status comment {comment.id}.[/dim]")
        else:
            comment = gateway.create_comment(pr, body)
            console.print(f"[dim]Posted status comment {comment.id}.[/dim]")
        return comment
    except GateError as e:
        logger.warning("Could not post status comment on %s: %s", pr, e)
        console.print(f"[yellow]Warning: could not post status comment ({e}).[/yellow]")
        return None
