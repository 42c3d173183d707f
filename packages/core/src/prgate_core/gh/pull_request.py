"""GitHub access for prgate.

GitHubGateway is the only place PyGithub objects appear. Each method issues its
calls once (PyGithub retries are disabled), drains pagination before returning,
and translates failures into prgate_core.errors.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

import requests
from github import Auth, Github, GithubException

from prgate_core.errors import NotFoundError, TransportError
from prgate_core.models import BotComment, ChangedFile, Commit, PullRequestRef

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


def get_repo(repo_name: str, token: str, api_url: str | None = None):
    client = Github(auth=Auth.Token(token), base_url=api_url or DEFAULT_API_URL, retry=None)
    # lazy: no request until the first real call, so every API hit goes through the gateway.
    return client.get_repo(repo_name, lazy=True)


@contextmanager
def _translate_errors(action: str):
    try:
        yield
    except GithubException as e:
        message = e.data.get("message") if isinstance(e.data, dict) else None
        detail = f"{action} failed ({e.status}): {message or e}"
        if e.status == 404:
            raise NotFoundError(detail) from e
        raise TransportError(detail) from e
    except requests.exceptions.RequestException as e:
        raise TransportError(f"{action} failed: {e}") from e


class GitHubGateway:
    """Narrow view of the GitHub REST API used by the run controller."""

    def __init__(self, repo):
        self._repo = repo
        self._pulls: dict[int, object] = {}

    def _pull(self, pr: PullRequestRef):
        if pr.number not in self._pulls:
            with _translate_errors(f"Fetching PR {pr}"):
                self._pulls[pr.number] = self._repo.get_pull(pr.number)
        return self._pulls[pr.number]

    def list_changed_files(self, pr: PullRequestRef) -> list[ChangedFile]:
        pull = self._pull(pr)
        with _translate_errors(f"Listing files of PR {pr}"):
            return [ChangedFile(path=f.filename) for f in pull.get_files()]

    def list_commits(self, pr: PullRequestRef) -> list[Commit]:
        pull = self._pull(pr)
        with _translate_errors(f"Listing commits of PR {pr}"):
            return [Commit(message=c.commit.message or "", sha=c.sha) for c in pull.get_commits()]

    def list_comments(self, pr: PullRequestRef) -> list[BotComment]:
        pull = self._pull(pr)
        with _translate_errors(f"Listing comments of PR {pr}"):
            return [BotComment(id=c.id, body=c.body or "") for c in pull.get_issue_comments()]

    def create_comment(self, pr: PullRequestRef, body: str) -> BotComment:
        pull = self._pull(pr)
        with _translate_errors(f"Creating comment on PR {pr}"):
            comment = pull.create_issue_comment(body)
        logger.debug("Created comment %s on %s", comment.id, pr)
        return BotComment(id=comment.id, body=body)

    def update_comment(self, pr: PullRequestRef, comment_id: int, body: str) -> BotComment:
        pull = self._pull(pr)
        with _translate_errors(f"Updating comment {comment_id} on PR {pr}"):
            comment = pull.get_issue_comment(comment_id)
            comment.edit(body)
        logger.debug("Updated comment %s on %s", comment_id, pr)
        return BotComment(id=comment_id, body=body)
