"""Tests for the GitHub gateway."""

from unittest.mock import MagicMock

import pytest
import requests
from github import GithubException

from prgate_core.errors import NotFoundError, TransportError
from prgate_core.gh.pull_request import GitHubGateway, get_repo
from prgate_core.models import BotComment, ChangedFile, Commit, PullRequestRef

PR = PullRequestRef(repo="owner/repo", number=5)


def _gateway(pull=None):
    repo = MagicMock()
    repo.get_pull.return_value = pull or MagicMock()
    return GitHubGateway(repo), repo


def _file(filename):
    f = MagicMock()
    f.filename = filename
    return f


def _commit(message, sha="a" * 40):
    c = MagicMock()
    c.commit.message = message
    c.sha = sha
    return c


def _comment(comment_id, body):
    c = MagicMock()
    c.id = comment_id
    c.body = body
    return c


class TestGitHubGateway:
    def test_list_changed_files(self):
        pull = MagicMock()
        pull.get_files.return_value = [_file(".changelog/a.md"), _file("src/app.py")]
        gateway, repo = _gateway(pull)

        assert gateway.list_changed_files(PR) == [ChangedFile(".changelog/a.md"), ChangedFile("src/app.py")]
        repo.get_pull.assert_called_once_with(5)

    def test_list_commits(self):
        pull = MagicMock()
        pull.get_commits.return_value = [_commit("Fix\n\nVersion-Bump: patch", "b" * 40), _commit(None)]
        gateway, _ = _gateway(pull)

        assert gateway.list_commits(PR) == [
            Commit(message="Fix\n\nVersion-Bump: patch", sha="b" * 40),
            Commit(message="", sha="a" * 40),
        ]

    def test_list_comments_keeps_order_and_handles_none_body(self):
        pull = MagicMock()
        pull.get_issue_comments.return_value = [_comment(1, "first"), _comment(2, None)]
        gateway, _ = _gateway(pull)

        assert gateway.list_comments(PR) == [BotComment(1, "first"), BotComment(2, "")]

    def test_pull_fetched_once(self):
        gateway, repo = _gateway()
        gateway.list_changed_files(PR)
        gateway.list_commits(PR)
        gateway.list_comments(PR)
        repo.get_pull.assert_called_once_with(5)

    def test_create_comment(self):
        pull = MagicMock()
        pull.create_issue_comment.return_value = _comment(77, "body")
        gateway, _ = _gateway(pull)

        assert gateway.create_comment(PR, "body") == BotComment(77, "body")
        pull.create_issue_comment.assert_called_once_with("body")

    def test_update_comment(self):
        pull = MagicMock()
        existing = _comment(77, "old")
        pull.get_issue_comment.return_value = existing
        gateway, _ = _gateway(pull)

        assert gateway.update_comment(PR, 77, "new") == BotComment(77, "new")
        pull.get_issue_comment.assert_called_once_with(77)
        existing.edit.assert_called_once_with("new")

    def test_missing_pr_raises_not_found(self):
        repo = MagicMock()
        repo.get_pull.side_effect = GithubException(404, {"message": "Not Found"}, None)
        gateway = GitHubGateway(repo)

        with pytest.raises(NotFoundError, match="Not Found"):
            gateway.list_changed_files(PR)

    def test_api_error_raises_transport_error(self):
        pull = MagicMock()
        pull.get_commits.side_effect = GithubException(401, {"message": "Bad credentials"}, None)
        gateway, _ = _gateway(pull)

        with pytest.raises(TransportError, match="Bad credentials") as exc_info:
            gateway.list_commits(PR)
        assert not isinstance(exc_info.value, NotFoundError)

    def test_error_during_pagination_is_translated(self):
        def pages():
            yield _file("a.py")
            raise GithubException(500, {"message": "Server Error"}, None)

        pull = MagicMock()
        pull.get_files.return_value = pages()
        gateway, _ = _gateway(pull)

        with pytest.raises(TransportError):
            gateway.list_changed_files(PR)

    def test_connection_error_raises_transport_error(self):
        pull = MagicMock()
        pull.get_issue_comments.side_effect = requests.exceptions.ConnectionError("unreachable")
        gateway, _ = _gateway(pull)

        with pytest.raises(TransportError, match="unreachable"):
            gateway.list_comments(PR)

    def test_write_error_raises_transport_error(self):
        pull = MagicMock()
        pull.create_issue_comment.side_effect = GithubException(403, {"message": "Resource not accessible"}, None)
        gateway, _ = _gateway(pull)

        with pytest.raises(TransportError):
            gateway.create_comment(PR, "body")


class TestGetRepo:
    def test_builds_lazy_repo_without_retries(self, mocker):
        mock_github = mocker.patch("prgate_core.gh.pull_request.Github")

        repo = get_repo("owner/repo", token="tok")

        kwargs = mock_github.call_args.kwargs
        assert kwargs["retry"] is None
        assert kwargs["base_url"] == "https://api.github.com"
        mock_github.return_value.get_repo.assert_called_once_with("owner/repo", lazy=True)
        assert repo is mock_github.return_value.get_repo.return_value

    def test_custom_api_url(self, mocker):
        mock_github = mocker.patch("prgate_core.gh.pull_request.Github")
        get_repo("owner/repo", token="tok", api_url="https://ghe.example.com/api/v3")
        assert mock_github.call_args.kwargs["base_url"] == "https://ghe.example.com/api/v3"
