"""Validation data models.

Plain dataclasses shared by the gateway, the checks and the run controller.
Nothing here talks to GitHub; the gateway maps PyGithub objects onto these
types so the rest of prgate_core can be tested without network mocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

CHANGELOG = "changelog"
VERSION_BUMP = "version_bump"


@dataclass(frozen=True)
class PullRequestRef:
    """The pull request under validation."""

    repo: str  # "owner/name"
    number: int

    def __str__(self) -> str:
        return f"{self.repo}#{self.number}"


@dataclass(frozen=True)
class ChangedFile:
    path: str


@dataclass(frozen=True)
class Commit:
    message: str
    sha: str = ""


@dataclass(frozen=True)
class BotComment:
    """An issue-style comment on the PR, as returned by the gateway."""

    id: int
    body: str


@dataclass(frozen=True)
class PredicateResult:
    """Outcome of a single policy check."""

    kind: str  # "changelog" | "version_bump"
    passed: bool
    detail: str = ""  # matched changelog path or bump type; "" when the check failed


@dataclass
class ValidationResult:
    """Aggregate of all predicates, in evaluation order.

    There is no partial credit: the result passes only when every predicate does.
    """

    predicates: list[PredicateResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(p.passed for p in self.predicates)

    def get(self, kind: str) -> PredicateResult | None:
        for predicate in self.predicates:
            if predicate.kind == kind:
                return predicate
        return None
