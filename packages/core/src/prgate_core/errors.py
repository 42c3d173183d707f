"""Exceptions raised by prgate_core.

Policy failures (no changelog, no trailer) are not errors: they are reported
through ValidationResult. Everything here is fatal to a run, except when raised
while posting the status comment, which the reconciler downgrades to a warning.
"""


class GateError(Exception):
    """Base class for all prgate failures."""


class ConfigurationError(GateError):
    """The run was triggered in a context prgate cannot validate (wrong event, no PR number)."""


class UpstreamDataError(GateError):
    """GitHub returned data that makes validation impossible, e.g. a PR without commits."""


class TransportError(GateError):
    """A GitHub API call failed (network, auth, rate limit, server error)."""


class NotFoundError(TransportError):
    """The requested pull request or comment does not exist."""
