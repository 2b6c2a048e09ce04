"""Exception hierarchy for restmox."""

from __future__ import annotations

import typing as t


class RestMoxError(Exception):
    """Base class for all restmox errors."""


class ConfigurationError(RestMoxError, ValueError):
    """An expectation or server was set up incorrectly."""


class LifecycleError(RestMoxError, RuntimeError):
    """An operation was attempted in the wrong lifecycle phase."""


class MismatchError(RestMoxError, AssertionError):
    """A request matcher rejected a request.

    ``expected`` and ``actual`` carry the compared values when the matcher
    knows them, so callers can build richer diagnostics than the message.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: t.Any = None,
        actual: t.Any = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class ExhaustionError(RestMoxError, AssertionError):
    """No expectation is able to accept another request."""


class VerificationError(RestMoxError, AssertionError):
    """Raised by :meth:`MockServer.verify` when requests are still expected."""


__all__ = [
    "ConfigurationError",
    "ExhaustionError",
    "LifecycleError",
    "MismatchError",
    "RestMoxError",
    "VerificationError",
]
