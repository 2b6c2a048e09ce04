"""Expectation matching helpers for the mock server."""

from __future__ import annotations

import typing as t

from .counts import CallCount
from .errors import ConfigurationError, ExhaustionError, LifecycleError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .http import Request, Response
    from .matchers import RequestMatcher
    from .responses import ResponseCreator


class Expectation:
    """A single expected request: matchers, call count and response.

    Expectations are built fluently and finalised by :meth:`and_respond`::

        server.expect(request_to("/number")).and_expect(method("GET")).times(
            3
        ).and_respond(with_success("1"))
    """

    def __init__(self, *matchers: RequestMatcher) -> None:
        self._matchers: list[RequestMatcher] = []
        self._count: CallCount | None = None
        self._response_creator: ResponseCreator | None = None
        self._frozen = False
        for matcher in matchers:
            self.and_expect(matcher)

    # ------------------------------------------------------------------
    # Fluent setup
    # ------------------------------------------------------------------
    def and_expect(self, matcher: RequestMatcher) -> Expectation:
        """Append *matcher*; all matchers must accept a request."""
        self._require_setup("and_expect")
        if matcher is None:
            msg = "RequestMatcher is required"
            raise ConfigurationError(msg)
        self._matchers.append(matcher)
        return self

    def expect_count(self, count: CallCount) -> Expectation:
        """Constrain the call count, intersecting with earlier declarations."""
        self._require_setup("expect_count")
        if count is None:
            msg = "CallCount is required"
            raise ConfigurationError(msg)
        self._count = count if self._count is None else self._count.and_(count)
        return self

    def times(self, count: int) -> Expectation:
        """Expect exactly ``count`` calls."""
        return self.expect_count(CallCount.times(count))

    def at_least(self, count: int) -> Expectation:
        """Expect ``count`` calls or more."""
        return self.expect_count(CallCount.at_least(count))

    def at_most(self, count: int) -> Expectation:
        """Allow up to ``count`` calls."""
        return self.expect_count(CallCount.at_most(count))

    def at_least_once(self) -> Expectation:
        """Expect one call or more."""
        return self.expect_count(CallCount.at_least_once())

    def never(self) -> Expectation:
        """Forbid the request."""
        return self.expect_count(CallCount.never())

    def any_number_of_times(self) -> Expectation:
        """Allow any number of calls, including none."""
        return self.expect_count(CallCount.any_number_of_times())

    def and_respond(self, creator: ResponseCreator) -> Expectation:
        """Attach the response creator, finalising the expectation.

        When no count has been declared the expectation defaults to exactly
        one call.
        """
        self._require_setup("and_respond")
        if creator is None:
            msg = "ResponseCreator is required"
            raise ConfigurationError(msg)
        if not self._matchers:
            msg = "No request expectations to execute"
            raise ConfigurationError(msg)
        if self._response_creator is not None:
            msg = f"ResponseCreator already set for {self!r}"
            raise ConfigurationError(msg)
        self._response_creator = creator
        if self._count is None:
            self.times(1)
        return self

    def freeze(self) -> None:
        """Reject further setup; called when the server starts replaying."""
        self._frozen = True

    def _require_setup(self, action: str) -> None:
        if self._frozen:
            msg = f"Cannot call {action}(): requests already underway for {self!r}"
            raise LifecycleError(msg)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def matchers(self) -> tuple[RequestMatcher, ...]:
        """Return the registered matchers in evaluation order."""
        return tuple(self._matchers)

    @property
    def count(self) -> CallCount | None:
        """Return the call-count contract, if one has been declared."""
        return self._count

    @property
    def response_creator(self) -> ResponseCreator | None:
        """Return the attached response creator."""
        return self._response_creator

    @property
    def is_complete(self) -> bool:
        """Return ``True`` once matchers and a response creator are set."""
        return bool(self._matchers) and self._response_creator is not None

    # ------------------------------------------------------------------
    # Replay
    # ------------------------------------------------------------------
    def check(self, request: Request) -> None:
        """Raise unless *request* satisfies every matcher.

        Matchers run in registration order and the first
        :class:`~restmox.errors.MismatchError` propagates. The call count is
        left untouched; see :meth:`record_call`.
        """
        if not self._matchers:
            msg = "No request expectations to execute"
            raise ConfigurationError(msg)
        if self._response_creator is None or self._count is None:
            msg = (
                "No ResponseCreator was set up. Add it after request "
                "expectations, e.g. server.expect(request_to('/foo'))"
                ".and_respond(with_success())"
            )
            raise ConfigurationError(msg)
        if not self._count.more_calls_allowed:
            msg = f"No further requests expected: {self!r}"
            raise ExhaustionError(msg)
        for matcher in self._matchers:
            matcher(request)

    def record_call(self) -> bool:
        """Count a committed call and return ``True`` if now exhausted."""
        count = self._require_count()
        count.count_new_call()
        return not count.more_calls_allowed

    def create_response(self, request: Request) -> Response:
        """Invoke the response creator for *request*."""
        if self._response_creator is None:
            msg = f"No ResponseCreator was set up for {self!r}"
            raise ConfigurationError(msg)
        return self._response_creator(request)

    def _require_count(self) -> CallCount:
        if self._count is None:
            msg = f"No call count declared for {self!r}"
            raise ConfigurationError(msg)
        return self._count

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def describe(self) -> str:
        """Return a one-line summary of the matchers and count."""
        matchers = ", ".join(repr(matcher) for matcher in self._matchers) or "-"
        return f"{matchers} {self._count!r}"

    def __repr__(self) -> str:
        """Return a debug representation."""
        return (
            f"Expectation(matchers=[{', '.join(map(repr, self._matchers))}], "
            f"count={self._count!r})"
        )


__all__ = ["Expectation"]
