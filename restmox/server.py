"""MockServer: the expectation registry behind a mock HTTP endpoint."""

from __future__ import annotations

import enum
import logging
import types  # noqa: TC003
import typing as t

from .errors import ConfigurationError, ExhaustionError, LifecycleError, MismatchError
from .expectations import Expectation
from .verifiers import RemainingCallsVerifier, describe_mismatch, describe_requests

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .counts import CallCount
    from .http import Request, Response
    from .matchers import RequestMatcher
    from .responses import ResponseCreator

logger = logging.getLogger(__name__)

# Errors raised by Expectation.check that mean "this expectation does not
# accept the request" rather than a setup mistake.
_REJECTIONS = (MismatchError, ExhaustionError)


class Phase(enum.StrEnum):
    """Lifecycle phases for :class:`MockServer`."""

    RECORD = "RECORD"
    REPLAY = "REPLAY"


class OrderPolicy(enum.StrEnum):
    """How intercepted requests are matched against pending expectations."""

    STRICT = "strict"
    ANY_ORDER = "any-order"


def _coerce_order(order: OrderPolicy | str) -> OrderPolicy:
    try:
        return OrderPolicy(order)
    except ValueError:
        choices = ", ".join(repr(policy.value) for policy in OrderPolicy)
        msg = f"Unknown request order {order!r}; expected one of {choices}"
        raise ConfigurationError(msg) from None


class MockServer:
    """Record expected requests, answer intercepted ones, verify the rest.

    Expectations are registered with :meth:`expect` while the server is in
    :attr:`Phase.RECORD`. The first call to :meth:`intercept` switches to
    :attr:`Phase.REPLAY`, after which no further expectations may be added.
    """

    def __init__(
        self,
        *,
        order: OrderPolicy | str = OrderPolicy.STRICT,
        verbose: bool = False,
        verify_on_exit: bool = True,
    ) -> None:
        """Create a new server.

        Parameters
        ----------
        order:
            :attr:`OrderPolicy.STRICT` (the default) only lets the oldest
            pending expectation answer a request, skipping expectations whose
            minimum is already met. :attr:`OrderPolicy.ANY_ORDER` lets any
            pending expectation answer, earliest registration first.
        verbose:
            Append the full diagnostic report to exhaustion failures, not
            only to verification failures.
        verify_on_exit:
            When ``True`` (the default), leaving a ``with`` block without an
            exception calls :meth:`verify`.
        """
        self._order = _coerce_order(order)
        self._verbose = verbose
        self._verify_on_exit = verify_on_exit
        self._phase = Phase.RECORD
        self._expectations: list[Expectation] = []
        self._pending: list[Expectation] = []
        self._actual: list[Request] = []

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def with_requests_in_any_order(self) -> MockServer:
        """Switch to :attr:`OrderPolicy.ANY_ORDER` matching."""
        self._require_phase(Phase.RECORD, "with_requests_in_any_order")
        self._order = OrderPolicy.ANY_ORDER
        return self

    def explain_more_on_error(self) -> MockServer:
        """Include the diagnostic report in exhaustion failures."""
        self._require_phase(Phase.RECORD, "explain_more_on_error")
        self._verbose = True
        return self

    @property
    def order(self) -> OrderPolicy:
        """Return the active matching policy."""
        return self._order

    @property
    def verbose(self) -> bool:
        """Return whether exhaustion failures carry the full report."""
        return self._verbose

    # ------------------------------------------------------------------
    # Lifecycle state
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        """Return the current lifecycle phase."""
        return self._phase

    @property
    def pending(self) -> tuple[Expectation, ...]:
        """Return expectations that may still answer requests."""
        return tuple(self._pending)

    @property
    def expectations(self) -> tuple[Expectation, ...]:
        """Return every registered expectation, including evicted ones."""
        return tuple(self._expectations)

    @property
    def actual_requests(self) -> tuple[Request, ...]:
        """Return intercepted requests in arrival order."""
        return tuple(self._actual)

    # ------------------------------------------------------------------
    # Context manager protocol
    # ------------------------------------------------------------------
    def __enter__(self) -> MockServer:
        """Enter the context; the server is returned unchanged."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Verify on a clean exit when ``verify_on_exit`` is enabled."""
        if self._verify_on_exit and exc_type is None:
            self.verify()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def expect(
        self,
        *matchers: RequestMatcher,
        count: CallCount | None = None,
        response: ResponseCreator | None = None,
    ) -> Expectation:
        """Register a new expectation and return it for further setup.

        May be called repeatedly before the first request is intercepted.
        Passing ``response`` finalises the expectation in one call;
        otherwise finish it with :meth:`Expectation.and_respond`.
        """
        if self._phase is not Phase.RECORD:
            msg = "Can't add more expected requests with test already underway"
            raise LifecycleError(msg)
        expectation = Expectation(*matchers)
        if count is not None:
            expectation.expect_count(count)
        if response is not None:
            expectation.and_respond(response)
        self._expectations.append(expectation)
        self._pending.append(expectation)
        logger.debug("Registered expectation #%d", len(self._expectations))
        return expectation

    def intercept(self, request: Request) -> Response:
        """Match *request* against pending expectations and respond."""
        if self._phase is Phase.RECORD:
            logger.debug("First request intercepted; entering replay phase")
            self._phase = Phase.REPLAY
            for registered in self._expectations:
                registered.freeze()
        if self._order is OrderPolicy.ANY_ORDER:
            expectation = self._match_any_order(request)
        else:
            expectation = self._match_in_order(request)
        if expectation is None:
            raise self._no_further_requests(request)
        return self._commit(expectation, request)

    def verify(self) -> None:
        """Raise :class:`VerificationError` if required requests never arrived.

        Verification does not change the server, so it may be repeated.
        """
        RemainingCallsVerifier().verify(self._actual, self._pending)

    def reset(self) -> None:
        """Forget all expectations and requests and return to recording."""
        self._expectations.clear()
        self._pending.clear()
        self._actual.clear()
        self._phase = Phase.RECORD

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _match_in_order(self, request: Request) -> Expectation | None:
        """Return the head expectation, skipping satisfied ones that reject."""
        while self._pending:
            head = self._pending[0]
            try:
                head.check(request)
            except _REJECTIONS as err:
                count = head.count
                if count is not None and count.more_calls_required:
                    if isinstance(err, MismatchError):
                        raise describe_mismatch(head, request, err) from err
                    raise
                logger.debug("Skipping satisfied expectation %r for %s", head, request)
                self._pending.pop(0)
                continue
            return head
        return None

    def _match_any_order(self, request: Request) -> Expectation | None:
        """Return the earliest pending expectation accepting *request*."""
        for expectation in tuple(self._pending):
            try:
                expectation.check(request)
            except _REJECTIONS:
                continue
            return expectation
        return None

    def _commit(self, expectation: Expectation, request: Request) -> Response:
        """Count *request* against *expectation* and produce its response."""
        if expectation.record_call():
            logger.debug("Expectation exhausted, removing: %r", expectation)
            self._pending.remove(expectation)
        self._actual.append(request)
        logger.debug("Matched %s to %r", request, expectation)
        return expectation.create_response(request)

    def _no_further_requests(self, request: Request) -> ExhaustionError:
        msg = f"No further requests expected: {request}"
        if self._verbose:
            msg = f"{msg}\n{describe_requests(self._actual, self._pending)}"
        return ExhaustionError(msg)

    def _require_phase(self, expected: Phase, action: str) -> None:
        """Ensure we're in ``expected`` phase before executing ``action``."""
        if self._phase is not expected:
            msg = (
                f"Cannot call {action}(): not in '{expected.name.lower()}' phase "
                f"(current phase: {self._phase.name.lower()})"
            )
            raise LifecycleError(msg)


__all__ = ["MockServer", "OrderPolicy", "Phase"]
