"""Unit tests for diagnostic report helpers."""

from __future__ import annotations

import pytest

from restmox.errors import MismatchError, VerificationError
from restmox.expectations import Expectation
from restmox.http import Request
from restmox.matchers import request_to
from restmox.responses import with_success
from restmox.verifiers import (
    RemainingCallsVerifier,
    describe_mismatch,
    describe_requests,
    executed_summary,
)


def _exp(url: str, *, times: int | None = None, unbounded: bool = False) -> Expectation:
    exp = Expectation(request_to(url))
    if unbounded:
        exp.any_number_of_times()
    elif times is not None:
        exp.times(times)
    return exp.and_respond(with_success())


@pytest.mark.parametrize(
    ("actual", "pending", "expected"),
    [
        (0, [], "0 out of 0 were executed"),
        (2, [_exp("/a", times=5), _exp("/b"), _exp("/c", times=2)], "2 out of 10 were executed"),
        (1, [_exp("/a"), _exp("/b", unbounded=True)], "1 out of 2+ were executed"),
        (3, [_exp("/a", unbounded=True)], "3 out of 3+ were executed"),
    ],
)
def test_executed_summary(actual: int, pending: list[Expectation], expected: str) -> None:
    """The summary adds outstanding minimums and flags optional extras."""
    requests = [Request("GET", "/x")] * actual
    assert executed_summary(requests, pending) == expected


def test_describe_requests_lists_both_sides() -> None:
    """The report numbers actual requests and remaining expectations."""
    report = describe_requests(
        [Request("GET", "/a"), Request("post", "/b")],
        [_exp("/c")],
    )

    assert report == (
        "2 out of 3 were executed\n"
        "\n"
        "Actual requests:\n"
        "  1. GET /a\n"
        "  2. POST /b\n"
        "\n"
        "Remaining expectations:\n"
        "  1. request_to(Equals('/c')) "
        "CallCount(min_required=1, max_allowed=1, calls=0)"
    )


def test_describe_requests_with_nothing() -> None:
    """Empty sides render as ``(none)``."""
    report = describe_requests([], [])

    assert "Actual requests:\n  (none)" in report
    assert "Remaining expectations:\n  (none)" in report


def test_describe_mismatch_keeps_context() -> None:
    """The wrapped mismatch names the expectation, request and reason."""
    original = MismatchError("Request URI mismatch", expected="/a", actual="/b")

    wrapped = describe_mismatch(_exp("/a"), Request("GET", "/b"), original)

    assert wrapped.expected == "/a"
    assert wrapped.actual == "/b"
    message = str(wrapped)
    assert message.splitlines()[0] == "Unexpected request."
    assert "Actual:\n  GET /b" in message
    assert "Reason:\n  Request URI mismatch" in message


def test_remaining_calls_verifier_passes_optional_leftovers() -> None:
    """Only required calls cause verification to fail."""
    verifier = RemainingCallsVerifier()
    verifier.verify([], [])
    verifier.verify([], [_exp("/a", unbounded=True)])

    with pytest.raises(VerificationError, match=r"0 out of 1\+ were executed"):
        verifier.verify([], [_exp("/a", unbounded=True), _exp("/b")])
