"""Verification and diagnostic helpers for :class:`MockServer`."""

from __future__ import annotations

import typing as t
from textwrap import indent

from .errors import MismatchError, VerificationError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import Expectation
    from .http import Request


def _numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    if not entries:
        return "(none)"
    lines: list[str] = []
    for index, entry in enumerate(entries, start=start):
        entry_lines = entry.splitlines() or [""]
        lines.append(f"{index}. {entry_lines[0]}")
        lines.extend(f"   {extra}" for extra in entry_lines[1:])
    return "\n".join(lines)


def _format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)


def required_calls_left(pending: t.Iterable[Expectation]) -> int:
    """Return the sum of outstanding minimum calls across *pending*."""
    return sum(exp.count.required_calls_left for exp in pending if exp.count)


def extra_calls_allowed(pending: t.Iterable[Expectation]) -> bool:
    """Return ``True`` if any of *pending* accepts calls beyond its minimum."""
    return any(exp.count.extra_calls_allowed for exp in pending if exp.count)


def executed_summary(
    actual: t.Sequence[Request], pending: t.Sequence[Expectation]
) -> str:
    """Return ``"N out of M[+] were executed"``."""
    total = len(actual) + required_calls_left(pending)
    suffix = "+" if extra_calls_allowed(pending) else ""
    return f"{len(actual)} out of {total}{suffix} were executed"


def describe_requests(
    actual: t.Sequence[Request], pending: t.Sequence[Expectation]
) -> str:
    """Return the full diagnostic report of executed and remaining requests."""
    return _format_sections(
        executed_summary(actual, pending),
        [
            ("Actual requests", _numbered([str(req) for req in actual])),
            ("Remaining expectations", _numbered([exp.describe() for exp in pending])),
        ],
    )


def describe_mismatch(
    expectation: Expectation, request: Request, error: MismatchError
) -> MismatchError:
    """Wrap *error* with the request and expectation that produced it."""
    msg = _format_sections(
        "Unexpected request.",
        [
            ("Expected", expectation.describe()),
            ("Actual", str(request)),
            ("Reason", str(error)),
        ],
    )
    return MismatchError(msg, expected=error.expected, actual=error.actual)


def only_skippable(pending: t.Iterable[Expectation]) -> bool:
    """Return ``True`` when no expectation in *pending* still needs calls."""
    return not any(exp.count is None or exp.count.more_calls_required for exp in pending)


class RemainingCallsVerifier:
    """Check that every pending expectation has met its minimum."""

    def verify(
        self,
        actual: t.Sequence[Request],
        pending: t.Sequence[Expectation],
    ) -> None:
        """Raise :class:`VerificationError` if required calls are outstanding."""
        if not pending or only_skippable(pending):
            return
        report = describe_requests(actual, pending)
        raise VerificationError(f"Further request(s) expected: {report}")


__all__ = [
    "RemainingCallsVerifier",
    "describe_mismatch",
    "describe_requests",
    "executed_summary",
    "extra_calls_allowed",
    "required_calls_left",
]
