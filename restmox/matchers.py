"""Request matchers used to build expectations.

A matcher is any callable accepting a :class:`~restmox.http.Request` that
returns normally on acceptance and raises
:class:`~restmox.errors.MismatchError` on rejection.
"""

from __future__ import annotations

import typing as t

from .comparators import Comparator, as_comparator
from .errors import MismatchError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .http import Request


class RequestMatcher(t.Protocol):
    """Callable raising :class:`MismatchError` when a request is rejected."""

    def __call__(self, request: Request) -> None:
        """Accept *request* or raise :class:`MismatchError`."""
        ...


def _mismatch(what: str, expected: object, actual: object) -> MismatchError:
    msg = f"{what} expected:<{expected!r}> but was:<{actual!r}>"
    return MismatchError(msg, expected=expected, actual=actual)


class _RequestTo:
    def __init__(self, expected: str | Comparator) -> None:
        self.expected = as_comparator(expected)

    def __call__(self, request: Request) -> None:
        if not self.expected(request.url):
            raise _mismatch("Request URI", self.expected, request.url)

    def __repr__(self) -> str:
        return f"request_to({self.expected!r})"


class _Method:
    def __init__(self, name: str) -> None:
        self.name = name.upper()

    def __call__(self, request: Request) -> None:
        if request.method != self.name:
            raise _mismatch("Unexpected HttpMethod", self.name, request.method)

    def __repr__(self) -> str:
        return f"method({self.name!r})"


class _Header:
    def __init__(self, name: str, expected: str | Comparator) -> None:
        self.name = name
        self.expected = as_comparator(expected)

    def __call__(self, request: Request) -> None:
        actual = request.header(self.name)
        if actual is None:
            msg = f"Expected header <{self.name}> to exist"
            raise MismatchError(msg, expected=self.expected)
        if not self.expected(actual):
            raise _mismatch(f"Request header [{self.name}]", self.expected, actual)

    def __repr__(self) -> str:
        return f"header({self.name!r}, {self.expected!r})"


class _QueryParam:
    def __init__(self, name: str, expected: tuple[Comparator, ...]) -> None:
        self.name = name
        self.expected = expected

    def __call__(self, request: Request) -> None:
        values = request.query.get(self.name)
        if values is None:
            msg = f"Expected query param <{self.name}> to exist"
            raise MismatchError(msg, expected=self.expected)
        if len(values) < len(self.expected):
            msg = (
                f"Expected query param <{self.name}> to have at least "
                f"<{len(self.expected)}> values but found {values}"
            )
            raise MismatchError(msg, expected=self.expected, actual=values)
        for comparator, value in zip(self.expected, values, strict=False):
            if not comparator(value):
                raise _mismatch(f"Query param [{self.name}]", comparator, value)

    def __repr__(self) -> str:
        rendered = ", ".join(repr(comparator) for comparator in self.expected)
        return f"query_param({self.name!r}, {rendered})"


class _Body:
    def __init__(self, expected: str | Comparator) -> None:
        self.expected = as_comparator(expected)

    def __call__(self, request: Request) -> None:
        if not self.expected(request.body):
            raise _mismatch("Request body", self.expected, request.body)

    def __repr__(self) -> str:
        return f"body({self.expected!r})"


class _Matches:
    def __init__(self, func: t.Callable[[Request], bool], description: str) -> None:
        self.func = func
        self.description = description

    def __call__(self, request: Request) -> None:
        if not self.func(request):
            msg = f"Request did not satisfy {self.description}: {request}"
            raise MismatchError(msg, expected=self.description, actual=request)

    def __repr__(self) -> str:
        return f"matches({self.description!r})"


def request_to(expected: str | Comparator) -> RequestMatcher:
    """Match the request URL exactly or against a comparator."""
    return _RequestTo(expected)


def method(name: str) -> RequestMatcher:
    """Match the HTTP method, case-insensitively."""
    return _Method(name)


def header(name: str, expected: str | Comparator) -> RequestMatcher:
    """Require header *name* to be present and to match *expected*."""
    return _Header(name, expected)


def query_param(name: str, *expected: str | Comparator) -> RequestMatcher:
    """Require query parameter *name* with values matching *expected* in order."""
    return _QueryParam(name, tuple(as_comparator(value) for value in expected))


def body(expected: str | Comparator) -> RequestMatcher:
    """Match the request body."""
    return _Body(expected)


def matches(
    func: t.Callable[[Request], bool], description: str | None = None
) -> RequestMatcher:
    """Adapt a boolean predicate over the whole request into a matcher."""
    return _Matches(func, description or getattr(func, "__name__", repr(func)))


__all__ = [
    "RequestMatcher",
    "body",
    "header",
    "matches",
    "method",
    "query_param",
    "request_to",
]
