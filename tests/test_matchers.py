"""Tests for the built-in request matchers."""

from __future__ import annotations

import pytest

from restmox.comparators import Contains
from restmox.errors import MismatchError
from restmox.http import Request
from restmox.matchers import body, header, matches, method, query_param, request_to


def _request(**kwargs: object) -> Request:
    defaults: dict[str, object] = {"method": "GET", "url": "/number?id=1&id=2"}
    defaults.update(kwargs)
    return Request(**defaults)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "matcher",
    [
        request_to("/number?id=1&id=2"),
        method("get"),
        header("X-Mode", "fast"),
        query_param("id", "1", "2"),
        query_param("id", "1"),
        body(Contains("hello")),
        matches(lambda req: req.path == "/number", "path is /number"),
    ],
    ids=repr,
)
def test_matchers_accept(matcher: object) -> None:
    """Each matcher returns quietly for a conforming request."""
    matcher(_request(headers={"x-mode": "fast"}, body="say hello"))  # type: ignore[operator]


@pytest.mark.parametrize(
    ("matcher", "fragment"),
    [
        (request_to("/other"), "Request URI expected:<Equals('/other')>"),
        (method("POST"), "Unexpected HttpMethod expected:<'POST'> but was:<'GET'>"),
        (header("X-Mode", "fast"), "Expected header <X-Mode> to exist"),
        (query_param("page", "1"), "Expected query param <page> to exist"),
        (query_param("id", "1", "2", "3"), "to have at least <3> values"),
        (query_param("id", "1", "9"), "Query param [id] expected:<Equals('9')>"),
        (body("x"), "Request body expected:<Equals('x')> but was:<''>"),
        (matches(lambda req: False, "never"), "Request did not satisfy never"),
    ],
)
def test_matchers_reject(matcher: object, fragment: str) -> None:
    """Rejections raise MismatchError with a readable explanation."""
    with pytest.raises(MismatchError) as excinfo:
        matcher(_request())  # type: ignore[operator]

    assert fragment in str(excinfo.value)


def test_mismatch_carries_expected_and_actual() -> None:
    """MismatchError exposes the compared values."""
    with pytest.raises(MismatchError) as excinfo:
        header("Accept", "text/plain")(_request(headers={"Accept": "text/html"}))

    assert excinfo.value.actual == "text/html"
    assert repr(excinfo.value.expected) == "Equals('text/plain')"


def test_matches_defaults_description_to_function_name() -> None:
    """Named predicates describe themselves."""

    def is_json(request: Request) -> bool:
        return request.header("content-type") == "application/json"

    assert repr(matches(is_json)) == "matches('is_json')"
