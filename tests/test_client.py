"""Tests for the client adapter and response creators."""

from __future__ import annotations

import pytest

from restmox import (
    ExhaustionError,
    MockClient,
    MockServer,
    Request,
    Response,
    body,
    header,
    method,
    query_param,
    request_to,
    with_bad_request,
    with_exception,
    with_server_error,
    with_status,
    with_success,
)


class RecordingInterceptor:
    """Interceptor capturing requests instead of matching them."""

    def __init__(self) -> None:
        self.requests: list[Request] = []

    def intercept(self, request: Request) -> Response:
        self.requests.append(request)
        return Response(204)


def test_client_builds_requests() -> None:
    """Base URL, params, headers and body end up on the request."""
    interceptor = RecordingInterceptor()
    client = MockClient(interceptor, base_url="http://api.test/")

    response = client.post(
        "/items",
        params={"page": "2"},
        headers={"Content-Type": "text/plain"},
        body="payload",
    )

    assert response.status == 204
    (request,) = interceptor.requests
    assert request.method == "POST"
    assert request.url == "http://api.test/items?page=2"
    assert request.header("content-type") == "text/plain"
    assert request.body == "payload"


@pytest.mark.parametrize("verb", ["get", "head", "put", "patch", "delete"])
def test_client_verbs(verb: str) -> None:
    """Each helper sends the matching HTTP method."""
    interceptor = RecordingInterceptor()
    getattr(MockClient(interceptor), verb)("/x?a=1", params={"b": "2"})

    assert interceptor.requests[0].method == verb.upper()
    assert interceptor.requests[0].url == "/x?a=1&b=2"


def test_absolute_urls_ignore_base_url() -> None:
    """Absolute URLs are sent unchanged."""
    interceptor = RecordingInterceptor()
    MockClient(interceptor, base_url="http://api.test").get("http://other.test/x")

    assert interceptor.requests[0].url == "http://other.test/x"


@pytest.mark.parametrize(
    ("creator", "status"),
    [
        (with_success("ok", "text/plain"), 200),
        (with_status(201, "made"), 201),
        (with_bad_request(), 400),
        (with_server_error(), 500),
    ],
)
def test_response_creators(creator: object, status: int) -> None:
    """Creators produce fresh responses with the configured status."""
    request = Request("GET", "/")
    first = creator(request)  # type: ignore[operator]
    second = creator(request)  # type: ignore[operator]

    assert first.status == status
    assert first is not second


def test_success_sets_content_type() -> None:
    """with_success records the content type header."""
    response = with_success("1", "text/plain")(Request("GET", "/"))

    assert response.content_type == "text/plain"
    assert response.text == "1"


def test_end_to_end_through_client() -> None:
    """Requests sent by the client are matched by the server."""
    server = MockServer()
    server.expect(
        request_to("/search?q=mox"),
        method("POST"),
        header("Accept", "application/json"),
        query_param("q", "mox"),
        body('{"limit": 1}'),
    ).and_respond(with_success('{"hits": []}', "application/json"))
    client = MockClient(server)

    response = client.post(
        "/search",
        params={"q": "mox"},
        headers={"Accept": "application/json"},
        body='{"limit": 1}',
    )

    assert response.ok
    assert response.content_type == "application/json"
    server.verify()


def test_io_failures_surface_to_client() -> None:
    """with_exception simulates transport failures."""
    server = MockServer()
    server.expect(request_to("/flaky")).and_respond(
        with_exception(ConnectionError("reset by peer"))
    )
    client = MockClient(server)

    with pytest.raises(ConnectionError, match="reset by peer"):
        client.get("/flaky")
    with pytest.raises(ExhaustionError):
        client.get("/flaky")
