"""Example tests demonstrating any-order request matching."""

from __future__ import annotations

import typing as t

import pytest

from restmox import header, request_to, with_status, with_success

pytest_plugins = ("restmox.pytest_plugin",)

if t.TYPE_CHECKING:  # pragma: no cover - typing only
    from restmox import MockClient, MockServer


@pytest.mark.restmox(order="any-order")
def test_parallel_style_fetches(
    mock_server: MockServer, mock_client: MockClient
) -> None:
    """Requests may arrive in any order when the marker says so."""
    mock_server.expect(request_to("/users/1")).and_respond(with_success("ada"))
    mock_server.expect(request_to("/users/2")).and_respond(with_success("bob"))
    mock_server.expect(request_to("/metrics")).any_number_of_times().and_respond(
        with_status(202)
    )

    names = [mock_client.get(f"/users/{n}").text for n in (2, 1)]

    assert names == ["bob", "ada"]


@pytest.mark.restmox(order="any-order", verbose=True)
def test_authenticated_calls(
    mock_server: MockServer, mock_client: MockClient
) -> None:
    """Matchers beyond the URL narrow which expectation answers."""
    mock_server.expect(
        request_to("/me"), header("Authorization", "Bearer t1")
    ).and_respond(with_success("first"))
    mock_server.expect(
        request_to("/me"), header("Authorization", "Bearer t2")
    ).and_respond(with_success("second"))

    second = mock_client.get("/me", headers={"Authorization": "Bearer t2"})
    first = mock_client.get("/me", headers={"Authorization": "Bearer t1"})

    assert (first.text, second.text) == ("first", "second")
