"""Pytest plugin providing the ``mock_server`` and ``mock_client`` fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .client import MockClient
from .errors import ConfigurationError
from .server import MockServer, OrderPolicy

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("restmox")
    group.addoption(
        "--restmox-request-order",
        action="store",
        dest="restmox_request_order",
        default=None,
        choices=[policy.value for policy in OrderPolicy],
        help="Request matching policy for the mock_server fixture.",
    )
    group.addoption(
        "--restmox-explain-more-on-error",
        action="store_true",
        dest="restmox_explain_more_on_error",
        default=None,
        help="Append the full request report to exhaustion failures.",
    )
    group.addoption(
        "--restmox-verify-on-teardown",
        action="store_true",
        dest="restmox_verify_on_teardown",
        default=None,
        help="Call verify() on the mock_server fixture during teardown.",
    )
    group.addoption(
        "--no-restmox-verify-on-teardown",
        action="store_false",
        dest="restmox_verify_on_teardown",
        default=None,
        help="Do not call verify() on the mock_server fixture during teardown.",
    )
    parser.addini(
        "restmox_request_order",
        "Request matching policy: 'strict' or 'any-order'.",
        default=OrderPolicy.STRICT.value,
    )
    parser.addini(
        "restmox_explain_more_on_error",
        "Append the full request report to exhaustion failures.",
        type="bool",
        default=False,
    )
    parser.addini(
        "restmox_verify_on_teardown",
        "Call verify() on the mock_server fixture during teardown.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "restmox(order: str = 'strict', verbose: bool = False, "
            "verify: bool = True): override mock_server settings for a test."
        ),
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach each phase's report to the item for teardown inspection."""
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"restmox_rep_{rep.when}", rep)


def _setting(request: pytest.FixtureRequest, key: str, option: str) -> t.Any:
    """Resolve a setting: marker > command line > ini."""
    marker = request.node.get_closest_marker("restmox")
    if marker is not None and key in marker.kwargs:
        return marker.kwargs[key]
    config = request.config
    cli_value = config.getoption(option)
    if cli_value is not None:
        return cli_value
    return config.getini(option)


def _build_server(request: pytest.FixtureRequest) -> MockServer:
    order = _setting(request, "order", "restmox_request_order")
    verbose = bool(_setting(request, "verbose", "restmox_explain_more_on_error"))
    try:
        return MockServer(order=order, verbose=verbose, verify_on_exit=False)
    except ConfigurationError as err:
        pytest.fail(f"Invalid restmox configuration: {err}")


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "restmox_rep_call", None)
    return bool(rep_call and rep_call.failed)


@pytest.fixture
def mock_server(request: pytest.FixtureRequest) -> t.Generator[MockServer, None, None]:
    """Provide a :class:`MockServer`, verified during teardown by default."""
    server = _build_server(request)
    should_verify = bool(_setting(request, "verify", "restmox_verify_on_teardown"))
    yield server
    if not should_verify or _call_stage_failed(request.node):
        return
    try:
        server.verify()
    except AssertionError as err:
        logger.exception("Error during restmox verification")
        pytest.fail(f"{type(err).__name__}: {err}", pytrace=False)


@pytest.fixture
def mock_client(mock_server: MockServer) -> MockClient:
    """Provide a :class:`MockClient` wired to ``mock_server``."""
    return MockClient(mock_server)
