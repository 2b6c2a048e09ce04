"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest

pytest_plugins = ("restmox.pytest_plugin", "pytester")


@pytest.fixture(autouse=True)
def restmox_debug_logging(
    caplog: pytest.LogCaptureFixture,
) -> t.Generator[None, None, None]:
    """Capture restmox debug logs so failing tests show the matching trail."""
    with caplog.at_level(logging.DEBUG, logger="restmox"):
        yield
