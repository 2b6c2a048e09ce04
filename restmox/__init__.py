"""Python-native mock HTTP endpoint built around expect-replay-verify.

Register expectations on a :class:`MockServer`, route simulated requests
through :meth:`MockServer.intercept` (usually via :class:`MockClient`) and
call :meth:`MockServer.verify` once the code under test has run.
"""

from __future__ import annotations

from .client import Interceptor, MockClient
from .comparators import Contains, Equals, Regex
from .counts import CallCount
from .errors import (
    ConfigurationError,
    ExhaustionError,
    LifecycleError,
    MismatchError,
    RestMoxError,
    VerificationError,
)
from .expectations import Expectation
from .http import Request, Response
from .matchers import body, header, matches, method, query_param, request_to
from .responses import (
    with_bad_request,
    with_exception,
    with_server_error,
    with_status,
    with_success,
)
from .server import MockServer, OrderPolicy, Phase

__all__ = [
    "CallCount",
    "ConfigurationError",
    "Contains",
    "Equals",
    "ExhaustionError",
    "Expectation",
    "Interceptor",
    "LifecycleError",
    "MismatchError",
    "MockClient",
    "MockServer",
    "OrderPolicy",
    "Phase",
    "Regex",
    "Request",
    "Response",
    "RestMoxError",
    "VerificationError",
    "body",
    "header",
    "matches",
    "method",
    "query_param",
    "request_to",
    "with_bad_request",
    "with_exception",
    "with_server_error",
    "with_status",
    "with_success",
]
