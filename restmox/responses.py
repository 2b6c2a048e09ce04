"""Response creators attached to expectations via ``and_respond``."""

from __future__ import annotations

import typing as t

from .http import Response

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .http import Request


class ResponseCreator(t.Protocol):
    """Callable producing the response for a matched request."""

    def __call__(self, request: Request) -> Response:
        """Return the response for *request*."""
        ...


class _StaticResponse:
    def __init__(
        self,
        status: int,
        body: str = "",
        headers: t.Mapping[str, str] | None = None,
    ) -> None:
        self.status = status
        self.body = body
        self.headers = dict(headers or {})

    def __call__(self, request: Request) -> Response:
        # A fresh Response per call so callers may mutate what they receive.
        return Response(status=self.status, body=self.body, headers=dict(self.headers))

    def __repr__(self) -> str:
        return f"with_status({self.status}, body={self.body!r})"


class _RaiseError:
    def __init__(self, error: BaseException) -> None:
        self.error = error

    def __call__(self, request: Request) -> Response:
        raise self.error

    def __repr__(self) -> str:
        return f"with_exception({self.error!r})"


def _headers(
    content_type: str | None, headers: t.Mapping[str, str] | None
) -> dict[str, str]:
    merged = dict(headers or {})
    if content_type is not None:
        merged["Content-Type"] = content_type
    return merged


def with_status(
    status: int,
    body: str = "",
    *,
    content_type: str | None = None,
    headers: t.Mapping[str, str] | None = None,
) -> ResponseCreator:
    """Respond with *status* and an optional body."""
    return _StaticResponse(status, body, _headers(content_type, headers))


def with_success(
    body: str = "",
    content_type: str | None = None,
    *,
    headers: t.Mapping[str, str] | None = None,
) -> ResponseCreator:
    """Respond with ``200 OK``."""
    return with_status(200, body, content_type=content_type, headers=headers)


def with_bad_request() -> ResponseCreator:
    """Respond with ``400 Bad Request``."""
    return with_status(400)


def with_server_error() -> ResponseCreator:
    """Respond with ``500 Internal Server Error``."""
    return with_status(500)


def with_exception(error: BaseException) -> ResponseCreator:
    """Raise *error* instead of responding, simulating an I/O failure."""
    return _RaiseError(error)


__all__ = [
    "ResponseCreator",
    "with_bad_request",
    "with_exception",
    "with_server_error",
    "with_status",
    "with_success",
]
