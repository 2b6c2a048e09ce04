"""Request and response value types exchanged with :class:`MockServer`."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as t
from urllib.parse import parse_qs, urlsplit

_REPR_FIELD_LIMIT: t.Final[int] = 256
_SENSITIVE_HEADER_RE: t.Final[re.Pattern[str]] = re.compile(
    r"(?i)(^|[_-])(AUTHORIZATION|COOKIE|KEY|TOKEN|SECRET|PASSWORD|CREDENTIALS?)"
    r"(?=[_-]|\d|$)"
)


def _shorten(text: str, limit: int = _REPR_FIELD_LIMIT) -> str:
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    return f"{text[: limit - 1]}…"


def _normalize_headers(headers: t.Mapping[str, str] | None) -> dict[str, str]:
    """Return *headers* keyed by lower-cased name."""
    if not headers:
        return {}
    return {str(key).lower(): str(value) for key, value in headers.items()}


def _redact_headers(headers: t.Mapping[str, str]) -> dict[str, str]:
    return {
        key: "<redacted>" if _SENSITIVE_HEADER_RE.search(key) else value
        for key, value in headers.items()
    }


@dc.dataclass(slots=True)
class Request:
    """A simulated HTTP request handed to :meth:`MockServer.intercept`."""

    method: str
    url: str
    headers: dict[str, str] = dc.field(default_factory=dict)
    body: str = ""

    def __post_init__(self) -> None:
        """Normalise the method name and header keys."""
        self.method = self.method.upper()
        self.headers = _normalize_headers(self.headers)

    @property
    def path(self) -> str:
        """Return the path component of :attr:`url`."""
        return urlsplit(self.url).path

    @property
    def query(self) -> dict[str, list[str]]:
        """Return the parsed query string."""
        return parse_qs(urlsplit(self.url).query, keep_blank_values=True)

    def header(self, name: str) -> str | None:
        """Return the header *name* (case-insensitive) or ``None``."""
        return self.headers.get(name.lower())

    def __str__(self) -> str:
        """Return the request line, e.g. ``GET /number``."""
        return f"{self.method} {self.url}"

    def __repr__(self) -> str:
        """Return a debug representation with sensitive headers redacted."""
        data = {
            "method": self.method,
            "url": self.url,
            "headers": _redact_headers(self.headers),
            "body": _shorten(self.body),
        }
        return f"Request({data!r})"


@dc.dataclass(slots=True)
class Response:
    """Response returned to the caller once an expectation matched."""

    status: int = 200
    body: str = ""
    headers: dict[str, str] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalise header keys."""
        self.headers = _normalize_headers(self.headers)

    @property
    def ok(self) -> bool:
        """Return ``True`` for 2xx status codes."""
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        """Return the response body."""
        return self.body

    @property
    def content_type(self) -> str | None:
        """Return the ``Content-Type`` header if present."""
        return self.headers.get("content-type")


__all__ = ["Request", "Response"]
