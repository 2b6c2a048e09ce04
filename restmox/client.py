"""Client-side adapter routing simulated requests into a mock server."""

from __future__ import annotations

import typing as t
from urllib.parse import urlencode

from .http import Request, Response


class Interceptor(t.Protocol):
    """Anything able to answer a :class:`Request`, e.g. :class:`MockServer`."""

    def intercept(self, request: Request) -> Response:
        """Return the response for *request*."""
        ...


class MockClient:
    """Minimal HTTP-style client that never touches the network.

    Every call builds a :class:`Request` and hands it to the injected
    :class:`Interceptor`. Errors raised while matching propagate unchanged.
    """

    def __init__(self, server: Interceptor, base_url: str = "") -> None:
        self._server = server
        self.base_url = base_url.rstrip("/")

    def request(
        self,
        method: str,
        url: str,
        *,
        params: t.Mapping[str, str] | None = None,
        headers: t.Mapping[str, str] | None = None,
        body: str = "",
    ) -> Response:
        """Send *method* to *url* through the interceptor."""
        full_url = f"{self.base_url}{url}" if url.startswith("/") else url
        if params:
            separator = "&" if "?" in full_url else "?"
            full_url = f"{full_url}{separator}{urlencode(params)}"
        request = Request(method, full_url, headers=dict(headers or {}), body=body)
        return self._server.intercept(request)

    def get(self, url: str, **kwargs: t.Any) -> Response:
        """Send a ``GET`` request."""
        return self.request("GET", url, **kwargs)

    def head(self, url: str, **kwargs: t.Any) -> Response:
        """Send a ``HEAD`` request."""
        return self.request("HEAD", url, **kwargs)

    def post(self, url: str, **kwargs: t.Any) -> Response:
        """Send a ``POST`` request."""
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs: t.Any) -> Response:
        """Send a ``PUT`` request."""
        return self.request("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs: t.Any) -> Response:
        """Send a ``PATCH`` request."""
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: t.Any) -> Response:
        """Send a ``DELETE`` request."""
        return self.request("DELETE", url, **kwargs)


__all__ = ["Interceptor", "MockClient"]
