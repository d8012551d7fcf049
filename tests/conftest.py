"""
Shared fixtures: a scriptable fake HTTP peer and sample files.
"""

from collections.abc import Callable

import httpx
import pytest

from licensedesk.modules.documents import LocalFile

Responder = Callable[[httpx.Request], httpx.Response]


class FakePeer:
    """
    Stands in for a remote HTTP service.

    Records every request and answers with ``responder``, which tests swap
    out as needed. The default answers ``{"success": true}``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Responder = lambda request: httpx.Response(200, json={"success": True})

    async def handler(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        return self.responder(request)

    def respond_with(self, status_code: int = 200, **kwargs) -> None:
        """Answer every following request with a fixed response."""
        self.responder = lambda request: httpx.Response(status_code, **kwargs)

    def fail_with(self, exc: Exception) -> None:
        """Raise a transport error for every following request."""

        def raise_error(request: httpx.Request) -> httpx.Response:
            raise exc

        self.responder = raise_error

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_peer():
    """A fake remote service with an empty request log."""
    return FakePeer()


@pytest.fixture
def small_png():
    """A 1 KB PNG, small enough for every slot."""
    return LocalFile(name="photo.png", mime_type="image/png", content=b"\x89PNG" + b"\x00" * 1020)


@pytest.fixture
def small_pdf():
    """A 10 KB PDF."""
    return LocalFile(name="doc.pdf", mime_type="application/pdf", content=b"%PDF-1.4" + b"0" * 10232)
