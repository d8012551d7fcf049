"""
Outbound HTTP Client

Shared async httpx client used by the proxy to reach the script endpoint.
"""

import httpx

from licensedesk.core.config import settings

# HTTP client instance
http_client: httpx.AsyncClient | None = None


async def init_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """
    Initialize the shared HTTP client.

    Call this on application startup. The timeout comes from
    UPSTREAM_TIMEOUT_SECONDS; when unset, requests never time out.
    """
    global http_client
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.upstream_timeout_seconds),
        follow_redirects=True,
        transport=transport,
    )
    return http_client


async def get_http_client() -> httpx.AsyncClient:
    """
    Get the shared HTTP client instance.

    Initializes lazily if startup did not run (e.g. TestClient without lifespan).

    Usage in FastAPI:
        @router.get("/thing")
        async def thing(client: httpx.AsyncClient = Depends(get_http_client)):
            ...
    """
    if http_client is None:
        return await init_http_client()
    return http_client


async def close_http_client() -> None:
    """Close the shared HTTP client."""
    global http_client
    if http_client:
        await http_client.aclose()
        http_client = None
