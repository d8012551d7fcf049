"""
Proxy Service Layer

Forwards form actions to the spreadsheet script endpoint and routes base64
uploads through the configured upload strategy.

This module implements:
1. Generic action forwarding:
   - GET forwards only the action name
   - JSON POST forwards the body, with a few fields mirrored into the query
   - Multipart POST repackages the file into a fresh multipart request
   - Upstream status and body are relayed verbatim

2. Upload strategy selection (once, at startup):
   - DirectMediaUpload when all media-host credentials are configured
   - ScriptRelayUpload otherwise, which forwards like any other action

Each inbound request makes at most one outbound call. Nothing is retried.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from licensedesk.core.config import Settings, settings
from licensedesk.core.media import configure_media_host, upload_base64
from licensedesk.modules.proxy.helpers import build_script_params, is_direct_upload_request
from licensedesk.modules.proxy.schemas import ErrorResponse, UploadFileResponse

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ProxyServiceError(Exception):
    """Base exception for proxy service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class InvalidBodyError(ProxyServiceError):
    """Raised when a request body cannot be parsed."""

    def __init__(self, message: str = "Invalid JSON body"):
        super().__init__(
            message=message,
            error_code="INVALID_BODY",
            status_code=400,
        )


class MediaUploadError(ProxyServiceError):
    """Raised when the media host rejects or fails an upload."""

    def __init__(self, detail: str):
        super().__init__(
            message=f"Upload failed: {detail}",
            error_code="MEDIA_UPLOAD_FAILED",
            status_code=500,
        )


class UpstreamUnavailableError(ProxyServiceError):
    """Raised when the script endpoint cannot be reached."""

    def __init__(self):
        super().__init__(
            message="Upstream request failed",
            error_code="UPSTREAM_UNAVAILABLE",
            status_code=502,
        )


class ScriptEndpointNotConfiguredError(ProxyServiceError):
    """Raised when APPS_SCRIPT_URL is not set."""

    def __init__(self):
        super().__init__(
            message="Script endpoint is not configured",
            error_code="NOT_CONFIGURED",
            status_code=500,
        )


@dataclass
class ProxyReply:
    """A response ready to be relayed to the caller as JSON text."""

    status_code: int
    body: bytes

    @classmethod
    def from_upstream(cls, response: httpx.Response) -> "ProxyReply":
        return cls(status_code=response.status_code, body=response.content)

    @classmethod
    def from_model(cls, model: UploadFileResponse | ErrorResponse, status_code: int = 200) -> "ProxyReply":
        return cls(status_code=status_code, body=json.dumps(model.to_wire()).encode())


def _script_url() -> str:
    if not settings.apps_script_url:
        raise ScriptEndpointNotConfiguredError()
    return settings.apps_script_url


async def _send(client: httpx.AsyncClient, method: str, action: str, **kwargs: Any) -> ProxyReply:
    """Make the single outbound call for a request and wrap transport failures."""
    try:
        response = await client.request(method, _script_url(), **kwargs)
    except httpx.HTTPError as e:
        logger.warning(f"Script endpoint unreachable: action={action}, error={type(e).__name__}")
        raise UpstreamUnavailableError() from e

    logger.info(f"Forwarded {method} action={action} -> {response.status_code}")
    return ProxyReply.from_upstream(response)


async def forward_get(client: httpx.AsyncClient, action: str) -> ProxyReply:
    """Forward a GET; only the action is passed along."""
    return await _send(client, "GET", action, params={"action": action})


async def forward_json(client: httpx.AsyncClient, action: str, body: Any) -> ProxyReply:
    """
    Forward a JSON body to the script endpoint.

    The body is re-serialized as-is; institutionCode, type and side are also
    mirrored into the query string when present.
    """
    fields = body if isinstance(body, dict) else None
    return await _send(
        client,
        "POST",
        action,
        params=build_script_params(action, fields),
        content=json.dumps(body).encode(),
        headers=JSON_HEADERS,
    )


async def forward_multipart(
    client: httpx.AsyncClient,
    action: str,
    file_name: str,
    file_content: bytes,
    file_content_type: str | None,
    fields: dict[str, str],
) -> ProxyReply:
    """
    Repackage a multipart upload for the script endpoint.

    Only the file travels in the new multipart body; type, side and
    institutionCode go into the query string.
    """
    files = {"file": (file_name, file_content, file_content_type or "application/octet-stream")}
    return await _send(
        client,
        "POST",
        action,
        params=build_script_params(action, fields),
        files=files,
    )


def parse_json_body(raw: bytes) -> Any:
    """
    Parse a raw request body as JSON.

    Raises:
        InvalidBodyError: If the body is not valid JSON
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidBodyError() from e


# ============================================
# Upload strategies
# ============================================


class DirectMediaUpload:
    """Uploads base64 files straight to the media host."""

    name = "direct_media"

    async def upload(self, client: httpx.AsyncClient, action: str, body: dict[str, Any]) -> ProxyReply:
        try:
            result = await upload_base64(
                base64_data=body["file"],
                mime_type=body.get("mimeType"),
                institution_code=body.get("institutionCode"),
            )
        except Exception as e:
            logger.error(f"Cloudinary upload error: {e}")
            raise MediaUploadError(str(e)) from e

        url = result.get("secure_url") if isinstance(result, dict) else None
        if not url:
            logger.error("Cloudinary upload returned no secure_url")
            raise MediaUploadError("No URL returned")

        return ProxyReply.from_model(
            UploadFileResponse(
                url=url,
                format=result.get("format"),
                resource_type=result.get("resource_type"),
            )
        )


class ScriptRelayUpload:
    """Hands base64 uploads to the script endpoint like any other action."""

    name = "script_relay"

    async def upload(self, client: httpx.AsyncClient, action: str, body: dict[str, Any]) -> ProxyReply:
        return await forward_json(client, action, body)


UploadStrategy = DirectMediaUpload | ScriptRelayUpload

_upload_strategy: UploadStrategy | None = None


def select_upload_strategy(config: Settings = settings) -> UploadStrategy:
    """Pick the upload strategy from the configured capabilities."""
    if configure_media_host(config):
        return DirectMediaUpload()
    return ScriptRelayUpload()


def configure_upload_strategy(config: Settings = settings) -> UploadStrategy:
    """
    Select and install the upload strategy.

    Call this on application startup.
    """
    global _upload_strategy
    _upload_strategy = select_upload_strategy(config)
    logger.info(f"Upload strategy: {_upload_strategy.name}")
    return _upload_strategy


def get_upload_strategy() -> UploadStrategy:
    """FastAPI dependency returning the installed upload strategy."""
    if _upload_strategy is None:
        return configure_upload_strategy()
    return _upload_strategy


async def handle_json_post(
    client: httpx.AsyncClient,
    strategy: UploadStrategy,
    action: str,
    raw_body: bytes,
) -> ProxyReply:
    """
    Route a JSON POST.

    Base64 uploads go to the upload strategy; everything else is forwarded
    to the script endpoint.
    """
    body = parse_json_body(raw_body)

    if is_direct_upload_request(action, body):
        return await strategy.upload(client, action, body)

    return await forward_json(client, action, body)
