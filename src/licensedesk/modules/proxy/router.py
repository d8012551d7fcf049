"""
Proxy Router

The single /api route that mediates all client traffic. The ``action``
query parameter names the operation (getSchools, addSchool,
submitApplication, uploadFile, ...); the route does not interpret it
beyond picking the upload path.

Endpoints:
- GET /api?action=<name> - Forward to the script endpoint
- POST /api?action=<name> - Multipart upload, base64 upload, or JSON action

Responses are JSON text. Errors raised here use ``{"error": <message>}``,
the same shape the script endpoint uses.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from licensedesk.core.http import get_http_client
from licensedesk.modules.proxy import service
from licensedesk.modules.proxy.helpers import MIRRORED_FIELDS, is_multipart
from licensedesk.modules.proxy.service import (
    InvalidBodyError,
    ProxyReply,
    ProxyServiceError,
    UploadStrategy,
    get_upload_strategy,
)

logger = logging.getLogger(__name__)

router = APIRouter()

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _to_response(reply: ProxyReply) -> Response:
    return Response(
        content=reply.body,
        status_code=reply.status_code,
        media_type="application/json",
    )


def _error_response(e: ProxyServiceError) -> JSONResponse:
    return JSONResponse(status_code=e.status_code, content={"error": e.message})


def _unexpected_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": UNEXPECTED_ERROR_MESSAGE},
    )


@router.get(
    "",
    summary="Forward Action (GET)",
    description="""
Forward a read action (e.g. `getSchools`) to the script endpoint.

Only the `action` parameter is forwarded. The upstream body and status code
are relayed verbatim as JSON text.
""",
)
async def proxy_get(
    action: str = Query("", description="Action name understood by the script endpoint"),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    """
    Forward a GET action.

    Args:
        action: Action name
        client: Shared outbound HTTP client (injected)

    Returns:
        The upstream response, relayed
    """
    try:
        return _to_response(await service.forward_get(client, action))
    except ProxyServiceError as e:
        logger.error(f"Proxy GET failed: action={action}, error={e.error_code}")
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error forwarding GET action={action}: {e}")
        return _unexpected_error_response()


@router.post(
    "",
    summary="Forward Action (POST)",
    description="""
Forward a write action or upload a document.

**Routing:**
- `multipart/form-data`: the `file` part is repackaged for the script
  endpoint; `type`, `side` and `institutionCode` go into its query string.
- JSON with `action=uploadFile`, `file` and `institutionCode`: handled by the
  upload strategy chosen at startup (direct media-host upload when
  credentials are configured, otherwise relayed to the script endpoint).
- Any other JSON: forwarded to the script endpoint with `institutionCode`,
  `type` and `side` mirrored into the query string.

A direct upload answers `{success, url, format, resourceType}`.
""",
    responses={
        400: {
            "description": "Body could not be parsed",
            "content": {"application/json": {"example": {"error": "Invalid JSON body"}}},
        },
        500: {
            "description": "Media host upload failed",
            "content": {
                "application/json": {"example": {"error": "Upload failed: Invalid image file"}}
            },
        },
        502: {
            "description": "Script endpoint unreachable",
            "content": {"application/json": {"example": {"error": "Upstream request failed"}}},
        },
    },
)
async def proxy_post(
    request: Request,
    action: str = Query("", description="Action name understood by the script endpoint"),
    client: httpx.AsyncClient = Depends(get_http_client),
    strategy: UploadStrategy = Depends(get_upload_strategy),
) -> Response:
    """
    Forward a POST action.

    Args:
        request: Incoming request (body read raw to keep it verbatim)
        action: Action name
        client: Shared outbound HTTP client (injected)
        strategy: Upload strategy selected at startup (injected)

    Returns:
        The upstream response relayed, or the direct upload result
    """
    try:
        if is_multipart(request.headers.get("content-type")):
            reply = await _forward_multipart(request, client, action)
        else:
            reply = await service.handle_json_post(client, strategy, action, await request.body())
        return _to_response(reply)

    except ProxyServiceError as e:
        logger.error(f"Proxy POST failed: action={action}, error={e.error_code}")
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error forwarding POST action={action}: {e}")
        return _unexpected_error_response()


async def _forward_multipart(
    request: Request,
    client: httpx.AsyncClient,
    action: str,
) -> ProxyReply:
    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        raise InvalidBodyError("Missing file")

    fields = {
        field: value
        for field in MIRRORED_FIELDS
        if isinstance(value := form.get(field), str) and value
    }
    return await service.forward_multipart(
        client,
        action,
        file_name=upload.filename or "upload",
        file_content=await upload.read(),
        file_content_type=upload.content_type,
        fields=fields,
    )
