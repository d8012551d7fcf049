"""
Proxy Shared Helpers

Query-string construction for requests to the script endpoint.
"""

from collections.abc import Mapping
from typing import Any

UPLOAD_ACTION = "uploadFile"

# Fields the script endpoint also reads from the query string. They are
# mirrored there in addition to being sent in the body.
MIRRORED_FIELDS = ("institutionCode", "type", "side")


def build_script_params(action: str, fields: Mapping[str, Any] | None = None) -> dict[str, str]:
    """
    Query parameters for a forwarded request.

    ``action`` is always set; each mirrored field is copied only when present
    and truthy.

    Args:
        action: The proxy action name
        fields: Body or form fields to mirror from

    Returns:
        Query parameters for the script endpoint
    """
    params = {"action": action}
    for field in MIRRORED_FIELDS:
        value = fields.get(field) if fields else None
        if value:
            params[field] = str(value)
    return params


def is_direct_upload_request(action: str, body: Any) -> bool:
    """
    Whether a JSON request is a base64 upload the upload strategy handles.

    Needs the upload action plus both the file content and the owning school.
    """
    return (
        action == UPLOAD_ACTION
        and isinstance(body, dict)
        and bool(body.get("file"))
        and bool(body.get("institutionCode"))
    )


def is_multipart(content_type: str | None) -> bool:
    return "multipart/form-data" in (content_type or "")
