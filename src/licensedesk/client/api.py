"""
Intake Client

Async client for the /api proxy route, used by the public application form
and the admin page. Normalizes the proxy's responses into return values or
IntakeClientError subclasses.

Response convention:
- ``{"success": true, ...}`` on success
- ``{"error": <message>}`` on failure, the message is surfaced verbatim
- A body starting with ``<`` is an HTML error page and is rejected before
  JSON parsing
"""

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from licensedesk.client.errors import (
    ApiError,
    FormValidationError,
    InvalidResponseError,
    RequestFailedError,
)
from licensedesk.core.config import settings
from licensedesk.modules.applications import DrivingLicenseApplication
from licensedesk.modules.documents import (
    DocumentType,
    LocalFile,
    Side,
    UploadRejectedError,
    apply_transformation,
    check_file,
)
from licensedesk.modules.documents.catalog import is_image
from licensedesk.modules.proxy.helpers import UPLOAD_ACTION
from licensedesk.modules.proxy.schemas import UploadFileRequest
from licensedesk.modules.schools import DrivingSchool, SchoolCreate

logger = logging.getLogger(__name__)

PROXY_PATH = "/api"

GET_SCHOOLS_ACTION = "getSchools"
ADD_SCHOOL_ACTION = "addSchool"
SUBMIT_APPLICATION_ACTION = "submitApplication"

RESPONSE_PREVIEW_LENGTH = 100


@dataclass(frozen=True)
class UploadResult:
    """A stored document: its (possibly transformed) URL and declared type."""

    url: str
    mime_type: str
    format: str | None = None
    resource_type: str | None = None


def parse_response_text(text: str) -> Any:
    """
    Parse a proxy response body.

    Raises:
        InvalidResponseError: If the body is an HTML page or not valid JSON
    """
    if text.lstrip().startswith("<"):
        raise InvalidResponseError("Server returned HTML instead of JSON")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidResponseError(
            "Server returned invalid JSON: " + text[:RESPONSE_PREVIEW_LENGTH]
        ) from e


def extract_error(payload: Any) -> str | None:
    """The error message of an ``{"error": ...}`` payload, if any."""
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return None


def _is_success(payload: Any) -> bool:
    return isinstance(payload, dict) and bool(payload.get("success"))


class IntakeClient:
    """
    Client for the proxy route.

    Each call issues exactly one request. Nothing is retried.

    Usage:
        async with IntakeClient() as client:
            schools = await client.fetch_schools()
    """

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ):
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=base_url or settings.proxy_base_url,
            timeout=httpx.Timeout(settings.upstream_timeout_seconds),
        )

    async def __aenter__(self) -> "IntakeClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _request(self, method: str, action: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, PROXY_PATH, params={"action": action}, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"Request to proxy failed: action={action}, error={type(e).__name__}")
            raise RequestFailedError("Network request failed") from e

    async def fetch_schools(self) -> list[DrivingSchool]:
        """
        List the registered driving schools.

        Raises:
            RequestFailedError: On a non-2xx response or transport failure
            ApiError: If the payload is an error object
            InvalidResponseError: If the payload is not a list of schools
        """
        response = await self._request("GET", GET_SCHOOLS_ACTION)
        if not response.is_success:
            raise RequestFailedError("Failed to fetch schools")

        payload = parse_response_text(response.text)
        error = extract_error(payload)
        if error:
            raise ApiError(error)
        if not isinstance(payload, list):
            raise InvalidResponseError("Unexpected school list format")

        try:
            return [DrivingSchool.model_validate(item) for item in payload]
        except ValidationError as e:
            raise InvalidResponseError("Unexpected school list format") from e

    async def add_school(self, school: SchoolCreate) -> dict[str, Any]:
        """
        Register a driving school.

        Raises:
            ApiError: With the backend's message (e.g. "Duplicate code")
        """
        response = await self._request("POST", ADD_SCHOOL_ACTION, json=school.to_wire())

        payload = parse_response_text(response.text)
        error = extract_error(payload)
        if error:
            raise ApiError(error)
        if not _is_success(payload):
            raise ApiError("Failed to add school")

        logger.info(f"School registered: code={school.code}")
        return payload

    async def submit_application(self, application: DrivingLicenseApplication) -> dict[str, Any]:
        """
        Submit a completed application in one request.

        Raises:
            ApiError: With the backend's message, or a generic one
        """
        response = await self._request(
            "POST", SUBMIT_APPLICATION_ACTION, json=application.to_wire()
        )

        payload = parse_response_text(response.text)
        error = extract_error(payload)
        if not response.is_success:
            raise ApiError(error or "Submission failed")
        if error:
            raise ApiError(error)
        if not _is_success(payload):
            raise ApiError("Application submission failed")

        logger.info(f"Application submitted: institution={application.institution_code}")
        return payload

    async def upload_file(
        self,
        file: LocalFile,
        document_type: DocumentType,
        institution_code: str,
        side: Side | None = None,
    ) -> UploadResult:
        """
        Upload one document as base64 JSON.

        The size/type gate runs first; a rejected file never reaches the
        network. Image URLs from the media host get the slot's transformation.

        Raises:
            FormValidationError: No school selected, or the file failed the gate
            ApiError: The proxy reported an error or returned no URL
        """
        if not institution_code:
            raise FormValidationError("Please select driving school first")

        try:
            check_file(document_type, file)
        except UploadRejectedError as e:
            raise FormValidationError(e.message) from e
        if not file.content:
            raise FormValidationError("File is empty")

        body = UploadFileRequest(
            file=base64.b64encode(file.content).decode("ascii"),
            file_name=file.name,
            mime_type=file.mime_type,
            type=document_type,
            side=side,
            institution_code=institution_code,
        ).to_wire()

        response = await self._request("POST", UPLOAD_ACTION, json=body)

        payload = parse_response_text(response.text)
        error = extract_error(payload)
        if error:
            raise ApiError(error)
        if not isinstance(payload, dict) or not payload.get("url"):
            raise ApiError("Upload failed: No URL returned")

        url = str(payload["url"])
        if is_image(file.mime_type):
            url = apply_transformation(url, document_type, side)

        return UploadResult(
            url=url,
            mime_type=file.mime_type,
            format=payload.get("format"),
            resource_type=payload.get("resourceType") or payload.get("resource_type"),
        )
