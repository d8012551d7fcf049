"""
Proxy Schemas

Bodies exchanged with the /api route. The route forwards most payloads
untouched, so only the upload request and the route's own responses are
modelled here.
"""

from pydantic import Field

from licensedesk.modules.documents import DocumentType, Side
from licensedesk.modules.shared import CamelModel


class UploadFileRequest(CamelModel):
    """JSON body for action=uploadFile (base64 form)."""

    file: str = Field(..., min_length=1, description="Base64 content without data URI prefix")
    file_name: str = ""
    mime_type: str | None = None
    type: DocumentType
    side: Side | None = None
    institution_code: str = Field(..., min_length=1)


class UploadFileResponse(CamelModel):
    """Response after a direct upload to the media host."""

    success: bool = True
    url: str
    format: str | None = None
    resource_type: str | None = None


class ErrorResponse(CamelModel):
    """Error body shared by the proxy and its collaborators."""

    error: str
