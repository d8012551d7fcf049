"""
Proxy Module

The /api route between the intake forms and the two external collaborators:
the spreadsheet script endpoint (schools and applications) and the media
host (uploaded documents).

API Endpoints:
- GET /api?action=getSchools - List driving schools
- POST /api?action=addSchool - Register a driving school
- POST /api?action=submitApplication - Submit a license application
- POST /api?action=uploadFile - Upload a document (multipart or base64 JSON)

Behaviour:
- One inbound request, at most one outbound request
- Upstream status and body relayed verbatim
- No retries, no deduplication, no payload validation
"""

from .router import router
from .service import configure_upload_strategy

__all__ = ["router", "configure_upload_strategy"]
