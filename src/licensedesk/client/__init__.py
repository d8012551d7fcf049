"""
Intake Client Package

Everything the intake UI runs on the user's side of the proxy:
- IntakeClient - calls the /api route and normalizes its responses
- ApplicationForm, SchoolRegistrationForm, UploadSlot, SchoolDirectory -
  per-page form state with explicit setters and async submit handlers
- SessionCache - same-session cache for the school list
- AdminGate, AdminConsole - the admin page (UI gate only, not authentication)
"""

from .admin import AdminConsole, AdminGate
from .api import IntakeClient, UploadResult, parse_response_text
from .cache import SessionCache
from .errors import (
    ApiError,
    FormValidationError,
    IntakeClientError,
    InvalidResponseError,
    RequestFailedError,
)
from .forms import (
    SCHOOL_CACHE_KEY,
    ApplicationForm,
    SchoolDirectory,
    SchoolRegistrationForm,
    SubmissionOutcome,
    UploadSlot,
)

__all__ = [
    "IntakeClient",
    "UploadResult",
    "parse_response_text",
    "SessionCache",
    "SCHOOL_CACHE_KEY",
    "ApplicationForm",
    "SchoolRegistrationForm",
    "SchoolDirectory",
    "SubmissionOutcome",
    "UploadSlot",
    "AdminGate",
    "AdminConsole",
    "IntakeClientError",
    "FormValidationError",
    "InvalidResponseError",
    "ApiError",
    "RequestFailedError",
]
