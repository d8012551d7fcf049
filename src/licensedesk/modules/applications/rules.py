"""
Submission Rules

Which fields must be filled before an application may be submitted. The
required document set depends on ``has_license``: an existing license
replaces the SSLC/birth certificate.

Shared by the schema validator and the client-side form so both report the
same message for the same gap.
"""

from typing import Any

MSG_SELECT_SCHOOL = "Please select driving school"
MSG_REQUIRED_FIELDS = "Please fill all required fields"
MSG_BASE_DOCUMENTS = "Please upload Signature, Photo, and Aadhar documents"
MSG_LICENSE = "Please upload existing license"
MSG_CERTIFICATE = "Please upload SSLC/Birth Certificate"

REQUIRED_FIELDS = ("name", "father_husband_name", "date_of_birth")
ALWAYS_REQUIRED_DOCUMENTS = ("signature_url", "photo_url", "aadhar_url")


def required_document_fields(has_license: bool) -> tuple[str, ...]:
    """Document URL fields that must be populated for a submission."""
    if has_license:
        return ALWAYS_REQUIRED_DOCUMENTS + ("license_url",)
    return ALWAYS_REQUIRED_DOCUMENTS + ("sslc_url",)


def first_missing_requirement(data: Any) -> str | None:
    """
    Check an application (or in-progress form) against the submission rules.

    Checks run in a fixed order and stop at the first gap.

    Args:
        data: Any object exposing the application's snake_case attributes

    Returns:
        The user-facing message for the first unmet rule, or None if submittable
    """
    if not data.institution_code:
        return MSG_SELECT_SCHOOL

    if not all(getattr(data, field) for field in REQUIRED_FIELDS):
        return MSG_REQUIRED_FIELDS

    missing = [
        field for field in required_document_fields(data.has_license) if not getattr(data, field)
    ]
    if not missing:
        return None
    if missing[0] in ALWAYS_REQUIRED_DOCUMENTS:
        return MSG_BASE_DOCUMENTS
    return MSG_LICENSE if data.has_license else MSG_CERTIFICATE


def shows_back_side(front_url: str | None, front_mime_type: str | None) -> bool:
    """
    Whether a two-sided document needs a separate back upload.

    Only an image front needs a back; a PDF already holds both sides.
    """
    return bool(front_url) and bool(front_mime_type) and front_mime_type.startswith("image/")
