"""
Upload Gate

Size and type checks applied to a chosen file before it is encoded and sent.
The gate only saves wasted uploads; the proxy forwards whatever it receives.
"""

from dataclasses import dataclass

from licensedesk.modules.documents.catalog import (
    IMAGE_MAX_SIZE,
    KB,
    PDF_MIME_TYPE,
    DocumentType,
    get_slot_config,
    is_image,
)


class UploadRejectedError(ValueError):
    """Raised when a file fails the client-side size/type gate."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class LocalFile:
    """A file picked by the user: name, declared MIME type, and bytes."""

    name: str
    mime_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def max_size_for(document_type: DocumentType, mime_type: str | None) -> int:
    """
    Effective size ceiling for a file in a slot.

    Images get the relaxed image ceiling; everything else (PDF) keeps the
    slot's own limit.
    """
    if is_image(mime_type):
        return IMAGE_MAX_SIZE
    return get_slot_config(document_type).max_size


def is_accepted_type(document_type: DocumentType, mime_type: str | None) -> bool:
    if is_image(mime_type):
        return True
    return mime_type == PDF_MIME_TYPE and get_slot_config(document_type).accepts_pdf


def check_file(document_type: DocumentType, file: LocalFile) -> None:
    """
    Run the size/type gate for one file.

    Size is checked before type.

    Raises:
        UploadRejectedError: If the file is too large or of an unaccepted type
    """
    limit = max_size_for(document_type, file.mime_type)
    if file.size > limit:
        raise UploadRejectedError(f"File size must be less than {round(limit / KB)}KB")

    if not is_accepted_type(document_type, file.mime_type):
        raise UploadRejectedError("Invalid file type")
