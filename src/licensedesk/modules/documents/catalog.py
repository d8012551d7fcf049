"""
Document Catalog

The upload slots an application carries, with their labels, size ceilings,
and accepted formats.
"""

import enum
from dataclasses import dataclass

KB = 1024
MB = 1024 * KB

# Images may exceed a slot's own ceiling; the media host resizes them.
IMAGE_MAX_SIZE = 5 * MB

PDF_MIME_TYPE = "application/pdf"


class DocumentType(str, enum.Enum):
    """Logical document slot. Values are the wire names the backend expects."""

    SIGNATURE = "signature"
    PHOTO = "photo"
    CERTIFICATE = "sslc"
    LICENSE = "license"
    AADHAR = "aadhar"


class Side(str, enum.Enum):
    """Side of a two-sided document."""

    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class SlotConfig:
    """Upload constraints for one document slot."""

    label: str
    max_size: int
    accepts_pdf: bool
    size_label: str

    @property
    def accept(self) -> str:
        """Value for an HTML ``accept`` attribute."""
        return ".pdf,image/*" if self.accepts_pdf else "image/*"

    def display_label(self, side: Side | None = None) -> str:
        if side is None:
            return self.label
        return f"{self.label} ({side.value.capitalize()})"


SLOT_CONFIGS: dict[DocumentType, SlotConfig] = {
    DocumentType.SIGNATURE: SlotConfig(
        label="Signature",
        max_size=20 * KB,
        accepts_pdf=False,
        size_label="Max 20KB • JPG, PNG",
    ),
    DocumentType.PHOTO: SlotConfig(
        label="Photo",
        max_size=20 * KB,
        accepts_pdf=False,
        size_label="Max 20KB • JPG, PNG",
    ),
    DocumentType.CERTIFICATE: SlotConfig(
        label="SSLC / Birth Certificate",
        max_size=500 * KB,
        accepts_pdf=True,
        size_label="Max 500KB • PDF, JPG, PNG",
    ),
    DocumentType.LICENSE: SlotConfig(
        label="Driving License",
        max_size=500 * KB,
        accepts_pdf=True,
        size_label="Max 500KB (PDF) • 5MB (Image)",
    ),
    DocumentType.AADHAR: SlotConfig(
        label="Aadhar Card",
        max_size=500 * KB,
        accepts_pdf=True,
        size_label="Max 500KB (PDF) • 5MB (Image)",
    ),
}


def get_slot_config(document_type: DocumentType) -> SlotConfig:
    """Get the upload constraints for a document slot."""
    return SLOT_CONFIGS[DocumentType(document_type)]


def is_image(mime_type: str | None) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")
