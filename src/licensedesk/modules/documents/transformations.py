"""
Media Transformations

Cloudinary serves derived images when a transformation segment is placed
right after ``/upload/`` in the asset URL. Each document slot gets its own
crop/size preset.
"""

from licensedesk.modules.documents.catalog import DocumentType, Side

MEDIA_HOST_MARKER = "cloudinary.com"
UPLOAD_SEGMENT = "/upload/"

DEFAULT_TRANSFORMATION = "q_auto,f_auto"
ID_CARD_TRANSFORMATION = "c_limit,w_1000,h_700,q_auto:good,f_auto"

TRANSFORMATIONS: dict[str, str] = {
    DocumentType.SIGNATURE.value: "c_fill,w_300,h_100,q_auto,f_auto",
    DocumentType.PHOTO.value: "c_fill,w_400,h_500,q_auto,f_auto,g_face",
    DocumentType.CERTIFICATE.value: "c_limit,w_1200,h_1600,q_auto:good,f_auto",
    DocumentType.LICENSE.value: ID_CARD_TRANSFORMATION,
    DocumentType.AADHAR.value: ID_CARD_TRANSFORMATION,
}


def get_transformation(document_type: DocumentType | str, side: Side | None = None) -> str:
    """Transformation preset for a slot. Front and back share a preset."""
    key = document_type.value if isinstance(document_type, DocumentType) else document_type
    return TRANSFORMATIONS.get(key, DEFAULT_TRANSFORMATION)


def apply_transformation(
    url: str,
    document_type: DocumentType | str,
    side: Side | None = None,
) -> str:
    """
    Insert the slot's transformation into a media-host URL.

    URLs that are not media-host URLs, or that do not contain exactly one
    ``/upload/`` segment, are returned unchanged.
    """
    if not url or MEDIA_HOST_MARKER not in url:
        return url

    parts = url.split(UPLOAD_SEGMENT)
    if len(parts) != 2:
        return url

    return f"{parts[0]}{UPLOAD_SEGMENT}{get_transformation(document_type, side)}/{parts[1]}"
