"""
Documents Module

Document slots carried by a driving license application (signature, photo,
SSLC/birth certificate, license, Aadhar), the client-side upload gate, and
the media-host URL transformations applied after an image upload.
"""

from .catalog import DocumentType, Side, SlotConfig, get_slot_config
from .transformations import apply_transformation, get_transformation
from .validation import LocalFile, UploadRejectedError, check_file, max_size_for

__all__ = [
    "DocumentType",
    "Side",
    "SlotConfig",
    "get_slot_config",
    "LocalFile",
    "UploadRejectedError",
    "check_file",
    "max_size_for",
    "apply_transformation",
    "get_transformation",
]
