"""
Media Host Service using Cloudinary

Uploads base64-encoded documents straight to Cloudinary and returns the
stored asset's public URL.
"""

import asyncio
import logging
from typing import Any

import cloudinary
import cloudinary.uploader

from licensedesk.core.config import Settings, settings

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"
DEFAULT_FOLDER = "general"


def configure_media_host(config: Settings = settings) -> bool:
    """
    Configure the Cloudinary SDK from settings.

    Returns:
        True if all credentials are present and the SDK was configured
    """
    if not config.has_media_credentials:
        logger.info("Cloudinary credentials not set - direct uploads disabled")
        return False

    cloudinary.config(
        cloud_name=config.cloudinary_cloud_name,
        api_key=config.cloudinary_api_key,
        api_secret=config.cloudinary_api_secret,
        secure=True,
    )
    return True


def build_data_uri(base64_data: str, mime_type: str | None) -> str:
    """Wrap raw base64 content in a data URI the SDK accepts as a file."""
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{base64_data}"


def build_folder(institution_code: str | None, prefix: str | None = None) -> str:
    """Per-school folder, e.g. ``driving_school/ABC123``."""
    return f"{prefix or settings.media_folder_prefix}/{institution_code or DEFAULT_FOLDER}"


async def upload_base64(
    base64_data: str,
    mime_type: str | None,
    institution_code: str | None,
) -> dict[str, Any]:
    """
    Upload a base64 document to Cloudinary.

    Each call creates a new asset; nothing is deduplicated or overwritten.

    Args:
        base64_data: File content, base64 encoded, without the data URI prefix
        mime_type: Declared MIME type (defaults to image/png)
        institution_code: Owning driving school, used as the folder name

    Returns:
        The raw Cloudinary upload result (secure_url, format, resource_type, ...)

    Raises:
        Exception: Whatever the SDK raises; callers map it to an error response
    """
    # Run sync Cloudinary call in thread pool to avoid blocking event loop
    result = await asyncio.to_thread(
        cloudinary.uploader.upload,
        build_data_uri(base64_data, mime_type),
        folder=build_folder(institution_code),
        resource_type="auto",
    )
    logger.info(
        f"Uploaded to Cloudinary: folder={build_folder(institution_code)}, "
        f"format={result.get('format')}, resource_type={result.get('resource_type')}"
    )
    return result
