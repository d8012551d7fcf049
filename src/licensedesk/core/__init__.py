"""
Core module - Configuration, logging, outbound HTTP, and media host.
"""

from licensedesk.core.config import Settings, get_settings, settings
from licensedesk.core.http import close_http_client, get_http_client, init_http_client
from licensedesk.core.logging_config import setup_logging
from licensedesk.core.media import configure_media_host, upload_base64

__all__ = [
    # Config
    "Settings",
    "settings",
    "get_settings",
    # Logging
    "setup_logging",
    # HTTP
    "get_http_client",
    "init_http_client",
    "close_http_client",
    # Media host
    "configure_media_host",
    "upload_base64",
]
