"""
Logging Configuration

Configures the root logger once at startup. Modules log through
``logging.getLogger(__name__)``.
"""

import logging

from licensedesk.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (or an explicit level)."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # httpx logs every request at INFO, which duplicates our own proxy logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
