"""Composition root for the Konduto SDK.

This module is the only place that reads configuration and wires the
HTTP adapter, the order service and logging together for applications
that configure the SDK from the environment.
"""

import logging
import sys

from konduto.client import Konduto
from konduto.config import KondutoSettings, load_settings


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure SDK logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_str))

    logger = logging.getLogger("konduto")
    logger.setLevel(level)
    logger.handlers = [handler]


def create_client(settings: KondutoSettings | None = None) -> Konduto:
    """Load configuration, configure logging and build a client.

    Args:
        settings: Settings to use. Loaded from the environment if omitted.

    Returns:
        A ready-to-use Konduto client.

    Raises:
        ValidationError: If the environment settings are invalid.
        InvalidAPIKey: If KONDUTO_API_KEY is missing or malformed.
        InvalidVersion: If KONDUTO_API_VERSION is not supported.
    """
    if settings is None:
        settings = load_settings()

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    client = Konduto.from_settings(settings)
    logger.info(
        f"Konduto client ready ({settings.api_base_url}/{settings.api_version})",
        extra={"api_version": settings.api_version},
    )
    return client
