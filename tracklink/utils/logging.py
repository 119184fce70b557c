"""
Logging configuration for Cloud Run.

Configures Python logging to work with Google Cloud Logging.
Locally, structured ``json_fields`` extras are printed after the message
on the same line.
"""

import json
import logging
import os
import sys

_logging_configured = False

# Third-party loggers that are chatty at INFO (connector refreshes, per-request lines)
QUIET_LOGGERS = ("google.cloud.sql.connector", "urllib3", "uvicorn.access")


class LocalFormatter(logging.Formatter):
    """Formatter that appends json_fields from the extra dict."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        json_fields = getattr(record, "json_fields", None)
        if json_fields:
            fields_str = json.dumps(json_fields, sort_keys=True, default=str)
            message = f"{message} {fields_str}"

        return message


def resolve_level(level: str | int) -> int:
    """
    Turn a level name such as ``"debug"`` into its numeric value.

    Unknown names resolve to INFO.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(service_name: str = "tracklink", level: str | int = logging.INFO):
    """
    Configure logging once per process.

    On Cloud Run (``K_SERVICE`` set) logs go through google-cloud-logging,
    otherwise to stdout with a simple format.

    Args:
        service_name: Name of the service for log identification
        level: Root log level, as a name (``LOG_LEVEL``) or number
    """
    global _logging_configured

    if _logging_configured:
        return

    log_level = resolve_level(level)

    if os.getenv("K_SERVICE"):
        _setup_cloud_logging(service_name, log_level)
    else:
        _setup_local_logging(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    _logging_configured = True


def _setup_cloud_logging(service_name: str, log_level: int):
    """Route the root logger to Cloud Logging."""
    try:
        import google.cloud.logging

        client = google.cloud.logging.Client()
        client.setup_logging(log_level=log_level)

        logging.info("Cloud Logging configured for service: %s", service_name)
    except Exception as e:
        _setup_local_logging(log_level)
        logging.warning("Failed to setup Cloud Logging, using local logging: %s", e)


def _setup_local_logging(log_level: int):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        LocalFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)
