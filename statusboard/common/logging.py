"""Logging setup shared by the API, the Celery workers and scripts."""

import logging
import sys

from statusboard.config import settings

_ROOT = "statusboard"
_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once; later calls are no-ops."""
    global _configured
    if _configured:
        return

    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # Third-party noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openpyxl").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the ``statusboard.<name>`` logger."""
    return logging.getLogger(f"{_ROOT}.{name}")
