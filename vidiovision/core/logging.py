"""
Logging utilities for the FastAPI application and command-line tools.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where those records end up.
"""

import logging
import sys
from typing import Iterable

# Client libraries that log every request at INFO.
_CHATTY_LOGGERS: tuple[str, ...] = ("httpx", "urllib3", "google.auth")


def configure_logging(
    level: str = "INFO",
    *,
    quiet: Iterable[str] = _CHATTY_LOGGERS,
) -> None:
    """Configure root logging and cap chatty third-party loggers at WARNING."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
