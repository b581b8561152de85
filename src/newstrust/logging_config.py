"""
Logging setup shared by the scoring core and its collaborators.
"""

from __future__ import annotations

import logging
import os

from .config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install stream (and optional file) handlers on the root logger."""
    resolved = (level or get_settings().log_level).upper()
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if os.path.isdir("logs"):
        handlers.append(logging.FileHandler(os.path.join("logs", "newstrust.log")))
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
