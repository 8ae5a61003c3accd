"""Logger factory shared by all engine modules."""

from __future__ import annotations

import logging
import os

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_handler_attached = False


def _resolve_level() -> int:
    level_name = os.getenv("PROJECTFLOW_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger, attaching one stream handler to the package logger on first use."""

    global _handler_attached

    package_logger = logging.getLogger("projectflow_engine")
    if not _handler_attached:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        package_logger.addHandler(handler)
        _handler_attached = True
    package_logger.setLevel(_resolve_level())

    return logging.getLogger(name)
