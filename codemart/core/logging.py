"""Process-wide logging setup."""

from __future__ import annotations

import logging

from codemart.core.config import Settings

_HANDLER_NAME = "codemart"


def configure_logging(settings: Settings) -> None:
    """Install a single stream handler on the ``codemart`` logger tree."""
    root = logging.getLogger("codemart")
    root.setLevel(settings.logging.level.upper())
    if any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(settings.logging.format))
    root.addHandler(handler)
