"""Process wide logging setup."""

from __future__ import annotations

import logging

from hostelia.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Attach a single stream handler to the ``hostelia`` logger tree."""

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger("hostelia")
    root.setLevel(level)
    if not any(getattr(handler, "_hostelia", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._hostelia = True  # type: ignore[attr-defined]
        root.addHandler(handler)


__all__ = ["configure_logging"]
