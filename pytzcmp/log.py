from __future__ import annotations

import logging

_LOGGING_CONFIGURED = False


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Configure package-wide logging once; later calls are ignored."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _LOGGING_CONFIGURED = True
