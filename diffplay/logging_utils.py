"""
Logging helpers for diffplay

Configuration is driven by a verbosity count, either passed in by the
caller or read from the DIFFPLAY_LOG_LEVEL environment variable.
"""

from __future__ import annotations

import logging
import os


def configure_logging(verbosity: int | None = None) -> None:
    """
    Configure the root logger based on a verbosity count.

    verbosity == 0 -> WARNING
    verbosity == 1 -> INFO
    verbosity >= 2 -> DEBUG
    """
    if verbosity is None:
        try:
            verbosity = int(os.environ.get("DIFFPLAY_LOG_LEVEL", "1"))
        except ValueError:
            verbosity = 1

    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )
