"""Logger hierarchy for indexgen.

Progress records go to stderr; stdout is reserved for the generated index
when it is printed instead of saved.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

ROOT_LOGGER = "indexgen"
_FORMAT = "[indexgen] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Route indexgen records to ``stream`` (stderr by default).

    Calling it again replaces the previous handler instead of stacking a new one.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    while logger.handlers:
        logger.removeHandler(logger.handlers[0])

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
