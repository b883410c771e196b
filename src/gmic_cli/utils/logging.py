from __future__ import annotations

import logging
from typing import TextIO


def get_logger(name: str = "gmic_cli") -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(
    *,
    level: str = "warning",
    debug: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Attach a handler to the package logger.

    Records are only written out in debug mode, to *stream* (the
    diagnostic stream chosen by the CLI). Otherwise a ``NullHandler``
    keeps the logger silent.
    """
    normalized = level.strip().upper()
    level_value = logging.DEBUG if debug else getattr(logging, normalized, logging.WARNING)
    logger = get_logger()
    logger.setLevel(level_value)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    if not debug or stream is None:
        logger.addHandler(logging.NullHandler())
        return
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
