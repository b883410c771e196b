"""Fallback for fatal signals.

A segmentation fault inside the interpreter binding cannot be handled
from Python: a ``signal.signal`` handler only runs between bytecodes, so
the faulting instruction would be retried forever. :mod:`faulthandler`
reports from C instead, writing a fixed ``Fatal Python error`` report to
the diagnostic stream, then re-raises the signal so that the process
terminates with a failure status.
"""

from __future__ import annotations

import faulthandler
from typing import TextIO

from gmic_cli.cli.console import console
from gmic_cli.utils.logging import get_logger

BUG_REPORT_URL: str = "https://github.com/GreycLab/gmic/issues"

logger = get_logger(__name__)


def install_crash_handler(stream: TextIO | None = None) -> bool:
    """Enable :mod:`faulthandler` on *stream* (the diagnostic stream by default).

    Returns ``False`` when *stream* has no usable file descriptor, as
    with captured test output.
    """
    stream = console.stream if stream is None else stream
    try:
        stream.fileno()
        faulthandler.enable(file=stream, all_threads=False)
    except (OSError, ValueError, RuntimeError) as exc:
        logger.debug("Crash handler not installed: %s", exc)
        return False
    return True
