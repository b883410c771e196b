"""CLI console helpers built on Rich.

Diagnostics go to stderr by default. In debug mode they are sent to
stdout instead, so that they interleave with the interpreter's own
debug output.
"""

from __future__ import annotations

import sys
from typing import TextIO

from rich.console import Console
from rich.markup import escape

PREFIX: str = "[gmic]"


def get_rich_console(*, stdout: bool = False) -> Console:
    """Create a Rich console on the current stdout or stderr."""
    return Console(stderr=not stdout, highlight=False, soft_wrap=True)


class _ConsoleProxy:
    """``print``-compatible proxy resolving its target stream at call time."""

    def __init__(self) -> None:
        self._stdout: bool = False

    def use_stdout(self, enabled: bool) -> None:
        """Select stdout (debug mode) or stderr as the diagnostic stream."""
        self._stdout = enabled

    @property
    def stream(self) -> TextIO:
        return sys.stdout if self._stdout else sys.stderr

    def print(self, *objects: object, end: str = "\n") -> None:
        """Render *objects* with Rich markup on the diagnostic stream."""
        get_rich_console(stdout=self._stdout).print(*objects, end=end)

    def diagnostic(self, message: str, *, style: str | None = None) -> None:
        """Print ``[gmic] message`` on a fresh line, escaping *message*."""
        text = escape(message)
        if style:
            text = f"[{style}]{text}[/{style}]"
        self.print(f"\n{escape(PREFIX)} {text}", end="")
        self.stream.flush()


console = _ConsoleProxy()
