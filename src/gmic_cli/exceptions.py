"""Custom exception hierarchy for gmic-cli.

Every exception raised by the package inherits from :class:`GmicCliError`.
Exceptions coming from the interpreter backend must never propagate
beyond the infrastructure layer: they are caught there and re-raised as
a typed subclass defined here.

Hierarchy
---------
GmicCliError
├── CommandFileError
├── CImgFormatError
├── InterpreterError
└── EnvironmentError
"""

from __future__ import annotations


class GmicCliError(Exception):
    """Base exception for all gmic-cli errors.

    The CLI error boundary renders these as a clean message without a
    stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command definitions ---------------------------------------------------

class CommandFileError(GmicCliError):
    """Raised when a command-definition source cannot be registered."""

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        line: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.filename: str | None = filename
        self.line: int | None = line


class CImgFormatError(GmicCliError):
    """Raised when a file is not a readable CImg container."""


# --- Interpreter -----------------------------------------------------------

class InterpreterError(GmicCliError):
    """Raised when the interpreter fails while running a script.

    ``command`` holds the name of the offending command when the
    interpreter reported one, and is empty otherwise.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.command: str = command


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(GmicCliError):
    """Raised when a required runtime dependency is not available."""
