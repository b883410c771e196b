"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase. Codes
chosen by a script through the interpreter status are returned as-is
and are not listed here.
"""

from __future__ import annotations

from gmic_cli.core.failure import UNCLASSIFIED_EXIT_CODE

SUCCESS: int = 0
"""Clean exit: the script ran without error."""

UNCLASSIFIED_FAILURE: int = UNCLASSIFIED_EXIT_CODE
"""The interpreter failed without embedding a status code."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
