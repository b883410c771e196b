"""Domain models for gmic-cli.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access. They are produced by one stage of the
startup sequence and consumed by the next; none outlives a single
process run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


# ---------------------------------------------------------------------------
# Script items
# ---------------------------------------------------------------------------

class ItemKind(str, Enum):
    """Origin of a :class:`ScriptItem`."""

    TOKEN = "token"
    QUOTE = "quote"
    DIRECTIVE = "directive"


@dataclass(frozen=True, slots=True)
class ScriptItem:
    """One atomic fragment of the final interpreter script."""

    text: str
    """Literal text, including any trailing separator."""

    kind: ItemKind = ItemKind.TOKEN
    """Whether the fragment is user input, a quote or an injected directive."""


# ---------------------------------------------------------------------------
# Startup-file load outcome
# ---------------------------------------------------------------------------

class LoadStatus(str, Enum):
    """Tri-state result of loading one auxiliary command file."""

    ABSENT = "absent"
    INVALID = "invalid"
    VALID = "valid"


@dataclass(frozen=True, slots=True)
class LoadOutcome:
    """Result of loading an auto-update or user command file."""

    path: Path
    """Location the loader looked at."""

    status: LoadStatus
    """Whether the file was missing, rejected or registered."""

    content: str = ""
    """Normalized command source, empty unless something was read."""

    @property
    def is_invalid(self) -> bool:
        return self.status is LoadStatus.INVALID


# ---------------------------------------------------------------------------
# Script-file entry point
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EntryPointDescriptor:
    """What a pre-scan of a script file found about its entry point."""

    exists: bool = False
    """The file defines the entry-point command."""

    accepts_arguments: bool = False
    """The entry-point command declares formal parameters."""

    allow_entrypoint: bool = False
    """Permission to copy onto the main interpreter before running."""


# ---------------------------------------------------------------------------
# Run outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Classified result of executing the final script."""

    exit_code: int
    """Process exit code to return."""

    status_code: int | None = None
    """Code embedded by the script in the interpreter status, if any."""

    message: str | None = None
    """Human-readable failure message for unclassified failures."""

    command: str | None = None
    """Name of the command that failed, when the interpreter knows it."""

    @property
    def is_status_coded(self) -> bool:
        return self.status_code is not None
