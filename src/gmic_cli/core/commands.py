"""Command-definition sources and the registration set.

A command file is plain text made of definitions::

    #@gmic My commands
    my_blur : blur ${1=3}
      sharpen 10

A line starting at column 0 with ``name :`` opens a definition; the
text after the colon and every following non-comment line form its
body. Lines starting with ``#`` are comments.

Every function in this module is a pure transformation, with no I/O.
"""

from __future__ import annotations

import bisect
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from gmic_cli.exceptions import CommandFileError

ENTRYPOINT_COMMAND: str = "_main_"
"""Command a script file defines to receive CLI arguments."""

UPDATE_FILE_MAGIC: str = "#@gmi"
UPDATE_FILE_MAGIC_SUFFIX: str = "c"

_HEADER = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)[ \t]*:(?=[ \t]|$)(.*)$")

# $1, $*, $#, $=, ${1...}, ${^...}, $"*"
_ARGUMENT_REFERENCE = re.compile(r'\$(?:[0-9#*=]|\{[-+]?[0-9^]|"\*")')


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandDefinition:
    """A single named command parsed from a command file."""

    name: str
    body: str
    has_arguments: bool
    filename: str | None = None
    line: int = 0


def normalize_command_source(raw: bytes | str) -> str:
    """Return command text with LF line endings and a trailing newline.

    NUL padding at the end of a buffer is dropped.

    Raises
    ------
    CommandFileError
        If *raw* is not valid UTF-8 or holds NUL characters elsewhere.
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CommandFileError(f"Command source is not valid UTF-8: {exc}") from exc
    else:
        text = raw
    text = text.rstrip("\0")
    if "\0" in text:
        raise CommandFileError("Command source contains NUL characters.")
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if not text.endswith("\n"):
        text += "\n"
    return text


def has_update_magic(text: str) -> bool:
    """Check that *text* starts with the update-file marker ``#@gmic``."""
    stripped = text.lstrip()
    if not stripped.startswith(UPDATE_FILE_MAGIC):
        return False
    return stripped[len(UPDATE_FILE_MAGIC):len(UPDATE_FILE_MAGIC) + 1] == UPDATE_FILE_MAGIC_SUFFIX


def body_has_arguments(body: str) -> bool:
    """Whether a command body references its positional arguments."""
    return _ARGUMENT_REFERENCE.search(body) is not None


def parse_command_source(text: str, filename: str | None = None) -> tuple[CommandDefinition, ...]:
    """Parse command definitions out of *text*.

    Raises
    ------
    CommandFileError
        When body text appears before the first definition header.
    """
    definitions: list[CommandDefinition] = []
    current_name: str | None = None
    current_line = 0
    body_lines: list[str] = []

    def flush() -> None:
        if current_name is None:
            return
        body = "\n".join(body_lines).strip()
        definitions.append(
            CommandDefinition(
                name=current_name,
                body=body,
                has_arguments=body_has_arguments(body),
                filename=filename,
                line=current_line,
            )
        )

    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        header = _HEADER.match(line)
        if header is not None:
            flush()
            current_name = header.group(1)
            current_line = number
            body_lines = [header.group(2)]
            continue
        if current_name is None:
            raise CommandFileError(
                f"Unexpected text outside of a command definition: {stripped!r}",
                filename=filename,
                line=number,
            )
        body_lines.append(line)
    flush()
    return tuple(definitions)


# ---------------------------------------------------------------------------
# Registration set
# ---------------------------------------------------------------------------

class CommandRegistry:
    """Append-only, ordered set of command definitions.

    A later definition with the same name overrides an earlier one for
    lookups, but both stay in iteration order. Names are indexed
    case-insensitively in sorted order for binary-search lookups.
    """

    def __init__(self) -> None:
        self._definitions: list[CommandDefinition] = []
        self._keys: list[str] = []
        self._latest: list[CommandDefinition] = []

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(self._definitions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def add(self, definition: CommandDefinition) -> None:
        self._definitions.append(definition)
        key = definition.name.casefold()
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            self._latest[index] = definition
            return
        self._keys.insert(index, key)
        self._latest.insert(index, definition)

    def extend(self, definitions: Iterable[CommandDefinition]) -> None:
        for definition in definitions:
            self.add(definition)

    def find(self, name: str) -> CommandDefinition | None:
        """Binary-search the sorted index for *name*, ignoring case."""
        key = name.casefold()
        index = bisect.bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            return self._latest[index]
        return None

    def has_arguments(self, name: str) -> bool | None:
        """Whether *name* declares parameters, ``None`` if unknown."""
        definition = self.find(name)
        return None if definition is None else definition.has_arguments
