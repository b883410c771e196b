"""Translate a process argument vector into one interpreter script.

Each argument becomes one or three :class:`ScriptItem` fragments, and
directives (startup marker, warnings) are inserted at a computed
position before everything is concatenated.

Rules
-----
* An argument holding a space is wrapped in double quotes.
* Every argument ends with exactly one separator space.
* The startup marker runs before user tokens, except that a leading
  verbosity option stays in front of it.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from gmic_cli.core.models import ItemKind, ScriptItem

NOARG_SCRIPT: str = "l[] cli_noarg onfail done"
"""Fail-soft handler run when no argument was given."""

STARTUP_MARKER: str = "cli_start , "
"""Startup marker command followed by its empty continuation token."""

SEPARATOR: str = " "

_VERBOSITY_TOKENS: frozenset[str] = frozenset({"v", "verbose"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def is_verbosity_token(token: str) -> bool:
    """Whether *token* is ``v``/``verbose``, with one optional leading dash."""
    lowered = token.lower()
    if lowered.startswith("-"):
        lowered = lowered[1:]
    return lowered in _VERBOSITY_TOKENS


def warning_directive(path: Path | str, kind: str) -> str:
    """Build a ``warn`` directive for an invalid command file at *path*."""
    return f"warn \"File '\"{{/\"{path}\"}}\"' is not a valid G'MIC {kind} file.\" "


def _argument_items(argument: str) -> list[ScriptItem]:
    if SEPARATOR in argument:
        return [
            ScriptItem('"', ItemKind.QUOTE),
            ScriptItem(argument, ItemKind.TOKEN),
            ScriptItem('"' + SEPARATOR, ItemKind.QUOTE),
        ]
    return [ScriptItem(argument + SEPARATOR, ItemKind.TOKEN)]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_script_items(
    args: Sequence[str],
    *,
    invalid_user_file: Path | str | None = None,
    invalid_update_file: Path | str | None = None,
) -> list[ScriptItem]:
    """Build the ordered item sequence for *args*.

    Parameters
    ----------
    args:
        Process arguments, without the program name.
    invalid_user_file, invalid_update_file:
        Paths of command files that failed to load, if any. Each one
        adds a warning directive next to the startup marker.
    """
    if not args:
        items = [ScriptItem(NOARG_SCRIPT + SEPARATOR, ItemKind.DIRECTIVE)]
        position = 0
    else:
        items = []
        for argument in args:
            items.extend(_argument_items(argument))
        position = 0
        if len(args) > 1 and is_verbosity_token(args[0]):
            # The verbosity option takes effect before the marker runs.
            position = len(_argument_items(args[0]))

    items.insert(position, ScriptItem(STARTUP_MARKER, ItemKind.DIRECTIVE))
    if invalid_user_file is not None:
        items.insert(position, ScriptItem(warning_directive(invalid_user_file, "command"), ItemKind.DIRECTIVE))
    if invalid_update_file is not None:
        items.insert(position, ScriptItem(warning_directive(invalid_update_file, "update"), ItemKind.DIRECTIVE))
    return items


def concatenate(items: Sequence[ScriptItem]) -> str:
    """Join *items* and drop the separator that ends the last one."""
    text = "".join(item.text for item in items)
    if text.endswith(SEPARATOR):
        text = text[: -len(SEPARATOR)]
    return text


def build_script(
    args: Sequence[str],
    *,
    invalid_user_file: Path | str | None = None,
    invalid_update_file: Path | str | None = None,
) -> str:
    """Return the complete script text for *args*."""
    return concatenate(
        build_script_items(
            args,
            invalid_user_file=invalid_user_file,
            invalid_update_file=invalid_update_file,
        )
    )


def user_tokens(items: Sequence[ScriptItem]) -> list[str]:
    """Return the user-supplied fragments of *items*, without directives."""
    return [item.text for item in items if item.kind is not ItemKind.DIRECTIVE]
