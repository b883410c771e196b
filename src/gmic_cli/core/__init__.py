"""Core layer: pure translation and classification logic.

Rules
-----
* No ``print()`` calls.
* No filesystem I/O.
* No imports from ``cli`` or ``infra``.
* The interpreter is only reached through :mod:`gmic_cli.core.protocols`.
"""

from gmic_cli.core.commands import CommandDefinition, CommandRegistry, parse_command_source
from gmic_cli.core.failure import classify_failure, parse_status_code
from gmic_cli.core.models import (
    EntryPointDescriptor,
    ItemKind,
    LoadOutcome,
    LoadStatus,
    RunOutcome,
    ScriptItem,
)
from gmic_cli.core.protocols import Interpreter, InterpreterFactory
from gmic_cli.core.script_builder import build_script, build_script_items
from gmic_cli.core.script_mode import detect_entry_point, is_script_file_invocation
from gmic_cli.core.verbosity import resolve_verbosity

__all__: list[str] = [
    "CommandDefinition",
    "CommandRegistry",
    "EntryPointDescriptor",
    "Interpreter",
    "InterpreterFactory",
    "ItemKind",
    "LoadOutcome",
    "LoadStatus",
    "RunOutcome",
    "ScriptItem",
    "build_script",
    "build_script_items",
    "classify_failure",
    "detect_entry_point",
    "is_script_file_invocation",
    "parse_command_source",
    "parse_status_code",
    "resolve_verbosity",
]
