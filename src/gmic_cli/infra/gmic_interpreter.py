"""``gmic`` binding backed implementation of :class:`~gmic_cli.core.protocols.Interpreter`.

This module is the **only** place in the codebase that imports ``gmic``.
All binding exceptions are caught here and re-raised as
:class:`~gmic_cli.exceptions.InterpreterError`; nothing raw escapes the
infrastructure boundary.

The binding has no API for registering command definitions, so this
adapter keeps its own :class:`~gmic_cli.core.commands.CommandRegistry`
and writes it to a temporary command file that the script prelude
loads with ``m``.
"""

from __future__ import annotations

import re
import tempfile
from pathlib import Path
from typing import Any

from gmic_cli.core.commands import (
    ENTRYPOINT_COMMAND,
    CommandDefinition,
    CommandRegistry,
    parse_command_source,
)
from gmic_cli.exceptions import EnvironmentError, InterpreterError
from gmic_cli.utils.logging import get_logger

logger = get_logger(__name__)


def _import_gmic() -> Any:
    """Import the gmic binding lazily."""
    try:
        import gmic
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "gmic is not installed. Install with: pip install gmic",
        ) from exc
    return gmic


class GmicInterpreter:
    """Concrete :class:`Interpreter` backed by the ``gmic`` Python binding.

    Usage::

        interpreter = GmicInterpreter()
        interpreter.add_commands("hello : echo Hello!")
        interpreter.run("hello")

    The class itself satisfies :class:`~gmic_cli.core.protocols.InterpreterFactory`.
    ``builtins=False`` marks an isolated instance used to pre-scan script
    files; the binding always ships its built-in definitions, so such an
    instance is only meant for registration and lookups.
    """

    # Patterns locating the offending command in a binding error message.
    _COMMAND_PATTERNS: tuple[re.Pattern[str], ...] = (
        re.compile(r"Command '([^']+)'"),
        re.compile(r"command '([^']+)'"),
    )

    def __init__(self, *, builtins: bool = True) -> None:
        self.verbosity: int = 1
        self.allow_entrypoint: bool = False
        self.status: str = ""
        self.host: str = ""
        self.builtins: bool = builtins
        self._registry = CommandRegistry()

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def add_commands(
        self,
        source: str,
        filename: str | None = None,
        *,
        debug: bool = False,
        detect_entrypoint: bool = False,
    ) -> bool:
        """Parse *source* and register its definitions.

        Raises
        ------
        CommandFileError
            When *source* is not a valid command-definition text.
        """
        definitions = parse_command_source(source, filename)
        if not detect_entrypoint:
            definitions = tuple(d for d in definitions if d.name != ENTRYPOINT_COMMAND)
        self._registry.extend(definitions)
        if debug:
            logger.debug("Registered %d command(s) from %s", len(definitions), filename or "<string>")
        return detect_entrypoint and any(d.name == ENTRYPOINT_COMMAND for d in definitions)

    def command_has_arguments(self, name: str) -> bool | None:
        return self._registry.has_arguments(name)

    def run(self, script: str) -> None:
        """Run *script* through the binding.

        Raises
        ------
        InterpreterError
            For any failure reported by the binding.
        """
        gmic = _import_gmic()
        self.status = ""

        with tempfile.TemporaryDirectory(prefix="gmic_cli_") as workdir:
            pipeline = self._prelude(Path(workdir)) + self._with_entrypoint(script)
            try:
                gmic.run(pipeline)
            except gmic.GmicException as exc:
                message = str(exc)
                self.status = message
                raise InterpreterError(message, command=self._offending_command(message)) from exc
            except Exception as exc:
                raise InterpreterError(f"Unexpected interpreter error: {exc}") from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _render(definition: CommandDefinition) -> str:
        return f"{definition.name} : {definition.body}"

    def _prelude(self, workdir: Path) -> str:
        """Commands run ahead of the user script to restore instance state."""
        parts = ["v 0"]
        if self.host:
            parts.append(f"_host={self.host}")
        if len(self._registry):
            command_file = workdir / "commands.gmic"
            command_file.write_text(
                "\n".join(self._render(d) for d in self._registry) + "\n",
                encoding="utf-8",
            )
            parts.append(f'm "{command_file}"')
        parts.append(f"v {self.verbosity}")
        return " ".join(parts) + " "

    def _with_entrypoint(self, script: str) -> str:
        """Replace the trailing ``file [argument]`` of *script* by a ``_main_`` call.

        Only applies when the entry point is allowed and was registered
        from a script file; *script* is returned unchanged otherwise.
        """
        definition = self._registry.find(ENTRYPOINT_COMMAND)
        if (
            not self.allow_entrypoint
            or definition is None
            or definition.name != ENTRYPOINT_COMMAND
            or not definition.filename
        ):
            return script
        start = script.rfind(definition.filename)
        if start < 0:
            return script
        end = start + len(definition.filename)
        if script[start - 1:start] == '"' and script[end:end + 1] == '"':
            start, end = start - 1, end + 1
        argument = script[end:].strip()
        invocation = f"{ENTRYPOINT_COMMAND} {argument}" if argument else ENTRYPOINT_COMMAND
        return script[:start] + invocation

    @classmethod
    def _offending_command(cls, message: str) -> str:
        for pattern in cls._COMMAND_PATTERNS:
            match = pattern.search(message)
            if match is not None:
                return match.group(1)
        return ""
