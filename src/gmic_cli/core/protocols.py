"""Protocols (interfaces) consumed by the core layer.

These define the contract an interpreter backend must satisfy. Core and
CLI code depend ONLY on these protocols, never on the concrete
binding, so that every stage can be driven by a fake in tests.
"""

from __future__ import annotations

from typing import Protocol


class Interpreter(Protocol):
    """Contract for a command-interpreter instance.

    One instance owns one registration set. Instances never share
    mutable state; definitions move between them only by registering
    the same source twice.
    """

    verbosity: int
    """Diagnostic verbosity applied when :meth:`run` starts."""

    allow_entrypoint: bool
    """Whether a loaded script file may run its entry-point command."""

    status: str
    """Status text left by the last :meth:`run`, empty when none."""

    host: str
    """Value exposed to scripts as the ``_host`` variable."""

    def add_commands(
        self,
        source: str,
        filename: str | None = None,
        *,
        debug: bool = False,
        detect_entrypoint: bool = False,
    ) -> bool:
        """Register the command definitions found in *source*.

        The entry-point command is only registered when
        *detect_entrypoint* is true.

        Returns
        -------
        bool
            Whether *source* defines the entry-point command (always
            ``False`` when *detect_entrypoint* is false).

        Raises
        ------
        CommandFileError
            When *source* is not a valid command-definition text.
        """
        ...  # pragma: no cover

    def command_has_arguments(self, name: str) -> bool | None:
        """Whether registered command *name* declares formal parameters.

        Returns ``None`` when no such command is registered.
        """
        ...  # pragma: no cover

    def run(self, script: str) -> None:
        """Execute *script* against this instance.

        Raises
        ------
        InterpreterError
            When the pipeline fails. :attr:`status` holds the status
            text left by the script.
        """
        ...  # pragma: no cover


class InterpreterFactory(Protocol):
    """Builds fresh, independently owned :class:`Interpreter` instances.

    ``builtins=False`` yields an instance with no built-in definitions,
    used to pre-scan script files in isolation.
    """

    def __call__(self, *, builtins: bool = True) -> Interpreter:
        ...  # pragma: no cover
