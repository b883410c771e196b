"""Execution of the final script and reporting of its failure.

A failed run is either a **status-coded** termination, returned as the
exit code without any output, or an **unclassified** failure, reported
with the interpreter message and the help of the offending command.

Help is looked up on fresh interpreters from the factory: first with the
update and user command files reloaded, then, if that fails (e.g. a
broken ``help`` override), with the built-in definitions only.
"""

from __future__ import annotations

from pathlib import Path

from gmic_cli.cli import exit_codes
from gmic_cli.cli.console import console
from gmic_cli.core.failure import baseline_help_script, classify_failure, help_lookup_script
from gmic_cli.core.models import RunOutcome
from gmic_cli.core.protocols import Interpreter, InterpreterFactory
from gmic_cli.exceptions import GmicCliError, InterpreterError
from gmic_cli.utils.logging import get_logger

logger = get_logger(__name__)


def show_help(
    command: str,
    *,
    factory: InterpreterFactory,
    update_file: Path,
    user_file: Path,
) -> bool:
    """Print the help of *command*; return ``False`` if no lookup worked."""
    try:
        factory().run(help_lookup_script(command, update_file, user_file))
        return True
    except GmicCliError as exc:
        logger.debug("Help lookup for %r failed, using built-in help: %s", command, exc)

    try:
        factory().run(baseline_help_script(command))
    except GmicCliError as exc:
        logger.warning("No help available for %r: %s", command, exc)
        return False
    return True


def report_failure(
    outcome: RunOutcome,
    *,
    verbosity: int,
    factory: InterpreterFactory,
    update_file: Path,
    user_file: Path,
) -> None:
    """Print the diagnostic for an unclassified failure."""
    # Above level 0 the interpreter has already printed the message itself.
    if verbosity <= 0 and outcome.message:
        console.diagnostic(outcome.message, style="bold red")

    if not outcome.command:
        console.print("\n")
        return

    console.diagnostic(f"Command '{outcome.command}' has the following description: ")
    console.print()
    show_help(outcome.command, factory=factory, update_file=update_file, user_file=user_file)


def execute(
    interpreter: Interpreter,
    script: str,
    *,
    factory: InterpreterFactory,
    update_file: Path,
    user_file: Path,
) -> RunOutcome:
    """Run *script* on the main interpreter and classify the result.

    Only :class:`~gmic_cli.exceptions.InterpreterError` is handled here;
    anything else is left to the CLI error boundary.
    """
    try:
        interpreter.run(script)
    except InterpreterError as exc:
        outcome = classify_failure(interpreter.status, exc)
        logger.debug("Run failed: exit_code=%s status=%r", outcome.exit_code, interpreter.status)
        if not outcome.is_status_coded:
            report_failure(
                outcome,
                verbosity=interpreter.verbosity,
                factory=factory,
                update_file=update_file,
                user_file=user_file,
            )
        return outcome
    return RunOutcome(exit_code=exit_codes.SUCCESS)
