"""CLI application entry point for gmic-cli.

:func:`main` turns the process arguments into one interpreter script and
returns the exit code of its execution. :func:`cli` is the **sole error
boundary** for the whole application: it converts that return value into
the process exit status, and renders anything that escaped as a clean
message.

Startup sequence
----------------
1. Select the diagnostic stream, configure logging, install the crash
   handler and create the resources folder.
2. Build the main interpreter and register the startup marker command.
3. Load the update and user command files.
4. Pre-scan a script file passed as first argument.
5. Resolve the initial verbosity.
6. Build the script, execute it and classify the outcome.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from rich.markup import escape

from gmic_cli.cli import exit_codes
from gmic_cli.cli.console import console
from gmic_cli.cli.crash_handler import BUG_REPORT_URL, install_crash_handler
from gmic_cli.cli.runner import execute
from gmic_cli.config import RuntimeConfig, get_runtime_config
from gmic_cli.core.commands import normalize_command_source
from gmic_cli.core.protocols import Interpreter, InterpreterFactory
from gmic_cli.core.script_builder import build_script
from gmic_cli.core.script_mode import detect_entry_point, is_script_file_invocation
from gmic_cli.core.verbosity import resolve_verbosity
from gmic_cli.exceptions import GmicCliError
from gmic_cli.infra.gmic_interpreter import GmicInterpreter
from gmic_cli.infra.paths import init_resources_dir, update_file, user_file
from gmic_cli.infra.startup_files import load_update_file, load_user_file, read_script_file
from gmic_cli.utils.logging import configure_logging, get_logger

HOST_NAME: str = "cli"
STARTUP_DEFINITION: str = "cli_start : "
DEBUG_OPTIONS: frozenset[str] = frozenset({"-debug", "debug"})

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Startup helpers
# ---------------------------------------------------------------------------

def is_debug_invocation(args: Sequence[str], config: RuntimeConfig) -> bool:
    """Whether diagnostics should go to stdout instead of stderr."""
    return config.debug or any(arg in DEBUG_OPTIONS for arg in args)


def _bootstrap(config: RuntimeConfig, *, debug: bool) -> None:
    console.use_stdout(debug)
    configure_logging(level=config.log_level, debug=debug, stream=console.stream)
    install_crash_handler()
    if not init_resources_dir(config):
        console.diagnostic("Unable to create resources folder.")
        console.print()


def _create_main_interpreter(factory: InterpreterFactory) -> Interpreter:
    interpreter = factory()
    interpreter.host = HOST_NAME
    interpreter.add_commands(STARTUP_DEFINITION)
    return interpreter


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    *,
    factory: InterpreterFactory | None = None,
) -> int:
    """Run the gmic CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    factory:
        Builds interpreter instances. Defaults to :class:`GmicInterpreter`;
        tests pass a fake.

    Returns
    -------
    int
        OS process exit code.
    """
    args = tuple(sys.argv[1:] if argv is None else argv)
    config = get_runtime_config()
    debug = is_debug_invocation(args, config)
    _bootstrap(config, debug=debug)

    factory = GmicInterpreter if factory is None else factory
    interpreter = _create_main_interpreter(factory)

    update_path = update_file(config)
    user_path = user_file(config)
    update = load_update_file(interpreter, update_path, debug=debug)
    user = load_user_file(interpreter, user_path, debug=debug)
    logger.debug("Update file %s: %s; user file %s: %s", update_path, update.status.value, user_path, user.status.value)

    if is_script_file_invocation(args):
        source = read_script_file(args[0])
        entry = detect_entry_point(args, source, factory, debug=debug)
        if entry.allow_entrypoint:
            # The script item is rewritten into an ``_main_`` call at run time.
            interpreter.add_commands(
                normalize_command_source(source), args[0], debug=debug, detect_entrypoint=True
            )
        interpreter.allow_entrypoint = entry.allow_entrypoint

    interpreter.verbosity = resolve_verbosity(
        args,
        env_value=config.verbosity,
        allow_entrypoint=interpreter.allow_entrypoint,
    )

    script = build_script(
        args,
        invalid_user_file=user.path if user.is_invalid else None,
        invalid_update_file=update.path if update.is_invalid else None,
    )
    logger.debug("Script: %s", script)

    outcome = execute(
        interpreter,
        script,
        factory=factory,
        update_file=update_path,
        user_file=user_path,
    )
    return outcome.exit_code


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except GmicCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.UNCLASSIFIED_FAILURE)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            f"Please submit a bug report, at: {BUG_REPORT_URL}\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
