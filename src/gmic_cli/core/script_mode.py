"""Detection of the ``gmic file.gmic [argument]`` invocation shape.

A command file passed as the only (or only but one) argument may define
the entry-point command ``_main_``. The file is pre-scanned on an
isolated interpreter to decide whether the main interpreter may run that
entry point.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePath

from gmic_cli.core.commands import ENTRYPOINT_COMMAND, normalize_command_source
from gmic_cli.core.models import EntryPointDescriptor
from gmic_cli.core.protocols import InterpreterFactory
from gmic_cli.exceptions import GmicCliError
from gmic_cli.utils.logging import get_logger

SCRIPT_EXTENSION: str = "gmic"

logger = get_logger(__name__)


def is_script_file_invocation(args: Sequence[str]) -> bool:
    """Whether *args* looks like ``file[.gmic] [argument]``."""
    if len(args) not in (1, 2):
        return False
    suffix = PurePath(args[0]).suffix
    return suffix == "" or suffix == "." + SCRIPT_EXTENSION


def detect_entry_point(
    args: Sequence[str],
    source: bytes | str | None,
    factory: InterpreterFactory,
    *,
    debug: bool = False,
) -> EntryPointDescriptor:
    """Pre-scan a script file and decide on entry-point permission.

    Parameters
    ----------
    args:
        Process arguments; ``args[0]`` names the script file.
    source:
        Content of the script file, or ``None`` when it could not be read.
    factory:
        Builds the isolated interpreter used for the pre-scan.

    Returns
    -------
    EntryPointDescriptor
        All-false when the file is unreadable or fails to register.
    """
    if source is None or not is_script_file_invocation(args):
        return EntryPointDescriptor()

    scanner = factory(builtins=False)
    try:
        text = normalize_command_source(source)
        exists = scanner.add_commands(text, args[0], debug=debug, detect_entrypoint=True)
        accepts_arguments = bool(exists and scanner.command_has_arguments(ENTRYPOINT_COMMAND))
    except GmicCliError as exc:
        logger.debug("Pre-scan of %s failed: %s", args[0], exc)
        return EntryPointDescriptor()

    allow = exists
    if exists and len(args) == 2:
        # The second argument is only an entry-point parameter if _main_ takes one.
        allow = accepts_arguments
    return EntryPointDescriptor(
        exists=exists,
        accepts_arguments=accepts_arguments,
        allow_entrypoint=allow,
    )
