"""Classification of interpreter failures and help-lookup scripts.

A script ends the process with a chosen exit code by leaving a status
of the form ``... *** <code>`` behind and failing. Any other failure is
unclassified: it is reported to the user together with the help of the
offending command.

Every function here is a pure transformation, with no I/O.
"""

from __future__ import annotations

import re
from pathlib import Path

from gmic_cli.core.models import RunOutcome
from gmic_cli.exceptions import InterpreterError

STATUS_MARKER: str = "***"
UNCLASSIFIED_EXIT_CODE: int = -1

_STATUS_CODE = re.compile(r"\*\*\*\s*([+-]?\d+)(.)?", re.DOTALL)


def parse_status_code(status: str | None) -> int | None:
    """Extract the exit code a script embedded in *status*.

    The code follows the second ``***`` marker and may be followed by
    one more character. Returns ``None`` when there is no such code.
    """
    if not status:
        return None
    first = status.find(STATUS_MARKER)
    if first < 0:
        return None
    second = status.find(STATUS_MARKER, first + len(STATUS_MARKER))
    if second < 0:
        return None
    match = _STATUS_CODE.fullmatch(status, second)
    if match is None:
        return None
    return int(match.group(1))


def classify_failure(status: str | None, error: InterpreterError) -> RunOutcome:
    """Turn a failed run into a :class:`RunOutcome`."""
    code = parse_status_code(status)
    if code is not None:
        return RunOutcome(exit_code=code, status_code=code)
    return RunOutcome(
        exit_code=UNCLASSIFIED_EXIT_CODE,
        message=str(error),
        command=error.command or None,
    )


def help_lookup_script(command: str, update_file: Path | str, user_file: Path | str) -> str:
    """Script that reloads both command files, then shows help for *command*.

    Each reload is guarded so that a broken file is dropped instead of
    aborting the lookup.
    """
    return (
        f'l[] i raw:"{update_file}",char m "{update_file}" onfail rm done '
        f'l[] i raw:"{user_file}",char m "{user_file}" onfail rm done '
        f'rv help "{command}",0'
    )


def baseline_help_script(command: str) -> str:
    """Script showing help for *command* from built-in definitions only."""
    return f'help "{command}"'
