"""Infrastructure: loading of startup command files.

Two optional files are merged into the main interpreter before the user
script runs:

* the **update** file, refreshed by the interpreter's own update
  mechanism, stored as a CImg container or as plain text and required
  to start with ``#@gmic``;
* the **user** file, plain text maintained by the user.

Nothing raised while reading or registering these files escapes this
module: each load returns a :class:`~gmic_cli.core.models.LoadOutcome`.
"""

from __future__ import annotations

from pathlib import Path

from gmic_cli.core.commands import has_update_magic, normalize_command_source
from gmic_cli.core.models import LoadOutcome, LoadStatus
from gmic_cli.core.protocols import Interpreter
from gmic_cli.exceptions import CImgFormatError
from gmic_cli.infra.cimg_loader import load_cimg, load_raw
from gmic_cli.utils.logging import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _read_update(path: Path) -> bytes | None:
    """Structured load first, raw load as fallback, ``None`` if both fail."""
    try:
        return load_cimg(path)
    except (OSError, CImgFormatError) as exc:
        logger.debug("Structured load of %s failed: %s", path, exc)
    try:
        return load_raw(path)
    except OSError as exc:
        logger.debug("Raw load of %s failed: %s", path, exc)
    return None


def _read_user(path: Path) -> bytes | None:
    try:
        return load_raw(path)
    except OSError as exc:
        logger.debug("Raw load of %s failed: %s", path, exc)
    return None


def read_script_file(path: Path | str) -> bytes | None:
    """Return the content of a script file, or ``None`` if unreadable."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        logger.debug("Cannot open script file %s: %s", path, exc)
    return None


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def _register(
    interpreter: Interpreter,
    content: bytes,
    path: Path,
    *,
    debug: bool,
) -> str | None:
    """Register *content*; return its normalized text or ``None`` on failure."""
    try:
        text = normalize_command_source(content)
        interpreter.add_commands(text, str(path), debug=debug)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Command file %s was not registered: %s", path, exc)
        return None
    return text


def load_update_file(
    interpreter: Interpreter,
    path: Path,
    *,
    debug: bool = False,
) -> LoadOutcome:
    """Load, validate and register the auto-update command file."""
    content = _read_update(path)
    if content is None:
        return LoadOutcome(path=path, status=LoadStatus.ABSENT)
    if not content:
        return LoadOutcome(path=path, status=LoadStatus.INVALID)

    text = _register(interpreter, content, path, debug=debug)
    if text is None:
        return LoadOutcome(path=path, status=LoadStatus.INVALID)
    if not has_update_magic(text):
        logger.warning("Update file %s does not start with the #@gmic marker.", path)
        return LoadOutcome(path=path, status=LoadStatus.INVALID, content=text)
    return LoadOutcome(path=path, status=LoadStatus.VALID, content=text)


def load_user_file(
    interpreter: Interpreter,
    path: Path,
    *,
    debug: bool = False,
) -> LoadOutcome:
    """Load and register the user command file."""
    content = _read_user(path)
    if not content:
        return LoadOutcome(path=path, status=LoadStatus.ABSENT)

    text = _register(interpreter, content, path, debug=debug)
    if text is None:
        return LoadOutcome(path=path, status=LoadStatus.INVALID)
    return LoadOutcome(path=path, status=LoadStatus.VALID, content=text)
