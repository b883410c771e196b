"""Infrastructure: locations of the resources directory and command files.

Lookup order for both directories:

* ``GMIC_PATH``, then ``GMIC_GIMP_PATH``;
* resources only: ``XDG_CONFIG_HOME``;
* POSIX: ``HOME`` (``~/.config`` for resources), then ``TMP``, ``TEMP``,
  ``TMPDIR``; Windows: ``APPDATA``, then ``TMP``, ``TEMP``;
* the system temporary directory.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from gmic_cli.config import RuntimeConfig
from gmic_cli.utils.logging import get_logger

logger = get_logger(__name__)

_IS_WINDOWS: bool = os.name == "nt"


def _first_set(env: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def _configured_path(config: RuntimeConfig) -> str | None:
    return config.path or config.gimp_path or None


def resources_dir(config: RuntimeConfig, env: Mapping[str, str] | None = None) -> Path:
    """Directory holding interpreter resources such as the update file."""
    env = os.environ if env is None else env
    base = _configured_path(config) or _first_set(env, "XDG_CONFIG_HOME")
    if base is None:
        if _IS_WINDOWS:
            base = _first_set(env, "APPDATA", "TMP", "TEMP")
        else:
            home = _first_set(env, "HOME")
            base = str(Path(home) / ".config") if home else _first_set(env, "TMP", "TEMP", "TMPDIR")
    if base is None:
        base = tempfile.gettempdir()
    return Path(base) / "gmic"


def user_file(config: RuntimeConfig, env: Mapping[str, str] | None = None) -> Path:
    """The user command file, stored next to (not inside) the resources."""
    env = os.environ if env is None else env
    base = _configured_path(config)
    if base is None:
        names = ("APPDATA", "TMP", "TEMP") if _IS_WINDOWS else ("HOME", "TMP", "TEMP", "TMPDIR")
        base = _first_set(env, *names) or tempfile.gettempdir()
    return Path(base) / ("user.gmic" if _IS_WINDOWS else ".gmic")


def update_file(config: RuntimeConfig, env: Mapping[str, str] | None = None) -> Path:
    """The auto-update command file for the configured interpreter version."""
    return resources_dir(config, env) / f"update{config.interpreter_version}.gmic"


def init_resources_dir(config: RuntimeConfig, env: Mapping[str, str] | None = None) -> bool:
    """Create the resources directory if needed.

    Returns ``False`` when the directory cannot be created.
    """
    path = resources_dir(config, env)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.debug("Cannot create resources directory %s: %s", path, exc)
        return False
    return path.is_dir()
