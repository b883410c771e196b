"""Infrastructure layer: filesystem and interpreter-binding integration.

This layer wraps all interaction with the ``gmic`` binding and the
filesystem. Every raw third-party exception is caught here and either
re-raised as a :class:`~gmic_cli.exceptions.GmicCliError` subclass or
turned into a degraded result.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from gmic_cli.infra.cimg_loader import decode_cimg, load_cimg, load_raw
from gmic_cli.infra.gmic_interpreter import GmicInterpreter
from gmic_cli.infra.paths import init_resources_dir, resources_dir, update_file, user_file
from gmic_cli.infra.startup_files import load_update_file, load_user_file, read_script_file

__all__: list[str] = [
    "GmicInterpreter",
    "decode_cimg",
    "init_resources_dir",
    "load_cimg",
    "load_raw",
    "load_update_file",
    "load_user_file",
    "read_script_file",
    "resources_dir",
    "update_file",
    "user_file",
]
