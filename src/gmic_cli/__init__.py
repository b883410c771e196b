"""gmic-cli: shell front-end for the G'MIC command interpreter.

Translates a process invocation into a single interpreter script and
maps the interpreter's outcome back to an exit code.
"""

from gmic_cli.version import __version__

__all__: list[str] = ["__version__"]
