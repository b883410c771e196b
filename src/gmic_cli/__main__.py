"""Allow ``python -m gmic_cli`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m gmic_cli`` behaves identically to the ``gmic`` console
script.
"""

from __future__ import annotations

from gmic_cli.cli.app import cli

if __name__ == "__main__":
    cli()
