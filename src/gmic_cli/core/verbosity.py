"""Initial verbosity resolution.

Without arguments the default level is used as-is. Otherwise, in
priority order, first match wins:

1. ``GMIC_VERBOSITY`` holding an integer (one trailing character allowed).
2. Entry-point permission granted by the script-file pre-scan.
3. A help invocation (``help``, ``-help``, ``h``, ``-h``) with at most
   one extra argument.
4. A lone ``version`` / ``-version`` argument.
5. The default level.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

DEFAULT_VERBOSITY: int = 1
QUIET_VERBOSITY: int = 0

_HELP_TOKENS: frozenset[str] = frozenset({"help", "-help", "h", "-h"})
_VERSION_TOKENS: frozenset[str] = frozenset({"version", "-version"})

_OVERRIDE = re.compile(r"\s*([+-]?\d+)(\D)?")


def parse_verbosity_override(value: str | None) -> int | None:
    """Parse an environment override, or return ``None`` if unusable."""
    if value is None:
        return None
    match = _OVERRIDE.fullmatch(value)
    if match is None:
        return None
    return int(match.group(1))


def resolve_verbosity(
    args: Sequence[str],
    *,
    env_value: str | None = None,
    allow_entrypoint: bool = False,
) -> int:
    """Compute the verbosity the main interpreter starts with."""
    if not args:
        return DEFAULT_VERBOSITY
    override = parse_verbosity_override(env_value)
    if override is not None:
        return override
    if allow_entrypoint:
        return QUIET_VERBOSITY
    if len(args) in (1, 2) and args[0] in _HELP_TOKENS:
        return QUIET_VERBOSITY
    if len(args) == 1 and args[0] in _VERSION_TOKENS:
        return QUIET_VERBOSITY
    return DEFAULT_VERBOSITY
