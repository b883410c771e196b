"""Single source of truth for the package version."""

from __future__ import annotations

__version__: str = "3.5.0"
