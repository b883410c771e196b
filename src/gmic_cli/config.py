"""Runtime configuration read from ``GMIC_*`` environment variables.

Malformed values never abort startup: they fall back to the field
default.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INTERPRETER_VERSION: int = 350

_TRUE_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})


class RuntimeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GMIC_", case_sensitive=False)

    # Kept as raw text: the verbosity resolver applies its own parse rule.
    verbosity: str | None = None
    debug: bool = False
    path: str | None = None
    gimp_path: str | None = None
    log_level: str = "warning"
    interpreter_version: int = DEFAULT_INTERPRETER_VERSION

    @field_validator("debug", mode="before")
    @classmethod
    def _lenient_bool(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_VALUES
        return value

    @field_validator("interpreter_version", mode="before")
    @classmethod
    def _lenient_version(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return DEFAULT_INTERPRETER_VERSION
        return value


@lru_cache
def get_runtime_config() -> RuntimeConfig:
    return RuntimeConfig()
