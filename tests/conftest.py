"""Shared pytest fixtures and configuration for the gmic-cli test suite.

Guidelines
----------
* The ``gmic`` binding is never required: interpreters are faked at the
  protocol boundary.
* Tests must not depend on the user's environment: every ``GMIC_*``
  variable is cleared and the command-file directory points into
  ``tmp_path``.
* No test installs a real signal handler.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest

from gmic_cli.cli.console import console
from gmic_cli.config import get_runtime_config
from gmic_cli.core.commands import ENTRYPOINT_COMMAND, CommandRegistry, parse_command_source
from gmic_cli.utils.logging import configure_logging

_GMIC_ENV_VARS: tuple[str, ...] = (
    "GMIC_VERBOSITY",
    "GMIC_DEBUG",
    "GMIC_PATH",
    "GMIC_GIMP_PATH",
    "GMIC_LOG_LEVEL",
    "GMIC_INTERPRETER_VERSION",
)


# ---------------------------------------------------------------------------
# Fake interpreter
# ---------------------------------------------------------------------------

class FakeInterpreter:
    """In-memory :class:`~gmic_cli.core.protocols.Interpreter`."""

    def __init__(
        self,
        *,
        builtins: bool = True,
        run_error: Exception | None = None,
        status: str = "",
        add_error: Exception | None = None,
    ) -> None:
        self.builtins = builtins
        self.verbosity = 1
        self.allow_entrypoint = False
        self.status = ""
        self.host = ""
        self.registry = CommandRegistry()
        self.sources: list[tuple[str, str | None]] = []
        self.scripts: list[str] = []
        self._run_error = run_error
        self._final_status = status
        self._add_error = add_error

    def add_commands(
        self,
        source: str,
        filename: str | None = None,
        *,
        debug: bool = False,
        detect_entrypoint: bool = False,
    ) -> bool:
        if self._add_error is not None:
            raise self._add_error
        definitions = parse_command_source(source, filename)
        if not detect_entrypoint:
            definitions = tuple(d for d in definitions if d.name != ENTRYPOINT_COMMAND)
        self.registry.extend(definitions)
        self.sources.append((source, filename))
        return detect_entrypoint and any(d.name == ENTRYPOINT_COMMAND for d in definitions)

    def command_has_arguments(self, name: str) -> bool | None:
        return self.registry.has_arguments(name)

    def run(self, script: str) -> None:
        self.scripts.append(script)
        self.status = self._final_status
        if self._run_error is not None:
            raise self._run_error


@dataclass
class _Planned:
    run_error: Exception | None = None
    status: str = ""
    add_error: Exception | None = None


class FakeFactory:
    """Interpreter factory handing out :class:`FakeInterpreter` instances.

    Behaviours queued with :meth:`plan` apply to instances in creation
    order; unplanned instances succeed.
    """

    def __init__(self) -> None:
        self.instances: list[FakeInterpreter] = []
        self._plans: list[_Planned] = []

    def plan(
        self,
        *,
        run_error: Exception | None = None,
        status: str = "",
        add_error: Exception | None = None,
    ) -> FakeFactory:
        self._plans.append(_Planned(run_error=run_error, status=status, add_error=add_error))
        return self

    def __call__(self, *, builtins: bool = True) -> FakeInterpreter:
        planned = self._plans.pop(0) if self._plans else _Planned()
        instance = FakeInterpreter(
            builtins=builtins,
            run_error=planned.run_error,
            status=planned.status,
            add_error=planned.add_error,
        )
        self.instances.append(instance)
        return instance


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_factory() -> FakeFactory:
    return FakeFactory()


@pytest.fixture
def gmic_home(tmp_path: Path) -> Path:
    """Directory used as ``GMIC_PATH`` by the isolated environment."""
    home = tmp_path / "gmic_home"
    home.mkdir()
    return home


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
    gmic_home: Path,
) -> Iterator[None]:
    for name in _GMIC_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GMIC_PATH", str(gmic_home))
    monkeypatch.setattr("gmic_cli.cli.app.install_crash_handler", lambda: False)
    get_runtime_config.cache_clear()
    yield
    get_runtime_config.cache_clear()
    # main() may have pointed both at a capture stream that is now closed.
    console.use_stdout(False)
    configure_logging()
