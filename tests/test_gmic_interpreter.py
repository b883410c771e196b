"""Tests for the gmic binding adapter (infra/gmic_interpreter.py).

The real binding is never imported: ``sys.modules["gmic"]`` is replaced
by a stand-in module for the duration of each test.
"""

from __future__ import annotations

import sys
import types
from pathlib import Path

import pytest

from gmic_cli.exceptions import CommandFileError, EnvironmentError, InterpreterError
from gmic_cli.infra.gmic_interpreter import GmicInterpreter


class _GmicException(Exception):
    pass


class _RecordingBinding:
    """Captures each pipeline and the command file it loads."""

    def __init__(self, error: Exception | None = None) -> None:
        self.pipelines: list[str] = []
        self.command_files: list[str] = []
        self._error = error

    def run(self, pipeline: str) -> None:
        self.pipelines.append(pipeline)
        if ' m "' in pipeline:
            path = pipeline.split(' m "', 1)[1].split('"', 1)[0]
            self.command_files.append(Path(path).read_text(encoding="utf-8"))
        if self._error is not None:
            raise self._error


@pytest.fixture
def binding(monkeypatch: pytest.MonkeyPatch) -> _RecordingBinding:
    recorder = _RecordingBinding()
    module = types.ModuleType("gmic")
    module.run = recorder.run
    module.GmicException = _GmicException
    monkeypatch.setitem(sys.modules, "gmic", module)
    return recorder


def _failing_binding(monkeypatch: pytest.MonkeyPatch, error: Exception) -> None:
    module = types.ModuleType("gmic")
    module.run = _RecordingBinding(error).run
    module.GmicException = _GmicException
    monkeypatch.setitem(sys.modules, "gmic", module)


# ---------------------------------------------------------------------------
# Optional dependency
# ---------------------------------------------------------------------------

class TestMissingBinding:
    def test_run_raises_environment_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "gmic", None)
        with pytest.raises(EnvironmentError, match="pip install gmic"):
            GmicInterpreter().run("echo hi")

    def test_registration_does_not_need_binding(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "gmic", None)
        interpreter = GmicInterpreter(builtins=False)
        interpreter.add_commands("hello : echo $1\n")
        assert interpreter.command_has_arguments("hello") is True


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

class TestAddCommands:
    def test_entry_point_is_dropped_by_default(self) -> None:
        interpreter = GmicInterpreter()
        found = interpreter.add_commands("_main_ : echo\nother : echo\n")
        assert found is False
        assert "_main_" not in interpreter.registry
        assert "other" in interpreter.registry

    def test_entry_point_detection(self) -> None:
        interpreter = GmicInterpreter(builtins=False)
        assert interpreter.add_commands("_main_ : echo $*\n", "s.gmic", detect_entrypoint=True)
        assert interpreter.command_has_arguments("_main_") is True

    def test_unknown_command(self) -> None:
        assert GmicInterpreter().command_has_arguments("nope") is None

    def test_invalid_source(self) -> None:
        with pytest.raises(CommandFileError):
            GmicInterpreter().add_commands("stray text\n", "bad.gmic")


# ---------------------------------------------------------------------------
# Running
# ---------------------------------------------------------------------------

class TestRun:
    def test_prelude_restores_state(self, binding: _RecordingBinding) -> None:
        interpreter = GmicInterpreter()
        interpreter.host = "cli"
        interpreter.verbosity = 0

        interpreter.run("sp lena")

        (pipeline,) = binding.pipelines
        assert pipeline == "v 0 _host=cli v 0 sp lena"

    def test_registered_commands_are_loaded(self, binding: _RecordingBinding) -> None:
        interpreter = GmicInterpreter()
        interpreter.add_commands("cli_start : \nmine : blur $1\n")

        interpreter.run("mine 3")

        (content,) = binding.command_files
        assert "mine : blur $1" in content
        assert content.startswith("cli_start : ")

    def test_no_command_file_without_registrations(self, binding: _RecordingBinding) -> None:
        GmicInterpreter().run("echo hi")
        assert " m " not in binding.pipelines[0]
        assert binding.command_files == []

    def test_binding_error_sets_status(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _failing_binding(monkeypatch, _GmicException("*** quit *** 4"))
        interpreter = GmicInterpreter()

        with pytest.raises(InterpreterError):
            interpreter.run("quit 4")

        assert interpreter.status == "*** quit *** 4"

    def test_binding_error_names_command(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _failing_binding(monkeypatch, _GmicException("*** Error *** Command 'blur': Invalid argument '-'."))

        with pytest.raises(InterpreterError) as exc_info:
            GmicInterpreter().run("blur -")

        assert exc_info.value.command == "blur"

    def test_binding_error_without_command(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _failing_binding(monkeypatch, _GmicException("Out of memory."))

        with pytest.raises(InterpreterError) as exc_info:
            GmicInterpreter().run("sp")

        assert exc_info.value.command == ""

    def test_unexpected_error_is_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _failing_binding(monkeypatch, RuntimeError("segfault avoided"))

        with pytest.raises(InterpreterError, match="Unexpected interpreter error"):
            GmicInterpreter().run("sp")

    def test_status_is_reset_between_runs(self, binding: _RecordingBinding) -> None:
        interpreter = GmicInterpreter()
        interpreter.status = "*** old *** 1"
        interpreter.run("sp")
        assert interpreter.status == ""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

class TestEntryPoint:
    def _interpreter(self, allow: bool = True) -> GmicInterpreter:
        interpreter = GmicInterpreter()
        interpreter.add_commands(
            "_main_ :\n  echo $1\n", "/tmp/hello.gmic", detect_entrypoint=True
        )
        interpreter.allow_entrypoint = allow
        return interpreter

    def test_main_called_with_argument(self, binding: _RecordingBinding) -> None:
        self._interpreter().run("cli_start , /tmp/hello.gmic 42")
        assert binding.pipelines[0].endswith(" cli_start , _main_ 42")

    def test_main_called_without_argument(self, binding: _RecordingBinding) -> None:
        self._interpreter().run("cli_start , /tmp/hello.gmic")
        assert binding.pipelines[0].endswith(" cli_start , _main_")

    def test_quoted_script_path(self, binding: _RecordingBinding) -> None:
        self._interpreter().run('cli_start , "/tmp/hello.gmic" 42')
        assert binding.pipelines[0].endswith(" cli_start , _main_ 42")

    def test_script_kept_when_not_allowed(self, binding: _RecordingBinding) -> None:
        self._interpreter(allow=False).run("cli_start , /tmp/hello.gmic 42")
        assert binding.pipelines[0].endswith(" cli_start , /tmp/hello.gmic 42")

    def test_script_kept_without_entry_point(self, binding: _RecordingBinding) -> None:
        interpreter = GmicInterpreter()
        interpreter.allow_entrypoint = True
        interpreter.run("cli_start , /tmp/hello.gmic")
        assert binding.pipelines[0].endswith(" cli_start , /tmp/hello.gmic")
