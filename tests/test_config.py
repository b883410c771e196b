"""Tests for runtime configuration (config.py).

Values come from ``GMIC_*`` variables set with ``monkeypatch``; the
isolated environment fixture clears the cached config around each test.
"""

from __future__ import annotations

import pytest

from gmic_cli.cli import exit_codes
from gmic_cli.cli.app import main
from gmic_cli.config import DEFAULT_INTERPRETER_VERSION, RuntimeConfig, get_runtime_config


class TestRuntimeConfig:
    def test_defaults(self) -> None:
        config = RuntimeConfig(path=None)
        assert config.debug is False
        assert config.verbosity is None
        assert config.interpreter_version == DEFAULT_INTERPRETER_VERSION

    def test_values_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GMIC_DEBUG", "1")
        monkeypatch.setenv("GMIC_VERBOSITY", "3")
        monkeypatch.setenv("GMIC_INTERPRETER_VERSION", "362")

        config = get_runtime_config()

        assert config.debug is True
        assert config.verbosity == "3"
        assert config.interpreter_version == 362

    def test_getter_is_cached(self) -> None:
        assert get_runtime_config() is get_runtime_config()


class TestMalformedEnvironment:
    @pytest.mark.parametrize("value", ["", "maybe", "0", "off", "2"])
    def test_unrecognized_debug_is_false(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("GMIC_DEBUG", value)
        assert get_runtime_config().debug is False

    @pytest.mark.parametrize("value", ["TRUE", " yes ", "On"])
    def test_truthy_debug(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("GMIC_DEBUG", value)
        assert get_runtime_config().debug is True

    @pytest.mark.parametrize("value", ["3.5.0", "", "latest"])
    def test_bad_interpreter_version_uses_default(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("GMIC_INTERPRETER_VERSION", value)
        assert get_runtime_config().interpreter_version == DEFAULT_INTERPRETER_VERSION

    def test_startup_is_not_aborted(self, monkeypatch: pytest.MonkeyPatch, fake_factory) -> None:
        monkeypatch.setenv("GMIC_DEBUG", "maybe")
        monkeypatch.setenv("GMIC_INTERPRETER_VERSION", "3.5.0")

        assert main(["sp"], factory=fake_factory) == exit_codes.SUCCESS
        assert fake_factory.instances[0].scripts == ["cli_start , sp"]
