"""Tests for logging configuration."""

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from doccheck.logging import (
    CONFIG_DIR,
    LoggingError,
    get_config_path,
    load_config,
    setup_logging,
)


@pytest.fixture(autouse=True)
def default_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Select the base configuration unless a test sets DOCCHECK_ENV."""
    monkeypatch.delenv("DOCCHECK_ENV", raising=False)


class TestGetConfigPath:
    """Tests for configuration file selection."""

    def test_default_config(self) -> None:
        """Without an environment the base configuration is used."""
        assert get_config_path() == CONFIG_DIR / "logging.yaml"

    @pytest.mark.parametrize("environment", ["dev", "development", "DEV"])
    def test_dev_environment(self, environment: str) -> None:
        """Development aliases select the dev configuration."""
        assert get_config_path(environment=environment) == CONFIG_DIR / "logging-dev.yaml"

    def test_environment_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """DOCCHECK_ENV selects the configuration when not given explicitly."""
        monkeypatch.setenv("DOCCHECK_ENV", "development")

        assert get_config_path() == CONFIG_DIR / "logging-dev.yaml"

    def test_missing_environment_config_falls_back(self) -> None:
        """Environments without their own file use the base configuration."""
        assert get_config_path(environment="prod") == CONFIG_DIR / "logging.yaml"

    def test_unknown_named_config_falls_back(self) -> None:
        """A named config that does not exist falls back to the base one."""
        assert get_config_path("missing") == CONFIG_DIR / "logging.yaml"


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_shipped_configs_are_valid(self) -> None:
        """Every shipped configuration routes doccheck logs without propagation."""
        for path in CONFIG_DIR.glob("*.yaml"):
            config = load_config(path)

            assert config["version"] == 1
            assert config["loggers"]["doccheck"]["propagate"] is False

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Unparseable YAML raises LoggingError."""
        path = tmp_path / "broken.yaml"
        path.write_text("handlers: [unclosed", encoding="utf-8")

        with pytest.raises(LoggingError, match="Failed to parse"):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        """A YAML document that is not a mapping is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(LoggingError, match="Invalid configuration format"):
            load_config(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """An unreadable file raises LoggingError."""
        with pytest.raises(LoggingError, match="Failed to read"):
            load_config(tmp_path / "absent.yaml")


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_configures_rich_stderr_handler(self) -> None:
        """The doccheck logger gets a RichHandler at the requested level."""
        setup_logging(level="WARNING")

        doccheck_logger = logging.getLogger("doccheck")
        assert doccheck_logger.level == logging.WARNING
        assert any(isinstance(h, RichHandler) for h in doccheck_logger.handlers)
        assert doccheck_logger.propagate is False

    def test_debug_level_lowers_handler_levels(self) -> None:
        """A DEBUG override lets debug records reach the console handler."""
        setup_logging(level="DEBUG")

        handlers = logging.getLogger("doccheck").handlers
        assert all(h.level == logging.DEBUG for h in handlers)

    def test_invalid_level_falls_back_to_basic_logging(self) -> None:
        """An unknown level does not raise; basic logging is used instead."""
        setup_logging(level="LOUD")

        assert logging.getLogger().handlers

    def test_unreadable_config_falls_back(self, tmp_path: Path) -> None:
        """A broken configuration file falls back to basic logging."""
        path = tmp_path / "broken.yaml"
        path.write_text("version: 1\nhandlers: {console: {class: no.such.Handler}}\n")

        setup_logging(config_path=path, level="INFO")

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert root.handlers
