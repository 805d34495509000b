"""
Test suite for flow graph configuration.

Tests environment-driven settings and logging configuration.
"""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from core.flowgraph import (
    ConnectionSettings,
    FlowGraphSettings,
    LayoutSettings,
    LoggingSettings,
    StorageSettings,
    configure_logging,
    get_settings,
    reload_settings,
)


# ============================================================================
# SETTINGS TESTS
# ============================================================================

@pytest.mark.unit
class TestSettingsFromEnv:
    """Test loading settings from environment variables."""

    def test_defaults(self):
        settings = FlowGraphSettings.from_env()

        assert settings.connection.allow_self_loops is False
        assert settings.layout == LayoutSettings(x=100, start_y=100, first_step_y=250, spacing_y=200)
        assert settings.logging.level == "INFO"
        assert settings.storage.workflows_path == str(Path.cwd() / "workflows")

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("1", True), ("Yes", True), ("false", False), ("0", False),
    ])
    def test_allow_self_loops(self, monkeypatch, value, expected):
        monkeypatch.setenv("FLOWGRAPH_ALLOW_SELF_LOOPS", value)

        assert ConnectionSettings.from_env().allow_self_loops is expected

    def test_layout(self, monkeypatch):
        monkeypatch.setenv("FLOWGRAPH_LAYOUT_X", "10")
        monkeypatch.setenv("FLOWGRAPH_LAYOUT_SPACING_Y", "120.5")

        layout = LayoutSettings.from_env()

        assert layout.x == 10
        assert layout.spacing_y == 120.5
        assert layout.first_step_y == 250

    def test_layout_rejects_non_positive_spacing(self, monkeypatch):
        monkeypatch.setenv("FLOWGRAPH_LAYOUT_SPACING_Y", "0")

        with pytest.raises(ValueError):
            LayoutSettings.from_env()

    def test_layout_rejects_non_numeric_value(self, monkeypatch):
        monkeypatch.setenv("FLOWGRAPH_LAYOUT_START_Y", "top")

        with pytest.raises(ValidationError) as exc_info:
            LayoutSettings.from_env()

        assert exc_info.value.errors()[0]["loc"] == ("start_y",)

    def test_storage_explicit_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("WORKFLOWS_PATH", str(tmp_path / "explicit"))
        monkeypatch.setenv("CLAUDE_ROOT_PATH", str(tmp_path / "root"))

        assert StorageSettings.from_env().workflows_path == str(tmp_path / "explicit")

    def test_storage_under_claude_root(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CLAUDE_ROOT_PATH", str(tmp_path))

        assert StorageSettings.from_env().workflows_path == str(tmp_path / "workflows")

    def test_singleton_and_reload(self, monkeypatch):
        first = get_settings()
        assert get_settings() is first

        monkeypatch.setenv("FLOWGRAPH_ALLOW_SELF_LOOPS", "true")
        reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded.connection.allow_self_loops is True
        assert get_settings() is reloaded


# ============================================================================
# LOGGING TESTS
# ============================================================================

@pytest.mark.unit
class TestConfigureLogging:
    """Test applying the configured log level."""

    def test_level_from_settings(self):
        logger = configure_logging(LoggingSettings(level="debug"))

        assert logger.name == "core.flowgraph"
        assert logger.level == logging.DEBUG

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("FLOWGRAPH_LOG_LEVEL", "warning")

        assert configure_logging().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert configure_logging(LoggingSettings(level="chatty")).level == logging.INFO
