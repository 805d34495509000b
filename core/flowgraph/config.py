"""
Flow Graph Configuration

Environment-based configuration for the graph editor core.

Version: 1.0.0
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .constants import (
    ENV_ALLOW_SELF_LOOPS,
    ENV_LAYOUT_X,
    ENV_LAYOUT_START_Y,
    ENV_LAYOUT_FIRST_STEP_Y,
    ENV_LAYOUT_SPACING_Y,
    ENV_WORKFLOWS_PATH,
    ENV_CLAUDE_ROOT_PATH,
    ENV_LOG_LEVEL,
    DEFAULT_WORKFLOWS_DIR,
)
from .defaults import (
    DEFAULT_ALLOW_SELF_LOOPS,
    DEFAULT_LAYOUT_X,
    DEFAULT_LAYOUT_START_Y,
    DEFAULT_LAYOUT_FIRST_STEP_Y,
    DEFAULT_LAYOUT_SPACING_Y,
    DEFAULT_STORAGE_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOGGER_NAME,
)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConnectionSettings(BaseModel):
    """Connection gesture policy."""
    allow_self_loops: bool = Field(default=DEFAULT_ALLOW_SELF_LOOPS)

    @classmethod
    def from_env(cls) -> "ConnectionSettings":
        """Load connection policy from environment variables."""
        return cls(allow_self_loops=_env_bool(ENV_ALLOW_SELF_LOOPS, DEFAULT_ALLOW_SELF_LOOPS))


class LayoutSettings(BaseModel):
    """Vertical layout used when rebuilding a graph from a step list."""
    x: float = Field(default=DEFAULT_LAYOUT_X)
    start_y: float = Field(default=DEFAULT_LAYOUT_START_Y)
    first_step_y: float = Field(default=DEFAULT_LAYOUT_FIRST_STEP_Y)
    spacing_y: float = Field(default=DEFAULT_LAYOUT_SPACING_Y, gt=0)

    @classmethod
    def from_env(cls) -> "LayoutSettings":
        """
        Load layout offsets from environment variables.

        Raises:
            ValidationError: If a value is not a number or the spacing is not positive
        """
        env_fields = {
            "x": ENV_LAYOUT_X,
            "start_y": ENV_LAYOUT_START_Y,
            "first_step_y": ENV_LAYOUT_FIRST_STEP_Y,
            "spacing_y": ENV_LAYOUT_SPACING_Y,
        }
        return cls.model_validate(
            {field: os.environ[var] for field, var in env_fields.items() if var in os.environ}
        )


class StorageSettings(BaseModel):
    """Where saved workflow documents live."""
    workflows_path: str = Field(default=DEFAULT_STORAGE_PATH)

    @classmethod
    def from_env(cls) -> "StorageSettings":
        """
        Resolve the workflows directory.

        ``WORKFLOWS_PATH`` wins; otherwise ``$CLAUDE_ROOT_PATH/workflows``;
        otherwise ``./workflows``.
        """
        explicit = os.environ.get(ENV_WORKFLOWS_PATH)
        if explicit:
            return cls(workflows_path=explicit)
        claude_root = os.environ.get(ENV_CLAUDE_ROOT_PATH)
        if claude_root:
            return cls(workflows_path=str(Path(claude_root) / DEFAULT_WORKFLOWS_DIR))
        return cls(workflows_path=str(Path.cwd() / DEFAULT_WORKFLOWS_DIR))


class LoggingSettings(BaseModel):
    """Log level for the ``core.flowgraph`` logger tree."""
    level: str = Field(default=DEFAULT_LOG_LEVEL)

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        return cls(level=os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper())


class FlowGraphSettings(BaseModel):
    """Graph editor settings."""
    connection: ConnectionSettings = Field(default_factory=ConnectionSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_env(cls) -> "FlowGraphSettings":
        """Load all settings from environment."""
        return cls(
            connection=ConnectionSettings.from_env(),
            layout=LayoutSettings.from_env(),
            storage=StorageSettings.from_env(),
            logging=LoggingSettings.from_env(),
        )


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """Apply the configured level to the flow graph logger and return it."""
    settings = settings or LoggingSettings.from_env()
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.level.upper(), logging.INFO))
    return logger


# Global settings instance
_settings: Optional[FlowGraphSettings] = None


def get_settings() -> FlowGraphSettings:
    """Get flow graph settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = FlowGraphSettings.from_env()
    return _settings


def reload_settings() -> FlowGraphSettings:
    """Reload settings from environment."""
    global _settings
    _settings = FlowGraphSettings.from_env()
    return _settings
