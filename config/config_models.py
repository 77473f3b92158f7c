# config/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the bootstrap, including
defaults, type annotations, and descriptions. It utilizes Pydantic for data
validation and settings management.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
APP_NAME_DEFAULT: str = "nvim"
GIT_COMMAND_DEFAULT: str = "git"
LOG_LEVEL_DEFAULT: str = "INFO"

PLUGIN_MANAGER_NAME_DEFAULT: str = "lazy.nvim"
PLUGIN_MANAGER_REPO_DEFAULT: str = "https://github.com/folke/lazy.nvim.git"
PLUGIN_MANAGER_BRANCH_DEFAULT: str = "stable"
PLUGIN_MANAGER_FILTER_DEFAULT: str = "blob:none"
PLUGIN_MANAGER_SUFFIX_DEFAULT: str = "/lazy/lazy.nvim"

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}

# "owner/name" as used by plugin managers for GitHub short sources
_PLUGIN_SOURCE_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


def _check_plugin_source(value: str) -> str:
    if not _PLUGIN_SOURCE_RE.match(value):
        raise ValueError(
            f"Plugin source '{value}' must look like 'owner/name'."
        )
    return value


class PluginManagerSettings(BaseSettings):
    """Where the plugin manager comes from and where it is installed."""
    model_config = SettingsConfigDict(
        env_prefix='PLUGIN_MANAGER_',
        extra='ignore'
    )

    name: str = Field(default=PLUGIN_MANAGER_NAME_DEFAULT,
                      description="Display name used in user-facing messages.")
    repo_url: str = Field(default=PLUGIN_MANAGER_REPO_DEFAULT,
                          description="Git URL the plugin manager is cloned from.")
    branch: str = Field(default=PLUGIN_MANAGER_BRANCH_DEFAULT,
                        description="Release branch to pin the clone to.")
    clone_filter: str = Field(default=PLUGIN_MANAGER_FILTER_DEFAULT,
                              description="Partial clone filter passed to git.")
    install_suffix: str = Field(default=PLUGIN_MANAGER_SUFFIX_DEFAULT,
                                description="Install location relative to the data directory.")

    @field_validator("install_suffix")
    @classmethod
    def _suffix_not_empty(cls, value: str) -> str:
        if not value.strip("/"):
            raise ValueError("install_suffix must name a location below the data directory.")
        return value


class PluginSpec(BaseModel):
    """A single declarative plugin entry handed to the plugin manager."""
    model_config = ConfigDict(extra="forbid")

    source: str = Field(description="Plugin repository as 'owner/name'.")
    lazy: Optional[bool] = Field(default=None, description="Load at startup when False.")
    priority: Optional[int] = Field(default=None, description="Load order for start plugins.")
    event: Optional[str] = Field(default=None, description="Editor event that triggers loading.")
    build: Optional[str] = Field(default=None, description="Command run after install or update.")
    dependencies: List[str] = Field(default_factory=list)
    opts: Dict[str, Any] = Field(default_factory=dict,
                                 description="Options table passed to the plugin's setup.")

    @field_validator("source")
    @classmethod
    def _validate_source(cls, value: str) -> str:
        return _check_plugin_source(value)

    @field_validator("dependencies")
    @classmethod
    def _validate_dependencies(cls, value: List[str]) -> List[str]:
        return [_check_plugin_source(dep) for dep in value]


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_prefix='DEVENV_', extra='ignore')

    app_name: str = Field(default=APP_NAME_DEFAULT,
                          description="Editor application name used for the data directory.")
    data_dir: Optional[Path] = Field(default=None,
                                     description="Override for the platform data directory.")
    git_command: str = Field(default=GIT_COMMAND_DEFAULT,
                             description="Version control client used for the fetch.")
    log_level: str = Field(default=LOG_LEVEL_DEFAULT, description="Logging level name.")

    plugin_manager: PluginManagerSettings = Field(default_factory=PluginManagerSettings)
    plugins: List[PluginSpec] = Field(default_factory=list)

    # Static symbols, could also be loaded from a separate static config if preferred
    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{value}'.")
        return level
