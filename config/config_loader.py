# config/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the application.

Handles loading settings from Pydantic model defaults, YAML files,
environment variables, and command-line arguments, applying a specific
order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (via Pydantic's BaseSettings initialization)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

CONFIG_FILE_DEFAULT = "config.yaml"


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates a dictionary `source` with values from another dictionary
    `overrides`. Nested dictionaries are merged key by key; any other value
    replaces the one in `source`. ``None`` values never overwrite an existing key.

    Parameters:
        source: Dict[str, Any]
            The dictionary to be updated. This dictionary gets modified in place.
        overrides: Dict[str, Any]
            The dictionary containing values to update or add to the `source`.

    Returns:
        Dict[str, Any]:
            The updated dictionary after applying all `overrides` to the input `source`.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _read_yaml_config(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    """Reads a YAML mapping from disk, returning an empty dict when unusable."""
    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.info(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded main configuration from {yaml_config_path}")
    return yaml_data


def _cli_overrides(cli_args: Optional[argparse.Namespace]) -> Dict[str, Any]:
    """Maps parsed command-line arguments onto AppSettings field names."""
    if cli_args is None:
        return {}

    overrides: Dict[str, Any] = {}
    data_dir = getattr(cli_args, "data_dir", None)
    if data_dir:
        overrides["data_dir"] = data_dir
    git_command = getattr(cli_args, "git_command", None)
    if git_command:
        overrides["git_command"] = git_command
    if getattr(cli_args, "verbose", False):
        overrides["log_level"] = "DEBUG"
    return overrides


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: str = CONFIG_FILE_DEFAULT,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables (``DEVENV_*`` and ``PLUGIN_MANAGER_*``), loaded by
       Pydantic BaseSettings.
    3. Values from the YAML configuration file (overrides defaults and environment).
    4. Command-Line Arguments (highest precedence, overrides all else).

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file. Relative paths
            are resolved against the current working directory.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        pydantic.ValidationError: If the merged values do not validate.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # Model Defaults < .env file < Environment Variables
    settings_after_env_and_defaults = AppSettings()
    current_values_dict = settings_after_env_and_defaults.model_dump(
        exclude_defaults=False
    )

    yaml_config_path = Path(config_file_path)
    if not yaml_config_path.is_absolute():
        yaml_config_path = Path.cwd() / yaml_config_path

    current_values_dict = _deep_update(
        current_values_dict, _read_yaml_config(yaml_config_path, logger_to_use)
    )
    current_values_dict = _deep_update(
        current_values_dict, _cli_overrides(cli_args)
    )

    final_settings = AppSettings.model_validate(current_values_dict)
    logger_to_use.debug(
        f"Resolved settings: data_dir={final_settings.data_dir}, "
        f"plugin_manager={final_settings.plugin_manager.name}, "
        f"plugins={len(final_settings.plugins)}"
    )
    return final_settings
