#!/usr/bin/env python3
# filename: devenv-bootstrap/install.py
# -*- coding: utf-8 -*-
"""
Entry point for the development-environment bootstrap.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from bootstrap_installer.bootstrap_process import run_startup_sequence
from bootstrap_installer.bs_paths import plugin_manager_path
from bootstrap_installer.bs_runtime_path import (
    format_runtime_path,
    parse_runtime_path,
)
from common.logging_config import set_log_level, setup_service_logging
from config.config_loader import CONFIG_FILE_DEFAULT, load_app_settings
from config.config_models import AppSettings

SERVICE_NAME = "devenv-bootstrap"


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog=SERVICE_NAME,
        description="Make sure the editor's plugin manager is installed before its configuration loads.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE_DEFAULT,
        help=f"Path to the YAML configuration file (default: {CONFIG_FILE_DEFAULT})",
    )
    parser.add_argument(
        "--data-dir",
        dest="data_dir",
        default=None,
        help="Use this data directory instead of the platform default",
    )
    parser.add_argument(
        "--git-command",
        dest="git_command",
        default=None,
        help="Version control client used to fetch the plugin manager",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write JSON-structured logs to this file",
    )

    subparsers = parser.add_subparsers(
        dest="command", help="Command to execute", required=True
    )

    bootstrap_parser = subparsers.add_parser(
        "bootstrap",
        help="Install the plugin manager if missing, then load plugin declarations",
    )
    bootstrap_parser.add_argument(
        "--runtimepath",
        default="",
        help="Initial comma-separated runtime path",
    )

    subparsers.add_parser(
        "path", help="Print the plugin manager install path"
    )
    subparsers.add_parser(
        "plugins", help="List the declared plugins"
    )

    return parser.parse_args(args)


def _cmd_bootstrap(
    cli_args: argparse.Namespace,
    app_settings: AppSettings,
    logger: logging.Logger,
) -> int:
    success, context = run_startup_sequence(
        app_settings,
        logger,
        runtimepath=parse_runtime_path(cli_args.runtimepath),
    )
    print(f"plugin manager: {context['plugin_manager_path']}")
    print(f"runtimepath: {format_runtime_path(context['runtimepath'])}")
    print(f"plugins: {len(context.get('plugins', []))}")
    return 0 if success else 1


def _cmd_path(app_settings: AppSettings) -> int:
    print(plugin_manager_path(app_settings))
    return 0


def _cmd_plugins(app_settings: AppSettings) -> int:
    if not app_settings.plugins:
        print("No plugins declared.")
        return 0
    for plugin in app_settings.plugins:
        details = []
        if plugin.lazy is False:
            details.append("start")
        if plugin.event:
            details.append(f"on {plugin.event}")
        if plugin.dependencies:
            details.append(f"requires {', '.join(plugin.dependencies)}")
        suffix = f" ({'; '.join(details)})" if details else ""
        print(f"{plugin.source}{suffix}")
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the bootstrap CLI."""
    cli_args = parse_args(args)
    logger = setup_service_logging(
        SERVICE_NAME,
        log_level="DEBUG" if cli_args.verbose else None,
        log_file_path=cli_args.log_file,
    )

    try:
        app_settings = load_app_settings(
            cli_args, cli_args.config, current_logger=logger
        )
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    set_log_level(app_settings.log_level)

    if cli_args.command == "bootstrap":
        return _cmd_bootstrap(cli_args, app_settings, logger)
    if cli_args.command == "path":
        return _cmd_path(app_settings)
    if cli_args.command == "plugins":
        return _cmd_plugins(app_settings)

    logger.error(f"Unknown command: {cli_args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
