# bootstrap_installer/bs_plugin_manager.py
# -*- coding: utf-8 -*-
"""
Ensures the plugin manager is installed before any plugin configuration runs.

The check is existence only: whatever sits at the install path is taken to
be a usable install. When nothing is there, the manager is cloned once,
synchronously. If the clone fails the user is shown the raw git output,
asked to press a key, and the process exits with status 1.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Union

from bootstrap_installer.bs_messages import echo_chunks, wait_for_keypress
from bootstrap_installer.bs_utils import BS_SYMBOLS, get_bs_logger
from common.command_utils import run_command
from config.config_models import AppSettings

logger = get_bs_logger("PluginManager")

# Exit statuses reported when git itself could not be started
GIT_NOT_FOUND_STATUS = 127
GIT_NOT_EXECUTABLE_STATUS = 126


class DependencyUnavailableError(Exception):
    """The plugin manager could not be fetched into place."""

    def __init__(self, name: str, returncode: int, output: str):
        super().__init__(
            f"Failed to clone {name} (exit status {returncode})"
        )
        self.name = name
        self.returncode = returncode
        self.output = output


def build_clone_command(
    path: Union[str, Path], app_settings: AppSettings
) -> List[str]:
    """Returns the git arguments for a filtered clone pinned to the release branch."""
    pm = app_settings.plugin_manager
    return [
        app_settings.git_command,
        "clone",
        f"--filter={pm.clone_filter}",
        f"--branch={pm.branch}",
        pm.repo_url,
        str(path),
    ]


def fetch_plugin_manager(
    path: Union[str, Path],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> Tuple[int, str]:
    """
    Clones the plugin manager into ``path``.

    Returns:
        ``(exit status, combined stdout and stderr)``. A git executable that
        cannot be started is reported as status 127 (missing) or 126 (not
        executable) with the OS error as the output text.
    """
    effective_logger = current_logger or logger
    command = build_clone_command(path, app_settings)
    try:
        result = run_command(
            command,
            app_settings,
            check=False,
            merge_stderr=True,
            current_logger=effective_logger,
        )
    except FileNotFoundError as e:
        return GIT_NOT_FOUND_STATUS, f"{command[0]}: command not found ({e})"
    except OSError as e:
        return GIT_NOT_EXECUTABLE_STATUS, f"{command[0]}: {e}"
    return result.returncode, result.stdout or ""


def _clone_or_raise(
    path: Path, app_settings: AppSettings, effective_logger: logging.Logger
) -> None:
    returncode, output = fetch_plugin_manager(
        path, app_settings, effective_logger
    )
    if returncode != 0:
        raise DependencyUnavailableError(
            app_settings.plugin_manager.name, returncode, output
        )


def report_dependency_unavailable(
    error: DependencyUnavailableError,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """Shows the failure label, the raw git output and the exit prompt."""
    return echo_chunks(
        [
            (f"Failed to clone {error.name}:\n", "ErrorMsg"),
            (error.output, "WarningMsg"),
            ("\nPress any key to exit...", None),
        ],
        history=True,
        current_logger=current_logger or logger,
    )


def ensure_present(
    path: Union[str, Path],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Makes sure the plugin manager exists at ``path``.

    Args:
        path: Install location of the plugin manager.
        app_settings: Settings naming the repository, branch and git client.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        True once the plugin manager is present. Does not return when the
        clone fails: the process exits with status 1 after a keypress.
    """
    effective_logger = current_logger or logger
    install_path = Path(path)
    name = app_settings.plugin_manager.name

    if install_path.exists():
        effective_logger.debug(
            f"{name} already present at {install_path}. Nothing to do."
        )
        return True

    effective_logger.info(
        f"{BS_SYMBOLS['package']} {name} not found at {install_path}. "
        f"Cloning {app_settings.plugin_manager.repo_url} "
        f"(branch {app_settings.plugin_manager.branch})..."
    )
    try:
        _clone_or_raise(install_path, app_settings, effective_logger)
    except DependencyUnavailableError as e:
        report_dependency_unavailable(e, effective_logger)
        wait_for_keypress()
        sys.exit(1)

    effective_logger.info(
        f"{BS_SYMBOLS['success']} {name} installed at {install_path}."
    )
    return True
