# bootstrap_installer/bs_paths.py
# -*- coding: utf-8 -*-
"""
Resolution of the editor data directory and of the plugin manager's
install location beneath it.

Both functions are pure: the same inputs always produce the same path.
"""

import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Union

from config.config_models import AppSettings


def get_data_dir(
    app_name: str = "nvim",
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
    home: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Returns the platform-standard user data directory for ``app_name``.

    Follows the editor's own convention:

    - POSIX: ``$XDG_DATA_HOME/<app_name>``, or ``~/.local/share/<app_name>``
      when the variable is unset or empty.
    - Windows: ``%LOCALAPPDATA%/<app_name>-data``, or
      ``~/AppData/Local/<app_name>-data``.

    Args:
        app_name: Application name, the last component of the directory.
        environ: Environment mapping to consult. Defaults to ``os.environ``.
        platform: Platform identifier as in ``sys.platform``.
        home: Home directory. Defaults to ``Path.home()``.
    """
    environ = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform
    home_dir = Path(home) if home is not None else Path.home()

    if platform.startswith("win"):
        base = environ.get("LOCALAPPDATA") or str(home_dir / "AppData" / "Local")
        return Path(base) / f"{app_name}-data"

    base = environ.get("XDG_DATA_HOME") or str(home_dir / ".local" / "share")
    return Path(base) / app_name


def resolve_install_path(data_dir: Union[str, Path], suffix: str) -> Path:
    """
    Joins the data directory and the fixed install suffix.

    A leading separator on ``suffix`` is ignored, so ``/home/u/.data`` and
    ``/lazy/lazy.nvim`` give ``/home/u/.data/lazy/lazy.nvim``.

    Raises:
        ValueError: If ``suffix`` does not name anything below ``data_dir``.
    """
    relative = suffix.strip("/")
    if not relative:
        raise ValueError("Install suffix must not be empty.")
    return Path(data_dir) / relative


def plugin_manager_path(app_settings: AppSettings) -> Path:
    """Install path of the plugin manager for the given settings."""
    data_dir = app_settings.data_dir or get_data_dir(app_settings.app_name)
    return resolve_install_path(
        data_dir, app_settings.plugin_manager.install_suffix
    )
