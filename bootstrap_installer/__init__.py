# bootstrap_installer/__init__.py
# -*- coding: utf-8 -*-
"""
Bootstrap installer for the editor configuration.

Ensures the plugin manager is present on disk before any plugin
configuration is loaded, then runs the rest of the startup sequence.
"""

from bootstrap_installer.bootstrap_process import run_startup_sequence
from bootstrap_installer.bs_plugin_manager import (
    DependencyUnavailableError,
    ensure_present,
)

__all__ = [
    "DependencyUnavailableError",
    "ensure_present",
    "run_startup_sequence",
]
