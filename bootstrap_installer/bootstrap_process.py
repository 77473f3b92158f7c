# bootstrap_installer/bootstrap_process.py
# -*- coding: utf-8 -*-
"""
The editor startup sequence.

Startup is an explicit, ordered list of stages run by the centralized
orchestrator. The plugin manager bootstrap is the first stage and acts as a
barrier: if the clone fails the process exits inside that stage, so the
runtime path is never touched and no plugin declaration is handed over.

Stages share state through the orchestrator context:

- ``plugin_manager_path``: install location of the plugin manager
- ``runtimepath``: runtime path entries, plugin manager first
- ``plugins``: validated plugin declarations
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from bootstrap_installer.bs_paths import plugin_manager_path
from bootstrap_installer.bs_plugin_manager import ensure_present
from bootstrap_installer.bs_runtime_path import prepend_runtime_path
from bootstrap_installer.bs_utils import BS_SYMBOLS, get_bs_logger
from common.logging_config import log_performance
from common.orchestrator import Orchestrator
from config.config_models import AppSettings, PluginSpec

logger = get_bs_logger("Startup")


def ensure_plugin_manager(
    context: Dict[str, Any],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> str:
    """Stage 1: install the plugin manager if it is missing."""
    install_path = plugin_manager_path(app_settings)
    ensure_present(install_path, app_settings, current_logger=current_logger)
    context["plugin_manager_path"] = str(install_path)
    return str(install_path)


def register_plugin_manager(
    context: Dict[str, Any], app_settings: AppSettings, **kwargs
) -> List[str]:
    """Stage 2: put the plugin manager first on the runtime path."""
    install_path = context.get("plugin_manager_path")
    if not install_path:
        raise RuntimeError(
            "Plugin manager path is unknown; the bootstrap stage has not run."
        )
    context["runtimepath"] = prepend_runtime_path(
        context.get("runtimepath", []), install_path
    )
    return context["runtimepath"]


def load_plugin_declarations(
    context: Dict[str, Any], app_settings: AppSettings, **kwargs
) -> int:
    """Stage 3: hand the plugin declarations to the plugin manager."""
    install_path = context.get("plugin_manager_path")
    if not install_path or install_path not in context.get("runtimepath", []):
        raise RuntimeError(
            "Plugin declarations requested before the plugin manager is on the runtime path."
        )

    plugins: List[PluginSpec] = list(app_settings.plugins)
    context["plugins"] = plugins
    for plugin in plugins:
        logger.debug(f"Declared plugin {plugin.source}")
    logger.info(
        f"{BS_SYMBOLS['info']} {len(plugins)} plugin(s) declared for "
        f"{app_settings.plugin_manager.name}."
    )
    return len(plugins)


@log_performance
def run_startup_sequence(
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
    runtimepath: Optional[List[str]] = None,
) -> Tuple[bool, Dict[str, Any]]:
    """
    Runs the startup stages in order.

    Args:
        app_settings: The application settings.
        logger: An optional logger instance for the orchestrator.
        runtimepath: Initial runtime path entries.

    Returns:
        A tuple of (success, context). A failed clone does not return; it
        ends the process with exit status 1.
    """
    effective_logger = logger or get_bs_logger("Orchestrator")

    orchestrator = Orchestrator(app_settings, effective_logger)
    orchestrator.context["runtimepath"] = list(runtimepath or [])

    orchestrator.add_task(
        "Plugin Manager Bootstrap",
        ensure_plugin_manager,
        kwargs={"current_logger": effective_logger},
    )
    orchestrator.add_task("Runtime Path", register_plugin_manager)
    orchestrator.add_task("Plugin Declarations", load_plugin_declarations)

    success = orchestrator.run()
    return success, orchestrator.context
