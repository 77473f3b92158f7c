# bootstrap_installer/bs_utils.py
# -*- coding: utf-8 -*-
import logging

# Symbols for bootstrap logging
BS_SYMBOLS = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "package": "📦",
    "debug": "🐛",
    "gear": "⚙️",
}


def get_bs_logger(name: str) -> logging.Logger:
    """
    Returns a logger for bootstrap modules.

    No handler or level is set here: records propagate to the root logger
    configured by ``common.logging_config.setup_logging``.
    """
    return logging.getLogger(f"bootstrap.{name.lower()}")
