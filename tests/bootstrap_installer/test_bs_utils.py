# tests/bootstrap_installer/test_bs_utils.py
# -*- coding: utf-8 -*-
import logging

from bootstrap_installer.bs_utils import get_bs_logger


def test_get_bs_logger_leaves_output_to_root():
    logger = get_bs_logger("PluginManager")

    assert logger.name == "bootstrap.pluginmanager"
    assert logger.handlers == []
    assert logger.propagate is True
    assert logger.level == logging.NOTSET


def test_get_bs_logger_follows_root_level_after_setup():
    logger = get_bs_logger("Startup")

    logging.getLogger().setLevel(logging.DEBUG)

    assert logger.isEnabledFor(logging.DEBUG)
