# config/__init__.py
# -*- coding: utf-8 -*-
"""
Settings models and the layered loader (defaults, environment, YAML, CLI).
"""
