# bootstrap_installer/bs_runtime_path.py
# -*- coding: utf-8 -*-
"""Runtime path handling: where the editor looks for plugin code."""

from pathlib import Path
from typing import List, Sequence, Union


def prepend_runtime_path(
    runtime_path: Sequence[str], entry: Union[str, Path]
) -> List[str]:
    """
    Returns a copy of ``runtime_path`` with ``entry`` first.

    An earlier occurrence of ``entry`` is moved rather than duplicated.
    """
    entry_str = str(entry)
    return [entry_str] + [p for p in runtime_path if p != entry_str]


def parse_runtime_path(value: str) -> List[str]:
    """Splits a comma-separated runtime path option, dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def format_runtime_path(runtime_path: Sequence[str]) -> str:
    """Joins runtime path entries back into the comma-separated option form."""
    return ",".join(runtime_path)
