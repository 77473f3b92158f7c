# bootstrap_installer/bs_messages.py
# -*- coding: utf-8 -*-
"""
User-facing message surface used when the bootstrap cannot continue.

A message is a list of ``(text, highlight_group)`` chunks, the same shape the
editor's echo API takes. Highlight groups are rendered as ANSI colours when
the output stream is a terminal and dropped otherwise.
"""

import logging
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from bootstrap_installer.bs_utils import get_bs_logger

logger = get_bs_logger("Messages")

MessageChunk = Tuple[str, Optional[str]]

ANSI_RESET = "\033[0m"
HIGHLIGHT_COLOURS = {
    "ErrorMsg": "\033[31m",
    "WarningMsg": "\033[33m",
    "MoreMsg": "\033[32m",
}


def _is_tty(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def render_chunks(chunks: Sequence[MessageChunk], colour: bool = False) -> str:
    """Flattens chunks into one string, optionally with ANSI highlighting."""
    parts: List[str] = []
    for text, group in chunks:
        code = HIGHLIGHT_COLOURS.get(group) if (colour and group) else None
        parts.append(f"{code}{text}{ANSI_RESET}" if code else text)
    return "".join(parts)


def echo_chunks(
    chunks: Sequence[MessageChunk],
    history: bool = True,
    stream: Optional[TextIO] = None,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Writes a multi-segment message to the user-facing output surface.

    Args:
        chunks: ``(text, highlight_group)`` pairs, written in order.
        history: Also record the plain message through the logger. When the
            message went to stderr the record is flagged so the console
            handler does not print it a second time.
        stream: Output stream. Defaults to ``sys.stderr``.
        current_logger: Logger used for the history record.

    Returns:
        The plain (uncoloured) message text.
    """
    out = stream if stream is not None else sys.stderr
    plain = render_chunks(chunks)
    out.write(render_chunks(chunks, colour=_is_tty(out)))
    if not plain.endswith("\n"):
        out.write("\n")
    out.flush()

    if history:
        (current_logger or logger).error(
            plain, extra={"echoed_to_user": out is sys.stderr}
        )
    return plain


def wait_for_keypress(stream: Optional[TextIO] = None) -> str:
    """
    Blocks until a single character is read from the input stream.

    On a terminal the read happens in raw mode so that any key, not just
    Enter, releases it. There is no timeout. Returns ``""`` at end of input.
    """
    in_stream = stream if stream is not None else sys.stdin

    if not _is_tty(in_stream):
        return in_stream.read(1)

    if sys.platform.startswith("win"):
        import msvcrt

        return msvcrt.getwch()

    import termios
    import tty

    fd = in_stream.fileno()
    saved_attrs = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return in_stream.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved_attrs)
