"""Display surface abstraction for the configuration editor.

Provides a ``Surface`` protocol (a grid-addressed display with discrete
attribute toggles and blocking key reads) and ``AnsiSurface``, a concrete
implementation on ``sys.stdin``/``sys.stdout`` that manages raw mode, the
alternate screen and cursor visibility via ANSI escape sequences.
"""

from __future__ import annotations

import codecs
import logging
import os
import sys
import termios
import tty
from collections import deque
from typing import Protocol

from egawari.attributes import Color
from egawari.keys import KeyId, parse_key

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_CLEAR_TO_EOL = "\x1b[K"
_MOVE_FMT = "\x1b[{};{}H"
_BOLD_ON = "\x1b[1m"
_BOLD_OFF = "\x1b[22m"
_COLOR_FMT = "\x1b[{}m"
_ATTRIBUTES_OFF = "\x1b[0m"

ESC = "\x1b"


# ---------------------------------------------------------------------------
# Input splitting
# ---------------------------------------------------------------------------


def _sequence_end(data: str, start: int) -> int | None:
    """Return the index just past the escape sequence at *start*.

    Returns ``None`` when a CSI or SS3 sequence is still missing bytes.  An
    ESC followed by anything else is a key of its own.
    """
    introducer = data[start + 1 : start + 2]
    if introducer == "[":
        for i in range(start + 2, len(data)):
            if 0x40 <= ord(data[i]) <= 0x7E:
                return i + 1
        return None
    if introducer == "O":
        return start + 3 if len(data) >= start + 3 else None
    return start + 1


def _split_keys(data: str) -> tuple[list[str], str]:
    """Split decoded input into one string per key press.

    Returns (keys, remainder), where remainder is an incomplete escape
    sequence to prepend to the next read.
    """
    keys: list[str] = []
    pos = 0
    while pos < len(data):
        if data[pos] != ESC:
            keys.append(data[pos])
            pos += 1
            continue
        end = _sequence_end(data, pos)
        if end is None:
            return keys, data[pos:]
        keys.append(data[pos:end])
        pos = end
    return keys, ""


# ---------------------------------------------------------------------------
# Surface protocol
# ---------------------------------------------------------------------------


class Surface(Protocol):
    """Interface for the display the editor draws on."""

    def move(self, row: int, col: int) -> None: ...

    def write(self, text: str) -> None: ...

    def set_bold(self, bold: bool) -> None: ...

    def set_color(self, color: Color) -> None: ...

    def clear_to_eol(self) -> None: ...

    def refresh(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def read_key(self) -> KeyId | None: ...


# ---------------------------------------------------------------------------
# AnsiSurface implementation
# ---------------------------------------------------------------------------


class AnsiSurface:
    """Surface backed by the controlling terminal.

    Use as a context manager: entering switches to raw mode and the
    alternate screen, leaving restores the terminal.  Output is buffered
    until :meth:`refresh`.
    """

    def __init__(self, fd: int | None = None) -> None:
        self._pending: list[str] = []
        self._keys: deque[str] = deque()
        self._partial = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._original_termios: list | None = None
        self._fd: int = sys.stdin.fileno() if fd is None else fd

    # -- session setup / teardown -------------------------------------------

    def __enter__(self) -> AnsiSurface:
        self._original_termios = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)
        self._raw_write(_ALT_SCREEN_ENABLE + _CLEAR_SCREEN)
        logger.debug("terminal switched to raw mode")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._raw_write(_ATTRIBUTES_OFF + _SHOW_CURSOR + _ALT_SCREEN_DISABLE)
        if self._original_termios is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
        logger.debug("terminal restored")

    # -- drawing ------------------------------------------------------------

    def move(self, row: int, col: int) -> None:
        self._pending.append(_MOVE_FMT.format(row + 1, col + 1))

    def write(self, text: str) -> None:
        self._pending.append(text)

    def set_bold(self, bold: bool) -> None:
        self._pending.append(_BOLD_ON if bold else _BOLD_OFF)

    def set_color(self, color: Color) -> None:
        code = 39 if color is Color.DEFAULT else 30 + int(color)
        self._pending.append(_COLOR_FMT.format(code))

    def clear_to_eol(self) -> None:
        self._pending.append(_CLEAR_TO_EOL)

    def hide_cursor(self) -> None:
        self._pending.append(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._pending.append(_SHOW_CURSOR)

    def refresh(self) -> None:
        """Flush everything drawn since the last refresh."""
        data = "".join(self._pending)
        self._pending.clear()
        self._raw_write(data)

    # -- input --------------------------------------------------------------

    def read_key(self) -> KeyId | None:
        """Block until a key is available and return its identifier."""
        # One read may hold several keys or only part of one.
        while not self._keys:
            raw = os.read(self._fd, 64)
            if not raw:
                raise EOFError("terminal input closed")
            keys, self._partial = _split_keys(self._partial + self._decoder.decode(raw))
            self._keys.extend(keys)
        return parse_key(self._keys.popleft())

    # -- private ------------------------------------------------------------

    def _raw_write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()
