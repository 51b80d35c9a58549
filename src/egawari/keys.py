"""Keyboard input parsing for the configuration editor.

Turns one raw chunk of terminal input into a key identifier.  Only the keys
the editor reacts to get a name; any other printable character is returned
as itself and everything else parses to ``None``.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Named key constants."""

    up = "up"
    down = "down"
    enter = "enter"
    escape = "escape"
    backspace = "backspace"
    space = "space"


# Normal and application cursor-key modes.
LEGACY_KEY_SEQUENCES: dict[str, KeyId] = {
    "\x1b[A": Key.up,
    "\x1b[B": Key.down,
    "\x1bOA": Key.up,
    "\x1bOB": Key.down,
}


def is_printable(key: KeyId | None) -> bool:
    """Return whether *key* is a single printable character."""
    return key is not None and len(key) == 1 and key.isprintable()


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return the key identifier, or ``None``."""
    if not data:
        return None

    key = LEGACY_KEY_SEQUENCES.get(data)
    if key is not None:
        return key

    if data == "\x1b":
        return Key.escape
    if data == "\r" or data == "\n":
        return Key.enter
    if data == " ":
        return Key.space
    if data == "\x7f" or data == "\x08":
        return Key.backspace

    if len(data) == 1 and data.isprintable():
        return data

    return None
