"""Lightweight in-text markup rendered to ANSI escape sequences.

Plain diagnostic text is colored by a fixed, ordered list of regex rules:
runs of punctuation characters get their own style, delimited spans
(``[...]``, ``(...)``, ``"..."``, ``'...'``, ``<...>``) get colored
delimiters and a neutral interior, and backslash-escaped delimiters are
unwrapped into styled literals.

Rule order matters: later rules see the escape codes inserted by earlier
ones.  ``render`` must only ever be given raw text, never its own output.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Escape codes
# ---------------------------------------------------------------------------

ESC = "\x1b"

BOLD_DEFAULT = "\x1b[1;39m"
NEUTRAL = "\x1b[0;39m"
RESET = "\x1b[;m"

BOLD_CYAN = "\x1b[1;36m"
BOLD_GREEN = "\x1b[1;32m"
GREEN = "\x1b[0;32m"
BOLD_RED = "\x1b[1;31m"
BOLD_YELLOW = "\x1b[1;33m"
BOLD_MAGENTA = "\x1b[1;35m"


class MarkupError(Exception):
    """Raised at import time when a built-in markup rule fails to compile."""


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise MarkupError(f"invalid markup rule {pattern!r}: {exc}") from exc


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

# (pattern, style) pairs; every run is followed by the document default.
_CHARACTER_RULES: list[tuple[re.Pattern[str], str]] = [
    (_compile(r"[+]+"), BOLD_CYAN),
    (_compile(r"[:/=]+"), BOLD_GREEN),
    (_compile(r"[,\-|]+"), GREEN),
    (_compile(r"[*]+"), BOLD_RED),
    (_compile(r"[{}]+"), BOLD_MAGENTA),
]

# "=" and ">" are styled independently above; collapse the pair back into a
# single arrow.  Must run after every character rule.
_ARROW_RULE = _compile(r"\x1b\[\d*;\d+m=\x1b\[\d*;\d+m>")


def _delimited(opening: str, closing: str) -> re.Pattern[str]:
    # An opening delimiter preceded by ESC is part of an escape code, one
    # preceded by a backslash is escaped.  Inside, a backslash always pairs
    # with the next character so escaped closers never end the span.
    return _compile(
        rf"(?<![\\\x1b])({re.escape(opening)})"
        rf"((?:\\.|[^\\])*?)"
        rf"({re.escape(closing)})"
    )


_DELIMITER_RULES: list[tuple[re.Pattern[str], str]] = [
    (_delimited("[", "]"), BOLD_GREEN),
    (_delimited("(", ")"), GREEN),
    (_delimited('"', '"'), BOLD_GREEN),
    (_delimited("'", "'"), GREEN),
    (_delimited("<", ">"), BOLD_GREEN),
]

_ESCAPE_RULES: list[tuple[re.Pattern[str], str]] = [
    (_compile(r'\\([\[\]"<>])'), BOLD_GREEN),
    (_compile(r"\\([()'])"), GREEN),
]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _color_span(style: str):
    def _replace(match: re.Match[str]) -> str:
        inner = match.group(2).replace(BOLD_DEFAULT, NEUTRAL)
        return (
            f"{style}{match.group(1)}{NEUTRAL}{inner}"
            f"{style}{match.group(3)}{BOLD_DEFAULT}"
        )

    return _replace


def render(raw: str) -> str:
    """Color *raw* using ANSI escape codes according to the markup rules.

    Example::

        >>> render("[Input]")
        '\\x1b[1;32m[\\x1b[0;39mInput\\x1b[1;32m]\\x1b[1;39m'
    """
    result = raw

    for pattern, style in _CHARACTER_RULES:
        result = pattern.sub(lambda m, s=style: f"{s}{m.group(0)}{BOLD_DEFAULT}", result)
    result = _ARROW_RULE.sub(f"{BOLD_CYAN}=>{BOLD_DEFAULT}", result)

    for pattern, style in _DELIMITER_RULES:
        result = pattern.sub(_color_span(style), result)

    for pattern, style in _ESCAPE_RULES:
        result = pattern.sub(lambda m, s=style: f"{s}{m.group(1)}{BOLD_DEFAULT}", result)

    return result


def colored(text: str) -> str:
    """Render *text* on top of the document default style."""
    return f"{BOLD_DEFAULT}{render(text)}"


def arrow(text: str, style: str = BOLD_CYAN) -> str:
    """Render *text* behind a `` => `` arrow drawn in *style*."""
    return f" {style}=>{BOLD_DEFAULT} {render(text)}"
