"""Translate escape-coded text into discrete surface attribute operations.

A grid-addressed surface cannot interpret raw escape bytes, so the output of
:func:`egawari.markup.render` is parsed into :class:`EscapeRun` values first
and then replayed as ``set_bold`` / ``set_color`` / ``write`` calls.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from egawari.markup import ESC

if TYPE_CHECKING:
    from egawari.surface import Surface


class Color(IntEnum):
    """Terminal color indices; ``DEFAULT`` is the terminal's own color."""

    DEFAULT = -1
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


# "[<bold>;<color>m" at the very start of a fragment.
_CODE_RE = re.compile(r"^\[(\d*);(\d*)m")


@dataclass(frozen=True)
class EscapeRun:
    """A piece of text and the attribute change that precedes it.

    ``coded`` is false for text written verbatim without touching attributes.
    ``color`` is ``None`` when the code leaves the current color alone.
    """

    text: str
    coded: bool = False
    bold: bool = False
    color: Color | None = None


def _parse_color(field: str) -> Color | None:
    if len(field) != 2 or field[0] != "3":
        return None
    if field[1] == "9":
        return Color.DEFAULT
    index = int(field[1])
    if index > Color.WHITE:
        return None
    return Color(index)


def parse_runs(escaped: str) -> list[EscapeRun]:
    """Split *escaped* on ESC and decode each fragment's leading code."""
    fragments = escaped.split(ESC)
    runs: list[EscapeRun] = []
    if fragments[0]:
        runs.append(EscapeRun(fragments[0]))

    for fragment in fragments[1:]:
        match = _CODE_RE.match(fragment)
        if match is None:
            if fragment:
                runs.append(EscapeRun(fragment))
            continue
        runs.append(
            EscapeRun(
                text=fragment[match.end():],
                coded=True,
                bold=match.group(1) == "1",
                color=_parse_color(match.group(2)),
            )
        )

    return runs


def apply(surface: Surface, escaped: str) -> None:
    """Write *escaped* to *surface* as attribute toggles and plain text."""
    surface.set_color(Color.DEFAULT)
    surface.set_bold(True)

    for run in parse_runs(escaped):
        if run.coded:
            surface.set_bold(run.bold)
            if run.color is not None:
                surface.set_color(run.color)
        if run.text:
            surface.write(run.text)

    surface.set_color(Color.DEFAULT)
    surface.set_bold(False)
