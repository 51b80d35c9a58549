"""Interactive, keyboard-driven editor for the configuration document.

The editor is a two-state machine.  In *navigate* state Up/Down move the
cursor, Space triggers a button or starts editing a value and Enter ends
the session.  In *edit* state keys go to an edit buffer until Enter
commits it or Escape discards it.  Every iteration redraws the whole form.
"""

from __future__ import annotations

import logging
from typing import Callable

import grapheme
from wcwidth import wcswidth

from egawari import attributes, markup
from egawari.attributes import Color
from egawari.config import Config
from egawari.fields import (
    CursorPosition,
    Field,
    FieldKind,
    FieldValueError,
    Section,
    build_sections,
    commit,
    end_row,
    format_value,
    get_value,
    layout,
    quote,
)
from egawari.keys import Key, KeyId, is_printable
from egawari.surface import Surface

logger = logging.getLogger(__name__)

TITLE = "---===egawari=Configuration===---"
FOOTER = "---===========================---"
NAVIGATE_HINT = 'Use "Up" and "Down" to move, "Space" to edit and "Enter" to exit.'
EDIT_HINT = 'Type the new value, "Enter" to confirm and "Escape" to cancel.'

ARROW = " => "
CURSOR = " >> "

Trigger = Callable[[str], None]


def _width(text: str) -> int:
    return max(0, wcswidth(text))


class ConfigEditor:
    """Edit *config* in place on *surface*.

    *on_trigger* is called with the section key when Space is pressed on a
    button field.
    """

    def __init__(
        self,
        surface: Surface,
        config: Config,
        on_trigger: Trigger | None = None,
    ) -> None:
        self._surface = surface
        self._config = config
        self._on_trigger = on_trigger
        self._sections: list[Section] = layout(build_sections(config))
        self._cursor = CursorPosition()
        self._buffer: str | None = None
        self._message: str | None = None

    # -- state --------------------------------------------------------------

    @property
    def config(self) -> Config:
        return self._config

    @property
    def sections(self) -> list[Section]:
        return self._sections

    @property
    def cursor(self) -> CursorPosition:
        return self._cursor

    @property
    def current_field(self) -> Field:
        return self._cursor.current(self._sections)

    @property
    def editing(self) -> bool:
        return self._buffer is not None

    @property
    def buffer(self) -> str | None:
        return self._buffer

    @property
    def message(self) -> str | None:
        return self._message

    # -- main loop ----------------------------------------------------------

    def run(self) -> Config:
        """Redraw and handle keys until the user exits; return the document."""
        while True:
            self.draw()
            if not self.handle_key(self._surface.read_key()):
                logger.debug("editor session finished")
                return self._config

    def handle_key(self, key: KeyId | None) -> bool:
        """Apply *key* to the editor state; return ``False`` to end the session."""
        self._message = None
        if self._buffer is None:
            return self._navigate(key)
        self._edit(key, self._buffer)
        return True

    def _navigate(self, key: KeyId | None) -> bool:
        if key == Key.up:
            self._cursor = self._cursor.previous(self._sections)
        elif key == Key.down:
            self._cursor = self._cursor.next(self._sections)
        elif key == Key.space:
            current = self.current_field
            if current.kind is FieldKind.BUTTON:
                logger.debug("triggering %s", current.path[0])
                if self._on_trigger is not None:
                    self._on_trigger(current.path[0])
            else:
                value = get_value(self._config, current.path)
                self._buffer = format_value(current.kind, value)
        elif key == Key.enter:
            return False
        return True

    def _edit(self, key: KeyId | None, buffer: str) -> None:
        if key == Key.escape:
            self._buffer = None
        elif key == Key.enter:
            current = self.current_field
            try:
                commit(self._config, current, buffer)
            except FieldValueError as e:
                logger.debug("rejected %r for %s: %s", buffer, current.name, e)
                self._message = f"{current.name} {e}."
                return
            logger.debug("committed %s", ".".join(current.path))
            self._buffer = None
        elif key == Key.backspace:
            if buffer:
                self._buffer = grapheme.slice(buffer, 0, grapheme.length(buffer) - 1)
        elif key == Key.space:
            self._buffer = buffer + " "
        elif is_printable(key):
            self._buffer = buffer + key

    # -- drawing ------------------------------------------------------------

    def draw(self) -> None:
        """Redraw the whole form, the cursor marker and the edit buffer."""
        surface = self._surface

        self._draw_line(0, markup.colored(TITLE))
        self._draw_line(1, "")

        for section in self._sections:
            self._draw_line(section.fields[0].row - 1, markup.colored(f"=\\[{section.name}\\]="))
            for f in section.fields:
                self._draw_line(f.row, self._field_line(f))
            self._draw_line(section.fields[-1].row + 1, "")

        row = end_row(self._sections)
        self._draw_line(row, markup.colored(FOOTER))
        self._draw_line(row + 1, "")
        self._draw_line(row + 2, markup.arrow(EDIT_HINT if self.editing else NAVIGATE_HINT))
        self._draw_line(
            row + 3, markup.arrow(self._message, markup.BOLD_RED) if self._message else ""
        )

        surface.set_bold(True)
        surface.set_color(Color.CYAN)
        for section in self._sections:
            for f in section.fields:
                surface.move(f.row, 0)
                surface.write(ARROW)

        current = self.current_field
        surface.set_bold(False)
        surface.set_color(Color.MAGENTA)
        surface.move(current.row, 0)
        surface.write(CURSOR)
        surface.set_color(Color.DEFAULT)

        if self._buffer is None:
            surface.hide_cursor()
            surface.move(0, 0)
        else:
            self._draw_buffer(current, self._buffer)
        surface.refresh()

    def _field_line(self, f: Field) -> str:
        if f.kind is FieldKind.BUTTON:
            return markup.arrow(f"{{{f.name}}}")
        value = format_value(f.kind, get_value(self._config, f.path))
        if f.kind is FieldKind.TEXT:
            value = quote(value)
        return f"{markup.arrow(f'{f.name} = ')}{markup.NEUTRAL}{markup.render(value)}"

    def _draw_buffer(self, f: Field, buffer: str) -> None:
        surface = self._surface
        col = len(ARROW) + _width(f"{f.name} = ")
        surface.move(f.row, col)
        surface.clear_to_eol()
        surface.set_bold(False)
        if f.kind is FieldKind.TEXT:
            surface.write(f'"{buffer}"')
            col += 1
        else:
            surface.write(buffer)
        surface.move(f.row, col + _width(buffer))
        surface.show_cursor()

    def _draw_line(self, row: int, escaped: str) -> None:
        self._surface.move(row, 0)
        self._surface.clear_to_eol()
        if escaped:
            attributes.apply(self._surface, escaped)
