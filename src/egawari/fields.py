"""The configuration form: sections of typed fields, layout and cursor.

Fields never hold references into the document.  Each one carries a
``(section key, field key)`` path and the live slot is looked up in the
owned :class:`~egawari.config.Config` whenever it is read or committed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union

from egawari.config import Config

FieldPath = tuple[str, str]
Value = Union[str, int, None]

NUMBER_MAX = 255
SECTION_SPACING = 1

_NON_DIGITS_RE = re.compile(r"[^0-9]")


class FieldValueError(ValueError):
    """Raised when an edit buffer can't be parsed into the field's type."""


class FieldKind(Enum):
    BUTTON = "button"
    TEXT = "text"
    NUMBER = "number"


@dataclass(frozen=True)
class Field:
    kind: FieldKind
    name: str
    path: FieldPath
    # Assigned by layout(); not part of the field's identity.
    row: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Section:
    key: str
    name: str
    fields: tuple[Field, ...]


# ---------------------------------------------------------------------------
# Building and layout
# ---------------------------------------------------------------------------


def build_sections(config: Config) -> list[Section]:
    """Create one section per configuration group present in *config*."""
    sections = [
        Section(
            key="input",
            name="Input",
            fields=(
                Field(FieldKind.BUTTON, "Automatic Setup", ("input", "auto_setup")),
                Field(FieldKind.TEXT, "Name", ("input", "name")),
            ),
        )
    ]

    if config.display is not None:
        fields = [Field(FieldKind.BUTTON, "Automatic Setup", ("display", "auto_setup"))]
        if config.display.display is not None:
            fields.append(Field(FieldKind.TEXT, "Display", ("display", "display")))
        fields.append(Field(FieldKind.NUMBER, "Screen", ("display", "screen")))
        sections.append(Section(key="display", name="Display", fields=tuple(fields)))

    return sections


def layout(sections: list[Section], top: int = 2) -> list[Section]:
    """Return copies of *sections* with a display row assigned to every field.

    Each section takes a header row, one row per field and
    ``SECTION_SPACING`` blank rows after it.
    """
    row = top
    placed: list[Section] = []
    for section in sections:
        row += 1  # header
        fields = []
        for f in section.fields:
            fields.append(replace(f, row=row))
            row += 1
        placed.append(replace(section, fields=tuple(fields)))
        row += SECTION_SPACING
    return placed


def end_row(sections: list[Section]) -> int:
    """Return the first free row below a laid-out form."""
    last = sections[-1].fields[-1].row if sections and sections[-1].fields else 0
    return last + 1 + SECTION_SPACING


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CursorPosition:
    """Index of the current field; wraps across sections and at both ends."""

    section: int = 0
    field: int = 0

    def current(self, sections: list[Section]) -> Field:
        return sections[self.section].fields[self.field]

    def next(self, sections: list[Section]) -> CursorPosition:
        section, index = self.section, self.field + 1
        while index >= len(sections[section].fields):
            section, index = (section + 1) % len(sections), 0
        return CursorPosition(section, index)

    def previous(self, sections: list[Section]) -> CursorPosition:
        section, index = self.section, self.field - 1
        while index < 0:
            section = (section - 1) % len(sections)
            index = len(sections[section].fields) - 1
        return CursorPosition(section, index)


def field_count(sections: list[Section]) -> int:
    return sum(len(s.fields) for s in sections)


# ---------------------------------------------------------------------------
# Document access
# ---------------------------------------------------------------------------


def get_value(config: Config, path: FieldPath) -> Value:
    section_key, field_key = path
    return getattr(getattr(config, section_key), field_key)


def set_value(config: Config, path: FieldPath, value: Value) -> None:
    section_key, field_key = path
    setattr(getattr(config, section_key), field_key, value)


def format_value(kind: FieldKind, value: Value) -> str:
    """Stringify *value* the way it is seeded into an edit buffer."""
    if kind is FieldKind.NUMBER:
        return str(int(value or 0))
    if kind is FieldKind.TEXT:
        return "" if value is None else str(value)
    return ""


def quote(text: str) -> str:
    """Quote *text* for display, escaping backslashes and double quotes."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def parse_number(buffer: str) -> int:
    """Parse a Number buffer, ignoring every non-digit character."""
    digits = _NON_DIGITS_RE.sub("", buffer)
    if not digits:
        raise FieldValueError("expects a number")
    value = int(digits)
    if value > NUMBER_MAX:
        raise FieldValueError(f"expects a number between 0 and {NUMBER_MAX}")
    return value


def commit(config: Config, target: Field, buffer: str) -> None:
    """Write *buffer* into the slot of *target*, parsed into its type.

    Raises :class:`FieldValueError` and leaves the slot untouched when a
    Number buffer holds no digits or is out of range.
    """
    if target.kind is FieldKind.TEXT:
        set_value(config, target.path, buffer)
    elif target.kind is FieldKind.NUMBER:
        set_value(config, target.path, parse_number(buffer))
    else:
        raise FieldValueError(f"{target.name} can't be edited")
