"""Tests for egawari.fields -- sections, layout, cursor and commits."""

from __future__ import annotations

import pytest

from egawari.config import Config, Display, Input, default_config
from egawari.fields import (
    CursorPosition,
    Field,
    FieldKind,
    FieldValueError,
    build_sections,
    commit,
    end_row,
    field_count,
    format_value,
    get_value,
    layout,
    parse_number,
    quote,
)


def _summary(sections) -> list[tuple[str, list[tuple[FieldKind, str]]]]:
    return [(s.name, [(f.kind, f.name) for f in s.fields]) for s in sections]


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


class TestBuildSections:
    def test_linux_default(self) -> None:
        sections = build_sections(default_config("linux"))
        assert _summary(sections) == [
            ("Input", [(FieldKind.BUTTON, "Automatic Setup"), (FieldKind.TEXT, "Name")]),
            (
                "Display",
                [
                    (FieldKind.BUTTON, "Automatic Setup"),
                    (FieldKind.TEXT, "Display"),
                    (FieldKind.NUMBER, "Screen"),
                ],
            ),
        ]

    def test_missing_display_group_omits_section(self) -> None:
        sections = build_sections(default_config("darwin"))
        assert [s.name for s in sections] == ["Input"]

    def test_unset_display_name_omits_field(self) -> None:
        config = Config(input=Input(), display=Display(display=None, screen=1))
        display = build_sections(config)[1]
        assert [f.name for f in display.fields] == ["Automatic Setup", "Screen"]

    def test_paths_address_document_slots(self) -> None:
        config = default_config("linux")
        config.input.name = "pad"
        fields = [f for s in build_sections(config) for f in s.fields]
        values = [get_value(config, f.path) for f in fields if f.kind is not FieldKind.BUTTON]
        assert values == ["pad", ":0", 0]


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class TestLayout:
    def test_rows_follow_document_order(self) -> None:
        sections = layout(build_sections(default_config("linux")))
        assert [[f.row for f in s.fields] for s in sections] == [[3, 4], [7, 8, 9]]

    def test_custom_top(self) -> None:
        sections = layout(build_sections(default_config("darwin")), top=0)
        assert [f.row for f in sections[0].fields] == [1, 2]

    def test_end_row_leaves_a_blank_row(self) -> None:
        sections = layout(build_sections(default_config("linux")))
        assert end_row(sections) == 11

    def test_original_sections_untouched(self) -> None:
        original = build_sections(default_config("linux"))
        layout(original)
        assert all(f.row == 0 for s in original for f in s.fields)

    def test_row_is_not_identity(self) -> None:
        a = Field(FieldKind.TEXT, "Name", ("input", "name"), row=3)
        b = Field(FieldKind.TEXT, "Name", ("input", "name"), row=9)
        assert a == b


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


class TestCursorPosition:
    @pytest.fixture
    def sections(self):
        return layout(build_sections(default_config("linux")))

    def test_next_crosses_section_boundary(self, sections) -> None:
        assert CursorPosition(0, 1).next(sections) == CursorPosition(1, 0)

    def test_previous_crosses_section_boundary(self, sections) -> None:
        assert CursorPosition(1, 0).previous(sections) == CursorPosition(0, 1)

    def test_previous_wraps_to_last_field(self, sections) -> None:
        assert CursorPosition(0, 0).previous(sections) == CursorPosition(1, 2)

    def test_next_wraps_to_first_field(self, sections) -> None:
        assert CursorPosition(1, 2).next(sections) == CursorPosition(0, 0)

    @pytest.mark.parametrize("start", [CursorPosition(0, 0), CursorPosition(0, 1), CursorPosition(1, 2)])
    def test_full_cycle_returns_to_start(self, sections, start) -> None:
        down = up = start
        for _ in range(field_count(sections)):
            down = down.next(sections)
            up = up.previous(sections)
        assert down == start
        assert up == start

    def test_single_section_cycle(self) -> None:
        sections = build_sections(default_config("darwin"))
        cursor = CursorPosition()
        assert cursor.next(sections).next(sections) == cursor
        assert cursor.current(sections).name == "Automatic Setup"


# ---------------------------------------------------------------------------
# Values and commits
# ---------------------------------------------------------------------------


SCREEN = Field(FieldKind.NUMBER, "Screen", ("display", "screen"))
NAME = Field(FieldKind.TEXT, "Name", ("input", "name"))
BUTTON = Field(FieldKind.BUTTON, "Automatic Setup", ("input", "auto_setup"))


class TestCommit:
    def test_number_ignores_non_digits(self) -> None:
        config = default_config("linux")
        commit(config, SCREEN, "12a3")
        assert config.display.screen == 123

    @pytest.mark.parametrize("buffer", ["", "abc", "256", "99999"])
    def test_number_rejected_keeps_value(self, buffer: str) -> None:
        config = default_config("linux")
        config.display.screen = 4
        with pytest.raises(FieldValueError):
            commit(config, SCREEN, buffer)
        assert config.display.screen == 4

    def test_number_upper_bound(self) -> None:
        assert parse_number("0255") == 255

    def test_text_is_verbatim(self) -> None:
        config = default_config("linux")
        raw = r'[a] "b" \c <d> (e)'
        commit(config, NAME, raw)
        assert config.input.name == raw

    def test_button_cannot_be_committed(self) -> None:
        with pytest.raises(FieldValueError):
            commit(default_config("linux"), BUTTON, "x")


class TestFormatting:
    def test_number(self) -> None:
        assert format_value(FieldKind.NUMBER, 0) == "0"
        assert format_value(FieldKind.NUMBER, 42) == "42"

    def test_text(self) -> None:
        assert format_value(FieldKind.TEXT, "pad") == "pad"
        assert format_value(FieldKind.TEXT, None) == ""

    def test_quote_escapes(self) -> None:
        assert quote('a"b\\c') == '"a\\"b\\\\c"'
