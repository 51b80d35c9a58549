"""egawari: makes your touchpad work like a graphics tablet."""

from egawari.attributes import Color, EscapeRun, apply, parse_runs
from egawari.config import (
    Config,
    ConfigError,
    Display,
    Input,
    default_config,
    load_config,
    save_config,
)
from egawari.editor import ConfigEditor
from egawari.fields import (
    CursorPosition,
    Field,
    FieldKind,
    FieldValueError,
    Section,
    build_sections,
    layout,
)
from egawari.markup import MarkupError, render
from egawari.surface import AnsiSurface, Surface

__version__ = "0.1.0"

__all__ = [
    "AnsiSurface",
    "Color",
    "Config",
    "ConfigEditor",
    "ConfigError",
    "CursorPosition",
    "Display",
    "EscapeRun",
    "Field",
    "FieldKind",
    "FieldValueError",
    "Input",
    "MarkupError",
    "Section",
    "Surface",
    "apply",
    "build_sections",
    "default_config",
    "layout",
    "load_config",
    "parse_runs",
    "render",
    "save_config",
]
