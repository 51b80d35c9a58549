"""Configuration document for egawari. Stored as TOML at egawari/egawari.toml."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import tomlkit
from tomlkit.exceptions import TOMLKitError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "egawari.toml"
DEFAULT_DISPLAY = ":0"


class ConfigError(Exception):
    """Raised when the configuration document cannot be read or written."""


@dataclass
class Input:
    name: str = ""


@dataclass
class Display:
    display: str | None = DEFAULT_DISPLAY
    screen: int = 0


@dataclass
class Config:
    input: Input
    display: Display | None = None


# ---------------------------------------------------------------------------
# Paths and defaults
# ---------------------------------------------------------------------------


def get_config_path() -> Path:
    override = os.environ.get("EGAWARI_CONFIG_DIR")
    if override:
        return Path(override) / CONFIG_FILE_NAME
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "egawari" / CONFIG_FILE_NAME


def default_config(platform: str | None = None) -> Config:
    """Return the document used when no configuration file exists.

    Only Linux (X11) has a display group; elsewhere it is omitted.
    """
    if (platform or sys.platform).startswith("linux"):
        return Config(input=Input(), display=Display(display=DEFAULT_DISPLAY, screen=0))
    return Config(input=Input(), display=None)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def config_from_dict(data: dict) -> Config:
    """Deserialize a Config from a TOML-compatible dict."""
    try:
        name = data["input"]["name"]
        if not isinstance(name, str):
            raise ConfigError("input.name must be a string")

        display = None
        if "display" in data:
            raw = data["display"]
            dp = raw.get("display")
            screen = raw.get("screen", 0)
            if dp is not None and not isinstance(dp, str):
                raise ConfigError("display.display must be a string")
            if isinstance(screen, bool) or not isinstance(screen, int) or not 0 <= screen <= 255:
                raise ConfigError("display.screen must be an integer between 0 and 255")
            display = Display(display=dp, screen=int(screen))
    except (KeyError, TypeError, AttributeError) as e:
        raise ConfigError(f"malformed configuration: {e}") from e

    return Config(input=Input(name=str(name)), display=display)


def config_to_dict(config: Config) -> dict:
    """Serialize a Config to a TOML-compatible dict."""
    data: dict = {"input": {"name": config.input.name}}
    if config.display is not None:
        display: dict = {}
        # TOML has no null; an unset display name is simply left out.
        if config.display.display is not None:
            display["display"] = config.display.display
        display["screen"] = config.display.screen
        data["display"] = display
    return data


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------


def load_config(
    path: Path | None = None,
    on_error: Callable[[str], None] | None = None,
) -> Config:
    """Read the configuration file, falling back to the platform default.

    *on_error* is called with a message when an existing file can't be used.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        logger.info("No configuration at %s, using defaults", config_path)
        return default_config()
    try:
        data = tomlkit.parse(config_path.read_text(encoding="utf-8")).unwrap()
        return config_from_dict(data)
    except (OSError, TOMLKitError, ConfigError) as e:
        logger.warning("Couldn't read the config file %s: %s", config_path, e)
        if on_error is not None:
            on_error(f"Couldn't read the config file {config_path}, using the defaults.")
        return default_config()


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write *config* as TOML and return the path written to."""
    config_path = path or get_config_path()
    raw = tomlkit.dumps(config_to_dict(config))
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(raw, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Couldn't write to the config file {config_path}: {e}") from e
    logger.info("Saved configuration to %s", config_path)
    return config_path
