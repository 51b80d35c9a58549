"""Automatic setup for the "Automatic Setup" buttons of the editor."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from egawari.config import Config

logger = logging.getLogger(__name__)

INPUT_DEVICES_PATH = Path("/proc/bus/input/devices")

_NAME_RE = re.compile(r'^N: Name="(.*)"$', re.MULTILINE)
_TOUCHPAD_RE = re.compile(r"touch\s*pad|trackpad", re.IGNORECASE)
# [host]:display[.screen]
_DISPLAY_RE = re.compile(r"^(?P<display>[^:]*:\d+)(?:\.(?P<screen>\d+))?$")


def find_touchpad(devices: str) -> str | None:
    """Return the name of the first touchpad in a ``/proc/bus/input/devices`` dump."""
    for name in _NAME_RE.findall(devices):
        if _TOUCHPAD_RE.search(name):
            return name
    return None


def parse_display(value: str) -> tuple[str, int] | None:
    """Split an X11 ``$DISPLAY`` value into display name and screen number."""
    match = _DISPLAY_RE.match(value.strip())
    if match is None:
        return None
    screen = int(match.group("screen") or 0)
    if screen > 255:
        return None
    return match.group("display"), screen


class AutoSetup:
    """Fill a configuration group with values detected on this machine."""

    def __init__(
        self,
        config: Config,
        devices_path: Path = INPUT_DEVICES_PATH,
        environ: dict[str, str] | None = None,
    ) -> None:
        self._config = config
        self._devices_path = devices_path
        self._environ = os.environ if environ is None else environ

    def __call__(self, section: str) -> None:
        if section == "input":
            self.setup_input()
        elif section == "display":
            self.setup_display()

    def setup_input(self) -> None:
        try:
            devices = self._devices_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.info("Couldn't list input devices: %s", e)
            return
        name = find_touchpad(devices)
        if name is None:
            logger.info("No touchpad found in %s", self._devices_path)
            return
        self._config.input.name = name

    def setup_display(self) -> None:
        if self._config.display is None:
            return
        parsed = parse_display(self._environ.get("DISPLAY", ""))
        if parsed is None:
            logger.info("DISPLAY is not set or not understood")
            return
        display, screen = parsed
        # The form only shows a Display field when the name was set on load.
        if self._config.display.display is not None:
            self._config.display.display = display
        self._config.display.screen = screen
