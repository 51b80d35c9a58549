"""Tests for the TOML configuration document."""

from __future__ import annotations

import logging

import pytest

from egawari.config import (
    Config,
    ConfigError,
    Display,
    Input,
    config_from_dict,
    config_to_dict,
    default_config,
    get_config_path,
    load_config,
    save_config,
)


# --- Defaults ---


def test_default_linux_has_display():
    config = default_config("linux")
    assert config.input.name == ""
    assert config.display == Display(display=":0", screen=0)


def test_default_other_platforms_omit_display():
    assert default_config("darwin").display is None
    assert default_config("win32").display is None


# --- Paths ---


def test_config_dir_override(monkeypatch, tmp_path):
    monkeypatch.setenv("EGAWARI_CONFIG_DIR", str(tmp_path))
    assert get_config_path() == tmp_path / "egawari.toml"


def test_xdg_config_home(monkeypatch, tmp_path):
    monkeypatch.delenv("EGAWARI_CONFIG_DIR", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_config_path() == tmp_path / "egawari" / "egawari.toml"


# --- Serialization ---


def test_to_dict_full():
    config = Config(input=Input(name="pad"), display=Display(display=":1", screen=2))
    assert config_to_dict(config) == {
        "input": {"name": "pad"},
        "display": {"display": ":1", "screen": 2},
    }


def test_to_dict_leaves_out_unset_values():
    config = Config(input=Input(name="pad"), display=Display(display=None, screen=0))
    assert config_to_dict(config) == {"input": {"name": "pad"}, "display": {"screen": 0}}
    assert "display" not in config_to_dict(Config(input=Input()))


def test_from_dict_without_display():
    assert config_from_dict({"input": {"name": "x"}}) == Config(input=Input(name="x"))


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"input": {}},
        {"input": {"name": 3}},
        {"input": {"name": "x"}, "display": {"screen": 300}},
        {"input": {"name": "x"}, "display": {"screen": "0"}},
        {"input": {"name": "x"}, "display": {"display": 1}},
    ],
)
def test_from_dict_rejects_malformed(data):
    with pytest.raises(ConfigError):
        config_from_dict(data)


# --- Load / save ---


def test_load_missing_file_uses_default(tmp_path, monkeypatch):
    monkeypatch.setattr("sys.platform", "linux")
    config = load_config(tmp_path / "egawari.toml")
    assert config == default_config("linux")


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "egawari.toml"
    config = Config(input=Input(name="SynPS/2 Synaptics TouchPad"), display=Display(":0", 1))
    assert save_config(config, path) == path
    assert load_config(path) == config


def test_saved_file_is_toml(tmp_path):
    path = tmp_path / "egawari.toml"
    save_config(default_config("linux"), path)
    text = path.read_text()
    assert "[input]" in text
    assert "[display]" in text
    assert 'display = ":0"' in text


def test_load_invalid_toml_falls_back(tmp_path, caplog, monkeypatch):
    monkeypatch.setattr("sys.platform", "darwin")
    path = tmp_path / "egawari.toml"
    path.write_text("[input\nname = ")
    with caplog.at_level(logging.WARNING, logger="egawari.config"):
        config = load_config(path)
    assert config == default_config("darwin")
    assert "Couldn't read the config file" in caplog.text


def test_load_invalid_reports_error(tmp_path):
    path = tmp_path / "egawari.toml"
    path.write_text("[input\nname = ")
    messages = []
    load_config(path, on_error=messages.append)
    assert messages == [f"Couldn't read the config file {path}, using the defaults."]


def test_load_missing_does_not_report(tmp_path):
    messages = []
    load_config(tmp_path / "egawari.toml", on_error=messages.append)
    assert messages == []


def test_load_out_of_range_screen_falls_back(tmp_path):
    path = tmp_path / "egawari.toml"
    path.write_text('[input]\nname = "x"\n\n[display]\nscreen = 999\n')
    assert load_config(path).input.name == ""


def test_save_failure_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    with pytest.raises(ConfigError):
        save_config(default_config("linux"), blocker / "egawari.toml")
