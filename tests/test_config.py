"""Tests for JSON config persistence and the autostart entry."""
import sys
import os
import json
import tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ktelex import autostart
from ktelex.config import Config, DEFAULT_CONFIG


def test_defaults_without_file():
    with tempfile.TemporaryDirectory() as tmp:
        config = Config(os.path.join(tmp, "config.json"))
        assert config.enabled is True
        assert config.auto_ie_ye is True
        assert config.double_key_raw is True
        assert config.buffer_timeout_ms == 2000
        assert config.hotkey_toggle == "ctrl+shift+s"
        assert config.syllables_file == ""
        assert config.autostart is False
        assert config.debug_logging is False


def test_setters_persist():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "sub", "config.json")
        config = Config(path)
        config.enabled = False
        config.double_key_raw = False
        config.set("buffer_timeout_ms", 1500)

        reloaded = Config(path)
        assert reloaded.enabled is False
        assert reloaded.double_key_raw is False
        assert reloaded.buffer_timeout_ms == 1500
        assert reloaded.auto_ie_ye is True


def test_corrupt_file_falls_back_to_defaults():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "config.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("{not json")
        config = Config(path)
        assert config.get("hotkey_toggle") == DEFAULT_CONFIG["hotkey_toggle"]


def test_saved_file_is_json():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "config.json")
        Config(path).save()
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["buffer_timeout_ms"] == 2000


def test_autostart_entry():
    with tempfile.TemporaryDirectory() as tmp:
        assert not autostart.is_enabled(tmp)
        assert autostart.set_enabled(True, tmp)
        assert autostart.is_enabled(tmp)
        with open(os.path.join(tmp, autostart.DESKTOP_NAME), encoding="utf-8") as f:
            assert "Exec=ktelex" in f.read()
        assert autostart.set_enabled(False, tmp)
        assert not autostart.is_enabled(tmp)
        assert autostart.set_enabled(False, tmp)


def test_autostart_unwritable():
    with tempfile.TemporaryDirectory() as tmp:
        blocker = os.path.join(tmp, "not-a-dir")
        with open(blocker, "w") as f:
            f.write("x")
        assert autostart.set_enabled(True, blocker) is False


if __name__ == '__main__':
    test_defaults_without_file()
    test_setters_persist()
    test_corrupt_file_falls_back_to_defaults()
    test_saved_file_is_json()
    test_autostart_entry()
    test_autostart_unwritable()
    print("All config tests passed.")
