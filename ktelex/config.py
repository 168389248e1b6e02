"""Configuration management — JSON-based, stored in ~/.config/ktelex/."""
import json
from pathlib import Path

DEFAULT_CONFIG = {
    "enabled": True,
    "auto_ie_ye": True,        # tien → tiên
    "double_key_raw": True,    # maxx → maxx (not mã)
    "buffer_timeout_ms": 2000,
    "hotkey_toggle": "ctrl+shift+s",
    "syllables_file": "",      # empty: bundled list
    "autostart": False,
    "debug_logging": False,
}

CONFIG_DIR = Path.home() / ".config" / "ktelex"
CONFIG_FILE = CONFIG_DIR / "config.json"


class Config:
    def __init__(self, path: Path = CONFIG_FILE):
        self.path = Path(path)
        self._data = dict(DEFAULT_CONFIG)
        self.load()

    def load(self):
        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    stored = json.load(f)
                self._data.update(stored)
            except (json.JSONDecodeError, IOError):
                pass

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self.save()

    @property
    def enabled(self):
        return self._data["enabled"]

    @enabled.setter
    def enabled(self, val):
        self._data["enabled"] = bool(val)
        self.save()

    @property
    def auto_ie_ye(self):
        return self._data["auto_ie_ye"]

    @auto_ie_ye.setter
    def auto_ie_ye(self, val):
        self._data["auto_ie_ye"] = bool(val)
        self.save()

    @property
    def double_key_raw(self):
        return self._data["double_key_raw"]

    @double_key_raw.setter
    def double_key_raw(self, val):
        self._data["double_key_raw"] = bool(val)
        self.save()

    @property
    def buffer_timeout_ms(self):
        return self._data.get("buffer_timeout_ms", 2000)

    @property
    def hotkey_toggle(self):
        return self._data.get("hotkey_toggle", "ctrl+shift+s")

    @property
    def syllables_file(self):
        return self._data.get("syllables_file", "")

    @property
    def autostart(self):
        return self._data.get("autostart", False)

    @property
    def debug_logging(self):
        return self._data["debug_logging"]
