"""Core daemon — ties together input listener, Telex engine and replacer."""
import threading
import logging
from typing import NamedTuple, Optional

from ktelex.config import Config
from ktelex.engine import EngineOptions, TelexEngine
from ktelex.events import KeyEvent, KeyKind
from ktelex.syllables import load_oracle

logger = logging.getLogger(__name__)


class Hotkey(NamedTuple):
    letter: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    meta: bool = False


def parse_hotkey(text: str) -> Optional[Hotkey]:
    """'ctrl+shift+s' → Hotkey('s', ctrl=True, shift=True). None if unusable."""
    parts = [p.strip().lower() for p in text.split('+') if p.strip()]
    if not parts:
        return None
    *mods, key = parts
    if len(key) != 1 or not ('a' <= key <= 'z'):
        return None
    flags = {'ctrl': False, 'shift': False, 'alt': False, 'meta': False}
    aliases = {'control': 'ctrl', 'super': 'meta', 'win': 'meta'}
    for m in mods:
        m = aliases.get(m, m)
        if m not in flags:
            return None
        flags[m] = True
    return Hotkey(key, **flags)


def hotkey_matches(hotkey: Optional[Hotkey], event: KeyEvent) -> bool:
    if hotkey is None or event.kind is not KeyKind.LETTER:
        return False
    return (event.letter == hotkey.letter
            and event.ctrl == hotkey.ctrl
            and event.shift == hotkey.shift
            and event.alt == hotkey.alt
            and event.meta == hotkey.meta)


class Daemon:
    """Background daemon: global key hook → Telex engine → synthetic typing."""

    def __init__(self, config: Config, replacer=None, oracle=None):
        self.config = config
        self._running = False
        self._listener = None
        self._lock = threading.Lock()
        self._replacer = replacer
        self._oracle = oracle if oracle is not None else load_oracle(config.syllables_file)
        self._engine: Optional[TelexEngine] = None
        self._hotkey = parse_hotkey(config.hotkey_toggle)
        if replacer is not None:
            self._engine = self._make_engine(replacer)

    @property
    def running(self):
        return self._running

    @property
    def engine(self) -> Optional[TelexEngine]:
        return self._engine

    @property
    def oracle(self):
        """Syllable list in use (the configured file or the bundled one)."""
        return self._oracle

    def _make_engine(self, sink) -> TelexEngine:
        options = EngineOptions(
            auto_ie_ye=self.config.auto_ie_ye,
            double_key_raw=self.config.double_key_raw,
            buffer_timeout_ms=self.config.buffer_timeout_ms,
            # XRecord observes keys, it cannot swallow them
            key_echo=True,
        )
        return TelexEngine(sink, oracle=self._oracle, options=options)

    def start(self):
        if self._running:
            return
        self._running = True

        try:
            from ktelex.x11_input import X11KeyListener
            self._listener = X11KeyListener(on_key=self.on_key)
            if self._replacer is None:
                from ktelex.replacer import X11Replacer
                self._replacer = X11Replacer()
            self._replacer.listener = self._listener
            if self._engine is None:
                self._engine = self._make_engine(self._replacer)
            self._listener.start()
            logger.info("Daemon started — X11 input listener active")
        except Exception as e:
            logger.error("Failed to start X11 listener: %s", e)
            self._running = False

    def stop(self):
        self._running = False
        if self._listener:
            self._listener.stop()
        self.reset()
        logger.info("Daemon stopped")

    def on_key(self, event: KeyEvent):
        """Called for each key press seen by the listener."""
        if hotkey_matches(self._hotkey, event):
            self.toggle_enabled()
            return

        if not self.config.enabled or self._engine is None:
            return

        with self._lock:
            self._engine.process_key(event)

    def toggle_enabled(self):
        self.set_enabled(not self.config.enabled)

    def set_enabled(self, enabled: bool):
        self.config.enabled = enabled
        self.reset()
        logger.info("Vietnamese input: %s", "ON" if enabled else "OFF")

    def reset(self):
        """Drop the current syllable (focus change, remap, toggle ...)."""
        if self._engine is None:
            return
        with self._lock:
            self._engine.reset()

    def apply_config(self):
        """Push settings into the running engine between keystrokes."""
        self._hotkey = parse_hotkey(self.config.hotkey_toggle)
        if self._hotkey is None:
            logger.warning("Ignoring unusable toggle hotkey %r", self.config.hotkey_toggle)
        if self._engine is None:
            return
        with self._lock:
            self._engine.configure(
                auto_ie_ye=self.config.auto_ie_ye,
                double_key_raw=self.config.double_key_raw,
                buffer_timeout_ms=self.config.buffer_timeout_ms,
            )
            if not self.config.enabled:
                self._engine.reset()

    def reload_syllables(self):
        """Re-read the syllable list named in the config."""
        oracle = load_oracle(self.config.syllables_file)
        with self._lock:
            self._oracle = oracle
            if self._replacer is not None:
                self._engine = self._make_engine(self._replacer)
        logger.info("Loaded %d syllables", len(oracle))
