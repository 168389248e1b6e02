"""Telex engine — key events in, screen edits out."""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ktelex.buffer import SyllableBuffer
from ktelex.events import KeyEvent, KeyKind, NAVIGATION_KEYS
from ktelex.renderer import RecordingSink, Renderer
from ktelex.syllables import default_oracle
from ktelex.validator import decide

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_TIMEOUT_MS = 2000


@dataclass
class EngineOptions:
    auto_ie_ye: bool = True
    double_key_raw: bool = True
    buffer_timeout_ms: int = DEFAULT_BUFFER_TIMEOUT_MS
    # Key source cannot swallow keys: letters/backspaces already hit the app
    key_echo: bool = False


class TelexEngine:
    """Converts Telex keystrokes into Vietnamese text, one key at a time.

    Owns the current syllable (raw keys only) and the renderer that keeps the
    foreground app in sync with it. Single-threaded: callers must serialise
    process_key/reset/configure.
    """

    def __init__(
        self,
        sink,
        oracle=None,
        options: Optional[EngineOptions] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.oracle = oracle if oracle is not None else default_oracle()
        self.options = options or EngineOptions()
        self._clock = clock
        self._last_key_time: Optional[float] = None
        self._buffer = SyllableBuffer(self.oracle, auto_ie_ye=self.options.auto_ie_ye)
        self._renderer = Renderer(sink)

    @property
    def raw(self) -> str:
        return self._buffer.raw

    @property
    def processed(self) -> str:
        return self._buffer.processed

    @property
    def rendered(self) -> str:
        return self._renderer.rendered

    def configure(
        self,
        auto_ie_ye: Optional[bool] = None,
        double_key_raw: Optional[bool] = None,
        buffer_timeout_ms: Optional[int] = None,
    ):
        """Change options between keystrokes. The current syllable is kept."""
        if auto_ie_ye is not None:
            self.options.auto_ie_ye = bool(auto_ie_ye)
            self._buffer.auto_ie_ye = self.options.auto_ie_ye
        if double_key_raw is not None:
            self.options.double_key_raw = bool(double_key_raw)
        if buffer_timeout_ms is not None:
            self.options.buffer_timeout_ms = int(buffer_timeout_ms)

    def reset(self):
        """Forget the current syllable. The screen is left as it is."""
        self._buffer.clear()
        self._renderer.forget()

    def render_text(self) -> str:
        """What the current syllable should look like on screen."""
        return decide(
            self._buffer.processed,
            self._buffer.raw,
            self.oracle,
            double_key_raw=self.options.double_key_raw,
        )

    def process_key(self, event: KeyEvent) -> bool:
        """Handle one key event.

        Returns True when the engine took care of the key (a grabbing source
        should then swallow it), False when the OS should process it normally.
        """
        if not event.pressed:
            return False

        if event.has_command_modifier:
            self.reset()
            return False

        self._check_timeout()

        kind = event.kind
        if kind is KeyKind.LETTER:
            return self._on_letter(event.char)
        if kind is KeyKind.BACKSPACE:
            return self._on_backspace()
        if kind is KeyKind.ESCAPE:
            return self._on_escape()

        # Space, Enter, navigation, and anything else (digits, punctuation,
        # Tab, remapped keys) end the syllable
        if kind not in NAVIGATION_KEYS and kind not in (KeyKind.SPACE, KeyKind.ENTER):
            logger.debug("Non-Telex key %s — syllable ended", kind.value)
        self.reset()
        return False

    def _check_timeout(self):
        now = self._clock()
        if self._last_key_time is not None:
            idle_ms = (now - self._last_key_time) * 1000.0
            if idle_ms > self.options.buffer_timeout_ms and self._buffer:
                logger.debug("Idle %.0f ms — starting a new syllable", idle_ms)
                self.reset()
        self._last_key_time = now

    def _on_letter(self, char: str) -> bool:
        self._buffer.add_char(char)
        if self.options.key_echo:
            self._renderer.echo(char)
        self._render()
        return True

    def _on_backspace(self) -> bool:
        if not self._buffer.handle_backspace():
            self.reset()
            return False
        if self.options.key_echo:
            self._renderer.erase()
        self._render()
        return True

    def _on_escape(self) -> bool:
        raw = self._buffer.raw
        if not raw:
            self.reset()
            return False
        logger.debug("Escape — reverting to raw keys %r", raw)
        self._renderer.render(raw)
        self.reset()
        return True

    def _render(self):
        text = self.render_text()
        logger.debug("raw=%r processed=%r → %r", self._buffer.raw, self._buffer.processed, text)
        self._renderer.render(text)


def simulate(
    keys: str,
    oracle=None,
    auto_ie_ye: bool = True,
    double_key_raw: bool = True,
) -> str:
    """Type keys into a fresh engine and return the resulting text.

    ' ' and '\\n' end a syllable, '\\b' is backspace, '\\x1b' is escape.
    Keys the engine leaves alone are applied the way an editor would.
    No timing is involved: the same keys always give the same text.
    """
    sink = RecordingSink()
    options = EngineOptions(auto_ie_ye=auto_ie_ye, double_key_raw=double_key_raw)
    engine = TelexEngine(sink, oracle=oracle, options=options, clock=lambda: 0.0)
    for char in keys:
        event = KeyEvent.for_char(char)
        if engine.process_key(event):
            continue
        if event.kind is KeyKind.BACKSPACE:
            sink.delete_key()
        elif event.kind is not KeyKind.ESCAPE:
            sink.type_key(char)
    return sink.text
