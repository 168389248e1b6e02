"""X11 output sink — sends synthetic backspaces and text via XTest."""
import subprocess
import time
import logging
import threading
from typing import Optional

from Xlib import X, XK, display
from Xlib.ext import xtest

logger = logging.getLogger(__name__)


class X11Replacer:
    """Edits the focused window by sending backspaces then retyping.

    ASCII goes through XTest; characters missing from the keymap (ấ, ư, đ …)
    are typed with xdotool.
    """

    def __init__(self, listener=None):
        self._display: Optional[display.Display] = None
        self._replacing = threading.Event()  # set while injection in progress
        self.listener = listener

    @property
    def is_replacing(self) -> bool:
        return self._replacing.is_set()

    def _ensure_display(self):
        if self._display is None:
            self._display = display.Display()

    def send_backspaces(self, count: int):
        if count <= 0:
            return
        self._inject(lambda: self._send_backspaces(count))

    def send_text(self, text: str):
        if not text:
            return
        self._inject(lambda: self._type_text(text))

    def _expect(self, presses: int):
        """Tell the listener that presses more key presses are ours."""
        if self.listener:
            self.listener.begin_suppress(presses)

    def _press(self, keycode: int):
        self._expect(1)
        xtest.fake_input(self._display, X.KeyPress, keycode)

    def _inject(self, action):
        """Run action with the listener told to skip our own keys."""
        self._ensure_display()
        self._replacing.set()
        try:
            action()
            self._display.flush()
            # Wait for synthetic events to be processed by X server
            time.sleep(0.01)
        finally:
            self._replacing.clear()
            if self.listener:
                self.listener.end_suppress()

    def _send_backspaces(self, count: int):
        """Send N backspace key events."""
        backspace_code = self._display.keysym_to_keycode(XK.XK_BackSpace)
        for _ in range(count):
            self._press(backspace_code)
            xtest.fake_input(self._display, X.KeyRelease, backspace_code)
        self._display.flush()

    def _type_text(self, text: str):
        """Type text, batching characters that need the xdotool fallback."""
        pending = []
        for char in text:
            keycode = self._display.keysym_to_keycode(self._char_to_keysym(char))
            if keycode == 0:
                pending.append(char)
                continue
            if pending:
                self._type_unicode(''.join(pending))
                pending = []
            self._type_char(char, keycode)
        if pending:
            self._type_unicode(''.join(pending))

    def _type_char(self, char: str, keycode: int):
        """Type a keymapped character via XTest."""
        keysym = self._char_to_keysym(char)
        need_shift = False
        if char.isupper():
            keysym_unshifted = self._display.keycode_to_keysym(keycode, 0)
            keysym_shifted = self._display.keycode_to_keysym(keycode, 1)
            if keysym_shifted == keysym and keysym_unshifted != keysym:
                need_shift = True

        if need_shift:
            shift_code = self._display.keysym_to_keycode(XK.XK_Shift_L)
            self._press(shift_code)

        self._press(keycode)
        xtest.fake_input(self._display, X.KeyRelease, keycode)

        if need_shift:
            xtest.fake_input(self._display, X.KeyRelease, shift_code)

        self._display.flush()

    def _type_unicode(self, text: str):
        try:
            subprocess.run(
                ['xdotool', 'type', '--clearmodifiers', text],
                timeout=1.0,
                capture_output=True,
            )
            # Its presses reach the listener once the current callback returns
            self._expect(len(text))
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.warning("xdotool fallback failed for %r: %s", text, e)

    @staticmethod
    def _char_to_keysym(char: str) -> int:
        """Convert a character to X keysym."""
        if 0x20 <= ord(char) <= 0x7E:
            return ord(char)
        return 0x01000000 + ord(char)
