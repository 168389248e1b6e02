"""Tests for X11 key translation and injected-key suppression (no display needed)."""
import sys
import os
import tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from Xlib import X, XK

from ktelex.config import Config
from ktelex.daemon import Daemon
from ktelex.events import KeyEvent, KeyKind
from ktelex.renderer import RecordingSink
from ktelex.syllables import default_oracle
from ktelex.x11_input import X11KeyListener, keysym_to_event


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class InjectingReplacer(RecordingSink):
    """Mirrors X11Replacer: every injected press is announced to the listener.

    XRecord reports injected presses only after the current callback has
    returned, so they are queued here and delivered afterwards.
    """

    def __init__(self, listener):
        super().__init__()
        self.listener = listener
        self.queued = []

    def send_backspaces(self, count):
        super().send_backspaces(count)
        self.listener.begin_suppress(count)
        self.queued.extend(KeyEvent.for_char('\b') for _ in range(count))
        self.listener.end_suppress()

    def send_text(self, text):
        super().send_text(text)
        self.listener.begin_suppress(len(text))
        self.queued.extend(KeyEvent.for_char(c) for c in text)
        self.listener.end_suppress()

    def flush(self):
        queued, self.queued = self.queued, []
        for event in queued:
            self.listener.deliver(event)


def make_live_daemon(tmp):
    config = Config(os.path.join(tmp, "config.json"))
    listener = X11KeyListener(on_key=lambda event: daemon.on_key(event))
    listener._clock = FakeClock()
    replacer = InjectingReplacer(listener)
    daemon = Daemon(config, replacer=replacer, oracle=default_oracle())
    return daemon, listener, replacer


def type_live(listener, replacer, keys):
    """The app gets each key, the listener sees it, then our own output."""
    for c in keys:
        event = KeyEvent.for_char(c)
        if event.kind in (KeyKind.LETTER, KeyKind.SPACE):
            replacer.type_key(c)
        listener.deliver(event)
        replacer.flush()


def test_letters_with_state():
    event = keysym_to_event(XK.XK_a, 0)
    assert event.kind is KeyKind.LETTER
    assert event.char == 'a'

    assert keysym_to_event(XK.XK_a, X.ShiftMask).char == 'A'
    assert keysym_to_event(XK.XK_a, X.LockMask).char == 'A'
    assert keysym_to_event(XK.XK_a, X.ShiftMask | X.LockMask).char == 'a'


def test_command_modifiers():
    assert keysym_to_event(XK.XK_c, X.ControlMask).has_command_modifier
    assert keysym_to_event(XK.XK_c, X.Mod1Mask).alt
    assert keysym_to_event(XK.XK_c, X.Mod4Mask).meta


def test_special_keys():
    assert keysym_to_event(XK.XK_BackSpace, 0).kind is KeyKind.BACKSPACE
    assert keysym_to_event(XK.XK_Escape, 0).kind is KeyKind.ESCAPE
    assert keysym_to_event(XK.XK_space, 0).kind is KeyKind.SPACE
    assert keysym_to_event(XK.XK_Return, 0).kind is KeyKind.ENTER
    assert keysym_to_event(XK.XK_Left, 0).kind is KeyKind.LEFT
    assert keysym_to_event(XK.XK_1, 0).kind is KeyKind.OTHER
    assert keysym_to_event(XK.XK_Tab, 0).kind is KeyKind.OTHER


def test_lone_modifiers_ignored():
    assert keysym_to_event(XK.XK_Shift_L, 0) is None
    assert keysym_to_event(XK.XK_Control_R, X.ControlMask) is None
    assert keysym_to_event(XK.XK_Caps_Lock, 0) is None


def test_injected_keys_are_not_read_back():
    with tempfile.TemporaryDirectory() as tmp:
        daemon, listener, replacer = make_live_daemon(tmp)
        type_live(listener, replacer, "as")
        assert replacer.text == "á"
        assert daemon.engine.raw == "as"

        type_live(listener, replacer, " tuongwf")
        assert replacer.text == "á tường"
        assert daemon.engine.raw == "tuongwf"
        assert not listener.suppressed


def test_unseen_injected_keys_expire():
    seen = []
    clock = FakeClock()
    listener = X11KeyListener(on_key=seen.append)
    listener._clock = clock
    listener.begin_suppress(2)
    listener.end_suppress()
    listener.deliver(KeyEvent.for_char('\b'))
    assert seen == []

    clock.now = 1.0
    listener.deliver(KeyEvent.for_char('a'))
    assert [e.char for e in seen] == ['a']
    assert not listener.suppressed


def test_modifier_presses_count_as_injected():
    seen = []
    listener = X11KeyListener(on_key=seen.append)
    listener.begin_suppress(2)
    listener.deliver(None)  # injected Shift
    listener.deliver(KeyEvent.for_char('A'))
    listener.end_suppress()
    listener.deliver(KeyEvent.for_char('b'))
    assert [e.char for e in seen] == ['b']


if __name__ == '__main__':
    test_letters_with_state()
    test_command_modifiers()
    test_special_keys()
    test_lone_modifiers_ignored()
    test_injected_keys_are_not_read_back()
    test_unseen_injected_keys_expire()
    test_modifier_presses_count_as_injected()
    print("All X11 input tests passed.")
