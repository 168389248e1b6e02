"""X11 global keyboard input listener using XRecord extension."""
import threading
import time
import logging
from typing import Callable, Optional

from Xlib import X, XK, display
from Xlib.ext import record
from Xlib.protocol import rq

from ktelex.events import KeyEvent, KeyKind

logger = logging.getLogger(__name__)

_LETTER_MIN = XK.XK_a
_LETTER_MAX = XK.XK_z

_KEYSYM_KINDS = {
    XK.XK_BackSpace: KeyKind.BACKSPACE,
    XK.XK_Escape: KeyKind.ESCAPE,
    XK.XK_space: KeyKind.SPACE,
    XK.XK_Return: KeyKind.ENTER,
    XK.XK_KP_Enter: KeyKind.ENTER,
    XK.XK_Left: KeyKind.LEFT,
    XK.XK_Right: KeyKind.RIGHT,
    XK.XK_Up: KeyKind.UP,
    XK.XK_Down: KeyKind.DOWN,
    XK.XK_Home: KeyKind.HOME,
    XK.XK_End: KeyKind.END,
    XK.XK_Page_Up: KeyKind.PAGE_UP,
    XK.XK_Page_Down: KeyKind.PAGE_DOWN,
}

# Pressing a modifier alone is not a keystroke
_MODIFIER_KEYSYMS = {
    XK.XK_Shift_L, XK.XK_Shift_R, XK.XK_Control_L, XK.XK_Control_R,
    XK.XK_Alt_L, XK.XK_Alt_R, XK.XK_Meta_L, XK.XK_Meta_R,
    XK.XK_Super_L, XK.XK_Super_R, XK.XK_Caps_Lock,
}

# Mod4 is Super/Meta on common keymaps
_META_MASK = X.Mod4Mask

# Injected presses still pending this long after injection are given up on
SUPPRESS_TIMEOUT = 0.5


def keysym_to_event(keysym: int, state: int) -> Optional[KeyEvent]:
    """Translate an unshifted keysym + X modifier state into a KeyEvent."""
    if keysym in _MODIFIER_KEYSYMS:
        return None

    mods = dict(
        shift=bool(state & X.ShiftMask),
        caps_lock=bool(state & X.LockMask),
        ctrl=bool(state & X.ControlMask),
        alt=bool(state & X.Mod1Mask),
        meta=bool(state & _META_MASK),
    )
    if _LETTER_MIN <= keysym <= _LETTER_MAX:
        return KeyEvent(KeyKind.LETTER, letter=chr(keysym), **mods)
    return KeyEvent(_KEYSYM_KINDS.get(keysym, KeyKind.OTHER), **mods)


class X11KeyListener:
    """Listens to global keyboard events via XRecord.

    Calls on_key(KeyEvent) for every key press. XRecord only observes:
    the key still reaches the focused window.
    """

    def __init__(self, on_key: Callable[[KeyEvent], None]):
        self._on_key = on_key
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._record_display = None
        self._local_display = None
        self._ctx = None
        self._suppress_count = 0  # injected key presses not yet seen
        self._suppress_deadline: Optional[float] = None
        self._suppress_lock = threading.Lock()
        self._clock = time.monotonic

    @property
    def running(self) -> bool:
        return self._running

    def start(self):
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self):
        self._running = False
        if self._record_display and self._ctx:
            try:
                self._record_display.record_disable_context(self._ctx)
                self._record_display.flush()
            except Exception as e:
                logger.debug("Disabling XRecord context failed: %s", e)
        if self._thread:
            self._thread.join(timeout=2.0)

    @property
    def suppressed(self) -> bool:
        with self._suppress_lock:
            return self._suppress_count > 0

    def begin_suppress(self, expected_events: int = 0):
        """Expect expected_events more injected key presses.

        XRecord hands them over only after the current callback returns, so
        they are counted off as they arrive, not when injection ends.
        """
        with self._suppress_lock:
            self._suppress_count += expected_events
            self._suppress_deadline = None
            logger.debug("Suppression ON — expecting %d synthetic events", self._suppress_count)

    def end_suppress(self):
        """Injection finished; pending presses are dropped after SUPPRESS_TIMEOUT."""
        with self._suppress_lock:
            if self._suppress_count > 0:
                self._suppress_deadline = self._clock() + SUPPRESS_TIMEOUT

    def _consume_suppressed(self) -> bool:
        """True if this key press is one of ours and must be skipped."""
        with self._suppress_lock:
            if self._suppress_count <= 0:
                return False
            if self._suppress_deadline is not None and self._clock() > self._suppress_deadline:
                logger.debug("Suppression OFF — %d events were not seen (ok)", self._suppress_count)
                self._suppress_count = 0
                self._suppress_deadline = None
                return False
            self._suppress_count -= 1
            if self._suppress_count == 0:
                self._suppress_deadline = None
            return True

    def _run(self):
        try:
            self._record_display = display.Display()
            self._local_display = display.Display()

            ctx = self._record_display.record_create_context(
                0,
                [record.AllClients],
                [{
                    'core_requests': (0, 0),
                    'core_replies': (0, 0),
                    'ext_requests': (0, 0, 0, 0),
                    'ext_replies': (0, 0, 0, 0),
                    'delivered_events': (0, 0),
                    'device_events': (X.KeyPress, X.KeyRelease),
                    'errors': (0, 0),
                    'client_started': False,
                    'client_died': False,
                }]
            )
            self._ctx = ctx

            self._record_display.record_enable_context(ctx, self._handle_event)
            self._record_display.record_free_context(ctx)
        except Exception as e:
            logger.error("XRecord listener failed: %s", e)
            self._running = False

    def _handle_event(self, reply):
        if reply.category != record.FromServer:
            return
        if reply.client_swapped:
            return
        if not len(reply.data) or reply.data[0] == 0:
            return

        data = reply.data
        while len(data):
            event, data = rq.EventField(None).parse_binary_value(
                data, self._record_display.display, None, None
            )

            if event.type == X.KeyPress:
                # Column 0 gives the unshifted keysym; case comes from the state bits
                keysym = self._local_display.keycode_to_keysym(event.detail, 0)
                self.deliver(keysym_to_event(keysym, event.state))

    def deliver(self, key_event: Optional[KeyEvent]):
        """Pass one key press to on_key unless it is an injected one."""
        if self._consume_suppressed():
            return
        if key_event is None:
            return
        try:
            self._on_key(key_event)
        except Exception:
            logger.exception("Key handler failed for %s", key_event)
