"""Screen renderer — turns a new syllable text into backspaces + typing."""
import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)


def compute_edit(previous: str, new: str) -> Tuple[int, str]:
    """(backspaces, text) turning previous into new, keeping the common prefix."""
    common = 0
    limit = min(len(previous), len(new))
    while common < limit and previous[common] == new[common]:
        common += 1
    return len(previous) - common, new[common:]


class Renderer:
    """Tracks what the foreground app shows for the current syllable.

    The sink needs send_backspaces(count) and send_text(text).
    """

    def __init__(self, sink):
        self.sink = sink
        self._rendered = ""

    @property
    def rendered(self) -> str:
        return self._rendered

    def render(self, new: str) -> Tuple[int, str]:
        """Update the screen to show new. Returns the edit sent."""
        if new == self._rendered:
            return 0, ""
        backspaces, text = compute_edit(self._rendered, new)
        logger.debug("Render %r → %r (%d backspaces, %r)", self._rendered, new, backspaces, text)
        if backspaces:
            self.sink.send_backspaces(backspaces)
        if text:
            self.sink.send_text(text)
        self._rendered = new
        return backspaces, text

    def echo(self, char: str):
        """The app already received char (passive key source)."""
        self._rendered += char

    def erase(self):
        """The app already applied a backspace (passive key source)."""
        self._rendered = self._rendered[:-1]

    def forget(self):
        """Start a new syllable; whatever is on screen stays there."""
        self._rendered = ""


class RecordingSink:
    """Output sink that applies edits to an in-memory string.

    Used for offline simulation and tests.
    """

    def __init__(self):
        self.text = ""
        self.calls: List[tuple] = []

    def send_backspaces(self, count: int):
        self.calls.append(('backspace', count))
        if count:
            self.text = self.text[:-count]

    def send_text(self, text: str):
        self.calls.append(('text', text))
        self.text += text

    def type_key(self, char: str):
        """A key the app received directly (echoed by the OS)."""
        self.text += char

    def delete_key(self):
        self.text = self.text[:-1]
