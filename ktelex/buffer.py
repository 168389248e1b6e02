"""Syllable buffer — raw keystroke log and its replayed Vietnamese form."""
from typing import List

from ktelex.diphthong import IE_YE_FOLLOWERS, try_convert_ie_ye
from ktelex.keys import all_modifiers, classify_modifier
from ktelex.modifiers import apply_modifier
from ktelex.tone import reposition_tone


def replay(raw: str, oracle, auto_ie_ye: bool = True) -> str:
    """Rebuild the processed syllable from the raw keys, left to right.

    A modifier key only acts while every key after it is also a modifier,
    so 'azs' → 'ấ' chains, but in 'asc' the 's' stays a letter.
    """
    out = ""
    for i, c in enumerate(raw):
        key = classify_modifier(c)

        if key is not None and all_modifiers(raw, i):
            modified = apply_modifier(out, key, oracle)
            if modified is not None:
                out = modified
                continue

        if auto_ie_ye and key is None and c in IE_YE_FOLLOWERS:
            converted = try_convert_ie_ye(out, c)
            if converted is not None:
                out = converted
                continue

        out += c
        repositioned = reposition_tone(out, oracle)
        if repositioned is not None:
            out = repositioned
    return out


class SyllableBuffer:
    """Keystrokes of the syllable being typed.

    Only the raw keys are stored; the processed form is always a fresh
    replay of them, so backspace is just "drop a key and replay".
    """

    def __init__(self, oracle, auto_ie_ye: bool = True):
        self.oracle = oracle
        self.auto_ie_ye = auto_ie_ye
        self._raw: List[str] = []
        self._processed: str = ""

    def add_char(self, char: str) -> str:
        """Record a key. Returns the new processed form."""
        self._raw.append(char)
        return self.rebuild()

    def handle_backspace(self) -> bool:
        """Drop the last key. Returns False if there was nothing to drop."""
        if not self._raw:
            self.clear()
            return False
        self._raw.pop()
        self.rebuild()
        return True

    def rebuild(self) -> str:
        self._processed = replay(self.raw, self.oracle, self.auto_ie_ye)
        return self._processed

    @property
    def raw(self) -> str:
        return ''.join(self._raw)

    @property
    def processed(self) -> str:
        return self._processed

    def clear(self):
        self._raw.clear()
        self._processed = ""

    def __len__(self) -> int:
        return len(self._raw)

    def __bool__(self) -> bool:
        return bool(self._raw)
