"""Key events as delivered by an input source."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyKind(Enum):
    LETTER = 'letter'
    BACKSPACE = 'backspace'
    ESCAPE = 'escape'
    SPACE = 'space'
    ENTER = 'enter'
    LEFT = 'left'
    RIGHT = 'right'
    UP = 'up'
    DOWN = 'down'
    HOME = 'home'
    END = 'end'
    PAGE_UP = 'page_up'
    PAGE_DOWN = 'page_down'
    OTHER = 'other'


NAVIGATION_KEYS = {
    KeyKind.LEFT, KeyKind.RIGHT, KeyKind.UP, KeyKind.DOWN,
    KeyKind.HOME, KeyKind.END, KeyKind.PAGE_UP, KeyKind.PAGE_DOWN,
}


@dataclass
class KeyEvent:
    kind: KeyKind
    letter: Optional[str] = None   # lowercase a-z for LETTER keys
    pressed: bool = True
    shift: bool = False
    caps_lock: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    @property
    def has_command_modifier(self) -> bool:
        return self.ctrl or self.alt or self.meta

    @property
    def char(self) -> Optional[str]:
        """Typed letter with Shift XOR CapsLock applied."""
        if self.kind is not KeyKind.LETTER or not self.letter:
            return None
        if self.shift != self.caps_lock:
            return self.letter.upper()
        return self.letter

    @classmethod
    def for_char(cls, char: str) -> "KeyEvent":
        """Event for a typed ASCII character (used by simulation)."""
        if char.isascii() and char.isalpha():
            return cls(KeyKind.LETTER, letter=char.lower(), shift=char.isupper())
        if char == ' ':
            return cls(KeyKind.SPACE)
        if char == '\n':
            return cls(KeyKind.ENTER)
        if char == '\b':
            return cls(KeyKind.BACKSPACE)
        if char == '\x1b':
            return cls(KeyKind.ESCAPE)
        return cls(KeyKind.OTHER)
