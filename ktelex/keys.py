"""Telex modifier keys.

Letters that modify the syllable instead of spelling it:

    z           circumflex    a→â  e→ê  o→ô
    w           breve/horn    a→ă  o→ơ  u→ư
    d           stroke        d↔đ  (first letter only)
    s f r x j   tones         sắc huyền hỏi ngã nặng
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Tone(Enum):
    # Values index the rows of vowels.TONED_VOWELS; order is fixed.
    SAC = 0
    HUYEN = 1
    HOI = 2
    NGA = 3
    NANG = 4


class Modifier(Enum):
    CIRCUMFLEX = 'circumflex'
    BREVE_HORN = 'breve_horn'
    STROKE = 'stroke'
    TONE = 'tone'


@dataclass(frozen=True)
class ModifierKey:
    kind: Modifier
    tone: Optional[Tone] = None


TONE_KEYS = {
    's': Tone.SAC,
    'f': Tone.HUYEN,
    'r': Tone.HOI,
    'x': Tone.NGA,
    'j': Tone.NANG,
}

MODIFIER_KEYS = {
    'z': ModifierKey(Modifier.CIRCUMFLEX),
    'w': ModifierKey(Modifier.BREVE_HORN),
    'd': ModifierKey(Modifier.STROKE),
}
MODIFIER_KEYS.update({k: ModifierKey(Modifier.TONE, t) for k, t in TONE_KEYS.items()})


def classify_modifier(char: str) -> Optional[ModifierKey]:
    """Case-insensitive: 'S' and 's' are both sắc."""
    return MODIFIER_KEYS.get(char.lower())


def is_modifier_key(char: str) -> bool:
    return char.lower() in MODIFIER_KEYS


def all_modifiers(raw: str, start: int) -> bool:
    """True when every char of raw[start:] is a modifier key."""
    return all(is_modifier_key(c) for c in raw[start:])
